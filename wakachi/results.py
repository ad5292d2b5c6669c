"""
Response classes for the /tokenize endpoint.

Each class wraps one response shape and converts it to a JSON-compatible
value with ``to_payload()``, ready to hand to FastAPI.

Classes:
    TokenList: Surface forms only.
    DetailedTokenList: Surface forms with their dictionary details.
    EngineNativeDocument: The engine's own document, passed through.
    ErrorResponse: A per-request failure.

Example:
    >>> TokenList(tokens=["すもも", "も"]).to_payload()
    {'tokens': ['すもも', 'も']}
    >>> ErrorResponse(error="invalid utf-8").to_payload()
    {'error': 'invalid utf-8'}
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass
class TokenList:
    """
    Surface forms of the tokens, in input order.

    Attributes:
        tokens: Token texts.
    """

    tokens: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, List[str]]:
        return {"tokens": list(self.tokens)}


@dataclass
class DetailedTokenList:
    """
    Tokens paired with their dictionary details.

    Attributes:
        entries: ``(text, detail)`` pairs in input order.
    """

    entries: List[Tuple[str, List[str]]] = field(default_factory=list)

    def to_payload(self) -> List[Dict[str, Any]]:
        return [
            {"text": text, "detail": list(detail)}
            for text, detail in self.entries
        ]


@dataclass
class EngineNativeDocument:
    """A document produced by the engine's own formatter, relayed as is."""

    document: Any

    def to_payload(self) -> Any:
        return self.document


@dataclass
class ErrorResponse:
    """
    A failure of a single request.

    Returned with status 200, like a successful result; callers detect
    failure by the presence of ``error`` in the body.
    """

    error: str

    def to_payload(self) -> Dict[str, str]:
        return {"error": self.error}


__all__ = [
    "TokenList",
    "DetailedTokenList",
    "EngineNativeDocument",
    "ErrorResponse",
]
