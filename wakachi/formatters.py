"""
Output-shape strategies for tokenization results.

Exactly one formatter is active per running service; it is chosen from the
configuration at startup, never per request. Formatters run inside the
engine session that produced the tokens.
"""

from typing import Any, List

from .config import OutputFormat
from .exceptions import FormatError, RequestError
from .results import DetailedTokenList, EngineNativeDocument, TokenList


class ResponseFormatter:
    """Base class for response formatters."""

    output_format: OutputFormat

    def format(self, engine: Any, tokens: List[Any]):
        raise NotImplementedError


class SimpleFormatter(ResponseFormatter):
    """``{"tokens": [text, ...]}``."""

    output_format = OutputFormat.SIMPLE

    def format(self, engine: Any, tokens: List[Any]) -> TokenList:
        return TokenList(tokens=[token.text for token in tokens])


class DetailedFormatter(ResponseFormatter):
    """
    ``[{"text": ..., "detail": [...]}, ...]``.

    A failed detail lookup fails the whole request; tokens are never
    dropped from the output.
    """

    output_format = OutputFormat.DETAILED

    def format(self, engine: Any, tokens: List[Any]) -> DetailedTokenList:
        return DetailedTokenList(
            entries=[(token.text, engine.word_detail(token)) for token in tokens]
        )


class NativeFormatter(ResponseFormatter):
    """Relays the engine's own document verbatim."""

    output_format = OutputFormat.NATIVE

    def format(self, engine: Any, tokens: List[Any]) -> EngineNativeDocument:
        try:
            return EngineNativeDocument(document=engine.native_format(tokens))
        except RequestError:
            raise
        except Exception as e:
            raise FormatError(f"failed to format tokens: {e}") from e


_FORMATTERS = {
    OutputFormat.SIMPLE: SimpleFormatter,
    OutputFormat.DETAILED: DetailedFormatter,
    OutputFormat.NATIVE: NativeFormatter,
}


def get_formatter(output_format: OutputFormat) -> ResponseFormatter:
    """Return the formatter for a configured output format."""
    return _FORMATTERS[output_format]()


__all__ = [
    "ResponseFormatter",
    "SimpleFormatter",
    "DetailedFormatter",
    "NativeFormatter",
    "get_formatter",
]
