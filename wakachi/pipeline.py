"""
Per-request processing for the /tokenize endpoint.

The pipeline takes the raw request body (already size-checked by the HTTP
layer), decodes it, tokenizes it through the engine handle and formats the
result. Every failure becomes an error payload; ``run`` never raises for a
request-local problem.

Example:
    >>> pipeline = RequestPipeline(handle, SimpleFormatter())
    >>> pipeline.run("すもももももももものうち".encode("utf-8"))
    {'tokens': ['すもも', 'も', 'もも', 'も', 'もも', 'の', 'うち']}
"""

import logging
from typing import Any, Optional

from .errors import ErrorMapper
from .exceptions import Utf8DecodeError
from .formatters import ResponseFormatter
from .handle import EngineHandle

logger = logging.getLogger(__name__)

# Bodies of this size or larger are rejected before the pipeline runs
MAX_BODY_SIZE = 1024 * 5_000


def decode_body(body: bytes) -> str:
    """
    Decode a request body as UTF-8.

    Raises:
        Utf8DecodeError: If the body is not valid UTF-8.
    """
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise Utf8DecodeError(str(e)) from e


class RequestPipeline:
    """
    Decode, tokenize and format one request body.

    Attributes:
        handle: Engine handle shared by all requests.
        formatter: The active response formatter.
        error_mapper: Converts failures into error payloads.
    """

    def __init__(
        self,
        handle: EngineHandle,
        formatter: ResponseFormatter,
        error_mapper: Optional[ErrorMapper] = None,
    ):
        self.handle = handle
        self.formatter = formatter
        self.error_mapper = error_mapper or ErrorMapper()

    def process(self, text: str):
        """
        Tokenize already decoded text and format the result.

        The formatter runs inside the same engine session as the tokenize
        call, so under the exclusive policy detail lookups are covered by
        the same lock.

        Raises:
            RequestError: If tokenizing or formatting fails.
        """
        with self.handle.session() as engine:
            tokens = engine.tokenize(text)
            return self.formatter.format(engine, tokens)

    def run(self, body: bytes) -> Any:
        """
        Handle one request body.

        Args:
            body: Raw request body.

        Returns:
            A JSON-compatible payload: the formatter's output, or
            ``{"error": message}`` on failure.
        """
        text = None
        try:
            text = decode_body(body)
            logger.info("text: %s", text)
            return self.process(text).to_payload()
        except Exception as e:
            return self.error_mapper.to_response(e, text).to_payload()


__all__ = ["MAX_BODY_SIZE", "decode_body", "RequestPipeline"]
