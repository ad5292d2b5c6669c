"""
Conversion of request failures into error payloads.

Whatever goes wrong while serving one request ends up here and becomes an
:class:`~wakachi.results.ErrorResponse` for that request alone. Nothing a
single request does may terminate the process or disturb other requests.
"""

import logging
from typing import Optional

from .exceptions import RequestError
from .results import ErrorResponse

logger = logging.getLogger(__name__)


class ErrorMapper:
    """
    Map exceptions raised while serving a request to ``ErrorResponse``.

    Request errors (UTF-8 decoding, tokenizing, detail lookup, formatting)
    keep their message. Anything else is reported as an internal error
    and logged with its traceback.

    Example:
        >>> mapper = ErrorMapper()
        >>> mapper.to_response(TokenizeError("input too long")).error
        'input too long'
    """

    def to_response(self, exc: BaseException, text: Optional[str] = None) -> ErrorResponse:
        """
        Convert an exception into an error response.

        Args:
            exc: The exception raised while serving the request.
            text: The decoded request text, if decoding got that far.

        Returns:
            ErrorResponse: The payload to send back.
        """
        if isinstance(exc, RequestError):
            logger.error("%s: %s", type(exc).__name__, exc)
            return ErrorResponse(error=str(exc))

        logger.error(
            "unexpected error while processing request (text length=%s)",
            len(text) if text is not None else None,
            exc_info=exc,
        )
        return ErrorResponse(error=f"internal error: {exc}")


__all__ = ["ErrorMapper"]
