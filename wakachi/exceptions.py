"""
Custom exceptions for the wakachi package.

Startup failures (configuration and engine construction) are fatal and
stop the process before it binds a socket. Request failures are recovered
inside the request that raised them and turned into an error payload.
"""


class WakachiError(Exception):
    """
    Base exception class for all wakachi-related errors.

    Example:
        >>> try:
        ...     config = resolve(dictionary_kind="unknown")
        ... except WakachiError as e:
        ...     print(f"wakachi error: {e}")
    """
    pass


class ConfigurationError(WakachiError):
    """
    Raised when the startup parameters do not form a valid configuration.

    This exception is raised when:
    - The dictionary kind is not installed and is not 'local'
    - A 'local' dictionary kind is given without a dictionary path
    - The user dictionary type, mode, output format or policy is unknown
    - The host or port cannot be parsed
    """
    pass


class EngineConstructionError(WakachiError):
    """
    Raised when the tokenization engine cannot be built from a valid config.

    This exception is raised when:
    - SudachiPy is not installed
    - The system dictionary package or file cannot be loaded
    - The user dictionary cannot be compiled or loaded
    """
    pass


class RequestError(WakachiError):
    """
    Base class for failures scoped to a single request.

    These never propagate past the request pipeline; they are mapped to an
    ``{"error": ...}`` payload instead.
    """
    pass


class Utf8DecodeError(RequestError):
    """Raised when a request body is not valid UTF-8."""
    pass


class TokenizeError(RequestError):
    """Raised when the engine cannot segment the given text."""
    pass


class DetailLookupError(RequestError):
    """Raised when a word id is unknown to the loaded dictionary."""
    pass


class FormatError(RequestError):
    """Raised when the engine's own formatter fails on a token sequence."""
    pass
