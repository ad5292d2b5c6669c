"""
Startup configuration for the tokenization service.

Raw startup parameters (CLI flags or environment variables) are validated
and normalized by :func:`resolve` into a single immutable :class:`Config`.
Every option is a closed enumeration so that nothing downstream has to
branch on raw strings.

Example:
    >>> from wakachi.config import resolve
    >>> config = resolve("core", mode="search")
    >>> config.mode.split_mode
    'A'
    >>> resolve("unknown")
    Traceback (most recent call last):
        ...
    wakachi.exceptions.ConfigurationError: ['core', 'local'] are available for --dict-type
"""

import importlib.util
import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Optional, Union

from .exceptions import ConfigurationError


class DictionaryKind(Enum):
    """System dictionaries the engine can load."""

    SMALL = "small"
    CORE = "core"
    FULL = "full"
    LOCAL = "local"

    @property
    def package(self) -> Optional[str]:
        """Name of the Python package shipping this dictionary, if any."""
        if self is DictionaryKind.LOCAL:
            return None
        return f"sudachidict_{self.value}"


class UserDictionaryType(Enum):
    """On-disk format of a user dictionary."""

    CSV = "csv"
    BINARY = "bin"


class Mode(Enum):
    """
    Tokenization mode.

    Each mode carries the Sudachi split mode it runs with. ``search`` and
    ``decompose`` currently share the same split mode.
    """

    NORMAL = ("normal", "C")
    SEARCH = ("search", "A")
    DECOMPOSE = ("decompose", "A")

    def __init__(self, label: str, split_mode: str):
        self.label = label
        self.split_mode = split_mode


class OutputFormat(Enum):
    """Shape of a successful /tokenize response."""

    SIMPLE = "simple"
    DETAILED = "detailed"
    NATIVE = "native"


class EnginePolicy(Enum):
    """How the one engine instance is shared across concurrent requests."""

    EXCLUSIVE = "exclusive"
    SHARED = "shared"


DEFAULT_DICTIONARY_KIND = DictionaryKind.CORE.value
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080

_USER_DICTIONARY_TYPES = {
    "csv": UserDictionaryType.CSV,
    "bin": UserDictionaryType.BINARY,
    "binary": UserDictionaryType.BINARY,
}
_MODES = {mode.label: mode for mode in Mode}


def _installed_dictionary_kinds() -> FrozenSet[DictionaryKind]:
    # Resolved once on import, the same way the engine backend is detected
    return frozenset(
        kind
        for kind in DictionaryKind
        if kind.package is not None and importlib.util.find_spec(kind.package) is not None
    )


_INSTALLED_KINDS = _installed_dictionary_kinds()


def supported_dictionary_kinds() -> FrozenSet[DictionaryKind]:
    """
    Return the dictionary kinds this installation can load.

    Returns:
        FrozenSet[DictionaryKind]: The installed ``sudachidict_*`` packages
        plus ``local``, which is always available.
    """
    return _INSTALLED_KINDS | {DictionaryKind.LOCAL}


@dataclass(frozen=True)
class Config:
    """
    Immutable, internally consistent service configuration.

    Attributes:
        dictionary_kind: Which system dictionary to load.
        dictionary_path: Path of the system dictionary, set only for 'local'.
        user_dictionary_path: Optional user dictionary layered on top.
        user_dictionary_type: Format of the user dictionary.
        mode: Tokenization mode.
        host: Bind address.
        port: Bind port.
        output_format: Active response formatter.
        engine_policy: Sharing policy for the engine instance.
        demo: Whether the demonstration route ``GET /`` is bound.
    """

    dictionary_kind: DictionaryKind = DictionaryKind.CORE
    dictionary_path: Optional[str] = None
    user_dictionary_path: Optional[str] = None
    user_dictionary_type: UserDictionaryType = UserDictionaryType.CSV
    mode: Mode = Mode.NORMAL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    output_format: OutputFormat = OutputFormat.SIMPLE
    engine_policy: EnginePolicy = EnginePolicy.EXCLUSIVE
    demo: bool = False


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip().lower()
    return value or None


def _resolve_dictionary_kind(raw: str, supported: Iterable[DictionaryKind]) -> DictionaryKind:
    supported = set(supported) | {DictionaryKind.LOCAL}
    available = [kind.value for kind in DictionaryKind if kind in supported]
    value = _normalize(raw)

    for kind in supported:
        if kind.value == value:
            return kind

    raise ConfigurationError(f"{available} are available for --dict-type")


def _resolve_enum(raw: Optional[str], enum_cls, default, what: str):
    value = _normalize(raw)
    if value is None:
        return default
    for member in enum_cls:
        if member.value == value:
            return member
    raise ConfigurationError(f"unsupported {what}: {raw}")


def _resolve_port(raw: Union[int, str]) -> int:
    try:
        port = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"invalid port: {raw}") from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"invalid port: {raw}")
    return port


def _resolve_host(raw: str) -> str:
    host = str(raw).strip()
    try:
        ipaddress.ip_address(host)
    except ValueError:
        raise ConfigurationError(f"invalid host address: {raw}") from None
    return host


def resolve(
    dictionary_kind: str = DEFAULT_DICTIONARY_KIND,
    dictionary_path: Optional[str] = None,
    user_dictionary_path: Optional[str] = None,
    user_dictionary_type: Optional[str] = None,
    mode: Optional[str] = None,
    host: str = DEFAULT_HOST,
    port: Union[int, str] = DEFAULT_PORT,
    output_format: Optional[str] = None,
    engine_policy: Optional[str] = None,
    demo: bool = False,
    supported_kinds: Optional[Iterable[DictionaryKind]] = None,
) -> Config:
    """
    Validate raw startup parameters and build a :class:`Config`.

    This function has no side effects. Comparison is case-insensitive and
    ignores surrounding whitespace.

    Args:
        dictionary_kind: 'small', 'core', 'full' or 'local'.
        dictionary_path: System dictionary path, required for 'local'.
        user_dictionary_path: Optional user dictionary path.
        user_dictionary_type: 'csv' or 'bin' ('binary' is accepted too).
            Defaults to 'csv'.
        mode: 'normal', 'search' or 'decompose'. Defaults to 'normal'.
        host: IP address to bind.
        port: Port to bind.
        output_format: 'simple', 'detailed' or 'native'. Defaults to 'simple'.
        engine_policy: 'exclusive' or 'shared'. Defaults to 'exclusive'.
        demo: Whether to bind the demonstration route.
        supported_kinds: Override for the installed dictionary kinds.

    Returns:
        Config: The validated configuration.

    Raises:
        ConfigurationError: If any parameter is invalid or the combination
            is inconsistent.
    """
    if supported_kinds is None:
        supported_kinds = supported_dictionary_kinds()

    kind = _resolve_dictionary_kind(dictionary_kind, supported_kinds)

    path = None
    if kind is DictionaryKind.LOCAL:
        path = str(dictionary_path).strip() if dictionary_path is not None else ""
        if not path:
            raise ConfigurationError(
                "a dictionary path (--dict) is required when the dictionary type is 'local'"
            )

    user_path = str(user_dictionary_path).strip() if user_dictionary_path else None

    user_type = UserDictionaryType.CSV
    normalized_user_type = _normalize(user_dictionary_type)
    if normalized_user_type is not None:
        if normalized_user_type not in _USER_DICTIONARY_TYPES:
            raise ConfigurationError(f"invalid user dictionary type: {user_dictionary_type}")
        user_type = _USER_DICTIONARY_TYPES[normalized_user_type]
    if not user_path:
        user_path = None
        user_type = UserDictionaryType.CSV

    resolved_mode = Mode.NORMAL
    normalized_mode = _normalize(mode)
    if normalized_mode is not None:
        if normalized_mode not in _MODES:
            raise ConfigurationError(f"unsupported mode: {mode}")
        resolved_mode = _MODES[normalized_mode]

    return Config(
        dictionary_kind=kind,
        dictionary_path=path,
        user_dictionary_path=user_path,
        user_dictionary_type=user_type,
        mode=resolved_mode,
        host=_resolve_host(host),
        port=_resolve_port(port),
        output_format=_resolve_enum(output_format, OutputFormat, OutputFormat.SIMPLE, "output format"),
        engine_policy=_resolve_enum(engine_policy, EnginePolicy, EnginePolicy.EXCLUSIVE, "engine policy"),
        demo=bool(demo),
    )


__all__ = [
    "Config",
    "DictionaryKind",
    "UserDictionaryType",
    "Mode",
    "OutputFormat",
    "EnginePolicy",
    "DEFAULT_DICTIONARY_KIND",
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "supported_dictionary_kinds",
    "resolve",
]
