"""
wakachi: morphological tokenization over HTTP.

wakachi runs a SudachiPy tokenizer behind a small HTTP service so that
other processes can split Japanese text into words without embedding a
tokenizer of their own.

Key Features:
    - Validated, immutable startup configuration (dictionary, user
      dictionary, mode, output format, sharing policy)
    - One engine per process, shared through an exclusive or shared policy
    - Three response shapes: token list, detailed tokens, engine-native
    - Per-request failures always come back as ``{"error": ...}``

Quick Start:
    $ wakachi-server --dict-type core --mode normal --port 8080
    $ curl -X POST --data-binary "すもももももももものうち" http://localhost:8080/tokenize
    {"tokens":["すもも","も","もも","も","もも","の","うち"]}

Library use:
    >>> from wakachi import resolve, construct_engine, create_handle
    >>> config = resolve("core", mode="search")
    >>> handle = create_handle(construct_engine(config), config.engine_policy)
    >>> tokens = handle.tokenize("日本語の解析")

Installation Requirements:
    pip install sudachipy sudachidict_core
"""

__version__ = "0.1.0"

# Configuration
from .config import (
    Config,
    DictionaryKind,
    EnginePolicy,
    Mode,
    OutputFormat,
    UserDictionaryType,
    resolve,
    supported_dictionary_kinds,
)

# Engine
from .engine import SudachiEngine, Token, construct_engine, has_sudachi
from .handle import EngineHandle, ExclusiveEngineHandle, SharedEngineHandle, create_handle

# Request processing
from .errors import ErrorMapper
from .formatters import DetailedFormatter, NativeFormatter, SimpleFormatter, get_formatter
from .pipeline import MAX_BODY_SIZE, RequestPipeline
from .results import DetailedTokenList, EngineNativeDocument, ErrorResponse, TokenList

# Exceptions
from .exceptions import (
    ConfigurationError,
    DetailLookupError,
    EngineConstructionError,
    FormatError,
    RequestError,
    TokenizeError,
    Utf8DecodeError,
    WakachiError,
)

__all__ = [
    "__version__",
    # Configuration
    "Config",
    "DictionaryKind",
    "EnginePolicy",
    "Mode",
    "OutputFormat",
    "UserDictionaryType",
    "resolve",
    "supported_dictionary_kinds",
    # Engine
    "SudachiEngine",
    "Token",
    "construct_engine",
    "has_sudachi",
    "EngineHandle",
    "ExclusiveEngineHandle",
    "SharedEngineHandle",
    "create_handle",
    # Request processing
    "ErrorMapper",
    "DetailedFormatter",
    "NativeFormatter",
    "SimpleFormatter",
    "get_formatter",
    "MAX_BODY_SIZE",
    "RequestPipeline",
    "DetailedTokenList",
    "EngineNativeDocument",
    "ErrorResponse",
    "TokenList",
    # Exceptions
    "ConfigurationError",
    "DetailLookupError",
    "EngineConstructionError",
    "FormatError",
    "RequestError",
    "TokenizeError",
    "Utf8DecodeError",
    "WakachiError",
]
