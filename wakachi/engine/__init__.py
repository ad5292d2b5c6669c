"""
Tokenization engine for wakachi.

This subpackage wraps SudachiPy behind a narrow contract: construct an
engine from a :class:`~wakachi.config.Config`, tokenize text into
:class:`Token` objects, look up token details and render Sudachi's own
output format.

Usage:
    >>> from wakachi.config import resolve
    >>> from wakachi.engine import construct_engine
    >>> engine = construct_engine(resolve("core"))
    >>> tokens = engine.tokenize("日本語のテキスト")

Components:
    construct_engine: Build an engine from a resolved configuration
    SudachiEngine: The engine instance
    Token: One segmented unit of text
    has_sudachi: Check whether the SudachiPy backend is installed
"""

from .adapter import SudachiEngine, Token, construct_engine
from .tokenizers import has_sudachi

__all__ = [
    "SudachiEngine",
    "Token",
    "construct_engine",
    "has_sudachi",
]
