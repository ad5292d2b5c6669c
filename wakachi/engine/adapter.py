"""
Tokenization engine adapter.

This module is the only place that talks to SudachiPy directly. Everything
else depends on the small contract implemented by :class:`SudachiEngine`:

- ``tokenize(text)`` returns a list of :class:`Token`
- ``word_detail(token)`` returns the dictionary fields for the token's word id
- ``native_format(tokens)`` returns Sudachi's own JSON-compatible document

Example:
    >>> from wakachi.config import resolve
    >>> from wakachi.engine import construct_engine
    >>> engine = construct_engine(resolve("core"))
    >>> [token.text for token in engine.tokenize("すもももももももものうち")]
    ['すもも', 'も', 'もも', 'も', 'もも', 'の', 'うち']
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..config import Config, DictionaryKind, EnginePolicy, UserDictionaryType
from ..exceptions import (
    DetailLookupError,
    EngineConstructionError,
    FormatError,
    TokenizeError,
)
from .tokenizers import (
    compile_user_dictionary,
    load_dictionary,
    split_mode,
    system_dictionary_path,
)

logger = logging.getLogger(__name__)

# Sudachi rejects a single input longer than this many UTF-8 bytes
MAX_CHUNK_BYTES = 49149

_BREAKS = ("\n", "。", "！", "？")


def split_text(text: str, limit: int = MAX_CHUNK_BYTES) -> Iterator[Tuple[int, str]]:
    """
    Split text into pieces Sudachi accepts in one call.

    Each piece is at most ``limit`` UTF-8 bytes. A piece ends after the
    last newline or sentence-final punctuation (。！？) that fits, or at a
    character boundary when there is none.

    Args:
        text: The text to split.
        limit: Maximum size of a piece in UTF-8 bytes.

    Yields:
        Tuple[int, str]: Character offset of the piece in ``text`` and the
        piece itself. The pieces concatenate back to ``text``.
    """
    start = 0
    while start < len(text):
        end = min(len(text), start + limit)
        size = len(text[start:end].encode("utf-8"))
        while size > limit:
            end = start + max(1, (end - start) * limit // size)
            size = len(text[start:end].encode("utf-8"))

        if end < len(text):
            cut = max(text.rfind(mark, start, end) for mark in _BREAKS)
            if cut >= start:
                end = cut + 1

        yield start, text[start:end]
        start = end


@dataclass(frozen=True)
class Token:
    """
    One segmented unit of text.

    Attributes:
        text: Surface form as it appears in the input.
        word_id: Identifier of the entry in the loaded dictionary.
        morpheme: Engine-side record the details are read from. Only valid
            for the lifetime of the request that produced the token.
        offset: Character offset of the chunk the token was analyzed in.
    """

    text: str
    word_id: int
    morpheme: Optional[Any] = field(default=None, repr=False, compare=False)
    offset: int = field(default=0, repr=False, compare=False)


class SudachiEngine:
    """
    A loaded Sudachi dictionary plus the tokenizer(s) that read it.

    A Sudachi tokenizer keeps internal scratch buffers between calls, so a
    single tokenizer must not be used by two threads at once. With
    ``per_thread=True`` every worker thread gets its own tokenizer created
    from the one shared dictionary; otherwise one tokenizer is reused and
    callers have to serialize access themselves.

    Attributes:
        split_mode: The Sudachi split mode used for every call.
        per_thread: Whether tokenizers are created per thread.
    """

    def __init__(self, dictionary, mode, per_thread: bool = False):
        self.dictionary = dictionary
        self.split_mode = mode
        self.per_thread = per_thread
        self._local = threading.local()
        self._tokenizer = None if per_thread else dictionary.tokenizer(mode)

    def _current_tokenizer(self):
        if not self.per_thread:
            return self._tokenizer
        tokenizer = getattr(self._local, "tokenizer", None)
        if tokenizer is None:
            tokenizer = self.dictionary.tokenizer(self.split_mode)
            self._local.tokenizer = tokenizer
        return tokenizer

    def tokenize(self, text: str) -> List[Token]:
        """
        Segment text into tokens.

        Text longer than Sudachi accepts in one call is analyzed piece by
        piece (see :func:`split_text`) and the tokens are joined in order.

        Args:
            text: The text to tokenize.

        Returns:
            List[Token]: Tokens in input order.

        Raises:
            TokenizeError: If Sudachi rejects the input.
        """
        tokenizer = self._current_tokenizer()
        tokens = []
        for offset, chunk in split_text(text):
            try:
                morphemes = tokenizer.tokenize(chunk, self.split_mode)
                tokens.extend(
                    Token(text=m.surface(), word_id=m.word_id(), morpheme=m, offset=offset)
                    for m in morphemes
                )
            except Exception as e:
                raise TokenizeError(f"failed to tokenize text: {e}") from e
        return tokens

    def word_detail(self, token: Token) -> List[str]:
        """
        Look up the dictionary fields of a token's word id.

        Returns:
            List[str]: The six part-of-speech fields followed by the
            dictionary form, reading form and normalized form.

        Raises:
            DetailLookupError: If the word id is unknown to this dictionary.
        """
        if token.morpheme is None:
            raise DetailLookupError(f"unknown word id: {token.word_id}")
        m = token.morpheme
        try:
            return [
                *m.part_of_speech(),
                m.dictionary_form(),
                m.reading_form(),
                m.normalized_form(),
            ]
        except Exception as e:
            raise DetailLookupError(f"failed to look up word id {token.word_id}: {e}") from e

    def native_format(self, tokens: List[Token]) -> List[Dict[str, Any]]:
        """
        Render tokens in Sudachi's own field layout.

        Raises:
            FormatError: If any token cannot be rendered.
        """
        payload = []
        for token in tokens:
            m = token.morpheme
            if m is None:
                raise FormatError(f"token {token.text!r} carries no analysis")
            try:
                payload.append(
                    {
                        "surface": m.surface(),
                        "partOfSpeech": list(m.part_of_speech()),
                        "dictionaryForm": m.dictionary_form(),
                        "readingForm": m.reading_form(),
                        "normalizedForm": m.normalized_form(),
                        "wordId": m.word_id(),
                        "begin": token.offset + m.begin(),
                        "end": token.offset + m.end(),
                        "isOov": m.is_oov(),
                    }
                )
            except Exception as e:
                raise FormatError(f"failed to format token {token.text!r}: {e}") from e
        return payload


def construct_engine(config: Config) -> SudachiEngine:
    """
    Build the engine described by a resolved configuration.

    Args:
        config: A configuration returned by :func:`wakachi.config.resolve`.

    Returns:
        SudachiEngine: The ready engine.

    Raises:
        EngineConstructionError: If the system or user dictionary cannot be
            loaded, or SudachiPy is not installed.
    """
    if config.dictionary_kind is DictionaryKind.LOCAL:
        system = system_dictionary_path(config.dictionary_path)
    else:
        system = config.dictionary_kind.value

    user = config.user_dictionary_path
    if user is not None and config.user_dictionary_type is UserDictionaryType.CSV:
        user = compile_user_dictionary(user, system)

    dictionary = load_dictionary(system, user)
    try:
        engine = SudachiEngine(
            dictionary,
            split_mode(config.mode.split_mode),
            per_thread=config.engine_policy is EnginePolicy.SHARED,
        )
    except Exception as e:
        raise EngineConstructionError(f"failed to create tokenizer: {e}") from e
    logger.info(
        "engine ready: dictionary=%s user_dictionary=%s mode=%s",
        system,
        config.user_dictionary_path,
        config.mode.label,
    )
    return engine


__all__ = ["MAX_CHUNK_BYTES", "Token", "SudachiEngine", "construct_engine", "split_text"]
