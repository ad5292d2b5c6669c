"""
Pytest configuration and fixtures for wakachi tests.
"""

import threading
import time

import pytest

from wakachi.config import DictionaryKind, resolve
from wakachi.engine import Token
from wakachi.exceptions import DetailLookupError, TokenizeError


class FakeEngine:
    """
    Deterministic stand-in implementing the engine contract.

    Splits text on the words of a tiny lexicon (longest match first) and
    falls back to single characters. Words listed in ``unknown_ids`` have no
    detail entry, and any text containing ``fail_marker`` is rejected.
    """

    LEXICON = {
        "すもも": 1,
        "もも": 2,
        "も": 3,
        "の": 4,
        "うち": 5,
    }

    def __init__(self, fail_marker="\x00", unknown_ids=(), delay=0.0):
        self.fail_marker = fail_marker
        self.unknown_ids = set(unknown_ids)
        self.delay = delay
        self.calls = 0
        self.active = 0
        self.max_active = 0
        self._counter_lock = threading.Lock()

    def tokenize(self, text):
        with self._counter_lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                time.sleep(self.delay)
            if self.fail_marker in text:
                raise TokenizeError("cannot segment input")
            return self._segment(text)
        finally:
            with self._counter_lock:
                self.active -= 1

    def _segment(self, text):
        tokens = []
        i = 0
        words = sorted(self.LEXICON, key=len, reverse=True)
        while i < len(text):
            for word in words:
                if text.startswith(word, i):
                    tokens.append(Token(text=word, word_id=self.LEXICON[word]))
                    i += len(word)
                    break
            else:
                tokens.append(Token(text=text[i], word_id=1000 + ord(text[i])))
                i += 1
        return tokens

    def word_detail(self, token):
        if token.word_id in self.unknown_ids:
            raise DetailLookupError(f"unknown word id: {token.word_id}")
        return ["名詞", "一般", token.text]

    def native_format(self, tokens):
        return [{"surface": t.text, "wordId": t.word_id} for t in tokens]


@pytest.fixture
def fake_engine():
    """Provide a fresh fake engine."""
    return FakeEngine()


@pytest.fixture
def sample_text():
    """Provide the classic segmentation example."""
    return "すもももももももものうち"


@pytest.fixture
def all_kinds():
    """Every dictionary kind treated as installed."""
    return set(DictionaryKind)


@pytest.fixture
def make_config(all_kinds):
    """Build a config with every dictionary kind treated as installed."""
    def _make(**kwargs):
        kwargs.setdefault("supported_kinds", all_kinds)
        return resolve(**kwargs)

    return _make
