"""
Tests against the real SudachiPy engine.

These tests need sudachipy and sudachidict_core and are skipped otherwise.

Run tests with: pytest tests/test_engine.py -v
"""

import shutil
from pathlib import Path

import pytest

pytest.importorskip("sudachipy")
pytest.importorskip("sudachidict_core")

from fastapi.testclient import TestClient

from wakachi.config import EnginePolicy, resolve
from wakachi.engine import SudachiEngine, Token, construct_engine
from wakachi.engine.adapter import MAX_CHUNK_BYTES
from wakachi.engine.tokenizers import compile_user_dictionary, remove_compiled_dictionaries
from wakachi.exceptions import DetailLookupError, EngineConstructionError, FormatError
from wakachi.handle import create_handle
from wakachi.web import build_state, create_app


@pytest.fixture(scope="module")
def engine():
    """Engine built from the default configuration."""
    return construct_engine(resolve())


USER_ENTRY = (
    "ぴよぴよらんど,4786,4786,-20000,ぴよぴよらんど,名詞,固有名詞,一般,*,*,*,"
    "ピヨピヨランド,ぴよぴよらんど,*,A,*,*,*,*\n"
)


@pytest.fixture
def user_csv(tmp_path):
    """A one-entry user dictionary in Sudachi CSV format."""
    path = tmp_path / "user.csv"
    path.write_text(USER_ENTRY, encoding="utf-8")
    return path


# =============================================================================
# Test Engine Construction
# =============================================================================

class TestConstruction:
    """Test building the engine from a configuration."""

    def test_default_configuration(self, engine):
        """Test that the default configuration builds a Sudachi engine."""
        assert isinstance(engine, SudachiEngine)
        assert engine.per_thread is False

    def test_shared_policy_uses_per_thread_tokenizers(self):
        """Test that the shared policy gives every thread its own tokenizer."""
        shared = construct_engine(resolve(engine_policy="shared"))
        assert shared.per_thread is True
        assert [t.text for t in shared.tokenize("もも")] == ["もも"]

    @pytest.mark.parametrize("policy", ["exclusive", "shared"])
    def test_tokenizers_built_without_deprecation(self, recwarn, policy):
        """Test that building tokenizers emits no deprecation warning."""
        construct_engine(resolve(engine_policy=policy)).tokenize("もも")
        deprecated = [w for w in recwarn.list if issubclass(w.category, DeprecationWarning)]
        assert not [w for w in deprecated if "tokenizer" in str(w.message)]

    def test_missing_local_dictionary(self, tmp_path):
        """Test that a missing system dictionary fails construction."""
        config = resolve(dictionary_kind="local", dictionary_path=str(tmp_path / "system.dic"))
        with pytest.raises(EngineConstructionError, match="system dictionary not found"):
            construct_engine(config)

    @pytest.mark.parametrize("user_type", ["csv", "bin"])
    def test_missing_user_dictionary(self, tmp_path, user_type):
        """Test that a missing user dictionary fails construction."""
        config = resolve(
            user_dictionary_path=str(tmp_path / "user.dic"),
            user_dictionary_type=user_type,
        )
        with pytest.raises(EngineConstructionError, match="user dictionary not found"):
            construct_engine(config)

    def test_csv_user_dictionary_is_applied(self, user_csv):
        """Test that a CSV user dictionary is compiled and its entry used."""
        config = resolve(user_dictionary_path=str(user_csv), user_dictionary_type="csv")
        tokens = construct_engine(config).tokenize("ぴよぴよらんどへ行く")
        assert [t.text for t in tokens] == ["ぴよぴよらんど", "へ", "行く"]

    def test_binary_user_dictionary_is_applied(self, user_csv, tmp_path):
        """Test that a compiled user dictionary is loaded directly."""
        binary = tmp_path / "user.dic"
        shutil.copy(compile_user_dictionary(str(user_csv), "core"), binary)
        config = resolve(user_dictionary_path=str(binary), user_dictionary_type="bin")
        tokens = construct_engine(config).tokenize("ぴよぴよらんどへ行く")
        assert [t.text for t in tokens] == ["ぴよぴよらんど", "へ", "行く"]

    def test_compiled_dictionaries_are_removed(self, user_csv):
        """Test that compiled user dictionaries do not outlive cleanup."""
        compiled = Path(compile_user_dictionary(str(user_csv), "core"))
        assert compiled.is_file()
        remove_compiled_dictionaries()
        assert not compiled.exists()
        assert not compiled.parent.exists()


# =============================================================================
# Test Tokenization
# =============================================================================

class TestTokenization:
    """Test tokenization through the real engine."""

    def test_reconstruction_is_lossless(self, engine, sample_text):
        """Test that the tokens concatenate back to the input."""
        tokens = engine.tokenize(sample_text)
        assert "".join(t.text for t in tokens) == sample_text
        assert len(tokens) > 1

    def test_deterministic(self, engine, sample_text):
        """Test that repeated calls give identical results."""
        handle = create_handle(engine, EnginePolicy.EXCLUSIVE)
        first = [(t.text, t.word_id) for t in handle.tokenize(sample_text)]
        second = [(t.text, t.word_id) for t in handle.tokenize(sample_text)]
        assert first == second

    def test_search_and_decompose_are_equivalent(self):
        """Test the documented equivalence of search and decompose modes."""
        text = "東京都庁で国家公務員として働く"
        search = construct_engine(resolve(mode="search"))
        decompose = construct_engine(resolve(mode="decompose"))
        assert [t.text for t in search.tokenize(text)] == [t.text for t in decompose.tokenize(text)]

    def test_word_detail(self, engine):
        """Test the detail fields of a token."""
        token = engine.tokenize("すもも")[0]
        detail = engine.word_detail(token)
        assert len(detail) == 9
        assert detail[0] == "名詞"

    def test_word_detail_unknown(self, engine):
        """Test that a token without analysis is unknown."""
        with pytest.raises(DetailLookupError, match="unknown word id: 42"):
            engine.word_detail(Token(text="x", word_id=42))

    def test_native_format(self, engine):
        """Test Sudachi's own field layout."""
        document = engine.native_format(engine.tokenize("すもも"))
        assert document[0]["surface"] == "すもも"
        assert set(document[0]) == {
            "surface", "partOfSpeech", "dictionaryForm", "readingForm",
            "normalizedForm", "wordId", "begin", "end", "isOov",
        }

    def test_native_format_without_analysis(self, engine):
        """Test that tokens without analysis cannot be formatted."""
        with pytest.raises(FormatError):
            engine.native_format([Token(text="x", word_id=1)])

    def test_long_text_is_tokenized(self, engine):
        """Test text beyond a single engine call rebuilds exactly."""
        text = "すもももももももものうち" * 10000
        assert len(text.encode("utf-8")) > MAX_CHUNK_BYTES
        tokens = engine.tokenize(text)
        assert "".join(t.text for t in tokens) == text

    def test_native_offsets_span_whole_text(self, engine):
        """Test that native offsets point into the full input."""
        text = "東京都に行く。" * 5000
        document = engine.native_format(engine.tokenize(text))
        assert all(text[d["begin"]:d["end"]] == d["surface"] for d in document)
        assert document[-1]["end"] == len(text)


# =============================================================================
# Test End to End
# =============================================================================

class TestEndToEnd:
    """Test the service with the default configuration."""

    def test_default_service(self, engine, sample_text):
        """Test POST /tokenize with the classic example."""
        client = TestClient(create_app(build_state(resolve(), engine=engine)))
        response = client.post("/tokenize", content=sample_text.encode("utf-8"))
        assert response.status_code == 200
        assert "".join(response.json()["tokens"]) == sample_text

    def test_detailed_service(self, engine, sample_text):
        """Test POST /tokenize with detailed output."""
        client = TestClient(create_app(build_state(resolve(output_format="detailed"), engine=engine)))
        payload = client.post("/tokenize", content=sample_text.encode("utf-8")).json()
        assert "".join(entry["text"] for entry in payload) == sample_text
        assert all(len(entry["detail"]) == 9 for entry in payload)

    def test_large_body(self, engine):
        """Test POST /tokenize with a body of about one megabyte."""
        text = "すもももももももものうち" * 29000
        body = text.encode("utf-8")
        assert len(body) > 1_000_000
        client = TestClient(create_app(build_state(resolve(), engine=engine)))
        response = client.post("/tokenize", content=body)
        assert response.status_code == 200
        assert "".join(response.json()["tokens"]) == text
