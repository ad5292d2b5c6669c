"""
Tests for splitting long text into pieces the engine accepts.

These tests need no dictionary.

Run tests with: pytest tests/test_adapter.py -v
"""

import pytest

from wakachi.engine.adapter import MAX_CHUNK_BYTES, split_text


def _sizes(pieces):
    return [len(piece.encode("utf-8")) for _, piece in pieces]


# =============================================================================
# Test Text Splitting
# =============================================================================

class TestSplitText:
    """Test split_text."""

    def test_short_text_is_one_piece(self, sample_text):
        """Test that text under the limit is left alone."""
        assert list(split_text(sample_text)) == [(0, sample_text)]

    def test_empty_text_has_no_pieces(self):
        """Test that empty text yields nothing."""
        assert list(split_text("")) == []

    @pytest.mark.parametrize("unit", ["a", "す", "😀", "すもも。", "行\n"])
    def test_pieces_rebuild_text_within_limit(self, unit):
        """Test that pieces concatenate back and never exceed the limit."""
        text = unit * (MAX_CHUNK_BYTES + 1)
        pieces = list(split_text(text))
        assert len(pieces) > 1
        assert "".join(piece for _, piece in pieces) == text
        assert max(_sizes(pieces)) <= MAX_CHUNK_BYTES

    def test_offsets_are_character_positions(self):
        """Test that each offset locates its piece in the input."""
        text = "東京都に行く。" * 20000
        for offset, piece in split_text(text):
            assert text[offset:offset + len(piece)] == piece

    def test_cuts_after_sentence_punctuation(self):
        """Test that pieces end at a sentence boundary when one fits."""
        text = "すもももももももものうち。" * 10
        pieces = list(split_text(text, limit=100))
        assert all(piece.endswith("。") for _, piece in pieces)

    @pytest.mark.parametrize("mark", ["\n", "！", "？"])
    def test_cuts_after_other_breaks(self, mark):
        """Test newlines and exclamation or question marks as boundaries."""
        text = ("ももも" + mark) * 30
        pieces = list(split_text(text, limit=50))
        assert all(piece.endswith(mark) for _, piece in pieces)

    def test_falls_back_to_character_boundary(self):
        """Test text without any break is cut at the largest fitting size."""
        text = "す" * 100
        pieces = list(split_text(text, limit=31))
        assert [len(piece) for _, piece in pieces] == [10] * 10
