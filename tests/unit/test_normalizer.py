"""Unit tests for the text normalizer."""

import pytest
from decl_index.core.normalizer import TextNormalizer


class TestTextNormalizer:
    """Test cases for the TextNormalizer class."""

    @pytest.fixture
    def normalizer(self):
        return TextNormalizer()

    def test_ascii_lower_leaves_non_ascii_alone(self, normalizer):
        assert normalizer.ascii_lower("Nat.ADD") == "nat.add"
        assert normalizer.ascii_lower("ÉΣx") == "ÉΣx"
        assert normalizer.ascii_lower("") == ""

    def test_strip_whitespace(self, normalizer):
        assert normalizer.strip_whitespace("  nat .\tadd\n") == "nat.add"
        assert normalizer.strip_whitespace("") == ""

    def test_doc_words(self, normalizer):
        assert normalizer.doc_words("  Add   COMM ") == ["add", "comm"]
        assert normalizer.doc_words("   ") == []

    def test_unicode_whitespace(self, normalizer):
        assert normalizer.strip_whitespace("nat\u00a0add\u3000comm\u2028") == "nataddcomm"
        assert normalizer.doc_words("add\u2003comm") == ["add", "comm"]

    def test_information_separators_are_not_whitespace(self, normalizer):
        for char in "\x1c\x1d\x1e\x1f":
            assert normalizer.strip_whitespace(f"a{char}b") == f"a{char}b"
            assert normalizer.doc_words(f"a{char}b c") == [f"a{char}b", "c"]

    def test_is_separator(self, normalizer):
        assert normalizer.is_separator(".")
        assert normalizer.is_separator("_")
        assert not normalizer.is_separator("-")

    def test_byte_length(self, normalizer):
        assert normalizer.byte_length("abc") == 3
        assert normalizer.byte_length("α") == 2
