"""Tests for snippetgen.tokens module."""

from snippetgen.tokens import (
    format_params,
    normalize_token,
    parse_params,
    split_csv,
    tokenize,
)


class TestNormalizeToken:
    """Tests for normalize_token."""

    def test_lowercases(self):
        assert normalize_token("INT") == "int"

    def test_strips_surrounding_punctuation(self):
        assert normalize_token("(for);") == "for"

    def test_keeps_inner_underscore(self):
        assert normalize_token("static_assert,") == "static_assert"

    def test_strips_leading_underscore(self):
        assert normalize_token("_x_") == "x"

    def test_all_punctuation_is_empty(self):
        assert normalize_token("{};") == ""


class TestTokenize:
    def test_whitespace_split(self):
        assert tokenize("  int \t for\nwhile ") == ["int", "for", "while"]

    def test_empty(self):
        assert tokenize("   ") == []


class TestParams:
    """Tests for parameter list parsing."""

    def test_split_csv_trims(self):
        assert split_csv(" a , b,c ") == ["a", "b", "c"]

    def test_name_default_pairs(self):
        assert parse_params("n=3,label=hi") == [("n", "3"), ("label", "hi")]

    def test_bare_name_has_empty_default(self):
        assert parse_params("flag") == [("flag", "")]

    def test_empty_names_dropped(self):
        assert parse_params("=x, ,a=1") == [("a", "1")]

    def test_split_at_first_equals(self):
        assert parse_params("expr=a==b") == [("expr", "a==b")]

    def test_blank_string(self):
        assert parse_params("  ") == []

    def test_format_params(self):
        assert format_params([("a", "1"), ("b", "")]) == "a=1,b="
