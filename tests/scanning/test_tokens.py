"""Tests for the keyword/token scanner."""

import pytest

from cyclo.scanning.lexer import classify
from cyclo.scanning.tokens import TokenCounts, count_span_tokens, count_tokens


def _scan(text):
    return count_span_tokens(text, classify(text))


class TestCountTokens:
    """Test decision and return counting on code-only text."""

    @pytest.mark.parametrize("keyword", ["if", "for", "while", "case", "catch"])
    def test_each_decision_keyword(self, keyword):
        """Every decision keyword counts once."""
        assert count_tokens(f"{keyword} (x)").decisions == 1

    def test_logical_operators(self):
        """&& and || each count once."""
        counts = count_tokens("a && b || c && d")
        assert counts.operators == 3
        assert counts.decisions == 3

    def test_single_ampersand_and_pipe_ignored(self):
        """Bitwise & and | are not decisions."""
        assert count_tokens("a & b | c; int &r = x;").decisions == 0

    def test_word_boundaries(self):
        """ifdef, forward and whiled are not keywords."""
        assert count_tokens("ifdef forward whiled fortunate casing catcher").decisions == 0

    def test_identifier_suffixes(self):
        """Keywords glued to identifier characters don't match."""
        assert count_tokens("my_if if_x _for for2").decisions == 0

    def test_returns(self):
        """return is counted; returned and return_value are not."""
        counts = count_tokens("return 1; return; returned = return_value;")
        assert counts.returns == 2

    def test_else_if_counts_once(self):
        """'else if' is a single decision (the if)."""
        assert count_tokens("if (a) {} else if (b) {} else {}").decisions == 2

    def test_switch_and_default_not_counted(self):
        """switch and default are not decision keywords, case is."""
        counts = count_tokens("switch (x) { case 1: break; default: break; }")
        assert counts.decisions == 1

    def test_preprocessor_if_ignored(self):
        """#if and '# if' are directives, not decisions."""
        code = "#if FOO\n#  if BAR\n#ifdef X\n#elif Y\nint a;\n#endif\n"
        assert count_tokens(code).decisions == 0

    def test_keyword_in_macro_body_counted(self):
        """Only the directive name is ignored, not the macro body."""
        assert count_tokens("#define CHECK(x) if (!(x)) return -1\n") == TokenCounts(
            keywords=1, operators=0, returns=1
        )

    def test_empty(self):
        """No code, no counts."""
        assert count_tokens("") == TokenCounts()


class TestCommentAndStringImmunity:
    """Keywords inside comments and literals never count."""

    def test_line_comment_only(self):
        """A file of commented-out keywords has zero decisions."""
        assert _scan("// if while for && ||\n").decisions == 0

    def test_block_comment_only(self):
        """Block comments are ignored, even multi-line."""
        assert _scan("/* if (a && b)\n  while (c) return; */").decisions == 0

    def test_string_literal_only(self):
        """Keywords inside a string literal are ignored."""
        counts = _scan('"if(x){}"')
        assert counts.decisions == 0
        assert counts.returns == 0

    def test_char_literals(self):
        """Operators spelled with char literals are ignored."""
        assert _scan("c == '&' && d == '|'").operators == 1

    def test_escaped_quote_keeps_literal_open(self):
        """A keyword after an escaped quote is still inside the literal."""
        assert _scan(r'"say \" if" ; x').decisions == 0

    def test_comment_splitting_keyword(self):
        """A comment between letters does not join them into a keyword."""
        assert _scan("i/**/f (x)").decisions == 0
