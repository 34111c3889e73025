"""Keyword/token scanner over code-only text.

Counts decision points and the ``return`` keyword, which stands in for
the number of functions in a file. Real function detection is unreliable
once macros can rewrite declaration syntax, so we count something that
every non-trivial function body tends to contain instead.

Matching is whole-token: ``ifdef`` is not ``if`` and ``fortunate`` is not
``for``. Keywords that name a preprocessor directive (``#if``) are
ignored; the logical operators are matched as exact two-character
sequences.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .lexer import ClassifiedSpan, code_view

DECISION_KEYWORDS = ("if", "for", "while", "case", "catch")
LOGICAL_OPERATORS = ("&&", "||")
FUNCTION_PROXY = "return"

_KEYWORD_RE = re.compile(r"\b(" + "|".join(DECISION_KEYWORDS) + r")\b")
_OPERATOR_RE = re.compile("|".join(re.escape(op) for op in LOGICAL_OPERATORS))
_RETURN_RE = re.compile(r"\b" + FUNCTION_PROXY + r"\b")
_DIRECTIVE_RE = re.compile(r"^([ \t]*#[ \t]*)(\w+)", re.MULTILINE)


@dataclass(frozen=True)
class TokenCounts:
    """Raw counts for one file."""

    keywords: int = 0
    operators: int = 0
    returns: int = 0

    @property
    def decisions(self) -> int:
        return self.keywords + self.operators


def count_tokens(code: str) -> TokenCounts:
    """Count decision points and ``return`` in code-only text.

    *code* must already have comments and literals blanked out (see
    :func:`cyclo.scanning.lexer.code_view`).
    """
    code = _DIRECTIVE_RE.sub(lambda m: m.group(1) + " " * len(m.group(2)), code)
    return TokenCounts(
        keywords=len(_KEYWORD_RE.findall(code)),
        operators=len(_OPERATOR_RE.findall(code)),
        returns=len(_RETURN_RE.findall(code)),
    )


def count_span_tokens(text: str, spans: list[ClassifiedSpan]) -> TokenCounts:
    """Count tokens in the code spans of an already classified file."""
    return count_tokens(code_view(text, spans))
