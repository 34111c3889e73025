"""Lexical classifier: split C/C++ text into code, comment and literal spans.

A single left-to-right pass tracks one of five states. Transitions out of
code are only checked while in code, so ``"/* not a comment */"`` is a
string and ``// "not a string"`` is a comment. The newline that ends a
``//`` comment belongs to the following code span.

A quote inside a number (a C++14 digit separator, ``1'000``) stays code.

Unterminated comments and literals run to the end of the file; the scan
never fails.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SpanKind(Enum):
    """What a run of characters is."""

    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING_LITERAL = "string_literal"
    CHAR_LITERAL = "char_literal"

    @property
    def is_code(self) -> bool:
        return self is SpanKind.CODE


@dataclass(frozen=True)
class ClassifiedSpan:
    """A contiguous ``text[start:end]`` run tagged with its kind."""

    kind: SpanKind
    start: int
    end: int
    text: str

    def __len__(self) -> int:
        return self.end - self.start


_QUOTES = {
    SpanKind.STRING_LITERAL: '"',
    SpanKind.CHAR_LITERAL: "'",
}


def classify(text: str) -> list[ClassifiedSpan]:
    """Classify every character of *text*.

    The returned spans are non-empty, contiguous, non-overlapping and
    cover ``text`` exactly once in file order.
    """
    spans: list[ClassifiedSpan] = []
    n = len(text)
    state = SpanKind.CODE
    start = 0
    i = 0

    while i < n:
        ch = text[i]

        if state is SpanKind.CODE:
            if ch == "/" and i + 1 < n and text[i + 1] == "/":
                new_state, width = SpanKind.LINE_COMMENT, 2
            elif ch == "/" and i + 1 < n and text[i + 1] == "*":
                new_state, width = SpanKind.BLOCK_COMMENT, 2
            elif ch == '"':
                new_state, width = SpanKind.STRING_LITERAL, 1
            elif ch == "'" and not _is_digit_separator(text, i):
                new_state, width = SpanKind.CHAR_LITERAL, 1
            else:
                i += 1
                continue
            _emit(spans, text, state, start, i)
            state, start = new_state, i
            i += width

        elif state is SpanKind.LINE_COMMENT:
            if ch == "\n":
                _emit(spans, text, state, start, i)
                state, start = SpanKind.CODE, i
            i += 1

        elif state is SpanKind.BLOCK_COMMENT:
            if ch == "*" and i + 1 < n and text[i + 1] == "/":
                i += 2
                _emit(spans, text, state, start, i)
                state, start = SpanKind.CODE, i
            else:
                i += 1

        else:
            if ch == "\\":
                # escaped character, whatever it is
                i += 2
            elif ch == _QUOTES[state]:
                i += 1
                _emit(spans, text, state, start, i)
                state, start = SpanKind.CODE, i
            else:
                i += 1

    _emit(spans, text, state, start, n)
    return spans


def _is_digit_separator(text: str, i: int) -> bool:
    """True if the quote at *i* sits inside a number such as ``1'000'000``.

    The token around the quote must start with a digit and continue after
    it, so prefixed char literals like ``u8'a'`` and ``L'x'`` still open.
    """
    if i + 1 >= len(text) or not (text[i + 1].isalnum() or text[i + 1] == "_"):
        return False
    j = i
    while j > 0 and (text[j - 1].isalnum() or text[j - 1] in "_'"):
        j -= 1
    return j < i and text[j].isdigit()


def _emit(spans: list[ClassifiedSpan], text: str, kind: SpanKind, start: int, end: int) -> None:
    end = min(end, len(text))
    if end > start:
        spans.append(ClassifiedSpan(kind, start, end, text[start:end]))


def code_view(text: str, spans: list[ClassifiedSpan] | None = None) -> str:
    """Return *text* with every non-code character blanked out.

    Newlines are kept so line numbers and line counts line up with the
    original; everything else outside code spans becomes a space. The
    result has the same length as *text*.
    """
    if spans is None:
        spans = classify(text)
    parts: list[str] = []
    for span in spans:
        if span.kind.is_code:
            parts.append(span.text)
        else:
            parts.append("".join("\n" if c == "\n" else " " for c in span.text))
    return "".join(parts)
