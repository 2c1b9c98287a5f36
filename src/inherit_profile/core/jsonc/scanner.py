"""Lexical landmarks in JSON-with-comments text.

Every service here is a pure text function built on one forward scan that
classifies each character of the document as code, string, comment or
whitespace. No JSON structure is parsed, so half-edited or invalid documents
are handled the same way as valid ones.

The scan carries three states (default, inside-string, inside-block-comment)
with one character of lookahead. A ``//`` comment runs to the end of the line
or document; a ``/*`` comment runs to its closing ``*/``; a string ends on the
first unescaped ``"``.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

CODE = "code"
STRING = "string"
COMMENT = "comment"
WHITESPACE = "whitespace"

SEPARATOR = ","
CLOSERS = ("}", "]")
DEFAULT_INDENT = "    "

_DEFAULT = 0
_IN_STRING = 1
_IN_BLOCK_COMMENT = 2


def scan(text: str) -> List[str]:
    """Return the kind (``CODE``/``STRING``/``COMMENT``/``WHITESPACE``) of every character."""
    n = len(text)
    kinds: List[str] = [WHITESPACE] * n
    state = _DEFAULT
    escaped = False
    i = 0
    while i < n:
        ch = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if state == _IN_STRING:
            kinds[i] = STRING
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                state = _DEFAULT
            i += 1
            continue

        if state == _IN_BLOCK_COMMENT:
            kinds[i] = COMMENT
            if ch == "*" and nxt == "/":
                kinds[i + 1] = COMMENT
                state = _DEFAULT
                i += 2
                continue
            i += 1
            continue

        if ch == '"':
            kinds[i] = STRING
            state = _IN_STRING
            i += 1
            continue

        if ch == "/" and nxt == "/":
            end = text.find("\n", i)
            if end == -1:
                end = n
            for j in range(i, end):
                kinds[j] = COMMENT
            i = end
            continue

        if ch == "/" and nxt == "*":
            kinds[i] = COMMENT
            kinds[i + 1] = COMMENT
            state = _IN_BLOCK_COMMENT
            i += 2
            continue

        kinds[i] = WHITESPACE if ch.isspace() else CODE
        i += 1
    return kinds


def _is_meaningful(kinds: Sequence[str], index: int) -> bool:
    # String contents count, including whitespace inside the literal.
    return kinds[index] in (CODE, STRING)


def previous_meaningful_index(
    text: str,
    before: int,
    kinds: Optional[Sequence[str]] = None,
) -> int:
    """Return the index of the last meaningful character strictly before ``before``, or -1."""
    if kinds is None:
        kinds = scan(text)
    i = min(before, len(text)) - 1
    while i >= 0:
        if _is_meaningful(kinds, i):
            return i
        i -= 1
    return -1


def last_meaningful_index(text: str, kinds: Optional[Sequence[str]] = None) -> int:
    """Return the index of the last character that is neither whitespace nor comment.

    Characters inside string literals are meaningful even when they look like
    comment syntax. Returns -1 when the document has no meaningful character.
    """
    return previous_meaningful_index(text, len(text), kinds)


def last_code_index(text: str, char: str, kinds: Optional[Sequence[str]] = None) -> int:
    """Return the index of the last occurrence of ``char`` outside strings and comments."""
    if kinds is None:
        kinds = scan(text)
    i = text.rfind(char)
    while i != -1:
        if kinds[i] == CODE:
            return i
        i = text.rfind(char, 0, i)
    return -1


def find_trailing_separator(text: str, kinds: Optional[Sequence[str]] = None) -> int:
    """Locate a removable trailing separator.

    A separator is trailing when it is the last meaningful character, or when
    the last meaningful character is a closing brace/bracket whose previous
    meaningful character is the separator. Separators inside strings or
    comments never qualify. Returns the separator's index, or -1.
    """
    if kinds is None:
        kinds = scan(text)
    last = last_meaningful_index(text, kinds)
    if last == -1 or kinds[last] != CODE:
        return -1
    if text[last] == SEPARATOR:
        return last
    if text[last] in CLOSERS:
        prev = previous_meaningful_index(text, last, kinds)
        if prev != -1 and kinds[prev] == CODE and text[prev] == SEPARATOR:
            return prev
    return -1


def strip_trailing_separator(text: str) -> str:
    """Return ``text`` with its trailing separator elided (unchanged when there is none)."""
    idx = find_trailing_separator(text)
    if idx == -1:
        return text
    return text[:idx] + text[idx + 1 :]


def needs_separator(text: str, kinds: Optional[Sequence[str]] = None) -> bool:
    """Whether a new member appended after ``text`` must be preceded by a separator.

    Not needed when ``text`` has no meaningful content, or its last meaningful
    character already opens an object or is a separator.
    """
    if kinds is None:
        kinds = scan(text)
    last = last_meaningful_index(text, kinds)
    if last == -1:
        return False
    if kinds[last] == CODE and text[last] in ("{", SEPARATOR):
        return False
    return True


def detect_indent(text: str, default: str = DEFAULT_INDENT) -> str:
    """Sniff the document's indentation unit.

    The first line that starts with whitespace (and has content after it)
    decides: a leading tab selects tab indentation, leading spaces select a
    run of spaces of that exact width. Falls back to ``default``.
    """
    for line in text.splitlines():
        stripped = line.lstrip(" \t")
        if not stripped or stripped == line:
            continue
        if line[0] == "\t":
            return "\t"
        return " " * (len(line) - len(line.lstrip(" ")))
    return default


def strip_comments(text: str, kinds: Optional[Sequence[str]] = None) -> str:
    """Blank out comments, keeping line breaks so positions stay comparable."""
    if kinds is None:
        kinds = scan(text)
    out: List[str] = []
    for ch, kind in zip(text, kinds):
        if kind == COMMENT and ch not in "\r\n":
            out.append(" ")
        else:
            out.append(ch)
    return "".join(out)


def strip_trailing_commas(text: str, kinds: Optional[Sequence[str]] = None) -> str:
    """Drop every separator directly followed (meaningfully) by a closing brace/bracket."""
    if kinds is None:
        kinds = scan(text)
    drop = set()
    pending: Optional[int] = None
    for i, (ch, kind) in enumerate(zip(text, kinds)):
        if kind != CODE:
            if kind == STRING:
                pending = None
            continue
        if ch in CLOSERS and pending is not None:
            drop.add(pending)
        pending = i if ch == SEPARATOR else None
    if not drop:
        return text
    return "".join(ch for i, ch in enumerate(text) if i not in drop)


__all__ = [
    "CODE",
    "STRING",
    "COMMENT",
    "WHITESPACE",
    "SEPARATOR",
    "DEFAULT_INDENT",
    "scan",
    "last_meaningful_index",
    "previous_meaningful_index",
    "last_code_index",
    "find_trailing_separator",
    "strip_trailing_separator",
    "needs_separator",
    "detect_indent",
    "strip_comments",
    "strip_trailing_commas",
]
