from __future__ import annotations

from inherit_profile.core.jsonc import scanner


def test_scan_classifies_strings_comments_and_code() -> None:
    text = '{"u": "http://x"} // tail'
    kinds = scanner.scan(text)

    assert kinds[0] == scanner.CODE
    assert all(k == scanner.STRING for k in kinds[6:16])  # "http://x"
    assert kinds[16] == scanner.CODE  # closing brace
    assert kinds[17] == scanner.WHITESPACE
    assert all(k == scanner.COMMENT for k in kinds[18:])


def test_scan_handles_escaped_quotes_inside_strings() -> None:
    text = '"a\\"b" ,'
    kinds = scanner.scan(text)
    assert kinds[:6] == [scanner.STRING] * 6
    assert kinds[-1] == scanner.CODE


def test_scan_block_comment_spans_lines() -> None:
    text = "/* a\n b */1"
    kinds = scanner.scan(text)
    assert kinds[:-1] == [scanner.COMMENT] * (len(text) - 1)
    assert kinds[-1] == scanner.CODE


def test_separator_inside_string_is_not_trailing() -> None:
    assert scanner.find_trailing_separator('"a,"') == -1
    assert scanner.last_meaningful_index('"a,"') == 3


def test_trailing_separator_before_comment_and_closing_brace() -> None:
    text = '{\n    "a": 1, // note\n}'
    idx = scanner.find_trailing_separator(text)

    assert idx == text.index(",")
    assert scanner.strip_trailing_separator(text) == '{\n    "a": 1 // note\n}'


def test_trailing_separator_as_last_meaningful_character() -> None:
    text = '{"a": 1, /* x */ '
    assert scanner.find_trailing_separator(text) == text.index(",")


def test_separator_in_comment_is_ignored() -> None:
    text = '{"a": 1 // ,\n}'
    assert scanner.find_trailing_separator(text) == -1
    assert scanner.strip_trailing_separator(text) == text


def test_needs_separator() -> None:
    assert scanner.needs_separator("") is False
    assert scanner.needs_separator("  // only a comment\n") is False
    assert scanner.needs_separator("{\n") is False
    assert scanner.needs_separator('{"a": 1,\n') is False
    assert scanner.needs_separator('{"a": 1 // trailing\n') is True
    assert scanner.needs_separator('{"a": "{"') is True


def test_last_code_index_skips_strings_and_comments() -> None:
    text = '{"a": "}"} // }'
    assert scanner.last_code_index(text, "}") == 9


def test_detect_indent_tabs_spaces_and_default() -> None:
    assert scanner.detect_indent('{\n\t"a": 1\n}') == "\t"
    assert scanner.detect_indent('{\n  "a": 1\n}') == "  "
    assert scanner.detect_indent('{"a": 1}') == scanner.DEFAULT_INDENT
    assert scanner.detect_indent('{\n"a": 1\n}', default="\t") == "\t"


def test_strip_comments_keeps_line_breaks() -> None:
    text = '{ // c\r\n "a": 1 /* x */ }'
    cleaned = scanner.strip_comments(text)

    assert len(cleaned) == len(text)
    assert "\r\n" in cleaned
    assert "//" not in cleaned and "/*" not in cleaned


def test_strip_trailing_commas_only_before_closers() -> None:
    text = '{"a": [1, 2,], "b": ",]", }'
    assert scanner.strip_trailing_commas(text) == '{"a": [1, 2], "b": ",]" }'
