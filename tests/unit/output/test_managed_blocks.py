from __future__ import annotations

import logging

import pytest

from inherit_profile.core.jsonc import parse_jsonc
from inherit_profile.core.output import (
    END_MARKER,
    START_MARKER,
    WARNING_LINES,
    apply_managed_block,
    has_managed_block,
    insert_managed_block,
    remove_managed_block,
    render_managed_block,
)

DOC = '{\n    "c": 3\n}\n'
DOC_WITH_BLOCK = (
    "{\n"
    '    "c": 3,\n'
    f"    {START_MARKER}\n"
    '    "a.b": 1\n'
    f"    {END_MARKER}\n"
    "}\n"
)


def test_insert_managed_block_before_closing_brace() -> None:
    result = insert_managed_block(DOC, {"a.b": 1}, warning=False)

    assert result.changed is True
    assert result.action == "inserted"
    assert result.updated_text == DOC_WITH_BLOCK


def test_remove_managed_block_restores_original_text() -> None:
    result = remove_managed_block(DOC_WITH_BLOCK)

    assert result.action == "removed"
    assert result.updated_text == DOC


def test_apply_managed_block_is_idempotent() -> None:
    first = apply_managed_block(DOC, {"a.b": 1, "x": [1, 2]})
    second = apply_managed_block(first.updated_text, {"a.b": 1, "x": [1, 2]})

    assert first.action == "inserted"
    assert second.changed is False
    assert second.action == "unchanged"
    assert second.updated_text == first.updated_text
    assert first.updated_text.count(START_MARKER) == 1


def test_apply_managed_block_replaces_existing_block() -> None:
    result = apply_managed_block(DOC_WITH_BLOCK, {"z": False}, warning=False)

    assert result.action == "replaced"
    assert '"a.b"' not in result.updated_text
    assert parse_jsonc(result.updated_text) == {"c": 3, "z": False}


def test_apply_managed_block_empty_overlay_removes_block() -> None:
    result = apply_managed_block(DOC_WITH_BLOCK, {})
    assert result.action == "removed"
    assert result.updated_text == DOC


def test_apply_managed_block_empty_overlay_without_block_is_noop() -> None:
    result = apply_managed_block(DOC, {})
    assert result.changed is False
    assert result.updated_text == DOC


def test_inserted_document_stays_valid_jsonc() -> None:
    text = '{\n    "c": 3, // own trailing comma\n}\n'
    result = apply_managed_block(text, {"a": {"nested": True}, "s": "ü"})

    assert parse_jsonc(result.updated_text) == {"c": 3, "a": {"nested": True}, "s": "ü"}
    assert '"s": "ü"' in result.updated_text


def test_warning_lines_follow_start_marker() -> None:
    block = render_managed_block({"a": 1}, indent="  ")
    lines = block.splitlines()

    assert lines[0] == f"  {START_MARKER}"
    assert lines[1:3] == [f"  {line}" for line in WARNING_LINES]
    assert lines[-1] == f"  {END_MARKER}"


def test_render_managed_block_separates_entries() -> None:
    block = render_managed_block({"a": 1, "b": "two"}, indent="\t", warning=False)
    assert block == f'\t{START_MARKER}\n\t"a": 1,\n\t"b": "two"\n\t{END_MARKER}\n'


def test_insert_into_empty_document_synthesizes_object() -> None:
    result = insert_managed_block("", {"x": 1}, warning=False)
    assert result.updated_text == (
        "{\n"
        f"    {START_MARKER}\n"
        '    "x": 1\n'
        f"    {END_MARKER}\n"
        "}\n"
    )


def test_insert_into_empty_object() -> None:
    result = insert_managed_block("{}", {"x": 1}, warning=False)
    assert parse_jsonc(result.updated_text) == {"x": 1}
    assert result.updated_text.startswith("{\n")


def test_single_line_document_is_idempotent() -> None:
    first = apply_managed_block('{"c": 3}', {"a": 1}, warning=False)
    second = apply_managed_block(first.updated_text, {"a": 1}, warning=False)

    assert first.updated_text == f'{{"c": 3,\n    {START_MARKER}\n    "a": 1\n    {END_MARKER}\n}}'
    assert second.changed is False


def test_tab_indented_document_uses_tabs() -> None:
    result = apply_managed_block('{\n\t"c": 3\n}\n', {"a": 1}, warning=False)
    assert f"\t{START_MARKER}\n" in result.updated_text
    assert '\t"a": 1\n' in result.updated_text


def test_crlf_line_endings_are_preserved() -> None:
    text = '{\r\n    "c": 3\r\n}\r\n'
    result = apply_managed_block(text, {"a": 1})

    assert "\n" not in result.updated_text.replace("\r\n", "")
    assert remove_managed_block(result.updated_text).updated_text == text


def test_only_start_marker_leaves_text_untouched(caplog: pytest.LogCaptureFixture) -> None:
    text = '{\n    "c": 3,\n' f"    {START_MARKER}\n" '    "a": 1\n}\n'

    with caplog.at_level(logging.WARNING):
        result = remove_managed_block(text)
    assert result.changed is False
    assert result.updated_text == text
    assert "start marker" in caplog.text


def test_only_end_marker_leaves_text_untouched(caplog: pytest.LogCaptureFixture) -> None:
    text = '{\n    "c": 3\n' f"    {END_MARKER}\n" "}\n"

    with caplog.at_level(logging.WARNING):
        result = remove_managed_block(text)
    assert result.changed is False
    assert "end marker" in caplog.text


def test_markers_out_of_order_are_ignored() -> None:
    text = "{\n" f"    {END_MARKER}\n" '    "a": 1\n' f"    {START_MARKER}\n" "}\n"
    assert remove_managed_block(text).changed is False
    assert has_managed_block(text) is False


def test_marker_text_inside_a_string_is_not_a_marker() -> None:
    text = '{\n    "note": "' + START_MARKER + '"\n}\n'
    assert has_managed_block(text) is False
    assert remove_managed_block(text).updated_text == text


def test_remove_without_block_is_noop() -> None:
    result = remove_managed_block(DOC)
    assert result.changed is False
    assert result.action == "unchanged"


def test_remove_restores_missing_closing_brace() -> None:
    text = '{\n    "c": 3,\n' f"    {START_MARKER}\n" '    "a": 1\n' f"    {END_MARKER}\n"
    result = remove_managed_block(text)
    assert parse_jsonc(result.updated_text) == {"c": 3}
