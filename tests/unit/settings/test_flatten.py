from __future__ import annotations

import logging
from pathlib import Path

import pytest

from inherit_profile.core.settings import (
    collect_profile_settings,
    flatten_settings,
    merge_flattened_settings,
    read_profile_settings,
)
from helpers.io_utils import write_json, write_text


def test_flatten_settings_produces_dotted_leaves() -> None:
    settings = {
        "editor": {"fontSize": 14, "tabSize": 2},
        "files.autoSave": "off",
        "rulers": [80, {"column": 120}],
        "empty": {},
    }
    assert flatten_settings(settings) == {
        "editor.fontSize": 14,
        "editor.tabSize": 2,
        "files.autoSave": "off",
        "rulers": [80, {"column": 120}],
    }


def test_flatten_settings_output_is_sorted() -> None:
    flat = flatten_settings({"z": 1, "a": {"y": 2, "b": 3}})
    assert list(flat) == ["a.b", "a.y", "z"]


def test_flatten_settings_is_idempotent() -> None:
    flat = flatten_settings({"a": {"b": {"c": 1}}, "d": None})
    assert flatten_settings(flat) == flat


def test_flatten_settings_keeps_leaves_with_dotted_keys() -> None:
    settings = {
        "editor.codeActionsOnSave": {
            "source.fixAll": "explicit",
            "source.fixAll.eslint": "explicit",
        },
        "files.exclude": {"**/*.js": True, "**/*.js.map": True},
    }
    assert flatten_settings(settings) == {
        "editor.codeActionsOnSave.source.fixAll": "explicit",
        "editor.codeActionsOnSave.source.fixAll.eslint": "explicit",
        "files.exclude.**/*.js": True,
        "files.exclude.**/*.js.map": True,
    }


def test_flatten_settings_with_parent_key() -> None:
    assert flatten_settings({"b": 1}, parent_key="a") == {"a.b": 1}


def test_flatten_settings_skips_cycles(caplog: pytest.LogCaptureFixture) -> None:
    loop: dict = {"x": 1}
    loop["self"] = loop

    with caplog.at_level(logging.WARNING):
        flat = flatten_settings({"top": 0, "loop": loop})
    assert flat == {"loop.x": 1, "top": 0}
    assert "cyclic" in caplog.text


def test_merge_flattened_settings_source_wins() -> None:
    target = {"editor.fontSize": 14, "files.autoSave": "off"}
    source = {"editor.fontSize": 16}
    assert merge_flattened_settings(target, source) == {"editor.fontSize": 16, "files.autoSave": "off"}


def test_merge_flattened_settings_path_collisions_keep_latest(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert merge_flattened_settings({"a.b": 1, "a.c": 2}, {"a": 3}) == {"a": 3}
        assert merge_flattened_settings({"a": 3}, {"a.b": 1}) == {"a.b": 1}
    assert "Setting `a.b` is replaced by `a`" in caplog.text
    assert "Setting `a` is replaced by `a.b`" in caplog.text


def test_merge_flattened_settings_keeps_dotted_siblings_of_one_profile() -> None:
    source = {
        "editor.codeActionsOnSave.source.fixAll": "explicit",
        "editor.codeActionsOnSave.source.fixAll.eslint": "explicit",
    }
    assert merge_flattened_settings({"editor.fontSize": 14}, source) == {"editor.fontSize": 14, **source}
    assert merge_flattened_settings(source, source) == source


def test_read_profile_settings_missing_file_is_empty(tmp_path: Path) -> None:
    assert read_profile_settings(tmp_path) == {}


def test_read_profile_settings_flattens_jsonc(tmp_path: Path) -> None:
    write_text(tmp_path / "settings.json", '{\n  // c\n  "editor": {"wordWrap": "on"},\n}\n')
    assert read_profile_settings(tmp_path) == {"editor.wordWrap": "on"}


def test_collect_profile_settings_later_profiles_win(tmp_path: Path) -> None:
    write_json(tmp_path / "a" / "settings.json", {"k": 1, "only": {"a": True}})
    write_json(tmp_path / "b" / "settings.json", {"k": 2})
    profile_map = {"A": tmp_path / "a", "B": tmp_path / "b"}

    assert collect_profile_settings(["A", "B"], profile_map) == {"k": 2, "only.a": True}
    assert collect_profile_settings(["B", "A"], profile_map) == {"k": 1, "only.a": True}


def test_collect_profile_settings_skips_unknown_profiles(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    write_json(tmp_path / "a" / "settings.json", {"k": 1})

    with caplog.at_level(logging.WARNING):
        result = collect_profile_settings(["Missing", "A"], {"A": tmp_path / "a"})
    assert result == {"k": 1}
    assert "Failed to collect settings for profile Missing: Profile does not exist." in caplog.text


def test_collect_profile_settings_no_parents() -> None:
    assert collect_profile_settings([], {}) == {}


def test_flatten_settings_keeps_one_key_per_leaf() -> None:
    tree = {"a": {"b": 1, "c": {"d": [1, 2], "e": None}}, "f": "x", "g": {"h": {"i": False}}}
    assert len(flatten_settings(tree)) == 5


def test_collect_profile_settings_keeps_dotted_leaves(tmp_path: Path) -> None:
    write_json(
        tmp_path / "a" / "settings.json",
        {"editor.codeActionsOnSave": {"source.fixAll": "explicit", "source.fixAll.eslint": "explicit"}},
    )

    result = collect_profile_settings(["A"], {"A": tmp_path / "a"})
    assert len(result) == 2
