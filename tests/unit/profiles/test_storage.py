from __future__ import annotations

import logging
from pathlib import Path

import pytest

from inherit_profile.core.profiles import (
    find_by_id,
    get_current_profile_name,
    get_custom_profiles,
    read_global_storage,
)
from helpers.io_utils import write_text
from helpers.profiles import PROFILE_ENTRY_PREFIX, build_storage, profiles_menu, write_storage


def test_find_by_id_searches_nested_dicts_and_lists() -> None:
    storage = build_storage({"Work": "abc"}, current="Work")
    found = find_by_id(storage, "submenuitem.Profiles")

    assert found is not None
    assert found["label"] == "Profiles"


def test_find_by_id_returns_first_match_in_document_order() -> None:
    obj = {"first": [{"id": "x", "n": 1}], "second": {"id": "x", "n": 2}}
    assert find_by_id(obj, "x") == {"id": "x", "n": 1}


def test_find_by_id_terminates_on_cycles() -> None:
    node: dict = {"id": "root", "children": []}
    node["children"].append(node)
    node["children"].append({"loop": node["children"]})

    assert find_by_id(node, "missing") is None
    assert find_by_id(node, "root") is node


def test_get_current_profile_name_returns_checked_custom_profile() -> None:
    assert get_current_profile_name(build_storage({"Work": "abc"}, current="Work")) == "Work"


def test_get_current_profile_name_maps_default_entry() -> None:
    assert get_current_profile_name(build_storage({"Work": "abc"}, current="Default")) == "Default"


def test_get_current_profile_name_defaults_without_menu() -> None:
    assert get_current_profile_name({}) == "Default"
    assert get_current_profile_name({"userDataProfiles": [{"name": "Work", "location": "abc"}]}) == "Default"


def test_get_current_profile_name_defaults_without_checked_entry() -> None:
    storage = profiles_menu([{"id": PROFILE_ENTRY_PREFIX + "abc", "label": "Work"}])
    assert get_current_profile_name(storage) == "Default"


def test_get_current_profile_name_falls_back_to_entry_label() -> None:
    storage = profiles_menu(
        [{"id": PROFILE_ENTRY_PREFIX + "unknown-location", "label": "Ghost", "checked": True}]
    )
    assert get_current_profile_name(storage) == "Ghost"


def test_get_current_profile_name_warns_when_submenu_has_no_items(
    caplog: pytest.LogCaptureFixture,
) -> None:
    storage = {"menu": {"id": "submenuitem.Profiles", "label": "Profiles"}}

    with caplog.at_level(logging.WARNING):
        assert get_current_profile_name(storage) == "Default"
    assert "no items" in caplog.text


def test_get_custom_profiles_ignores_malformed_records() -> None:
    storage = {"userDataProfiles": [{"name": "Work", "location": "abc"}, "junk", 3]}
    assert get_custom_profiles(storage) == [{"name": "Work", "location": "abc"}]
    assert get_custom_profiles({"userDataProfiles": {"not": "a list"}}) == []


def test_read_global_storage(tmp_path: Path) -> None:
    assert read_global_storage(tmp_path) == {}

    storage = build_storage({"Work": "abc"}, current="Work")
    write_storage(tmp_path, storage)
    assert read_global_storage(tmp_path) == storage


def test_read_global_storage_corrupted_file_is_empty(tmp_path: Path) -> None:
    write_text(tmp_path / "globalStorage" / "storage.json", "{not json")
    assert read_global_storage(tmp_path) == {}
