from __future__ import annotations

from inherit_profile.core.settings import compute_inherited_settings, subtract_settings


def test_subtract_settings_removes_present_keys() -> None:
    assert subtract_settings({"a": 1, "b": 2}, {"a": 1}) == {"b": 2}


def test_subtract_settings_is_decided_by_key_presence() -> None:
    # A different own value still blocks inheritance of the key.
    assert subtract_settings({"a": 1}, {"a": 99}) == {}


def test_subtract_settings_output_is_sorted() -> None:
    result = subtract_settings({"z": 1, "m": 2, "a": 3}, {"m": 0})
    assert list(result) == ["a", "z"]


def test_compute_inherited_settings() -> None:
    parents = {"a.b": 1, "c": 2}
    own = {"c": 3}
    assert compute_inherited_settings(parents, own) == {"a.b": 1}
    assert compute_inherited_settings({}, own) == {}
    assert compute_inherited_settings(parents, {}) == parents
