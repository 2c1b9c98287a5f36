import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'inherit_profile' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from inherit_profile.core.config import InheritanceConfig
from inherit_profile.core.logs import reset_logging_for_tests
from inherit_profile.data import clear_caches
from helpers.io_utils import write_json
from helpers.profiles import build_storage, profile_dir, write_storage


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point user configuration at an empty directory and drop stray env overrides."""
    import os

    for key in list(os.environ):
        if key.startswith("INHERIT_PROFILE_"):
            monkeypatch.delenv(key, raising=False)
    config_root = tmp_path / "inherit-profile-home"
    monkeypatch.setenv("INHERIT_PROFILE_CONFIG_DIR", str(config_root))
    yield config_root
    reset_logging_for_tests()
    clear_caches()


@pytest.fixture
def user_dir(tmp_path: Path) -> Path:
    """A user directory with a Default and a Work profile; Work is active.

    Default defines ``a.b = 1`` and ``c = 2``; Work defines ``c = 3``.
    """
    root = tmp_path / "Code" / "User"
    write_storage(root, build_storage({"Work": "-5f3a1b"}, current="Work"))
    write_json(root / "settings.json", {"a": {"b": 1}, "c": 2})
    write_json(profile_dir(root, "-5f3a1b") / "settings.json", {"c": 3})
    return root


@pytest.fixture
def work_settings_path(user_dir: Path) -> Path:
    return profile_dir(user_dir, "-5f3a1b") / "settings.json"


@pytest.fixture
def inherit_config(user_dir: Path) -> InheritanceConfig:
    return InheritanceConfig(parents=("Default",), user_dir=user_dir)
