import shutil
import sys
from pathlib import Path

import pytest

# Allow `import xbelsync` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def bank_file() -> Path:
    return FIXTURES / "bookmarks_bank.xbel"


@pytest.fixture
def bank_xbel(bank_file):
    from xbelsync.parse_xbel import load_xbel

    return load_xbel(bank_file)


@pytest.fixture
def repo_dir(tmp_path: Path, bank_file: Path) -> Path:
    """A local bookmarks repository holding the bank fixture."""
    repo = tmp_path / "bookmarks"
    repo.mkdir()
    shutil.copy(bank_file, repo / "bookmarks.xbel")
    return repo


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch):
    """Tests must never read or write the real user config."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    for name in (
        "XBELSYNC_CONFIG",
        "XBELSYNC_REPOSITORY_URL",
        "XBELSYNC_REPOSITORY_FOLDER",
        "XBELSYNC_DISABLE_PUSH",
        "XBELSYNC_GIT_ENABLE",
    ):
        monkeypatch.delenv(name, raising=False)
