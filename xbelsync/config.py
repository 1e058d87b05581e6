from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

APP_NAME = "xbelsync"
CONFIG_ENV = "XBELSYNC_CONFIG"

SAMPLE_CONFIG = {
    "git": {
        "enable": True,
        "repository_url": "https://github.com/__GITHUB_USER__/__GIT_REPO_NAME__.git",
        "repository_name": "bookmarks",
        "repository_ssh_key": "",
        "disable_push": True,
    }
}


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None or v == "":
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_str(name: str, default: Optional[str]) -> Optional[str]:
    v = os.getenv(name)
    return default if v is None or v == "" else v


def _xdg_dir(env_name: str, fallback: str) -> Path:
    base = os.getenv(env_name)
    if base:
        return Path(base)
    return Path.home() / fallback


@dataclass
class Settings:
    # Git
    git_enable: bool = True
    repository_url: Optional[str] = None
    repository_name: str = "bookmarks"
    repository_folder: Optional[str] = None
    repository_ssh_key: Optional[str] = None
    git_branch: str = "main"
    disable_push: bool = True

    # Document
    bookmarks_file: str = "bookmarks.xbel"

    # Logging / UX
    log_level: str = "INFO"
    no_color: bool = False

    @staticmethod
    def from_env() -> "Settings":
        s = Settings()
        s.git_enable = _env_bool("XBELSYNC_GIT_ENABLE", s.git_enable)
        s.repository_url = _env_str("XBELSYNC_REPOSITORY_URL", s.repository_url)
        s.repository_name = _env_str("XBELSYNC_REPOSITORY_NAME", s.repository_name)
        s.repository_folder = _env_str("XBELSYNC_REPOSITORY_FOLDER", s.repository_folder)
        s.repository_ssh_key = _env_str("XBELSYNC_REPOSITORY_SSH_KEY", s.repository_ssh_key)
        s.git_branch = _env_str("XBELSYNC_GIT_BRANCH", s.git_branch)
        s.disable_push = _env_bool("XBELSYNC_DISABLE_PUSH", s.disable_push)
        s.bookmarks_file = _env_str("XBELSYNC_BOOKMARKS_FILE", s.bookmarks_file)
        s.log_level = _env_str("XBELSYNC_LOG_LEVEL", s.log_level)
        s.no_color = _env_bool("XBELSYNC_NO_COLOR", s.no_color)
        return s

    @staticmethod
    def from_file(path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        s = Settings.from_env()
        s.apply(data)
        return s

    def apply(self, data: Dict[str, Any]) -> None:
        """Overlay a parsed config mapping.

        Top-level keys map onto fields directly. A ``git:`` section is only
        honoured when its ``enable`` flag is true.
        """
        git = data.get("git")
        for k, v in data.items():
            if k != "git" and hasattr(self, k):
                setattr(self, k, v)
        if isinstance(git, dict):
            enabled = bool(git.get("enable", True))
            self.git_enable = enabled
            if not enabled:
                return
            for k, v in git.items():
                if k == "enable":
                    continue
                if k == "branch":
                    k = "git_branch"
                if hasattr(self, k) and v not in (None, ""):
                    setattr(self, k, v)

    def repository_path(self) -> Path:
        if self.repository_folder:
            return Path(self.repository_folder).expanduser()
        return _xdg_dir("XDG_DATA_HOME", ".local/share") / APP_NAME / self.repository_name

    def bookmarks_path(self) -> Path:
        return self.repository_path() / self.bookmarks_file


def default_config_path() -> Path:
    env = os.getenv(CONFIG_ENV)
    if env:
        return Path(env)
    return _xdg_dir("XDG_CONFIG_HOME", ".config") / APP_NAME / "config.yaml"


def load_settings(config_path: Optional[str]) -> Settings:
    if config_path:
        return Settings.from_file(Path(config_path))
    default = default_config_path()
    if default.exists():
        return Settings.from_file(default)
    return Settings.from_env()


def write_sample_config(path: Path, *, repository_url: str, ssh_key: Optional[str] = None) -> Dict[str, Any]:
    if path.exists():
        raise FileExistsError(f"Config path ({path}) already exists")
    data = {"git": dict(SAMPLE_CONFIG["git"])}
    data["git"]["repository_url"] = repository_url
    if ssh_key:
        data["git"]["repository_ssh_key"] = ssh_key
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return data
