from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .errors import GitSyncError
from .log import get_logger

log = get_logger(__name__)

COMMIT_MESSAGE = "Floccus bookmarks update"


def _git_env(ssh_key: Optional[str]) -> Optional[Dict[str, str]]:
    if not ssh_key:
        return None
    env = dict(os.environ)
    env["GIT_SSH_COMMAND"] = f"ssh -i {ssh_key} -o IdentitiesOnly=yes"
    return env


def _run(args: List[str], *, cwd: Optional[Path] = None, ssh_key: Optional[str] = None) -> str:
    cmd = ["git", *args]
    log.debug("Running: %s", " ".join(cmd))
    try:
        r = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            env=_git_env(ssh_key),
        )
    except OSError as e:
        raise GitSyncError(f"Cannot run git: {e}") from e
    if r.returncode != 0:
        msg = (r.stderr or r.stdout or "").strip()
        raise GitSyncError(f"git {args[0]} failed ({r.returncode}): {msg}")
    return r.stdout


def clone(url: str, folder: Path, *, ssh_key: Optional[str] = None) -> None:
    folder.parent.mkdir(parents=True, exist_ok=True)
    _run(["clone", url, str(folder)], ssh_key=ssh_key if _is_ssh(url) else None)
    log.info("Cloned %s into %s", url, folder)


def pull(folder: Path, *, branch: str = "main", ssh_key: Optional[str] = None) -> None:
    """Fetch ``branch`` from origin and merge it (fast-forward when possible)."""
    _run(["fetch", "--tags", "origin", branch], cwd=folder, ssh_key=ssh_key)
    _run(["merge", "--no-edit", "FETCH_HEAD"], cwd=folder)
    head = _run(["log", "-1", "--format=%h %s"], cwd=folder).strip()
    log.info("Repository at commit: %s", head)


def commit_and_push(
    folder: Path,
    file_to_add: str,
    *,
    branch: str = "main",
    ssh_key: Optional[str] = None,
    message: str = COMMIT_MESSAGE,
) -> None:
    status = _run(["status", "--porcelain", "--", file_to_add], cwd=folder).strip()
    log.info("status: %s", status or "unchanged")
    _run(["add", "--", file_to_add], cwd=folder)
    _run(["commit", "-m", message], cwd=folder)
    _run(["push", "origin", f"refs/heads/{branch}:refs/heads/{branch}"], cwd=folder, ssh_key=ssh_key)
    log.info("Pushed %s to origin/%s", file_to_add, branch)


def setup_repo(
    folder: Path,
    *,
    url: Optional[str],
    branch: str = "main",
    ssh_key: Optional[str] = None,
) -> None:
    """Make sure ``folder`` holds an up to date checkout.

    A missing folder is cloned from ``url``; an existing one is pulled when a
    url is configured and left alone otherwise.
    """
    if not folder.exists():
        if not url:
            raise GitSyncError(f"Repository folder {folder} does not exist; please provide a git repository url")
        clone(url, folder, ssh_key=ssh_key)
        return
    if url:
        pull(folder, branch=branch, ssh_key=ssh_key)
    else:
        log.debug("No repository url configured; skipping pull in %s", folder)


def _is_ssh(url: str) -> bool:
    return url.startswith("ssh://") or ("@" in url and "://" not in url)
