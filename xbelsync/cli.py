from __future__ import annotations

import argparse
from pathlib import Path
from typing import List

import yaml

from . import __version__
from .address import parse_address
from .config import Settings, default_config_path, load_settings, write_sample_config
from .errors import PushWithoutRemote, XbelError
from .git_sync import commit_and_push, setup_repo
from .log import LogConfig, get_logger, level_from_flags, setup_logging
from .parse_xbel import load_xbel
from .view import find_items, found_summary, render_tree
from .writer_xbel import write_xbel
from .xbel import describe_item

log = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    config_path = args.config
    if args.cmd == "init" and config_path and not Path(config_path).exists():
        # init creates this file, nothing to read yet.
        config_path = None
    try:
        cfg = load_settings(config_path)
    except (OSError, yaml.YAMLError) as e:
        setup_logging(LogConfig(no_color=args.no_color))
        log.error("Cannot load config file %s: %s", config_path, e)
        return 1
    _override_settings(cfg, args)
    level = level_from_flags(args.log_level or cfg.log_level, args.verbose, args.quiet)
    setup_logging(LogConfig(level=level, no_color=cfg.no_color))
    log.debug("settings: %s", cfg)

    handlers = {
        "init": _cmd_init,
        "print": _cmd_print,
        "add": _cmd_add,
        "rm": _cmd_rm,
        "find": _cmd_find,
    }
    try:
        return handlers[args.cmd](args, cfg)
    except XbelError as e:
        log.error("Error: %s", e)
        return 1


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="xbelsync",
        description="Manage Floccus XBEL bookmarks stored in a git repository.",
    )
    p.add_argument("-V", "--version", action="version", version=f"xbelsync {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (default: $XBELSYNC_CONFIG or ~/.config/xbelsync/config.yaml).")
    p.add_argument("-r", "--repository", dest="repository_folder", default=None, help="Local git repository path.")
    p.add_argument("-g", "--git", dest="repository_url", default=None, help="Git repository url, e.g. https://github.com/you/bookmarks.git")
    p.add_argument("-n", "--name", dest="repository_name", default=None, help="Repository local name (default: bookmarks).")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable).")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less logging (repeatable).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init", help="Write a config file for xbelsync.")
    sub.add_parser("print", help="Print bookmarks as a tree.")

    add = sub.add_parser("add", help="Add a bookmark.")
    add.add_argument("-b", "--bookmark", dest="url", required=True, help="Url to add.")
    add.add_argument("-t", "--title", required=True, help="Bookmark title.")
    add.add_argument(
        "-u",
        "--under",
        default="root",
        help="Where to add: root, <id>, before=<id>, after=<id>, prepend=<id>, append=<id> or a/title/path.",
    )
    _add_push_flags(add)

    rm = sub.add_parser("rm", help="Remove a bookmark or folder.")
    rm.add_argument("-i", "--item", required=True, help="Item to remove: <id> or a/title/path.")
    rm.add_argument("--dry-run", action="store_true", help="Do not remove, just report what would be removed.")
    _add_push_flags(rm)

    find = sub.add_parser("find", help="Find bookmarks or folders.")
    find.add_argument("find", help="Text to look for.")
    where = find.add_mutually_exclusive_group()
    where.add_argument("-t", "--title", action="store_true", help="Only search titles.")
    where.add_argument("-u", "--url", action="store_true", help="Only search urls.")
    kind = find.add_mutually_exclusive_group()
    kind.add_argument("-f", "--folder", action="store_true", help="Only folders.")
    kind.add_argument("-b", "--bookmark", action="store_true", help="Only bookmarks.")
    return p


def _add_push_flags(sp: argparse.ArgumentParser) -> None:
    g = sp.add_mutually_exclusive_group()
    g.add_argument("--disable-push", dest="push", action="store_false", default=None, help="Change the file locally, do not git push.")
    g.add_argument("--push", dest="push", action="store_true", default=None, help="Commit and push the change.")


def _override_settings(cfg: Settings, args) -> None:
    # Command line beats config file beats environment.
    for key in ("repository_folder", "repository_url", "repository_name"):
        v = getattr(args, key, None)
        if v:
            setattr(cfg, key, v)
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True


def _push_enabled(args, cfg: Settings) -> bool:
    push = getattr(args, "push", None)
    if push is None:
        push = not cfg.disable_push
    if push and not (cfg.git_enable and cfg.repository_url):
        raise PushWithoutRemote()
    return bool(push)


def _prepare_repo(cfg: Settings) -> Path:
    folder = cfg.repository_path()
    log.info("repository_folder: %s", folder)
    if cfg.git_enable:
        setup_repo(folder, url=cfg.repository_url, branch=cfg.git_branch, ssh_key=cfg.repository_ssh_key)
    return folder


def _cmd_init(args, cfg: Settings) -> int:
    path = Path(args.config) if args.config else default_config_path()
    if not cfg.repository_url:
        log.error("Please provide a git repository url (use xbelsync --help for more information)")
        return 1
    try:
        write_sample_config(path, repository_url=cfg.repository_url, ssh_key=cfg.repository_ssh_key)
    except FileExistsError as e:
        log.error("Error: %s", e)
        return 1
    except OSError as e:
        log.error("Error while writing config file %s: %s", path, e)
        return 1
    log.info("Successfully written config file: %s", path)
    return 0


def _cmd_print(args, cfg: Settings) -> int:
    _prepare_repo(cfg)
    xbel = load_xbel(cfg.bookmarks_path())
    for line in render_tree(xbel):
        print(line)
    return 0


def _cmd_add(args, cfg: Settings) -> int:
    push = _push_enabled(args, cfg)
    _prepare_repo(cfg)
    path = cfg.bookmarks_path()
    xbel = load_xbel(path)

    address = parse_address(args.under)
    bookmark = xbel.add_bookmark(address, args.url, args.title)
    log.info("Added bookmark %s (%s) under %s", bookmark.id, bookmark.href, address)

    write_xbel(xbel, path)
    if push:
        commit_and_push(path.parent, cfg.bookmarks_file, branch=cfg.git_branch, ssh_key=cfg.repository_ssh_key)
    return 0


def _cmd_rm(args, cfg: Settings) -> int:
    push = _push_enabled(args, cfg)
    _prepare_repo(cfg)
    path = cfg.bookmarks_path()
    xbel = load_xbel(path)

    address = parse_address(args.item)
    removed = xbel.remove(address, dry_run=args.dry_run)
    if args.dry_run:
        print(f"[Dry run] removing {describe_item(removed)}")
        return 0
    log.info("Removed %s", describe_item(removed))

    write_xbel(xbel, path)
    if push:
        commit_and_push(path.parent, cfg.bookmarks_file, branch=cfg.git_branch, ssh_key=cfg.repository_ssh_key)
    return 0


def _cmd_find(args, cfg: Settings) -> int:
    xbel = load_xbel(cfg.bookmarks_path())
    kind = "folder" if args.folder else "bookmark" if args.bookmark else "all"
    where = "title" if args.title else "url" if args.url else "all"

    items = find_items(xbel, args.find, kind=kind, where=where)
    if not items:
        print(found_summary(0, kind))
        return 0
    print(found_summary(len(items), kind) + ":")
    for idx, item in enumerate(items):
        print(f"{idx}- {describe_item(item)}")
    return 0
