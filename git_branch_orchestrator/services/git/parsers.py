"""Parsers for git porcelain output."""

import logging
import os
from datetime import datetime
from typing import List, Optional, Tuple

from git_branch_orchestrator.constants import HEADS_PREFIX, LOG_FIELD_SEPARATOR, ZERO_TIME
from git_branch_orchestrator.models.commit import Commit
from git_branch_orchestrator.models.status import GitStatus
from git_branch_orchestrator.models.worktree import WorktreeInfo
from git_branch_orchestrator.utils.logging import get_logger

logger = get_logger(__name__)


def _append_unique(paths: List[str], path: str) -> None:
    if path not in paths:
        paths.append(path)


def _unquote_path(path: str) -> str:
    """Strip the C-style quoting git applies to unusual paths."""
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        inner = path[1:-1]
        try:
            return inner.encode("latin-1", "backslashreplace").decode("unicode_escape").encode(
                "latin-1"
            ).decode("utf-8")
        except (UnicodeDecodeError, UnicodeEncodeError):
            return inner
    return path


def parse_status_porcelain(output: str, log: Optional[logging.Logger] = None) -> GitStatus:
    """Parse `git status --porcelain` into staged/modified/untracked lists.

    Format: XY path (X = index, Y = worktree), ``old -> new`` for renames.

    Args:
        output: Raw porcelain output
        log: Logger for skipped lines

    Returns:
        GitStatus with ahead/behind left at zero
    """
    log = log or logger
    status = GitStatus()

    for line in output.split("\n"):
        if not line:
            continue
        if len(line) < 3:
            log.debug(f"Skipping short status line: {line!r}")
            continue

        index_status = line[0]
        worktree_status = line[1]
        path = line[3:]

        # Renames and copies: keep the destination only
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        path = _unquote_path(path)

        if index_status == "?" and worktree_status == "?":
            _append_unique(status.untracked, path)
            continue

        if index_status not in (" ", "?"):
            _append_unique(status.staged, path)
        if worktree_status in ("M", "D"):
            _append_unique(status.modified, path)

    return status


def parse_ahead_behind(output: str, log: Optional[logging.Logger] = None) -> Tuple[int, int]:
    """Parse `rev-list --count --left-right @{upstream}...HEAD` output.

    Returns:
        Tuple of (ahead, behind). Fields that can't be parsed are logged and
        reported as zero.
    """
    log = log or logger
    parts = output.strip().split("\t")
    if len(parts) != 2:
        log.debug(f"Unexpected ahead/behind format: {output!r}")
        return 0, 0

    counts = []
    for label, value in (("behind", parts[0]), ("ahead", parts[1])):
        try:
            count = int(value)
            if count < 0:
                raise ValueError(f"negative count {count}")
        except ValueError as e:
            log.warning(f"Could not parse {label} count {value!r}: {e}")
            count = 0
        counts.append(count)

    behind, ahead = counts
    return ahead, behind


def parse_commit_date(value: str) -> datetime:
    """Parse a strict ISO-8601 author date, falling back to ZERO_TIME."""
    value = value.strip()
    # fromisoformat only accepts a trailing Z from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.debug(f"Unparseable commit date {value!r}")
        return ZERO_TIME


def parse_log(output: str, log: Optional[logging.Logger] = None) -> List[Commit]:
    """Parse `git log` output written with LOG_FORMAT."""
    log = log or logger
    commits = []
    for line in output.split("\n"):
        if not line:
            continue
        parts = line.split(LOG_FIELD_SEPARATOR, 3)
        if len(parts) < 4:
            log.debug(f"Skipping malformed log line: {line!r}")
            continue
        sha, author, date, subject = parts
        commits.append(
            Commit(hash=sha, author=author, date=parse_commit_date(date), message=subject)
        )
    return commits


def parse_branch_list(output: str) -> List[str]:
    """Parse one branch name per line, dropping blanks."""
    return [line.strip() for line in output.split("\n") if line.strip()]


def parse_merged_branches(output: str) -> List[str]:
    """Parse `git branch --merged` output, stripping the current/worktree markers."""
    names = []
    for line in output.split("\n"):
        line = line.strip()
        if line.startswith(("* ", "+ ")):
            line = line[2:].strip()
        if line:
            names.append(line)
    return names


def normalize_path(path: str) -> str:
    """Normalize a filesystem path for comparisons on this host."""
    return os.path.normpath(os.path.abspath(path))


def _build_worktree(entry: dict, is_main: bool) -> WorktreeInfo:
    path = entry["path"]
    return WorktreeInfo(
        path=path,
        branch_name=entry.get("branch", ""),
        commit_sha=entry.get("HEAD", ""),
        is_main=is_main,
        is_orphaned=not os.path.exists(path),
        is_locked=entry.get("locked", False),
        is_prunable=entry.get("prunable", False),
    )


def parse_worktree_porcelain(output: str) -> List[WorktreeInfo]:
    """Parse `git worktree list --porcelain`.

    Format (blank line between worktrees)::

        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name      (or: detached)

    Paths are canonicalized with symlinks resolved.
    """
    worktree_list: List[WorktreeInfo] = []
    current_worktree: dict = {}

    for line in output.split("\n"):
        line = line.rstrip("\r")

        if not line.strip():
            # Empty line marks end of worktree entry
            if current_worktree.get("path"):
                worktree_list.append(_build_worktree(current_worktree, not worktree_list))
            current_worktree = {}
            continue

        if line.startswith("worktree "):
            if current_worktree.get("path"):
                worktree_list.append(_build_worktree(current_worktree, not worktree_list))
            current_worktree = {"path": os.path.realpath(line.split(" ", 1)[1])}
        elif line.startswith("HEAD "):
            current_worktree["HEAD"] = line.split(" ", 1)[1]
        elif line.startswith("branch "):
            branch_ref = line.split(" ", 1)[1]
            if branch_ref.startswith(HEADS_PREFIX):
                current_worktree["branch"] = branch_ref[len(HEADS_PREFIX):]
            else:
                current_worktree["branch"] = ""
        elif line == "detached":
            current_worktree["branch"] = ""
        elif line == "locked" or line.startswith("locked "):
            current_worktree["locked"] = True
        elif line == "prunable" or line.startswith("prunable "):
            current_worktree["prunable"] = True

    # Handle last entry if no trailing blank line
    if current_worktree.get("path"):
        worktree_list.append(_build_worktree(current_worktree, not worktree_list))

    return worktree_list
