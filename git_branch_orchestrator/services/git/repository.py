"""Read-only repository accessor for git-branch-orchestrator."""

import logging
import os
from typing import List, Optional, Union, TYPE_CHECKING

from git_branch_orchestrator.config import Config
from git_branch_orchestrator.constants import LOG_FORMAT
from git_branch_orchestrator.exceptions import GitExecutionError, NotARepositoryError
from git_branch_orchestrator.models.commit import Commit
from git_branch_orchestrator.models.status import GitStatus
from git_branch_orchestrator.services.git.base import GitServiceBase
from git_branch_orchestrator.services.git.executor import GitExecutor
from git_branch_orchestrator.services.git.parsers import (
    parse_ahead_behind,
    parse_log,
    parse_status_porcelain,
)
from git_branch_orchestrator.utils.logging import get_logger

if TYPE_CHECKING:
    from git_branch_orchestrator.services.git.branches import BranchManager
    from git_branch_orchestrator.services.git.conflicts import ConflictDetector
    from git_branch_orchestrator.services.git.events import EventDetector
    from git_branch_orchestrator.services.git.interfaces import CommandRunner
    from git_branch_orchestrator.services.git.worktrees import WorktreeService


class Repository(GitServiceBase):
    """Status, log, diff and branch queries bound to one repository root.

    Use ``Repository.open`` rather than the constructor; it resolves and
    canonicalizes the root before anything else runs.
    """

    @classmethod
    def open(
        cls,
        path: str,
        executor: Optional["CommandRunner"] = None,
        config: Optional[Union[Config, dict]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "Repository":
        """Open the repository containing ``path``.

        Args:
            path: Any directory inside a git working tree
            executor: Command runner; defaults to a GitExecutor
            config: Configuration dictionary or Config object
            logger: Logging sink

        Returns:
            Repository bound to the top-level directory

        Raises:
            NotARepositoryError: ``path`` is not inside a git working tree
            SystemGitNotFoundError: git is not installed
        """
        config = Config.coerce(config)
        log = logger if logger is not None else get_logger(__name__)
        executor = executor or GitExecutor(default_timeout=config.read_timeout, logger=log)
        abs_path = os.path.abspath(path)

        if not os.path.isdir(abs_path):
            raise NotARepositoryError(abs_path)

        try:
            executor.run(abs_path, ["rev-parse", "--git-dir"], timeout=config.read_timeout)
        except GitExecutionError as e:
            raise NotARepositoryError(abs_path) from e

        try:
            toplevel = executor.run(
                abs_path, ["rev-parse", "--show-toplevel"], timeout=config.read_timeout
            )
        except GitExecutionError as e:
            # Inside .git or a bare repository: there is no working tree
            raise NotARepositoryError(abs_path) from e
        if not toplevel:
            raise NotARepositoryError(abs_path)

        root = os.path.realpath(toplevel)
        log.debug(f"Repository opened at {root}")
        return cls(root, executor=executor, config=config, logger=logger)

    def current_branch(self) -> str:
        """Get the name of the checked-out branch.

        Raises:
            DetachedHeadError: HEAD does not point at a branch
        """
        branch = self._current_branch()
        self.logger.debug(f"Current branch: {branch}")
        return branch

    def head(self) -> str:
        """Get the full hash HEAD points at."""
        return self._head()

    def status(self) -> GitStatus:
        """Get the working tree status and upstream divergence.

        A branch without upstream reports ahead=0, behind=0.
        """
        output = self._read("status", "--porcelain")
        status = parse_status_porcelain(output, self.logger)

        try:
            counts = self._read("rev-list", "--count", "--left-right", "@{upstream}...HEAD")
        except GitExecutionError as e:
            self.logger.debug(f"No upstream divergence available: {e.stderr or e}")
        else:
            status.ahead, status.behind = parse_ahead_behind(counts, self.logger)

        self.logger.debug(
            f"Status: {len(status.staged)} staged, {len(status.modified)} modified, "
            f"{len(status.untracked)} untracked, ahead {status.ahead}, behind {status.behind}"
        )
        return status

    def log(self, n: int) -> List[Commit]:
        """Get up to ``n`` most recent commits reachable from HEAD, newest first."""
        if n <= 0:
            return []
        output = self._read("log", f"-{n}", f"--format={LOG_FORMAT}")
        commits = parse_log(output, self.logger)
        self.logger.debug(f"Read {len(commits)} commits (requested {n})")
        return commits

    def diff(self, ref1: str, ref2: str) -> str:
        """Get the unified diff between two references.

        Raises:
            GitExecutionError: A reference does not resolve
        """
        diff = self._read("diff", ref1, ref2)
        self.logger.debug(f"Diff {ref1}..{ref2}: {len(diff)} bytes")
        return diff

    def is_clean(self) -> bool:
        """Check whether nothing is staged, modified or untracked."""
        clean = self.status().is_clean
        self.logger.debug(f"Working tree clean: {clean}")
        return clean

    def branches(self) -> "BranchManager":
        """Create a branch manager bound to this repository."""
        from git_branch_orchestrator.services.git.branches import BranchManager

        return BranchManager(self.root, self.executor, self.config, self._logger_override)

    def worktrees(self) -> "WorktreeService":
        """Create a worktree service bound to this repository."""
        from git_branch_orchestrator.services.git.worktrees import WorktreeService

        return WorktreeService(self.root, self.executor, self.config, self._logger_override)

    def conflicts(self) -> "ConflictDetector":
        """Create a conflict detector bound to this repository."""
        from git_branch_orchestrator.services.git.conflicts import ConflictDetector

        return ConflictDetector(self.root, self.executor, self.config, self._logger_override)

    def events(self, poll_interval: Optional[float] = None) -> "EventDetector":
        """Create a change-event detector bound to this repository."""
        from git_branch_orchestrator.services.git.events import EventDetector

        return EventDetector(
            self.root, self.executor, self.config, self._logger_override,
            poll_interval=poll_interval,
        )
