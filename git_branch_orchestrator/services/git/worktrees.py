"""Worktree operations service for git-branch-orchestrator."""

import os
from typing import List, Optional

from git_branch_orchestrator.constants import SYNC_STRATEGIES
from git_branch_orchestrator.exceptions import (
    GitExecutionError,
    WorktreeDirtyError,
    WorktreeNotFoundError,
    WorktreePathExistsError,
)
from git_branch_orchestrator.models.status import GitStatus
from git_branch_orchestrator.models.worktree import WorktreeInfo
from git_branch_orchestrator.services.git.base import GitServiceBase
from git_branch_orchestrator.services.git.branches import validate_branch_name
from git_branch_orchestrator.services.git.parsers import (
    normalize_path,
    parse_merged_branches,
    parse_status_porcelain,
    parse_worktree_porcelain,
)

# git stderr fragments for outcomes that race with our own pre-checks
_NOT_A_WORKTREE = ("is not a working tree", "is not a valid worktree")
_DIRTY_WORKTREE = ("contains modified or untracked files",)
_PATH_EXISTS = ("already exists",)


def _stderr_contains(error: GitExecutionError, fragments) -> bool:
    return any(fragment in (error.stderr or "") for fragment in fragments)


class WorktreeService(GitServiceBase):
    """Service for managing git worktrees.

    Each worktree is an extra working directory bound to one branch, so
    several branches can be checked out at once. No state is kept between
    calls; git's administrative files are the source of truth.
    """

    def _same_path(self, a: str, b: str) -> bool:
        return os.path.realpath(normalize_path(a)) == os.path.realpath(normalize_path(b))

    def find(self, path: str) -> Optional[WorktreeInfo]:
        """Find the registered worktree at ``path``, if any."""
        return next((wt for wt in self.list() if self._same_path(wt.path, path)), None)

    def add(self, path: str, branch: str) -> WorktreeInfo:
        """Create a worktree at ``path`` checked out on ``branch``.

        An existing branch is attached; a missing one is created from HEAD
        as part of the same git command.

        Args:
            path: Directory for the new worktree (must not exist yet)
            branch: Branch to check out

        Returns:
            WorktreeInfo for the new worktree

        Raises:
            InvalidBranchNameError: Branch name violates ref naming rules
            WorktreePathExistsError: ``path`` already exists
            GitExecutionError: git refused to create the worktree
        """
        validate_branch_name(branch)
        target = normalize_path(path)
        if os.path.lexists(target):
            raise WorktreePathExistsError(target)

        if self._branch_exists(branch):
            args = ["worktree", "add", target, branch]
        else:
            args = ["worktree", "add", "-b", branch, target]

        try:
            self._write(*args)
        except GitExecutionError as e:
            # Another process may have created the directory in the meantime
            if _stderr_contains(e, _PATH_EXISTS) and os.path.lexists(target):
                raise WorktreePathExistsError(target) from e
            raise

        self.logger.info(f"Added worktree at {target} for branch {branch}")
        return self.find(target) or WorktreeInfo(
            path=os.path.realpath(target), branch_name=branch, commit_sha=self._head(cwd=target)
        )

    def list(self) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees.

        Returns:
            List of WorktreeInfo objects, main worktree first
        """
        output = self._read("worktree", "list", "--porcelain")
        worktree_list = parse_worktree_porcelain(output)

        self.logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            self.logger.debug(f"  {wt}")
        return worktree_list

    def get_worktree_branches(self) -> set:
        """Get set of branch names that are checked out in worktrees."""
        return {wt.branch_name for wt in self.list() if wt.branch_name}

    def status(self, path: str) -> GitStatus:
        """Get the file status of a worktree without touching other checkouts.

        An orphaned worktree (directory gone) reports an empty status.
        """
        if not os.path.exists(path):
            self.logger.debug(f"Worktree path {path} doesn't exist (orphaned)")
            return GitStatus()
        output = self._read("status", "--porcelain", cwd=path)
        return parse_status_porcelain(output, self.logger)

    def remove(self, path: str, force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Remove even if the worktree has uncommitted changes

        Raises:
            WorktreeNotFoundError: ``path`` is not a registered worktree
            WorktreeDirtyError: Uncommitted changes and ``force`` is off
            GitExecutionError: Any other git failure
        """
        target = normalize_path(path)
        worktree = self.find(target)
        if worktree is None:
            raise WorktreeNotFoundError(target)

        if not force and not self.status(worktree.path).is_clean:
            raise WorktreeDirtyError(target)

        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(worktree.path)

        try:
            self._write(*args)
        except GitExecutionError as e:
            if _stderr_contains(e, _NOT_A_WORKTREE):
                raise WorktreeNotFoundError(target) from e
            if _stderr_contains(e, _DIRTY_WORKTREE):
                raise WorktreeDirtyError(target) from e
            raise

        self.logger.info(f"Removed worktree at {target}")

    def prune(self) -> None:
        """Prune administrative data of worktrees whose directories are gone."""
        self._write("worktree", "prune")
        self.logger.info("Pruned orphaned worktree metadata")

    def repair(self) -> None:
        """Repair worktree administrative files after moves or corruption."""
        self._write("worktree", "repair")
        self.logger.info("Repaired worktree metadata")

    def sync(self, path: str, base_branch: str, strategy: str = "merge") -> None:
        """Fetch from the configured remote and integrate ``base_branch``.

        The fetch runs first; a failing merge or rebase leaves the fetched
        refs in place and the worktree in whatever state git left it.

        Args:
            path: Worktree to update
            base_branch: Branch on the remote to integrate
            strategy: "merge" (``--no-edit``) or "rebase"

        Raises:
            ValueError: Unknown strategy
            GitExecutionError: Fetch, merge or rebase failed (conflicts included)
        """
        if strategy not in SYNC_STRATEGIES:
            raise ValueError(f"strategy must be one of {list(SYNC_STRATEGIES)}, got '{strategy}'")

        remote = self.config.remote_name
        ref = f"{remote}/{base_branch}"
        self.logger.debug(f"Syncing worktree {path} with {ref} ({strategy})")

        self._network("fetch", remote, cwd=path)
        if strategy == "rebase":
            self._write("rebase", ref, cwd=path)
        else:
            self._write("merge", ref, "--no-edit", cwd=path)

        self.logger.info(f"Synced worktree {path} with {ref}")

    def delete_branch(self, name: str) -> None:
        """Delete a fully merged local branch (``git branch -d``)."""
        self._write("branch", "-d", name)
        self.logger.info(f"Deleted branch {name}")

    def is_branch_merged(self, branch: str, base: str) -> bool:
        """Check whether ``branch`` is listed by ``git branch --merged <base>``."""
        output = self._read("branch", "--merged", base)
        merged = branch in parse_merged_branches(output)
        self.logger.debug(f"Branch {branch} merged into {base}: {merged}")
        return merged
