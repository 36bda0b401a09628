"""Worktree data models."""

from dataclasses import dataclass


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch_name: str  # Empty for detached HEAD
    commit_sha: str
    is_main: bool = False  # Is this the main working tree?
    is_orphaned: bool = False  # Directory missing?
    is_locked: bool = False
    is_prunable: bool = False

    @property
    def is_detached(self) -> bool:
        return not self.branch_name

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or f"(detached {self.commit_sha[:7]})"
        return f"{branch} @ {self.path}{main_marker} [{status}]"
