"""Interface boundaries between services and their git-backed implementations.

Each Protocol has exactly one CLI-backed implementation in this package;
tests and embedding applications may substitute their own.
"""

from typing import List, Optional, Protocol, Sequence, runtime_checkable

from git_branch_orchestrator.models.branch import Branch
from git_branch_orchestrator.models.commit import Commit
from git_branch_orchestrator.models.status import GitStatus
from git_branch_orchestrator.models.worktree import WorktreeInfo


@runtime_checkable
class CommandRunner(Protocol):
    """Runs ``git <args>`` in a directory and returns trimmed stdout."""

    def run(self, cwd: str, args: Sequence[str], timeout: Optional[float] = None) -> str:
        ...


@runtime_checkable
class RepositoryAccessor(Protocol):
    """Read-only repository state queries."""

    @property
    def root(self) -> str:
        ...

    def current_branch(self) -> str:
        ...

    def status(self) -> GitStatus:
        ...

    def log(self, n: int) -> List[Commit]:
        ...

    def diff(self, ref1: str, ref2: str) -> str:
        ...

    def is_clean(self) -> bool:
        ...


@runtime_checkable
class BranchManaging(Protocol):
    """Local branch lifecycle."""

    def create(self, name: str, start_point: Optional[str] = None) -> None:
        ...

    def switch(self, name: str) -> None:
        ...

    def delete(self, name: str) -> None:
        ...

    def list(self, include_remote: bool = False) -> List[Branch]:
        ...


@runtime_checkable
class WorktreeManaging(Protocol):
    """Parallel worktree lifecycle."""

    def add(self, path: str, branch: str) -> WorktreeInfo:
        ...

    def list(self) -> List[WorktreeInfo]:
        ...

    def remove(self, path: str, force: bool = False) -> None:
        ...

    def prune(self) -> None:
        ...

    def repair(self) -> None:
        ...

    def sync(self, path: str, base_branch: str, strategy: str = "merge") -> None:
        ...

    def delete_branch(self, name: str) -> None:
        ...

    def is_branch_merged(self, branch: str, base: str) -> bool:
        ...
