"""Merge conflict prediction service for git-branch-orchestrator."""

from typing import List

from git_branch_orchestrator.exceptions import (
    BranchNotFoundError,
    GitExecutionError,
    NoMergeBaseError,
)
from git_branch_orchestrator.models.conflict import ConflictPrediction
from git_branch_orchestrator.services.git.base import GitServiceBase
from git_branch_orchestrator.services.git.parsers import parse_branch_list


class ConflictDetector(GitServiceBase):
    """Predicts merge conflicts without touching HEAD, the index or the worktree.

    The check works at file granularity: any path changed on both sides since
    the merge base counts as a conflict. It never misses a real conflict but
    flags some merges git would resolve cleanly.
    """

    def merge_base(self, ref1: str, ref2: str) -> str:
        """Get the best common ancestor of two refs.

        Raises:
            NoMergeBaseError: The histories are unrelated (or a ref is unknown)
        """
        try:
            base = self._read("merge-base", ref1, ref2)
        except GitExecutionError as e:
            raise NoMergeBaseError(ref1, ref2) from e
        if not base:
            raise NoMergeBaseError(ref1, ref2)
        self.logger.debug(f"Merge base of {ref1} and {ref2}: {base}")
        return base

    def changed_files(self, ref1: str, ref2: str) -> List[str]:
        """Get the paths that differ between two refs."""
        return parse_branch_list(self._read("diff", "--name-only", ref1, ref2))

    def predict(self, target: str) -> ConflictPrediction:
        """Predict whether merging ``target`` into the current branch conflicts.

        Raises:
            BranchNotFoundError: ``target`` is not a local branch
            DetachedHeadError: HEAD is not on a branch
            NoMergeBaseError: The branches share no history
        """
        self.logger.debug(f"Checking conflicts with {target}")
        if not self._branch_exists(target):
            raise BranchNotFoundError(target)

        current = self._current_branch()
        base = self.merge_base(current, target)

        current_files = set(self.changed_files(base, current))
        target_files = self.changed_files(base, target)
        overlap = sorted({path for path in target_files if path in current_files})

        if overlap:
            self.logger.debug(
                f"{len(overlap)} file(s) changed on both {current} and {target}: {overlap[0]}..."
            )
        else:
            self.logger.debug(f"No overlapping changes between {current} and {target}")

        return ConflictPrediction(
            current_branch=current,
            target=target,
            merge_base=base,
            conflicting_files=overlap,
        )

    def has_conflicts(self, target: str) -> bool:
        """Check whether merging ``target`` into the current branch would conflict."""
        return self.predict(target).has_conflicts
