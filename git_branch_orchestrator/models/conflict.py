"""Conflict prediction model."""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class ConflictPrediction:
    """Outcome of a read-only merge pre-check.

    A file counts as conflicting when both sides touched it since the merge
    base, even if git could merge the hunks cleanly.
    """

    current_branch: str
    target: str
    merge_base: str
    conflicting_files: List[str] = field(default_factory=list)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicting_files)

    def __bool__(self) -> bool:
        return self.has_conflicts
