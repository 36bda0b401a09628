"""Commit model."""

from dataclasses import dataclass
from datetime import datetime

from git_branch_orchestrator.constants import ZERO_TIME


@dataclass(frozen=True)
class Commit:
    """A single entry of `git log`, newest first when returned in a list."""

    hash: str
    author: str
    date: datetime  # ZERO_TIME when git's date could not be parsed
    message: str  # Subject line only

    @property
    def short_hash(self) -> str:
        return self.hash[:7]

    @property
    def has_date(self) -> bool:
        return self.date != ZERO_TIME
