"""Working tree status model."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class GitStatus:
    """Parsed result of `git status --porcelain` plus upstream divergence.

    Built fresh on every query and never cached. Paths appear once per list,
    in the order git reported them; renamed entries carry only the new path.
    """

    staged: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)
    ahead: int = 0
    behind: int = 0

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.modified or self.untracked)

    @property
    def total_changes(self) -> int:
        return len(set(self.staged) | set(self.modified) | set(self.untracked))
