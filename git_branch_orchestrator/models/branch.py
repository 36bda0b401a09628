"""Branch model"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Branch:
    """A branch as reported by `git branch`.

    ``is_current`` reflects HEAD at query time and can go stale as soon as
    it is returned.
    """
    name: str
    is_remote: bool = False
    is_current: bool = False

    def __str__(self) -> str:
        marker = "* " if self.is_current else "  "
        return f"{marker}{self.name}"
