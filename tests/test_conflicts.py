"""Tests for merge conflict prediction"""

from pathlib import Path

import pytest

from git_branch_orchestrator.exceptions import BranchNotFoundError, NoMergeBaseError
from git_branch_orchestrator.services.git import Repository


@pytest.fixture
def diverged_repo(git_repo, commit_file):
    """Repository with two branches forked from main.

    - left: adds left.txt and rewrites README.md
    - right: adds right.txt
    - both: rewrites README.md
    """
    git_repo.git.checkout("-b", "left")
    commit_file(git_repo, "left.txt", "left\n", "Left side")
    commit_file(git_repo, "README.md", "# Left\n", "Left readme")

    git_repo.git.checkout("main")
    git_repo.git.checkout("-b", "right")
    commit_file(git_repo, "right.txt", "right\n", "Right side")

    git_repo.git.checkout("main")
    git_repo.git.checkout("-b", "both")
    commit_file(git_repo, "README.md", "# Both\n", "Both readme")

    git_repo.git.checkout("left")
    yield git_repo


class TestPredict:
    """Test conflict prediction between the current branch and a target."""

    def test_disjoint_changes(self, diverged_repo):
        detector = Repository.open(diverged_repo.working_dir).conflicts()

        prediction = detector.predict("right")

        assert not prediction.has_conflicts
        assert not prediction
        assert prediction.current_branch == "left"
        assert prediction.target == "right"
        assert not detector.has_conflicts("right")

    def test_overlapping_changes(self, diverged_repo):
        detector = Repository.open(diverged_repo.working_dir).conflicts()

        prediction = detector.predict("both")

        assert prediction.has_conflicts
        assert prediction.conflicting_files == ["README.md"]
        assert detector.has_conflicts("both")

    def test_merge_base(self, diverged_repo):
        main_sha = diverged_repo.heads["main"].commit.hexsha
        detector = Repository.open(diverged_repo.working_dir).conflicts()

        assert detector.predict("right").merge_base == main_sha
        assert detector.merge_base("left", "both") == main_sha

    def test_read_only(self, diverged_repo):
        """Prediction leaves HEAD, index and working tree untouched."""
        repo = Repository.open(diverged_repo.working_dir)
        head_before = repo.head()

        repo.conflicts().predict("both")

        assert repo.head() == head_before
        assert repo.current_branch() == "left"
        assert repo.is_clean()
        assert (Path(repo.root) / "README.md").read_text() == "# Left\n"

    def test_missing_target(self, diverged_repo):
        detector = Repository.open(diverged_repo.working_dir).conflicts()

        with pytest.raises(BranchNotFoundError):
            detector.predict("nope")

    def test_unrelated_histories(self, git_repo, repo_path, commit_file):
        git_repo.git.checkout("--orphan", "unrelated")
        commit_file(git_repo, "other.txt", "other\n", "Unrelated root")
        git_repo.git.checkout("main")

        detector = Repository.open(repo_path).conflicts()

        with pytest.raises(NoMergeBaseError):
            detector.predict("unrelated")

    def test_changed_files(self, diverged_repo):
        detector = Repository.open(diverged_repo.working_dir).conflicts()

        assert detector.changed_files("main", "left") == ["README.md", "left.txt"]
