"""Tests for branch name validation and the branch manager"""

import threading
from pathlib import Path

import pytest

from git_branch_orchestrator.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    CannotDeleteCurrentBranchError,
    DirtyWorkingTreeError,
    GitExecutionError,
    InvalidBranchNameError,
)
from git_branch_orchestrator.services.git import BranchManager, Repository, validate_branch_name


INVALID_NAMES = [
    "",
    "@",
    ".hidden",
    "feature.lock",
    "feature/",
    "feature.",
    "a..b",
    "a~1",
    "a^2",
    "a:b",
    "a\\b",
    "a@{b",
    "a?b",
    "a*b",
    "a[b",
    "a//b",
    "has space",
    "tab\there",
    "bell\x07",
    "del\x7f",
    "feature/.hidden",
    "feature/x.lock/y",
]


@pytest.fixture
def branches(repo_path):
    """Branch manager bound to the test repository."""
    return Repository.open(repo_path).branches()


class TestValidateBranchName:
    """Test git ref naming rules."""

    @pytest.mark.parametrize("name", INVALID_NAMES)
    def test_invalid_names(self, name):
        with pytest.raises(InvalidBranchNameError):
            validate_branch_name(name)

    @pytest.mark.parametrize("name", ["main", "feature/new-thing", "fix-123", "release/1.0", "a@b"])
    def test_valid_names(self, name):
        validate_branch_name(name)

    def test_rule_is_reported(self):
        with pytest.raises(InvalidBranchNameError) as exc_info:
            validate_branch_name("a..b")

        assert exc_info.value.rule == "contains '..'"
        assert exc_info.value.branch == "a..b"

    @pytest.mark.parametrize("name", INVALID_NAMES)
    def test_create_rejects_before_running_git(self, name, mock_executor):
        """Invalid names never reach the executor."""
        manager = BranchManager("/nonexistent/repo", executor=mock_executor)

        with pytest.raises(InvalidBranchNameError):
            manager.create(name)

        mock_executor.run.assert_not_called()


class TestCreate:
    """Test branch creation."""

    def test_create_from_head(self, git_repo, branches):
        branches.create("feature/new")

        assert branches.exists("feature/new")
        assert git_repo.heads["feature/new"].commit == git_repo.head.commit

    def test_create_from_start_point(self, git_repo_with_branches, repo_path):
        branches = Repository.open(repo_path).branches()
        feature_sha = git_repo_with_branches.heads["feature/test-feature"].commit.hexsha

        branches.create("from-feature", "feature/test-feature")

        assert git_repo_with_branches.heads["from-feature"].commit.hexsha == feature_sha

    def test_create_existing(self, branches):
        with pytest.raises(BranchExistsError):
            branches.create("main")

    def test_concurrent_creates(self, branches):
        """Creates from several threads all land."""
        names = [f"parallel/{i}" for i in range(8)]
        errors = []

        def create(name):
            try:
                branches.create(name)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=create, args=(name,)) for name in names]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert all(branches.exists(name) for name in names)


class TestSwitch:
    """Test checking out branches."""

    def test_switch(self, git_repo_with_branches, repo_path):
        repo = Repository.open(repo_path)

        repo.branches().switch("feature/test-feature")

        assert repo.current_branch() == "feature/test-feature"

    def test_switch_missing(self, branches):
        with pytest.raises(BranchNotFoundError):
            branches.switch("nope")

    def test_switch_with_modified_file(self, git_repo_with_branches, repo_path):
        repo = Repository.open(repo_path)
        (Path(repo_path) / "README.md").write_text("local edit\n")

        with pytest.raises(DirtyWorkingTreeError):
            repo.branches().switch("feature/test-feature")

        assert repo.current_branch() == "main"

    def test_switch_with_untracked_file(self, git_repo_with_branches, repo_path):
        """Untracked files count as uncommitted changes."""
        repo = Repository.open(repo_path)
        (Path(repo_path) / "scratch.txt").write_text("notes\n")

        with pytest.raises(DirtyWorkingTreeError):
            repo.branches().switch("feature/test-feature")

        assert repo.current_branch() == "main"


class TestDelete:
    """Test branch deletion."""

    def test_delete_merged(self, git_repo_with_branches, repo_path):
        branches = Repository.open(repo_path).branches()

        branches.delete("feature/to-merge")

        assert not branches.exists("feature/to-merge")

    def test_delete_current(self, branches):
        with pytest.raises(CannotDeleteCurrentBranchError):
            branches.delete("main")

    def test_delete_missing(self, branches):
        with pytest.raises(BranchNotFoundError):
            branches.delete("nope")

    def test_delete_unmerged(self, git_repo_with_branches, repo_path):
        branches = Repository.open(repo_path).branches()

        with pytest.raises(GitExecutionError):
            branches.delete("feature/test-feature")

        assert branches.exists("feature/test-feature")


class TestList:
    """Test listing branches."""

    def test_exactly_one_current(self, git_repo_with_branches, repo_path):
        listed = Repository.open(repo_path).branches().list()

        names = {b.name for b in listed}
        assert names == {"main", "feature/test-feature", "feature/to-merge"}
        assert [b.name for b in listed if b.is_current] == ["main"]
        assert not any(b.is_remote for b in listed)

    def test_detached_head_marks_none_current(self, git_repo_with_branches, repo_path):
        git_repo_with_branches.git.checkout("--detach")

        listed = Repository.open(repo_path).branches().list()

        assert not any(b.is_current for b in listed)

    def test_include_remote(self, git_repo_with_origin):
        branches = Repository.open(git_repo_with_origin.working_dir).branches()

        listed = branches.list(include_remote=True)

        remote = [b for b in listed if b.is_remote]
        assert [b.name for b in remote] == ["origin/main"]
        assert not any(b.is_current for b in remote)
