"""Tests for porcelain output parsers"""

from datetime import timezone
from unittest.mock import Mock

from git_branch_orchestrator.constants import LOG_FIELD_SEPARATOR, ZERO_TIME
from git_branch_orchestrator.services.git.parsers import (
    parse_ahead_behind,
    parse_branch_list,
    parse_log,
    parse_merged_branches,
    parse_status_porcelain,
    parse_worktree_porcelain,
)


class TestParseStatusPorcelain:
    """Test `git status --porcelain` parsing."""

    def test_classifies_entries(self):
        output = "\n".join([
            "M  staged.py",
            " M modified.py",
            "MM both.py",
            "A  added.py",
            " D deleted.py",
            "?? new.txt",
        ])

        status = parse_status_porcelain(output)

        assert status.staged == ["staged.py", "both.py", "added.py"]
        assert status.modified == ["modified.py", "both.py", "deleted.py"]
        assert status.untracked == ["new.txt"]
        assert status.ahead == 0 and status.behind == 0

    def test_rename_keeps_destination(self):
        status = parse_status_porcelain("R  old_name.py -> new_name.py")

        assert status.staged == ["new_name.py"]

    def test_quoted_path(self):
        status = parse_status_porcelain('?? "with space.txt"')

        assert status.untracked == ["with space.txt"]

    def test_short_line_is_skipped_and_logged(self):
        log = Mock()
        status = parse_status_porcelain("M\n M ok.py", log)

        assert status.modified == ["ok.py"]
        log.debug.assert_called_once()

    def test_empty_output_is_clean(self):
        assert parse_status_porcelain("").is_clean


class TestParseAheadBehind:
    """Test left-right rev-list count parsing."""

    def test_behind_then_ahead(self):
        assert parse_ahead_behind("2\t3") == (3, 2)

    def test_unparseable_field_becomes_zero(self):
        log = Mock()

        assert parse_ahead_behind("x\t1", log) == (1, 0)
        log.warning.assert_called_once()

    def test_unexpected_shape(self):
        assert parse_ahead_behind("") == (0, 0)


class TestParseLog:
    """Test `git log` output parsing."""

    def _line(self, *fields):
        return LOG_FIELD_SEPARATOR.join(fields)

    def test_parses_fields(self):
        output = self._line("a" * 40, "Test User", "2024-05-01T12:30:00+02:00", "Add feature")

        commits = parse_log(output)

        assert len(commits) == 1
        commit = commits[0]
        assert commit.hash == "a" * 40
        assert commit.short_hash == "aaaaaaa"
        assert commit.author == "Test User"
        assert commit.message == "Add feature"
        assert commit.date.astimezone(timezone.utc).hour == 10

    def test_bad_date_becomes_zero_time(self):
        commits = parse_log(self._line("b" * 40, "Someone", "yesterday", "msg"))

        assert commits[0].date == ZERO_TIME
        assert not commits[0].has_date

    def test_subject_may_contain_separator_free_text(self):
        commits = parse_log(self._line("c" * 40, "A", "2024-01-01T00:00:00Z", "fix: a -> b"))

        assert commits[0].message == "fix: a -> b"
        assert commits[0].has_date

    def test_malformed_line_is_skipped(self):
        assert parse_log("not a log line") == []


class TestParseBranchOutput:
    """Test branch list parsing."""

    def test_branch_list_drops_blanks(self):
        assert parse_branch_list("main\n\nfeature/x\n") == ["main", "feature/x"]

    def test_merged_branches_strip_markers(self):
        output = "* main\n+ feature/in-worktree\n  feature/done"

        assert parse_merged_branches(output) == ["main", "feature/in-worktree", "feature/done"]


class TestParseWorktreePorcelain:
    """Test `git worktree list --porcelain` parsing."""

    def test_stanzas(self, temp_dir):
        main = temp_dir / "main"
        main.mkdir()
        output = "\n".join([
            f"worktree {main}",
            "HEAD " + "1" * 40,
            "branch refs/heads/main",
            "",
            f"worktree {temp_dir / 'detached'}",
            "HEAD " + "2" * 40,
            "detached",
            "locked reason here",
            "prunable gitdir file points to non-existent location",
            "",
        ])

        worktrees = parse_worktree_porcelain(output)

        assert len(worktrees) == 2
        first, second = worktrees
        assert first.is_main and first.branch_name == "main" and not first.is_orphaned
        assert not second.is_main
        assert second.is_detached
        assert second.is_locked and second.is_prunable
        assert second.is_orphaned
        assert second.commit_sha == "2" * 40

    def test_last_entry_without_trailing_blank(self, temp_dir):
        output = f"worktree {temp_dir}\nHEAD {'3' * 40}\nbranch refs/heads/dev"

        worktrees = parse_worktree_porcelain(output)

        assert [wt.branch_name for wt in worktrees] == ["dev"]
