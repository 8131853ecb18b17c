"""Tests for the git wrapper."""

from __future__ import annotations

from pathlib import Path

import pytest

from teamforge.git import GitError, GitRepository


def _repo(tmp_path: Path) -> Path:
    repo = tmp_path / "repo"
    repo.mkdir()
    (repo / ".git").mkdir()
    return repo


def test_commit_stages_files_and_commits(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    agent_file = repo / ".claude" / "agents" / "code-reviewer.md"

    calls = []

    def runner(args, cwd, env=None, capture_output=False):
        calls.append((list(args), Path(cwd), capture_output))
        if capture_output:
            return ".claude/agents/code-reviewer.md\n"
        return ""

    result = GitRepository(runner=runner).commit(repo, "chore: add agents", [agent_file])

    assert result is True
    assert calls[0][0] == ["git", "add", ".claude/agents/code-reviewer.md"]
    assert calls[0][1] == repo
    assert calls[1][0] == ["git", "diff", "--cached", "--name-only"]
    assert calls[2][0] == ["git", "commit", "-m", "chore: add agents"]


def test_commit_without_changes_is_noop(tmp_path: Path) -> None:
    repo = _repo(tmp_path)
    calls = []

    def runner(args, cwd, env=None, capture_output=False):
        calls.append(list(args))
        return ""

    assert GitRepository(runner=runner).commit(repo, "msg", ["README.md"]) is False
    assert not any(call[:2] == ["git", "commit"] for call in calls)


def test_status_parses_porcelain_output(tmp_path: Path) -> None:
    repo = _repo(tmp_path)

    def runner(args, cwd, env=None, capture_output=False):
        return " M src/app.py\n?? notes.txt\nR  old.py -> new.py\n"

    assert GitRepository(runner=runner).status(repo) == ["src/app.py", "notes.txt", "new.py"]


def test_status_requires_repository(tmp_path: Path) -> None:
    def runner(args, cwd, env=None, capture_output=False):  # pragma: no cover - not reached
        raise AssertionError("runner should not be called")

    with pytest.raises(GitError):
        GitRepository(runner=runner).status(tmp_path)


def test_clone_runs_git_clone(tmp_path: Path) -> None:
    calls = []

    def runner(args, cwd, env=None, capture_output=False):
        calls.append((list(args), Path(cwd)))
        return ""

    target = tmp_path / "checkouts" / "project"
    result = GitRepository(runner=runner).clone("https://example.com/project.git", target)

    assert result == target
    assert calls == [
        (["git", "clone", "https://example.com/project.git", str(target)], target.parent)
    ]


def test_default_runner_wraps_failures(tmp_path: Path) -> None:
    with pytest.raises(GitError):
        GitRepository._default_runner(
            ["git-command-that-does-not-exist-teamforge"], cwd=tmp_path
        )
