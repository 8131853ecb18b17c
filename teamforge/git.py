"""Thin wrapper over the git command line."""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Callable, Iterable, List, Sequence


class GitError(RuntimeError):
    """Raised when a git command fails."""


class GitRepository:
    """Clone, inspect and commit to local repositories via ``git``."""

    def __init__(self, runner: Callable[..., str] | None = None) -> None:
        self._runner = runner or self._default_runner

    def clone(self, url: str, path: Path | str) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self._run(["git", "clone", url, str(target)], cwd=target.parent)
        return target

    @staticmethod
    def is_repository(path: Path | str) -> bool:
        return (Path(path) / ".git").exists()

    def status(self, path: Path | str) -> List[str]:
        """Return the paths reported by ``git status --porcelain``."""
        repo = self._require_repository(path)
        output = self._run(["git", "status", "--porcelain"], cwd=repo, capture_output=True)
        files: List[str] = []
        for line in output.splitlines():
            if len(line) < 4:
                continue
            entry = line[3:]
            # Renames are reported as "old -> new".
            if " -> " in entry:
                entry = entry.split(" -> ", 1)[1]
            files.append(entry.strip('"'))
        return files

    def commit(
        self,
        path: Path | str,
        message: str,
        files: Sequence[Path | str],
    ) -> bool:
        """Stage ``files`` and commit them; return False when nothing changed."""
        repo = self._require_repository(path)
        for file in files:
            self._run(["git", "add", self._to_relative(repo, Path(file))], cwd=repo)

        staged = self._run(
            ["git", "diff", "--cached", "--name-only"], cwd=repo, capture_output=True
        )
        if not staged.strip():
            return False

        env = os.environ.copy()
        env.setdefault("GIT_AUTHOR_NAME", "teamforge")
        env.setdefault("GIT_AUTHOR_EMAIL", "teamforge@example.com")
        env.setdefault("GIT_COMMITTER_NAME", env["GIT_AUTHOR_NAME"])
        env.setdefault("GIT_COMMITTER_EMAIL", env["GIT_AUTHOR_EMAIL"])

        self._run(["git", "commit", "-m", message], cwd=repo, env=env)
        return True

    # ------------------------------------------------------------------
    # Helpers

    def _require_repository(self, path: Path | str) -> Path:
        repo = Path(path)
        if not self.is_repository(repo):
            raise GitError(f"Not a git repository: {repo}")
        return repo

    @staticmethod
    def _to_relative(repo: Path, file_path: Path) -> str:
        try:
            return file_path.relative_to(repo).as_posix()
        except ValueError:
            return file_path.as_posix()

    def _run(
        self,
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        return self._runner(args, cwd=cwd, env=env, capture_output=capture_output)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        env: dict[str, str] | None = None,
        capture_output: bool = False,
    ) -> str:
        command = list(args)
        try:
            completed = subprocess.run(
                command,
                cwd=str(cwd),
                env=env,
                check=True,
                text=True,
                capture_output=capture_output,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise GitError(f"{' '.join(command)} failed: {exc}") from exc
        if capture_output:
            return completed.stdout
        return ""


__all__ = ["GitError", "GitRepository"]
