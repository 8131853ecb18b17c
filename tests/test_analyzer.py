"""End-to-end tests for project analysis."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest

from teamforge import ProjectAnalyzer, ProjectType, analyze_project
from tests._fixtures.repo_builder import RepoBuilder


def _source_files(count: int, extension: str = "ts") -> dict[str, str]:
    return {f"src/module_{index}.{extension}": "" for index in range(count)}


def test_react_project_is_frontend(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps(
                {"dependencies": {"react": "^18.2.0", "react-dom": "^18.2.0"}}
            ),
            **_source_files(12, "tsx"),
        }
    )

    analysis = repo_builder.analyze()

    assert analysis.project_type is ProjectType.FRONTEND
    assert "react" in analysis.detected_technologies
    assert analysis.total_files == 13
    assert analysis.file_counts["tsx"] == 12
    for agent in ("code-reviewer", "test-engineer", "frontend-developer", "ux-designer"):
        assert agent in analysis.suggested_agents


def test_express_react_postgres_is_fullstack(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps(
                {
                    "scripts": {"start": "node server.js"},
                    "dependencies": {"express": "^4.18.2", "react": "^18.2.0", "pg": "^8"},
                }
            ),
        }
    )

    analysis = repo_builder.analyze()

    assert analysis.project_type is ProjectType.WEB_FULLSTACK
    assert analysis.detected_technologies == ("express", "node", "postgres", "react")
    assert "database-designer" in analysis.suggested_agents
    assert "fullstack-developer" in analysis.suggested_agents


def test_fullstack_wins_over_mobile_and_desktop(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps(
                {"dependencies": {"vue": "3", "electron": "30", "react-native": "0.74"}}
            ),
            "requirements.txt": "flask==3.0\n",
            "ios/AppDelegate.swift": "",
        }
    )

    analysis = repo_builder.analyze()

    assert analysis.project_type is ProjectType.WEB_FULLSTACK


def test_small_project_without_manifests_is_library(repo_builder: RepoBuilder) -> None:
    repo_builder.touch("README.md", "lib.c", "lib.h")

    analysis = repo_builder.analyze()

    assert analysis.project_type is ProjectType.LIBRARY
    assert analysis.total_files == 3
    assert analysis.detected_technologies == ()
    assert "tech-writer" in analysis.suggested_agents
    assert "api-documenter" in analysis.suggested_agents


def test_go_gin_module_is_backend_api(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "go.mod": """
            module example.com/service

            go 1.22

            require github.com/gin-gonic/gin v1.9.1
            """,
        }
    )

    analysis = repo_builder.analyze()

    assert analysis.project_type is ProjectType.BACKEND_API
    assert analysis.detected_technologies == ("gin", "go")


def test_missing_root_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(FileNotFoundError) as excinfo:
        analyze_project(missing)

    assert str(missing) in str(excinfo.value)


def test_file_root_raises(tmp_path: Path) -> None:
    target = tmp_path / "package.json"
    target.write_text("{}", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        analyze_project(target)


def test_unreadable_root_raises(repo_builder: RepoBuilder, monkeypatch) -> None:
    repo_builder.write({"package.json": json.dumps({"dependencies": {"react": "18"}})})
    root = repo_builder.path()
    real_scandir = os.scandir

    def deny_root(path=".", *args, **kwargs):
        if os.fspath(path) == str(root):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path, *args, **kwargs)

    monkeypatch.setattr(os, "scandir", deny_root)

    with pytest.raises(PermissionError) as excinfo:
        analyze_project(root)

    assert "not readable" in str(excinfo.value)
    assert str(root) in str(excinfo.value)


def test_unreadable_manifest_is_skipped(repo_builder: RepoBuilder, monkeypatch) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps({"dependencies": {"react": "18"}}),
            "requirements.txt": "flask\n",
        }
    )
    real_read_text = Path.read_text

    def failing_read_text(self, *args, **kwargs):
        if self.name == "package.json":
            raise OSError(5, "Input/output error", str(self))
        return real_read_text(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", failing_read_text)

    analysis = repo_builder.analyze()

    assert analysis.detected_technologies == ("flask", "python")
    assert analysis.project_type is ProjectType.BACKEND_API
    assert analysis.total_files == 2


def test_undecodable_manifest_bytes_are_replaced(repo_builder: RepoBuilder) -> None:
    (repo_builder.path() / "requirements.txt").write_bytes(b"\xff\xfe junk\nflask==3.0\n")

    analysis = repo_builder.analyze()

    assert analysis.detected_technologies == ("flask", "python")


def test_manifest_with_byte_order_mark_is_parsed(repo_builder: RepoBuilder) -> None:
    content = json.dumps({"dependencies": {"react": "18"}}).encode("utf-8")
    (repo_builder.path() / "package.json").write_bytes(b"\xef\xbb\xbf" + content)

    analysis = repo_builder.analyze()

    assert analysis.detected_technologies == ("react",)
    assert analysis.project_type is ProjectType.FRONTEND


def test_malformed_manifest_is_skipped(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": "{ this is not json",
            "Cargo.toml": "[dependencies\n",
            "requirements.txt": "fastapi==0.111\npytest\n",
        }
    )

    analysis = repo_builder.analyze()

    assert analysis.detected_technologies == ("fastapi", "pytest", "python")
    assert analysis.project_type is ProjectType.BACKEND_API
    assert "e2e-tester" in analysis.suggested_agents


def test_manifest_directory_is_ignored(repo_builder: RepoBuilder) -> None:
    (repo_builder.path() / "go.mod").mkdir()

    analysis = repo_builder.analyze()

    assert analysis.detected_technologies == ()


def test_manifests_are_only_read_at_root(repo_builder: RepoBuilder) -> None:
    repo_builder.write({"web/package.json": json.dumps({"dependencies": {"react": "18"}})})

    analysis = repo_builder.analyze()

    assert "react" not in analysis.detected_technologies


def test_technologies_are_sorted_and_unique(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "package.json": json.dumps(
                {
                    "dependencies": {"nest": "1", "@nestjs/core": "10", "vitest": "1"},
                    "devDependencies": {"vitest": "1"},
                }
            ),
            "requirements.txt": "django\ndjango-environ\n",
            "Cargo.toml": '[dependencies]\ntauri = "2"\n',
        }
    )

    analysis = repo_builder.analyze()

    technologies = list(analysis.detected_technologies)
    assert technologies == sorted(set(technologies))
    assert technologies == ["django", "nestjs", "python", "rust", "tauri", "vitest"]


def test_analysis_is_idempotent(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "requirements.txt": "docker==7.0\npandas\n",
            **_source_files(15, "py"),
        }
    )

    first = repo_builder.analyze()
    second = repo_builder.analyze()

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert "docker-specialist" in first.suggested_agents


def test_result_is_immutable(repo_builder: RepoBuilder) -> None:
    repo_builder.touch("a.py")

    analysis = repo_builder.analyze()

    with pytest.raises(TypeError):
        analysis.file_counts["py"] = 99  # type: ignore[index]
    with pytest.raises(AttributeError):
        analysis.total_files = 0  # type: ignore[misc]


def test_to_dict_serializes_labels(repo_builder: RepoBuilder) -> None:
    repo_builder.touch("a.py", "b.py")

    payload = ProjectAnalyzer().analyze(str(repo_builder.path())).to_dict()

    assert payload == {
        "project_type": "Library",
        "detected_technologies": [],
        "file_counts": {"py": 2},
        "total_files": 2,
        "suggested_agents": [
            "api-documenter",
            "code-reviewer",
            "tech-writer",
            "test-engineer",
        ],
    }
