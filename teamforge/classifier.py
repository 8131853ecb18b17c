"""Project classification and agent suggestion rules."""

from __future__ import annotations

from types import MappingProxyType
from typing import Collection, FrozenSet, List, Mapping, Tuple

from .models import ProjectType

FRONTEND_TECHNOLOGIES: FrozenSet[str] = frozenset(
    {"react", "vue", "angular", "svelte", "next", "nuxt"}
)

BACKEND_TECHNOLOGIES: FrozenSet[str] = frozenset(
    {
        "express",
        "fastify",
        "koa",
        "nestjs",
        "django",
        "flask",
        "fastapi",
        "actix",
        "rocket",
        # Go web frameworks
        "gin",
        "fiber",
        "echo",
        "gorilla",
    }
)

MOBILE_TECHNOLOGIES: FrozenSet[str] = frozenset({"react-native", "flutter"})
MOBILE_EXTENSIONS: Tuple[str, ...] = ("swift", "kotlin")
DESKTOP_TECHNOLOGIES: FrozenSet[str] = frozenset({"tauri", "electron"})

LIBRARY_FILE_THRESHOLD = 10

BASE_AGENTS: Tuple[str, ...] = ("code-reviewer", "test-engineer")

AGENTS_BY_TYPE: Mapping[ProjectType, Tuple[str, ...]] = MappingProxyType(
    {
        ProjectType.WEB_FULLSTACK: (
            "fullstack-developer",
            "api-designer",
            "frontend-developer",
            "backend-developer",
        ),
        ProjectType.BACKEND_API: (
            "backend-developer",
            "api-designer",
            "database-designer",
        ),
        ProjectType.FRONTEND: ("frontend-developer", "ux-designer"),
        ProjectType.MOBILE: ("mobile-developer", "ux-designer"),
        ProjectType.DESKTOP: ("frontend-developer", "backend-developer"),
        ProjectType.LIBRARY: ("tech-writer", "api-documenter"),
        ProjectType.UNKNOWN: ("fullstack-developer",),
    }
)

DATABASE_TECHNOLOGIES: FrozenSet[str] = frozenset({"postgres", "mysql", "mongodb"})
TEST_TECHNOLOGIES: FrozenSet[str] = frozenset(
    {"jest", "vitest", "pytest", "cypress", "playwright"}
)


def classify_project(
    technologies: Collection[str],
    file_counts: Mapping[str, int],
    total_files: int,
) -> ProjectType:
    """Resolve the project category; earlier rules take precedence."""
    tags = set(technologies)
    has_frontend = bool(tags & FRONTEND_TECHNOLOGIES)
    has_backend = bool(tags & BACKEND_TECHNOLOGIES)
    has_mobile = bool(tags & MOBILE_TECHNOLOGIES) or any(
        extension in file_counts for extension in MOBILE_EXTENSIONS
    )
    has_desktop = bool(tags & DESKTOP_TECHNOLOGIES)

    if has_frontend and has_backend:
        return ProjectType.WEB_FULLSTACK
    if has_backend and not has_mobile and not has_desktop:
        return ProjectType.BACKEND_API
    if has_frontend and not has_backend and not has_mobile and not has_desktop:
        return ProjectType.FRONTEND
    if has_mobile:
        return ProjectType.MOBILE
    if has_desktop:
        return ProjectType.DESKTOP
    if total_files < LIBRARY_FILE_THRESHOLD:
        return ProjectType.LIBRARY
    return ProjectType.UNKNOWN


def suggest_agents(
    project_type: ProjectType, technologies: Collection[str]
) -> Tuple[str, ...]:
    """Return sorted, unique agent ids for the category and detected technologies."""
    agents: List[str] = list(BASE_AGENTS)
    agents.extend(AGENTS_BY_TYPE[project_type])

    tags = set(technologies)
    # Substring match: tags like "docker-compose" also count.
    if any("docker" in tag for tag in tags):
        agents.append("docker-specialist")
    if tags & DATABASE_TECHNOLOGIES:
        agents.append("database-designer")
    if tags & TEST_TECHNOLOGIES:
        agents.append("e2e-tester")

    return tuple(sorted(set(agents)))


__all__ = [
    "AGENTS_BY_TYPE",
    "BASE_AGENTS",
    "classify_project",
    "suggest_agents",
]
