"""Core data models shared across teamforge components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple


class ProjectType(str, Enum):
    """Architectural category assigned to an analyzed project."""

    WEB_FULLSTACK = "WebFullstack"
    BACKEND_API = "BackendApi"
    FRONTEND = "Frontend"
    MOBILE = "Mobile"
    DESKTOP = "Desktop"
    LIBRARY = "Library"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ScanResult:
    """Extension histogram and file total from a bounded directory walk."""

    file_counts: Mapping[str, int]
    total_files: int


@dataclass(frozen=True)
class ProjectAnalysis:
    """Result of analyzing a single project directory."""

    project_type: ProjectType
    detected_technologies: Tuple[str, ...]
    file_counts: Mapping[str, int]
    total_files: int
    suggested_agents: Tuple[str, ...]

    def __post_init__(self) -> None:
        # Freeze the histogram so the result cannot be mutated after creation.
        if not isinstance(self.file_counts, MappingProxyType):
            object.__setattr__(
                self, "file_counts", MappingProxyType(dict(self.file_counts))
            )

    def to_dict(self) -> Dict[str, Any]:
        """Return the serialized form exposed by the CLI and HTTP service."""
        return {
            "project_type": self.project_type.value,
            "detected_technologies": list(self.detected_technologies),
            "file_counts": dict(self.file_counts),
            "total_files": self.total_files,
            "suggested_agents": list(self.suggested_agents),
        }
