"""Project configuration store (``.teamforge/config.json``)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

CONFIG_DIR = ".teamforge"
CONFIG_FILENAME = "config.json"
CONFIG_VERSION = "1.0.0"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be read or parsed."""


@dataclass
class ProjectInfo:
    """Project metadata recorded when a project is first analyzed."""

    name: str
    project_type: str
    path: str
    detected_technologies: List[str] = field(default_factory=list)


@dataclass
class TeamForgeConfig:
    """Accepted agents and customisations for a single project."""

    version: str
    project: ProjectInfo
    active_agents: List[str] = field(default_factory=list)
    customizations: Dict[str, Any] = field(default_factory=dict)
    last_analyzed: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def config_path(project_path: Path) -> Path:
    return Path(project_path) / CONFIG_DIR / CONFIG_FILENAME


def config_exists(project_path: Path) -> bool:
    """Return True when the project already has a saved configuration."""
    return config_path(project_path).is_file()


def load_config(project_path: Path) -> TeamForgeConfig:
    """Load the configuration stored under ``project_path``."""
    path = config_path(project_path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config at {path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain an object at the root")

    project_data = _as_dict(data.get("project"))
    project = ProjectInfo(
        name=_as_str(project_data.get("name")) or "",
        project_type=_as_str(project_data.get("project_type")) or "",
        path=_as_str(project_data.get("path")) or "",
        detected_technologies=_as_str_list(project_data.get("detected_technologies")),
    )

    return TeamForgeConfig(
        version=_as_str(data.get("version")) or "",
        project=project,
        active_agents=_as_str_list(data.get("active_agents")),
        customizations=_as_dict(data.get("customizations")),
        last_analyzed=_as_str(data.get("last_analyzed")) or "",
    )


def save_config(config: TeamForgeConfig, project_path: Path) -> Path:
    """Write ``config`` to disk, creating the config directory when needed."""
    path = config_path(project_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config.to_dict(), indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to write config to {path}: {exc}") from exc
    return path


def create_default_config(
    project_name: str,
    project_type: str,
    project_path: str,
    detected_technologies: Sequence[str],
    *,
    active_agents: Sequence[str] = (),
) -> TeamForgeConfig:
    """Return a fresh configuration stamped with the current UTC time."""
    return TeamForgeConfig(
        version=CONFIG_VERSION,
        project=ProjectInfo(
            name=project_name,
            project_type=project_type,
            path=project_path,
            detected_technologies=list(detected_technologies),
        ),
        active_agents=list(active_agents),
        customizations={},
        last_analyzed=datetime.now(UTC).isoformat(),
    )


def validate_config(config: TeamForgeConfig) -> List[str]:
    """Return human-readable warnings for incomplete configuration."""
    warnings: List[str] = []
    if not config.version:
        warnings.append("Config version is empty")
    if not config.project.name:
        warnings.append("Project name is empty")
    if not config.project.path:
        warnings.append("Project path is empty")
    if not config.active_agents:
        warnings.append("No active agents configured")
    return warnings


def initialize_project(project_path: Path) -> Path:
    """Create the ``.teamforge`` layout with an empty analysis snapshot."""
    base = Path(project_path) / CONFIG_DIR
    (base / "presets").mkdir(parents=True, exist_ok=True)
    analysis = base / "analysis.json"
    if not analysis.exists():
        analysis.write_text("{}", encoding="utf-8")
    return base


def ensure_agents_dir(project_path: Path) -> Path:
    """Create ``.claude/agents`` where rendered agent files are saved."""
    agents_dir = Path(project_path) / ".claude" / "agents"
    agents_dir.mkdir(parents=True, exist_ok=True)
    return agents_dir


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
