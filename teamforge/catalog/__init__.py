"""Built-in catalog of specialist agent templates."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

import yaml
from jinja2 import Environment, StrictUndefined, TemplateError

_LIBRARY_RESOURCE = "library.yml"

_AGENT_FILE_TEMPLATE = """\
---
{{ frontmatter }}---

{{ body }}
{% if custom_instructions %}

## Custom Instructions

{{ custom_instructions }}
{% endif %}
"""


class CatalogError(RuntimeError):
    """Raised when the agent catalog cannot be loaded or rendered."""


@dataclass(frozen=True)
class AgentTemplate:
    """A specialist role that can be written out as an agent file."""

    id: str
    name: str
    description: str
    tags: Tuple[str, ...]
    category: str
    template: str
    suggested_for: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "category": self.category,
            "template": self.template,
            "suggested_for": list(self.suggested_for),
        }


@dataclass(frozen=True)
class AgentLibrary:
    """Versioned collection of agent templates."""

    version: str
    agents: Tuple[AgentTemplate, ...]
    categories: Tuple[str, ...]


@lru_cache(maxsize=1)
def load_library() -> AgentLibrary:
    """Load the packaged agent library; parsed once per process."""
    try:
        text = resources.files(__name__).joinpath(_LIBRARY_RESOURCE).read_text(
            encoding="utf-8"
        )
        data = yaml.safe_load(text)
    except (OSError, yaml.YAMLError) as exc:
        raise CatalogError(f"Failed to load agent library: {exc}") from exc
    return parse_library(data)


def parse_library(data: Any) -> AgentLibrary:
    """Build an :class:`AgentLibrary` from decoded YAML data."""
    if not isinstance(data, Mapping):
        raise CatalogError("Agent library must contain a mapping at the root")
    raw_agents = data.get("agents") or []
    if not isinstance(raw_agents, list):
        raise CatalogError("Agent library 'agents' must be a list")

    agents = tuple(_parse_agent(entry) for entry in raw_agents)
    categories = tuple(str(item) for item in data.get("categories") or [])
    return AgentLibrary(
        version=str(data.get("version", "")),
        agents=agents,
        categories=categories,
    )


def _parse_agent(entry: Any) -> AgentTemplate:
    if not isinstance(entry, Mapping) or not entry.get("id"):
        raise CatalogError(f"Invalid agent entry: {entry!r}")
    return AgentTemplate(
        id=str(entry["id"]),
        name=str(entry.get("name", entry["id"])),
        description=str(entry.get("description", "")),
        tags=tuple(str(tag) for tag in entry.get("tags") or []),
        category=str(entry.get("category", "")),
        template=str(entry.get("template", "")),
        suggested_for=tuple(str(tech) for tech in entry.get("suggested_for") or []),
    )


def get_agent(agent_id: str) -> Optional[AgentTemplate]:
    """Return the agent with ``agent_id`` or ``None``."""
    for agent in load_library().agents:
        if agent.id == agent_id:
            return agent
    return None


def filter_agents(predicate: Callable[[AgentTemplate], bool]) -> List[AgentTemplate]:
    return [agent for agent in load_library().agents if predicate(agent)]


def agents_by_category(category: str) -> List[AgentTemplate]:
    return filter_agents(lambda agent: agent.category == category)


def search_agents(keyword: str) -> List[AgentTemplate]:
    """Case-insensitive search over agent names, descriptions and tags."""
    needle = keyword.lower()

    def _matches(agent: AgentTemplate) -> bool:
        return (
            needle in agent.name.lower()
            or needle in agent.description.lower()
            or any(needle in tag.lower() for tag in agent.tags)
        )

    return filter_agents(_matches)


def suggested_for_technologies(technologies: Iterable[str]) -> List[AgentTemplate]:
    """Return agents whose ``suggested_for`` overlaps the technologies.

    A technology and a hint overlap when either contains the other,
    compared case-insensitively.
    """
    techs = [tech.lower() for tech in technologies if tech]

    def _matches(agent: AgentTemplate) -> bool:
        for hint in agent.suggested_for:
            hint = hint.lower()
            if any(hint in tech or tech in hint for tech in techs):
                return True
        return False

    return filter_agents(_matches)


def resolve_agents(agent_ids: Iterable[str]) -> List[AgentTemplate]:
    """Map agent ids to templates, skipping ids missing from the catalog."""
    resolved: List[AgentTemplate] = []
    for agent_id in agent_ids:
        agent = get_agent(agent_id)
        if agent is not None:
            resolved.append(agent)
    return resolved


def render_agent_file(
    agent: AgentTemplate, custom_instructions: str | None = None
) -> str:
    """Render ``agent`` as a markdown file with YAML front matter."""
    env = _environment()
    frontmatter = yaml.safe_dump(
        {
            "name": agent.name,
            "description": agent.description,
            "tags": list(agent.tags),
        },
        sort_keys=False,
        default_flow_style=None,
    )
    try:
        body = env.from_string(agent.template).render(
            id=agent.id,
            name=agent.name,
            description=agent.description,
            category=agent.category,
        )
        return env.from_string(_AGENT_FILE_TEMPLATE).render(
            frontmatter=frontmatter,
            body=body.strip(),
            custom_instructions=(custom_instructions or "").strip(),
        )
    except TemplateError as exc:
        raise CatalogError(f"Failed to render agent '{agent.id}': {exc}") from exc


def save_agent_file(content: str, file_path: Path) -> Path:
    """Write rendered agent ``content`` to ``file_path``."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=StrictUndefined,
    )


__all__ = [
    "AgentLibrary",
    "AgentTemplate",
    "CatalogError",
    "agents_by_category",
    "filter_agents",
    "get_agent",
    "load_library",
    "parse_library",
    "render_agent_file",
    "resolve_agents",
    "save_agent_file",
    "search_agents",
    "suggested_for_technologies",
]
