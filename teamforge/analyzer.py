"""Project analysis entrypoint combining manifests, file statistics and rules."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from .classifier import classify_project, suggest_agents
from .logging import get_logger
from .manifests import PARSERS, ManifestError, ManifestParser
from .models import ProjectAnalysis
from .scanner import MAX_DEPTH, scan_files

_LOGGER = get_logger("analyzer")


def normalize_technologies(technologies: Iterable[str]) -> Tuple[str, ...]:
    """Lowercase, deduplicate and sort technology tags."""
    cleaned = {tag.strip().lower() for tag in technologies}
    cleaned.discard("")
    return tuple(sorted(cleaned))


class ProjectAnalyzer:
    """Detects technologies, classifies a project and suggests agents."""

    def __init__(
        self,
        parsers: Sequence[ManifestParser] = PARSERS,
        *,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        self._parsers = tuple(parsers)
        self._max_depth = max_depth

    def analyze(self, root: str | Path) -> ProjectAnalysis:
        """Return the analysis for the project rooted at ``root``."""
        root_path = Path(root).expanduser()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        try:
            with os.scandir(root_path):
                pass
        except OSError as exc:
            raise PermissionError(f"Project path is not readable: {root}") from exc

        evidence = self.collect_technologies(root_path)
        scan = scan_files(root_path, max_depth=self._max_depth)

        technologies = normalize_technologies(evidence)
        project_type = classify_project(technologies, scan.file_counts, scan.total_files)
        suggested = suggest_agents(project_type, technologies)

        _LOGGER.debug(
            "Analyzed %s: type=%s technologies=%s files=%d",
            root_path,
            project_type.value,
            ", ".join(technologies) or "-",
            scan.total_files,
        )

        return ProjectAnalysis(
            project_type=project_type,
            detected_technologies=technologies,
            file_counts=scan.file_counts,
            total_files=scan.total_files,
            suggested_agents=suggested,
        )

    def collect_technologies(self, root: Path) -> List[str]:
        """Parse every known manifest present at ``root``; failures are skipped."""
        technologies: List[str] = []
        for parser in self._parsers:
            manifest = root / parser.file_name
            if not manifest.is_file():
                continue
            try:
                content = manifest.read_text(encoding="utf-8-sig", errors="replace")
                technologies.extend(parser.parse(content))
            except (OSError, ManifestError) as exc:
                _LOGGER.debug("Ignoring %s: %s", manifest, exc)
        return technologies


def analyze_project(root: str | Path) -> ProjectAnalysis:
    """Analyze the project at ``root`` with the default manifest parsers."""
    return ProjectAnalyzer().analyze(root)


__all__ = ["ProjectAnalyzer", "analyze_project", "normalize_technologies"]
