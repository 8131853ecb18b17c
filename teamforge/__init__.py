"""Project technology detection and agent suggestions."""

from .analyzer import ProjectAnalyzer, analyze_project
from .models import ProjectAnalysis, ProjectType

__all__ = ["ProjectAnalysis", "ProjectAnalyzer", "ProjectType", "analyze_project"]
