"""Base classes for manifest parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional


class ManifestError(ValueError):
    """Raised when a manifest cannot be parsed into technology tags."""


@dataclass(frozen=True)
class ManifestDescriptor:
    """Static description of a known manifest file."""

    file_name: str
    language: Optional[str]
    dependencies: Mapping[str, str]


def frozen_table(entries: Mapping[str, str]) -> Mapping[str, str]:
    """Return a read-only copy of a dependency lookup table."""
    return MappingProxyType(dict(entries))


class ManifestParser(ABC):
    """Contract for parsers that turn manifest text into technology tags."""

    descriptor: ManifestDescriptor

    @property
    def file_name(self) -> str:
        return self.descriptor.file_name

    @abstractmethod
    def parse(self, content: str) -> List[str]:
        """Return technology tags found in ``content``; duplicates are allowed."""

    def _implied(self) -> List[str]:
        language = self.descriptor.language
        return [language] if language else []
