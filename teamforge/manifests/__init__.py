"""Manifest parsers and the static table of recognised manifest files."""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

from .base import ManifestDescriptor, ManifestError, ManifestParser
from .go import GoModParser
from .node import NodeManifestParser
from .python import RequirementsParser
from .rust import CargoParser

# Order in which the analyzer checks manifests.
PARSERS: Tuple[ManifestParser, ...] = (
    NodeManifestParser(),
    RequirementsParser(),
    CargoParser(),
    GoModParser(),
)

MANIFEST_FILES: Tuple[str, ...] = tuple(parser.file_name for parser in PARSERS)

DESCRIPTORS: Mapping[str, ManifestDescriptor] = MappingProxyType(
    {parser.file_name: parser.descriptor for parser in PARSERS}
)

_BY_NAME: Dict[str, ManifestParser] = {parser.file_name: parser for parser in PARSERS}


def get_parser(file_name: str) -> ManifestParser:
    """Return the parser registered for ``file_name``."""
    try:
        return _BY_NAME[file_name]
    except KeyError:
        raise ManifestError(f"Unsupported manifest: {file_name}") from None


def parse_manifest(file_name: str, content: str) -> List[str]:
    """Parse manifest ``content`` using the parser for ``file_name``."""
    return get_parser(file_name).parse(content)


__all__ = [
    "DESCRIPTORS",
    "MANIFEST_FILES",
    "PARSERS",
    "ManifestDescriptor",
    "ManifestError",
    "ManifestParser",
    "get_parser",
    "parse_manifest",
]
