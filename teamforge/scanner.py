"""Bounded directory walk producing file-extension statistics."""

from __future__ import annotations

import os
from collections import Counter
from pathlib import Path
from typing import Iterator, List, Tuple

from .logging import get_logger
from .models import ScanResult

MAX_DEPTH = 5

_LOGGER = get_logger("scanner")


def _extension(name: str) -> str | None:
    # Dotfiles such as ".gitignore" have no extension.
    stem, dot, suffix = name.rpartition(".")
    if not dot or not stem or not suffix:
        return None
    return suffix


def _iter_file_names(root: Path, max_depth: int) -> Iterator[str]:
    """Yield names of regular files at most ``max_depth`` levels below ``root``.

    Files directly inside ``root`` are at depth 1. Symlinks are never followed
    and unreadable directories are skipped.
    """
    stack: List[Tuple[str, int]] = [(str(root), 0)]
    while stack:
        directory, depth = stack.pop()
        try:
            with os.scandir(directory) as entries:
                children = list(entries)
        except OSError as exc:
            _LOGGER.debug("Skipping unreadable directory %s: %s", directory, exc)
            continue

        for entry in children:
            try:
                if entry.is_file(follow_symlinks=False):
                    if depth + 1 <= max_depth:
                        yield entry.name
                elif entry.is_dir(follow_symlinks=False) and depth + 1 < max_depth:
                    stack.append((entry.path, depth + 1))
            except OSError as exc:
                _LOGGER.debug("Skipping unreadable entry %s: %s", entry.path, exc)


def scan_files(root: Path, *, max_depth: int = MAX_DEPTH) -> ScanResult:
    """Count files by extension beneath ``root`` up to ``max_depth`` levels deep."""
    counts: Counter[str] = Counter()
    total = 0
    for name in _iter_file_names(root, max_depth):
        total += 1
        extension = _extension(name)
        if extension is not None:
            counts[extension] += 1
    return ScanResult(file_counts=dict(counts), total_files=total)


__all__ = ["MAX_DEPTH", "scan_files"]
