"""Parser for Rust ``Cargo.toml`` manifests."""

from __future__ import annotations

import tomllib
from typing import List

from .base import ManifestDescriptor, ManifestError, ManifestParser, frozen_table

RUST_CRATES = frozen_table(
    {
        "actix-web": "actix",
        "rocket": "rocket",
        "axum": "axum",
        "warp": "warp",
        "tokio": "tokio",
        "async-std": "async-std",
        "tauri": "tauri",
        "tokio-postgres": "postgres",
        "mongodb": "mongodb",
        "bollard": "docker",
    }
)


class CargoParser(ManifestParser):
    """Checks for known crate names in the ``[dependencies]`` table."""

    descriptor = ManifestDescriptor(
        file_name="Cargo.toml",
        language="rust",
        dependencies=RUST_CRATES,
    )

    def parse(self, content: str) -> List[str]:
        try:
            data = tomllib.loads(content)
        except tomllib.TOMLDecodeError as exc:
            raise ManifestError(f"Invalid Cargo.toml: {exc}") from exc

        technologies = self._implied()
        dependencies = data.get("dependencies")
        if isinstance(dependencies, dict):
            for crate, tag in self.descriptor.dependencies.items():
                if crate in dependencies:
                    technologies.append(tag)
        return technologies
