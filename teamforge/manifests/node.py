"""Parser for Node.js ``package.json`` manifests."""

from __future__ import annotations

import json
from typing import Any, List

from .base import ManifestDescriptor, ManifestError, ManifestParser, frozen_table

_DEPENDENCY_SECTIONS = ("dependencies", "devDependencies")
_RUNTIME_SCRIPTS = ("dev", "start")

NODE_DEPENDENCIES = frozen_table(
    {
        "react": "react",
        "vue": "vue",
        "angular": "angular",
        "svelte": "svelte",
        "next": "next",
        "nuxt": "nuxt",
        "express": "express",
        "fastify": "fastify",
        "koa": "koa",
        "nest": "nestjs",
        "@nestjs/core": "nestjs",
        "typescript": "typescript",
        "vite": "vite",
        "webpack": "webpack",
        "jest": "jest",
        "vitest": "vitest",
        "cypress": "cypress",
        "playwright": "playwright",
        "@playwright/test": "playwright",
        "@tauri-apps/cli": "tauri",
        "@tauri-apps/api": "tauri",
        "electron": "electron",
        "react-native": "react-native",
        "pg": "postgres",
        "mysql": "mysql",
        "mysql2": "mysql",
        "mongodb": "mongodb",
        "mongoose": "mongodb",
        "dockerode": "docker",
    }
)


class NodeManifestParser(ManifestParser):
    """Matches dependency keys exactly and detects runnable Node scripts."""

    descriptor = ManifestDescriptor(
        file_name="package.json",
        language=None,
        dependencies=NODE_DEPENDENCIES,
    )

    def parse(self, content: str) -> List[str]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ManifestError(f"Invalid package.json: {exc}") from exc
        if not isinstance(data, dict):
            raise ManifestError("package.json must contain an object at the root")

        technologies = self._implied()
        for section in _DEPENDENCY_SECTIONS:
            technologies.extend(self._match_dependencies(data.get(section)))

        scripts = data.get("scripts")
        if isinstance(scripts, dict) and any(name in scripts for name in _RUNTIME_SCRIPTS):
            technologies.append("node")

        return technologies

    def _match_dependencies(self, section: Any) -> List[str]:
        if not isinstance(section, dict):
            return []
        table = self.descriptor.dependencies
        return [table[name] for name in section if name in table]
