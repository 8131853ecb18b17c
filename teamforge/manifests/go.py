"""Parser for Go ``go.mod`` module files."""

from __future__ import annotations

from typing import List

from .base import ManifestDescriptor, ManifestParser, frozen_table

GO_MODULES = frozen_table(
    {
        "gin-gonic/gin": "gin",
        "gofiber/fiber": "fiber",
        "labstack/echo": "echo",
        "gorilla/mux": "gorilla",
        "lib/pq": "postgres",
        "jackc/pgx": "postgres",
        "go-sql-driver/mysql": "mysql",
        "mongo-driver": "mongodb",
        "docker/docker": "docker",
    }
)


class GoModParser(ManifestParser):
    """Looks for known import-path fragments on each line of ``go.mod``."""

    descriptor = ManifestDescriptor(
        file_name="go.mod",
        language="go",
        dependencies=GO_MODULES,
    )

    def parse(self, content: str) -> List[str]:
        technologies = self._implied()
        for line in content.splitlines():
            for fragment, tag in self.descriptor.dependencies.items():
                if fragment in line:
                    technologies.append(tag)
        return technologies
