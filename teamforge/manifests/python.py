"""Parser for Python ``requirements.txt`` files."""

from __future__ import annotations

from typing import List

from .base import ManifestDescriptor, ManifestParser, frozen_table

PYTHON_KEYWORDS = frozen_table(
    {
        "django": "django",
        "flask": "flask",
        "fastapi": "fastapi",
        "tornado": "tornado",
        "pyramid": "pyramid",
        "pandas": "pandas",
        "numpy": "numpy",
        "tensorflow": "tensorflow",
        "pytorch": "pytorch",
        "torch": "pytorch",
        "scikit-learn": "sklearn",
        "pytest": "pytest",
        "psycopg": "postgres",
        "mysql": "mysql",
        "pymongo": "mongodb",
        "docker": "docker",
    }
)


class RequirementsParser(ManifestParser):
    """Matches requirement lines by substring so extras and forks still count."""

    descriptor = ManifestDescriptor(
        file_name="requirements.txt",
        language="python",
        dependencies=PYTHON_KEYWORDS,
    )

    def parse(self, content: str) -> List[str]:
        technologies = self._implied()
        for line in content.splitlines():
            package = line.split("==", 1)[0].strip().lower()
            if not package:
                continue
            for keyword, tag in self.descriptor.dependencies.items():
                if keyword in package:
                    technologies.append(tag)
        return technologies
