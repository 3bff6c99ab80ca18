"""SnapshotLoader - loads exported cube metadata from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

SNAPSHOT_PATTERNS = ["**/*.yml", "**/*.yaml", "**/*.json"]


class SnapshotLoader:
    """
    Load metadata snapshot files.

    Handles:
    - A single file or every snapshot file under a directory (recursively)
    - YAML and JSON documents
    - Collecting `databases:` entries in file order
    """

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path)

    def load_all(self) -> list[dict[str, Any]]:
        """Load all database entries from every snapshot file."""
        databases: list[dict[str, Any]] = []
        for file_path in self._find_files():
            doc = self._load_file(file_path)
            entries = doc.get("databases") or []
            if not isinstance(entries, list):
                raise ValueError(
                    f"Expected a list of databases in {file_path}, got {type(entries)}"
                )
            databases.extend(entries)
        return databases

    def _find_files(self) -> list[Path]:
        if not self.base_path.exists():
            raise FileNotFoundError(f"Snapshot not found: {self.base_path}")
        if self.base_path.is_file():
            return [self.base_path]

        files: list[Path] = []
        for pattern in SNAPSHOT_PATTERNS:
            files.extend(p for p in self.base_path.glob(pattern) if p.is_file())
        # Sort for deterministic ordering
        return sorted(set(files))

    def _load_file(self, file_path: Path) -> dict[str, Any]:
        """Load and parse a single snapshot file."""
        with open(file_path, encoding="utf-8") as f:
            if file_path.suffix == ".json":
                content = json.load(f)
            else:
                content = yaml.safe_load(f)

        if content is None:
            return {}

        if not isinstance(content, dict):
            raise ValueError(
                f"Expected dict at root of {file_path}, got {type(content)}"
            )

        return content
