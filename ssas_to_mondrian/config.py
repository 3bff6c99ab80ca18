"""Configuration schema for ssas-to-mondrian.

Options come from the command line, optionally layered over an
ssas2mondrian.yml file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class ConversionConfig(BaseModel):
    """
    Root configuration for a conversion run.

    Example:
        server: ./snapshots/adventure_works.yml
        database: AdventureWorks  # empty converts every database
        cube: Adventure Works  # empty converts every cube
        name: adventure_works  # defaults to the database name
        include_schema: true
        include_many_to_many: false
        include_all_member: true
    """

    server: str
    database: str = ""
    cube: str = ""
    schema_name: str | None = Field(None, alias="name")
    include_schema: bool = False
    include_many_to_many: bool = False
    include_all_member: bool = False
    pause: bool = False

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    @field_validator("server")
    @classmethod
    def validate_server(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("server is required")
        return v.strip()

    @field_validator("database", "cube", mode="before")
    @classmethod
    def normalize_filter(cls, v: Any) -> str:
        """Treat a missing filter as 'match everything'."""
        if v is None:
            return ""
        return str(v)

    @property
    def effective_schema_name(self) -> str:
        """Schema name, defaulting to the database name."""
        return self.schema_name or self.database

    def matches_database(self, name: str) -> bool:
        return self.database == "" or self.database == name

    def matches_cube(self, name: str) -> bool:
        return self.cube == "" or self.cube == name

    @classmethod
    def from_sources(
        cls, file_data: dict[str, Any] | None = None, **overrides: Any
    ) -> ConversionConfig:
        """Layer non-None overrides (command-line options) over file data."""
        data = dict(file_data or {})
        if "name" in data and "schema_name" in overrides:
            data["schema_name"] = data.pop("name")
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls.model_validate(data)


CONFIG_FILENAMES = ["ssas2mondrian.yml", "ssas2mondrian.yaml", ".ssas2mondrian.yml"]


def find_config(start_dir: Path | str | None = None) -> Path | None:
    """Find the nearest config file in start_dir (default: cwd) or a parent."""
    current = Path(start_dir or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        for filename in CONFIG_FILENAMES:
            candidate = directory / filename
            if candidate.is_file():
                return candidate
    return None


def read_config_file(path: Path | str) -> dict[str, Any]:
    """Read raw config values from a YAML file."""
    content = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at root of {path}, got {type(data)}")
    return data


def load_config(
    path: Path | str | None = None,
    start_dir: Path | str | None = None,
    **overrides: Any,
) -> ConversionConfig:
    """
    Build the run configuration from a config file plus overrides.

    An explicit path must exist. Without one, the nearest ssas2mondrian.yml
    found from start_dir upward is used, and running without any file is
    fine as long as the overrides name a server.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If the file root is not a mapping
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the merged config is invalid
    """
    if path is None:
        path = find_config(start_dir)
        if path is not None:
            logger.debug("Using config file %s", path)
    elif not Path(path).is_file():
        raise FileNotFoundError(f"Config file not found: {path}")

    file_data = read_config_file(path) if path is not None else {}
    return ConversionConfig.from_sources(file_data, **overrides)
