"""Shared fixtures for ssas-to-mondrian tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from ssas_to_mondrian.config import ConversionConfig
from ssas_to_mondrian.domain import Cube, Server
from ssas_to_mondrian.ingestion import SnapshotProvider

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def snapshot_path() -> Path:
    """Path to the Adventure Works snapshot."""
    return FIXTURES_DIR / "adventure_works.yml"


@pytest.fixture
def server(snapshot_path: Path) -> Server:
    """The Adventure Works snapshot loaded through the provider."""
    return SnapshotProvider().connect(str(snapshot_path))


@pytest.fixture
def adventure_works(server: Server) -> Cube:
    """The Adventure Works cube."""
    return server.databases[0].cubes[0]


def make_config(**kwargs: Any) -> ConversionConfig:
    """Config with a placeholder server and the given options."""
    data: dict[str, Any] = {"server": "snapshot.yml", "database": "AdventureWorks"}
    data.update(kwargs)
    return ConversionConfig.model_validate(data)


def make_cube(
    dimensions: list[dict[str, Any]],
    measure_groups: list[dict[str, Any]],
    name: str = "Sales",
) -> Cube:
    """Build a cube from plain dicts, the same shape as snapshot files."""
    return Cube.model_validate(
        {"name": name, "dimensions": dimensions, "measure_groups": measure_groups}
    )


def make_server(cube: Cube, database: str = "AdventureWorks") -> Server:
    return Server.model_validate(
        {"databases": [{"name": database, "cubes": [cube.model_dump()]}]}
    )


def simple_dimension(name: str, table: str, **kwargs: Any) -> dict[str, Any]:
    """A two-attribute standard dimension on one table."""
    dim: dict[str, Any] = {
        "name": name,
        "attributes": [
            {"name": f"{name} Key", "key_columns": [f"{table}.{name}Key"], "data_type": "Integer"},
            {"name": f"{name} Name", "key_columns": [f"{table}.{name}Name"], "data_type": "WChar"},
        ],
    }
    dim.update(kwargs)
    return dim
