"""Ingestion layer - metadata providers and snapshot loading."""

from ssas_to_mondrian.ingestion.loader import SnapshotLoader
from ssas_to_mondrian.ingestion.provider import (
    MetadataProvider,
    SnapshotProvider,
    build_connection_string,
    parse_data_source,
)

__all__ = [
    "MetadataProvider",
    "SnapshotLoader",
    "SnapshotProvider",
    "build_connection_string",
    "parse_data_source",
]
