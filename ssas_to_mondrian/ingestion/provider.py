"""Metadata providers - the source of cube metadata for a conversion run."""

from __future__ import annotations

import json
import re
from typing import Protocol

import yaml
from pydantic import ValidationError

from ssas_to_mondrian.domain.ssas import Server
from ssas_to_mondrian.errors import ProviderConnectionError
from ssas_to_mondrian.ingestion.loader import SnapshotLoader

# Provider=MSOLAP;Data Source=<server>;
_DATA_SOURCE_PATTERN = re.compile(r"data source\s*=\s*([^;]*)", re.IGNORECASE)


class MetadataProvider(Protocol):
    """Protocol for OLAP metadata providers.

    A provider connects once and then exposes the read-only object model.
    """

    def connect(self, connection_string: str) -> Server:
        """Connect and return the server's object model.

        Raises:
            ProviderConnectionError: If the connection fails
        """
        ...


def build_connection_string(server: str) -> str:
    """Build an OLE DB style connection string for a server."""
    return f"Provider=MSOLAP;Data Source={server};"


def parse_data_source(connection_string: str) -> str:
    """Extract the data source from a connection string.

    A plain value without ``Data Source=`` is returned as-is.
    """
    match = _DATA_SOURCE_PATTERN.search(connection_string)
    if match:
        return match.group(1).strip()
    return connection_string.strip()


class SnapshotProvider:
    """
    Provider backed by exported metadata snapshot files.

    The data source of the connection string is a snapshot file or a
    directory of snapshot files.
    """

    def connect(self, connection_string: str) -> Server:
        source = parse_data_source(connection_string)
        if not source:
            raise ProviderConnectionError(
                "No data source in connection string", connection_string
            )

        try:
            databases = SnapshotLoader(source).load_all()
            return Server.model_validate({"databases": databases})
        except OSError as e:
            # Missing, unreadable or not a regular file
            raise ProviderConnectionError(str(e), connection_string) from e
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ProviderConnectionError(
                f"Unreadable snapshot {source}: {e}", connection_string
            ) from e
        except (ValidationError, ValueError) as e:
            raise ProviderConnectionError(
                f"Invalid snapshot {source}: {e}", connection_string
            ) from e
