"""Core conversion logic: taxonomy mapping, classification and schema building."""

from ssas_to_mondrian.core.builder import BuildStatistics, SchemaBuilder, build_schema
from ssas_to_mondrian.core.classifier import (
    Classification,
    DimensionClassifier,
    ReferenceJoin,
)
from ssas_to_mondrian.core.identifiers import (
    QualifiedColumn,
    QualifiedTable,
    is_qualified,
    resolve_identifier,
    resolve_table,
)
from ssas_to_mondrian.core.taxonomy import (
    level_type_for,
    map_aggregator,
    map_data_type,
    map_level_type,
)
from ssas_to_mondrian.core.virtual_cube import VirtualCubeAssembler

__all__ = [
    "BuildStatistics",
    "Classification",
    "DimensionClassifier",
    "QualifiedColumn",
    "QualifiedTable",
    "ReferenceJoin",
    "SchemaBuilder",
    "VirtualCubeAssembler",
    "build_schema",
    "is_qualified",
    "level_type_for",
    "map_aggregator",
    "map_data_type",
    "map_level_type",
    "resolve_identifier",
    "resolve_table",
]
