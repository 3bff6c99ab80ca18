"""Domain layer - source cube model and target schema tree.

ssas.py holds the read-only provider object model; mondrian.py holds the
schema tree the core builds from it.
"""

from ssas_to_mondrian.domain.mondrian import (
    CalculatedMember,
    DimensionType,
    DimensionUsage,
    Join,
    LevelType,
    TableRef,
    TargetCube,
    TargetDimension,
    TargetHierarchy,
    TargetLevel,
    TargetMeasure,
    TargetSchema,
    VirtualCube,
    VirtualCubeDimension,
    VirtualCubeMeasure,
)
from ssas_to_mondrian.domain.ssas import (
    Attribute,
    Cube,
    CubeDimension,
    Database,
    DataMiningLink,
    Hierarchy,
    Level,
    ManyToManyLink,
    Measure,
    MeasureGroup,
    MeasureGroupDimension,
    ReferenceLink,
    RegularLink,
    Server,
)

__all__ = [
    # Source
    "Attribute",
    "Cube",
    "CubeDimension",
    "DataMiningLink",
    "Database",
    "Hierarchy",
    "Level",
    "ManyToManyLink",
    "Measure",
    "MeasureGroup",
    "MeasureGroupDimension",
    "ReferenceLink",
    "RegularLink",
    "Server",
    # Target
    "CalculatedMember",
    "DimensionType",
    "DimensionUsage",
    "Join",
    "LevelType",
    "TableRef",
    "TargetCube",
    "TargetDimension",
    "TargetHierarchy",
    "TargetLevel",
    "TargetMeasure",
    "TargetSchema",
    "VirtualCube",
    "VirtualCubeDimension",
    "VirtualCubeMeasure",
]
