"""Target schema tree - the Mondrian schema built by the core.

These types carry every decision the builder makes. The renderer only maps
them to XML elements and attributes.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self

OUTER_ALIAS = "a"
BASE_ALIAS = "b"


class DimensionType(str, Enum):
    """Mondrian dimension types."""

    STANDARD = "StandardDimension"
    TIME = "TimeDimension"


class LevelType(str, Enum):
    """Mondrian level types."""

    REGULAR = "Regular"
    TIME_HALF_YEARS = "TimeHalfYears"
    TIME_HALF_YEAR = "TimeHalfYear"
    TIME_WEEKS = "TimeWeeks"
    TIME_DAYS = "TimeDays"
    TIME_MONTHS = "TimeMonths"
    TIME_QUARTERS = "TimeQuarters"
    TIME_YEARS = "TimeYears"
    TIME_UNDEFINED = "TimeUndefined"


class TableRef(BaseModel):
    """A physical table reference."""

    name: str
    schema_name: str | None = None
    alias: str | None = None

    model_config = {"frozen": True}


class Join(BaseModel):
    """Snowflake join between the outer table (a) and the base table (b)."""

    left: TableRef
    right: TableRef
    left_key: str
    right_key: str

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_aliases(self) -> Self:
        if self.left.alias != OUTER_ALIAS or self.right.alias != BASE_ALIAS:
            raise ValueError(
                f"Join tables must be aliased '{OUTER_ALIAS}' and '{BASE_ALIAS}', "
                f"got '{self.left.alias}' and '{self.right.alias}'"
            )
        return self

    @property
    def left_alias(self) -> str:
        return OUTER_ALIAS

    @property
    def right_alias(self) -> str:
        return BASE_ALIAS

    @property
    def tables(self) -> list[TableRef]:
        return [self.left, self.right]


class TargetLevel(BaseModel):
    name: str
    visible: bool = True
    column: str
    table: str | None = None  # Alias, only inside a snowflake hierarchy
    type: str = "String"
    level_type: LevelType = LevelType.REGULAR
    hide_member_if: str = "Never"

    model_config = {"frozen": True}


class TargetHierarchy(BaseModel):
    """A hierarchy over either a single table or a snowflake join."""

    name: str
    visible: bool = True
    has_all: bool = True
    all_member_name: str | None = None
    primary_key: str
    primary_key_table: str | None = None
    table: TableRef | None = None
    join: Join | None = None
    levels: list[TargetLevel] = Field(default_factory=list)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_relation(self) -> Self:
        """Exactly one of table or join must be set."""
        if (self.table is None) == (self.join is None):
            raise ValueError(
                f"Hierarchy '{self.name}' needs exactly one of table or join"
            )
        return self


class TargetDimension(BaseModel):
    """A shared dimension."""

    name: str
    visible: bool = True
    type: DimensionType = DimensionType.STANDARD
    high_cardinality: bool = False
    foreign_key: str
    join: Join | None = None
    hierarchies: list[TargetHierarchy] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def is_snowflaked(self) -> bool:
        return self.join is not None


class DimensionUsage(BaseModel):
    """Reference from a cube to a shared dimension."""

    name: str
    source: str
    foreign_key: str
    visible: bool = True
    high_cardinality: bool = False

    model_config = {"frozen": True}


class TargetMeasure(BaseModel):
    name: str
    column: str
    format_string: str = ""
    aggregator: str

    model_config = {"frozen": True}


class CalculatedMember(BaseModel):
    """A measure defined by a formula."""

    name: str
    dimension: str = "Measures"
    visible: bool = True
    formula: str
    format_string: str = ""

    model_config = {"frozen": True}


class TargetCube(BaseModel):
    """A physical cube, one per source measure group."""

    name: str
    visible: bool = True
    cache: bool = True
    enabled: bool = True
    table: TableRef
    dimension_usages: list[DimensionUsage] = Field(default_factory=list)
    measures: list[TargetMeasure] = Field(default_factory=list)
    calculated_members: list[CalculatedMember] = Field(default_factory=list)

    model_config = {"frozen": True}


class VirtualCubeDimension(BaseModel):
    cube_name: str
    name: str

    model_config = {"frozen": True}


class VirtualCubeMeasure(BaseModel):
    cube_name: str
    name: str
    visible: bool = True

    model_config = {"frozen": True}

    @property
    def member(self) -> str:
        """Unique member name, e.g. ``[Measures].[Sales Amount]``."""
        return f"[Measures].[{self.name}]"


class VirtualCube(BaseModel):
    """Union of every measure group cube."""

    name: str
    enabled: bool = True
    dimensions: list[VirtualCubeDimension] = Field(default_factory=list)
    measures: list[VirtualCubeMeasure] = Field(default_factory=list)
    calculated_members: list[CalculatedMember] = Field(default_factory=list)

    model_config = {"frozen": True}


class TargetSchema(BaseModel):
    """A complete Mondrian schema."""

    name: str
    dimensions: list[TargetDimension] = Field(default_factory=list)
    cubes: list[TargetCube] = Field(default_factory=list)
    virtual_cube: VirtualCube

    model_config = {"frozen": True}

    def get_cube(self, name: str) -> TargetCube | None:
        for cube in self.cubes:
            if cube.name == name:
                return cube
        return None

    def get_dimension(self, name: str) -> TargetDimension | None:
        for dim in self.dimensions:
            if dim.name == name:
                return dim
        return None

    def summary(self) -> str:
        measures = sum(len(c.measures) for c in self.cubes)
        calculated = len(self.virtual_cube.calculated_members)
        return (
            f"TargetSchema({self.name}): "
            f"{len(self.dimensions)} dimensions, "
            f"{len(self.cubes)} cubes, "
            f"{measures} measures ({calculated} calculated)"
        )
