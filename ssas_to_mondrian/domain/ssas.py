"""Source cube model - the read-only metadata exposed by a provider.

Mirrors the Analysis Services object model closely enough for conversion:
databases own cubes, cubes own dimensions and measure groups.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag, model_validator
from typing_extensions import Self

TIME_DIMENSION_TYPE = "Time"


class Attribute(BaseModel):
    """A dimension attribute bound to one or more key columns."""

    name: str
    key_columns: list[str] = Field(..., min_length=1)
    data_type: str = "WChar"  # Data type of the first key column
    type: str = "Regular"  # Time classification, e.g. "Months", "FiscalQuarter"
    name_column: str | None = None
    visible: bool = True  # AttributeHierarchyVisible

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def key_column(self) -> str:
        """First key column. Composite keys are not supported."""
        return self.key_columns[0]


class Level(BaseModel):
    """A hierarchy level, sourced from a dimension attribute."""

    name: str
    source_attribute: str

    model_config = {"frozen": True, "extra": "forbid"}


class Hierarchy(BaseModel):
    """A user-defined hierarchy."""

    name: str
    visible: bool = True
    all_member_name: str | None = None
    levels: list[Level] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}


class CubeDimension(BaseModel):
    """A dimension as used by a cube."""

    name: str
    type: str = "Regular"
    visible: bool = True
    key_attribute: str | None = None
    attributes: list[Attribute] = Field(..., min_length=1)
    hierarchies: list[Hierarchy] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}

    @model_validator(mode="after")
    def validate_attribute_references(self) -> Self:
        """Ensure the key attribute and every level source attribute exist."""
        names = {a.name for a in self.attributes}
        if self.key_attribute is not None and self.key_attribute not in names:
            raise ValueError(
                f"Dimension '{self.name}': key_attribute '{self.key_attribute}' "
                f"is not an attribute"
            )
        for hierarchy in self.hierarchies:
            for level in hierarchy.levels:
                if level.source_attribute not in names:
                    raise ValueError(
                        f"Dimension '{self.name}': level '{hierarchy.name}.{level.name}' "
                        f"references unknown attribute '{level.source_attribute}'"
                    )
        return self

    @property
    def is_time(self) -> bool:
        return self.type == TIME_DIMENSION_TYPE

    @property
    def primary_attribute(self) -> Attribute:
        """The key attribute, falling back to the first attribute."""
        if self.key_attribute is not None:
            found = self.get_attribute(self.key_attribute)
            if found is not None:
                return found
        return self.attributes[0]

    def get_attribute(self, name: str) -> Attribute | None:
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


class RegularLink(BaseModel):
    """Direct fact-to-dimension relationship."""

    type: Literal["regular"] = "regular"
    dimension: str

    model_config = {"frozen": True, "extra": "forbid"}


class ManyToManyLink(BaseModel):
    """Relationship through an intermediate measure group."""

    type: Literal["many_to_many"]
    dimension: str
    intermediate_measure_group: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}


class DataMiningLink(BaseModel):
    """Relationship through a mining model. Never converted."""

    type: Literal["data_mining"]
    dimension: str

    model_config = {"frozen": True, "extra": "forbid"}


class ReferenceLink(BaseModel):
    """Snowflake relationship through an intermediate dimension.

    The intermediate fields are optional: a provider may not expose them,
    in which case the dimension is treated as directly joined.
    """

    type: Literal["reference"]
    dimension: str
    intermediate_dimension: str | None = None
    intermediate_attribute: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def has_intermediate(self) -> bool:
        return bool(self.intermediate_dimension and self.intermediate_attribute)


def _link_type(value: Any) -> str:
    """Link discriminator; links without a type are regular."""
    if isinstance(value, dict):
        return value.get("type", "regular")
    return getattr(value, "type", "regular")


MeasureGroupDimension = Annotated[
    Union[
        Annotated[RegularLink, Tag("regular")],
        Annotated[ManyToManyLink, Tag("many_to_many")],
        Annotated[DataMiningLink, Tag("data_mining")],
        Annotated[ReferenceLink, Tag("reference")],
    ],
    Discriminator(_link_type),
]


class Measure(BaseModel):
    """A measure bound to a fact column, optionally with an expression."""

    name: str
    source: str  # Qualified column identifier
    aggregate_function: str = "Sum"
    format_string: str = ""
    visible: bool = True
    expression: str | None = None

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_calculated(self) -> bool:
        """True when the measure carries a non-empty scalar expression."""
        return bool(self.expression)


class MeasureGroup(BaseModel):
    """Measures sharing a fact table and dimensionality."""

    name: str
    measures: list[Measure] = Field(..., min_length=1)
    dimensions: list[MeasureGroupDimension] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}


class Cube(BaseModel):
    """A cube: dimensions plus measure groups."""

    name: str
    dimensions: list[CubeDimension] = Field(default_factory=list)
    measure_groups: list[MeasureGroup] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}

    def get_dimension(self, name: str) -> CubeDimension | None:
        for dim in self.dimensions:
            if dim.name == name:
                return dim
        return None


class Database(BaseModel):
    """An Analysis Services database."""

    name: str
    cubes: list[Cube] = Field(default_factory=list)

    model_config = {"frozen": True, "extra": "forbid"}


class Server(BaseModel):
    """Everything a provider connection exposes."""

    databases: list[Database] = Field(default_factory=list)

    model_config = {"frozen": True}

    def summary(self) -> str:
        cubes = sum(len(db.cubes) for db in self.databases)
        return f"Server: {len(self.databases)} databases, {cubes} cubes"
