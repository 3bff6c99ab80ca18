"""Tests for source and target domain models."""

import pytest
from pydantic import ValidationError

from ssas_to_mondrian.domain import (
    CubeDimension,
    Join,
    Measure,
    MeasureGroup,
    ReferenceLink,
    RegularLink,
    TableRef,
    TargetHierarchy,
)


class TestCubeDimension:
    def test_requires_an_attribute(self) -> None:
        with pytest.raises(ValidationError):
            CubeDimension(name="Empty", attributes=[])

    def test_level_must_reference_attribute(self) -> None:
        with pytest.raises(ValidationError, match="unknown attribute"):
            CubeDimension.model_validate(
                {
                    "name": "Date",
                    "attributes": [{"name": "Year", "key_columns": ["DimDate.Year"]}],
                    "hierarchies": [
                        {"name": "Calendar", "levels": [{"name": "Month", "source_attribute": "Month"}]}
                    ],
                }
            )

    def test_key_attribute_must_exist(self) -> None:
        with pytest.raises(ValidationError, match="key_attribute"):
            CubeDimension.model_validate(
                {
                    "name": "Date",
                    "key_attribute": "Missing",
                    "attributes": [{"name": "Year", "key_columns": ["DimDate.Year"]}],
                }
            )

    def test_primary_attribute(self) -> None:
        dim = CubeDimension.model_validate(
            {
                "name": "Date",
                "type": "Time",
                "key_attribute": "Date",
                "attributes": [
                    {"name": "Year", "key_columns": ["DimDate.Year"]},
                    {"name": "Date", "key_columns": ["DimDate.DateKey", "DimDate.Other"]},
                ],
            }
        )
        assert dim.is_time
        assert dim.primary_attribute.name == "Date"
        assert dim.primary_attribute.key_column == "DimDate.DateKey"


class TestMeasureGroup:
    def test_links_are_discriminated(self) -> None:
        group = MeasureGroup.model_validate(
            {
                "name": "Sales",
                "measures": [{"name": "Amount", "source": "Fact.Amount"}],
                "dimensions": [
                    {"dimension": "Date"},
                    {"type": "reference", "dimension": "Geo"},
                ],
            }
        )
        assert isinstance(group.dimensions[0], RegularLink)
        assert isinstance(group.dimensions[1], ReferenceLink)
        assert not group.dimensions[1].has_intermediate

    def test_unknown_link_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            MeasureGroup.model_validate(
                {
                    "name": "Sales",
                    "measures": [{"name": "Amount", "source": "Fact.Amount"}],
                    "dimensions": [{"type": "fact", "dimension": "Date"}],
                }
            )

    def test_requires_a_measure(self) -> None:
        with pytest.raises(ValidationError):
            MeasureGroup(name="Sales", measures=[])

    def test_measure_is_calculated(self) -> None:
        assert Measure(name="A", source="F.A", expression="[Measures].[B]").is_calculated
        assert not Measure(name="A", source="F.A", expression="").is_calculated
        assert not Measure(name="A", source="F.A").is_calculated


class TestTargetModel:
    def test_join_aliases_validated(self) -> None:
        with pytest.raises(ValidationError, match="aliased"):
            Join(
                left=TableRef(name="A", alias="x"),
                right=TableRef(name="B", alias="b"),
                left_key="k",
                right_key="k",
            )

    def test_hierarchy_needs_table_or_join(self) -> None:
        with pytest.raises(ValidationError, match="exactly one"):
            TargetHierarchy(name="Default", primary_key="id")
