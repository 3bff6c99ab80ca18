"""Mondrian Renderer - serializes a TargetSchema to Mondrian schema XML."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path

from ssas_to_mondrian.domain.mondrian import (
    CalculatedMember,
    DimensionUsage,
    Join,
    TableRef,
    TargetCube,
    TargetDimension,
    TargetHierarchy,
    TargetLevel,
    TargetMeasure,
    TargetSchema,
    VirtualCube,
)


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _attrs(**values: str | bool | None) -> dict[str, str]:
    """Build an attribute dict, dropping unset values."""
    attrs: dict[str, str] = {}
    for key, value in values.items():
        if value is None:
            continue
        attrs[key] = _bool(value) if isinstance(value, bool) else value
    return attrs


class MondrianRenderer:
    """
    Render a TargetSchema as a Mondrian schema document.

    Element order follows the schema tree: shared dimensions, cubes, then
    the virtual cube.
    """

    def __init__(self, indent: str = "  ") -> None:
        self.indent = indent

    def render(self, schema: TargetSchema) -> str:
        """Render the schema to an XML string."""
        root = self.render_element(schema)
        ET.indent(root, space=self.indent)
        return ET.tostring(root, encoding="unicode") + "\n"

    def render_to_file(self, schema: TargetSchema, path: str | Path) -> Path:
        """Render and write the schema. Returns the written path."""
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(schema), encoding="utf-8")
        return output_path

    def render_element(self, schema: TargetSchema) -> ET.Element:
        root = ET.Element("Schema", _attrs(name=schema.name))
        for dim in schema.dimensions:
            self._render_dimension(root, dim)
        for cube in schema.cubes:
            self._render_cube(root, cube)
        self._render_virtual_cube(root, schema.virtual_cube)
        return root

    # Dimensions

    def _render_dimension(self, parent: ET.Element, dim: TargetDimension) -> None:
        element = ET.SubElement(
            parent,
            "Dimension",
            _attrs(
                visible=dim.visible,
                type=dim.type.value,
                highCardinality=dim.high_cardinality,
                name=dim.name,
            ),
        )
        for hierarchy in dim.hierarchies:
            self._render_hierarchy(element, hierarchy)

    def _render_hierarchy(self, parent: ET.Element, hierarchy: TargetHierarchy) -> None:
        element = ET.SubElement(
            parent,
            "Hierarchy",
            _attrs(
                name=hierarchy.name,
                visible=hierarchy.visible,
                hasAll=hierarchy.has_all,
                allMemberName=hierarchy.all_member_name,
                primaryKey=hierarchy.primary_key,
                primaryKeyTable=hierarchy.primary_key_table,
            ),
        )
        if hierarchy.join is not None:
            self._render_join(element, hierarchy.join)
        elif hierarchy.table is not None:
            self._render_table(element, hierarchy.table)
        for level in hierarchy.levels:
            self._render_level(element, level)

    def _render_join(self, parent: ET.Element, join: Join) -> None:
        element = ET.SubElement(
            parent,
            "Join",
            _attrs(
                leftAlias=join.left_alias,
                leftKey=join.left_key,
                rightAlias=join.right_alias,
                rightKey=join.right_key,
            ),
        )
        for table in join.tables:
            self._render_table(element, table)

    def _render_table(self, parent: ET.Element, table: TableRef) -> None:
        ET.SubElement(
            parent,
            "Table",
            _attrs(name=table.name, schema=table.schema_name, alias=table.alias),
        )

    def _render_level(self, parent: ET.Element, level: TargetLevel) -> None:
        ET.SubElement(
            parent,
            "Level",
            _attrs(
                name=level.name,
                visible=level.visible,
                table=level.table,
                column=level.column,
                type=level.type,
                levelType=level.level_type.value,
                hideMemberIf=level.hide_member_if,
            ),
        )

    # Cubes

    def _render_cube(self, parent: ET.Element, cube: TargetCube) -> None:
        element = ET.SubElement(
            parent,
            "Cube",
            _attrs(
                name=cube.name,
                visible=cube.visible,
                cache=cube.cache,
                enabled=cube.enabled,
            ),
        )
        self._render_table(element, cube.table)
        for usage in cube.dimension_usages:
            self._render_dimension_usage(element, usage)
        for measure in cube.measures:
            self._render_measure(element, measure)
        for member in cube.calculated_members:
            self._render_calculated_member(element, member)

    def _render_dimension_usage(self, parent: ET.Element, usage: DimensionUsage) -> None:
        ET.SubElement(
            parent,
            "DimensionUsage",
            _attrs(
                source=usage.source,
                foreignKey=usage.foreign_key,
                visible=usage.visible,
                highCardinality=usage.high_cardinality,
                name=usage.name,
            ),
        )

    def _render_measure(self, parent: ET.Element, measure: TargetMeasure) -> None:
        ET.SubElement(
            parent,
            "Measure",
            _attrs(
                name=measure.name,
                column=measure.column,
                formatString=measure.format_string,
                aggregator=measure.aggregator,
            ),
        )

    def _render_calculated_member(
        self, parent: ET.Element, member: CalculatedMember
    ) -> None:
        element = ET.SubElement(
            parent,
            "CalculatedMember",
            _attrs(name=member.name, dimension=member.dimension, visible=member.visible),
        )
        formula = ET.SubElement(element, "Formula")
        formula.text = member.formula
        ET.SubElement(
            element,
            "CalculatedMemberProperty",
            _attrs(name="FORMAT_STRING", value=member.format_string),
        )

    # Virtual cube

    def _render_virtual_cube(self, parent: ET.Element, cube: VirtualCube) -> None:
        element = ET.SubElement(
            parent, "VirtualCube", _attrs(enabled=cube.enabled, name=cube.name)
        )
        for dim in cube.dimensions:
            ET.SubElement(
                element,
                "VirtualCubeDimension",
                _attrs(cubeName=dim.cube_name, name=dim.name),
            )
        for measure in cube.measures:
            ET.SubElement(
                element,
                "VirtualCubeMeasure",
                _attrs(
                    cubeName=measure.cube_name,
                    name=measure.member,
                    visible=measure.visible,
                ),
            )
        for member in cube.calculated_members:
            self._render_calculated_member(element, member)


def render_schema(schema: TargetSchema) -> str:
    """Render a schema with default settings."""
    return MondrianRenderer().render(schema)
