"""SchemaBuilder - transforms the source cube model into a Mondrian schema tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ssas_to_mondrian.config import ConversionConfig
from ssas_to_mondrian.core.classifier import (
    Classification,
    DimensionClassifier,
    ReferenceJoin,
)
from ssas_to_mondrian.core.identifiers import (
    QualifiedColumn,
    is_qualified,
    resolve_identifier,
    resolve_table,
)
from ssas_to_mondrian.core.taxonomy import level_type_for, map_aggregator, map_data_type
from ssas_to_mondrian.core.virtual_cube import VirtualCubeAssembler
from ssas_to_mondrian.domain.mondrian import (
    BASE_ALIAS,
    OUTER_ALIAS,
    CalculatedMember,
    DimensionType,
    DimensionUsage,
    Join,
    TableRef,
    TargetCube,
    TargetDimension,
    TargetHierarchy,
    TargetLevel,
    TargetMeasure,
    TargetSchema,
)
from ssas_to_mondrian.domain.ssas import (
    Cube,
    CubeDimension,
    Database,
    Hierarchy,
    MeasureGroup,
    Server,
)

logger = logging.getLogger(__name__)

DEFAULT_HIERARCHY_NAME = "Default"


@dataclass
class BuildStatistics:
    """Statistics collected during a build."""

    databases: int = 0
    source_cubes: int = 0
    dimensions: int = 0
    excluded_dimensions: int = 0
    cubes: int = 0
    measures: int = 0
    calculated_members: int = 0
    skipped_measures: list[str] = field(default_factory=list)


class SchemaBuilder:
    """
    Build a TargetSchema from a provider's databases.

    Each source cube contributes its retained dimensions as shared
    dimensions, and each of its measure groups becomes one cube that uses
    every retained dimension. A single virtual cube unions all of them.
    """

    def __init__(self, config: ConversionConfig) -> None:
        self.config = config
        self.classifier = DimensionClassifier(config.include_many_to_many)
        self.stats = BuildStatistics()

    def build(self, server: Server) -> TargetSchema:
        """Build the schema for every database and cube matching the filters."""
        assembler = VirtualCubeAssembler()
        dimensions: list[TargetDimension] = []
        cubes: list[TargetCube] = []

        for database in server.databases:
            if not self.config.matches_database(database.name):
                continue
            self.stats.databases += 1
            self._build_database(database, assembler, dimensions, cubes)

        name = self.config.effective_schema_name
        schema = TargetSchema(
            name=name,
            dimensions=dimensions,
            cubes=cubes,
            virtual_cube=assembler.assemble(name),
        )
        logger.debug(schema.summary())
        return schema

    def _build_database(
        self,
        database: Database,
        assembler: VirtualCubeAssembler,
        dimensions: list[TargetDimension],
        cubes: list[TargetCube],
    ) -> None:
        for cube in database.cubes:
            if not self.config.matches_cube(cube.name):
                continue
            self.stats.source_cubes += 1
            retained = self.build_dimensions(cube)
            self._warn_duplicates(cube, retained, dimensions)
            dimensions.extend(retained)
            for group in cube.measure_groups:
                cubes.append(self.build_cube(group, retained, assembler))

    def _warn_duplicates(
        self,
        cube: Cube,
        retained: list[TargetDimension],
        existing: list[TargetDimension],
    ) -> None:
        """Shared dimensions are referenced by name, so repeats are ambiguous."""
        taken = {dim.name for dim in existing}
        for dim in retained:
            if dim.name in taken:
                logger.warning(
                    "Dimension '%s' of cube '%s' is already defined by an earlier "
                    "cube; DimensionUsage elements naming it are ambiguous",
                    dim.name,
                    cube.name,
                )

    # Dimensions

    def build_dimensions(self, cube: Cube) -> list[TargetDimension]:
        """Build shared dimensions for a cube, skipping excluded ones."""
        classification = self.classifier.classify(cube)
        retained: list[TargetDimension] = []

        for cube_dim in cube.dimensions:
            if classification.is_excluded(cube_dim.name):
                self.stats.excluded_dimensions += 1
                continue
            retained.append(self.build_dimension(cube_dim, classification))

        self.stats.dimensions += len(retained)
        return retained

    def build_dimension(
        self, cube_dim: CubeDimension, classification: Classification
    ) -> TargetDimension:
        """Build one dimension with its default and explicit hierarchies."""
        # Composite keys are not supported: the first key column of the
        # first attribute is the join key
        key = resolve_identifier(cube_dim.attributes[0].key_column)
        reference = classification.get_reference(cube_dim.name)

        join = None
        foreign_key = key.column
        if reference is not None:
            join = self._build_join(key, reference)
            foreign_key = reference.foreign_key
            logger.debug(
                "Dimension '%s' is snowflaked through '%s'",
                cube_dim.name,
                join.right.name,
            )

        hierarchies = [self._build_default_hierarchy(cube_dim, key, join, foreign_key)]
        for hierarchy in cube_dim.hierarchies:
            hierarchies.append(
                self._build_hierarchy(cube_dim, hierarchy, key, join, foreign_key)
            )

        return TargetDimension(
            name=cube_dim.name,
            visible=cube_dim.visible,
            type=DimensionType.TIME if cube_dim.is_time else DimensionType.STANDARD,
            foreign_key=foreign_key,
            join=join,
            hierarchies=hierarchies,
        )

    def _build_join(self, key: QualifiedColumn, reference: ReferenceJoin) -> Join:
        """Join the dimension table (a) to the intermediate table (b)."""
        dimension_key = resolve_identifier(reference.dimension_key)
        granularity_key = resolve_identifier(reference.granularity_key)
        return Join(
            left=self._table(key.table, key.schema, alias=OUTER_ALIAS),
            right=self._table(
                granularity_key.table, granularity_key.schema, alias=BASE_ALIAS
            ),
            left_key=granularity_key.column,
            right_key=dimension_key.column,
        )

    def _build_default_hierarchy(
        self,
        cube_dim: CubeDimension,
        key: QualifiedColumn,
        join: Join | None,
        foreign_key: str,
    ) -> TargetHierarchy:
        """Turn the flat attribute list into the Default hierarchy."""
        levels = [
            TargetLevel(
                name=attribute.name,
                visible=attribute.visible,
                table=BASE_ALIAS if join else None,
                column=resolve_identifier(attribute.key_column).column,
                type=map_data_type(attribute.data_type),
                level_type=level_type_for(attribute.type, cube_dim.is_time),
            )
            for attribute in cube_dim.attributes
        ]

        if join is not None:
            return TargetHierarchy(
                name=DEFAULT_HIERARCHY_NAME,
                primary_key=foreign_key,
                primary_key_table=OUTER_ALIAS,
                join=join,
                levels=levels,
            )
        return TargetHierarchy(
            name=DEFAULT_HIERARCHY_NAME,
            primary_key=key.column,
            table=self._table(key.table, key.schema),
            levels=levels,
        )

    def _build_hierarchy(
        self,
        cube_dim: CubeDimension,
        hierarchy: Hierarchy,
        key: QualifiedColumn,
        join: Join | None,
        foreign_key: str,
    ) -> TargetHierarchy:
        """Build an explicit hierarchy, reusing the dimension's snowflake join."""
        levels = []
        for level in hierarchy.levels:
            attribute = cube_dim.get_attribute(level.source_attribute)
            # Existence is validated when the source model is loaded
            assert attribute is not None
            column = resolve_identifier(attribute.key_column)
            levels.append(
                TargetLevel(
                    name=level.name,
                    visible=hierarchy.visible,
                    table=BASE_ALIAS if join else None,
                    column=column.column,
                    type=map_data_type(attribute.data_type),
                    level_type=level_type_for(attribute.type, cube_dim.is_time),
                )
            )

        all_member_name = None
        if self.config.include_all_member:
            all_member_name = hierarchy.all_member_name

        if join is not None:
            return TargetHierarchy(
                name=hierarchy.name,
                visible=hierarchy.visible,
                all_member_name=all_member_name,
                primary_key=foreign_key,
                primary_key_table=OUTER_ALIAS,
                join=join,
                levels=levels,
            )

        # Flat hierarchies sit on the table of their first level
        base = key
        if hierarchy.levels:
            first = cube_dim.get_attribute(hierarchy.levels[0].source_attribute)
            assert first is not None
            base = resolve_identifier(first.key_column)

        return TargetHierarchy(
            name=hierarchy.name,
            visible=hierarchy.visible,
            all_member_name=all_member_name,
            primary_key=base.column,
            table=self._table(base.table, base.schema),
            levels=levels,
        )

    # Measure groups

    def build_cube(
        self,
        group: MeasureGroup,
        dimensions: list[TargetDimension],
        assembler: VirtualCubeAssembler,
    ) -> TargetCube:
        """Build the cube for one measure group."""
        assembler.add_cube(group.name)
        fact = resolve_table(group.measures[0].source)

        usages = []
        for dim in dimensions:
            usages.append(
                DimensionUsage(
                    name=dim.name,
                    source=dim.name,
                    foreign_key=dim.foreign_key,
                    visible=dim.visible,
                )
            )
            assembler.add_dimension(group.name, dim.name)

        measures: list[TargetMeasure] = []
        calculated: list[CalculatedMember] = []
        for measure in group.measures:
            if measure.is_calculated:
                member = CalculatedMember(
                    name=measure.name,
                    visible=measure.visible,
                    formula=measure.expression or "",
                    format_string=measure.format_string,
                )
                calculated.append(member)
                assembler.add_calculated_member(member)
            elif is_qualified(measure.source):
                measures.append(
                    TargetMeasure(
                        name=measure.name,
                        column=measure.source.split(".")[1],
                        format_string=measure.format_string,
                        aggregator=map_aggregator(measure.aggregate_function),
                    )
                )
                assembler.add_measure(group.name, measure.name)
            else:
                logger.debug(
                    "Skipping measure '%s' in '%s': unsupported source binding '%s'",
                    measure.name,
                    group.name,
                    measure.source,
                )
                self.stats.skipped_measures.append(f"{group.name}.{measure.name}")

        self.stats.cubes += 1
        self.stats.measures += len(measures)
        self.stats.calculated_members += len(calculated)

        return TargetCube(
            name=group.name,
            table=self._table(fact.table, fact.schema),
            dimension_usages=usages,
            measures=measures,
            calculated_members=calculated,
        )

    def _table(
        self, name: str, schema: str | None, alias: str | None = None
    ) -> TableRef:
        """Table reference, schema-qualified only when configured."""
        return TableRef(
            name=name,
            schema_name=schema if self.config.include_schema else None,
            alias=alias,
        )


def build_schema(server: Server, config: ConversionConfig) -> TargetSchema:
    """Convenience wrapper around SchemaBuilder."""
    return SchemaBuilder(config).build(server)
