"""Dimension classification from measure group relationships."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from ssas_to_mondrian.core.identifiers import resolve_identifier
from ssas_to_mondrian.domain.ssas import (
    Cube,
    DataMiningLink,
    ManyToManyLink,
    ReferenceLink,
)
from ssas_to_mondrian.errors import IdentifierFormatError

logger = logging.getLogger(__name__)


class ReferenceJoin(BaseModel):
    """Join keys for a snowflaked (reference) dimension."""

    dimension_key: str  # Key column of the referenced dimension
    granularity_key: str  # Key column of the intermediate granularity attribute
    foreign_key: str  # Resolved key column of the intermediate dimension

    model_config = {"frozen": True}


class Classification(BaseModel):
    """Classification results for one cube, keyed by dimension name."""

    excluded: set[str] = Field(default_factory=set)
    references: dict[str, ReferenceJoin] = Field(default_factory=dict)

    def is_excluded(self, dimension_name: str) -> bool:
        return dimension_name in self.excluded

    def get_reference(self, dimension_name: str) -> ReferenceJoin | None:
        return self.references.get(dimension_name)

    @property
    def special_foreign_keys(self) -> dict[str, str]:
        """Foreign key to use for each snowflaked dimension."""
        return {name: ref.foreign_key for name, ref in self.references.items()}


class DimensionClassifier:
    """
    Inspect a cube's measure group links.

    - Many-to-many dimensions are excluded unless included explicitly
    - Data mining dimensions are always excluded
    - Reference dimensions get their snowflake join keys
    """

    def __init__(self, include_many_to_many: bool = False) -> None:
        self.include_many_to_many = include_many_to_many

    def classify(self, cube: Cube) -> Classification:
        classification = Classification()

        for group in cube.measure_groups:
            for link in group.dimensions:
                if isinstance(link, ReferenceLink):
                    if link.dimension not in classification.references:
                        reference = self._resolve_reference(cube, link)
                        if reference is not None:
                            classification.references[link.dimension] = reference

                if isinstance(link, ManyToManyLink) and not self.include_many_to_many:
                    logger.debug(
                        "Excluding many-to-many dimension '%s' (measure group '%s')",
                        link.dimension,
                        group.name,
                    )
                    classification.excluded.add(link.dimension)
                if isinstance(link, DataMiningLink):
                    logger.debug(
                        "Excluding data mining dimension '%s' (measure group '%s')",
                        link.dimension,
                        group.name,
                    )
                    classification.excluded.add(link.dimension)

        return classification

    def _resolve_reference(self, cube: Cube, link: ReferenceLink) -> ReferenceJoin | None:
        """Build snowflake join keys, or None if the metadata is incomplete."""
        if not link.has_intermediate:
            logger.debug(
                "Reference dimension '%s' has no intermediate metadata; "
                "treating it as directly joined",
                link.dimension,
            )
            return None

        referenced = cube.get_dimension(link.dimension)
        intermediate = cube.get_dimension(link.intermediate_dimension or "")
        if referenced is None or intermediate is None:
            logger.debug(
                "Reference dimension '%s' names a dimension missing from cube '%s'",
                link.dimension,
                cube.name,
            )
            return None

        granularity = intermediate.get_attribute(link.intermediate_attribute or "")
        if granularity is None:
            logger.debug(
                "Reference dimension '%s': intermediate attribute '%s' not found",
                link.dimension,
                link.intermediate_attribute,
            )
            return None

        dimension_key = referenced.primary_attribute.key_column
        granularity_key = granularity.key_column
        try:
            resolve_identifier(dimension_key)
            resolve_identifier(granularity_key)
            foreign_key = resolve_identifier(
                intermediate.primary_attribute.key_column
            ).column
        except IdentifierFormatError as e:
            logger.debug("Reference dimension '%s' not snowflaked: %s", link.dimension, e)
            return None

        return ReferenceJoin(
            dimension_key=dimension_key,
            granularity_key=granularity_key,
            foreign_key=foreign_key,
        )
