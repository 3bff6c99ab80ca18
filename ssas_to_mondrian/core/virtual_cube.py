"""Virtual cube accumulation across measure group cubes."""

from __future__ import annotations

from ssas_to_mondrian.domain.mondrian import (
    CalculatedMember,
    VirtualCube,
    VirtualCubeDimension,
    VirtualCubeMeasure,
)


class VirtualCubeAssembler:
    """
    Collect dimensions and measures per cube, then build one virtual cube.

    Cubes are listed in the order they were first added. A cube without
    accumulated dimensions or measures simply contributes nothing.
    """

    def __init__(self) -> None:
        self._cubes: list[str] = []
        self._dimensions: dict[str, list[str]] = {}
        self._measures: dict[str, list[str]] = {}
        self._calculated_members: list[CalculatedMember] = []

    def add_cube(self, cube_name: str) -> None:
        if cube_name not in self._cubes:
            self._cubes.append(cube_name)

    def add_dimension(self, cube_name: str, dimension_name: str) -> None:
        self._dimensions.setdefault(cube_name, []).append(dimension_name)

    def add_measure(self, cube_name: str, measure_name: str) -> None:
        self._measures.setdefault(cube_name, []).append(measure_name)

    def add_calculated_member(self, member: CalculatedMember) -> None:
        self._calculated_members.append(member)

    def assemble(self, name: str) -> VirtualCube:
        """Build the virtual cube: all dimension entries, then all measures."""
        dimensions = [
            VirtualCubeDimension(cube_name=cube, name=dim)
            for cube in self._cubes
            for dim in self._dimensions.get(cube, [])
        ]
        measures = [
            VirtualCubeMeasure(cube_name=cube, name=measure)
            for cube in self._cubes
            for measure in self._measures.get(cube, [])
        ]
        return VirtualCube(
            name=name,
            dimensions=dimensions,
            measures=measures,
            calculated_members=list(self._calculated_members),
        )
