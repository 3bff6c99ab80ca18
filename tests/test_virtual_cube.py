"""Tests for VirtualCubeAssembler."""

from ssas_to_mondrian.core.virtual_cube import VirtualCubeAssembler
from ssas_to_mondrian.domain import CalculatedMember


class TestVirtualCubeAssembler:
    def test_empty(self) -> None:
        cube = VirtualCubeAssembler().assemble("Empty")
        assert cube.name == "Empty"
        assert cube.enabled is True
        assert cube.dimensions == []
        assert cube.measures == []
        assert cube.calculated_members == []

    def test_dimensions_precede_measures_across_cubes(self) -> None:
        assembler = VirtualCubeAssembler()
        assembler.add_cube("Sales")
        assembler.add_dimension("Sales", "Date")
        assembler.add_measure("Sales", "Amount")
        assembler.add_cube("Stock")
        assembler.add_dimension("Stock", "Store")
        assembler.add_measure("Stock", "On Hand")

        cube = assembler.assemble("All")
        assert [(d.cube_name, d.name) for d in cube.dimensions] == [
            ("Sales", "Date"),
            ("Stock", "Store"),
        ]
        assert [(m.cube_name, m.name) for m in cube.measures] == [
            ("Sales", "Amount"),
            ("Stock", "On Hand"),
        ]

    def test_cube_without_entries_is_skipped(self) -> None:
        assembler = VirtualCubeAssembler()
        assembler.add_cube("Empty")
        assembler.add_cube("Sales")
        assembler.add_measure("Sales", "Amount")

        cube = assembler.assemble("All")
        assert cube.dimensions == []
        assert [m.cube_name for m in cube.measures] == ["Sales"]

    def test_cube_order_is_first_seen(self) -> None:
        assembler = VirtualCubeAssembler()
        assembler.add_cube("B")
        assembler.add_cube("A")
        assembler.add_cube("B")
        assembler.add_measure("A", "x")
        assembler.add_measure("B", "y")

        assert [m.cube_name for m in assembler.assemble("All").measures] == ["B", "A"]

    def test_measure_member_name(self) -> None:
        assembler = VirtualCubeAssembler()
        assembler.add_cube("Sales")
        assembler.add_measure("Sales", "Sales Amount")
        measure = assembler.assemble("All").measures[0]
        assert measure.member == "[Measures].[Sales Amount]"
        assert measure.visible is True

    def test_calculated_members_collected(self) -> None:
        assembler = VirtualCubeAssembler()
        first = CalculatedMember(name="Margin", formula="[Measures].[A] - [Measures].[B]")
        second = CalculatedMember(name="Ratio", formula="[Measures].[A] / [Measures].[B]")
        assembler.add_calculated_member(first)
        assembler.add_calculated_member(second)
        assert assembler.assemble("All").calculated_members == [first, second]
