"""Tests for column identifier resolution."""

import pytest

from ssas_to_mondrian.core.identifiers import (
    QualifiedColumn,
    is_qualified,
    resolve_identifier,
    resolve_table,
    split_table,
)
from ssas_to_mondrian.errors import IdentifierFormatError


class TestResolveIdentifier:
    def test_schema_inferred_from_underscore(self) -> None:
        result = resolve_identifier("dbo_DimDate.DateKey")
        assert result == QualifiedColumn(schema="dbo", table="DimDate", column="DateKey")

    def test_no_underscore_has_no_schema(self) -> None:
        result = resolve_identifier("FactSales.Amount")
        assert result.schema is None
        assert result.table == "FactSales"
        assert result.column == "Amount"

    def test_only_first_underscore_splits(self) -> None:
        result = resolve_identifier("sales_fact_internet.Amount")
        assert result.schema == "sales"
        assert result.table == "fact_internet"

    def test_leading_underscore_is_not_a_schema(self) -> None:
        result = resolve_identifier("_staging.Amount")
        assert result.schema is None
        assert result.table == "_staging"

    def test_extra_segments_use_second_as_column(self) -> None:
        result = resolve_identifier("dbo_Fact.Amount.Extra")
        assert result.column == "Amount"

    def test_calls_do_not_share_state(self) -> None:
        first = resolve_identifier("dbo_DimDate.DateKey")
        second = resolve_identifier("DimStore.StoreKey")
        assert first.schema == "dbo"
        assert second.schema is None

    @pytest.mark.parametrize("identifier", ["DateKey", "", "dbo_DimDate"])
    def test_missing_column_segment_raises(self, identifier: str) -> None:
        with pytest.raises(IdentifierFormatError) as exc_info:
            resolve_identifier(identifier)
        assert exc_info.value.identifier == identifier

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            resolve_identifier("nocolumn")


class TestResolveTable:
    def test_table_only_identifier(self) -> None:
        result = resolve_table("dbo_FactInternetSales")
        assert result.schema == "dbo"
        assert result.table == "FactInternetSales"

    def test_qualified_identifier(self) -> None:
        assert resolve_table("FactSales.Amount").table == "FactSales"

    def test_split_table(self) -> None:
        assert split_table("DimDate").schema is None


class TestIsQualified:
    def test_qualified(self) -> None:
        assert is_qualified("FactSales.Amount")

    def test_unqualified(self) -> None:
        assert not is_qualified("Amount")
        assert not is_qualified("")
