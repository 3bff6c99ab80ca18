"""Column identifier resolution.

Analysis Services data source views name tables ``<schema>_<table>``, so a
binding like ``dbo_DimDate.DateKey`` resolves to schema ``dbo``, table
``DimDate`` and column ``DateKey``.
"""

from __future__ import annotations

from typing import NamedTuple

from ssas_to_mondrian.errors import IdentifierFormatError


class QualifiedTable(NamedTuple):
    schema: str | None
    table: str


class QualifiedColumn(NamedTuple):
    schema: str | None
    table: str
    column: str


def split_table(segment: str) -> QualifiedTable:
    """Split a table segment into an inferred schema and a table name."""
    index = segment.find("_")
    if index > 0:
        return QualifiedTable(schema=segment[:index], table=segment[index + 1 :])
    return QualifiedTable(schema=None, table=segment)


def is_qualified(identifier: str) -> bool:
    """Check whether an identifier has both a table and a column segment."""
    return len(identifier.split(".")) > 1


def resolve_table(identifier: str) -> QualifiedTable:
    """Resolve only the table part of an identifier. Never fails."""
    return split_table(identifier.split(".")[0])


def resolve_identifier(identifier: str) -> QualifiedColumn:
    """Resolve ``table.column`` into schema, table and column.

    Only the first segment is treated as the table; the column is the second
    segment.

    Raises:
        IdentifierFormatError: If the identifier has no column segment.

    Examples:
        >>> resolve_identifier("dbo_DimDate.DateKey")
        QualifiedColumn(schema='dbo', table='DimDate', column='DateKey')
        >>> resolve_identifier("FactSales.Amount")
        QualifiedColumn(schema=None, table='FactSales', column='Amount')
    """
    parts = identifier.split(".")
    if len(parts) < 2:
        raise IdentifierFormatError(identifier)
    table = split_table(parts[0])
    return QualifiedColumn(schema=table.schema, table=table.table, column=parts[1])
