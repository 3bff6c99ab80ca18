"""Taxonomy mapping from Analysis Services vocabularies to Mondrian ones.

All mappers are total: unknown inputs fall through to a default instead of
raising.
"""

from __future__ import annotations

from ssas_to_mondrian.domain.mondrian import LevelType

# Exact-match data types; anything containing "int" is handled first
DATA_TYPE_MAP = {
    "Currency": "Numeric",
    "Double": "Numeric",
    "WChar": "String",
}

# Exact-match time classifications, checked before the substring rules
EXACT_LEVEL_TYPE_MAP = {
    "HalfYears": LevelType.TIME_HALF_YEARS,
    "HalfYearOfYear": LevelType.TIME_HALF_YEAR,
}

# Substring rules, first match wins
SUBSTRING_LEVEL_TYPE_RULES: list[tuple[tuple[str, ...], LevelType]] = [
    (("Week",), LevelType.TIME_WEEKS),
    (("Day", "Date"), LevelType.TIME_DAYS),
    (("Month",), LevelType.TIME_MONTHS),
    (("Quarter",), LevelType.TIME_QUARTERS),
    (("Year",), LevelType.TIME_YEARS),
]

AGGREGATOR_MAP = {
    "distinctcount": "distinct count",
    "none": "sum",
    "byaccount": "sum",
    "averageofchildren": "avg",
    "lastnonempty": "sum",
}


def map_data_type(data_type: str) -> str:
    """Map a provider column type name to a Mondrian level type attribute.

    Examples:
        >>> map_data_type("BigInt")
        'Integer'
        >>> map_data_type("Currency")
        'Numeric'
        >>> map_data_type("Boolean")
        'Boolean'
    """
    if "int" in data_type.lower():
        return "Integer"
    return DATA_TYPE_MAP.get(data_type, data_type)


def map_level_type(classification: str) -> LevelType:
    """Map an attribute time classification to a Mondrian time level type.

    Examples:
        >>> map_level_type("HalfYears").value
        'TimeHalfYears'
        >>> map_level_type("FiscalQuarter").value
        'TimeQuarters'
        >>> map_level_type("Regular").value
        'TimeUndefined'
    """
    if classification in EXACT_LEVEL_TYPE_MAP:
        return EXACT_LEVEL_TYPE_MAP[classification]
    for needles, level_type in SUBSTRING_LEVEL_TYPE_RULES:
        if any(needle in classification for needle in needles):
            return level_type
    return LevelType.TIME_UNDEFINED


def level_type_for(classification: str, is_time_dimension: bool) -> LevelType:
    """Level type for an attribute; only time dimensions get time level types."""
    if not is_time_dimension:
        return LevelType.REGULAR
    return map_level_type(classification)


def map_aggregator(aggregate_function: str) -> str:
    """Map an aggregate function tag to a Mondrian aggregator name.

    Examples:
        >>> map_aggregator("DistinctCount")
        'distinct count'
        >>> map_aggregator("Max")
        'max'
    """
    tag = aggregate_function.lower()
    return AGGREGATOR_MAP.get(tag, tag)
