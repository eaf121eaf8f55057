"""Relationship formula synthesis and id-list encoding.

Relationships are never stored as embedded foreign keys. A written record holds
a spreadsheet formula that queries the relationship ledger, and a read record
holds whatever that formula evaluated to: a single id for to-one fields or a
comma-joined list of ids for to-many fields. This module is the only place
where either string form is produced or taken apart.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

DEFAULT_RELATIONSHIPS_SHEET = "RELATIONSHIPS"
ID_SEPARATOR = ","

_FORMULA_TEMPLATE = (
    '=JOIN(",", QUERY({sheet}!A:F, '
    "\"SELECT F WHERE B='{source_type}' AND C='{source_id}' "
    "AND D='{target_type}' and E='{field_name}'\"))"
)

_FORMULA_PATTERN = re.compile(
    r'^=JOIN\(",", QUERY\((?P<sheet>[^!]+)!A:F, '
    r"\"SELECT F WHERE B='(?P<source_type>.*?)' AND C='(?P<source_id>.*?)' "
    r"AND D='(?P<target_type>.*?)' and E='(?P<field_name>.*?)'\"\)\)\Z",
    re.DOTALL,
)

_FORMULA_PREFIX = '=JOIN(",", QUERY('


@dataclass(frozen=True)
class RelationshipRow:
    """One entry of the relationship ledger (columns B..F)."""

    source_type: str
    source_id: str
    target_type: str
    field_name: str
    target_id: str


@dataclass(frozen=True)
class RelationshipQuery:
    """Parsed form of a relationship formula."""

    sheet: str
    source_type: str
    source_id: str
    target_type: str
    field_name: str

    def matches(self, row: RelationshipRow) -> bool:
        return (
            row.source_type == self.source_type
            and row.source_id == self.source_id
            and row.target_type == self.target_type
            and row.field_name == self.field_name
        )


def relationship_formula(
    source_type: str,
    source_id: str,
    target_type: str,
    field_name: str,
    sheet: str = DEFAULT_RELATIONSHIPS_SHEET,
) -> str:
    """Build the ledger query that yields the ids related through ``field_name``.

    Args:
        source_type: Type name of the record owning the field (column B)
        source_id: Id of the record owning the field (column C)
        target_type: Declared target type of the field (column D)
        field_name: Relationship field name (column E)
        sheet: Name of the ledger sheet

    Returns:
        Formula string; evaluated by the store, column F holds the related ids
    """
    return _FORMULA_TEMPLATE.format(
        sheet=sheet,
        source_type=source_type,
        source_id=source_id,
        target_type=target_type,
        field_name=field_name,
    )


def is_relationship_formula(value: object) -> bool:
    return isinstance(value, str) and _FORMULA_PATTERN.match(value) is not None


def looks_like_relationship_formula(value: object) -> bool:
    """True for any value carrying the ledger query prefix, parseable or not."""
    return isinstance(value, str) and value.startswith(_FORMULA_PREFIX)


def parse_relationship_formula(formula: str) -> RelationshipQuery:
    """Recover the ledger query encoded in a formula.

    Raises:
        ValueError: If ``formula`` is not a relationship formula
    """
    match = _FORMULA_PATTERN.match(formula)
    if match is None:
        raise ValueError(f"Not a relationship formula: {formula!r}")
    return RelationshipQuery(**match.groupdict())


def split_ids(value: str | None) -> list[str]:
    """Split a comma-joined id string, keeping order and duplicates.

    Splitting is purely syntactic: no trimming, no validation.
    """
    if not value:
        return []
    return value.split(ID_SEPARATOR)


def join_ids(ids: list[str]) -> str:
    return ID_SEPARATOR.join(ids)
