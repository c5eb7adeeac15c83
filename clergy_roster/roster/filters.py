"""Client-side roster filtering: search text, role token and category token."""

from dataclasses import dataclass
from typing import Iterable

from clergy_roster.store.models import (
    CATEGORY_LABELS,
    ROLE_OPTIONS,
    ClergyCategory,
    ClergyRecord,
    role_label,
)

FILTER_ALL = "ALL"
ROLE_DELIMITER = "|"

BISHOP_ROLES = ("Tổng Giám Mục", "Phó Tổng Giám Mục", "Giám Mục Phụ Tá")

# Grouped tokens match any of their roles
ROLE_FILTER_OPTIONS = {
    FILTER_ALL: "All roles",
    ROLE_DELIMITER.join(BISHOP_ROLES): "Bishops",
    **{role: role_label(role) for role in ROLE_OPTIONS if role not in BISHOP_ROLES},
}

CATEGORY_FILTER_OPTIONS = {
    FILTER_ALL: "All places",
    **{category.value: label for category, label in CATEGORY_LABELS.items()},
}


def _token(value) -> str:
    return value.value if isinstance(value, ClergyCategory) else str(value)


def matches_search(record: ClergyRecord, text: str) -> bool:
    """Case-insensitive substring match on name or location."""
    if not text:
        return True
    needle = text.casefold()
    return needle in record.full_name.casefold() or needle in record.current_location.casefold()


def matches_role(record: ClergyRecord, token: str) -> bool:
    """ALL, exact role, or membership in a pipe-delimited role group."""
    if not token or token == FILTER_ALL:
        return True
    if ROLE_DELIMITER in token:
        return record.role in token.split(ROLE_DELIMITER)
    return record.role == token


def matches_category(record: ClergyRecord, token) -> bool:
    token = _token(token) if token else FILTER_ALL
    if token == FILTER_ALL:
        return True
    return record.category.value == token


def filter_roster(
    records: Iterable[ClergyRecord],
    search: str = "",
    role: str = FILTER_ALL,
    category=FILTER_ALL,
) -> list[ClergyRecord]:
    """Records matching all three predicates, in roster order."""
    return [
        r for r in records
        if matches_search(r, search) and matches_role(r, role) and matches_category(r, category)
    ]


@dataclass
class RosterFilter:
    """Current toolbar inputs."""
    search: str = ""
    role: str = FILTER_ALL
    category: str = FILTER_ALL

    def apply(self, records: Iterable[ClergyRecord]) -> list[ClergyRecord]:
        return filter_roster(records, self.search, self.role, self.category)

    def clear(self):
        self.search = ""
        self.role = FILTER_ALL
        self.category = FILTER_ALL
