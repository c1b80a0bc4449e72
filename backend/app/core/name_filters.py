"""Name Filters — post-fetch filtering of a loaded page of names.

Invariants:
    - Filters run AFTER pagination: a filtered page may hold fewer than `count` items
      even when later pages contain matches
    - submittedBy matches case-insensitively with both sides trimmed
    - indexed matches exactly; an absent filter matches everything

Design Decisions:
    - Pure predicates over the projected DTO, not SQL clauses: preserves the
      listing semantics existing clients rely on (ADR: filter-after-paginate kept)
"""

from typing import Iterable, Protocol, TypeVar

from app.core.domain_types import ListOptions


class FilterableName(Protocol):
    submitted_by: str | None
    indexed: bool


T = TypeVar("T", bound=FilterableName)


def matches_submitted_by(name: FilterableName, submitted_by: str | None) -> bool:
    if submitted_by is None:
        return True
    return (name.submitted_by or "").strip().lower() == submitted_by.strip().lower()


def matches_indexed(name: FilterableName, indexed: bool | None) -> bool:
    if indexed is None:
        return True
    return name.indexed is indexed


def filter_names(names: Iterable[T], options: ListOptions) -> list[T]:
    """Apply the indexed and submittedBy filters to an already-loaded page."""
    return [
        n for n in names
        if matches_indexed(n, options.indexed)
        and matches_submitted_by(n, options.submitted_by)
    ]
