"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NameKey is always lower-cased and stripped — the unique key of a canonical entry
    - ListOptions carries every listing option with its default (page 0, count 50)
    - All valid outcomes encoded as Enums — no raw string matching

Design Decisions:
    - NewType for NameKey: zero runtime cost, full type-checker support
    - Frozen dataclass for ListOptions over nullable keyword soup (ADR: explicit options object)
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

NameKey = NewType("NameKey", str)

DEFAULT_PAGE = 0
DEFAULT_COUNT = 50
DEFAULT_SUBMITTED_BY = "Not Available"


def normalize_name(name: str) -> NameKey:
    """Lower-case and strip a name into its storage key."""
    return NameKey(name.strip().lower())


def normalize_place(place: str) -> str:
    """Geolocation places are stored upper-case."""
    return place.strip().upper()


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class ListOptions:
    """Options for listing names: page index, page size and post-fetch filters."""
    page: int = DEFAULT_PAGE
    count: int = DEFAULT_COUNT
    submitted_by: str | None = None
    indexed: bool | None = None

    @property
    def offset(self) -> int:
        return self.page * self.count


# ─── Enums ───────────────────────────────────────────────────────

class InsertOutcome(str, Enum):
    """What an insert did — exactly one row is created either way."""
    CREATED = "created"
    DUPLICATE = "duplicate"
