"""Name Entry Service — duplicate policy, lookups, update and cascading deletes.

Invariants:
    - insert(N) then load_name(N) returns N lower-cased
    - A second insert of the same name (any case) creates a duplicate, not a second entry
    - Exactly one row is created per insert
    - Deleting a name removes every duplicate with it
"""

import pytest
from sqlalchemy import delete, func, select

from app.core.domain_types import InsertOutcome, ListOptions
from app.core.errors import DatabaseError
from app.models.duplicate_name_entry import DuplicateNameEntry
from app.models.name_entry import NameEntry


async def _count(db, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_insert_then_load_returns_lowercased_entry(name_service, entry_factory):
    outcome = await name_service.insert_taking_care_of_duplicates(
        entry_factory("AdéWálé", meaning="the crown has come home"),
    )

    loaded = await name_service.load_name("adéwálé")
    assert outcome is InsertOutcome.CREATED
    assert loaded is not None
    assert loaded.name == "adéwálé"
    assert loaded.meaning == "the crown has come home"


async def test_load_name_is_case_insensitive(name_service, entry_factory):
    await name_service.insert_taking_care_of_duplicates(entry_factory("tunde"))
    assert (await name_service.load_name("TUNDE")).name == "tunde"


async def test_load_name_returns_none_when_absent(name_service):
    assert await name_service.load_name("nobody") is None


async def test_second_insert_becomes_duplicate(name_service, entry_factory, test_db):
    await name_service.insert_taking_care_of_duplicates(
        entry_factory("Ade", meaning="crown", submitted_by="Alice"),
    )
    outcome = await name_service.insert_taking_care_of_duplicates(
        entry_factory("ADE", meaning="royalty", submitted_by="Bob"),
    )

    assert outcome is InsertOutcome.DUPLICATE
    assert await _count(test_db, NameEntry) == 1
    canonical = await name_service.load_name("ade")
    assert canonical.meaning == "crown"
    duplicates = await name_service.load_name_duplicates("ade")
    assert [(d.name, d.meaning, d.submitted_by) for d in duplicates] == [
        ("ade", "royalty", "Bob"),
    ]
    assert duplicates[0].name_entry_id == canonical.id


async def test_each_insert_creates_exactly_one_row(name_service, entry_factory, test_db):
    for meaning in ("one", "two", "three"):
        await name_service.insert_taking_care_of_duplicates(
            entry_factory("bola", meaning=meaning),
        )
    assert await _count(test_db, NameEntry) == 1
    assert await _count(test_db, DuplicateNameEntry) == 2


async def test_duplicate_keeps_geolocation(name_service, entry_factory, seed_geo):
    await name_service.insert_taking_care_of_duplicates(entry_factory("ade"))
    await name_service.insert_taking_care_of_duplicates(
        entry_factory("ade", geo_location=seed_geo),
    )
    duplicates = await name_service.load_name_duplicates("ade")
    assert duplicates[0].geo_location_place == "IBADAN"


async def test_canonical_insert_keeps_geolocation(name_service, entry_factory, seed_geo):
    await name_service.insert_taking_care_of_duplicates(
        entry_factory("ade", geo_location=seed_geo),
    )
    loaded = await name_service.load_name("ade")
    assert loaded.geo_location.place == "IBADAN"


async def test_load_duplicates_of_unknown_name_is_empty(name_service):
    assert await name_service.load_name_duplicates("nobody") == []


async def test_load_all_names_defaults_and_order(name_service, entry_factory):
    for name in ("c", "a", "b"):
        await name_service.insert_taking_care_of_duplicates(entry_factory(name))

    names = await name_service.load_all_names()
    assert [n.name for n in names] == ["c", "a", "b"]


async def test_load_all_names_pages(name_service, entry_factory):
    for i in range(7):
        await name_service.insert_taking_care_of_duplicates(entry_factory(f"name{i}"))

    first = await name_service.load_all_names(ListOptions(page=0, count=3))
    third = await name_service.load_all_names(ListOptions(page=2, count=3))
    assert [n.name for n in first] == ["name0", "name1", "name2"]
    assert [n.name for n in third] == ["name6"]


async def test_update_replaces_all_fields(name_service, entry_factory, seed_geo):
    await name_service.insert_taking_care_of_duplicates(
        entry_factory("ade", meaning="crown", tonal_mark=None, submitted_by="Alice"),
    )

    await name_service.update_name(entry_factory(
        "ade", meaning="royal crown", tonal_mark="àdé", etymology=["adé: crown"],
        submitted_by="Bob", is_indexed=True, geo_location=seed_geo,
    ))

    loaded = await name_service.load_name("ade")
    assert loaded.meaning == "royal crown"
    assert loaded.tonal_mark == "àdé"
    assert loaded.etymology == ["adé: crown"]
    assert loaded.submitted_by == "Bob"
    assert loaded.is_indexed is True
    assert loaded.geo_location_place == "IBADAN"


async def test_delete_removes_entry_and_duplicates(name_service, entry_factory, test_db):
    await name_service.insert_taking_care_of_duplicates(entry_factory("ade"))
    await name_service.insert_taking_care_of_duplicates(entry_factory("Ade"))
    await name_service.insert_taking_care_of_duplicates(entry_factory("bola"))
    await name_service.insert_taking_care_of_duplicates(entry_factory("bola"))

    deleted = await name_service.delete_name_entry_and_duplicates("ADE")

    assert deleted is True
    assert await name_service.load_name("ade") is None
    assert await name_service.load_name_duplicates("ade") == []
    # bola and its duplicate are untouched
    assert await _count(test_db, NameEntry) == 1
    assert await _count(test_db, DuplicateNameEntry) == 1


async def test_delete_absent_name_reports_false(name_service):
    assert await name_service.delete_name_entry_and_duplicates("nobody") is False


async def test_delete_all_removes_everything(name_service, entry_factory, test_db):
    for name in ("ade", "ade", "bola"):
        await name_service.insert_taking_care_of_duplicates(entry_factory(name))

    deleted = await name_service.delete_all_and_duplicates()

    assert deleted == 2
    assert await _count(test_db, NameEntry) == 0
    assert await _count(test_db, DuplicateNameEntry) == 0


class _CanonicalDeletedAfterConflict:
    """Entry store whose canonical row disappears right after an insert conflict."""

    def __init__(self, inner, db, vanish_times=1):
        self.inner = inner
        self.db = db
        self.vanish_times = vanish_times

    async def insert_if_absent(self, entry):
        return await self.inner.insert_if_absent(entry)

    async def get_by_name(self, name):
        if self.vanish_times:
            self.vanish_times -= 1
            await self.db.execute(delete(NameEntry).where(NameEntry.name == name))
            return None
        return await self.inner.get_by_name(name)

    def __getattr__(self, attr):
        return getattr(self.inner, attr)


async def test_insert_retries_when_canonical_vanishes(name_service, entry_factory, test_db):
    await name_service.insert_taking_care_of_duplicates(entry_factory("ade", meaning="first"))
    name_service.entries = _CanonicalDeletedAfterConflict(name_service.entries, test_db)

    outcome = await name_service.insert_taking_care_of_duplicates(
        entry_factory("ade", meaning="second"),
    )

    assert outcome is InsertOutcome.CREATED
    assert await _count(test_db, NameEntry) == 1
    assert await _count(test_db, DuplicateNameEntry) == 0
    assert (await name_service.load_name("ade")).meaning == "second"


async def test_insert_gives_up_after_one_retry(name_service, entry_factory, test_db):
    await name_service.insert_taking_care_of_duplicates(entry_factory("ade"))
    name_service.entries = _AlwaysConflicting()

    with pytest.raises(DatabaseError):
        await name_service.insert_taking_care_of_duplicates(entry_factory("ade"))

    assert name_service.entries.attempts == 2


class _AlwaysConflicting:
    def __init__(self):
        self.attempts = 0

    async def insert_if_absent(self, entry):
        self.attempts += 1
        return None

    async def get_by_name(self, name):
        return None
