"""Import Status — error collection and outcome counters."""

from app.core.domain_types import InsertOutcome
from app.core.import_status import ImportStatus


def test_fresh_status_has_no_errors():
    status = ImportStatus()
    assert not status.has_errors
    assert status.error_messages == []


def test_add_error_sets_has_errors():
    status = ImportStatus()
    status.add_error("Row 2: name is missing")
    assert status.has_errors
    assert status.error_messages == ["Row 2: name is missing"]


def test_record_counts_outcomes():
    status = ImportStatus()
    status.record(InsertOutcome.CREATED)
    status.record(InsertOutcome.CREATED)
    status.record(InsertOutcome.DUPLICATE)
    assert (status.created, status.duplicates) == (2, 1)
