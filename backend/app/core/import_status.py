"""Import Status — transient result of one bulk import.

Invariants:
    - Created per import call, discarded once the response is sent
    - has_errors is True iff at least one error message was recorded
"""

from dataclasses import dataclass, field

from app.core.domain_types import InsertOutcome


@dataclass
class ImportStatus:
    error_messages: list[str] = field(default_factory=list)
    created: int = 0
    duplicates: int = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.error_messages)

    def add_error(self, message: str) -> None:
        self.error_messages.append(message)

    def record(self, outcome: InsertOutcome) -> None:
        if outcome is InsertOutcome.CREATED:
            self.created += 1
        else:
            self.duplicates += 1
