"""Result types returned by the index and the service. Callers branch with isinstance."""

from dataclasses import dataclass, field

from contactbook.domain import Contact


@dataclass(frozen=True)
class ContactCreated:
    contact: Contact


@dataclass(frozen=True)
class ContactUpdated:
    contact: Contact


@dataclass(frozen=True)
class ContactDeleted:
    contact_id: str


@dataclass(frozen=True)
class ValidationFailed:
    """One or more fields failed validation. report maps field name -> message."""

    report: dict[str, str]


@dataclass(frozen=True)
class DuplicateKey:
    """The id is already stored. report holds every field error, the duplicate id included."""

    contact_id: str
    report: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    contact_id: str


@dataclass(frozen=True)
class StorageUnavailable:
    """The backing store could not be reached; the in-memory index was left unchanged."""

    reason: str


@dataclass(frozen=True)
class SeedReport:
    loaded: int = 0
    skipped: int = 0


@dataclass(frozen=True)
class IndexTimings:
    """Milliseconds spent on each phase of a benchmark run."""

    size: int
    insert_ms: float
    lookup_ms: float
    list_ms: float
