"""Application layer: index, service, ports, and result types. Depends only on domain."""

from contactbook.application.benchmark import benchmark_index
from contactbook.application.contact_index import OrderedContactIndex
from contactbook.application.contact_service import ContactService
from contactbook.application.dto import (
    ContactCreated,
    ContactDeleted,
    ContactUpdated,
    DuplicateKey,
    IndexTimings,
    NotFound,
    SeedReport,
    StorageUnavailable,
    ValidationFailed,
)
from contactbook.application.ports import ContactRepository, StorageError

__all__ = [
    "ContactCreated",
    "ContactDeleted",
    "ContactRepository",
    "ContactService",
    "ContactUpdated",
    "DuplicateKey",
    "IndexTimings",
    "NotFound",
    "OrderedContactIndex",
    "SeedReport",
    "StorageError",
    "StorageUnavailable",
    "ValidationFailed",
    "benchmark_index",
]
