"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, ContactFields) and validation rules. No outer dependencies.
- application: OrderedContactIndex, ContactService, ports (ContactRepository), result types.
- infrastructure: adapters (Neo4jContactRepository) and the seed file loader.
"""

from contactbook.application import (
    ContactCreated,
    ContactDeleted,
    ContactRepository,
    ContactService,
    ContactUpdated,
    DuplicateKey,
    NotFound,
    OrderedContactIndex,
    StorageError,
    StorageUnavailable,
    ValidationFailed,
)
from contactbook.domain import Contact, ContactFields, validate_contact
from contactbook.infrastructure import Neo4jContactRepository, load_contacts_file

__all__ = [
    "Contact",
    "ContactCreated",
    "ContactDeleted",
    "ContactFields",
    "ContactRepository",
    "ContactService",
    "ContactUpdated",
    "DuplicateKey",
    "Neo4jContactRepository",
    "NotFound",
    "OrderedContactIndex",
    "StorageError",
    "StorageUnavailable",
    "ValidationFailed",
    "load_contacts_file",
    "validate_contact",
]
