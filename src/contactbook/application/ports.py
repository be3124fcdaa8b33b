"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from contactbook.domain import Contact


class StorageError(Exception):
    """Raised by repository adapters when the backing store fails or is unreachable."""


class ContactRepository(Protocol):
    """Durable copy of the contacts held by the index. Adapters raise StorageError on I/O failure."""

    def list_all(self) -> list[Contact]:
        """Return all stored contacts, ordered by id."""
        ...

    def add(self, contact: Contact) -> None:
        """Store a new contact. The caller has already checked the id is free."""
        ...

    def update(self, contact: Contact) -> None:
        """Overwrite the stored fields of an existing contact."""
        ...

    def remove(self, contact_id: str) -> bool:
        """Delete a contact. Returns True if a record was removed."""
        ...
