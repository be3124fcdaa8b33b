"""Contact CRUD over one ordered index, written through to an optional repository."""

import logging
import threading

from contactbook.application.contact_index import OrderedContactIndex
from contactbook.application.dto import (
    ContactCreated,
    ContactDeleted,
    ContactUpdated,
    DuplicateKey,
    NotFound,
    StorageUnavailable,
    ValidationFailed,
)
from contactbook.application.ports import ContactRepository, StorageError
from contactbook.domain import Contact, ContactFields

logger = logging.getLogger(__name__)


class ContactService:
    """Owns the index for the lifetime of the process.

    Reads are answered from the index. A mutation is applied to the index
    first and then written to the repository; if that write fails the index
    change is undone and StorageUnavailable is returned.
    """

    def __init__(
        self,
        index: OrderedContactIndex | None = None,
        *,
        repository: ContactRepository | None = None,
    ) -> None:
        self._index = index if index is not None else OrderedContactIndex()
        self._repo = repository
        self._write_lock = threading.Lock()

    def load(self) -> int:
        """Replace the index contents with everything in the repository."""
        if self._repo is None:
            return 0
        with self._write_lock:
            contacts = self._repo.list_all()
            self._index.replace_all(contacts)
        logger.info("Loaded %d contacts from repository", len(contacts))
        return len(contacts)

    def list_contacts(self) -> list[Contact]:
        return self._index.list_all()

    def get_contact(self, contact_id: str) -> Contact | NotFound:
        return self._index.get(contact_id)

    def add_contact(
        self, fields: ContactFields
    ) -> ContactCreated | ValidationFailed | DuplicateKey | StorageUnavailable:
        with self._write_lock:
            result = self._index.add(fields)
            if not isinstance(result, ContactCreated) or self._repo is None:
                return result
            try:
                self._repo.add(result.contact)
            except StorageError as e:
                logger.error("Failed to store contact %s: %s", result.contact.id, e)
                self._index.remove(result.contact.id)
                return StorageUnavailable(reason=str(e))
            return result

    def update_contact(
        self, contact_id: str, changes: ContactFields
    ) -> ContactUpdated | NotFound | ValidationFailed | StorageUnavailable:
        with self._write_lock:
            previous = self._index.get(contact_id)
            result = self._index.update(contact_id, changes)
            if not isinstance(result, ContactUpdated) or self._repo is None:
                return result
            try:
                self._repo.update(result.contact)
            except StorageError as e:
                logger.error("Failed to update contact %s: %s", contact_id, e)
                self._index.restore(previous)
                return StorageUnavailable(reason=str(e))
            return result

    def remove_contact(self, contact_id: str) -> ContactDeleted | NotFound | StorageUnavailable:
        with self._write_lock:
            previous = self._index.get(contact_id)
            result = self._index.remove(contact_id)
            if not isinstance(result, ContactDeleted) or self._repo is None:
                return result
            try:
                self._repo.remove(contact_id)
            except StorageError as e:
                logger.error("Failed to delete contact %s: %s", contact_id, e)
                self._index.restore(previous)
                return StorageUnavailable(reason=str(e))
            return result
