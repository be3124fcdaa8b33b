"""Ordered in-memory contact index: sorted keys, binary-search lookup, validated mutations."""

import threading
from bisect import bisect_left
from collections.abc import Iterable

from contactbook.application.dto import (
    ContactCreated,
    ContactDeleted,
    ContactUpdated,
    DuplicateKey,
    NotFound,
    ValidationFailed,
)
from contactbook.domain import Contact, ContactFields, validate_contact


def _build_contact(values: ContactFields) -> Contact:
    return Contact(
        id=values.id,
        first_name=values.first_name,
        last_name=values.last_name,
        phone=values.phone,
        email=values.email,
        address=values.address or None,
    )


class OrderedContactIndex:
    """Keyed store of contacts kept in ascending id order.

    Keys and records live in two parallel lists. Inserts and deletes find
    their position with bisect, so listing never re-sorts and lookup is a
    binary search. One lock serializes writers; readers take it too so they
    never see the two lists out of step.
    """

    def __init__(self, contacts: Iterable[Contact] = ()) -> None:
        self._keys: list[str] = []
        self._records: list[Contact] = []
        self._lock = threading.RLock()
        self.replace_all(contacts)

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, contact_id: object) -> bool:
        if not isinstance(contact_id, str):
            return False
        with self._lock:
            return self._position(contact_id) is not None

    def _position(self, contact_id: str) -> int | None:
        i = bisect_left(self._keys, contact_id)
        if i < len(self._keys) and self._keys[i] == contact_id:
            return i
        return None

    def replace_all(self, contacts: Iterable[Contact]) -> None:
        """Drop every record and load contacts, which are trusted as already valid."""
        ordered = sorted(contacts, key=lambda c: c.id)
        keys = [c.id for c in ordered]
        if len(set(keys)) != len(keys):
            raise ValueError("Contact ids must be unique.")
        with self._lock:
            self._keys = keys
            self._records = ordered

    def list_all(self) -> list[Contact]:
        """Return every contact, ascending by id."""
        with self._lock:
            return list(self._records)

    def get(self, contact_id: str) -> Contact | NotFound:
        with self._lock:
            i = self._position(contact_id)
            if i is None:
                return NotFound(contact_id=contact_id)
            return self._records[i]

    def add(self, candidate: ContactFields) -> ContactCreated | ValidationFailed | DuplicateKey:
        """Validate and insert a new contact. An existing id is never overwritten."""
        values = candidate.stripped()
        with self._lock:
            i = bisect_left(self._keys, values.id or "")
            taken = bool(values.id) and i < len(self._keys) and self._keys[i] == values.id
            report = validate_contact(values, id_taken=taken)
            if taken:
                return DuplicateKey(contact_id=values.id, report=report)
            if report:
                return ValidationFailed(report=report)
            contact = _build_contact(values)
            self._keys.insert(i, contact.id)
            self._records.insert(i, contact)
            return ContactCreated(contact=contact)

    def update(
        self, contact_id: str, changes: ContactFields
    ) -> ContactUpdated | NotFound | ValidationFailed:
        """Merge supplied fields into an existing contact. The id never changes.

        The merged record is validated as a whole; on failure the stored
        record is left as it was.
        """
        with self._lock:
            i = self._position(contact_id)
            if i is None:
                return NotFound(contact_id=contact_id)
            current = self._records[i]
            merged = changes.stripped().merged_over(current.to_fields())
            report = validate_contact(merged)
            if report:
                return ValidationFailed(report=report)
            contact = _build_contact(merged)
            self._records[i] = contact
            return ContactUpdated(contact=contact)

    def restore(self, contact: Contact) -> None:
        """Put back a record taken from this index, inserting or overwriting it unvalidated."""
        with self._lock:
            i = bisect_left(self._keys, contact.id)
            if i < len(self._keys) and self._keys[i] == contact.id:
                self._records[i] = contact
            else:
                self._keys.insert(i, contact.id)
                self._records.insert(i, contact)

    def remove(self, contact_id: str) -> ContactDeleted | NotFound:
        with self._lock:
            i = self._position(contact_id)
            if i is None:
                return NotFound(contact_id=contact_id)
            del self._keys[i]
            del self._records[i]
            return ContactDeleted(contact_id=contact_id)
