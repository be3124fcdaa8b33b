"""Shared fixtures: a dict-backed ContactRepository that can be told to fail."""

import pytest

from contactbook.application import StorageError
from contactbook.domain import Contact


class FakeContactRepository:
    """Dict-backed repository. Set fail=True to make every call raise StorageError."""

    def __init__(self, contacts: list[Contact] | None = None) -> None:
        self.by_id: dict[str, Contact] = {c.id: c for c in contacts or []}
        self.fail = False

    def _check(self) -> None:
        if self.fail:
            raise StorageError("database is down")

    def list_all(self) -> list[Contact]:
        self._check()
        return [self.by_id[k] for k in sorted(self.by_id)]

    def add(self, contact: Contact) -> None:
        self._check()
        self.by_id[contact.id] = contact

    def update(self, contact: Contact) -> None:
        self._check()
        self.by_id[contact.id] = contact

    def remove(self, contact_id: str) -> bool:
        self._check()
        return self.by_id.pop(contact_id, None) is not None


@pytest.fixture
def fake_repo() -> FakeContactRepository:
    return FakeContactRepository()
