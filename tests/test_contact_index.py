"""Unit tests for OrderedContactIndex. No persistence; pure in-memory index."""

import threading

import pytest

from contactbook.application import (
    ContactCreated,
    ContactDeleted,
    ContactUpdated,
    DuplicateKey,
    NotFound,
    OrderedContactIndex,
    ValidationFailed,
)
from contactbook.domain import Contact, ContactFields


def _fields(contact_id: str = "A1", **overrides) -> ContactFields:
    values = {
        "id": contact_id,
        "first_name": "Jo",
        "last_name": "Li",
        "phone": "555-123-4567",
        "email": "jo@x.com",
    }
    values.update(overrides)
    return ContactFields(**values)


def test_add_then_get_returns_record() -> None:
    index = OrderedContactIndex()
    created = index.add(_fields())
    assert isinstance(created, ContactCreated)
    assert created.contact.id == "A1"
    assert created.contact.address is None

    found = index.get("A1")
    assert found == created.contact


def test_crud_walkthrough() -> None:
    index = OrderedContactIndex()
    assert isinstance(index.add(_fields()), ContactCreated)

    dup = index.add(_fields())
    assert isinstance(dup, DuplicateKey)
    assert dup.contact_id == "A1"

    before = index.get("A1")
    assert isinstance(before, Contact)

    failed = index.update("A1", ContactFields(phone="bad"))
    assert isinstance(failed, ValidationFailed)
    assert set(failed.report) == {"phone"}
    assert index.get("A1") == before

    assert isinstance(index.remove("A1"), ContactDeleted)
    assert isinstance(index.get("A1"), NotFound)


def test_list_all_sorted_regardless_of_insert_order() -> None:
    index = OrderedContactIndex()
    for contact_id in ("B2", "A1", "C3"):
        index.add(_fields(contact_id))
    assert [c.id for c in index.list_all()] == ["A1", "B2", "C3"]


def test_list_all_strictly_ascending_after_mixed_operations() -> None:
    index = OrderedContactIndex()
    for contact_id in ("m", "b", "z", "a", "q", "10", "9", "1"):
        index.add(_fields(contact_id))
    index.remove("q")
    index.remove("a")
    index.add(_fields("c"))
    ids = [c.id for c in index.list_all()]
    assert ids == sorted(ids)
    assert len(ids) == len(set(ids))
    assert ids == ["1", "10", "9", "b", "c", "m", "z"]


def test_duplicate_leaves_store_unchanged() -> None:
    index = OrderedContactIndex()
    original = index.add(_fields()).contact

    dup = index.add(_fields(first_name="Other", phone="bad"))
    assert isinstance(dup, DuplicateKey)
    assert dup.report["id"].startswith("ID already exists")
    assert "phone" in dup.report
    assert len(index) == 1
    assert index.get("A1") == original


def test_add_invalid_not_stored() -> None:
    index = OrderedContactIndex()
    result = index.add(_fields(email="nope", last_name=""))
    assert isinstance(result, ValidationFailed)
    assert set(result.report) == {"email", "last_name"}
    assert len(index) == 0
    assert isinstance(index.get("A1"), NotFound)


def test_add_trims_values() -> None:
    index = OrderedContactIndex()
    result = index.add(_fields("  A1 ", first_name=" Jo ", address="   "))
    assert isinstance(result, ContactCreated)
    assert result.contact.id == "A1"
    assert result.contact.first_name == "Jo"
    assert result.contact.address is None
    assert "A1" in index


def test_update_partial_merge_keeps_other_fields() -> None:
    index = OrderedContactIndex()
    index.add(_fields(address="1 Main St"))
    result = index.update("A1", ContactFields(first_name="Joanna", email="joanna@x.com"))
    assert isinstance(result, ContactUpdated)
    assert result.contact.first_name == "Joanna"
    assert result.contact.email == "joanna@x.com"
    assert result.contact.last_name == "Li"
    assert result.contact.address == "1 Main St"


def test_update_ignores_id_in_payload() -> None:
    index = OrderedContactIndex()
    index.add(_fields())
    result = index.update("A1", ContactFields(id="B2", last_name="Lee"))
    assert isinstance(result, ContactUpdated)
    assert result.contact.id == "A1"
    assert isinstance(index.get("B2"), NotFound)
    assert [c.id for c in index.list_all()] == ["A1"]


def test_update_blank_required_field_rejected() -> None:
    index = OrderedContactIndex()
    index.add(_fields())
    result = index.update("A1", ContactFields(first_name="  "))
    assert isinstance(result, ValidationFailed)
    assert "first_name" in result.report
    assert index.get("A1").first_name == "Jo"


def test_update_missing_id_not_found() -> None:
    index = OrderedContactIndex()
    index.add(_fields())
    result = index.update("ZZ", ContactFields(first_name="X"))
    assert isinstance(result, NotFound)
    assert result.contact_id == "ZZ"
    assert [c.first_name for c in index.list_all()] == ["Jo"]


def test_remove_twice_not_found_second_time() -> None:
    index = OrderedContactIndex()
    index.add(_fields("A1"))
    index.add(_fields("B2"))
    assert isinstance(index.remove("A1"), ContactDeleted)
    second = index.remove("A1")
    assert isinstance(second, NotFound)
    assert [c.id for c in index.list_all()] == ["B2"]


def test_restore_puts_record_back_in_order() -> None:
    index = OrderedContactIndex()
    for contact_id in ("A1", "B2", "C3"):
        index.add(_fields(contact_id))
    removed = index.get("B2")
    index.remove("B2")
    index.restore(removed)
    assert [c.id for c in index.list_all()] == ["A1", "B2", "C3"]


def test_replace_all_sorts_and_rejects_duplicates() -> None:
    a = Contact(id="A1", first_name="A", last_name="A", phone="5551234567", email="a@x.com")
    b = Contact(id="B2", first_name="B", last_name="B", phone="5551234567", email="b@x.com")
    index = OrderedContactIndex([b, a])
    assert [c.id for c in index.list_all()] == ["A1", "B2"]
    with pytest.raises(ValueError):
        index.replace_all([a, a])


def test_concurrent_adds_keep_one_record_per_id() -> None:
    index = OrderedContactIndex()
    workers = 16
    shared_results = []
    results_lock = threading.Lock()
    start = threading.Barrier(workers)

    def worker(n: int) -> None:
        start.wait()
        for i in range(20):
            index.add(_fields(f"w{n:02d}-{i:02d}"))
        result = index.add(_fields("SHARED"))
        with results_lock:
            shared_results.append(result)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sum(isinstance(r, ContactCreated) for r in shared_results) == 1
    assert sum(isinstance(r, DuplicateKey) for r in shared_results) == workers - 1
    ids = [c.id for c in index.list_all()]
    assert len(ids) == workers * 20 + 1
    assert all(a < b for a, b in zip(ids, ids[1:]))
