"""Neo4j implementation of ContactRepository.
Graph: one (:Contact {id, first_name, last_name, phone, email, address}) node per contact.
Contact.id is unique (see ensure_contact_constraint); list_all is ordered by id.
"""

from neo4j.exceptions import DriverError, Neo4jError

from contactbook.application.ports import StorageError
from contactbook.domain import Contact

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
FOR (c:Contact) REQUIRE c.id IS UNIQUE
"""

_LIST_QUERY = """
MATCH (c:Contact)
RETURN c
ORDER BY c.id
"""

_CREATE_QUERY = """
CREATE (c:Contact {
    id: $id,
    first_name: $first_name,
    last_name: $last_name,
    phone: $phone,
    email: $email,
    address: $address
})
"""

_UPDATE_QUERY = """
MATCH (c:Contact {id: $id})
SET c.first_name = $first_name,
    c.last_name = $last_name,
    c.phone = $phone,
    c.email = $email,
    c.address = $address
RETURN c.id AS id
"""

_DELETE_QUERY = """
MATCH (c:Contact {id: $id})
DELETE c
RETURN count(c) AS deleted
"""


def ensure_contact_constraint(driver) -> None:
    """Create unique constraint on Contact(id) if missing."""
    try:
        with driver.session() as session:
            session.run(_CONSTRAINT_QUERY)
    except (DriverError, Neo4jError) as e:
        raise StorageError(f"Could not create contact constraint: {e}") from e


def _contact_params(contact: Contact) -> dict:
    return {
        "id": contact.id,
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "phone": contact.phone,
        "email": contact.email,
        "address": contact.address or "",
    }


class Neo4jContactRepository:
    """Stores contacts as Contact nodes. Driver failures surface as StorageError."""

    def __init__(self, driver: object) -> None:
        self._driver = driver

    def list_all(self) -> list[Contact]:
        try:
            with self._driver.session() as session:
                result = session.run(_LIST_QUERY)
                return [_record_to_contact(rec) for rec in result]
        except (DriverError, Neo4jError) as e:
            raise StorageError(f"Could not list contacts: {e}") from e

    def add(self, contact: Contact) -> None:
        try:
            with self._driver.session() as session:
                session.run(_CREATE_QUERY, **_contact_params(contact)).consume()
        except (DriverError, Neo4jError) as e:
            raise StorageError(f"Could not store contact {contact.id}: {e}") from e

    def update(self, contact: Contact) -> None:
        try:
            with self._driver.session() as session:
                record = session.run(_UPDATE_QUERY, **_contact_params(contact)).single()
        except (DriverError, Neo4jError) as e:
            raise StorageError(f"Could not update contact {contact.id}: {e}") from e
        if record is None:
            raise StorageError(f"Contact {contact.id} is missing from the store")

    def remove(self, contact_id: str) -> bool:
        try:
            with self._driver.session() as session:
                record = session.run(_DELETE_QUERY, id=contact_id).single()
        except (DriverError, Neo4jError) as e:
            raise StorageError(f"Could not delete contact {contact_id}: {e}") from e
        return bool(record and record["deleted"])


def _record_to_contact(record) -> Contact:
    c = record["c"]
    return Contact(
        id=c["id"],
        first_name=c.get("first_name") or "",
        last_name=c.get("last_name") or "",
        phone=c.get("phone") or "",
        email=c.get("email") or "",
        address=c.get("address") or None,
    )
