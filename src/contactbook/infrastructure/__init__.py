"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.persistence.neo4j_repository import (
    Neo4jContactRepository,
    ensure_contact_constraint,
)
from contactbook.infrastructure.seed import load_contacts_file, parse_seed_line

__all__ = [
    "Neo4jContactRepository",
    "ensure_contact_constraint",
    "load_contacts_file",
    "parse_seed_line",
]
