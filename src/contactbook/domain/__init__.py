"""Domain layer: entities and validation rules. No dependencies on outer layers."""

from contactbook.domain.entities import (
    ADDRESS_MAX_LENGTH,
    ID_MAX_LENGTH,
    Contact,
    ContactFields,
)
from contactbook.domain.validation import ValidationReport, validate_contact

__all__ = [
    "ADDRESS_MAX_LENGTH",
    "ID_MAX_LENGTH",
    "Contact",
    "ContactFields",
    "ValidationReport",
    "validate_contact",
]
