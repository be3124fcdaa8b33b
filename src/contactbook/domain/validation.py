"""Field validation for contacts. Pure functions; the single source of truth for the rules."""

import re

from contactbook.domain.entities import ADDRESS_MAX_LENGTH, ID_MAX_LENGTH, ContactFields

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
# Optional +1 prefix, then 3-3-4 digit groups with optional separators.
PHONE_PATTERN = re.compile(r"(\+?1?[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})")
PHONE_MIN_DIGITS = 10

_PHONE_SEPARATORS = re.compile(r"[\s\-()]")
_NON_DIGITS = re.compile(r"[^0-9]")

ValidationReport = dict[str, str]


def validate_email(email: str | None) -> str | None:
    """Return an error message, or None if the email is acceptable."""
    if not email or not email.strip():
        return "Email is required"
    if not EMAIL_PATTERN.fullmatch(email):
        return "Please enter a valid email address"
    return None


def validate_phone(phone: str | None) -> str | None:
    """Return an error message, or None if the phone number is acceptable.

    The digit count is checked on the value with spaces, hyphens and
    parentheses removed; the pattern is checked on the value as given.
    """
    if not phone or not phone.strip():
        return "Phone number is required"
    digits = _NON_DIGITS.sub("", _PHONE_SEPARATORS.sub("", phone))
    if len(digits) < PHONE_MIN_DIGITS:
        return f"Phone number must have at least {PHONE_MIN_DIGITS} digits"
    if not PHONE_PATTERN.fullmatch(phone):
        return "Please enter a valid phone number (e.g., +1-555-123-4567 or 555-123-4567)"
    return None


def validate_address(address: str | None) -> str | None:
    if address and len(address.strip()) > ADDRESS_MAX_LENGTH:
        return f"Address must be {ADDRESS_MAX_LENGTH} characters or less"
    return None


def validate_contact(candidate: ContactFields, *, id_taken: bool = False) -> ValidationReport:
    """Validate every field of candidate and collect all failures.

    id_taken is supplied by the caller on insert when the id is already
    stored; it is reported as an id error like any other.
    Returns an empty dict when the candidate is valid.
    """
    errors: ValidationReport = {}

    contact_id = (candidate.id or "").strip()
    if not contact_id:
        errors["id"] = "ID is required"
    elif len(contact_id) > ID_MAX_LENGTH:
        errors["id"] = f"ID must be {ID_MAX_LENGTH} characters or less"
    elif id_taken:
        errors["id"] = "ID already exists. Please choose a different ID."

    if not candidate.first_name or not candidate.first_name.strip():
        errors["first_name"] = "First name is required"
    if not candidate.last_name or not candidate.last_name.strip():
        errors["last_name"] = "Last name is required"

    for name, check, value in (
        ("email", validate_email, candidate.email),
        ("phone", validate_phone, candidate.phone),
        ("address", validate_address, candidate.address),
    ):
        message = check(value)
        if message:
            errors[name] = message

    return errors
