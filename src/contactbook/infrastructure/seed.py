"""Bulk seeding from a text file: one contact per line, 6 comma-separated fields.

Field order is id, firstName, lastName, phone, address, email. Lines that are
malformed or fail validation are logged and skipped; the batch never aborts.
"""

import logging
from pathlib import Path

from contactbook.application import ContactCreated, ContactService, SeedReport
from contactbook.domain import ContactFields

logger = logging.getLogger(__name__)

SEED_FIELD_COUNT = 6


def parse_seed_line(line: str) -> ContactFields | None:
    """Return the fields of one seed line, or None if it does not have exactly 6 fields."""
    parts = line.split(",")
    if len(parts) != SEED_FIELD_COUNT:
        return None
    contact_id, first_name, last_name, phone, address, email = (p.strip() for p in parts)
    return ContactFields(
        id=contact_id,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        email=email,
        address=address,
    )


def load_contacts_file(path: str | Path, service: ContactService) -> SeedReport:
    """Add every valid record in path through service. A missing file yields an empty report."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to load seed data from %s: %s", path, e)
        return SeedReport()

    loaded = skipped = 0
    for line in text.splitlines():
        if not line.strip():
            continue
        fields = parse_seed_line(line)
        if fields is None:
            logger.warning(
                'Skipped invalid line: "%s" - expected %d fields, got %d',
                line,
                SEED_FIELD_COUNT,
                len(line.split(",")),
            )
            skipped += 1
            continue
        result = service.add_contact(fields)
        if isinstance(result, ContactCreated):
            loaded += 1
            logger.debug("Loaded seed contact with ID %s", result.contact.id)
        else:
            skipped += 1
            logger.warning("Skipped seed contact with ID %s: %s", fields.id, result)

    logger.info("Loaded %d seed contacts from %s (%d skipped)", loaded, path, skipped)
    return SeedReport(loaded=loaded, skipped=skipped)
