"""Domain entities: Contact and the field set used to create or change one."""

from dataclasses import dataclass, fields, replace

# Length limits shared by validation and the storage schema.
ID_MAX_LENGTH = 10
ADDRESS_MAX_LENGTH = 200


@dataclass(frozen=True)
class ContactFields:
    """
    Raw, unvalidated contact values as supplied by a caller.
    None means "not supplied": on update only supplied fields overwrite.
    """

    id: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    def stripped(self) -> "ContactFields":
        """Return a copy with surrounding whitespace removed from every supplied value."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            values[f.name] = str(value).strip() if value is not None else None
        return ContactFields(**values)

    def merged_over(self, base: "ContactFields") -> "ContactFields":
        """Overlay supplied values on top of base. The id of base always wins."""
        changes = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "id" and getattr(self, f.name) is not None
        }
        return replace(base, **changes)


@dataclass(frozen=True)
class Contact:
    """
    A stored contact. Only built from values that passed validation.
    The id is the sort and lookup key and never changes.
    """

    id: str
    first_name: str
    last_name: str
    phone: str
    email: str
    address: str | None = None

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("Contact id must be non-empty.")
        if len(self.id) > ID_MAX_LENGTH:
            raise ValueError(f"Contact id must be at most {ID_MAX_LENGTH} chars.")

    def to_fields(self) -> ContactFields:
        return ContactFields(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            phone=self.phone,
            email=self.email,
            address=self.address,
        )
