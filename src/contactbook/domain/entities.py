"""Domain entities: Contact, ContactFields, UserProfile, and Credential."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ContactFields:
    """
    The field set of the contact form.
    Every field is a string; an absent optional field is "".
    """

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    notes: str = ""

    def missing_required(self) -> tuple[str, ...]:
        """Return the wire names of required fields that are blank."""
        missing = []
        if not (self.first_name or "").strip():
            missing.append("firstName")
        if not (self.last_name or "").strip():
            missing.append("lastName")
        return tuple(missing)

    def to_payload(self) -> dict[str, str]:
        """Request body for create/update, in wire (camelCase) names."""
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "company": self.company,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Contact:
    """
    A contact record as held by the remote directory.
    The id is server-assigned and never changes.
    """

    id: str = field(default="")
    first_name: str = field(default="")
    last_name: str = field(default="")
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    notes: str | None = None

    def __post_init__(self):
        if not self.id or not str(self.id).strip():
            raise ValueError("Contact id must be non-empty.")
        if not self.first_name or not self.first_name.strip():
            raise ValueError("Contact first name must be non-empty.")
        if not self.last_name or not self.last_name.strip():
            raise ValueError("Contact last name must be non-empty.")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_fields(self) -> ContactFields:
        """Populate a form from this contact; absent optionals become ""."""
        return ContactFields(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email or "",
            phone=self.phone or "",
            company=self.company or "",
            notes=self.notes or "",
        )


@dataclass(frozen=True)
class UserProfile:
    """The signed-in user as returned by the auth endpoints."""

    id: str | None = None
    name: str = ""
    email: str | None = None


@dataclass(frozen=True)
class Credential:
    """
    Bearer token plus the profile it belongs to.
    Persisted across restarts; cleared on logout.
    """

    token: str = field(default="")
    user: UserProfile = field(default_factory=UserProfile)

    def __post_init__(self):
        if not self.token or not self.token.strip():
            raise ValueError("Credential token must be non-empty.")
