"""JSON wire models shared by the HTTP client and the development server."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contactbook.domain import Contact, ContactFields, Credential, UserProfile


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value if value.strip() else None


class ContactModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    notes: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if value is not None else value

    def to_entity(self) -> Contact:
        """Raises ValueError if the record breaks Contact invariants."""
        return Contact(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=_blank_to_none(self.email),
            phone=_blank_to_none(self.phone),
            company=_blank_to_none(self.company),
            notes=_blank_to_none(self.notes),
        )

    @classmethod
    def from_entity(cls, contact: Contact) -> "ContactModel":
        return cls(
            id=contact.id,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email=contact.email,
            phone=contact.phone,
            company=contact.company,
            notes=contact.notes,
        )


class ContactBody(BaseModel):
    """Create/update request body."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    notes: str | None = None

    def to_fields(self) -> ContactFields:
        return ContactFields(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email or "",
            phone=self.phone or "",
            company=self.company or "",
            notes=self.notes or "",
        )


class ContactListResponse(BaseModel):
    contacts: list[ContactModel]


class UserModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str = ""
    email: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if value is not None else value

    def to_entity(self) -> UserProfile:
        return UserProfile(id=self.id, name=self.name, email=self.email)

    @classmethod
    def from_entity(cls, user: UserProfile) -> "UserModel":
        return cls(id=user.id, name=user.name, email=user.email)


class AuthResponse(BaseModel):
    token: str
    user: UserModel = Field(default_factory=UserModel)

    def to_entity(self) -> Credential:
        return Credential(token=self.token, user=self.user.to_entity())


class LoginBody(BaseModel):
    email: str
    password: str


class RegisterBody(BaseModel):
    name: str
    email: str
    password: str
