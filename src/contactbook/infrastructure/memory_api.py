"""In-memory contacts service (no network). Backs the dev server and tests."""

import hashlib
import uuid

from contactbook.application.errors import ServiceError
from contactbook.domain import Contact, ContactFields, Credential, UserProfile


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _optional(value: str) -> str | None:
    return value if value and value.strip() else None


class InMemoryContactDirectory:
    """Users, tokens, and per-user contacts. Order preserved by insertion.

    Errors are raised as ServiceError with the status the HTTP service
    would answer with.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserProfile] = {}
        self._passwords: dict[str, str] = {}  # email -> password hash
        self._user_ids_by_email: dict[str, str] = {}
        self._tokens: dict[str, str] = {}  # token -> user id
        self._contacts: dict[str, dict[str, Contact]] = {}  # user id -> id -> contact

    # Auth

    def register(self, name: str, email: str, password: str) -> Credential:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password:
            raise ServiceError("Name, email and password are required", 400)
        if email in self._user_ids_by_email:
            raise ServiceError("User already exists", 400)
        user = UserProfile(id=str(uuid.uuid4()), name=name, email=email)
        self._users[user.id] = user
        self._user_ids_by_email[email] = user.id
        self._passwords[email] = _hash_password(password)
        self._contacts[user.id] = {}
        return self._issue_token(user)

    def login(self, email: str, password: str) -> Credential:
        email = (email or "").strip().lower()
        user_id = self._user_ids_by_email.get(email)
        if user_id is None or self._passwords.get(email) != _hash_password(password or ""):
            raise ServiceError("Invalid credentials", 401)
        return self._issue_token(self._users[user_id])

    def _issue_token(self, user: UserProfile) -> Credential:
        token = uuid.uuid4().hex
        self._tokens[token] = user.id
        return Credential(token=token, user=user)

    def user_for_token(self, token: str | None) -> UserProfile:
        user_id = self._tokens.get(token or "")
        if user_id is None:
            raise ServiceError("Access denied. No valid token provided.", 401)
        return self._users[user_id]

    # Contacts

    def _book(self, token: str | None) -> dict[str, Contact]:
        return self._contacts[self.user_for_token(token).id]

    def list_contacts(self, token: str | None) -> list[Contact]:
        return list(self._book(token).values())

    def get_contact(self, token: str | None, contact_id: str) -> Contact:
        contact = self._book(token).get(contact_id)
        if contact is None:
            raise ServiceError("Contact not found", 404)
        return contact

    def create_contact(self, token: str | None, fields: ContactFields) -> Contact:
        book = self._book(token)
        contact = self._build(str(uuid.uuid4()), fields)
        book[contact.id] = contact
        return contact

    def seed(self, token: str | None, contacts: list[Contact]) -> None:
        """Store contacts with their own ids (fixtures, demo data)."""
        book = self._book(token)
        for contact in contacts:
            book[contact.id] = contact

    def update_contact(
        self, token: str | None, contact_id: str, fields: ContactFields
    ) -> Contact:
        book = self._book(token)
        if contact_id not in book:
            raise ServiceError("Contact not found", 404)
        contact = self._build(contact_id, fields)
        book[contact_id] = contact
        return contact

    def delete_contact(self, token: str | None, contact_id: str) -> None:
        book = self._book(token)
        if book.pop(contact_id, None) is None:
            raise ServiceError("Contact not found", 404)

    def _build(self, contact_id: str, fields: ContactFields) -> Contact:
        if fields.missing_required():
            raise ServiceError("First name and last name are required", 400)
        return Contact(
            id=contact_id,
            first_name=fields.first_name.strip(),
            last_name=fields.last_name.strip(),
            email=_optional(fields.email),
            phone=_optional(fields.phone),
            company=_optional(fields.company),
            notes=_optional(fields.notes),
        )


class InMemoryContactsApi:
    """ContactsApi port over an InMemoryContactDirectory.

    fail_next(operation, message) makes the next call of that operation
    raise ServiceError; calls records every operation name, in order.
    """

    def __init__(self, directory: InMemoryContactDirectory | None = None) -> None:
        self.directory = directory or InMemoryContactDirectory()
        self.token: str | None = None
        self.calls: list[str] = []
        self._failures: dict[str, ServiceError] = {}

    def fail_next(self, operation: str, message: str, status_code: int = 500) -> None:
        self._failures[operation] = ServiceError(message, status_code)

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        failure = self._failures.pop(operation, None)
        if failure is not None:
            raise failure

    def set_token(self, token: str) -> None:
        self.token = token

    def clear_token(self) -> None:
        self.token = None

    async def register(self, name: str, email: str, password: str) -> Credential:
        self._enter("register")
        return self.directory.register(name, email, password)

    async def login(self, email: str, password: str) -> Credential:
        self._enter("login")
        return self.directory.login(email, password)

    async def list_contacts(self) -> list[Contact]:
        self._enter("list_contacts")
        return self.directory.list_contacts(self.token)

    async def get_contact(self, contact_id: str) -> Contact:
        self._enter("get_contact")
        return self.directory.get_contact(self.token, contact_id)

    async def create_contact(self, fields: ContactFields) -> Contact:
        self._enter("create_contact")
        return self.directory.create_contact(self.token, fields)

    async def update_contact(self, contact_id: str, fields: ContactFields) -> Contact:
        self._enter("update_contact")
        return self.directory.update_contact(self.token, contact_id, fields)

    async def delete_contact(self, contact_id: str) -> None:
        self._enter("delete_contact")
        self.directory.delete_contact(self.token, contact_id)
