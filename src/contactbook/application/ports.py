"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from contactbook.domain import Contact, ContactFields, Credential

# Yes/no gate asked before a delete goes out. May be sync or async.
Confirm = Callable[[], bool | Awaitable[bool]]


class ContactsApi(Protocol):
    """The remote contacts service. Methods raise ServiceError on failure."""

    def set_token(self, token: str) -> None:
        """Authorize subsequent requests with this bearer token."""
        ...

    def clear_token(self) -> None:
        ...

    async def register(self, name: str, email: str, password: str) -> Credential:
        ...

    async def login(self, email: str, password: str) -> Credential:
        ...

    async def list_contacts(self) -> list[Contact]:
        """Return the full contact set, in service order."""
        ...

    async def get_contact(self, contact_id: str) -> Contact:
        ...

    async def create_contact(self, fields: ContactFields) -> Contact:
        ...

    async def update_contact(self, contact_id: str, fields: ContactFields) -> Contact:
        ...

    async def delete_contact(self, contact_id: str) -> None:
        ...


class CredentialStore(Protocol):
    """Persists the credential across restarts."""

    def load(self) -> Credential | None:
        """Return the saved credential, or None if nothing (valid) is saved."""
        ...

    def save(self, credential: Credential) -> None:
        ...

    def clear(self) -> None:
        """Remove token and user together."""
        ...


class EditMachine(Protocol):
    """State chart for the edit session (states "idle" and "editing")."""

    @property
    def initial(self) -> str:
        ...

    def next(self, state_value: str, event: str) -> str | None:
        """Next state for event, or None if the event is not handled."""
        ...
