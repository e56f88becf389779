"""
contactbook core: clean-architecture layout.

- domain: entities (Contact, ContactFields, Credential). No outer dependencies.
- application: ContactStore, EditSession, AuthSession, ContactsApp, ports, DTOs.
- infrastructure: adapters (HttpContactsApi, InMemoryContactsApi, credential stores,
  XState edit machine, message catalog, settings).
"""

from contactbook.application import (
    ContactsApp,
    ContactStore,
    EditSession,
    FetchFailed,
    Refreshed,
    ServiceError,
    SubmitFailed,
    SubmitSucceeded,
    TargetNotFound,
    ValidationFailed,
)
from contactbook.domain import Contact, ContactFields, Credential, UserProfile
from contactbook.infrastructure import (
    HttpContactsApi,
    InMemoryContactsApi,
    XStateEditMachine,
)

__all__ = [
    "Contact",
    "ContactFields",
    "ContactStore",
    "ContactsApp",
    "Credential",
    "EditSession",
    "FetchFailed",
    "HttpContactsApi",
    "InMemoryContactsApi",
    "Refreshed",
    "ServiceError",
    "SubmitFailed",
    "SubmitSucceeded",
    "TargetNotFound",
    "UserProfile",
    "ValidationFailed",
    "XStateEditMachine",
]
