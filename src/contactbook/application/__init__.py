"""Application layer: contact store, edit session, auth, ports, and DTOs. Depends only on domain."""

from contactbook.application.auth_session import AuthSession
from contactbook.application.contact_store import ContactStore, search_contacts
from contactbook.application.contacts_app import VIEW_APP, VIEW_AUTH, ContactsApp
from contactbook.application.dto import (
    AuthFailed,
    DeleteCancelled,
    Deleted,
    DeleteFailed,
    FetchFailed,
    Refreshed,
    SubmitFailed,
    SubmitSucceeded,
    TargetNotFound,
    ValidationFailed,
)
from contactbook.application.edit_session import EDITING, IDLE, EditSession
from contactbook.application.errors import GENERIC_ERROR_MESSAGE, ServiceError
from contactbook.application.notices import MessageCatalog, Notice, NoticeBoard
from contactbook.application.ports import ContactsApi, CredentialStore, EditMachine

__all__ = [
    "AuthFailed",
    "AuthSession",
    "ContactStore",
    "ContactsApi",
    "ContactsApp",
    "CredentialStore",
    "DeleteCancelled",
    "DeleteFailed",
    "Deleted",
    "EDITING",
    "EditMachine",
    "EditSession",
    "FetchFailed",
    "GENERIC_ERROR_MESSAGE",
    "IDLE",
    "MessageCatalog",
    "Notice",
    "NoticeBoard",
    "Refreshed",
    "ServiceError",
    "SubmitFailed",
    "SubmitSucceeded",
    "TargetNotFound",
    "VIEW_APP",
    "VIEW_AUTH",
    "ValidationFailed",
    "search_contacts",
]
