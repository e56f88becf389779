"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.config import Settings, build_app, load_env
from contactbook.infrastructure.credential_store import (
    FileCredentialStore,
    InMemoryCredentialStore,
)
from contactbook.infrastructure.edit_machine import XStateEditMachine
from contactbook.infrastructure.http_api import DEFAULT_BASE_URL, HttpContactsApi
from contactbook.infrastructure.memory_api import (
    InMemoryContactDirectory,
    InMemoryContactsApi,
)
from contactbook.infrastructure.messages import get_messages, load_messages

__all__ = [
    "DEFAULT_BASE_URL",
    "FileCredentialStore",
    "HttpContactsApi",
    "InMemoryContactDirectory",
    "InMemoryContactsApi",
    "InMemoryCredentialStore",
    "Settings",
    "XStateEditMachine",
    "build_app",
    "get_messages",
    "load_env",
    "load_messages",
]
