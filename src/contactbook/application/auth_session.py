"""Sign-in state: restore, login, register, logout."""

import logging

from contactbook.application.dto import AuthFailed, AuthResult
from contactbook.application.errors import ServiceError
from contactbook.application.ports import ContactsApi, CredentialStore
from contactbook.domain import Credential

logger = logging.getLogger(__name__)


class AuthSession:
    """Keeps the API token and the persisted credential in step."""

    def __init__(self, api: ContactsApi, credentials: CredentialStore) -> None:
        self._api = api
        self._credentials = credentials
        self._current: Credential | None = None

    @property
    def current(self) -> Credential | None:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    def restore(self) -> Credential | None:
        """Read the saved credential once at startup."""
        credential = self._credentials.load()
        if credential is None:
            return None
        self._install(credential)
        logger.info("Restored session for %s", credential.user.name or credential.user.email)
        return credential

    async def login(self, email: str, password: str) -> AuthResult:
        try:
            credential = await self._api.login(email, password)
        except ServiceError as e:
            logger.warning("Login failed: %s", e.message)
            return AuthFailed(message=e.message)
        self._install(credential)
        self._credentials.save(credential)
        return credential

    async def register(
        self, name: str, email: str, password: str
    ) -> AuthResult:
        try:
            credential = await self._api.register(name, email, password)
        except ServiceError as e:
            logger.warning("Registration failed: %s", e.message)
            return AuthFailed(message=e.message)
        self._install(credential)
        self._credentials.save(credential)
        return credential

    def logout(self) -> None:
        self._api.clear_token()
        self._credentials.clear()
        self._current = None

    def _install(self, credential: Credential) -> None:
        self._api.set_token(credential.token)
        self._current = credential
