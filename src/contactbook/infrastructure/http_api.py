"""ContactsApi over HTTP (httpx). Bearer auth, JSON in and out."""

import logging
from typing import Any

import httpx

from contactbook.application.errors import GENERIC_ERROR_MESSAGE, ServiceError
from contactbook.domain import Contact, ContactFields, Credential
from contactbook.infrastructure.wire import AuthResponse, ContactListResponse, ContactModel

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000/api"
INVALID_RESPONSE_MESSAGE = "Invalid response from server"


class HttpContactsApi:
    """Talks to the remote contacts service. Every failure raises ServiceError.

    The service reports errors as {"error": "..."}; that text becomes the
    ServiceError message unchanged.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        token: str | None = None,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "HttpContactsApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(self, method: str, endpoint: str, body: dict | None = None) -> Any:
        try:
            response = await self._client.request(
                method, endpoint, json=body, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            raise ServiceError(
                f"Could not reach the contacts service ({self.base_url})"
            ) from e

        data: Any = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = None

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            if not isinstance(message, str):
                message = None
            logger.info("%s %s -> %d", method, endpoint, response.status_code)
            raise ServiceError(message or GENERIC_ERROR_MESSAGE, response.status_code)
        if response.content and data is None:
            raise ServiceError(INVALID_RESPONSE_MESSAGE, response.status_code)
        return data

    # Auth endpoints

    async def register(self, name: str, email: str, password: str) -> Credential:
        data = await self._request(
            "POST", "/auth/register", {"name": name, "email": email, "password": password}
        )
        return _parse_auth(data)

    async def login(self, email: str, password: str) -> Credential:
        data = await self._request(
            "POST", "/auth/login", {"email": email, "password": password}
        )
        return _parse_auth(data)

    # Contacts endpoints

    async def list_contacts(self) -> list[Contact]:
        data = await self._request("GET", "/contacts")
        try:
            parsed = ContactListResponse.model_validate(data)
            return [c.to_entity() for c in parsed.contacts]
        except ValueError as e:
            raise ServiceError(INVALID_RESPONSE_MESSAGE) from e

    async def get_contact(self, contact_id: str) -> Contact:
        data = await self._request("GET", f"/contacts/{contact_id}")
        return _parse_contact(data)

    async def create_contact(self, fields: ContactFields) -> Contact:
        data = await self._request("POST", "/contacts", fields.to_payload())
        return _parse_contact(data)

    async def update_contact(self, contact_id: str, fields: ContactFields) -> Contact:
        data = await self._request("PUT", f"/contacts/{contact_id}", fields.to_payload())
        return _parse_contact(data)

    async def delete_contact(self, contact_id: str) -> None:
        await self._request("DELETE", f"/contacts/{contact_id}")


def _parse_contact(data: Any) -> Contact:
    """Accept either a bare contact or {"contact": {...}}."""
    if isinstance(data, dict) and isinstance(data.get("contact"), dict):
        data = data["contact"]
    try:
        return ContactModel.model_validate(data).to_entity()
    except ValueError as e:
        raise ServiceError(INVALID_RESPONSE_MESSAGE) from e


def _parse_auth(data: Any) -> Credential:
    try:
        return AuthResponse.model_validate(data).to_entity()
    except ValueError as e:
        raise ServiceError(INVALID_RESPONSE_MESSAGE) from e
