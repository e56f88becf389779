"""Settings from the environment (.env supported) and app assembly."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv

from contactbook.application import ContactsApp
from contactbook.infrastructure.credential_store import FileCredentialStore
from contactbook.infrastructure.edit_machine import XStateEditMachine
from contactbook.infrastructure.http_api import DEFAULT_BASE_URL, HttpContactsApi
from contactbook.infrastructure.messages import get_messages

_REPO_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def load_env() -> None:
    """Load .env from repo root or current dir (first one found)."""
    for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
        if path.exists():
            load_dotenv(path)
            break


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_BASE_URL
    credentials_path: Path = Path.home() / ".contactbook" / "credentials.json"
    timeout_seconds: float = 10.0
    error_dismiss_seconds: float | None = None
    success_dismiss_seconds: float | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        api_url = os.environ.get("CONTACTBOOK_API_URL", "").strip() or DEFAULT_BASE_URL
        creds = os.environ.get("CONTACTBOOK_CREDENTIALS_PATH", "").strip()
        error_raw = os.environ.get("CONTACTBOOK_ERROR_DISMISS_SECONDS", "").strip()
        success_raw = os.environ.get("CONTACTBOOK_SUCCESS_DISMISS_SECONDS", "").strip()
        return cls(
            api_url=api_url,
            credentials_path=Path(creds).expanduser() if creds else cls.credentials_path,
            timeout_seconds=_float_env("CONTACTBOOK_TIMEOUT_SECONDS", 10.0),
            error_dismiss_seconds=(
                _float_env("CONTACTBOOK_ERROR_DISMISS_SECONDS", 5.0) if error_raw else None
            ),
            success_dismiss_seconds=(
                _float_env("CONTACTBOOK_SUCCESS_DISMISS_SECONDS", 3.0) if success_raw else None
            ),
        )


def build_app(settings: Settings, api: HttpContactsApi | None = None) -> ContactsApp:
    """Assemble a ContactsApp over HTTP with file-backed credentials."""
    if api is None:
        api = HttpContactsApi(settings.api_url, timeout_seconds=settings.timeout_seconds)
    catalog = get_messages()
    overrides = {}
    if settings.error_dismiss_seconds is not None:
        overrides["error_dismiss_seconds"] = settings.error_dismiss_seconds
    if settings.success_dismiss_seconds is not None:
        overrides["success_dismiss_seconds"] = settings.success_dismiss_seconds
    if overrides:
        catalog = replace(catalog, **overrides)
    return ContactsApp(
        api,
        FileCredentialStore(settings.credentials_path),
        XStateEditMachine(),
        catalog=catalog,
    )
