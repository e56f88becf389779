"""Load and validate the YAML message catalog."""

import os
from pathlib import Path

import yaml

from contactbook.application.notices import MessageCatalog

REQUIRED_MESSAGES = (
    "welcome",
    "contact_created",
    "contact_updated",
    "contact_deleted",
    "contact_not_found",
    "confirm_delete",
    "validation_failed",
    "form_title_create",
    "form_title_edit",
    "submit_create",
    "submit_edit",
    "empty_list",
)


def get_messages_path() -> Path:
    """Return path to the catalog (CONTACTBOOK_MESSAGES_PATH env or the bundled file)."""
    default = Path(__file__).resolve().parent.parent / "flows" / "messages.yaml"
    path = os.environ.get("CONTACTBOOK_MESSAGES_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_messages(path: Path | None = None) -> MessageCatalog:
    """Load the catalog YAML. Validates that every required message is present."""
    if path is None:
        path = get_messages_path()
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError("Message catalog YAML must be a dict")
    messages = data.get("messages")
    if not isinstance(messages, dict) or not messages:
        raise ValueError("Message catalog must have a non-empty 'messages' mapping")
    missing = [m for m in REQUIRED_MESSAGES if not messages.get(m)]
    if missing:
        raise ValueError(f"Message catalog is missing: {', '.join(missing)}")
    notices = data.get("notices") or {}
    return MessageCatalog(
        messages={str(k): str(v) for k, v in messages.items()},
        error_dismiss_seconds=float(notices.get("error_dismiss_seconds", 5)),
        success_dismiss_seconds=float(notices.get("success_dismiss_seconds", 3)),
    )


# Module-level cache for the loaded catalog
_catalog_cache: MessageCatalog | None = None


def get_messages(cache: bool = True) -> MessageCatalog:
    """Load the catalog (cached by default). Pass cache=False to reload."""
    global _catalog_cache
    if cache and _catalog_cache is not None:
        return _catalog_cache
    _catalog_cache = load_messages()
    return _catalog_cache
