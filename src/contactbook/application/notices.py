"""User-facing notices (errors and acknowledgments) that dismiss themselves."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

ERROR = "error"
SUCCESS = "success"

# Built-in texts, used when no catalog file is loaded.
DEFAULT_MESSAGES = {
    "welcome": "Welcome, {name}",
    "contact_created": "Contact created successfully!",
    "contact_updated": "Contact updated successfully!",
    "contact_deleted": "Contact deleted successfully!",
    "contact_not_found": "That contact is no longer available. Refresh and try again.",
    "confirm_delete": "Are you sure you want to delete this contact?",
    "validation_failed": "First name and last name are required.",
    "form_title_create": "Add New Contact",
    "form_title_edit": "Edit Contact",
    "submit_create": "Add Contact",
    "submit_edit": "Update Contact",
    "empty_list": "No contacts found.",
    "logged_out": "You have been logged out.",
}


@dataclass(frozen=True)
class MessageCatalog:
    messages: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))
    error_dismiss_seconds: float = 5.0
    success_dismiss_seconds: float = 3.0

    def format(self, message_id: str, **template_vars) -> str:
        """Return the message text with {placeholders} filled. Unknown ids return the id."""
        text = self.messages.get(message_id) or message_id
        for k, v in template_vars.items():
            text = text.replace("{" + k + "}", str(v) if v is not None else "")
        return text


@dataclass(frozen=True)
class Notice:
    level: str
    text: str
    expires_at: float


class NoticeBoard:
    """Holds the notices currently on screen. Expired ones drop out on read."""

    def __init__(
        self,
        catalog: MessageCatalog | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._catalog = catalog or MessageCatalog()
        self._clock = clock
        self._notices: list[Notice] = []

    def error(self, text: str) -> Notice:
        logger.warning("Error notice: %s", text)
        return self._post(ERROR, text, self._catalog.error_dismiss_seconds)

    def success(self, text: str) -> Notice:
        logger.info("Success notice: %s", text)
        return self._post(SUCCESS, text, self._catalog.success_dismiss_seconds)

    def _post(self, level: str, text: str, ttl: float) -> Notice:
        notice = Notice(level=level, text=text, expires_at=self._clock() + ttl)
        self._notices.append(notice)
        return notice

    def active(self) -> list[Notice]:
        now = self._clock()
        self._notices = [n for n in self._notices if n.expires_at > now]
        return list(self._notices)

    def dismiss(self, level: str | None = None) -> None:
        """Hide notices now (all, or only those of one level)."""
        if level is None:
            self._notices = []
        else:
            self._notices = [n for n in self._notices if n.level != level]
