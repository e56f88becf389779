"""Local snapshot of the user's contacts, with lookup and search."""

import logging
from collections.abc import Iterable, Sequence

from contactbook.application.dto import FetchFailed, Refreshed, RefreshResult
from contactbook.application.errors import ServiceError
from contactbook.application.ports import ContactsApi
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


def contact_matches(contact: Contact, needle: str) -> bool:
    """True if any searchable field contains needle (already lower-cased).

    Phone is compared as-is: it is digits and symbols.
    """
    if needle in contact.first_name.lower():
        return True
    if needle in contact.last_name.lower():
        return True
    if contact.email and needle in contact.email.lower():
        return True
    if contact.phone and needle in contact.phone:
        return True
    if contact.company and needle in contact.company.lower():
        return True
    return False


def search_contacts(contacts: Sequence[Contact], query: str | None) -> list[Contact]:
    """Return contacts matching query, in their original order.

    A blank query returns every contact.
    """
    if not query or not query.strip():
        return list(contacts)
    needle = query.lower()
    return [c for c in contacts if contact_matches(c, needle)]


def _check_unique_ids(contacts: Iterable[Contact]) -> None:
    seen: set[str] = set()
    for contact in contacts:
        if contact.id in seen:
            raise ValueError(f"Duplicate contact id in response: {contact.id}")
        seen.add(contact.id)


class ContactStore:
    """Holds the contacts as last fetched. Replaced wholesale on each refresh.

    Overlapping refreshes: each call takes a ticket and its response is only
    applied if no later-issued refresh has been applied already.
    """

    def __init__(self, api: ContactsApi) -> None:
        self._api = api
        self._snapshot: tuple[Contact, ...] = ()
        self._issued = 0
        self._applied = 0

    @property
    def snapshot(self) -> tuple[Contact, ...]:
        return self._snapshot

    def __len__(self) -> int:
        return len(self._snapshot)

    async def refresh(self) -> RefreshResult:
        """Fetch the full list and replace the snapshot. On failure keep the old one.

        A response (or failure) that arrives after a later refresh was applied,
        or after clear(), is dropped and reported as Refreshed(applied=False).
        """
        self._issued += 1
        ticket = self._issued
        try:
            contacts = tuple(await self._api.list_contacts())
            _check_unique_ids(contacts)
        except ServiceError as e:
            return self._failed(ticket, e.message)
        except ValueError as e:
            return self._failed(ticket, str(e))

        if ticket <= self._applied:
            logger.debug("Discarding refresh %d; %d already applied", ticket, self._applied)
            return Refreshed(count=len(contacts), applied=False)
        self._snapshot = contacts
        self._applied = ticket
        logger.debug("Snapshot replaced with %d contacts", len(contacts))
        return Refreshed(count=len(contacts))

    def _failed(self, ticket: int, message: str) -> RefreshResult:
        if ticket <= self._applied:
            logger.debug("Discarding failed refresh %d: %s", ticket, message)
            return Refreshed(count=len(self._snapshot), applied=False)
        logger.warning("Contact refresh failed: %s", message)
        return FetchFailed(message=message)

    def find_by_id(self, contact_id: str) -> Contact | None:
        """Return the contact with the given id from the snapshot, or None."""
        for contact in self._snapshot:
            if contact.id == contact_id:
                return contact
        return None

    def search(self, query: str | None) -> list[Contact]:
        return search_contacts(self._snapshot, query)

    def clear(self) -> None:
        """Empty the snapshot. Refreshes still in flight will not be applied."""
        self._snapshot = ()
        self._applied = self._issued
