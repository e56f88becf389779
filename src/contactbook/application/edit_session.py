"""Edit session: one edit target at a time, create vs. update on submit."""

import inspect
import logging

from contactbook.application.contact_store import ContactStore
from contactbook.application.dto import (
    DeleteCancelled,
    Deleted,
    DeleteFailed,
    DeleteResult,
    SubmitFailed,
    SubmitResult,
    SubmitSucceeded,
    TargetNotFound,
    ValidationFailed,
)
from contactbook.application.errors import ServiceError
from contactbook.application.ports import Confirm, ContactsApi, EditMachine
from contactbook.domain import ContactFields

logger = logging.getLogger(__name__)

IDLE = "idle"
EDITING = "editing"


class EditSession:
    """Tracks whether the form is creating a new contact or editing one.

    States are "idle" (new, empty contact) and "editing" (target_id set).
    Starting an edit while editing replaces the target.
    """

    def __init__(
        self,
        store: ContactStore,
        api: ContactsApi,
        machine: EditMachine,
    ) -> None:
        self._store = store
        self._api = api
        self._machine = machine
        self._state = machine.initial
        self._target_id: str | None = None
        self._staged: ContactFields | None = None

    @property
    def state(self) -> str:
        return self._state

    @property
    def target_id(self) -> str | None:
        return self._target_id

    @property
    def is_editing(self) -> bool:
        return self._state == EDITING

    @property
    def staged(self) -> ContactFields:
        """Field values currently in the form."""
        return self._staged or ContactFields()

    def _fire(self, event: str) -> None:
        next_state = self._machine.next(self._state, event)
        if next_state is None:
            raise RuntimeError(f"Event {event} not allowed in state {self._state}")
        logger.debug("Edit session %s --%s--> %s", self._state, event, next_state)
        self._state = next_state
        if next_state != EDITING:
            self._target_id = None
            self._staged = None

    def begin_edit(self, contact_id: str) -> ContactFields | TargetNotFound:
        """Load the contact into the form. Unknown ids leave the session as it was."""
        contact = self._store.find_by_id(contact_id)
        if contact is None:
            logger.info("Cannot edit %s: not in the current snapshot", contact_id)
            return TargetNotFound(contact_id=contact_id)
        self._fire("BEGIN_EDIT")
        self._target_id = contact.id
        self._staged = contact.to_fields()
        return self._staged

    def begin_create(self) -> None:
        self._fire("BEGIN_CREATE")

    def cancel(self) -> None:
        """Back to idle; staged values are dropped."""
        self._fire("CANCEL")

    def reset(self) -> None:
        self._fire("RESET")

    async def submit(
        self, fields: ContactFields
    ) -> SubmitResult:
        """Create (idle) or update the target (editing), then refresh the store.

        On failure the state is kept so the user can correct and retry.
        """
        missing = fields.missing_required()
        if missing:
            return ValidationFailed(
                reason="First name and last name are required.",
                missing=missing,
            )

        target_id = self._target_id if self.is_editing else None
        self._staged = fields
        try:
            if target_id is not None:
                contact = await self._api.update_contact(target_id, fields)
                action = "updated"
            else:
                contact = await self._api.create_contact(fields)
                action = "created"
        except ServiceError as e:
            logger.warning("Submit failed (%s): %s", self._state, e.message)
            return SubmitFailed(message=e.message)

        self._fire("SUBMITTED")
        logger.info("Contact %s", action)
        refresh = await self._store.refresh()
        return SubmitSucceeded(action=action, contact=contact, refresh=refresh)

    async def delete_contact(
        self, contact_id: str, confirm: Confirm
    ) -> DeleteResult:
        """Delete after confirmation. Works in any state.

        Deleting the contact being edited resets the session to idle.
        """
        if self._store.find_by_id(contact_id) is None:
            return TargetNotFound(contact_id=contact_id)

        answer = confirm()
        if inspect.isawaitable(answer):
            answer = await answer
        if not answer:
            return DeleteCancelled(contact_id=contact_id)

        try:
            await self._api.delete_contact(contact_id)
        except ServiceError as e:
            logger.warning("Delete of %s failed: %s", contact_id, e.message)
            return DeleteFailed(contact_id=contact_id, message=e.message)

        if self.is_editing and self._target_id == contact_id:
            self._fire("TARGET_DELETED")
        refresh = await self._store.refresh()
        return Deleted(contact_id=contact_id, refresh=refresh)
