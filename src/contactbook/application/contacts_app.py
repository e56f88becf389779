"""Page-level controller: wires auth, store, and edit session, and posts notices.

Front ends call these handlers and render `view`, `visible_contacts()`,
`form_title`, and `notices.active()`. Every failure posts an error notice.
"""

import logging

from contactbook.application.auth_session import AuthSession
from contactbook.application.contact_store import ContactStore
from contactbook.application.dto import (
    AuthFailed,
    AuthResult,
    DeleteCancelled,
    DeleteFailed,
    FetchFailed,
    SubmitFailed,
    TargetNotFound,
    ValidationFailed,
)
from contactbook.application.edit_session import EditSession
from contactbook.application.notices import MessageCatalog, NoticeBoard
from contactbook.application.ports import Confirm, ContactsApi, CredentialStore, EditMachine
from contactbook.domain import Contact, ContactFields

logger = logging.getLogger(__name__)

VIEW_AUTH = "auth"
VIEW_APP = "app"


class ContactsApp:
    """One signed-in page: a ContactStore, an EditSession, and an AuthSession."""

    def __init__(
        self,
        api: ContactsApi,
        credentials: CredentialStore,
        machine: EditMachine,
        *,
        catalog: MessageCatalog | None = None,
        notices: NoticeBoard | None = None,
    ) -> None:
        self.catalog = catalog or MessageCatalog()
        self.notices = notices or NoticeBoard(self.catalog)
        self.auth = AuthSession(api, credentials)
        self.store = ContactStore(api)
        self.session = EditSession(self.store, api, machine)
        self.view = VIEW_AUTH

    @property
    def greeting(self) -> str:
        user = self.auth.current.user if self.auth.current else None
        return self.catalog.format("welcome", name=user.name if user else "")

    @property
    def form_title(self) -> str:
        if self.session.is_editing:
            return self.catalog.format("form_title_edit")
        return self.catalog.format("form_title_create")

    @property
    def submit_label(self) -> str:
        if self.session.is_editing:
            return self.catalog.format("submit_edit")
        return self.catalog.format("submit_create")

    async def start(self) -> str:
        """Show the app if a saved credential exists, else the login view."""
        if self.auth.restore() is not None:
            await self._show_app()
        else:
            self.view = VIEW_AUTH
        return self.view

    async def login(self, email: str, password: str) -> bool:
        return await self._signed_in(await self.auth.login(email, password))

    async def register(self, name: str, email: str, password: str) -> bool:
        return await self._signed_in(await self.auth.register(name, email, password))

    async def _signed_in(self, result: AuthResult) -> bool:
        if isinstance(result, AuthFailed):
            self.notices.error(result.message)
            return False
        await self._show_app()
        return True

    async def _show_app(self) -> None:
        self.view = VIEW_APP
        await self.load_contacts()

    def logout(self) -> None:
        self.auth.logout()
        self.store.clear()
        self.session.reset()
        self.notices.dismiss()
        self.view = VIEW_AUTH

    async def load_contacts(self) -> bool:
        result = await self.store.refresh()
        if isinstance(result, FetchFailed):
            self.notices.error(result.message)
            return False
        return True

    def visible_contacts(self, query: str | None = None) -> list[Contact]:
        return self.store.search(query)

    def edit_contact(self, contact_id: str) -> ContactFields | None:
        result = self.session.begin_edit(contact_id)
        if isinstance(result, TargetNotFound):
            self.notices.error(self.catalog.format("contact_not_found"))
            return None
        return result

    def cancel_edit(self) -> None:
        self.session.cancel()

    async def submit_contact(self, fields: ContactFields) -> bool:
        result = await self.session.submit(fields)
        if isinstance(result, ValidationFailed):
            self.notices.error(self.catalog.format("validation_failed"))
            return False
        if isinstance(result, SubmitFailed):
            self.notices.error(result.message)
            return False
        self.notices.success(self.catalog.format(f"contact_{result.action}"))
        if isinstance(result.refresh, FetchFailed):
            self.notices.error(result.refresh.message)
        return True

    async def delete_contact(self, contact_id: str, confirm: Confirm) -> bool:
        result = await self.session.delete_contact(contact_id, confirm)
        if isinstance(result, DeleteCancelled):
            return False
        if isinstance(result, TargetNotFound):
            self.notices.error(self.catalog.format("contact_not_found"))
            return False
        if isinstance(result, DeleteFailed):
            self.notices.error(result.message)
            return False
        self.notices.success(self.catalog.format("contact_deleted"))
        if isinstance(result.refresh, FetchFailed):
            self.notices.error(result.refresh.message)
        return True
