"""Composition root: store + dialog controller + gateway behind one surface."""

from contactbook.application.auth_service import AuthService
from contactbook.application.contact_store import ContactStore
from contactbook.application.dialog_controller import DialogController
from contactbook.application.dialog_machine import DialogMachine
from contactbook.application.dto import DialogState, LoginResult, RegistrationResult
from contactbook.application.ports import ContactGateway, SessionOracle
from contactbook.domain import Contact


class ContactManager:
    """
    The only component that knows both the store and the dialog controller.
    Every successful confirm_* triggers exactly one store refresh.
    """

    def __init__(
        self,
        gateway: ContactGateway,
        session: SessionOracle,
        *,
        auth: AuthService | None = None,
        machine: DialogMachine | None = None,
    ) -> None:
        self.store = ContactStore(gateway)
        self.dialogs = DialogController(
            gateway,
            session,
            report_error=self.store.set_page_error,
            clear_error=self.store.clear_page_error,
            machine=machine,
        )
        self._session = session
        self._auth = auth

    # --- snapshot ---

    @property
    def records(self) -> tuple[Contact, ...]:
        return self.store.records

    @property
    def loading(self) -> bool:
        return self.store.loading

    @property
    def page_error(self) -> str:
        return self.store.page_error

    @property
    def dialog(self) -> DialogState:
        return self.dialogs.state

    @property
    def busy(self) -> bool:
        return self.dialogs.busy

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated()

    async def start(self) -> None:
        """Initial mount: fetch the list once."""
        await self.store.refresh()

    async def refresh(self) -> None:
        await self.store.refresh()

    def find(self, contact_id: str) -> Contact | None:
        return self.store.find(contact_id)

    # --- dialog transitions ---

    def request_view(self, contact: Contact) -> bool:
        return self.dialogs.request_view(contact)

    def request_create(self) -> bool:
        return self.dialogs.request_create()

    def request_edit(self, contact: Contact) -> bool:
        return self.dialogs.request_edit(contact)

    def request_delete(self, contact: Contact) -> bool:
        return self.dialogs.request_delete(contact)

    def request_password_change(self, contact: Contact) -> bool:
        return self.dialogs.request_password_change(contact)

    def update_draft(self, field_name: str, value: str) -> bool:
        return self.dialogs.update_draft(field_name, value)

    def set_new_password(self, value: str) -> bool:
        return self.dialogs.set_new_password(value)

    def cancel(self) -> bool:
        return self.dialogs.cancel()

    async def confirm_edit(self) -> bool:
        ok = await self.dialogs.confirm_edit()
        if ok:
            await self.store.refresh()
        return ok

    async def confirm_delete(self) -> bool:
        ok = await self.dialogs.confirm_delete()
        if ok:
            await self.store.refresh()
        return ok

    async def confirm_password_change(self, new_password: str | None = None) -> bool:
        ok = await self.dialogs.confirm_password_change(new_password)
        if ok:
            await self.store.refresh()
        return ok

    # --- session ---

    def _require_auth(self) -> AuthService:
        if self._auth is None:
            raise RuntimeError("ContactManager was built without an AuthService")
        return self._auth

    async def login(self, username: str, password: str) -> LoginResult:
        return await self._require_auth().login(username, password)

    def logout(self) -> None:
        self._require_auth().logout()
        self.dialogs.cancel()

    async def register(
        self, username: str, password: str, confirm_password: str
    ) -> RegistrationResult:
        return await self._require_auth().register(username, password, confirm_password)
