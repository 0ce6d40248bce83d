"""Dialog state machine: which dialog is open, with which contact, and who may open it."""

import logging
from collections.abc import Callable
from dataclasses import replace

from contactbook.application.contact_store import failure_message
from contactbook.application.dialog_machine import DialogMachine, get_machine
from contactbook.application.dto import (
    ChangingPassword,
    Closed,
    ConfirmingDelete,
    DialogState,
    Editing,
    Viewing,
)
from contactbook.application.errors import GatewayError
from contactbook.application.messages import message
from contactbook.application.ports import ContactGateway, SessionOracle
from contactbook.application.validation import validate, validate_new_password
from contactbook.domain import Contact, ContactDraft

logger = logging.getLogger(__name__)


class DialogController:
    """
    Owns the dialog state. Every request_* and confirm_* method is total: an
    intent that is not legal in the current state is ignored and returns False.

    Mutating requests are gated on the session oracle before the state is
    consulted, so a logged-out request reports a page error from any dialog
    and leaves the state alone. confirm_* methods return True only when the
    gateway call succeeded, so the caller can refresh.
    """

    def __init__(
        self,
        gateway: ContactGateway,
        session: SessionOracle,
        *,
        report_error: Callable[[str], None],
        clear_error: Callable[[], None],
        machine: DialogMachine | None = None,
    ) -> None:
        self._gateway = gateway
        self._session = session
        self._report_error = report_error
        self._clear_error = clear_error
        self._machine = machine if machine is not None else get_machine()
        self.state: DialogState = Closed()
        self.busy = False

    def _can(self, event: str) -> bool:
        if self._machine.accepts(self.state.name, event):
            return True
        logger.debug("Ignoring %s in dialog state %s", event, self.state.name)
        return False

    def _move(self, event: str, new_state: DialogState) -> bool:
        target = self._machine.transition(self.state.name, event)
        if target != new_state.name:
            logger.debug("No %s transition from %s", event, self.state.name)
            return False
        self.state = new_state
        return True

    def _authorized(self, message_key: str) -> bool:
        if self._session.is_authenticated():
            return True
        logger.info("Rejected unauthenticated request (%s)", message_key)
        self._report_error(message(message_key))
        return False

    # --- opening dialogs ---

    def request_view(self, contact: Contact) -> bool:
        if not self._can("VIEW"):
            return False
        return self._move("VIEW", Viewing(contact=contact))

    def request_create(self) -> bool:
        if not self._authorized("login_required_create") or not self._can("CREATE"):
            return False
        return self._move("CREATE", Editing(contact=None, draft=ContactDraft()))

    def request_edit(self, contact: Contact) -> bool:
        if not self._authorized("login_required_edit") or not self._can("EDIT"):
            return False
        draft = ContactDraft.from_contact(contact)
        return self._move("EDIT", Editing(contact=contact, draft=draft))

    def request_delete(self, contact: Contact) -> bool:
        if not self._authorized("login_required_delete") or not self._can("DELETE"):
            return False
        return self._move("DELETE", ConfirmingDelete(contact=contact))

    def request_password_change(self, contact: Contact) -> bool:
        if not self._authorized("login_required_password") or not self._can(
            "CHANGE_PASSWORD"
        ):
            return False
        return self._move("CHANGE_PASSWORD", ChangingPassword(contact=contact))

    def cancel(self) -> bool:
        if not self._can("CANCEL"):
            return False
        return self._move("CANCEL", Closed())

    # --- editing inside a dialog ---

    def update_draft(self, field_name: str, value: str) -> bool:
        """Change one form field and clear its error. Raises ValueError for a disallowed choice."""
        state = self.state
        if not isinstance(state, Editing) or self.busy:
            return False
        draft = state.draft.with_field(field_name, value)
        errors = {k: v for k, v in state.field_errors.items() if k != field_name}
        self.state = replace(state, draft=draft, field_errors=errors)
        return True

    def set_new_password(self, value: str) -> bool:
        state = self.state
        if not isinstance(state, ChangingPassword) or self.busy:
            return False
        self.state = replace(state, new_password=value or "")
        return True

    # --- confirming ---

    async def confirm_edit(self) -> bool:
        state = self.state
        if not isinstance(state, Editing) or self.busy:
            return False
        if not self._authorized("login_required_save"):
            return False
        errors = validate(state.draft, state.is_create)
        if errors:
            self.state = replace(state, field_errors=errors)
            return False

        submitted = replace(state, field_errors={})
        self.state = submitted
        record = state.draft.to_submission(include_password=state.is_create)
        self._clear_error()
        self.busy = True
        try:
            if state.is_create:
                created = await self._gateway.create(record)
                logger.info("Created contact %s", created.id)
            else:
                await self._gateway.update(state.contact.id, record)
                logger.info("Updated contact %s", state.contact.id)
        except GatewayError as exc:
            logger.warning("Saving contact failed: %s", exc.message)
            self._report_error(failure_message(exc, "save_failed"))
            return False
        finally:
            self.busy = False
        if self.state is submitted:
            self._move("SAVED", Closed())
        return True

    async def confirm_delete(self) -> bool:
        state = self.state
        if not isinstance(state, ConfirmingDelete) or self.busy:
            return False
        if not self._authorized("login_required_delete"):
            self._move("CANCEL", Closed())
            return False

        self._clear_error()
        self.busy = True
        try:
            await self._gateway.delete(state.contact.id)
            logger.info("Deleted contact %s", state.contact.id)
        except GatewayError as exc:
            logger.warning("Deleting contact failed: %s", exc.message)
            self._report_error(failure_message(exc, "delete_failed"))
            return False
        finally:
            self.busy = False
        if self.state is state:
            self._move("DELETED", Closed())
        return True

    async def confirm_password_change(self, new_password: str | None = None) -> bool:
        """Resubmit the full record with only the password replaced."""
        state = self.state
        if not isinstance(state, ChangingPassword) or self.busy:
            return False
        value = state.new_password if new_password is None else (new_password or "")
        error = validate_new_password(value)
        if error:
            self.state = replace(state, new_password=value, password_error=error)
            return False
        if not self._authorized("login_required_password"):
            self._move("CANCEL", Closed())
            return False

        submitted = replace(state, new_password=value, password_error="")
        self.state = submitted
        self._clear_error()
        self.busy = True
        try:
            await self._gateway.update(
                state.contact.id, state.contact.to_submission(password=value)
            )
            logger.info("Changed password of contact %s", state.contact.id)
        except GatewayError as exc:
            logger.warning("Changing password failed: %s", exc.message)
            self._report_error(failure_message(exc, "password_change_failed"))
            return False
        finally:
            self.busy = False
        if self.state is submitted:
            self._move("PASSWORD_CHANGED", Closed())
        return True
