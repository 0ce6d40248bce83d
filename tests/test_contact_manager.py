"""Tests for ContactManager: dialog transitions, auth gating, and refresh wiring."""

import asyncio

import pytest

from conftest import build_manager, make_contact
from contactbook.application import (
    BackendValidationError,
    ChangingPassword,
    Closed,
    ConfirmingDelete,
    Editing,
    GatewayError,
    GatewayUnavailable,
    Viewing,
)
from contactbook.application.messages import message

MUTATIONS = ("create", "update", "delete")


def _mutation_calls(gateway) -> int:
    return sum(gateway.call_count(op) for op in MUTATIONS)


def _fill_valid_draft(manager, **overrides):
    values = dict(
        first_name="Jan",
        last_name="Kowalski",
        email="jan@x.pl",
        category="Prywatny",
        phone_number="123456789",
        date_of_birth="2000-01-01",
        password="secret",
    )
    values.update(overrides)
    for field_name in ("category",) + tuple(k for k in values if k != "category"):
        manager.update_draft(field_name, values[field_name])


# --- viewing ---


def test_view_is_public(anonymous_manager, contacts):
    assert anonymous_manager.request_view(contacts[0])
    assert anonymous_manager.dialog == Viewing(contact=contacts[0])
    assert anonymous_manager.page_error == ""


def test_view_can_switch_contact_while_viewing(manager, contacts):
    manager.request_view(contacts[0])
    assert manager.request_view(contacts[1])
    assert manager.dialog.contact == contacts[1]


def test_view_ignored_while_editing(manager, contacts):
    manager.request_create()
    assert not manager.request_view(contacts[0])
    assert isinstance(manager.dialog, Editing)


def test_edit_and_delete_reachable_from_view(manager, contacts):
    manager.request_view(contacts[0])
    assert manager.request_delete(contacts[0])
    assert manager.dialog == ConfirmingDelete(contact=contacts[0])


# --- authorization guard ---


@pytest.mark.parametrize(
    "request_name, message_key",
    [
        ("request_create", "login_required_create"),
        ("request_edit", "login_required_edit"),
        ("request_delete", "login_required_delete"),
        ("request_password_change", "login_required_password"),
    ],
)
def test_unauthenticated_requests_never_open_dialog(
    anonymous_manager, gateway, contacts, request_name, message_key
):
    request = getattr(anonymous_manager, request_name)
    args = () if request_name == "request_create" else (contacts[0],)

    assert request(*args) is False
    assert anonymous_manager.dialog == Closed()
    assert anonymous_manager.page_error == message(message_key)
    assert anonymous_manager.busy is False
    assert gateway.calls == []


def test_unauthenticated_create_from_open_view_reports_error(anonymous_manager, contacts):
    anonymous_manager.request_view(contacts[0])

    assert anonymous_manager.request_create() is False
    assert anonymous_manager.dialog == Viewing(contact=contacts[0])
    assert anonymous_manager.page_error == message("login_required_create")


def test_logged_out_request_inside_open_dialog_reports_error(manager, tokens, contacts):
    manager.request_edit(contacts[0])
    tokens.clear()

    assert manager.request_delete(contacts[0]) is False
    assert isinstance(manager.dialog, Editing)
    assert manager.page_error == message("login_required_delete")


@pytest.mark.asyncio
async def test_unauthenticated_delete_makes_no_network_call(anonymous_manager, gateway, contacts):
    await anonymous_manager.start()
    assert gateway.calls == [("list", ())]

    anonymous_manager.request_delete(contacts[0])

    assert anonymous_manager.dialog == Closed()
    assert anonymous_manager.page_error
    assert gateway.call_count("delete") == 0


@pytest.mark.asyncio
async def test_confirm_rechecks_auth(manager, gateway, tokens):
    manager.request_create()
    _fill_valid_draft(manager)
    tokens.clear()

    assert await manager.confirm_edit() is False
    assert isinstance(manager.dialog, Editing)
    assert manager.page_error == message("login_required_save")
    assert _mutation_calls(gateway) == 0


@pytest.mark.asyncio
async def test_confirm_delete_without_session_closes_dialog(manager, gateway, tokens, contacts):
    manager.request_delete(contacts[0])
    tokens.clear()

    assert await manager.confirm_delete() is False
    assert manager.dialog == Closed()
    assert manager.page_error == message("login_required_delete")
    assert gateway.call_count("delete") == 0


# --- create / edit ---


def test_request_create_opens_blank_draft(manager):
    assert manager.request_create()
    state = manager.dialog
    assert isinstance(state, Editing)
    assert state.is_create
    assert state.draft.first_name == ""
    assert state.field_errors == {}


def test_request_edit_prefills_draft(manager, contacts):
    manager.request_edit(contacts[0])
    state = manager.dialog
    assert not state.is_create
    assert state.draft.first_name == "Jan"
    assert state.draft.subcategory == "Klient"
    assert state.draft.date_of_birth == "2000-01-01"
    assert state.draft.password == ""


@pytest.mark.asyncio
async def test_reselecting_category_during_edit_keeps_subcategory(manager, gateway, contacts):
    manager.request_edit(contacts[0])
    manager.update_draft("category", "Służbowy")

    assert manager.dialog.draft.subcategory == "Klient"
    assert await manager.confirm_edit() is True
    assert gateway.submissions[-1].subcategory == "Klient"


@pytest.mark.asyncio
async def test_invalid_draft_stays_open_with_errors(manager, gateway):
    manager.request_create()
    _fill_valid_draft(manager, category="Służbowy")

    assert await manager.confirm_edit() is False
    state = manager.dialog
    assert isinstance(state, Editing)
    assert state.field_errors == {"subcategory": message("subcategory_required")}
    assert _mutation_calls(gateway) == 0


@pytest.mark.asyncio
async def test_editing_a_field_clears_its_error(manager):
    manager.request_create()
    await manager.confirm_edit()
    assert "first_name" in manager.dialog.field_errors

    manager.update_draft("first_name", "J")

    assert "first_name" not in manager.dialog.field_errors
    assert "last_name" in manager.dialog.field_errors


@pytest.mark.asyncio
async def test_successful_create_closes_and_refreshes_once(manager, gateway):
    await manager.start()
    refreshes = manager.store.refresh_count
    manager.request_create()
    _fill_valid_draft(manager)

    assert await manager.confirm_edit() is True

    assert manager.dialog == Closed()
    assert manager.store.refresh_count == refreshes + 1
    assert gateway.call_count("create") == 1
    sent = gateway.submissions[-1]
    assert sent.password == "secret"
    assert sent.date_of_birth == "2000-01-01T00:00:00.000Z"
    assert sent.subcategory is None
    assert [c.first_name for c in manager.records][-1] == "Jan"


@pytest.mark.asyncio
async def test_unchanged_edit_resubmits_same_record_without_password(manager, gateway, contacts):
    manager.request_edit(contacts[0])

    assert await manager.confirm_edit() is True

    operation, (contact_id, sent) = gateway.calls[0]
    assert (operation, contact_id) == ("update", "1")
    assert sent == contacts[0].to_submission()
    assert sent.password is None
    assert manager.find("1") == contacts[0]


@pytest.mark.asyncio
async def test_edit_failure_keeps_dialog_and_sets_page_error(manager, gateway, contacts):
    manager.request_edit(contacts[0])
    gateway.fail_next("update", BackendValidationError("Email zajęty", field="Email"))

    assert await manager.confirm_edit() is False

    assert isinstance(manager.dialog, Editing)
    assert manager.page_error == "Email zajęty"
    assert manager.busy is False
    assert manager.store.refresh_count == 0


@pytest.mark.asyncio
async def test_generic_save_failure_uses_fallback_message(manager, gateway, contacts):
    manager.request_edit(contacts[0])
    gateway.fail_next("update", GatewayError("500", status_code=500))
    await manager.confirm_edit()
    assert manager.page_error == message("save_failed")


@pytest.mark.asyncio
async def test_page_error_cleared_on_new_attempt(manager, gateway, contacts):
    manager.request_edit(contacts[0])
    gateway.fail_next("update", GatewayUnavailable("offline"))
    await manager.confirm_edit()
    assert manager.page_error == message("server_unreachable")

    assert await manager.confirm_edit() is True
    assert manager.page_error == ""


def test_cancel_discards_draft(manager):
    manager.request_create()
    manager.update_draft("first_name", "Ktoś")
    assert manager.cancel()
    assert manager.dialog == Closed()
    manager.request_create()
    assert manager.dialog.draft.first_name == ""


def test_cancel_when_closed_is_ignored(manager):
    assert manager.cancel() is False
    assert manager.dialog == Closed()


# --- delete ---


@pytest.mark.asyncio
async def test_confirm_delete(manager, gateway, contacts):
    await manager.start()
    manager.request_delete(contacts[0])

    assert await manager.confirm_delete() is True

    assert manager.dialog == Closed()
    assert manager.store.refresh_count == 2
    assert [c.id for c in manager.records] == ["2"]


@pytest.mark.asyncio
async def test_delete_failure_stays_open(manager, gateway, contacts):
    manager.request_delete(contacts[0])
    gateway.fail_next("delete", GatewayError("nope", status_code=500))

    assert await manager.confirm_delete() is False
    assert manager.dialog == ConfirmingDelete(contact=contacts[0])
    assert manager.page_error == message("delete_failed")


# --- password change ---


def test_request_password_change_starts_empty(manager, contacts):
    manager.request_password_change(contacts[0])
    assert manager.dialog == ChangingPassword(contact=contacts[0])


@pytest.mark.asyncio
async def test_empty_new_password_is_rejected_without_network(manager, gateway, contacts):
    manager.request_password_change(contacts[0])

    assert await manager.confirm_password_change("") is False

    state = manager.dialog
    assert isinstance(state, ChangingPassword)
    assert state.password_error == message("password_required")
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_password_change_resubmits_full_record(manager, gateway, contacts):
    manager.request_password_change(contacts[0])
    manager.set_new_password("nowe-haslo")

    assert await manager.confirm_password_change() is True

    operation, (contact_id, sent) = gateway.calls[0]
    assert (operation, contact_id) == ("update", "1")
    assert sent == contacts[0].to_submission(password="nowe-haslo")
    assert gateway.passwords["1"] == "nowe-haslo"
    assert manager.dialog == Closed()
    assert manager.store.refresh_count == 1


@pytest.mark.asyncio
async def test_password_change_failure_stays_open(manager, gateway, contacts):
    manager.request_password_change(contacts[0])
    gateway.fail_next("update", GatewayError("x", status_code=500))

    assert await manager.confirm_password_change("nowe") is False
    assert isinstance(manager.dialog, ChangingPassword)
    assert manager.page_error == message("password_change_failed")


# --- busy ---


class _SlowGateway:
    def __init__(self):
        self.release = asyncio.Event()
        self.updates = 0

    async def list(self):
        return []

    async def update(self, contact_id, record):
        self.updates += 1
        await self.release.wait()


@pytest.mark.asyncio
async def test_busy_blocks_duplicate_submission(tokens):
    gateway = _SlowGateway()
    manager = build_manager(gateway, tokens)
    manager.request_edit(make_contact("1"))

    first = asyncio.create_task(manager.confirm_edit())
    await asyncio.sleep(0)
    assert manager.busy is True
    assert await manager.confirm_edit() is False
    assert manager.update_draft("first_name", "Inny") is False

    gateway.release.set()
    assert await first is True
    assert manager.busy is False
    assert gateway.updates == 1
    assert manager.dialog == Closed()


@pytest.mark.asyncio
async def test_cancel_during_submit_still_refreshes(tokens):
    gateway = _SlowGateway()
    manager = build_manager(gateway, tokens)
    manager.request_edit(make_contact("1"))

    pending = asyncio.create_task(manager.confirm_edit())
    await asyncio.sleep(0)
    manager.cancel()
    manager.request_view(make_contact("2"))
    gateway.release.set()

    assert await pending is True
    assert manager.dialog == Viewing(contact=make_contact("2"))
    assert manager.store.refresh_count == 1


# --- session ---


@pytest.mark.asyncio
async def test_login_then_create_is_allowed(anonymous_manager):
    assert not anonymous_manager.is_authenticated
    registered = await anonymous_manager.register("jan", "tajne123", "tajne123")
    assert registered.succeeded
    result = await anonymous_manager.login("jan", "tajne123")
    assert result.succeeded
    assert anonymous_manager.is_authenticated
    assert anonymous_manager.request_create()


@pytest.mark.asyncio
async def test_logout_closes_dialog_and_blocks_mutations(manager, contacts):
    manager.request_edit(contacts[0])
    manager.logout()
    assert manager.dialog == Closed()
    assert not manager.request_edit(contacts[0])
