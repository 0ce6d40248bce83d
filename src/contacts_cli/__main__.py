"""
Console client: ContactManager + HTTP gateways + file token store.
Run: python -m contacts_cli <command> (from repo root, with .env or env vars set).
"""

import argparse
import asyncio
import getpass
import logging
import sys
from datetime import datetime

from contactbook.application import (
    AuthService,
    ContactManager,
    Editing,
)
from contactbook.application.messages import message
from contactbook.config import Settings, get_settings
from contactbook.domain import CATEGORY_BUSINESS, Contact, subcategory_options
from contactbook.infrastructure import (
    FileTokenStore,
    HttpAuthGateway,
    HttpContactGateway,
    TokenSessionOracle,
)

logger = logging.getLogger(__name__)

# argparse dest -> draft field. category must come before subcategory.
DRAFT_OPTIONS = (
    ("first_name", "--first-name"),
    ("last_name", "--last-name"),
    ("email", "--email"),
    ("phone_number", "--phone"),
    ("category", "--category"),
    ("subcategory", "--subcategory"),
    ("date_of_birth", "--date-of-birth"),
)

FIELD_LABELS = {
    "first_name": "Imię",
    "last_name": "Nazwisko",
    "email": "Email",
    "phone_number": "Telefon",
    "category": "Kategoria",
    "subcategory": "Podkategoria",
    "date_of_birth": "Data urodzenia",
    "password": "Hasło",
    "username": "Nazwa użytkownika",
}


def format_date(value: datetime | None) -> str:
    """Locale date, or the not-provided label."""
    if value is None:
        return message("not_provided")
    return value.astimezone().strftime("%x")


def _or_not_provided(value: str | None) -> str:
    return value or message("not_provided")


def format_contact(contact: Contact) -> str:
    lines = [
        contact.full_name,
        f"Email: {_or_not_provided(contact.email)}",
        f"Telefon: {_or_not_provided(contact.phone_number)}",
        f"Kategoria: {_or_not_provided(contact.category)}",
        f"Podkategoria: {_or_not_provided(contact.subcategory)}",
        f"Data urodzenia: {format_date(contact.date_of_birth)}",
    ]
    return "\n".join(lines)


def _print_field_errors(errors: dict[str, str]) -> None:
    for field_name, text in errors.items():
        print(f"  {FIELD_LABELS.get(field_name, field_name)}: {text}", file=sys.stderr)


def _print_page_error(manager: ContactManager) -> None:
    if manager.page_error:
        print(manager.page_error, file=sys.stderr)


class Console:
    """Builds the manager from settings and runs one command against it."""

    def __init__(self, settings: Settings) -> None:
        self.tokens = FileTokenStore(settings.token_path)
        self.contacts = HttpContactGateway(settings.api_url, self.tokens)
        self.accounts = HttpAuthGateway(settings.api_url)
        self.manager = ContactManager(
            self.contacts,
            TokenSessionOracle(self.tokens),
            auth=AuthService(self.accounts, self.tokens),
        )

    async def close(self) -> None:
        await self.contacts.aclose()
        await self.accounts.aclose()

    async def _load(self, contact_id: str) -> Contact | None:
        await self.manager.start()
        if self.manager.page_error:
            _print_page_error(self.manager)
            return None
        contact = self.manager.find(contact_id)
        if contact is None:
            print(message("contact_not_found", id=contact_id), file=sys.stderr)
        return contact

    async def cmd_list(self, args) -> int:
        await self.manager.start()
        if self.manager.page_error:
            _print_page_error(self.manager)
            return 1
        if not self.manager.records:
            print(message("empty_list"))
            return 0
        for contact in self.manager.records:
            print(f"{contact.id}\t{contact.full_name}\t{contact.email}")
        return 0

    async def cmd_show(self, args) -> int:
        contact = await self._load(args.id)
        if contact is None or not self.manager.request_view(contact):
            return 1
        print(format_contact(self.manager.dialog.contact))
        self.manager.cancel()
        return 0

    def _apply_draft_options(self, args) -> bool:
        for field_name, _ in DRAFT_OPTIONS:
            value = getattr(args, field_name, None)
            if value is None:
                continue
            try:
                self.manager.update_draft(field_name, value)
            except ValueError as exc:
                print(str(exc), file=sys.stderr)
                return False
        return True

    async def _submit_draft(self) -> int:
        if await self.manager.confirm_edit():
            print(message("contact_saved"))
            return 0
        state = self.manager.dialog
        if isinstance(state, Editing) and state.field_errors:
            _print_field_errors(state.field_errors)
        _print_page_error(self.manager)
        return 1

    async def cmd_add(self, args) -> int:
        await self.manager.start()
        if not self.manager.request_create():
            _print_page_error(self.manager)
            return 1
        if not self._apply_draft_options(args):
            return 1
        password = args.password
        if password is None:
            password = getpass.getpass(f"{FIELD_LABELS['password']}: ")
        self.manager.update_draft("password", password)
        return await self._submit_draft()

    async def cmd_edit(self, args) -> int:
        contact = await self._load(args.id)
        if contact is None:
            return 1
        if not self.manager.request_edit(contact):
            _print_page_error(self.manager)
            return 1
        if not self._apply_draft_options(args):
            return 1
        return await self._submit_draft()

    async def cmd_delete(self, args) -> int:
        contact = await self._load(args.id)
        if contact is None:
            return 1
        if not self.manager.request_delete(contact):
            _print_page_error(self.manager)
            return 1
        if not args.yes:
            answer = input(message("confirm_delete", name=contact.full_name) + " [t/N] ")
            if answer.strip().lower() not in ("t", "y"):
                self.manager.cancel()
                return 1
        if await self.manager.confirm_delete():
            print(message("contact_deleted", name=contact.full_name))
            return 0
        _print_page_error(self.manager)
        return 1

    async def cmd_passwd(self, args) -> int:
        contact = await self._load(args.id)
        if contact is None:
            return 1
        if not self.manager.request_password_change(contact):
            _print_page_error(self.manager)
            return 1
        password = args.password
        if password is None:
            password = getpass.getpass("Nowe hasło: ")
        if await self.manager.confirm_password_change(password):
            print(message("password_changed", name=contact.full_name))
            return 0
        state = self.manager.dialog
        if getattr(state, "password_error", ""):
            print(state.password_error, file=sys.stderr)
        _print_page_error(self.manager)
        return 1

    async def cmd_login(self, args) -> int:
        password = getpass.getpass(f"{FIELD_LABELS['password']}: ")
        result = await self.manager.login(args.username, password)
        if not result.succeeded:
            print(result.error, file=sys.stderr)
            return 1
        print(message("login_succeeded"))
        return 0

    async def cmd_logout(self, args) -> int:
        self.manager.logout()
        print(message("logged_out"))
        return 0

    async def cmd_register(self, args) -> int:
        password = getpass.getpass(f"{FIELD_LABELS['password']}: ")
        confirm = getpass.getpass("Potwierdź hasło: ")
        result = await self.manager.register(args.username, password, confirm)
        if not result.succeeded:
            _print_field_errors(result.field_errors)
            if result.error:
                print(result.error, file=sys.stderr)
            return 1
        print(message("register_succeeded"))
        return 0


def _add_draft_arguments(parser: argparse.ArgumentParser) -> None:
    for field_name, flag in DRAFT_OPTIONS:
        parser.add_argument(flag, dest=field_name, help=FIELD_LABELS[field_name])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="contacts", description="Menadżer kontaktów")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List contacts")
    show = sub.add_parser("show", help="Show one contact")
    show.add_argument("id")

    add = sub.add_parser(
        "add",
        help="Add a contact",
        epilog=f"Subcategories for {CATEGORY_BUSINESS}: "
        + ", ".join(subcategory_options(CATEGORY_BUSINESS)),
    )
    _add_draft_arguments(add)
    add.add_argument("--password")

    edit = sub.add_parser("edit", help="Edit a contact")
    edit.add_argument("id")
    _add_draft_arguments(edit)

    delete = sub.add_parser("delete", help="Delete a contact")
    delete.add_argument("id")
    delete.add_argument("--yes", action="store_true", help="Skip confirmation")

    passwd = sub.add_parser("passwd", help="Change a contact's password")
    passwd.add_argument("id")
    passwd.add_argument("--password")

    login = sub.add_parser("login", help="Log in and store the access token")
    login.add_argument("username")
    sub.add_parser("logout", help="Forget the stored access token")
    register = sub.add_parser("register", help="Create an account")
    register.add_argument("username")
    return parser


async def run(args, settings: Settings) -> int:
    console = Console(settings)
    try:
        handler = getattr(console, "cmd_" + args.command)
        return await handler(args)
    finally:
        await console.close()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, settings.log_level, logging.INFO),
    )
    logger.debug("Using backend %s", settings.api_url)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
