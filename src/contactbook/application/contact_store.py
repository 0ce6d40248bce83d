"""Last-fetched snapshot of the contact list, with loading flag and page-level error."""

import logging

from contactbook.application.errors import (
    BackendValidationError,
    GatewayError,
    GatewayUnavailable,
)
from contactbook.application.messages import message
from contactbook.application.ports import ContactGateway
from contactbook.domain import Contact

logger = logging.getLogger(__name__)


def failure_message(exc: GatewayError, fallback_key: str) -> str:
    """User-facing text for a gateway failure: backend message, unreachable, or the fallback."""
    if isinstance(exc, BackendValidationError) and exc.message:
        return exc.message
    if isinstance(exc, GatewayUnavailable):
        return message("server_unreachable")
    return message(fallback_key)


class ContactStore:
    """Holds records fetched from the gateway. records is replaced only by refresh()."""

    def __init__(self, gateway: ContactGateway) -> None:
        self._gateway = gateway
        self.records: tuple[Contact, ...] = ()
        self.loading = False
        self.page_error = ""
        self.refresh_count = 0

    async def refresh(self) -> None:
        """Re-fetch the full list. Overlapping calls are not guarded: last response wins."""
        self.refresh_count += 1
        self.loading = True
        self.page_error = ""
        try:
            records = await self._gateway.list()
        except GatewayError as exc:
            logger.warning("Fetching contacts failed: %s", exc.message)
            self.page_error = failure_message(exc, "fetch_failed")
        else:
            self.records = tuple(records)
            logger.debug("Fetched %d contacts", len(self.records))
        finally:
            self.loading = False

    def set_page_error(self, text: str) -> None:
        self.page_error = text

    def clear_page_error(self) -> None:
        self.page_error = ""

    def find(self, contact_id: str) -> Contact | None:
        for contact in self.records:
            if contact.id == contact_id:
                return contact
        return None
