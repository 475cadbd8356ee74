"""Ticket creation and update."""

from __future__ import annotations

import secrets
import string
import uuid
from typing import Any, Dict, Optional

from ticketdesk.models.ticket import (
    CLOSED_STATUS,
    DEFAULT_PRIORITY,
    DEFAULT_SOURCE,
    DEFAULT_STATUS,
    DEFAULT_TYPE,
    MUTABLE_FIELDS,
    CreateTicketRequest,
    TicketView,
)
from ticketdesk.services.identity_resolver import IdentityResolver
from ticketdesk.services.view_assembler import ticket_view
from ticketdesk.utils.error_handling import NotFoundError, ValidationError
from ticketdesk.utils.logging_config import get_logger
from ticketdesk.utils.timestamps import utc_now_iso
from ticketdesk.utils.validators import clean, ensure_present

logger = get_logger(__name__)

TICKET_NUMBER_PREFIX = "TKT-"
TICKET_NUMBER_ALPHABET = string.ascii_uppercase + string.digits
TICKET_NUMBER_LENGTH = 8


def generate_ticket_number() -> str:
    # Collisions are not checked against stored tickets.
    suffix = "".join(secrets.choice(TICKET_NUMBER_ALPHABET) for _ in range(TICKET_NUMBER_LENGTH))
    return TICKET_NUMBER_PREFIX + suffix


class TicketService:
    """Encapsulates ticket write logic."""

    def __init__(self, tickets, resolver: IdentityResolver):
        self.tickets = tickets
        self.resolver = resolver

    def create_ticket(self, request: CreateTicketRequest) -> TicketView:
        """
        Resolve the customer, then persist a new open ticket for them.

        Required fields are checked before any write, so a rejected request
        leaves no customer behind.
        """
        title = clean(request.ticket_title)
        ensure_present(customer_name=clean(request.customer_name), ticket_title=title)

        now = utc_now_iso()
        customer = self.resolver.resolve(request.contact_fields(), now=now)

        ticket = {
            "id": str(uuid.uuid4()),
            "ticket_number": generate_ticket_number(),
            "customer_id": customer.id,
            "title": title,
            "description": clean(request.ticket_description),
            "type": clean(request.ticket_type) or DEFAULT_TYPE,
            "status": DEFAULT_STATUS,
            "priority": clean(request.ticket_priority) or DEFAULT_PRIORITY,
            "tracking_number": clean(request.tracking_number),
            "source": clean(request.source) or DEFAULT_SOURCE,
            "created_at": now,
            "updated_at": now,
            "closed_at": None,
            "assigned_to": None,
        }
        self.tickets.insert(ticket)

        logger.info(
            "Ticket created",
            extra={
                "ticket_id": ticket["id"],
                "ticket_number": ticket["ticket_number"],
                "customer_id": customer.id,
            },
        )
        return ticket_view(ticket, customer.model_dump())

    def update_ticket(self, ticket_id: str, patch: Any, now: Optional[str] = None) -> None:
        """Merge whitelisted fields onto a ticket, stamping update/close times."""
        if not isinstance(patch, dict):
            raise ValidationError("Request body must be a JSON object")

        dropped = sorted(k for k in patch if k not in MUTABLE_FIELDS)
        if dropped:
            logger.warning(
                "Ignoring non-editable ticket fields",
                extra={"ticket_id": ticket_id, "fields": dropped},
            )

        now = now or utc_now_iso()
        changes: Dict[str, Any] = {k: v for k, v in patch.items() if k in MUTABLE_FIELDS}
        for name in MUTABLE_FIELDS:
            if name == "assigned_to":
                continue
            if name in changes and changes[name] is not None and not isinstance(changes[name], str):
                raise ValidationError(f"{name} must be a string")
        if changes.get("assigned_to") == "":
            changes["assigned_to"] = None
        changes["updated_at"] = now
        if changes.get("status") == CLOSED_STATUS:
            changes["closed_at"] = now

        if not self.tickets.update(ticket_id, changes):
            raise NotFoundError("Ticket not found")

        logger.info(
            "Ticket updated",
            extra={"ticket_id": ticket_id, "fields": sorted(changes)},
        )
