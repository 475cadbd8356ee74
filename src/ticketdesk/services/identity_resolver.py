"""
Identity resolver.

Maps raw contact fields from an incoming ticket to one canonical customer.
Email is the only natural key available: requests sharing an email resolve
to the same customer (latest contact details win), while requests without
an email always get a new customer, since a name alone is too weak to merge
on.
"""

from __future__ import annotations

import uuid

from ticketdesk.models.customer import ContactFields, Customer
from ticketdesk.utils.error_handling import ConsistencyError
from ticketdesk.utils.logging_config import get_logger
from ticketdesk.utils.timestamps import utc_now_iso
from ticketdesk.utils.validators import clean, ensure_present

logger = get_logger(__name__)


def normalize_contact_fields(fields: ContactFields) -> ContactFields:
    """Trim every field; blank values become None."""
    return ContactFields(
        name=clean(fields.name),
        email=clean(fields.email),
        phone=clean(fields.phone),
        company_name=clean(fields.company_name),
        address=clean(fields.address),
    )


class IdentityResolver:
    """Resolve contact data to a deduplicated customer record."""

    def __init__(self, customers):
        self.customers = customers

    def resolve(self, fields: ContactFields, now: str | None = None) -> Customer:
        contact = normalize_contact_fields(fields)
        ensure_present(name=contact.name)
        now = now or utc_now_iso()

        mutable = {
            "name": contact.name,
            "phone": contact.phone,
            "company_name": contact.company_name,
            "address": contact.address,
        }

        if contact.email:
            self.customers.upsert_by_email(contact.email, mutable, created_at=now)
            record = self.customers.get_by_email(contact.email)
            if not record or not record.get("id"):
                raise ConsistencyError(
                    "Failed to create or retrieve customer",
                    details=f"No customer found for {contact.email} after upsert",
                )
            logger.info("Customer resolved by email", extra={"customer_id": record["id"]})
        else:
            record = {"id": str(uuid.uuid4()), "email": None, "created_at": now, **mutable}
            self.customers.insert(record)
            logger.info("Customer created without email", extra={"customer_id": record["id"]})

        return Customer(
            id=str(record["id"]),
            name=record.get("name"),
            email=record.get("email"),
            phone=record.get("phone"),
            company_name=record.get("company_name"),
            address=record.get("address"),
            created_at=record.get("created_at"),
        )
