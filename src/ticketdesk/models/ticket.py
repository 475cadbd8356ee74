"""Ticket models."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict

from ticketdesk.models.customer import ContactFields, Customer, CustomerRef

DEFAULT_TYPE = "inquiry"
DEFAULT_STATUS = "open"
DEFAULT_PRIORITY = "medium"
DEFAULT_SOURCE = "api"
CLOSED_STATUS = "closed"
OPEN_STATUSES = ("open", "working")

# Fields a PATCH may change; everything else on a ticket is system-managed.
MUTABLE_FIELDS = (
    "status",
    "priority",
    "assigned_to",
    "title",
    "description",
    "type",
    "tracking_number",
)


class CreateTicketRequest(BaseModel):
    """
    Inbound ticket-creation payload from the dashboard or an integration.

    Every field is optional at parse time; the ticket service decides what is
    required so that the error message can name the missing field.
    """

    model_config = ConfigDict(extra="ignore")

    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_company_name: Optional[str] = None
    customer_address: Optional[str] = None
    ticket_title: Optional[str] = None
    ticket_description: Optional[str] = None
    ticket_type: Optional[str] = None
    ticket_priority: Optional[str] = None
    tracking_number: Optional[str] = None
    source: Optional[str] = None

    def contact_fields(self) -> ContactFields:
        return ContactFields(
            name=self.customer_name,
            email=self.customer_email,
            phone=self.customer_phone,
            company_name=self.customer_company_name,
            address=self.customer_address,
        )


class Ticket(BaseModel):
    """Stored ticket fields, identities rendered as strings."""

    id: str
    ticket_number: Optional[str] = None
    customer_id: Optional[str] = None
    assigned_to: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    source: Optional[str] = None
    tracking_number: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    closed_at: Optional[str] = None


class TicketView(Ticket):
    """Ticket with its customer embedded; agent resolution is not done."""

    customers: Optional[Customer] = None
    agents: Optional[Any] = None


class OpenTicketView(BaseModel):
    """Dashboard summary row."""

    id: str
    ticket_number: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    customers: Optional[CustomerRef] = None


class CreateTicketResponse(BaseModel):
    success: bool = True
    ticket: TicketView


class TicketListResponse(BaseModel):
    tickets: List[TicketView]


class OpenTicketListResponse(BaseModel):
    tickets: List[OpenTicketView]
