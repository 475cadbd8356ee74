"""Ticket creation flow and ticket update tests."""

import re

import pytest

from ticketdesk.models.ticket import CreateTicketRequest
from ticketdesk.services.ticket_service import generate_ticket_number
from ticketdesk.utils.error_handling import NotFoundError, ValidationError


def _create(service, **payload):
    return service.ticket_service.create_ticket(CreateTicketRequest(**payload))


def test_ticket_number_format():
    for _ in range(50):
        assert re.fullmatch(r"TKT-[A-Z0-9]{8}", generate_ticket_number())


def test_minimal_request_gets_defaults(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B")

    assert ticket.status == "open"
    assert ticket.priority == "medium"
    assert ticket.type == "inquiry"
    assert ticket.source == "api"
    assert ticket.closed_at is None
    assert ticket.assigned_to is None
    assert ticket.agents is None
    assert ticket.created_at == ticket.updated_at
    assert re.fullmatch(r"TKT-[A-Z0-9]{8}", ticket.ticket_number)

    stored = repos.tickets.items[ticket.id]
    assert stored["customer_id"] == ticket.customer_id
    assert stored["closed_at"] is None


def test_ticket_embeds_customer_snapshot(service):
    ticket = _create(
        service,
        customer_name=" Jane ",
        customer_email="jane@example.com",
        customer_company_name="Acme",
        ticket_title="  Parcel lost ",
        ticket_description="  ",
        ticket_type="complaint",
        ticket_priority="high",
        tracking_number=" TRK1 ",
        source="phone",
    )

    assert ticket.title == "Parcel lost"
    assert ticket.description is None
    assert ticket.type == "complaint"
    assert ticket.priority == "high"
    assert ticket.tracking_number == "TRK1"
    assert ticket.source == "phone"
    assert ticket.customers.id == ticket.customer_id
    assert ticket.customers.name == "Jane"
    assert ticket.customers.company_name == "Acme"


def test_repeat_email_reuses_customer(service, repos):
    first = _create(service, customer_name="Jane", customer_email="j@x.io", ticket_title="One")
    second = _create(
        service, customer_name="Jane D", customer_email="j@x.io", customer_phone="555", ticket_title="Two"
    )

    assert first.customer_id == second.customer_id
    stored = repos.customers.items[first.customer_id]
    assert stored["name"] == "Jane D"
    assert stored["phone"] == "555"


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"customer_name": "A"}, "ticket_title is required"),
        ({"ticket_title": "B"}, "customer_name is required"),
        ({"customer_name": "A", "ticket_title": "   "}, "ticket_title is required"),
        ({}, "customer_name and ticket_title are required"),
    ],
)
def test_missing_fields_create_nothing(service, repos, payload, message):
    with pytest.raises(ValidationError) as exc_info:
        _create(service, customer_email="a@b.c", **payload)

    assert exc_info.value.message == message
    assert exc_info.value.status_code == 400
    assert repos.customers.items == {}
    assert repos.tickets.items == {}


def test_close_stamps_closed_at(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B")

    service.ticket_service.update_ticket(ticket.id, {"status": "closed"})

    stored = repos.tickets.items[ticket.id]
    assert stored["status"] == "closed"
    assert stored["closed_at"] is not None
    assert stored["closed_at"] >= stored["created_at"]
    assert stored["updated_at"] == stored["closed_at"]


def test_other_updates_leave_closed_at_unchanged(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B")

    service.ticket_service.update_ticket(ticket.id, {"priority": "high"}, now="2030-01-01T00:00:00.000+00:00")
    assert repos.tickets.items[ticket.id]["closed_at"] is None
    assert repos.tickets.items[ticket.id]["updated_at"] == "2030-01-01T00:00:00.000+00:00"

    service.ticket_service.update_ticket(ticket.id, {"status": "closed"}, now="2030-01-02T00:00:00.000+00:00")
    service.ticket_service.update_ticket(ticket.id, {"status": "open"}, now="2030-01-03T00:00:00.000+00:00")

    stored = repos.tickets.items[ticket.id]
    assert stored["status"] == "open"
    assert stored["closed_at"] == "2030-01-02T00:00:00.000+00:00"


def test_empty_assigned_to_unassigns(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B")
    service.ticket_service.update_ticket(ticket.id, {"assigned_to": "agent-1"})
    assert repos.tickets.items[ticket.id]["assigned_to"] == "agent-1"

    service.ticket_service.update_ticket(ticket.id, {"assigned_to": ""})
    assert repos.tickets.items[ticket.id]["assigned_to"] is None


def test_non_editable_fields_are_dropped(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B")
    original = dict(repos.tickets.items[ticket.id])

    service.ticket_service.update_ticket(
        ticket.id,
        {"ticket_number": "TKT-HACKED00", "customer_id": "other", "created_at": "1970", "title": "New"},
    )

    stored = repos.tickets.items[ticket.id]
    assert stored["title"] == "New"
    assert stored["ticket_number"] == original["ticket_number"]
    assert stored["customer_id"] == original["customer_id"]
    assert stored["created_at"] == original["created_at"]


@pytest.mark.parametrize(
    "patch, field",
    [
        ({"priority": 3}, "priority"),
        ({"status": True}, "status"),
        ({"title": {"text": "x"}}, "title"),
        ({"tracking_number": 12345}, "tracking_number"),
    ],
)
def test_non_string_values_are_rejected(service, repos, patch, field):
    ticket = _create(service, customer_name="A", ticket_title="B")
    before = dict(repos.tickets.items[ticket.id])

    with pytest.raises(ValidationError) as exc_info:
        service.ticket_service.update_ticket(ticket.id, patch)

    assert exc_info.value.message == f"{field} must be a string"
    assert repos.tickets.items[ticket.id] == before


def test_null_clears_optional_field(service, repos):
    ticket = _create(service, customer_name="A", ticket_title="B", tracking_number="TRK1")
    service.ticket_service.update_ticket(ticket.id, {"tracking_number": None})
    assert repos.tickets.items[ticket.id]["tracking_number"] is None


def test_update_unknown_ticket_raises_not_found(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.ticket_service.update_ticket("missing", {"status": "closed"})
    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Ticket not found"


def test_update_rejects_non_object_patch(service):
    with pytest.raises(ValidationError):
        service.ticket_service.update_ticket("any", ["status", "closed"])
