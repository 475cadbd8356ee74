"""Ticket endpoints: create, list, open summary, update."""

from ticketdesk.services import helpdesk_service
from ticketdesk.utils.error_handling import api_handler
from ticketdesk.utils.validators import parse_json_body


def path_param(event, name: str) -> str:
    return (event.get("pathParameters") or {}).get(name) or ""


@api_handler
def create_ticket_handler(event, context):
    """Handle POST /api/create-ticket."""
    return helpdesk_service.get_helpdesk_service().create_ticket(parse_json_body(event))


@api_handler
def list_tickets_handler(event, context):
    """Handle GET /api/tickets."""
    return helpdesk_service.get_helpdesk_service().list_tickets()


@api_handler
def open_tickets_handler(event, context):
    """Handle GET /api/open-tickets."""
    return helpdesk_service.get_helpdesk_service().list_open_tickets()


@api_handler
def update_ticket_handler(event, context):
    """Handle PATCH /api/tickets/{id}."""
    return helpdesk_service.get_helpdesk_service().update_ticket(
        path_param(event, "id"), parse_json_body(event)
    )
