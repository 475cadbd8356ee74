"""Customer and agent listings for the dashboard pickers."""

from ticketdesk.services import helpdesk_service
from ticketdesk.utils.error_handling import api_handler


@api_handler
def customers_handler(event, context):
    """Handle GET /api/customers."""
    return helpdesk_service.get_helpdesk_service().list_customers()


@api_handler
def agents_handler(event, context):
    """Handle GET /api/agents (active agents only)."""
    return helpdesk_service.get_helpdesk_service().list_agents()
