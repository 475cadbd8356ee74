"""IVR call logging handler, called by the phone system after each call."""

from ticketdesk.services import helpdesk_service
from ticketdesk.utils.error_handling import api_handler
from ticketdesk.utils.validators import parse_json_body


@api_handler
def lambda_handler(event, context):
    """Handle POST /api/ivr-calls."""
    return helpdesk_service.get_helpdesk_service().log_ivr_call(parse_json_body(event))
