"""Handlers for /api/tickets/{id}/comments."""

from ticketdesk.handlers.tickets import path_param
from ticketdesk.services import helpdesk_service
from ticketdesk.utils.error_handling import api_handler
from ticketdesk.utils.validators import parse_json_body


@api_handler
def list_comments_handler(event, context):
    return helpdesk_service.get_helpdesk_service().list_comments(path_param(event, "id"))


@api_handler
def add_comment_handler(event, context):
    return helpdesk_service.get_helpdesk_service().add_comment(
        path_param(event, "id"), parse_json_body(event)
    )
