"""
Single entrypoint Lambda that routes HTTP API requests to thin handler modules.

One function serves every route so the DynamoDB handle stays warm across
them; the handlers themselves only decode the event and call the shared
helpdesk core.
"""

import re
from typing import Callable, Tuple

from . import comments, directory, health_check, ivr_calls, tickets
from ticketdesk.utils.error_handling import json_response
from ticketdesk.utils.logging_config import get_logger

logger = get_logger(__name__)

TICKET_PATH = re.compile(r"^/api/tickets/(?P<id>[^/]+)$")
COMMENTS_PATH = re.compile(r"^/api/tickets/(?P<id>[^/]+)/comments$")


def _exact(path: str):
    return re.compile(f"^{re.escape(path)}$")


def lambda_handler(event, context):
    """
    Entry point invoked by API Gateway HTTP API.

    Routes are matched on method and path. Path parameters captured by the
    pattern fill in ``pathParameters`` when the gateway did not supply them
    (e.g. a catch-all ``$default`` route).
    """
    http = event.get("requestContext", {}).get("http", {})
    method = http.get("method", "").upper()
    path = http.get("path") or event.get("rawPath") or ""
    if len(path) > 1:
        path = path.rstrip("/")
    route_key = f"{method} {path}"

    # Looked up per call so tests can monkeypatch individual handlers.
    route_table: Tuple[Tuple[str, "re.Pattern[str]", Callable], ...] = (
        ("GET", _exact("/health"), health_check.lambda_handler),
        ("POST", _exact("/api/create-ticket"), tickets.create_ticket_handler),
        ("GET", _exact("/api/tickets"), tickets.list_tickets_handler),
        ("GET", _exact("/api/open-tickets"), tickets.open_tickets_handler),
        ("PATCH", TICKET_PATH, tickets.update_ticket_handler),
        ("GET", COMMENTS_PATH, comments.list_comments_handler),
        ("POST", COMMENTS_PATH, comments.add_comment_handler),
        ("GET", _exact("/api/customers"), directory.customers_handler),
        ("GET", _exact("/api/agents"), directory.agents_handler),
        ("POST", _exact("/api/ivr-calls"), ivr_calls.lambda_handler),
    )

    for route_method, pattern, handler in route_table:
        match = pattern.match(path)
        if route_method == method and match:
            if match.groupdict():
                params = dict(event.get("pathParameters") or {})
                for name, value in match.groupdict().items():
                    params.setdefault(name, value)
                event = {**event, "pathParameters": params}
            return handler(event, context)

    logger.warning("Route not found", extra={"route": route_key})
    return json_response(404, {"error": "Route not found", "route": route_key})
