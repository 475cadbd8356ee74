"""Lightweight health check handler."""

import os
from datetime import datetime, timezone

from ticketdesk.models.response import HealthResponse
from ticketdesk.utils.error_handling import json_response


def health_payload() -> HealthResponse:
    return HealthResponse(
        status="ok",
        environment=os.environ.get("ENVIRONMENT", "dev"),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


def lambda_handler(event, context):
    """Return a simple 200 response to verify the stack is alive."""
    return json_response(200, health_payload())
