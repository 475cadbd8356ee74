"""
Runtime settings for the API.

Both entrypoints read the same environment: the Lambda gets its table names
from the CDK stack, the long-running server from the shell or a container.
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os


@dataclass
class Settings:
    """Application settings with local-friendly defaults."""

    environment: str = "dev"
    aws_region: str = "eu-west-2"
    # Point at DynamoDB Local when set.
    dynamodb_endpoint_url: Optional[str] = None

    customers_table: str = "ticketdesk-customers"
    tickets_table: str = "ticketdesk-tickets"
    agents_table: str = "ticketdesk-agents"
    comments_table: str = "ticketdesk-ticket-comments"
    ivr_calls_table: str = "ticketdesk-ivr-calls"

    # Long-running server only.
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from environment variables."""
        defaults = cls()
        origins = os.environ.get("CORS_ORIGINS", "*")
        return cls(
            environment=os.environ.get("ENVIRONMENT", defaults.environment),
            aws_region=os.environ.get("AWS_REGION", defaults.aws_region),
            dynamodb_endpoint_url=os.environ.get("DYNAMODB_ENDPOINT_URL") or None,
            customers_table=os.environ.get("CUSTOMERS_TABLE", defaults.customers_table),
            tickets_table=os.environ.get("TICKETS_TABLE", defaults.tickets_table),
            agents_table=os.environ.get("AGENTS_TABLE", defaults.agents_table),
            comments_table=os.environ.get("COMMENTS_TABLE", defaults.comments_table),
            ivr_calls_table=os.environ.get("IVR_CALLS_TABLE", defaults.ivr_calls_table),
            host=os.environ.get("HOST", defaults.host),
            port=int(os.environ.get("PORT", defaults.port)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.environ.get("LOG_LEVEL", defaults.log_level).upper(),
        )
