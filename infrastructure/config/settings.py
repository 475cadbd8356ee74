"""
Deployment settings for the Ticketdesk stack.

Dev defaults keep the Lambda small; prod gets more headroom.
"""

from dataclasses import dataclass
from typing import List
import os


@dataclass
class Settings:
    """Per-environment stack settings."""

    environment: str = "dev"
    aws_region: str = "eu-west-2"

    # Lambda sizing
    lambda_memory_mb: int = 256
    lambda_timeout_seconds: int = 15
    log_level: str = "INFO"

    # Dashboard origins allowed by the HTTP API (comma-separated in env)
    cors_origins: str = "*"

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_prod(self) -> bool:
        return self.environment == "prod"

    @classmethod
    def from_environment(cls) -> "Settings":
        """Read ENVIRONMENT, AWS_REGION, LOG_LEVEL and CORS_ORIGINS."""
        env = os.environ.get("ENVIRONMENT", "dev")
        common = {
            "environment": env,
            "aws_region": os.environ.get("AWS_REGION", cls.aws_region),
            "log_level": os.environ.get("LOG_LEVEL", cls.log_level).upper(),
            "cors_origins": os.environ.get("CORS_ORIGINS", cls.cors_origins),
        }

        if env == "prod":
            return cls(lambda_memory_mb=512, lambda_timeout_seconds=30, **common)

        return cls(**common)
