"""
CDK app entrypoint.

    ENVIRONMENT=prod cdk deploy TicketdeskStack-prod
"""

import os

import aws_cdk as cdk

from infrastructure.config.settings import Settings
from infrastructure.main_stack import TicketdeskStack


def main() -> None:
    settings = Settings.from_environment()
    app = cdk.App()

    account = app.node.try_get_context("account") or os.environ.get("CDK_DEFAULT_ACCOUNT")
    TicketdeskStack(
        app,
        f"TicketdeskStack-{settings.environment}",
        settings=settings,
        description=f"Ticketdesk support API ({settings.environment})",
        env=cdk.Environment(account=account, region=settings.aws_region),
    )

    app.synth()


if __name__ == "__main__":
    main()
