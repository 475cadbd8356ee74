"""
API layer construct: shared Lambda + HTTP API routes.

A single Lambda keeps the DynamoDB handle warm across routes.
Uses Docker bundling for dependencies (runs in CI/CD pipeline).
"""

from pathlib import Path
from typing import Dict, List

from aws_cdk import (
    BundlingOptions,
    Duration,
    aws_dynamodb as dynamodb,
    aws_lambda as _lambda,
    aws_apigatewayv2 as apigw,
    aws_apigatewayv2_integrations as integrations,
    aws_logs as logs,
)
from constructs import Construct

SRC_DIR = Path(__file__).resolve().parents[2] / "src"

# Every route served by ticketdesk.handlers.main.
ROUTE_DEFS = [
    (apigw.HttpMethod.GET, "/health"),
    (apigw.HttpMethod.POST, "/api/create-ticket"),
    (apigw.HttpMethod.GET, "/api/tickets"),
    (apigw.HttpMethod.GET, "/api/open-tickets"),
    (apigw.HttpMethod.PATCH, "/api/tickets/{id}"),
    (apigw.HttpMethod.GET, "/api/tickets/{id}/comments"),
    (apigw.HttpMethod.POST, "/api/tickets/{id}/comments"),
    (apigw.HttpMethod.GET, "/api/customers"),
    (apigw.HttpMethod.GET, "/api/agents"),
    (apigw.HttpMethod.POST, "/api/ivr-calls"),
]


class ApiLayerConstruct(Construct):
    """Expose ticketing endpoints via HTTP API."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
        tables: Dict[str, dynamodb.ITable],
        cors_origins: List[str],
        log_level: str = "INFO",
        lambda_memory_mb: int = 256,
        lambda_timeout_seconds: int = 15,
    ) -> None:
        super().__init__(scope, construct_id)

        # Installs pydantic and python-json-logger next to the package;
        # boto3 comes with the runtime.
        bundled_code = _lambda.Code.from_asset(
            str(SRC_DIR),
            bundling=BundlingOptions(
                image=_lambda.Runtime.PYTHON_3_12.bundling_image,
                command=[
                    "bash", "-c",
                    "pip install -r requirements-lambda.txt -t /asset-output && "
                    "cp -r ticketdesk /asset-output"
                ],
            ),
        )

        lambda_env = {
            "ENVIRONMENT": environment,
            "LOG_LEVEL": log_level,
        }
        lambda_env.update({name: table.table_name for name, table in tables.items()})

        self.main_lambda = _lambda.Function(
            self,
            "ApiHandler",
            runtime=_lambda.Runtime.PYTHON_3_12,
            handler="ticketdesk.handlers.main.lambda_handler",
            code=bundled_code,
            memory_size=lambda_memory_mb,
            timeout=Duration.seconds(lambda_timeout_seconds),
            architecture=_lambda.Architecture.X86_64,
            environment=lambda_env,
            log_retention=logs.RetentionDays.ONE_WEEK,
        )

        for table in tables.values():
            table.grant_read_write_data(self.main_lambda)

        # HTTP API with minimal latency and low cost.
        self.api = apigw.HttpApi(
            self,
            "HttpApi",
            api_name=f"ticketdesk-api-{environment}",
            cors_preflight=apigw.CorsPreflightOptions(
                allow_origins=cors_origins,
                allow_methods=[apigw.CorsHttpMethod.ANY],
                allow_headers=["Content-Type", "X-Request-Id"],
            ),
        )

        integration = integrations.HttpLambdaIntegration(
            "LambdaIntegration", self.main_lambda
        )

        for method, path in ROUTE_DEFS:
            self.api.add_routes(
                path=path,
                methods=[method],
                integration=integration,
            )
