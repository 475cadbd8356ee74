"""
Data layer construct: one DynamoDB table per entity.
"""

from aws_cdk import (
    RemovalPolicy,
    aws_dynamodb as dynamodb,
)
from constructs import Construct

COMMENTS_BY_TICKET_INDEX = "ticket_id-created_at-index"


class DataLayerConstruct(Construct):
    """Provision the ticketing tables."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        environment: str,
    ) -> None:
        super().__init__(scope, construct_id)

        self._environment = environment

        self.customers_table = self._table("Customers")
        self.tickets_table = self._table("Tickets")
        self.agents_table = self._table("Agents")
        self.ivr_calls_table = self._table("IvrCalls")

        # Comments are always read per ticket, newest first.
        self.comments_table = self._table("TicketComments")
        self.comments_table.add_global_secondary_index(
            index_name=COMMENTS_BY_TICKET_INDEX,
            partition_key=dynamodb.Attribute(
                name="ticket_id", type=dynamodb.AttributeType.STRING
            ),
            sort_key=dynamodb.Attribute(name="created_at", type=dynamodb.AttributeType.STRING),
            projection_type=dynamodb.ProjectionType.ALL,
        )

    @property
    def tables(self) -> dict:
        """Tables keyed by the environment variable the API reads."""
        return {
            "CUSTOMERS_TABLE": self.customers_table,
            "TICKETS_TABLE": self.tickets_table,
            "AGENTS_TABLE": self.agents_table,
            "COMMENTS_TABLE": self.comments_table,
            "IVR_CALLS_TABLE": self.ivr_calls_table,
        }

    def _table(self, construct_id: str) -> dynamodb.Table:
        prod = self._environment == "prod"
        return dynamodb.Table(
            self,
            construct_id,
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            point_in_time_recovery=prod,
            removal_policy=RemovalPolicy.RETAIN if prod else RemovalPolicy.DESTROY,
        )
