"""Agent, comment and IVR call tables."""

from typing import Any, Dict, List

from boto3.dynamodb.conditions import Attr, Key

from ticketdesk.repositories.dynamodb_repo import DynamoDbRepository

COMMENTS_BY_TICKET_INDEX = "ticket_id-created_at-index"


class AgentRepository(DynamoDbRepository):
    """Agents are provisioned out of band; this side only reads them."""

    def list_active(self) -> List[Dict[str, Any]]:
        return self.scan_all(FilterExpression=Attr("is_active").eq(True))


class CommentRepository(DynamoDbRepository):
    """Ticket comments, indexed by ticket for display."""

    def insert(self, item: Dict[str, Any]) -> None:
        self.put(item)

    def list_for_ticket(self, ticket_id: str) -> List[Dict[str, Any]]:
        return self.query_all(
            IndexName=COMMENTS_BY_TICKET_INDEX,
            KeyConditionExpression=Key("ticket_id").eq(ticket_id),
            ScanIndexForward=False,
        )


class IvrCallRepository(DynamoDbRepository):
    """Append-only IVR call log."""

    def insert(self, item: Dict[str, Any]) -> None:
        self.put(item)
