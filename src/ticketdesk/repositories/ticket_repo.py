"""Ticket table access."""

from typing import Any, Dict, Iterable, List

from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from ticketdesk.repositories.dynamodb_repo import DynamoDbRepository, set_expression


class TicketRepository(DynamoDbRepository):
    """Tickets keyed by ``id``."""

    def insert(self, item: Dict[str, Any]) -> None:
        self.put(item)

    def list_all(self) -> List[Dict[str, Any]]:
        return self.scan_all()

    def list_by_status(self, statuses: Iterable[str]) -> List[Dict[str, Any]]:
        return self.scan_all(FilterExpression=Attr("status").is_in(list(statuses)))

    def update(self, ticket_id: str, fields: Dict[str, Any]) -> bool:
        """Apply ``fields`` to an existing ticket; False when it does not exist."""
        update = set_expression(fields)
        update["ExpressionAttributeNames"]["#id"] = "id"
        try:
            self.table.update_item(
                Key={"id": ticket_id},
                ConditionExpression="attribute_exists(#id)",
                **update,
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                return False
            raise
        return True
