"""Customer table access, including the email-keyed upsert."""

import uuid
from typing import Any, Dict, List, Optional

from ticketdesk.repositories.dynamodb_repo import DynamoDbRepository, set_expression

# Customers that have an email are keyed by a UUIDv5 of that email, which
# turns "upsert by email" into a single-item conditional write.
CUSTOMER_EMAIL_NAMESPACE = uuid.UUID("6f1c2d7e-3b0a-5c4e-9a8f-1d2e3c4b5a69")


def customer_id_for_email(email: str) -> str:
    return str(uuid.uuid5(CUSTOMER_EMAIL_NAMESPACE, email))


class CustomerRepository(DynamoDbRepository):
    """Customers keyed by ``id``."""

    def upsert_by_email(self, email: str, fields: Dict[str, Any], created_at: str) -> None:
        """
        Create or overwrite the customer owning ``email`` in one UpdateItem.

        Mutable fields are overwritten; ``created_at`` is only written when
        the item is new, so the original creation time survives.
        """
        update = set_expression({**fields, "email": email})
        update["UpdateExpression"] += ", #created_at = if_not_exists(#created_at, :created_at)"
        update["ExpressionAttributeNames"]["#created_at"] = "created_at"
        update["ExpressionAttributeValues"][":created_at"] = created_at
        self.table.update_item(Key={"id": customer_id_for_email(email)}, **update)

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return self.get(customer_id_for_email(email), consistent=True)

    def insert(self, item: Dict[str, Any]) -> None:
        self.put(item)

    def list_all(self) -> List[Dict[str, Any]]:
        return self.scan_all()
