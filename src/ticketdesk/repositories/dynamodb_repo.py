"""DynamoDB access shared by the table repositories."""

from decimal import Decimal
from threading import Lock
from typing import Any, Dict, Iterable, List, Optional

import boto3

from ticketdesk.utils.logging_config import get_logger

logger = get_logger(__name__)

# BatchGetItem accepts at most 100 keys per request.
BATCH_GET_LIMIT = 100


class DynamoDbStore:
    """
    Lazily created boto3 DynamoDB resource shared by every repository.

    One instance lives per process (per warm container under Lambda). The
    lock makes concurrent first use create a single resource.
    """

    def __init__(self, region_name: Optional[str] = None, endpoint_url: Optional[str] = None):
        self.region_name = region_name
        self.endpoint_url = endpoint_url
        self._resource = None
        self._lock = Lock()

    @property
    def resource(self):
        if self._resource is None:
            with self._lock:
                if self._resource is None:
                    self._resource = boto3.resource(
                        "dynamodb",
                        region_name=self.region_name,
                        endpoint_url=self.endpoint_url,
                    )
                    logger.info(
                        "DynamoDB resource created",
                        extra={"region": self.region_name, "endpoint_url": self.endpoint_url},
                    )
        return self._resource

    def table(self, name: str):
        return self.resource.Table(name)


def to_dynamo(value: Any) -> Any:
    """Convert floats to Decimal, which is the only number type boto3 accepts."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dynamo(v) for v in value]
    return value


def set_expression(fields: Dict[str, Any], prefix: str = "f") -> Dict[str, Any]:
    """Build a ``SET`` update for ``fields`` with placeholder names and values."""
    names: Dict[str, str] = {}
    values: Dict[str, Any] = {}
    clauses = []
    for index, (name, value) in enumerate(fields.items()):
        names[f"#{prefix}{index}"] = name
        values[f":{prefix}{index}"] = value
        clauses.append(f"#{prefix}{index} = :{prefix}{index}")
    return {
        "UpdateExpression": "SET " + ", ".join(clauses),
        "ExpressionAttributeNames": names,
        "ExpressionAttributeValues": to_dynamo(values),
    }


class DynamoDbRepository:
    """Basic item, scan, query and batch helpers over one table."""

    key_name = "id"

    def __init__(self, store: DynamoDbStore, table_name: str):
        self.store = store
        self.table_name = table_name

    @property
    def table(self):
        return self.store.table(self.table_name)

    def put(self, item: Dict[str, Any]) -> None:
        """Insert an item."""
        self.table.put_item(Item=to_dynamo(item))

    def get(self, key: str, consistent: bool = False) -> Optional[Dict[str, Any]]:
        resp = self.table.get_item(Key={self.key_name: key}, ConsistentRead=consistent)
        return resp.get("Item")

    def scan_all(self, **kwargs) -> List[Dict[str, Any]]:
        """Scan the whole table, following pagination."""
        return self._collect(self.table.scan, **kwargs)

    def query_all(self, **kwargs) -> List[Dict[str, Any]]:
        """Run a query to exhaustion, following pagination."""
        return self._collect(self.table.query, **kwargs)

    def get_many(self, keys: Iterable[str]) -> Dict[str, Dict[str, Any]]:
        """Fetch items by key; missing keys are simply absent from the result."""
        unique = [k for k in dict.fromkeys(keys) if k]
        found: Dict[str, Dict[str, Any]] = {}
        for start in range(0, len(unique), BATCH_GET_LIMIT):
            request = {
                self.table_name: {
                    "Keys": [{self.key_name: k} for k in unique[start:start + BATCH_GET_LIMIT]]
                }
            }
            while request:
                resp = self.store.resource.batch_get_item(RequestItems=request)
                for item in resp.get("Responses", {}).get(self.table_name, []):
                    found[item[self.key_name]] = item
                request = resp.get("UnprocessedKeys") or None
        return found

    @staticmethod
    def _collect(operation, **kwargs) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        while True:
            resp = operation(**kwargs)
            items.extend(resp.get("Items", []))
            last_key = resp.get("LastEvaluatedKey")
            if not last_key:
                return items
            kwargs["ExclusiveStartKey"] = last_key
