"""DynamoDB repository tests against a mocked boto3 resource."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from ticketdesk.repositories import dynamodb_repo
from ticketdesk.repositories.activity_repo import COMMENTS_BY_TICKET_INDEX, CommentRepository
from ticketdesk.repositories.customer_repo import CustomerRepository, customer_id_for_email
from ticketdesk.repositories.dynamodb_repo import (
    DynamoDbRepository,
    DynamoDbStore,
    set_expression,
    to_dynamo,
)
from ticketdesk.repositories.ticket_repo import TicketRepository


@pytest.fixture()
def store():
    fake = MagicMock()
    fake.table.return_value = MagicMock()
    fake.resource = MagicMock()
    return fake


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": "boom"}}, "UpdateItem")


def test_store_creates_resource_once():
    with patch.object(dynamodb_repo.boto3, "resource") as resource:
        store = DynamoDbStore(region_name="eu-west-2", endpoint_url="http://localhost:8001")
        store.table("a")
        store.table("b")

    resource.assert_called_once_with(
        "dynamodb", region_name="eu-west-2", endpoint_url="http://localhost:8001"
    )
    assert resource.return_value.Table.call_count == 2


def test_to_dynamo_converts_nested_floats():
    assert to_dynamo({"a": 1.5, "b": [2.25, "x"], "c": {"d": 3}}) == {
        "a": Decimal("1.5"),
        "b": [Decimal("2.25"), "x"],
        "c": {"d": 3},
    }


def test_set_expression_uses_placeholders():
    update = set_expression({"status": "closed", "type": "bug"})

    assert update["UpdateExpression"] == "SET #f0 = :f0, #f1 = :f1"
    assert update["ExpressionAttributeNames"] == {"#f0": "status", "#f1": "type"}
    assert update["ExpressionAttributeValues"] == {":f0": "closed", ":f1": "bug"}


def test_customer_upsert_keeps_first_created_at(store):
    repo = CustomerRepository(store, "customers")

    repo.upsert_by_email("jane@example.com", {"name": "Jane", "phone": None}, "2026-01-01")

    table = store.table.return_value
    kwargs = table.update_item.call_args.kwargs
    assert kwargs["Key"] == {"id": customer_id_for_email("jane@example.com")}
    assert "#created_at = if_not_exists(#created_at, :created_at)" in kwargs["UpdateExpression"]
    assert kwargs["ExpressionAttributeValues"][":created_at"] == "2026-01-01"
    assert set(kwargs["ExpressionAttributeNames"].values()) == {"name", "phone", "email", "created_at"}


def test_customer_id_is_stable_per_email():
    assert customer_id_for_email("a@b.c") == customer_id_for_email("a@b.c")
    assert customer_id_for_email("a@b.c") != customer_id_for_email("A@b.c")


def test_get_by_email_reads_consistently(store):
    table = store.table.return_value
    table.get_item.return_value = {"Item": {"id": "x", "name": "Jane"}}

    item = CustomerRepository(store, "customers").get_by_email("jane@example.com")

    assert item == {"id": "x", "name": "Jane"}
    table.get_item.assert_called_once_with(
        Key={"id": customer_id_for_email("jane@example.com")}, ConsistentRead=True
    )


def test_ticket_update_is_conditional(store):
    table = store.table.return_value

    assert TicketRepository(store, "tickets").update("t-1", {"status": "closed"}) is True

    kwargs = table.update_item.call_args.kwargs
    assert kwargs["Key"] == {"id": "t-1"}
    assert kwargs["ConditionExpression"] == "attribute_exists(#id)"
    assert kwargs["ExpressionAttributeNames"]["#id"] == "id"


def test_ticket_update_missing_returns_false(store):
    store.table.return_value.update_item.side_effect = _client_error("ConditionalCheckFailedException")

    assert TicketRepository(store, "tickets").update("missing", {"status": "closed"}) is False


def test_ticket_update_other_errors_propagate(store):
    store.table.return_value.update_item.side_effect = _client_error("ProvisionedThroughputExceededException")

    with pytest.raises(ClientError):
        TicketRepository(store, "tickets").update("t-1", {"status": "closed"})


def test_scan_follows_pagination(store):
    table = store.table.return_value
    table.scan.side_effect = [
        {"Items": [{"id": "1"}], "LastEvaluatedKey": {"id": "1"}},
        {"Items": [{"id": "2"}]},
    ]

    items = TicketRepository(store, "tickets").list_all()

    assert items == [{"id": "1"}, {"id": "2"}]
    assert table.scan.call_args_list[1].kwargs == {"ExclusiveStartKey": {"id": "1"}}


def test_comments_query_uses_ticket_index(store):
    table = store.table.return_value
    table.query.return_value = {"Items": [{"id": "m-1"}]}

    assert CommentRepository(store, "comments").list_for_ticket("t-1") == [{"id": "m-1"}]

    kwargs = table.query.call_args.kwargs
    assert kwargs["IndexName"] == COMMENTS_BY_TICKET_INDEX
    assert kwargs["ScanIndexForward"] is False


def test_put_converts_floats(store):
    DynamoDbRepository(store, "ivr").put({"id": "c-1", "call_duration": 12.5})

    store.table.return_value.put_item.assert_called_once_with(
        Item={"id": "c-1", "call_duration": Decimal("12.5")}
    )


def test_get_many_chunks_and_retries_unprocessed(store):
    keys = [f"k-{n}" for n in range(150)] + [None, "k-0"]
    batch = store.resource.batch_get_item
    batch.side_effect = [
        {
            "Responses": {"customers": [{"id": "k-0"}]},
            "UnprocessedKeys": {"customers": {"Keys": [{"id": "k-1"}]}},
        },
        {"Responses": {"customers": [{"id": "k-1"}]}, "UnprocessedKeys": {}},
        {"Responses": {"customers": [{"id": "k-120"}]}},
    ]

    found = DynamoDbRepository(store, "customers").get_many(keys)

    assert set(found) == {"k-0", "k-1", "k-120"}
    assert batch.call_count == 3
    first = batch.call_args_list[0].kwargs["RequestItems"]["customers"]["Keys"]
    third = batch.call_args_list[2].kwargs["RequestItems"]["customers"]["Keys"]
    assert len(first) == 100
    assert len(third) == 50
    assert batch.call_args_list[1].kwargs["RequestItems"] == {"customers": {"Keys": [{"id": "k-1"}]}}


def test_get_many_with_no_keys_skips_the_store(store):
    assert DynamoDbRepository(store, "customers").get_many([None, ""]) == {}
    store.resource.batch_get_item.assert_not_called()
