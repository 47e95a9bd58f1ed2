try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from decimal import Decimal

import pytest
from botocore.exceptions import ClientError

from copypaste.clients import dynamodb
from copypaste.core.config import StorageSettings
from copypaste.core.errors import StorageError
from copypaste.services.messages import MessageService


class FakeTable:
    def __init__(self) -> None:
        self.items: dict[tuple[str, str], dict] = {}
        self.fail = False

    def _maybe_fail(self, operation: str) -> None:
        if self.fail:
            raise ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
                operation,
            )

    def put_item(self, Item: dict) -> None:
        self._maybe_fail("PutItem")
        # DynamoDB hands numbers back as Decimal.
        stored = {k: Decimal(v) if isinstance(v, int) else v for k, v in Item.items()}
        self.items[(Item["pk"], Item["sk"])] = stored

    def get_item(self, Key: dict) -> dict:
        self._maybe_fail("GetItem")
        item = self.items.get((Key["pk"], Key["sk"]))
        return {"Item": item} if item is not None else {}


class FakeResource:
    def __init__(self, table: FakeTable) -> None:
        self.table = table
        self.table_names: list[str] = []

    def Table(self, name: str) -> FakeTable:
        self.table_names.append(name)
        return self.table


@pytest.fixture()
def fake_resource(monkeypatch: pytest.MonkeyPatch) -> FakeResource:
    resource = FakeResource(FakeTable())
    calls: list[tuple[str, str]] = []

    def fake_boto3_resource(service_name: str, region_name: str) -> FakeResource:
        calls.append((service_name, region_name))
        return resource

    monkeypatch.setattr(dynamodb.boto3, "resource", fake_boto3_resource)
    resource.calls = calls  # type: ignore[attr-defined]
    return resource


def _settings() -> StorageSettings:
    return StorageSettings(
        STORAGE_BACKEND="dynamodb", DYNAMODB_TABLE_NAME="copies", AWS_REGION="eu-west-1"
    )


def test_client_opens_configured_table(fake_resource: FakeResource) -> None:
    dynamodb.DynamoDBClient(_settings())

    assert fake_resource.calls == [("dynamodb", "eu-west-1")]  # type: ignore[attr-defined]
    assert fake_resource.table_names == ["copies"]


def test_message_round_trip_through_dynamodb(fake_resource: FakeResource) -> None:
    service = MessageService(dynamodb.DynamoDBClient(_settings()), clock=lambda: 42.0)

    service.save("u1", "hello")
    message = service.get("u1")

    assert message.text == "hello"
    assert message.time == 42


def test_client_errors_become_storage_errors(fake_resource: FakeResource) -> None:
    client = dynamodb.DynamoDBClient(_settings())
    fake_resource.table.fail = True

    with pytest.raises(StorageError):
        client.put_item({"pk": "copies#u1", "sk": "message"})
    with pytest.raises(StorageError):
        client.get_item(partition_key="copies#u1", sort_key="message")


def test_dynamodb_backend_requires_table_name() -> None:
    with pytest.raises(ValueError):
        StorageSettings(STORAGE_BACKEND="dynamodb", DYNAMODB_TABLE_NAME=None)
