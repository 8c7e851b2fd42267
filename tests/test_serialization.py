from datetime import datetime, timedelta, timezone

from bson import ObjectId

from app.client.api_client import ApiError
from app.core.serialization import (
    document_to_dict, format_timestamp, parse_timestamp, utc_now
)
from app.modules.groups.schemas import MessageResponse


def test_timestamp_contract():
    aware = datetime(2024, 5, 1, 14, 30, 15, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(aware) == "2024-05-01T12:30:15.123Z"
    assert format_timestamp(datetime(2024, 5, 1)) == "2024-05-01T00:00:00.000Z"
    assert parse_timestamp("2024-05-01T12:30:15.123Z") == datetime(
        2024, 5, 1, 12, 30, 15, 123000, tzinfo=timezone.utc
    )


def test_utc_now_has_millisecond_precision():
    now = utc_now()
    assert now.tzinfo is timezone.utc
    assert now.microsecond % 1000 == 0


def test_document_to_dict_stringifies_ids():
    oid, gid = ObjectId(), ObjectId()
    assert document_to_dict({"_id": oid, "groupId": gid, "n": 1}) == {
        "id": str(oid), "groupId": str(gid), "n": 1
    }
    assert document_to_dict(None) is None


def test_schemas_round_trip_on_the_wire():
    message = MessageResponse(
        id="m1", group_id="g1", user="Ann", user_id="u1",
        message="hi", created_at=datetime(2024, 5, 1),
    )
    wire = message.model_dump(mode="json", by_alias=True)
    assert wire["createdAt"] == "2024-05-01T00:00:00.000Z"
    assert wire["userId"] == "u1"
    assert MessageResponse.model_validate(wire) == message


def test_api_error():
    assert ApiError(404, "Group not found").is_not_found
    error = ApiError(None, "connection refused")
    assert not error.is_not_found
    assert str(error) == "connection refused"
