"""
Serialization contract shared by every module.

Timestamps are stored as BSON dates and cross the API boundary as ISO-8601
strings in UTC. Identifiers are stored as ObjectId and exposed as hex strings
under ``id``.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Optional

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    # BSON dates hold milliseconds; truncate so stored and returned values match
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes coming back from the driver are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    return as_utc(value).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Inverse of format_timestamp, used by the client views."""
    return as_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))


UtcDatetime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(format_timestamp, return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def document_to_dict(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Replace ``_id`` with a string ``id`` and stringify ObjectId references."""
    if document is None:
        return None
    data = {}
    for key, value in document.items():
        if key == "_id":
            data["id"] = str(value)
        elif isinstance(value, ObjectId):
            data[key] = str(value)
        else:
            data[key] = value
    return data
