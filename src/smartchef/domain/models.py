"""Shared base for persisted records."""

import datetime as dt
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _assume_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.UTC)
    return value


# Stored instants are compared against an aware clock; naive values are UTC.
UtcDatetime = Annotated[dt.datetime, AfterValidator(_assume_utc)]


class CamelModel(BaseModel):
    """Immutable record stored and exchanged with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-compatible stored shape."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
