from typing import Any, Dict, Hashable, Optional, Union
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Request bodies only. Stored values are never coerced.
Number = Union[int, float]

# Stored fields hold whatever the document held; ids only need to be hashable
Identity = Optional[Hashable]


class Record(BaseModel):
    """Base for every stored record.

    Records are immutable and keyed by ``id``. Field values are kept exactly as
    read, unknown fields are kept too, and fields that were absent on input
    stay absent on output, so a record read from any document is written back
    unchanged. Type checks belong to the request payloads.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    id: Identity = None

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        for key, value in (self.model_extra or {}).items():
            document.setdefault(key, value)
        return document


class Payload(BaseModel):
    """Request bodies use the same camelCase wire names as stored records."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
