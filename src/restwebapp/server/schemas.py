from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from ..models import Record


class RecordOut(BaseModel):
    """
    API representation of a Record returned by GET /api/dummy-data.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str = Field(..., description="Record identifier")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Free-text description")

    @classmethod
    def from_record(cls, record: Record) -> "RecordOut":
        return cls.model_validate(record)


class InfoOut(BaseModel):
    """
    Service descriptor returned by GET /api/info.
    """

    name: str
    version: str
    endpoints: List[str] = Field(..., description="Paths of the data and health endpoints")
