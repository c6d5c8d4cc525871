"""
Shared data models.

The backend creates a fresh `Record` per request; the client parses it from
the response body and never mutates it.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Dict

JsonDict = Dict[str, Any]

SAMPLE_ID = "sample-001"
SAMPLE_NAME = "Sample Data"
SAMPLE_DESCRIPTION = "This is a sample data instance created for demonstration purposes."


@dataclass(frozen=True)
class Record:
    """
    The payload returned by the dummy-data endpoint.

    Notes:
        - A record is valid iff every field is non-blank after stripping.
        - Validity is not enforced on construction; callers ask `is_valid()`.
    """

    id: str
    name: str
    description: str

    def is_valid(self) -> bool:
        return bool(self.id.strip() and self.name.strip() and self.description.strip())

    def to_dict(self) -> JsonDict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @staticmethod
    def from_dict(row: JsonDict) -> "Record":
        """
        Build a Record from a decoded JSON object.

        Raises:
            ValueError: If a field is missing or is not a string.
        """
        if not isinstance(row, dict):
            raise ValueError(f"Expected JSON object for record, got: {type(row).__name__}")

        values = {}
        for key in ("id", "name", "description"):
            if key not in row:
                raise ValueError(f"Record is missing field '{key}'")
            if not isinstance(row[key], str):
                raise ValueError(f"Record field '{key}' must be a string")
            values[key] = row[key]
        return Record(**values)

    @staticmethod
    def from_json(text: str) -> "Record":
        return Record.from_dict(json.loads(text))


def create_sample_data() -> Record:
    """The constant record served by GET /api/dummy-data."""
    return Record(id=SAMPLE_ID, name=SAMPLE_NAME, description=SAMPLE_DESCRIPTION)


def create_record(id: str, name: str, description: str) -> Record:
    return Record(id=id, name=name, description=description)
