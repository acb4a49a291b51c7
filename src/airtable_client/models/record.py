# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Record data model for Airtable rows.

Airtable omits "empty" field values (``""``, ``[]``, ``False``, ``None``)
from every read, so a missing key in :attr:`Record.fields` means the cell is
empty rather than unknown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

from ..common.constants import AIRTABLE_ID_KEY

RecordId = str  # e.g. "recXXXXXXXXXXXXXX"


def is_empty_value(value: Any) -> bool:
    """Return True for values Airtable drops from read responses."""
    if value is None or value is False:
        return True
    if isinstance(value, (str, list)) and len(value) == 0:
        return True
    return False


@dataclass
class Record:
    """
    Airtable record with dict-like access to its fields.

    :param id: Record id (begins with ``rec``).
    :type id: str
    :param created_time: ISO-8601 creation timestamp as returned by the API.
    :type created_time: str | None
    :param fields: Field values keyed by field name.
    :type fields: dict[str, Any]

    Example::

        res = client.get_record(record_id=rid, table_id_or_name="Tasks")
        record = Record.from_api(res.data)
        print(record.id, record["Name"])
    """

    id: RecordId
    created_time: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, key: str) -> Any:
        return self.fields[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self.fields[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self.fields

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Record":
        """
        Build a record from an API payload ``{"id", "createdTime", "fields"}``.

        :raises KeyError: If ``id`` is missing.
        """
        return cls(
            id=payload["id"],
            created_time=payload.get("createdTime"),
            fields=dict(payload.get("fields") or {}),
        )

    def to_dict(self, include_airtable_id: bool = False) -> Dict[str, Any]:
        """
        Return the field map, optionally tagged with ``_airtableId``.

        Field values win over the id tag if a field is literally named ``_airtableId``.
        """
        if include_airtable_id:
            return {AIRTABLE_ID_KEY: self.id, **self.fields}
        return dict(self.fields)
