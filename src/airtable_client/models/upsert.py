# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Upsert data models for the Airtable client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["UpsertResult", "UpsertOutcome"]


class UpsertResult(str, Enum):
    """What :meth:`~airtable_client.client.AirtableClient.upsert_record` did."""

    RECORD_CREATED = "RECORD_CREATED"
    RECORD_UNCHANGED = "RECORD_UNCHANGED"
    RECORD_UPDATED = "RECORD_UPDATED"


@dataclass(frozen=True)
class UpsertOutcome:
    """Result of an upsert.

    :param airtable_id: Id of the created, matched or updated record.
    :type airtable_id: str
    :param upsert_result: Which branch the upsert took.
    :type upsert_result: UpsertResult

    Example::

        outcome = client.upsert_record(
            table_id_or_name="Contacts",
            where={"Email": "ada@example.com"},
            set_fields={"Name": "Ada Lovelace"},
        )
        if outcome.upsert_result is UpsertResult.RECORD_CREATED:
            print("new record", outcome.airtable_id)
    """

    airtable_id: str
    upsert_result: UpsertResult
