# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Walk through the client against a real base.

Needs a table with a single-line text field ``Email`` and a ``Name`` field.
"""

import logging
import os
import sys

from airtable_client import AirtableClient, AirtableError, UpsertResult


def log_call(call: str) -> None:
    print({"call": call})


def main() -> int:
    logging.basicConfig(level=logging.DEBUG if os.environ.get("AIRTABLE_DEBUG") else logging.INFO)

    api_key = os.environ.get("AIRTABLE_API_KEY") or input("Airtable API key: ").strip()
    base_id = os.environ.get("AIRTABLE_BASE_ID") or input("Base id (app...): ").strip()
    table = input("Table name [Contacts]: ").strip() or "Contacts"

    try:
        with AirtableClient(api_key, base_id) as client:
            log_call("client.upsert_record(...)")
            outcome = client.upsert_record(
                table_id_or_name=table,
                where={"Email": "ada@example.com"},
                set_fields={"Name": "Ada Lovelace"},
            )
            print({"id": outcome.airtable_id, "result": outcome.upsert_result.value})

            if outcome.upsert_result is not UpsertResult.RECORD_UNCHANGED:
                log_call("client.get_record(...)")
                res = client.get_record(record_id=outcome.airtable_id, table_id_or_name=table)
                print({"status": res.status, "fields": (res.data or {}).get("fields")})

            log_call("client.find_many(modified_since_hours=24)")
            recent = client.find_many(table_id_or_name=table, modified_since_hours=24, include_airtable_id=True)
            print({"recent": len(recent)})
    except AirtableError as ex:
        print(ex.to_dict())
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
