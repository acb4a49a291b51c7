# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Airtable client.

- :class:`~airtable_client.models.record.Record`: Record representation with dict-like field access.
- :class:`~airtable_client.models.upsert.UpsertResult`: Outcome of an upsert.
- :class:`~airtable_client.models.upsert.UpsertOutcome`: Upsert outcome with the affected record id.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
