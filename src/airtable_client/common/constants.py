# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Airtable Web API.

These constants describe the endpoint, identifier prefixes and service limits
the client relies on.
"""

DEFAULT_BASE_URL = "https://api.airtable.com/v0"

BASE_ID_PREFIX = "app"
RECORD_ID_PREFIX = "rec"

MIN_API_KEY_LENGTH = 10
MIN_BASE_ID_LENGTH = 10
MIN_RECORD_ID_LENGTH = 10

# Airtable allows 5 requests per second per base.
# See: https://airtable.com/developers/web/api/rate-limits
MIN_REQUEST_INTERVAL_SECONDS = 0.2

MAX_PAGINATION_REQUESTS = 500
"""Upper bound on list requests in one paginated call (max records on any plan / page size)."""

UPDATE_METHODS = ("PATCH", "PUT")

AIRTABLE_ID_KEY = "_airtableId"
"""Key under which the record id is merged into a field map when requested."""

LIST_RECORDS_PATH = "listRecords"
