# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for the Airtable Web API records endpoints.

Create, read and update records, list them with transparent pagination, look
up a record by one field and upsert by one field, with per-client request
spacing that keeps within Airtable's 5 requests/second limit.
"""

from .client import AirtableClient
from .core.config import AirtableConfig
from .core.errors import AirtableError, HttpError, PaginationError, ResponseError, ValidationError
from .core.results import AirtableResponse
from .models.upsert import UpsertOutcome, UpsertResult

__version__ = "0.1.0"

__all__ = [
    "AirtableClient",
    "AirtableConfig",
    "AirtableError",
    "AirtableResponse",
    "HttpError",
    "PaginationError",
    "ResponseError",
    "UpsertOutcome",
    "UpsertResult",
    "ValidationError",
]
