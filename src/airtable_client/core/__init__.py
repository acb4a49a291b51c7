# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Airtable client.

This module contains the foundational components including configuration,
HTTP transport, request throttling, validation and error handling.
"""

from .config import AirtableConfig
from .errors import AirtableError, HttpError, PaginationError, ResponseError, ValidationError
from .results import AirtableResponse

__all__ = [
    "AirtableConfig",
    "AirtableError",
    "AirtableResponse",
    "HttpError",
    "PaginationError",
    "ResponseError",
    "ValidationError",
]
