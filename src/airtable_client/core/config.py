# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.constants import MAX_PAGINATION_REQUESTS, MIN_REQUEST_INTERVAL_SECONDS


@dataclass(frozen=True)
class AirtableConfig:
    """
    Configuration settings for Airtable client operations.

    :param min_request_interval: Minimum spacing in seconds between the start of two
        requests from the same client (default: 0.2, i.e. 5 requests per second).
    :type min_request_interval: float
    :param max_pagination_requests: Maximum number of list requests a single paginated
        call may issue before it is aborted (default: 500).
    :type max_pagination_requests: int
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    """

    min_request_interval: float = MIN_REQUEST_INTERVAL_SECONDS
    max_pagination_requests: int = MAX_PAGINATION_REQUESTS

    http_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "AirtableConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~airtable_client.core.config.AirtableConfig
        """
        # Environment-free defaults
        return cls(
            min_request_interval=MIN_REQUEST_INTERVAL_SECONDS,
            max_pagination_requests=MAX_PAGINATION_REQUESTS,
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
        )
