# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Request builder for the Airtable records endpoints.

:class:`_RestClient` composes URLs and JSON bodies for each endpoint, sends
them through the throttle and :class:`~airtable_client.core._http._HttpClient`,
and normalizes every reply into an
:class:`~airtable_client.core.results.AirtableResponse`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..common.constants import LIST_RECORDS_PATH
from ..core._http import _HttpClient
from ..core._throttle import _Throttle
from ..core.config import AirtableConfig
from ..core.results import AirtableResponse

logger = logging.getLogger(__name__)


class _RestClient:
    """Airtable Web API client for a single base: record CRUD and list pages."""

    def __init__(
        self,
        api_key: str,
        base_id: str,
        base_url: str,
        config: Optional[AirtableConfig] = None,
        session: Optional[requests.Session] = None,
        throttle: Optional[_Throttle] = None,
    ) -> None:
        self.base_id = base_id
        self.base_url = base_url
        self.api = f"{base_url}/{base_id}"
        self.config = config or AirtableConfig.from_env()
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._http = _HttpClient(timeout=self.config.http_timeout, session=session)
        self._throttle = throttle or _Throttle(self.config.min_request_interval)

    def _table_url(self, table_id_or_name: str) -> str:
        return f"{self.api}/{table_id_or_name}"

    def _record_url(self, table_id_or_name: str, record_id: str) -> str:
        return f"{self.api}/{table_id_or_name}/{record_id}"

    def _request(self, method: str, url: str, body: Optional[Dict[str, Any]] = None) -> AirtableResponse:
        """Send one throttled request and normalize the reply."""
        kwargs: Dict[str, Any] = {"headers": dict(self._headers)}
        if body is not None:
            kwargs["json"] = body
        self._throttle.wait()
        r = self._http._request(method, url, **kwargs)
        try:
            data = r.json()
        except ValueError:
            logger.debug("Non-JSON response body from %s %s (status=%s)", method, url, r.status_code)
            data = None
        status = r.status_code
        return AirtableResponse(
            data=data,
            ok=200 <= status < 300,
            status=status,
            status_text=r.reason or "",
        )

    # ----------------------------- CRUD ---------------------------------
    def _create(self, table_id_or_name: str, fields: Dict[str, Any]) -> AirtableResponse:
        """POST /{base}/{table} with ``{"fields": ...}``."""
        return self._request("POST", self._table_url(table_id_or_name), {"fields": fields})

    def _get(self, table_id_or_name: str, record_id: str) -> AirtableResponse:
        """GET /{base}/{table}/{record_id}."""
        return self._request("GET", self._record_url(table_id_or_name, record_id))

    def _update(
        self,
        table_id_or_name: str,
        record_id: str,
        fields: Dict[str, Any],
        method: str = "PATCH",
    ) -> AirtableResponse:
        """PATCH or PUT /{base}/{table}/{record_id} with ``{"fields": ...}``."""
        return self._request(method, self._record_url(table_id_or_name, record_id), {"fields": fields})

    def _list_page(self, table_id_or_name: str, payload: Dict[str, Any]) -> AirtableResponse:
        """POST /{base}/{table}/listRecords for a single page."""
        url = f"{self._table_url(table_id_or_name)}/{LIST_RECORDS_PATH}"
        return self._request("POST", url, payload)
