# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Result types for Airtable client operations.

:class:`AirtableResponse` is the normalized outcome of a single HTTP call: the
decoded JSON body together with the HTTP status. Non-success statuses are
reported through ``ok``/``status`` rather than raised, so callers can inspect
Airtable's error payload in ``data``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class AirtableResponse:
    """
    Normalized response of one Airtable API request.

    :param data: Parsed JSON body, or ``None`` when the body was empty or not JSON.
    :type data: Any
    :param ok: ``True`` for 2xx statuses.
    :type ok: :class:`bool`
    :param status: HTTP status code.
    :type status: :class:`int`
    :param status_text: HTTP reason phrase (e.g. ``"Not Found"``).
    :type status_text: :class:`str`

    Example::

        res = client.get_record(record_id="rec1234567890", table_id_or_name="Tasks")
        if res.ok:
            print(res.data["fields"])
        else:
            print(res.status, res.status_text, res.data)
    """

    data: Any = None
    ok: bool = False
    status: int = 0
    status_text: str = ""
