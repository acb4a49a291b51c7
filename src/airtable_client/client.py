# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

import pandas as pd
import requests

from .common.constants import AIRTABLE_ID_KEY, DEFAULT_BASE_URL
from .core._error_codes import PAGINATION_LIMIT_EXCEEDED, RESPONSE_INVALID_RECORD_ID
from .core._throttle import _Throttle
from .core._validation import (
    _normalize_update_method,
    _validate_api_key,
    _validate_base_id,
    _validate_base_url,
    _validate_field_names,
    _validate_fields_dict,
    _validate_list_filters,
    _validate_record_id,
    _validate_set_fields,
    _validate_table,
    _validate_where,
    is_record_id,
)
from .core.config import AirtableConfig
from .core.errors import HttpError, PaginationError, ResponseError
from .core.results import AirtableResponse
from .data._formula import field_equals, modified_since
from .data._rest import _RestClient
from .models.record import Record, is_empty_value
from .models.upsert import UpsertOutcome, UpsertResult
from .utils._pandas import records_to_dataframe

logger = logging.getLogger(__name__)


class AirtableClient:
    """
    Client for the records endpoints of one Airtable base.

    Every operation validates its arguments before any network call and raises
    :class:`~airtable_client.core.errors.ValidationError` on bad input. All
    requests from one client instance are spaced at least
    ``config.min_request_interval`` seconds apart (5 requests per second by
    default, Airtable's per-base limit). Requests are never retried.

    **Context Manager Support (Recommended)**:
        Using the client as a context manager reuses one HTTP session for all
        requests and closes it on exit::

            with AirtableClient(api_key="pat...", base_id="app...") as client:
                client.create_record(table_id_or_name="Tasks", fields={"Name": "Write docs"})

    :param api_key: Personal access token or API key (at least 10 characters).
    :type api_key: :class:`str`
    :param base_id: Base identifier, at least 10 characters starting with ``"app"``.
    :type base_id: :class:`str`
    :param base_url: API root without a trailing slash. Defaults to
        ``"https://api.airtable.com/v0"``.
    :type base_url: :class:`str` or None
    :param config: Optional throttle, pagination and timeout settings.
    :type config: ~airtable_client.core.config.AirtableConfig or None
    :param session: Optional caller-owned :class:`requests.Session`. The client never closes it.
    :type session: :class:`requests.Session` or None

    :raises ~airtable_client.core.errors.ValidationError: If ``api_key``, ``base_id``
        or ``base_url`` is malformed.

    Example::

        client = AirtableClient(api_key=token, base_id="appXXXXXXXXXXXXXX")
        tasks = client.find_many(table_id_or_name="Tasks", modified_since_hours=24)
        outcome = client.upsert_record(
            table_id_or_name="Contacts",
            where={"Email": "ada@example.com"},
            set_fields={"Name": "Ada Lovelace", "Active": True},
        )
    """

    def __init__(
        self,
        api_key: str,
        base_id: str,
        base_url: Optional[str] = None,
        config: Optional[AirtableConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        _validate_api_key(api_key)
        _validate_base_id(base_id)
        if base_url:
            _validate_base_url(base_url)
        else:
            base_url = DEFAULT_BASE_URL

        self._api_key = api_key
        self.base_id = base_id
        self.base_url = base_url
        self._config = config or AirtableConfig.from_env()
        self._throttle = _Throttle(self._config.min_request_interval)
        self._rest: Optional[_RestClient] = None
        self._session: Optional[requests.Session] = session
        self._owns_session: bool = False

    def __enter__(self) -> "AirtableClient":
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            self._rest = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session created by the context manager.

        Safe to call multiple times. Throttle state survives, so a closed client
        that is used again still honours the request spacing.
        """
        self._rest = None
        if self._session is not None and self._owns_session:
            self._session.close()
            self._session = None
            self._owns_session = False

    def _get_rest(self) -> _RestClient:
        """Get or create the low-level request builder bound to the current session."""
        if self._rest is None:
            self._rest = _RestClient(
                self._api_key,
                self.base_id,
                self.base_url,
                self._config,
                session=self._session,
                throttle=self._throttle,
            )
        return self._rest

    # ----------------------------- CRUD ---------------------------------
    def create_record(self, *, fields: Dict[str, Any], table_id_or_name: str) -> AirtableResponse:
        """
        Create a record.

        See https://airtable.com/developers/web/api/create-records

        :param fields: Field values for the new record.
        :type fields: :class:`dict`
        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :return: Normalized response; ``data`` is ``{"id", "createdTime", "fields"}`` on success.
        :rtype: ~airtable_client.core.results.AirtableResponse
        """
        _validate_fields_dict("create_record", fields)
        _validate_table("create_record", table_id_or_name)
        return self._get_rest()._create(table_id_or_name, fields)

    def get_record(self, *, record_id: str, table_id_or_name: str) -> AirtableResponse:
        """
        Retrieve a single record. Empty fields are not returned by Airtable.

        See https://airtable.com/developers/web/api/get-record

        :param record_id: Record id (at least 10 characters starting with ``"rec"``).
        :type record_id: :class:`str`
        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :rtype: ~airtable_client.core.results.AirtableResponse
        """
        _validate_record_id("get_record", record_id)
        _validate_table("get_record", table_id_or_name)
        return self._get_rest()._get(table_id_or_name, record_id)

    def update_record(
        self,
        *,
        fields: Dict[str, Any],
        record_id: str,
        table_id_or_name: str,
        method: str = "PATCH",
    ) -> AirtableResponse:
        """
        Update a single record.

        See https://airtable.com/developers/web/api/update-record

        :param fields: New field values.
        :type fields: :class:`dict`
        :param record_id: Record id (at least 10 characters starting with ``"rec"``).
        :type record_id: :class:`str`
        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :param method: ``"PATCH"`` (default) only updates the given fields; ``"PUT"``
            clears every field not given. Case-insensitive.
        :type method: :class:`str`
        :rtype: ~airtable_client.core.results.AirtableResponse
        """
        _validate_fields_dict("update_record", fields)
        verb = _normalize_update_method("update_record", method)
        _validate_record_id("update_record", record_id)
        _validate_table("update_record", table_id_or_name)
        return self._get_rest()._update(table_id_or_name, record_id, fields, verb)

    # ----------------------------- Query --------------------------------
    def iter_pages(
        self,
        *,
        table_id_or_name: str,
        fields: Optional[List[str]] = None,
        filter_by_formula: Optional[str] = None,
        modified_since_hours: Optional[int] = None,
        max_records: Optional[int] = None,
    ) -> Iterator[List[Dict[str, Any]]]:
        """
        Iterate list results one page at a time.

        Arguments are validated immediately; requests are issued lazily as the
        iterator advances, each carrying the previous page's ``offset``.

        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :param fields: Field names to return. All fields when omitted.
        :type fields: :class:`list` of :class:`str` or None
        :param filter_by_formula: Airtable formula; mutually exclusive with ``modified_since_hours``.
        :type filter_by_formula: :class:`str` or None
        :param modified_since_hours: Only records modified within this many hours.
        :type modified_since_hours: :class:`int` or None
        :param max_records: Maximum number of records across all pages.
        :type max_records: :class:`int` or None
        :return: Iterator of raw record lists (``{"id", "createdTime", "fields"}`` dicts).

        :raises ~airtable_client.core.errors.HttpError: When a page request is not successful.
        :raises ~airtable_client.core.errors.PaginationError: When the listing does not
            finish within ``config.max_pagination_requests`` requests.
        """
        _validate_table("find_many", table_id_or_name)
        _validate_field_names("find_many", fields)
        _validate_list_filters("find_many", filter_by_formula, modified_since_hours, max_records)

        payload: Dict[str, Any] = {}
        if fields:
            payload["fields"] = list(fields)
        if filter_by_formula is not None:
            payload["filterByFormula"] = filter_by_formula
        elif modified_since_hours is not None:
            payload["filterByFormula"] = modified_since(modified_since_hours)
        if max_records is not None:
            payload["maxRecords"] = max_records

        return self._paginate(table_id_or_name, payload)

    def _paginate(self, table_id_or_name: str, payload: Dict[str, Any]) -> Iterator[List[Dict[str, Any]]]:
        rest = self._get_rest()
        limit = self._config.max_pagination_requests
        offset: Optional[str] = None

        for page_number in range(1, limit + 1):
            body = dict(payload)
            if offset is not None:
                body["offset"] = offset
            res = rest._list_page(table_id_or_name, body)
            if not res.ok:
                raise _list_error(res)

            data = res.data if isinstance(res.data, dict) else {}
            items = data.get("records")
            page = [x for x in items if isinstance(x, dict)] if isinstance(items, list) else []
            logger.debug("listRecords page %d from %s: %d records", page_number, table_id_or_name, len(page))
            yield page

            next_offset = data.get("offset")
            if not isinstance(next_offset, str) or not next_offset:
                return
            offset = next_offset

        raise PaginationError(
            f"listRecords did not finish within {limit} requests",
            subcode=PAGINATION_LIMIT_EXCEEDED,
            details={"table": table_id_or_name, "limit": limit},
        )

    def find_many(
        self,
        *,
        table_id_or_name: str,
        fields: Optional[List[str]] = None,
        filter_by_formula: Optional[str] = None,
        modified_since_hours: Optional[int] = None,
        max_records: Optional[int] = None,
        include_airtable_id: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Fetch every matching record, following pagination until exhausted.

        See https://airtable.com/developers/web/api/list-records

        Takes the same arguments as :meth:`iter_pages`, plus:

        :param include_airtable_id: Add the record id to each field map under ``"_airtableId"``.
        :type include_airtable_id: :class:`bool`
        :return: One field map per record, in response order. Empty fields are absent.
        :rtype: :class:`list` of :class:`dict`

        If any page fails, nothing is returned and the error propagates.

        Example::

            recent = client.find_many(
                table_id_or_name="Orders",
                fields=["Customer", "Total"],
                modified_since_hours=24,
                include_airtable_id=True,
            )
        """
        pages = list(
            self.iter_pages(
                table_id_or_name=table_id_or_name,
                fields=fields,
                filter_by_formula=filter_by_formula,
                modified_since_hours=modified_since_hours,
                max_records=max_records,
            )
        )
        return [_record_to_dict(item, include_airtable_id) for page in pages for item in page]

    def find_many_dataframe(
        self,
        *,
        table_id_or_name: str,
        fields: Optional[List[str]] = None,
        filter_by_formula: Optional[str] = None,
        modified_since_hours: Optional[int] = None,
        max_records: Optional[int] = None,
        include_airtable_id: bool = False,
    ) -> pd.DataFrame:
        """
        Same as :meth:`find_many` but returns a :class:`pandas.DataFrame`.

        When ``fields`` is given the columns follow that order and fields that are
        empty in every record still appear (as NaN).
        """
        rows = self.find_many(
            table_id_or_name=table_id_or_name,
            fields=fields,
            filter_by_formula=filter_by_formula,
            modified_since_hours=modified_since_hours,
            max_records=max_records,
            include_airtable_id=include_airtable_id,
        )
        return records_to_dataframe(rows, columns=fields, include_id=include_airtable_id)

    def find_first(
        self,
        *,
        table_id_or_name: str,
        where: Dict[str, Any],
        fields: Optional[List[str]] = None,
        include_airtable_id: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Return the record whose ``where`` field equals the given value.

        ``where`` must hold exactly one pair; it becomes the formula
        ``{field}='value'``. The value is not escaped, so values containing a
        single quote yield a malformed formula.

        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :param where: Single ``{field: value}`` filter.
        :type where: :class:`dict`
        :param fields: Field names to return.
        :type fields: :class:`list` of :class:`str` or None
        :param include_airtable_id: Add the record id under ``"_airtableId"``.
        :type include_airtable_id: :class:`bool`
        :return: The field map, or ``None`` if no record (or more than one) came back.
        :rtype: :class:`dict` or None
        """
        _validate_table("find_first", table_id_or_name)
        _validate_where("find_first", where)
        _validate_field_names("find_first", fields)

        (key, value), = where.items()
        records = self.find_many(
            table_id_or_name=table_id_or_name,
            fields=fields,
            filter_by_formula=field_equals(key, value),
            max_records=1,
            include_airtable_id=include_airtable_id,
        )
        if len(records) != 1:
            return None
        return records[0]

    # ----------------------------- Upsert -------------------------------
    def upsert_record(
        self,
        *,
        table_id_or_name: str,
        where: Dict[str, Any],
        set_fields: Dict[str, Any],
    ) -> UpsertOutcome:
        """
        Create the record matching ``where`` or bring its ``set_fields`` up to date.

        - No match: creates a record with ``where`` and ``set_fields`` combined.
        - Match with nothing to change: no write, ``RECORD_UNCHANGED``.
        - Match with differences: PATCHes only the differing fields.

        A field Airtable omitted (empty on the server) is not rewritten with
        another empty value (``""``, ``[]``, ``False`` or ``None``).

        The lookup and the write are separate requests; a concurrent writer can
        slip in between them.

        :param table_id_or_name: Table id or name.
        :type table_id_or_name: :class:`str`
        :param where: Single ``{field: value}`` pair identifying the record.
        :type where: :class:`dict`
        :param set_fields: Field values the record must end up with. Must not contain the ``where`` key.
        :type set_fields: :class:`dict`
        :rtype: ~airtable_client.models.upsert.UpsertOutcome

        :raises ~airtable_client.core.errors.ResponseError: If the created, matched or
            updated record id returned by Airtable is malformed.
        """
        _validate_table("upsert_record", table_id_or_name)
        _validate_where("upsert_record", where)
        _validate_set_fields("upsert_record", set_fields, where)

        existing = self.find_first(
            table_id_or_name=table_id_or_name,
            where=where,
            fields=list(set_fields),
            include_airtable_id=True,
        )

        if existing is None:
            res = self.create_record(fields={**where, **set_fields}, table_id_or_name=table_id_or_name)
            created_id = _response_record_id(res, "create_record")
            logger.debug("upsert created %s in %s", created_id, table_id_or_name)
            return UpsertOutcome(created_id, UpsertResult.RECORD_CREATED)

        airtable_id = existing.get(AIRTABLE_ID_KEY)
        if not is_record_id(airtable_id):
            raise ResponseError(
                "find_first returned a record with an invalid id",
                subcode=RESPONSE_INVALID_RECORD_ID,
                details={"record_id": airtable_id},
            )

        changes = _changed_fields(existing, set_fields)
        if not changes:
            logger.debug("upsert left %s unchanged", airtable_id)
            return UpsertOutcome(airtable_id, UpsertResult.RECORD_UNCHANGED)

        res = self.update_record(
            fields=changes,
            record_id=airtable_id,
            table_id_or_name=table_id_or_name,
        )
        updated_id = _response_record_id(res, "update_record")
        logger.debug("upsert updated %s fields on %s", sorted(changes), updated_id)
        return UpsertOutcome(updated_id, UpsertResult.RECORD_UPDATED)


def _record_to_dict(item: Dict[str, Any], include_airtable_id: bool) -> Dict[str, Any]:
    """Map a listed record to its field map, tagging the id when requested."""
    if not include_airtable_id:
        return dict(item.get("fields") or {})
    if not is_record_id(item.get("id")):
        raise ResponseError(
            "listRecords returned a record with an invalid id",
            subcode=RESPONSE_INVALID_RECORD_ID,
            details={"record": item},
        )
    return Record.from_api(item).to_dict(include_airtable_id=True)


def _values_equal(existing: Any, new: Any) -> bool:
    # True == 1 in Python; Airtable checkboxes and numbers are distinct values
    if isinstance(existing, bool) != isinstance(new, bool):
        return False
    return existing == new


def _changed_fields(existing: Dict[str, Any], set_fields: Dict[str, Any]) -> Dict[str, Any]:
    """Return the subset of ``set_fields`` that would change ``existing``."""
    changes: Dict[str, Any] = {}
    for key, value in set_fields.items():
        if key in existing:
            if _values_equal(existing[key], value):
                continue
        elif is_empty_value(value):
            continue
        changes[key] = value
    return changes


def _response_record_id(res: AirtableResponse, op: str) -> str:
    rid = res.data.get("id") if isinstance(res.data, dict) else None
    if not is_record_id(rid):
        raise ResponseError(
            f"{op} returned an invalid record id (status={res.status} {res.status_text})",
            subcode=RESPONSE_INVALID_RECORD_ID,
            status_code=res.status,
            details={"record_id": rid, "body": res.data},
        )
    return rid


def _list_error(res: AirtableResponse) -> HttpError:
    """Build the error raised for a failed listRecords page."""
    error_type = None
    message = None
    if isinstance(res.data, dict):
        err = res.data.get("error")
        if isinstance(err, dict):
            error_type = err.get("type")
            message = err.get("message")
        elif isinstance(err, str):
            error_type = err
    text = f"Airtable listRecords failed with {res.status} {res.status_text}"
    if message:
        text = f"{text}: {message}"
    return HttpError(
        text,
        status_code=res.status,
        status_text=res.status_text,
        body_excerpt=str(res.data)[:200] if res.data is not None else None,
        service_error_type=error_type,
    )


__all__ = ["AirtableClient"]
