# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Argument checks run before any request is sent."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..common.constants import (
    BASE_ID_PREFIX,
    MIN_API_KEY_LENGTH,
    MIN_BASE_ID_LENGTH,
    MIN_RECORD_ID_LENGTH,
    RECORD_ID_PREFIX,
    UPDATE_METHODS,
)
from ._error_codes import (
    VALIDATION_API_KEY,
    VALIDATION_BASE_ID,
    VALIDATION_BASE_URL,
    VALIDATION_FIELD_NAMES,
    VALIDATION_FIELDS_NOT_DICT,
    VALIDATION_FORMULA,
    VALIDATION_FORMULA_CONFLICT,
    VALIDATION_MAX_RECORDS,
    VALIDATION_METHOD,
    VALIDATION_MODIFIED_SINCE_HOURS,
    VALIDATION_RECORD_ID,
    VALIDATION_SET_FIELDS,
    VALIDATION_SET_WHERE_OVERLAP,
    VALIDATION_TABLE,
    VALIDATION_WHERE,
)
from .errors import ValidationError


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as 1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def is_record_id(value: Any) -> bool:
    """Return True when ``value`` looks like an Airtable record id (``rec...``)."""
    return (
        isinstance(value, str)
        and len(value) >= MIN_RECORD_ID_LENGTH
        and value.startswith(RECORD_ID_PREFIX)
    )


def _validate_api_key(api_key: Any) -> None:
    if not isinstance(api_key, str) or len(api_key) < MIN_API_KEY_LENGTH:
        raise ValidationError(
            f"AirtableClient expected 'api_key' to be string of at least {MIN_API_KEY_LENGTH} characters",
            subcode=VALIDATION_API_KEY,
        )


def _validate_base_id(base_id: Any) -> None:
    if (
        not isinstance(base_id, str)
        or len(base_id) < MIN_BASE_ID_LENGTH
        or not base_id.startswith(BASE_ID_PREFIX)
    ):
        raise ValidationError(
            f"AirtableClient expected 'base_id' to be string of at least {MIN_BASE_ID_LENGTH} "
            f"characters starting with '{BASE_ID_PREFIX}'",
            subcode=VALIDATION_BASE_ID,
        )


def _validate_base_url(base_url: Any) -> None:
    if not isinstance(base_url, str) or base_url.endswith("/"):
        raise ValidationError(
            "AirtableClient expected 'base_url' to be a string without a trailing slash",
            subcode=VALIDATION_BASE_URL,
            details={"base_url": base_url},
        )


def _validate_fields_dict(op: str, fields: Any) -> None:
    if not isinstance(fields, dict):
        raise ValidationError(
            f"{op} expected 'fields' to be a dict",
            subcode=VALIDATION_FIELDS_NOT_DICT,
        )


def _validate_table(op: str, table_id_or_name: Any) -> None:
    if not isinstance(table_id_or_name, str) or not table_id_or_name:
        raise ValidationError(
            f"{op} expected 'table_id_or_name' to be a non-empty string",
            subcode=VALIDATION_TABLE,
        )


def _validate_record_id(op: str, record_id: Any) -> None:
    if not is_record_id(record_id):
        raise ValidationError(
            f"{op} expected 'record_id' to be string of at least {MIN_RECORD_ID_LENGTH} "
            f"characters starting with '{RECORD_ID_PREFIX}'",
            subcode=VALIDATION_RECORD_ID,
            details={"record_id": record_id},
        )


def _normalize_update_method(op: str, method: Any) -> str:
    """Validate an update verb and return it upper-cased."""
    if not isinstance(method, str) or method.upper() not in UPDATE_METHODS:
        raise ValidationError(
            f"{op} expected 'method' to be 'PATCH' or 'PUT'",
            subcode=VALIDATION_METHOD,
            details={"method": method},
        )
    return method.upper()


def _validate_field_names(op: str, fields: Optional[List[str]]) -> None:
    if fields is None:
        return
    if (
        not isinstance(fields, list)
        or not fields
        or not all(isinstance(f, str) and f for f in fields)
    ):
        raise ValidationError(
            f"{op} expected 'fields' to be a non-empty list of non-empty strings",
            subcode=VALIDATION_FIELD_NAMES,
        )


def _validate_list_filters(
    op: str,
    filter_by_formula: Optional[str],
    modified_since_hours: Optional[int],
    max_records: Optional[int],
) -> None:
    if filter_by_formula is not None and modified_since_hours is not None:
        raise ValidationError(
            f"{op} accepts 'filter_by_formula' or 'modified_since_hours', not both",
            subcode=VALIDATION_FORMULA_CONFLICT,
        )
    if filter_by_formula is not None and (not isinstance(filter_by_formula, str) or not filter_by_formula):
        raise ValidationError(
            f"{op} expected 'filter_by_formula' to be a non-empty string",
            subcode=VALIDATION_FORMULA,
        )
    if modified_since_hours is not None and not _is_positive_int(modified_since_hours):
        raise ValidationError(
            f"{op} expected 'modified_since_hours' to be a positive integer",
            subcode=VALIDATION_MODIFIED_SINCE_HOURS,
            details={"modified_since_hours": modified_since_hours},
        )
    if max_records is not None and not _is_positive_int(max_records):
        raise ValidationError(
            f"{op} expected 'max_records' to be a positive integer",
            subcode=VALIDATION_MAX_RECORDS,
            details={"max_records": max_records},
        )


def _validate_where(op: str, where: Any) -> None:
    if not isinstance(where, dict) or len(where) != 1:
        raise ValidationError(
            f"{op} expected 'where' to be a dict with exactly one key",
            subcode=VALIDATION_WHERE,
        )


def _validate_set_fields(op: str, set_fields: Any, where: Dict[str, Any]) -> None:
    if not isinstance(set_fields, dict) or not set_fields:
        raise ValidationError(
            f"{op} expected 'set_fields' to be a non-empty dict",
            subcode=VALIDATION_SET_FIELDS,
        )
    overlap = sorted(set(set_fields) & set(where))
    if overlap:
        raise ValidationError(
            f"{op} expected 'set_fields' not to contain the 'where' key",
            subcode=VALIDATION_SET_WHERE_OVERLAP,
            details={"keys": overlap},
        )
