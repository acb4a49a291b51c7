# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

# HTTP subcode constants
HTTP_400 = "http_400"
HTTP_401 = "http_401"
HTTP_403 = "http_403"
HTTP_404 = "http_404"
HTTP_413 = "http_413"
HTTP_422 = "http_422"
HTTP_429 = "http_429"
HTTP_500 = "http_500"
HTTP_502 = "http_502"
HTTP_503 = "http_503"
HTTP_504 = "http_504"

_HTTP_STATUS_TO_SUBCODE = {
    400: HTTP_400,
    401: HTTP_401,
    403: HTTP_403,
    404: HTTP_404,
    413: HTTP_413,
    422: HTTP_422,
    429: HTTP_429,
    500: HTTP_500,
    502: HTTP_502,
    503: HTTP_503,
    504: HTTP_504,
}

TRANSIENT_STATUSES = {429, 502, 503, 504}

# Validation subcodes
VALIDATION_API_KEY = "validation_api_key"
VALIDATION_BASE_ID = "validation_base_id"
VALIDATION_BASE_URL = "validation_base_url"
VALIDATION_FIELDS_NOT_DICT = "validation_fields_not_dict"
VALIDATION_FIELD_NAMES = "validation_field_names"
VALIDATION_TABLE = "validation_table"
VALIDATION_RECORD_ID = "validation_record_id"
VALIDATION_METHOD = "validation_method"
VALIDATION_FORMULA = "validation_formula"
VALIDATION_MODIFIED_SINCE_HOURS = "validation_modified_since_hours"
VALIDATION_FORMULA_CONFLICT = "validation_formula_conflict"
VALIDATION_MAX_RECORDS = "validation_max_records"
VALIDATION_WHERE = "validation_where"
VALIDATION_SET_FIELDS = "validation_set_fields"
VALIDATION_SET_WHERE_OVERLAP = "validation_set_where_overlap"

# Response subcodes
RESPONSE_INVALID_RECORD_ID = "response_invalid_record_id"

# Pagination subcodes
PAGINATION_LIMIT_EXCEEDED = "pagination_limit_exceeded"


def _http_subcode(status: int) -> str:
    """Map an HTTP status code to its subcode, falling back to ``http_<status>``."""
    return _HTTP_STATUS_TO_SUBCODE.get(status, f"http_{status}")


def _is_transient_status(status: int) -> bool:
    return status in TRANSIENT_STATUSES
