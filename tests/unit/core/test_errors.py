# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from airtable_client import AirtableConfig
from airtable_client.core._error_codes import HTTP_404, HTTP_503, VALIDATION_TABLE
from airtable_client.core.errors import AirtableError, HttpError, ResponseError, ValidationError


def test_http_error_subcode_and_details():
    err = HttpError("nope", status_code=404, status_text="Not Found", service_error_type="NOT_FOUND")
    d = err.to_dict()
    assert d["code"] == "http_error"
    assert d["subcode"] == HTTP_404
    assert d["status_code"] == 404
    assert d["source"] == "server"
    assert d["is_transient"] is False
    assert d["details"] == {"status_text": "Not Found", "service_error_type": "NOT_FOUND"}
    assert err.status_text == "Not Found"


def test_http_error_transient_statuses():
    assert HttpError("x", status_code=503).is_transient is True
    assert HttpError("x", status_code=503).subcode == HTTP_503
    assert HttpError("x", status_code=429).is_transient is True
    assert HttpError("x", status_code=500).is_transient is False


def test_http_error_unknown_status_subcode():
    assert HttpError("x", status_code=418).subcode == "http_418"


def test_validation_error_hierarchy():
    err = ValidationError("bad table", subcode=VALIDATION_TABLE)
    assert isinstance(err, AirtableError)
    assert isinstance(err, TypeError)
    assert err.code == "validation_error"
    assert err.source == "client"
    assert str(err) == "bad table"


def test_response_error_is_airtable_error():
    err = ResponseError("bad id", status_code=200)
    assert isinstance(err, AirtableError)
    assert err.code == "response_error"
    assert err.timestamp


def test_config_defaults():
    config = AirtableConfig.from_env()
    assert config == AirtableConfig()
    assert config.min_request_interval == 0.2
    assert config.max_pagination_requests == 500
    assert config.http_timeout is None
