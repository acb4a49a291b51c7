# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock, patch

import pytest
import requests

from airtable_client import AirtableClient, ValidationError
from airtable_client.core._error_codes import (
    VALIDATION_API_KEY,
    VALIDATION_BASE_ID,
    VALIDATION_BASE_URL,
    VALIDATION_FIELDS_NOT_DICT,
    VALIDATION_METHOD,
    VALIDATION_RECORD_ID,
    VALIDATION_TABLE,
)
from conftest import API_KEY, BASE, BASE_ID, RECORD_ID, TABLE


class TestClientConstruction(unittest.TestCase):
    """Argument checks performed by AirtableClient.__init__."""

    def test_defaults(self):
        client = AirtableClient(API_KEY, BASE_ID)
        self.assertEqual(client.base_url, "https://api.airtable.com/v0")
        self.assertEqual(client.base_id, BASE_ID)
        self.assertIsNone(client._throttle.last_request_at)

    def test_short_api_key_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            AirtableClient("short", BASE_ID)
        self.assertEqual(ctx.exception.subcode, VALIDATION_API_KEY)

    def test_non_string_api_key_rejected(self):
        with self.assertRaises(ValidationError):
            AirtableClient(1234567890123, BASE_ID)

    def test_base_id_wrong_prefix_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            AirtableClient(API_KEY, "bse_mock_123456789")
        self.assertEqual(ctx.exception.subcode, VALIDATION_BASE_ID)

    def test_base_id_too_short_rejected(self):
        with self.assertRaises(ValidationError):
            AirtableClient(API_KEY, "app123")

    def test_base_url_trailing_slash_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            AirtableClient(API_KEY, BASE_ID, base_url="https://proxy.example.com/v0/")
        self.assertEqual(ctx.exception.subcode, VALIDATION_BASE_URL)

    def test_empty_base_url_uses_default(self):
        client = AirtableClient(API_KEY, BASE_ID, base_url="")
        self.assertEqual(client.base_url, "https://api.airtable.com/v0")

    def test_validation_error_is_type_error(self):
        with self.assertRaises(TypeError):
            AirtableClient("short", BASE_ID)

    @patch("requests.request")
    def test_invalid_construction_sends_nothing(self, mock_request):
        with self.assertRaises(ValidationError):
            AirtableClient(API_KEY, "nope")
        mock_request.assert_not_called()

    def test_headers(self):
        client = AirtableClient(API_KEY, BASE_ID)
        self.assertEqual(
            client._get_rest()._headers,
            {"Authorization": f"Bearer {API_KEY}", "Content-Type": "application/json"},
        )


class TestContextManager(unittest.TestCase):
    """Session ownership when the client is used with ``with``."""

    def test_enter_creates_session(self):
        client = AirtableClient(API_KEY, BASE_ID)
        self.assertIsNone(client._session)

        result = client.__enter__()

        self.assertIsInstance(client._session, requests.Session)
        self.assertTrue(client._owns_session)
        self.assertIs(result, client)
        self.assertIs(client._get_rest()._http._session, client._session)
        client.close()

    def test_exit_closes_owned_session(self):
        client = AirtableClient(API_KEY, BASE_ID)
        client.__enter__()
        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session

        client.__exit__(None, None, None)

        mock_session.close.assert_called_once()
        self.assertIsNone(client._session)
        self.assertFalse(client._owns_session)
        self.assertIsNone(client._rest)

    def test_injected_session_not_closed(self):
        session = MagicMock(spec=requests.Session)
        with AirtableClient(API_KEY, BASE_ID, session=session) as client:
            self.assertIs(client._session, session)
            self.assertFalse(client._owns_session)
        session.close.assert_not_called()

    def test_close_keeps_throttle_state(self):
        client = AirtableClient(API_KEY, BASE_ID)
        throttle = client._throttle
        throttle.last_request_at = 42.0
        client.close()
        client.close()
        self.assertIs(client._throttle, throttle)
        self.assertIs(client._get_rest()._throttle, throttle)
        self.assertEqual(throttle.last_request_at, 42.0)


# ---------------------------------------------------------------- create


def test_create_record(make_client):
    client, http = make_client([(200, {"createRecordResponse": True})])

    res = client.create_record(fields={"foo": "bar"}, table_id_or_name=TABLE)

    assert len(http.calls) == 1
    method, url, kwargs, _ = http.calls[0]
    assert method == "POST"
    assert url == f"{BASE}/{TABLE}"
    assert kwargs["json"] == {"fields": {"foo": "bar"}}
    assert kwargs["headers"]["Authorization"] == f"Bearer {API_KEY}"
    assert res.data == {"createRecordResponse": True}
    assert res.ok is True
    assert res.status == 200
    assert res.status_text == "OK"


def test_create_record_custom_base_url(make_client):
    client, http = make_client([(200, {})], base_url="https://proxy.example.com/v0")
    client.create_record(fields={}, table_id_or_name="Tasks")
    assert http.urls == [f"https://proxy.example.com/v0/{BASE_ID}/Tasks"]


@pytest.mark.parametrize("fields", [None, ["a"], "foo", 3])
def test_create_record_rejects_non_dict_fields(make_client, fields):
    client, http = make_client()
    with pytest.raises(ValidationError) as ei:
        client.create_record(fields=fields, table_id_or_name=TABLE)
    assert ei.value.subcode == VALIDATION_FIELDS_NOT_DICT
    assert http.calls == []


@pytest.mark.parametrize("table", ["", None, 5])
def test_create_record_rejects_bad_table(make_client, table):
    client, http = make_client()
    with pytest.raises(ValidationError) as ei:
        client.create_record(fields={"a": 1}, table_id_or_name=table)
    assert ei.value.subcode == VALIDATION_TABLE
    assert http.calls == []


def test_error_status_is_returned_not_raised(make_client):
    body = {"error": {"type": "INVALID_VALUE_FOR_COLUMN", "message": "bad"}}
    client, _ = make_client([(422, body)])

    res = client.create_record(fields={"Count": "x"}, table_id_or_name=TABLE)

    assert res.ok is False
    assert res.status == 422
    assert res.status_text == "Unprocessable Entity"
    assert res.data == body


def test_non_json_body_gives_none_data(make_client):
    client, _ = make_client([(503, "<html>down</html>")])
    res = client.create_record(fields={}, table_id_or_name=TABLE)
    assert res.data is None
    assert res.ok is False
    assert res.status == 503


# ------------------------------------------------------------------- get


def test_get_record(make_client):
    client, http = make_client([(200, {"getRecordResponse": True})])

    res = client.get_record(record_id=RECORD_ID, table_id_or_name=TABLE)

    assert len(http.calls) == 1
    method, url, kwargs, _ = http.calls[0]
    assert method == "GET"
    assert url == f"{BASE}/{TABLE}/{RECORD_ID}"
    assert "json" not in kwargs
    assert res.data == {"getRecordResponse": True}


@pytest.mark.parametrize("record_id", ["rec123", "app_mock_123456789", None, 123])
def test_get_record_rejects_bad_record_id(make_client, record_id):
    client, http = make_client()
    with pytest.raises(ValidationError) as ei:
        client.get_record(record_id=record_id, table_id_or_name=TABLE)
    assert ei.value.subcode == VALIDATION_RECORD_ID
    assert http.calls == []


def test_get_record_accepts_ten_character_id(make_client):
    client, http = make_client([(200, {})])
    client.get_record(record_id="rec4567890", table_id_or_name=TABLE)
    assert http.urls == [f"{BASE}/{TABLE}/rec4567890"]


# ---------------------------------------------------------------- update


def test_update_record_defaults_to_patch(make_client):
    client, http = make_client([(200, {"updateRecordResponse": True})])

    res = client.update_record(fields={"foo": "bar"}, record_id=RECORD_ID, table_id_or_name=TABLE)

    assert http.methods == ["PATCH"]
    assert http.urls == [f"{BASE}/{TABLE}/{RECORD_ID}"]
    assert http.bodies == [{"fields": {"foo": "bar"}}]
    assert res.data == {"updateRecordResponse": True}


def test_update_record_put_only_changes_verb(make_client):
    client, http = make_client([(200, {}), (200, {})])

    client.update_record(fields={"foo": "bar"}, record_id=RECORD_ID, table_id_or_name=TABLE)
    client.update_record(fields={"foo": "bar"}, record_id=RECORD_ID, table_id_or_name=TABLE, method="PUT")

    assert http.methods == ["PATCH", "PUT"]
    assert http.urls[0] == http.urls[1]
    assert http.bodies[0] == http.bodies[1]
    assert http.calls[0][2]["headers"] == http.calls[1][2]["headers"]


def test_update_record_method_case_insensitive(make_client):
    client, http = make_client([(200, {})])
    client.update_record(fields={}, record_id=RECORD_ID, table_id_or_name=TABLE, method="put")
    assert http.methods == ["PUT"]


@pytest.mark.parametrize("method", ["POST", "DELETE", "", None])
def test_update_record_rejects_other_methods(make_client, method):
    client, http = make_client()
    with pytest.raises(ValidationError) as ei:
        client.update_record(fields={}, record_id=RECORD_ID, table_id_or_name=TABLE, method=method)
    assert ei.value.subcode == VALIDATION_METHOD
    assert http.calls == []
