"""Tests for response flattening and classification."""

import pytest
from lxml import etree

from maxipago_sdk.connectors.maxipago.parser import (
    authorization_from,
    flatten,
    is_success,
    message_from,
    parse,
    underscore,
)
from maxipago_sdk.exceptions import MaxipagoResponseError

from conftest import ADD_CARD_RESPONSE, ADD_CONSUMER_RESPONSE, AUTHORIZED_RESPONSE, DECLINED_RESPONSE


class TestUnderscore:
    """Tests for element name normalization."""

    @pytest.mark.parametrize("name, expected", [
        ("responseCode", "response_code"),
        ("orderID", "order_id"),
        ("transactionID", "transaction_id"),
        ("processorMessage", "processor_message"),
        ("errorMsg", "error_msg"),
        ("customerId", "customer_id"),
        ("token", "token"),
        ("creditCardScheme", "credit_card_scheme"),
        ("HTTPStatusCode", "http_status_code"),
        ("transaction-response", "transaction_response"),
        ("save-on-file", "save_on_file"),
    ])
    def test_underscore(self, name, expected):
        assert underscore(name) == expected


class TestFlatten:
    """Tests for the leaf-collecting flattener."""

    def test_only_leaves_contribute(self):
        """Parent elements contribute nothing under their own name."""
        root = etree.fromstring("<r><result><customerId>7</customerId></result><errorCode>0</errorCode></r>")

        assert flatten(root) == {"customer_id": "7", "error_code": "0"}

    def test_last_write_wins_in_document_order(self):
        """Repeated names keep the last leaf in document order."""
        root = etree.fromstring(
            "<r><a><name>first</name></a><b><c><name>second</name></c></b><name>third</name></r>"
        )

        assert flatten(root)["name"] == "third"

    def test_deep_leaf_after_shallow(self):
        """A deeper leaf visited later overwrites an earlier shallow one."""
        root = etree.fromstring("<r><name>shallow</name><x><y><name>deep</name></y></x></r>")

        assert flatten(root)["name"] == "deep"

    def test_empty_leaf_is_none(self):
        """Leaves without text map to None."""
        root = etree.fromstring("<r><errorMessage/></r>")

        assert flatten(root) == {"error_message": None}

    def test_returns_new_mapping(self):
        """Each call builds a fresh mapping."""
        root = etree.fromstring("<r><a>1</a></r>")
        first = flatten(root)
        first["a"] = "changed"

        assert flatten(root) == {"a": "1"}


class TestParse:
    """Tests for parsing raw bodies."""

    def test_parse_transaction_response(self):
        response = parse(AUTHORIZED_RESPONSE)

        assert response["response_code"] == "0"
        assert response["order_id"] == "0A0104A3:0150D0C1F0A2:2C2A:01D38B32"
        assert response["transaction_id"] == "999888"
        assert response["error_message"] is None
        assert "transaction_response" not in response

    def test_parse_text_body(self):
        """str bodies are accepted as well as bytes."""
        response = parse("<api-response><errorCode>0</errorCode></api-response>")

        assert response == {"error_code": "0"}

    def test_parse_nested_account_response(self):
        response = parse(ADD_CONSUMER_RESPONSE)

        assert response["customer_id"] == "24523"
        assert response["command"] == "add-consumer"

    @pytest.mark.parametrize("body", [b"", b"not xml", b"<open><unclosed></open>"])
    def test_malformed_body_raises(self, body):
        with pytest.raises(MaxipagoResponseError):
            parse(body)

    def test_external_entities_not_resolved(self):
        """DOCTYPE entities are not expanded into values."""
        body = (
            b'<?xml version="1.0"?><!DOCTYPE r [<!ENTITY x SYSTEM "file:///etc/passwd">]>'
            b"<r><errorCode>&x;</errorCode></r>"
        )
        response = parse(body)

        assert "root:" not in (response.get("error_code") or "")


class TestClassification:
    """Tests for success, message and authorization extraction."""

    def test_response_code_zero_is_success(self):
        assert is_success({"response_code": "0", "error_message": "ignored"})

    @pytest.mark.parametrize("code", ["1", "2", "1024", ""])
    def test_non_zero_response_code_is_failure(self, code):
        assert not is_success({"response_code": code})

    def test_error_code_used_for_account_responses(self):
        assert is_success({"error_code": "0"})
        assert not is_success({"error_code": "1"})

    def test_response_code_takes_precedence(self):
        assert not is_success({"response_code": "1", "error_code": "0"})

    def test_missing_codes_is_failure(self):
        assert not is_success({})

    def test_message_priority(self):
        response = {
            "token": "t",
            "customer_id": "c",
            "error_msg": "em",
            "processor_message": "pm",
            "response_message": "rm",
            "error_message": "err",
        }
        assert message_from(response) == "err"
        del response["error_message"]
        assert message_from(response) == "rm"
        del response["response_message"]
        assert message_from(response) == "pm"
        del response["processor_message"]
        assert message_from(response) == "em"
        del response["error_msg"]
        assert message_from(response) == "c"
        del response["customer_id"]
        assert message_from(response) == "t"
        del response["token"]
        assert message_from(response) is None

    def test_empty_error_message_falls_through(self):
        """An empty errorMessage element does not hide responseMessage."""
        assert message_from(parse(AUTHORIZED_RESPONSE)) == "AUTHORIZED"

    def test_declined_message(self):
        assert message_from(parse(DECLINED_RESPONSE)) == "The transaction has an expired credit card."

    def test_account_messages(self):
        assert message_from(parse(ADD_CONSUMER_RESPONSE)) == "24523"
        assert message_from(parse(ADD_CARD_RESPONSE)) == "c0fe2b8a5b"

    def test_authorization_from(self):
        assert authorization_from({"order_id": "12345", "transaction_id": "999888"}) == "12345|999888"

    def test_authorization_with_missing_halves(self):
        assert authorization_from({"order_id": "12345"}) == "12345|"
        assert authorization_from({"transaction_id": "999888"}) == "|999888"
        assert authorization_from({}) == "|"
