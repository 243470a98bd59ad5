"""Unit tests for authorization identifier helpers."""

import pytest

from src.authorization.identifier import (
    MalformedIdentifierError,
    format_authorization_id,
    parse_authorization_id,
)


class TestAuthorizationIdentifier:

    def test_format(self):
        assert format_authorization_id("123456789012", "us-west-2") == "123456789012:us-west-2"

    def test_parse(self):
        assert parse_authorization_id("123456789012:us-east-1") == ("123456789012", "us-east-1")

    @pytest.mark.parametrize("account_id,region", [
        ("123456789012", "us-east-1"),
        ("000000000000", "ap-southeast-2"),
        ("", ""),
    ])
    def test_parse_reverses_format(self, account_id, region):
        resource_id = format_authorization_id(account_id, region)
        assert parse_authorization_id(resource_id) == (account_id, region)

    @pytest.mark.parametrize("resource_id", [
        "bad-id",
        "",
        "123456789012:us-east-1:extra",
    ])
    def test_parse_malformed(self, resource_id):
        with pytest.raises(MalformedIdentifierError) as exc_info:
            parse_authorization_id(resource_id)

        assert "account_id:region" in str(exc_info.value)
