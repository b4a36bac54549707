"""Tests for API key verification."""

import pytest

from notion_bridge.web.auth import verify_api_key
from notion_bridge.web.errors import ApiError, BadRequestError, MisconfiguredError, UnauthorizedError


def test_matching_key():
    verify_api_key("secret", "secret")


@pytest.mark.parametrize("expected", [None, ""])
def test_missing_server_key(expected):
    with pytest.raises(MisconfiguredError, match="API_KEY not set") as exc_info:
        verify_api_key("secret", expected)
    assert exc_info.value.status_code == 500


@pytest.mark.parametrize("provided", [None, "", "wrong", "sécret"])
def test_wrong_key(provided):
    with pytest.raises(UnauthorizedError) as exc_info:
        verify_api_key(provided, "secret")
    assert exc_info.value.status_code == 401


def test_error_body():
    error = ApiError("Multiple matches", status_code=200, candidates=[])

    assert error.status_code == 200
    assert error.to_dict() == {"ok": False, "error": "Multiple matches", "candidates": []}
    assert BadRequestError("title required").status_code == 400
