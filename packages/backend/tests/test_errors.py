"""Error dictionary, StorefrontError and the global handlers."""

import pytest

from storefront.errors import ERRORS, StorefrontError, error_body


def test_error_uses_dictionary_defaults():
    err = StorefrontError("INVALID_PARAMETER", envelope="ERR")
    assert err.code == 404
    assert error_body(err) == {"status": "ERR", "data": "Invalid parameter"}


def test_error_message_override():
    err = StorefrontError("MISSING_FIELDS", message="title is required", envelope="ERR")
    assert err.code == 400
    assert error_body(err) == {"status": "ERR", "data": "title is required"}


def test_error_without_envelope():
    err = StorefrontError("FORBIDDEN")
    assert error_body(err) == {"error": ERRORS["FORBIDDEN"].message}


def test_unknown_error_key():
    with pytest.raises(KeyError):
        StorefrontError("NOT_A_KEY")


@pytest.mark.asyncio
async def test_unmatched_route_uses_page_not_found(client):
    r = await client.get("/no/such/page")
    assert r.status_code == 404
    assert r.json() == {"error": "Page not found"}


@pytest.mark.asyncio
async def test_method_not_allowed_keeps_detail(client):
    r = await client.patch("/api/products")
    assert r.status_code == 405
    assert r.json() == {"error": "Method Not Allowed"}
