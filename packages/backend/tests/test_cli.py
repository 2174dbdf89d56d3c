"""CLI tests — commands run against a mocked HTTP transport."""

import json

import httpx
import pytest
from click.testing import CliRunner

import storefront.cli.main as cli

CATALOG = [
    {"id": f"65a1f0c2e4b0a1b2c3d4e5{i:02x}", "title": f"Item {i}", "code": f"C{i}",
     "price": 1.0 + i, "stock": i}
    for i in range(5)
]


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/products":
        return httpx.Response(200, json={"status": "OK", "data": CATALOG})
    pid = request.url.path.rsplit("/", 1)[-1]
    if len(pid) != 24:
        return httpx.Response(404, json={"status": "ERR", "data": "Invalid parameter"})
    match = next((p for p in CATALOG if p["id"] == pid), None)
    return httpx.Response(200, json={"status": "OK", "data": match})


@pytest.fixture(autouse=True)
def mock_api(monkeypatch):
    monkeypatch.setattr(
        cli,
        "_client",
        lambda: httpx.AsyncClient(
            base_url="http://api.test", transport=httpx.MockTransport(_handler)
        ),
    )


def test_products_table():
    result = CliRunner().invoke(cli.main, ["products", "--limit", "2", "--page", "2"])
    assert result.exit_code == 0
    assert "Item 2" in result.output
    assert "Item 0" not in result.output
    assert "Page 2 of 3 (5 products)" in result.output


def test_products_json():
    result = CliRunner().invoke(cli.main, ["products", "--json", "--limit", "3"])
    assert result.exit_code == 0
    assert [p["title"] for p in json.loads(result.output)] == ["Item 0", "Item 1", "Item 2"]


def test_product_found():
    result = CliRunner().invoke(cli.main, ["product", CATALOG[1]["id"]])
    assert result.exit_code == 0
    assert json.loads(result.output)["title"] == "Item 1"


def test_product_missing():
    result = CliRunner().invoke(cli.main, ["product", "65a1f0c2e4b0a1b2c3d4ffff"])
    assert result.exit_code == 1
    assert "Product not found" in result.output


def test_product_invalid_id():
    result = CliRunner().invoke(cli.main, ["product", "123"])
    assert result.exit_code == 1
    assert "Invalid parameter" in result.output
