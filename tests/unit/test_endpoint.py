"""Unit tests for request URL construction"""

import pytest
import httpx
from urllib.parse import parse_qs, urlsplit
from ideal_gateway.domain.exceptions import ConfigurationError
from ideal_gateway.infrastructure.clients.endpoint import EndpointBuilder


BASE_URL = "https://secure.mollie.nl/xml/ideal"


def query_of(url: str) -> dict:
    return parse_qs(urlsplit(url).query, keep_blank_values=True)


def test_build_adds_operation_discriminator():
    """Test every URL carries a=<operation>"""
    url = EndpointBuilder(BASE_URL).build("banklist")

    assert url.startswith(BASE_URL)
    assert query_of(url) == {"a": ["banklist"]}


def test_build_testmode_flag_inherited():
    """Test test mode is injected once into the base endpoint"""
    builder = EndpointBuilder(BASE_URL, testmode=True)

    for operation in ("banklist", "fetch", "check"):
        query = query_of(builder.build(operation, {"partnerid": 1}))
        assert query["testmode"] == ["true"]
        assert query["a"] == [operation]


def test_build_without_testmode_never_has_flag():
    """Test live mode URLs never carry testmode"""
    builder = EndpointBuilder(BASE_URL, testmode=False)

    assert "testmode" not in query_of(builder.build("fetch", {"partnerid": 1}))


def test_build_renders_values():
    """Test ints, strings and URLs are rendered and URL-encoded"""
    url = EndpointBuilder(BASE_URL).build(
        "fetch",
        {
            "amount": 1000,
            "description": "Order #1 & more",
            "reporturl": httpx.URL("https://example.com/report?id=7"),
        },
    )

    query = query_of(url)
    assert query["amount"] == ["1000"]
    assert query["description"] == ["Order #1 & more"]
    assert query["reporturl"] == ["https://example.com/report?id=7"]
    assert "#" not in urlsplit(url).query


def test_build_none_value_fails_fast():
    """Test a missing required value raises instead of building a request"""
    builder = EndpointBuilder(BASE_URL)

    with pytest.raises(ValueError, match="returnurl"):
        builder.build("fetch", {"returnurl": None})


def test_build_does_not_mutate_base_url():
    """Test parameters of one request never leak into the next"""
    builder = EndpointBuilder(BASE_URL)
    builder.build("check", {"transaction_id": "tr_1"})

    assert query_of(builder.build("banklist")) == {"a": ["banklist"]}


@pytest.mark.parametrize("base_url", ["not a url", "/xml/ideal", "ftp://secure.mollie.nl/xml/ideal"])
def test_invalid_base_url_raises_configuration_error(base_url: str):
    """Test malformed endpoints are rejected at construction"""
    with pytest.raises(ConfigurationError):
        EndpointBuilder(base_url)
