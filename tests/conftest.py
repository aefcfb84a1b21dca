"""Pytest fixtures for testing"""

import pytest
import httpx
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from ideal_gateway.infrastructure.clients.ideal import IdealClient
from mock_server.main import app as mock_app


BANK_LIST_XML = b"""<?xml version="1.0"?>
<response>
  <bank><bank_id>0031</bank_id><bank_name>ABN AMRO</bank_name></bank>
  <bank><bank_id>0721</bank_id><bank_name>Postbank</bank_name></bank>
  <bank><bank_id>9999</bank_id><bank_name>TBM Bank</bank_name></bank>
</response>"""


def transaction_xml(status: str = "Success", payed: str = "true", consumer: bool = True, url: bool = False) -> bytes:
    """Build a transaction document with the given status"""
    consumer_xml = (
        "<consumer>"
        "<consumerName>J. de Vries</consumerName>"
        "<consumerAccount>P001234567</consumerAccount>"
        "<consumerCity>Amsterdam</consumerCity>"
        "</consumer>"
        if consumer
        else ""
    )
    url_xml = "<URL>https://bank.example.com/pay?trxid=tr_ABC123</URL>" if url else ""
    return (
        "<response><order>"
        "<transaction_id>tr_ABC123</transaction_id>"
        "<amount>1000</amount>"
        "<currency>EUR</currency>"
        f"<payed>{payed}</payed>"
        f"{consumer_xml}"
        f"{url_xml}"
        "<message>Status message</message>"
        f"<status>{status}</status>"
        "</order></response>"
    ).encode()


@pytest.fixture
def sent_requests() -> List[httpx.Request]:
    """Requests seen by the fake transport, in order"""
    return []


@pytest.fixture
def make_client(sent_requests: List[httpx.Request]) -> Generator[Callable[..., IdealClient], None, None]:
    """
    Factory for clients whose transport answers every request with a canned
    status and body.
    """
    clients = []

    def factory(body: bytes = b"", status_code: int = 200, **kwargs) -> IdealClient:
        def handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return httpx.Response(status_code, content=body)

        kwargs.setdefault("partner_id", 12345)
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return IdealClient(http_client=http_client, **kwargs)

    yield factory

    for http_client in clients:
        http_client.close()


@pytest.fixture
def mock_server() -> Generator[TestClient, None, None]:
    """Mock iDEAL server, reachable at http://testserver"""
    with TestClient(mock_app) as client:
        yield client


@pytest.fixture
def bank_list_xml() -> bytes:
    return BANK_LIST_XML


@pytest.fixture
def build_transaction_xml() -> Callable[..., bytes]:
    return transaction_xml
