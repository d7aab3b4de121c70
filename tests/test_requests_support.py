import httpx
import pytest
import requests

from http_toolkit.client import Client
from http_toolkit.middlewares import BearerAuthMiddleware
from http_toolkit.requests_support import RequestsTransport


class DummyResponse:
    def __init__(self, status_code=200, headers=None, content=b"") -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self.content = content


class DummySession(requests.Session):
    def __init__(self, response=None) -> None:
        super().__init__()
        self.captured = {}
        self.response = response or DummyResponse()
        self.closed = False

    def request(self, method, url, **kwargs):  # pylint: disable=signature-differs
        self.captured = {
            "method": method,
            "url": url,
            **kwargs,
        }
        return self.response

    def close(self) -> None:
        self.closed = True
        super().close()


@pytest.mark.anyio
async def test_transport_forwards_request_to_session():
    session = DummySession(
        DummyResponse(
            201,
            headers={"Content-Type": "application/json", "Content-Encoding": "gzip"},
            content=b'{"id": 3}',
        )
    )
    transport = RequestsTransport(session, timeout=5)

    request = httpx.Request("POST", "https://example.com/items", content=b"body")
    response = await transport(request)

    captured = session.captured
    assert captured["method"] == "POST"
    assert captured["url"] == "https://example.com/items"
    assert captured["data"] == b"body"
    assert captured["timeout"] == 5
    assert response.status_code == 201
    assert response.json() == {"id": 3}
    assert "content-encoding" not in response.headers
    assert response.request is request


@pytest.mark.anyio
async def test_transport_runs_client_pipeline():
    session = DummySession()

    async with Client(
        transport=RequestsTransport(session),
        middlewares=[BearerAuthMiddleware("secret")],
    ) as client:
        response = await client.get("https://example.com")

    assert response.status_code == 200
    assert session.captured["headers"]["authorization"] == "Bearer secret"
    assert session.captured["data"] is None
    assert not session.closed


@pytest.mark.anyio
async def test_transport_closes_owned_session(monkeypatch):
    transport = RequestsTransport()
    closed = []
    monkeypatch.setattr(transport.session, "close", lambda: closed.append(True))

    await transport.aclose()

    assert closed == [True]
