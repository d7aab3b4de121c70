import httpx
import pytest

from http_toolkit.copier import (
    RequestNotReplayableError,
    buffer_response,
    copy_request,
    drain_response,
)


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


def test_copy_request_is_independent_and_identical():
    original = httpx.Request(
        "POST",
        "https://example.com/items?x=1",
        headers={"X-Trace": "abc"},
        content=b'{"name": "widget"}',
        extensions={"timeout": {"connect": 1.0, "read": 1.0, "write": 1.0, "pool": 1.0}},
    )

    clone = copy_request(original)

    assert clone is not original
    assert clone.method == "POST"
    assert clone.url == original.url
    assert clone.headers["X-Trace"] == "abc"
    assert clone.content == b'{"name": "widget"}'
    assert clone.extensions == original.extensions

    clone.headers["X-Trace"] = "changed"
    assert original.headers["X-Trace"] == "abc"


def test_copy_request_can_retarget_url():
    original = httpx.Request("GET", "https://old.example.com/path")

    clone = copy_request(original, url="https://new.example.com/path")

    assert clone.url == httpx.URL("https://new.example.com/path")
    assert clone.headers["Host"] == "new.example.com"


def test_copy_request_rejects_unread_stream():
    original = httpx.Request("POST", "https://example.com", content=_chunks(b"a", b"b"))

    with pytest.raises(RequestNotReplayableError) as info:
        copy_request(original)

    assert info.value.request is original


@pytest.mark.anyio
async def test_copy_request_after_buffering_stream():
    original = httpx.Request("POST", "https://example.com", content=_chunks(b"ab", b"cd"))
    await original.aread()

    clone = copy_request(original)

    assert clone.content == b"abcd"
    assert "Transfer-Encoding" not in clone.headers
    assert clone.headers["Content-Length"] == "4"


@pytest.mark.anyio
async def test_buffer_response_materializes_stream():
    streamed = httpx.Response(200, content=_chunks(b"hello ", b"world"))

    buffered = await buffer_response(streamed)

    assert buffered is not streamed
    assert buffered.status_code == 200
    assert buffered.content == b"hello world"
    assert buffered.text == "hello world"
    assert streamed.is_closed


@pytest.mark.anyio
async def test_buffer_response_rebuilds_read_response():
    request = httpx.Request("GET", "https://example.com")
    response = httpx.Response(201, json={"ok": True}, request=request)

    buffered = await buffer_response(response)

    assert buffered.status_code == 201
    assert buffered.json() == {"ok": True}
    assert buffered.request is request


@pytest.mark.anyio
async def test_drain_response_reads_and_closes():
    response = httpx.Response(503, content=_chunks(b"busy"))

    await drain_response(response)

    assert response.is_closed
    assert response.content == b"busy"
