import httpx
import pytest

from http_toolkit import validators
from http_toolkit.validators import ResponseValidationError


def _response(status: int = 200, **kwargs) -> httpx.Response:
    return httpx.Response(status, request=httpx.Request("GET", "https://example.com"), **kwargs)


@pytest.mark.parametrize(
    ("status", "predicate"),
    [
        (204, validators.is_success),
        (301, validators.is_redirect),
        (404, validators.is_client_error),
        (502, validators.is_server_error),
    ],
)
def test_status_predicates(status, predicate):
    assert predicate(_response(status))
    assert not predicate(_response(100))


def test_success_rejects_error_status():
    validators.success(_response(200))

    with pytest.raises(ResponseValidationError, match="500"):
        validators.success(_response(500))


def test_expect_status():
    validators.created(_response(201))
    validators.success_or_no_content(_response(204))

    with pytest.raises(ResponseValidationError, match="Expected status 200 or 204, got 201"):
        validators.success_or_no_content(_response(201))


def test_json_content_type():
    validators.json_content_type(_response(json={"a": 1}))

    with pytest.raises(ResponseValidationError, match="Missing"):
        validators.json_content_type(_response())
    with pytest.raises(ResponseValidationError, match="text/plain"):
        validators.json_content_type(_response(text="hi"))


def test_not_empty():
    validators.not_empty(_response(text="data"))

    with pytest.raises(ResponseValidationError) as info:
        validators.not_empty(_response(text="  "))
    assert info.value.response.status_code == 200
