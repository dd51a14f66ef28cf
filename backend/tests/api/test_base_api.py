"""Response Adapter — tests for handle_response status/body mapping.

Tests cover:
    - Success → 200 JSON with Decimal precision preserved
    - None result or ApiError without a body → empty response, no content type
    - ApiError → its status and body verbatim
    - Unwrapped ValidationTypeError → 500 by default, 4xx when translation is on
    - Any other exception → 500 with its message; failures are logged
"""

import logging
from decimal import Decimal

from featurekit.api.base_api import DecimalJSONResponse, handle_response
from featurekit.config import Settings
from featurekit.core import json_codec
from featurekit.core.errors import ApiError
from featurekit.core.validate import validate_integer_string


async def _value(value):
    return value


async def _raise(exc):
    raise exc


async def _validate_page(raw):
    return validate_integer_string(raw, ["query", "page"])


async def test_success_sends_json():
    response = await handle_response(_value({"total": Decimal("12345678901234567890.5")}))
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    assert response.body == b'{"total":12345678901234567890.5}'


async def test_none_result_sends_empty_response():
    response = await handle_response(_value(None))
    assert response.status_code == 200
    assert response.body == b""
    assert "content-type" not in response.headers


async def test_api_error_sends_status_and_body():
    response = await handle_response(_raise(ApiError(404, {"error": "not found"})))
    assert response.status_code == 404
    assert json_codec.loads(response.body) == {"error": "not found"}
    assert response.headers["content-type"] == "application/json"


async def test_unwrapped_validation_error_is_500():
    response = await handle_response(_validate_page("abc"), Settings())
    assert response.status_code == 500
    assert json_codec.loads(response.body) == (
        "Expected 'query.page' to be a number string, but found: abc (str)"
    )


async def test_translated_validation_error_uses_configured_status():
    settings = Settings(translate_validation_errors=True, validation_error_status=422)
    response = await handle_response(_validate_page("abc"), settings)
    assert response.status_code == 422
    body = json_codec.loads(response.body)
    assert body["path"] == "query.page"
    assert "to be a number string" in body["error"]


async def test_valid_input_passes_through():
    response = await handle_response(_validate_page("7"), Settings())
    assert response.status_code == 200
    assert response.body == b"7"


async def test_unexpected_error_is_500_with_message(caplog):
    with caplog.at_level(logging.ERROR, logger="featurekit.api.base_api"):
        response = await handle_response(_raise(RuntimeError("db down")), Settings())
    assert response.status_code == 500
    assert json_codec.loads(response.body) == "db down"
    assert any(getattr(r, "status", None) == 500 for r in caplog.records)


async def test_unserializable_result_is_500():
    response = await handle_response(_value({"obj": object()}), Settings())
    assert response.status_code == 500


def test_decimal_json_response_renders_exactly():
    response = DecimalJSONResponse({"n": Decimal("1.10")})
    assert response.body == b'{"n":1.10}'


async def test_api_error_without_body_sends_empty_response():
    response = await handle_response(_raise(ApiError(204, None)), Settings())
    assert response.status_code == 204
    assert response.body == b""
    assert "content-type" not in response.headers
