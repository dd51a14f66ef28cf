"""Response Adapter — awaits a computation and writes it as a JSON response.

Invariants:
    - Success → 200 with the result encoded by json_codec (Decimal-exact)
    - ApiError → its own status and body, sent verbatim
    - ValidationTypeError → configured 4xx only when translate_validation_errors is on
    - Anything else → 500 with the exception message as the JSON body
    - No body (None result or None error body) → empty response without a content type

Design Decisions:
    - error_payload is shared with error_handlers: one mapping for both entry points
    - Serialization happens inside the try: an unencodable result is a 500, not a crash
"""

import logging
from collections.abc import Awaitable
from typing import Any

from fastapi import Response, status
from fastapi.responses import JSONResponse

from featurekit.config import Settings, get_settings
from featurekit.core import json_codec
from featurekit.core.errors import FeaturekitError, ValidationTypeError

logger = logging.getLogger(__name__)


class DecimalJSONResponse(JSONResponse):
    """JSONResponse that writes Decimal values exactly."""

    def render(self, content: Any) -> bytes:
        return json_codec.dumps(content).encode("utf-8")


def error_payload(exc: Exception, settings: Settings) -> tuple[int, Any]:
    """Map an exception to (status, JSON body)."""
    if isinstance(exc, ValidationTypeError) and settings.translate_validation_errors:
        exc = exc.to_api_error(settings.validation_error_status)
    if isinstance(exc, FeaturekitError):
        return exc.http_status, exc.to_response()
    return status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc)


def log_failure(exc: Exception, status_code: int, path: str | None = None) -> None:
    extra = {
        "status": status_code,
        "path": path,
        "error_code": getattr(exc, "code", None),
    }
    if status_code >= 500:
        logger.error(f"Request failed: {exc}", extra=extra, exc_info=exc)
    else:
        logger.warning(f"Request rejected: {exc}", extra=extra)


async def handle_response(
    data: Awaitable[Any], settings: Settings | None = None,
) -> Response:
    """Await `data` and turn the result (or failure) into a JSON response."""
    settings = settings or get_settings()
    try:
        result = await data
        body = None if result is None else json_codec.dumps(result)
        status_code = status.HTTP_200_OK
    except Exception as exc:
        status_code, payload = error_payload(exc, settings)
        log_failure(exc, status_code)
        body = None if payload is None else json_codec.dumps(payload)
    if body is None:
        return Response(status_code=status_code)
    return Response(
        content=body, status_code=status_code, media_type="application/json",
    )
