"""Error Handlers — global exception handlers for host FastAPI applications.

Invariants:
    - FeaturekitError (ApiError included) → its status and to_response() body
    - ValidationTypeError → 4xx when translation is enabled, otherwise 500
    - Exception (catch-all) → 500 with the exception message
    - Same mapping as handle_response (shared error_payload), including the
      empty response for an ApiError without a body

Design Decisions:
    - Three-layer handler: domain (FeaturekitError), validation, catch-all (Exception)
    - Settings captured at registration time: handlers stay pure functions of the exception
"""

from fastapi import FastAPI, Request, Response

from featurekit.api.base_api import DecimalJSONResponse, error_payload, log_failure
from featurekit.config import Settings, get_settings
from featurekit.core.errors import FeaturekitError, ValidationTypeError


def register_error_handlers(app: FastAPI, settings: Settings | None = None) -> None:
    """Register all global error handlers on the FastAPI app."""
    settings = settings or get_settings()

    async def handle(request: Request, exc: Exception) -> Response:
        status_code, payload = error_payload(exc, settings)
        log_failure(exc, status_code, request.url.path)
        if payload is None:
            return Response(status_code=status_code)
        return DecimalJSONResponse(payload, status_code=status_code)

    app.add_exception_handler(FeaturekitError, handle)
    app.add_exception_handler(ValidationTypeError, handle)
    app.add_exception_handler(Exception, handle)
