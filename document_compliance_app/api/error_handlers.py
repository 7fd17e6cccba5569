"""Centralised error handlers for the FastAPI application.

Responses are small JSON objects with a single ``detail`` field. Document
compliance failures never reach these handlers; they are returned inside
the report with status 200.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from document_compliance_app.compliance.errors import ConfigurationError


log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register standardised error handlers on the application."""

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError):
        log.warning("validation error: %s", exc)
        return JSONResponse({"detail": "validation error"}, status_code=422)

    @app.exception_handler(ConfigurationError)
    async def _configuration_error(request: Request, exc: ConfigurationError):
        # operator-facing: the catalog or server setup is broken, not the document
        log.error("configuration error on %s: %s", request.url.path, exc)
        return JSONResponse(
            {"detail": "compliance service misconfigured", "error": str(exc)},
            status_code=503,
        )

    @app.exception_handler(Exception)
    async def _unhandled_error(request: Request, exc: Exception):
        log.exception("unhandled exception", exc_info=exc)
        return JSONResponse({"detail": "internal error"}, status_code=500)
