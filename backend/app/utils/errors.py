# errors.py - Excepciones del dominio y manejadores de excepción

import logging
from typing import Dict

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BackendError(Exception):
    """Cualquier fallo del servicio de datos: red, auth o restricción."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation


class AuthError(Exception):
    """Fallo del proveedor de identidad (credenciales, sesión)."""


class FormValidationError(ValueError):
    """Formulario de cliente con campos obligatorios vacíos o inválidos."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(", ".join(f"{k}: {v}" for k, v in errors.items()))
        self.errors = errors


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc: HTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(BackendError)
    async def backend_exception_handler(request, exc: BackendError):
        return JSONResponse(
            status_code=400,
            content={"detail": exc.message}
        )

    @app.exception_handler(FormValidationError)
    async def form_exception_handler(request, exc: FormValidationError):
        return JSONResponse(
            status_code=422,
            content={"detail": "Formulario inválido", "errors": exc.errors}
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"}
        )
