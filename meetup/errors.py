"""Error taxonomy and the JSON handlers that render it.

Every error leaves the API as ``{"title", "message", "errors", "status"}``
with the HTTP status equal to ``status``.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("meetup.errors")


class AppError(Exception):
    status = 500
    title = "Server Error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, str]] = None,
        title: Optional[str] = None,
    ):
        self.message = message or self.title
        self.title = title or self.title
        self.errors = errors if errors is not None else {"message": self.message}
        super().__init__(self.message)

    def toDict(self) -> dict:
        return {
            "title": self.title,
            "message": self.message,
            "errors": self.errors,
            "status": self.status,
        }


class ValidationError(AppError):
    status = 400
    title = "Bad Request"


class UnauthenticatedError(AppError):
    status = 401
    title = "Authentication required"


class AuthorizationError(AppError):
    status = 403
    title = "Forbidden"


class NotFoundError(AppError):
    status = 404
    title = "Resource couldn't be found"

    @classmethod
    def forResource(cls, resource: str) -> "NotFoundError":
        message = f"{resource} couldn't be found"
        return cls(message, title=message)


def _fieldName(loc) -> str:
    # ("path", "groupId") -> "groupId"; ("body",) -> "body"
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) if parts else str(loc[0]) if loc else "request"


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def appErrorHandler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status, content=exc.toDict())

    @app.exception_handler(RequestValidationError)
    async def requestValidationHandler(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            errors.setdefault(_fieldName(error.get("loc", ())), error.get("msg", "Invalid value"))
        return JSONResponse(status_code=400, content=ValidationError(errors=errors).toDict())

    @app.exception_handler(Exception)
    async def unhandledErrorHandler(request: Request, exc: Exception):
        logger.exception(
            "unhandled error",
            extra={"method": request.method, "path": request.url.path},
        )
        return JSONResponse(status_code=500, content=AppError().toDict())
