import logging

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .exceptions import RentLedgerError

logger = logging.getLogger(__name__)


class ValidationErrorHandler:
    async def __call__(self, request: Request, exc: RequestValidationError):

        errors = []

        for err in exc.errors():
            errors.append({
                "loc": err.get("loc"),
                "msg": str(err.get("msg")),
                "type": err.get("type"),
            })

        field = None
        if errors:
            loc = [str(part) for part in errors[0]["loc"] or () if part != "body"]
            field = ".".join(loc) or None

        return JSONResponse(
            status_code=422,
            content={
                "success": False,
                "error": "ValidationError",
                "field": field,
                "detail": errors[0]["msg"] if errors else "Validation failed",
                "details": errors,
            },
        )


class DomainErrorHandler:
    async def __call__(self, request: Request, exc: RentLedgerError):
        if exc.status_code >= 500:
            logger.warning(f"[{exc.error}] {request.url.path}: {exc.detail}")

        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
