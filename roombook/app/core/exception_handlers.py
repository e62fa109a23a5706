"""Turn domain errors into JSON responses."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from roombook.app.core.errors import DomainError, ReservationValidationError


async def validation_error_handler(request: Request, exc: ReservationValidationError) -> JSONResponse:
    logger.info("{} {} rejected: {}", request.method, request.url.path, exc.errors)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "errors": exc.errors},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests (missing PIN header, non-object body) in the same shape."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error["loc"] else "request"
        errors.setdefault(field, []).append(error["msg"])
    logger.info("{} {} rejected: {}", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=ReservationValidationError.status_code,
        content={"detail": "Validation failed.", "errors": errors},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("{} {} failed: {}", request.method, request.url.path, exc.message)
    else:
        logger.info("{} {} -> {}: {}", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReservationValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(DomainError, domain_error_handler)
