from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.router import api_router
from app.core.config import settings
from app.core.exceptions import ConferenceError
from app.core.logging_config import setup_logging
from app.core.middleware import RequestLoggingMiddleware
from app.schemas.common import error_payload

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.add_middleware(RequestLoggingMiddleware)


@app.exception_handler(ConferenceError)
async def conference_error_handler(request: Request, exc: ConferenceError):
    if exc.status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_payload(**exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=error_payload("VALIDATION_ERROR", "Request validation failed", jsonable_encoder(fields)),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_payload(
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "An unexpected error occurred",
        ),
    )


@app.get("/health", tags=["health"])
@app.get(f"{settings.api_prefix}/health", tags=["health"])
def health_check():
    return {"status": "healthy", "app_name": settings.app_name, "environment": settings.environment}


app.include_router(api_router, prefix=settings.api_prefix)
