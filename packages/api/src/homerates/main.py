# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .routes import health, public
from .schemas.error import ErrorResponse
from .services.errors import DomainError, InsufficientInputsError, PaymentParseError
from .services.knowledge import get_knowledge

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application startup/shutdown lifecycle."""
    try:
        get_knowledge(settings.KNOWLEDGE_PATH)
    except FileNotFoundError:
        logger.warning(
            "Knowledge dataset not found at %s; ZIP lookups will fail until it exists",
            settings.KNOWLEDGE_PATH,
        )
    yield


app = FastAPI(
    title="HomeRates API",
    description="Mortgage payment, PITI and investor scenario calculators",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def _request_id(request: Request) -> str:
    return request.headers.get("x-request-id", str(uuid.uuid4()))


def _build_error(
    status_code: int,
    detail: str,
    request_id: str,
    extensions: dict[str, Any] | None = None,
) -> ErrorResponse:
    return ErrorResponse(
        type="about:blank",
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        request_id=request_id,
        extensions=extensions or {},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Convert HTTPException to RFC 7807 Problem Details."""
    body = _build_error(exc.status_code, str(exc.detail), _request_id(request))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert Pydantic validation errors to RFC 7807 Problem Details."""
    body = _build_error(422, str(exc.errors()), _request_id(request))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(InsufficientInputsError)
async def insufficient_inputs_handler(request: Request, exc: InsufficientInputsError):
    """Missing calculation inputs -- 400 listing what is needed."""
    body = _build_error(400, str(exc), _request_id(request), {"missing": exc.missing})
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(PaymentParseError)
async def payment_parse_handler(request: Request, exc: PaymentParseError):
    """No parse engine passed -- 400 with the fallback chain."""
    request_id = _request_id(request)
    logger.info("Payment question rejected (request_id=%s)", request_id)
    chain = [attempt.model_dump() for attempt in exc.chain]
    body = _build_error(400, str(exc), request_id, {"fallback_chain": chain})
    return JSONResponse(status_code=400, content=body.model_dump())


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Inputs outside the formulas' domain -- 422."""
    body = _build_error(422, str(exc), _request_id(request))
    return JSONResponse(status_code=422, content=body.model_dump())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all for unhandled exceptions -- log and return 500."""
    request_id = _request_id(request)
    logger.exception("Unhandled exception (request_id=%s)", request_id)
    body = _build_error(500, "An unexpected error occurred.", request_id)
    return JSONResponse(status_code=500, content=body.model_dump())


# Include routers
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(public.router, prefix="/api/public", tags=["public"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint"""
    return {"message": "Welcome to the HomeRates API"}
