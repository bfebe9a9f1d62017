"""recordcheck — HTTP surface for record and tree validation.

Main FastAPI application with lifespan management, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recordcheck import __version__
from recordcheck.api.router import api_router
from recordcheck.config import get_settings
from recordcheck.exceptions import DecodeError, StructureError
from recordcheck.tree import TreeValidator
from recordcheck.validators import ConstraintValidator, default_user_rules

# Configure structured logging
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if get_settings().DEBUG else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        logging.getLevelName(get_settings().LOG_LEVEL.upper())
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shared, read-only validators once per process."""
    settings = get_settings()

    # ── Startup ──
    logger.info("app_starting", debug=settings.DEBUG)

    app.state.record_validator = ConstraintValidator(default_user_rules(settings))
    app.state.tree_validator = TreeValidator.from_settings(settings)

    logger.info(
        "app_started",
        rules=len(app.state.record_validator.rules),
        tree_policy=app.state.tree_validator.policy.value,
    )

    yield

    # ── Shutdown ──
    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="recordcheck",
    description=(
        "Decodes user records from JSON or XML and validates them against "
        "field rules, or checks document structure against a schema document."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


# ── Global Exception Handlers ──

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again.",
        },
    )


@app.exception_handler(DecodeError)
async def decode_error_handler(request: Request, exc: DecodeError):
    """Malformed documents are the caller's problem, not ours."""
    logger.info("decode_failed", path=request.url.path, format=exc.fmt, error=str(exc))
    return JSONResponse(
        status_code=422,
        content={"error": "decode_error", "message": str(exc)},
    )


@app.exception_handler(StructureError)
async def structure_error_handler(request: Request, exc: StructureError):
    """Unusable schema documents."""
    logger.info("schema_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=422,
        content={"error": "structure_error", "message": str(exc)},
    )


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


# ── Root endpoint ──

@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "recordcheck",
        "version": __version__,
        "description": "Record and document structure validation",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
