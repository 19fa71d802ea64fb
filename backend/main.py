from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from sqlalchemy.orm import Session
from database import get_db
from init_db import init_database, seed_if_empty
from api import orders
from config import settings
from constants import API_PREFIX, SERVICE_NAME, SERVICE_VERSION, HTTPStatus, LogFormat
from repositories.order_repository import OrderRepository
from utils.error_handlers import handle_api_errors
from utils.logging_utils import set_logging_context, clear_logging_context
import logging
from logging.handlers import RotatingFileHandler
import sys
import uuid

# Create formatters and handlers
log_formatter = logging.Formatter(LogFormat.PATTERN)

# Console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

# Configure root logger
root_logger = logging.getLogger()
root_logger.setLevel(settings.log_level)
root_logger.addHandler(console_handler)

# File handler with rotation, only when a log directory is configured
if settings.log_dir is not None:
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        settings.log_dir / LogFormat.FILE_NAME,
        maxBytes=LogFormat.MAX_BYTES,
        backupCount=LogFormat.BACKUP_COUNT,
        encoding='utf-8'
    )
    file_handler.setFormatter(log_formatter)
    root_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)
logger.info(f"Logging initialized (level={settings.log_level}, dir={settings.log_dir})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown"""
    logger.info("Starting Orders API...")

    init_database()
    seeded = seed_if_empty(settings.seed_file)
    if seeded:
        logger.info(f"Loaded {seeded} order(s) from {settings.seed_file}")

    yield

    logger.info("Application shutdown complete")


app = FastAPI(
    title=SERVICE_NAME,
    description="Order headers and their lines: list, fetch, create, add lines, delete",
    version=SERVICE_VERSION,
    lifespan=lifespan
)

# Configure CORS - allow all origins for network accessibility
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_logging_context(request: Request, call_next):
    """Tag every log line written while handling a request with its request ID."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    set_logging_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
    finally:
        clear_logging_context()


def _describe_request_errors(errors) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ())[1:]) or "request"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "Invalid request: " + "; ".join(parts)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Report malformed parameters and bodies as 400, like every other invalid input."""
    detail = _describe_request_errors(exc.errors())
    logger.warning(f"{request.method} {request.url.path} - {detail}")
    return JSONResponse(status_code=HTTPStatus.BAD_REQUEST, content={"detail": detail})


# Include API routers
app.include_router(orders.router, prefix=API_PREFIX, tags=["orders"])


@app.get(f"{API_PREFIX}/health")
@handle_api_errors("Health check")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "orders": OrderRepository(db).count()
    }


@app.get("/")
def root():
    """Root endpoint - API only"""
    return {
        "message": SERVICE_NAME,
        "docs": "/docs",
        "health": f"{API_PREFIX}/health"
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
