import time
import logging
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException

from .application.errors import CatalogError, AuthenticationError
from .infrastructure.db import engine
from .infrastructure.models import Base
from .infrastructure.metrics import (
    metrics_endpoint,
    http_requests_total,
    http_request_duration_seconds,
    auth_failures_total
)
from .interfaces.http.routers import courses as courses_router
from .interfaces.http.routers import users as users_router
from .config import settings

# Structured logging
log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.make_filtering_bound_logger(log_level),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = FastAPI(title="Course Catalog", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location"],
)

@app.middleware("http")
async def observe_request(request: Request, call_next):
    start_time = time.time()
    method = request.method
    path = request.url.path

    try:
        response = await call_next(request)
    except Exception:
        # the 500 body is rendered by unhandled_error_handler further out
        record_request(request, method, path, 500, start_time)
        raise

    if response.headers.get("content-type", "").startswith("application/json"):
        response.headers["content-type"] = "application/json; charset=utf-8"

    record_request(request, method, path, response.status_code, start_time)
    return response


def record_request(request: Request, method: str, path: str, status_code: int, start_time: float):
    # label by route template so /courses/1 and /courses/2 share a series
    route = request.scope.get("route")
    endpoint = getattr(route, "path", "unmatched")
    duration = time.time() - start_time
    http_requests_total.labels(method=method, endpoint=endpoint, status=status_code).inc()
    http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(duration)

    logger.info(
        "http_request",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration * 1000, 2)
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    headers = {"WWW-Authenticate": "Basic"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.body(), headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    # any framework-raised 401 gets the same generic reply as a failed login
    if exc.status_code == 401:
        auth_failures_total.inc()
        logger.warning("authentication_failed", reason=str(exc.detail))
        message = AuthenticationError.message
    else:
        message = exc.detail
    return JSONResponse(status_code=exc.status_code, content={"error": message},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()))
        errors.append(f'Invalid value for "{field}": {err.get("msg", "invalid")}')
    return JSONResponse(status_code=400, content={"errors": errors})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled_exception", method=request.method, path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": CatalogError.message})


@app.on_event("startup")
def on_startup():
    logger.info("Starting course catalog", version="0.1.0")
    Base.metadata.create_all(bind=engine)

    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Database connection established")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def metrics():
    """Prometheus metrics endpoint"""
    return metrics_endpoint()


app.include_router(users_router.router)
app.include_router(courses_router.router)
