import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pymongo.errors import PyMongoError
from starlette.concurrency import run_in_threadpool

from . import metrics
from .config import settings
from .db import DocumentStore
from .dependencies import Store
from .errors import RepositoryError
from .logging_context import current_request_id
from .logging_utils import setup_logging
from .middleware.request_context import RequestContextMiddleware
from .routes import dashboard, lessons, payments, reports, users

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

if settings.sentry_dsn:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=settings.sentry_traces_sample_rate,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = DocumentStore.from_settings(settings)
    await run_in_threadpool(store.ping)
    logger.info("Connected to MongoDB", extra={"database": settings.mongodb_db_name})
    await run_in_threadpool(store.ensure_indexes)
    app.state.store = store
    try:
        yield
    finally:
        store.close()


app = FastAPI(title="Inner Circle Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_origin_regex=settings.cors_allow_origin_regex,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "X-Requested-With",
        "X-Request-ID",
    ],
)


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(PyMongoError)
async def store_failure_handler(request: Request, exc: PyMongoError):
    metrics.store_failures_total.inc()
    logger.exception(
        "Document store call failed",
        exc_info=exc,
        extra={"error_type": type(exc).__name__},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "requestId": current_request_id()},
    )


app.include_router(users.router)
app.include_router(users.admin_router)
app.include_router(lessons.router)
app.include_router(lessons.admin_router)
app.include_router(reports.router)
app.include_router(dashboard.router)
app.include_router(payments.router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello World!"


@app.get("/healthz")
async def healthz():
    return {"ok": True, "message": "Backend responding"}


@app.get("/readyz")
def readyz(store: Store):
    try:
        store.ping()
    except PyMongoError as exc:
        raise HTTPException(status_code=503, detail="database unavailable") from exc
    return {"ok": True, "database": "ready"}


@app.get("/metrics")
def metrics_endpoint():
    payload = generate_latest()
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


def run() -> None:
    import uvicorn

    uvicorn.run("inner_circle.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    run()
