"""Entry point for the file store service."""

import time

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from common.logging_config import setup_logging
from filestore.config import FILESTORE_HOST, FILESTORE_PORT
from filestore.exceptions import (
    FileStoreException,
    InvalidAuthorizationHeaderError,
    QuotaExceededError,
    SnapshotError,
    UnauthenticatedError
)
from filestore.routes.file_routes import router as file_router
from filestore.routes.file_routes import storage_router
from filestore.routes.project_routes import router as project_router
from filestore.schemas.common import ErrorResponse
from filestore.service_locator import (
    get_owner_directory,
    get_snapshot_store,
    set_owner_directory
)
from filestore.snapshot_task import PeriodicSnapshotter
from filestore.utils import generate_request_id

logger = setup_logging('filestore')

app = FastAPI(
    title="Tenant File Store",
    description="Multi-tenant chunked file store",
    version="1.0.0"
)

snapshotter = None


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = request.headers.get("X-Request-ID") or generate_request_id()
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Restore the owner directory from the last snapshot and start periodic snapshots.
    """
    global snapshotter

    logger.info("File store service starting up...")

    store = get_snapshot_store()
    directory = store.load()
    set_owner_directory(directory)
    logger.info(f"Owner directory ready ({directory.owner_count()} owners)")

    snapshotter = PeriodicSnapshotter(directory, store)
    await snapshotter.start()


@app.on_event("shutdown")
async def shutdown_event():
    """
    Stop background tasks and write a final snapshot.
    """
    logger.info("File store service shutting down...")

    if snapshotter:
        await snapshotter.stop()

    try:
        get_snapshot_store().save(get_owner_directory())
    except SnapshotError as e:
        logger.error(f"Final snapshot failed: {e}", exc_info=True)


def _error_response(exc: Exception, status_code: int, code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), code=code).model_dump()
    )


@app.exception_handler(UnauthenticatedError)
async def unauthenticated_handler(request: Request, exc: UnauthenticatedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Unauthenticated caller: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_401_UNAUTHORIZED, "UNAUTHENTICATED")


@app.exception_handler(InvalidAuthorizationHeaderError)
async def invalid_authorization_handler(request: Request, exc: InvalidAuthorizationHeaderError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Invalid authorization header: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_401_UNAUTHORIZED, "INVALID_AUTHORIZATION")


@app.exception_handler(QuotaExceededError)
async def quota_exceeded_handler(request: Request, exc: QuotaExceededError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Quota exceeded: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return _error_response(exc, status.HTTP_507_INSUFFICIENT_STORAGE, "QUOTA_EXCEEDED")


@app.exception_handler(SnapshotError)
async def snapshot_error_handler(request: Request, exc: SnapshotError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Snapshot error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "SNAPSHOT_ERROR")


@app.exception_handler(FileStoreException)
async def filestore_exception_handler(request: Request, exc: FileStoreException):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"File store exception: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return _error_response(exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR")


app.include_router(file_router)
app.include_router(storage_router)
app.include_router(project_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "Tenant File Store API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "filestore"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies that the snapshot location is writable.
    """
    directory = get_owner_directory()
    snapshot_ok = get_snapshot_store().is_writable()

    status_code = status.HTTP_200_OK if snapshot_ok else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": snapshot_ok,
            "snapshot": "ok" if snapshot_ok else "not writable",
            "owners": directory.owner_count(),
            "files": directory.file_count()
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "filestore.main:app",
        host=FILESTORE_HOST,
        port=FILESTORE_PORT
    )


if __name__ == "__main__":
    main()
