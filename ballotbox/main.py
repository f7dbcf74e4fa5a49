"""FastAPI application entrypoint."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from ballotbox.config import DEFAULT_PORT, settings
from ballotbox.dependencies import close_record_store, connect_record_store
from ballotbox.routers import pages, votes
from ballotbox.utils.errors import AppError, InvalidInputError
from ballotbox.utils.pages import STATIC_DIR, render_error, render_status

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open and release the record store with the app lifecycle."""
    if connect_record_store(app.state) is not None:
        logger.info("Datastore client ready for %s", settings.supabase_url)
    yield
    close_record_store(app.state)
    logger.info("Datastore client closed")


app = FastAPI(
    title=settings.app_name,
    description="Members' election ballot box",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def request_timing_middleware(request: Request, call_next):
    """Add per-request processing time and optionally log slow requests."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    response.headers["X-Process-Time-Ms"] = f"{elapsed_ms:.1f}"

    threshold_ms = settings.slow_request_log_threshold_ms
    if threshold_ms > 0 and elapsed_ms >= threshold_ms:
        logger.warning(
            "Slow request %s %s %.1fms",
            request.method,
            request.url.path,
            elapsed_ms,
        )

    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> Response:
    """Render domain exceptions as the error page."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc, exc.detail)
    return render_error(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> Response:
    """Normalize FastAPI validation failures into a 400 error page."""
    detail = exc.errors()
    message = detail[0].get("msg", "Invalid request") if detail else "Invalid request"
    return render_error(request, InvalidInputError(message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Render framework HTTP errors with the same error page."""
    return render_status(request, exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> Response:
    """Catch unexpected errors without leaking internals."""
    logger.exception("Unhandled exception", exc_info=exc)
    return render_status(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Something went wrong while handling your request.",
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint for deploys and uptime checks."""
    return {"status": "ok", "version": settings.app_version}


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
app.include_router(pages.router, tags=["pages"])
app.include_router(votes.router, prefix="/vote", tags=["votes"])


@app.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD"],
    include_in_schema=False,
)
async def redirect_home(path: str) -> RedirectResponse:
    """Send any other path back to the election listing."""
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


def run() -> None:
    """Serve the app with uvicorn on ``PORT`` (default 8080)."""
    import uvicorn

    port = settings.port
    if port is None:
        port = DEFAULT_PORT
        logger.info("Defaulting to port %s", port)

    logger.info("Listening on port %s", port)
    uvicorn.run(app, host=settings.host, port=port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
