"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pantry_api.api.dependencies import format_error_messages
from pantry_api.api.foods import router as foods_router
from pantry_api.api.recipes import router as recipes_router
from pantry_api.api.search import router as search_router
from pantry_api.app_logging import configure_logging
from pantry_api.config import parse_cors_origins
from pantry_api.containers import AppContainer
from pantry_api.domain.errors import (
    FoodInUseError,
    NotFoundError,
    PantryError,
    SearchUnavailableError,
    ValidationError,
)

API_VERSION = "1.0"
API_PREFIXES = ("/api", "/api/v1")


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Pantry API", version=API_VERSION, lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(container.settings.allowed_cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Location"],
        )

    for prefix in API_PREFIXES:
        app.include_router(foods_router, prefix=prefix)
        app.include_router(recipes_router, prefix=prefix)
        app.include_router(search_router, prefix=prefix)

    @app.middleware("http")
    async def report_version_and_timing(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        response.headers["api-supported-versions"] = API_VERSION
        logger.debug(
            "%s %s completed in %.4f seconds.",
            request.method,
            request.url.path,
            time.perf_counter() - started,
        )
        return response

    @app.exception_handler(ValidationError)
    async def handle_validation_error(
        _request: Request, exc: ValidationError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.messages)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [_describe_request_error(error) for error in exc.errors()]
        return _error_response(status.HTTP_400_BAD_REQUEST, messages)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(_request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, [str(exc)])

    @app.exception_handler(FoodInUseError)
    async def handle_food_in_use(
        _request: Request, exc: FoodInUseError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, [str(exc)])

    @app.exception_handler(SearchUnavailableError)
    async def handle_search_unavailable(
        _request: Request, exc: SearchUnavailableError
    ) -> JSONResponse:
        return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, [str(exc)])

    @app.exception_handler(httpx.HTTPError)
    async def handle_upstream_error(
        request: Request, exc: httpx.HTTPError
    ) -> JSONResponse:
        logger.warning("Upstream request failed for %s: %s", request.url.path, exc)
        return _error_response(
            status.HTTP_502_BAD_GATEWAY, ["The food search provider request failed."]
        )

    @app.exception_handler(PantryError)
    async def handle_pantry_error(_request: Request, exc: PantryError) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, [str(exc)])

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error for %s %s", request.method, request.url.path, exc_info=exc
        )
        response = _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, ["An unexpected error occurred."]
        )
        response.headers["api-supported-versions"] = API_VERSION
        return response

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_response(status_code: int, messages: list[str]) -> JSONResponse:
    """Return the JSON error body shared by every failure."""
    return JSONResponse(
        status_code=status_code,
        content={"detail": format_error_messages(messages), "errors": messages},
    )


def _describe_request_error(error: dict[str, object]) -> str:
    """Render a request parsing error as ``location: message``."""
    location = ".".join(
        str(part) for part in error.get("loc", ()) if part not in {"body", "path"}
    )
    message = str(error.get("msg", "Invalid value"))
    return f"{location}: {message}" if location else message
