"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.api.users import router as users_router
from users_api.app_logging import configure_logging
from users_api.containers import AppContainer
from users_api.services.users import UserStoreError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await run_in_threadpool(app.state.container.user_service.check_store)
        except UserStoreError:
            logger.exception("Could not connect to MongoDB")
            raise
        logger.info("Connected to MongoDB")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _format_validation_errors(exc)},
        )

    @app.get("/")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"message": "API funcionando"}

    return app


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Describe each validation failure as `field: message`."""
    messages = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(location) or "body"
        messages.append(f"{field}: {error.get('msg', 'invalid value')}")
    return "; ".join(messages) or "invalid request body"
