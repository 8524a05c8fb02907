"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from emblem.adapters.storage import InMemoryObjectStore, ObjectStore
from emblem.core.config import get_settings
from emblem.errors import ApiError
from emblem.repositories.memory import InMemoryStore
from emblem.routes import art_router
from emblem.schemas.error import ErrorResponse


def create_app(object_store: ObjectStore | None = None) -> FastAPI:
    app = FastAPI(title="Emblem API", version="1.0.0")
    app.state.store = InMemoryStore()
    app.state.object_store = object_store or InMemoryObjectStore(get_settings().public_base_url)

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details={"errors": [{"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()]},
        )
        return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))

    app.include_router(art_router, prefix="/api/v1")

    return app


app = create_app()
