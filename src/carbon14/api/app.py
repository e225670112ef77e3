"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI

from carbon14.api.routes import router


def create_app() -> FastAPI:
    app = FastAPI(title="Carbon14", description="Web page age estimation API")
    app.include_router(router, prefix="/api")
    return app


app = create_app()
