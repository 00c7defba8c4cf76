import os
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from poker_league.core.config import Settings, get_settings
from poker_league.core.logging import configure_logging
from poker_league.routes import registration_routes, tournament_routes, user_routes

logger = structlog.get_logger(__name__)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Missing or malformed fields are a client error, reported as 400.
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_error", path=request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Poker League API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(tournament_routes.router, prefix="/api/tournaments", tags=["Tournaments"])
    app.include_router(registration_routes.router, prefix="/api", tags=["Registrations"])
    app.include_router(user_routes.router, prefix="/api", tags=["Users"])

    # Mounted last so the API routes take precedence over "/".
    if os.path.isdir(settings.STATIC_DIR):
        app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")

    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    logger.info("server_starting", host=settings.HOST, port=settings.PORT)
    uvicorn.run("poker_league.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
