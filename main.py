"""
Authentication API — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from api.routes import router as user_router
from auth.routes import router as auth_router
from auth.service import AuthService, build_auth_service
from config.settings import Settings, config

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "asyncio", "httpx", "sqlalchemy.engine"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings = config,
    auth_service: Optional[AuthService] = None,
) -> FastAPI:
    app = FastAPI(
        title="Authentication API",
        version="1.0.0",
        description="Register, login and bearer-token protected routes.",
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    app.state.auth_service = auth_service or build_auth_service(settings)

    # Routes
    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(user_router, prefix="/api/user")

    @app.get("/")
    async def index():
        return {
            "success": True,
            "message": "Authentication API is running",
            "endpoints": {
                "register": "POST /api/auth/register",
                "login": "POST /api/auth/login",
                "profile": "GET /api/user/profile (Protected)",
                "dashboard": "GET /api/user/dashboard (Protected)",
            },
        }

    @app.on_event("startup")
    async def on_startup():
        from database.user_store import SqlUserStore

        if isinstance(app.state.auth_service.store, SqlUserStore):
            from database.session import init_db

            logger.info("Synchronizing database schema…")
            await init_db()

        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
