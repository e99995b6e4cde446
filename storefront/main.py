# main.py
import logging
import secrets
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pymongo.errors import PyMongoError
from starlette.middleware.sessions import SessionMiddleware

from .auth.strategies import build_authenticator
from .config.database import DatabaseManager, get_database_manager, lifespan
from .config.settings import Settings, get_settings
from .routers import admin, auth, carts, products, realtime
from .routers.realtime import ConnectionManager
from .schemas import ErrorResponse, HealthCheckResponse, RootResponse
from .utils.errors import StorefrontError
from .utils.http import wants_json

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.redirect_to_login and not wants_json(request):
        return RedirectResponse(request.app.state.settings.login_url, status_code=303)

    body = ErrorResponse(error=exc.error, message=exc.message, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application: state, middleware, error handlers and routers."""
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description=settings.app_description,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.db_manager = DatabaseManager(settings)
    app.state.authenticator = build_authenticator(settings)
    app.state.connections = ConnectionManager()

    session_secret = settings.session_secret
    if not session_secret:
        logger.warning("⚠️  SESSION_SECRET is not set, sessions will not survive a restart")
        session_secret = secrets.token_urlsafe(32)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=session_secret,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        https_only=settings.session_https_only,
        same_site="lax",
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)

    @app.get("/", response_model=RootResponse, tags=["Root"])
    async def root():
        """Landing route, answers even without a database"""
        return RootResponse(message=f"Welcome to {settings.app_name}", version=settings.app_version)

    @app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
    async def health_check(db_manager: DatabaseManager = Depends(get_database_manager)):
        """Report whether MongoDB answers a ping"""
        db_status = "disconnected"
        if db_manager.is_connected():
            try:
                await db_manager.get_database().command('ping')
                db_status = "connected"
            except PyMongoError as e:
                logger.warning(f"Health check ping failed: {e}")
                db_status = "error"

        return HealthCheckResponse(database=db_status, version=settings.app_version)

    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(realtime.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port, reload=settings.reload)
