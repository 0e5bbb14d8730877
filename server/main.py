import logging
from typing import Optional
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from line_messaging import LineClient
from server.config import ServerConfig
from server.database import Base, build_engine, build_session_factory
from server.routes import router
from server.routes.prometheus import metrics_middleware

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE",
    "Access-Control-Allow-Headers": (
        "Accept, Content-Type, Content-Length, Accept-Encoding, X-CSRF-Token, Authorization"
    ),
}

# =========================================================
# MIDDLEWARE & ERROR HANDLERS
# =========================================================
async def cors_middleware(request: Request, call_next):
    # Preflight and any other OPTIONS call never reaches the routes
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response

async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse({"detail": "Invalid request"}, status_code=400)

async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error while handling {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse({"detail": "Internal server error"}, status_code=500)

# =========================================================
# FASTAPI APP
# =========================================================
def create_app(
    config: Optional[ServerConfig] = None,
    engine: Optional[Engine] = None,
    messenger: Optional[LineClient] = None,
) -> FastAPI:
    """
    Wire the API around explicitly constructed collaborators.

    Without an engine, DATABASE_URL must be configured or ConfigError is
    raised before the app is built.
    """
    config = config or ServerConfig()
    if engine is None:
        engine = build_engine(config.require_database_url(), pool_pre_ping=True)

    app = FastAPI(title="Tsundoku Shaming API")
    app.state.config = config
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.messenger = messenger or LineClient()

    # Registered last so it wraps everything, including the metrics middleware
    app.middleware("http")(metrics_middleware)
    app.middleware("http")(cors_middleware)

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)

    app.include_router(router)

    # =========================================================
    # AUTO-CREATE TABLES ON STARTUP
    # =========================================================
    @app.on_event("startup")
    def init_database():
        logger.info("🔄 Creating database tables if not exist...")
        Base.metadata.create_all(bind=engine)

    return app
