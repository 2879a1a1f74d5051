from contextlib import asynccontextmanager
from datetime import datetime, timezone
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware
import structlog
import traceback
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from . import models  # noqa: F401  registers the tables on Base.metadata
from .config import Settings
from .db import Database
from .errors import BlogError, LoginRequired
from .observability import setup_logging
from .ratelimit import configure_limiter
from .views import Views
from . import api, pages

logger = structlog.get_logger(__name__)

def create_app(settings: Settings) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    db = Database(settings)
    db.create_all()
    views = Views(settings.TEMPLATES_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Blog started", database=db.engine.url.render_as_string(hide_password=True))
        yield
        db.dispose()
        logger.info("Blog shutting down")

    app = FastAPI(title="Blog", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = db
    app.state.views = views

    app.state.limiter = configure_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie=settings.SESSION_COOKIE,
        max_age=settings.SESSION_MAX_AGE,
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"]
    )

    register_error_handlers(app)

    @app.get("/health")
    def health_check():
        """Health check endpoint for monitoring"""
        try:
            db.ping()
        except Exception as e:
            logger.error("Health check failed", error=str(e))
            raise HTTPException(status_code=503, detail="Service unhealthy")
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    app.include_router(pages.router)
    app.include_router(api.router)
    return app

def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse(exc.login_url, status_code=302)

    @app.exception_handler(BlogError)
    async def blog_error_handler(request: Request, exc: BlogError):
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            status=exc.status_code,
            error=exc.message,
            path=request.url.path,
            method=request.method,
        )
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Bad request", path=request.url.path, errors=exc.errors())
        return PlainTextResponse("Bad Request", status_code=400)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            traceback="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        )
        return PlainTextResponse("Internal Server Error", status_code=500)

def app_factory() -> FastAPI:
    """Zero-argument factory for uvicorn --factory; settings come from the environment."""
    return create_app(Settings())

def run() -> None:
    import uvicorn
    settings = Settings()
    uvicorn.run(
        "blog.main:app_factory",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
    )
