import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.router import api_router
from core.config import Settings, settings as default_settings
from core.errors import RequestTimeoutError, register_exception_handlers
from core.logging import configure_logging
from database.session import create_db_engine, create_session_factory, init_db
from services.session_service import SessionManager
from services.session_store import build_session_store

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.engine = create_db_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.session_manager = SessionManager(
        store=build_session_store(
            settings.session_backend,
            settings.redis_url,
            prune_interval_seconds=settings.session_prune_interval_hours * 3600,
        ),
        secret=settings.session_secret,
        algorithm=settings.session_algorithm,
        ttl_seconds=settings.session_ttl_seconds,
    )

    @app.middleware("http")
    async def request_timeout(request: Request, call_next):
        # Only the response is cut short; work already running in the threadpool finishes on its own.
        try:
            return await asyncio.wait_for(call_next(request), timeout=settings.request_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning("Request timed out: %s %s", request.method, request.url.path)
            err = RequestTimeoutError()
            return JSONResponse(status_code=err.status_code, content=err.to_body())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    def _startup():
        init_db(app.state.engine)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app


app = create_app()
