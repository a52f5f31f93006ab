import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from halal_gains.api.errors import register_error_handlers
from halal_gains.api.routes import api_router
from halal_gains.core.config import Settings, get_settings
from halal_gains.core.logging import configure_logging
from halal_gains.db.session import create_db_engine, create_session_factory
from halal_gains.realtime.feed import LiveFeed

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Build the API with its own engine, session factory and live feed."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Halal Gains",
        docs_url="/docs" if settings.environment == "development" else None,
        redoc_url="/redoc" if settings.environment == "development" else None,
    )

    app.state.settings = settings
    app.state.engine = engine or create_db_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.live_feed = LiveFeed()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router)
    logger.info("Application created (%s)", settings.environment)
    return app
