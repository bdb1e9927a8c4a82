"""Invoice Dashboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Authorization gate middleware sees every request before routing
    - Global error handlers map DashboardError → structured JSON responses
    - Database pool and view cache created in the lifespan, stored on app.state
    - Missing DATABASE_URL fails at import/startup with ConfigurationError

Design Decisions:
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
    - Three error handler layers: DashboardError (domain), RequestValidationError
      (Pydantic), Exception (catch-all) — never leaks internal details
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.auth_gate import register_auth_gate
from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, health, invoices
from app.config import get_settings
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.observability import setup_logging
from app.infrastructure.view_cache import ViewCache

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.view_cache = ViewCache()
    logger.info("Invoice dashboard API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Invoice dashboard API shutting down")


app = FastAPI(
    title="Invoice Dashboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()

# Later middleware wraps earlier: CORS runs outside the gate
register_auth_gate(app, settings)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(invoices.router)

register_error_handlers(app)
