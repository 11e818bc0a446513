"""FastAPI application for gym-registry."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Settings, settings as default_settings
from ..container import Services, build_services
from ..db.engine import init_db
from ..errors import RegistryError
from ..ledger.client import LedgerError
from ..logging_config import setup_logging
from .routers import gyms, payments

logger = logging.getLogger(__name__)


def create_app(services: Services | None = None, config: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    config = config or default_settings
    setup_logging(config.log_level, config.log_file)
    services = services or build_services(config=config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: make sure the schema exists and drop orders whose
        # timers were lost while the service was down
        await init_db(services.db_path)
        await services.reservations.sweep_expired()
        yield
        # Shutdown: pending discard timers die with the loop
        services.reservations.close()

    app = FastAPI(
        title="gym-registry",
        description="Gym registry and membership service with ledger payments",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = services

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError):
        logger.error("Ledger failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"LedgerUnavailable": str(exc)}, status_code=502)

    app.include_router(gyms.router)
    app.include_router(payments.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
