"""Application factory and context for the creature simulation API.

All runtime state lives in an ``AppContext`` instead of module globals, so
each test can build an app around a fresh simulation.

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing
    app = create_app(context=AppContext(simulation=Simulation(SimulationConfig(seed=1))))
"""

import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.logging_config import configure_logging
from backend.models import HealthResponse
from creatures.config.server import DEFAULT_API_PORT
from creatures.exceptions import ConfigurationError, GeneticsError, UnknownCreatureError
from creatures.simulation import Simulation

API_PORT_ENV = "CREATURES_API_PORT"


@dataclass
class AppContext:
    """Runtime context holding all application state.

    The simulation is single-threaded; ``lock`` serialises every access to
    it (and to its innovation registry) from request handlers.
    """

    simulation: Simulation = field(default_factory=Simulation)
    lock: threading.Lock = field(default_factory=threading.Lock)

    server_version: str = "1.0.0"
    api_port: int = field(
        default_factory=lambda: int(os.getenv(API_PORT_ENV, str(DEFAULT_API_PORT)))
    )
    server_start_time: float = field(default_factory=time.time)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("creatures.backend"))

    def health(self) -> HealthResponse:
        with self.lock:
            population = self.simulation.population
            frame = self.simulation.frame
        return HealthResponse(
            status="ok",
            version=self.server_version,
            uptime_seconds=time.time() - self.server_start_time,
            population=population,
            frame=frame,
        )


def create_app(*, context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Pre-configured AppContext (for testing). If None, creates a new one.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging()

    if context is None:
        context = AppContext()
    context.logger = logger

    app = FastAPI(title="Creature Evolution API", version=context.server_version)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    _setup_exception_handlers(app)
    _setup_routers(app, context)
    return app


def _setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(UnknownCreatureError)
    async def unknown_creature(request: Request, exc: UnknownCreatureError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(ConfigurationError)
    async def bad_configuration(request: Request, exc: ConfigurationError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(GeneticsError)
    async def bad_genome(request: Request, exc: GeneticsError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers.genomes import setup_genomes_router
    from backend.routers.simulation import setup_simulation_router

    @app.get("/api/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return ctx.health()

    app.include_router(setup_genomes_router(ctx))
    app.include_router(setup_simulation_router(ctx))
    ctx.logger.info("API routers configured successfully")
