"""Endpoints driving the shared simulation."""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter
from fastapi.responses import Response

from backend.models import ResetRequest, SpawnRequest, SpawnResponse, StepRequest, StepResponse
from backend.routers.genomes import genotype_from_document
from backend.state_payloads import SimulationSnapshot, creature_detail, event_to_dict
from creatures.config.simulation_config import SimulationConfig
from creatures.math_utils import Vector2
from creatures.simulation import Simulation

if TYPE_CHECKING:
    from backend.app_factory import AppContext

logger = logging.getLogger(__name__)


def setup_simulation_router(context: "AppContext") -> APIRouter:
    """Create the simulation router bound to ``context``."""
    router = APIRouter(prefix="/api/simulation", tags=["simulation"])

    @router.post("/reset")
    def reset(request: ResetRequest):
        with context.lock:
            if request.config is not None:
                config = SimulationConfig.from_dict(request.config)
                if request.seed is not None:
                    config.seed = request.seed
                context.simulation = Simulation(config)
            else:
                context.simulation.reset(request.seed)
            simulation = context.simulation
            if request.scatter_food:
                simulation.scatter_food()
            simulation.populate(request.population)
            stats = simulation.stats()
        logger.info("Simulation reset via API: %d creatures", stats["population"])
        return stats

    @router.post("/spawn", response_model=SpawnResponse)
    def spawn(request: SpawnRequest) -> SpawnResponse:
        genotype = genotype_from_document(request.genotype) if request.genotype else None
        position = None
        if request.x is not None and request.y is not None:
            position = Vector2(request.x, request.y)
        with context.lock:
            simulation = context.simulation
            ids = [
                simulation.spawn(genotype, position).id for _ in range(request.count)
            ]
            population = simulation.population
        return SpawnResponse(ids=ids, population=population)

    @router.post("/step", response_model=StepResponse)
    def step(request: StepRequest) -> StepResponse:
        with context.lock:
            simulation = context.simulation
            for _ in range(request.ticks):
                simulation.step(request.dt)
            events = [event_to_dict(event) for event in simulation.drain_events()]
            return StepResponse(
                frame=simulation.frame,
                time=simulation.time,
                population=simulation.population,
                events=events,
            )

    @router.get("/state")
    def state() -> Response:
        with context.lock:
            snapshot = SimulationSnapshot.from_simulation(context.simulation)
        return Response(content=snapshot.to_json(), media_type="application/json")

    @router.get("/creatures/{creature_id}")
    def creature(creature_id: int):
        # Unknown ids surface as 404 through the app's exception handler
        with context.lock:
            return creature_detail(context.simulation.get(creature_id))

    return router
