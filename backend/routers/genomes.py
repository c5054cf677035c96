"""Stateless genome endpoints: generate, build, evaluate, recombine.

These share the simulation's innovation registry and RNG so genomes produced
here stay aligned with the running population.
"""

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter

from backend.models import (
    BodyGraphResponse,
    BuildBodyRequest,
    CrossoverRequest,
    CrossoverResponse,
    EvaluateRequest,
    EvaluateResponse,
    GenotypeDocument,
    RandomGenomeRequest,
)
from backend.state_payloads import body_graph_to_dict
from creatures.body.builder import build_body
from creatures.brain.evaluator import evaluate
from creatures.brain.sensors import outputs_to_coefficients
from creatures.evolution.reproduction import Genotype, reproduce
from creatures.genetics.body_genome import random_body_genome
from creatures.genetics.genome_codec import (
    body_genome_from_dict,
    body_genome_to_dict,
    neural_genome_from_dict,
    neural_genome_to_dict,
)
from creatures.genetics.neural_genome import random_brain
from creatures.genetics.validation import validate_body_genome

if TYPE_CHECKING:
    from backend.app_factory import AppContext

logger = logging.getLogger(__name__)


def genotype_to_document(genotype: Genotype) -> GenotypeDocument:
    return GenotypeDocument(
        body=body_genome_to_dict(genotype.body),
        brain=neural_genome_to_dict(genotype.brain),
    )


def genotype_from_document(document: GenotypeDocument) -> Genotype:
    return Genotype(
        body_genome_from_dict(document.body),
        neural_genome_from_dict(document.brain),
    )


def setup_genomes_router(context: "AppContext") -> APIRouter:
    """Create the genome router bound to ``context``."""
    router = APIRouter(prefix="/api", tags=["genomes"])

    @router.post("/genomes/random", response_model=GenotypeDocument)
    def random_genotype(request: RandomGenomeRequest) -> GenotypeDocument:
        with context.lock:
            simulation = context.simulation
            body = random_body_genome(simulation.rng, request.node_count)
            brain = random_brain(body.segment_count, simulation.registry, simulation.rng)
        return genotype_to_document(Genotype(body, brain))

    @router.post("/bodies/build", response_model=BodyGraphResponse)
    def build(request: BuildBodyRequest) -> BodyGraphResponse:
        genome = body_genome_from_dict(request.body)
        graph = build_body(genome)
        return BodyGraphResponse(**body_graph_to_dict(graph), issues=validate_body_genome(genome))

    @router.post("/brains/evaluate", response_model=EvaluateResponse)
    def evaluate_brain(request: EvaluateRequest) -> EvaluateResponse:
        brain = neural_genome_from_dict(request.brain)
        outputs = evaluate(brain, request.inputs)
        return EvaluateResponse(
            outputs=outputs,
            coefficients=outputs_to_coefficients(brain, outputs),
        )

    @router.post("/genomes/crossover", response_model=CrossoverResponse)
    def crossover(request: CrossoverRequest) -> CrossoverResponse:
        parent_a = genotype_from_document(request.parent_a)
        parent_b = genotype_from_document(request.parent_b)
        with context.lock:
            simulation = context.simulation
            offspring = reproduce(
                parent_a,
                parent_b,
                simulation.registry,
                simulation.rng,
                simulation.config.body_mutation,
                simulation.config.neural_mutation,
            )
        logger.debug("Crossover request produced %d offspring", len(offspring))
        return CrossoverResponse(offspring=[genotype_to_document(child) for child in offspring])

    return router
