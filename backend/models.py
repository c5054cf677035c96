"""Request and response models for the HTTP API.

Genome documents travel as plain dicts in the ``creatures.genetics.genome_codec``
format; the codec sanitises them, so the models only describe the envelope.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    population: int
    frame: int


class GenotypeDocument(BaseModel):
    """A body genome plus a brain genome, both as codec documents."""

    body: Dict[str, Any]
    brain: Dict[str, Any]


class RandomGenomeRequest(BaseModel):
    node_count: Optional[int] = Field(default=None, ge=1, le=20)


class BuildBodyRequest(BaseModel):
    body: Dict[str, Any]


class NodeData(BaseModel):
    index: int
    x: float
    y: float
    size: float


class SegmentData(BaseModel):
    parent_index: int
    child_index: int
    length: float
    width: float
    base_angle: float
    max_angle: float
    osc_speed: float
    forward_ratio: float
    current_angle: float


class BodyGraphResponse(BaseModel):
    node_count: int
    segment_count: int
    nodes: List[NodeData]
    segments: List[SegmentData]
    issues: List[str] = Field(default_factory=list)


class EvaluateRequest(BaseModel):
    brain: Dict[str, Any]
    inputs: Dict[int, float] = Field(default_factory=dict)


class EvaluateResponse(BaseModel):
    outputs: Dict[int, float]
    coefficients: List[float]


class CrossoverRequest(BaseModel):
    parent_a: GenotypeDocument
    parent_b: GenotypeDocument


class CrossoverResponse(BaseModel):
    offspring: List[GenotypeDocument]


class ResetRequest(BaseModel):
    seed: Optional[int] = None
    population: Optional[int] = Field(default=None, ge=0)
    scatter_food: bool = True
    config: Optional[Dict[str, Any]] = None


class SpawnRequest(BaseModel):
    count: int = Field(default=1, ge=1, le=100)
    genotype: Optional[GenotypeDocument] = None
    x: Optional[float] = None
    y: Optional[float] = None


class SpawnResponse(BaseModel):
    ids: List[int]
    population: int


class StepRequest(BaseModel):
    ticks: int = Field(default=1, ge=1, le=10_000)
    dt: Optional[float] = Field(default=None, gt=0)


class StepResponse(BaseModel):
    frame: int
    time: float
    population: int
    events: List[Dict[str, Any]]
