"""Tests for the HTTP API."""

import math

import orjson
import pytest
from fastapi.testclient import TestClient

from backend.app_factory import AppContext, create_app
from creatures.config.simulation_config import SimulationConfig
from creatures.genetics.body_genome import reference_body_genome
from creatures.genetics.genome_codec import body_genome_to_dict
from creatures.simulation import Simulation


@pytest.fixture
def context():
    return AppContext(simulation=Simulation(SimulationConfig(seed=7)))


@pytest.fixture
def client(context):
    return TestClient(create_app(context=context))


def _random_genotype(client, node_count=None):
    response = client.post("/api/genomes/random", json={"node_count": node_count})
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["population"] == 0
        assert body["frame"] == 0


class TestGenomeEndpoints:
    def test_random_genotype(self, client):
        document = _random_genotype(client, node_count=5)
        assert len(document["body"]["genes"]) == 5
        outputs = [n for n in document["brain"]["nodes"] if n["type"] == "output"]
        assert len(outputs) == 4

    def test_random_genotype_rejects_bad_node_count(self, client):
        response = client.post("/api/genomes/random", json={"node_count": 50})
        assert response.status_code == 422

    def test_build_reference_body(self, client):
        response = client.post(
            "/api/bodies/build", json={"body": body_genome_to_dict(reference_body_genome())}
        )
        assert response.status_code == 200
        graph = response.json()
        assert graph["node_count"] == 5
        assert graph["segment_count"] == 4
        assert graph["issues"] == []
        assert graph["nodes"][2]["x"] == pytest.approx(-1.0)
        assert graph["nodes"][2]["y"] == pytest.approx(math.sqrt(3))

    def test_build_unsupported_schema(self, client):
        response = client.post("/api/bodies/build", json={"body": {"schema_version": 2}})
        assert response.status_code == 422

    def test_evaluate(self, client):
        brain = {
            "nodes": [{"id": 0, "type": "input"}, {"id": 12, "type": "output"}],
            "connections": [
                {"input_id": 0, "output_id": 12, "weight": 1.0, "innovation": 10000}
            ],
        }
        response = client.post("/api/brains/evaluate", json={"brain": brain, "inputs": {"0": 1.0}})
        assert response.status_code == 200
        result = response.json()
        expected = 1.0 / (1.0 + math.exp(-1.0))
        assert result["outputs"]["12"] == pytest.approx(expected)
        assert result["coefficients"] == [pytest.approx((expected - 0.5) * 2.0)]

    def test_crossover(self, client):
        parent_a = _random_genotype(client)
        parent_b = _random_genotype(client)
        response = client.post(
            "/api/genomes/crossover", json={"parent_a": parent_a, "parent_b": parent_b}
        )
        assert response.status_code == 200
        offspring = response.json()["offspring"]
        assert len(offspring) == 2
        for child in offspring:
            segments = len(child["body"]["genes"]) - 1
            outputs = [n for n in child["brain"]["nodes"] if n["type"] == "output"]
            assert len(outputs) == segments


class TestSimulationEndpoints:
    def test_reset_and_step(self, client, context):
        response = client.post("/api/simulation/reset", json={"seed": 3, "population": 4})
        assert response.status_code == 200
        assert response.json()["population"] == 4
        assert context.simulation.food_source is not None

        response = client.post("/api/simulation/step", json={"ticks": 5})
        assert response.status_code == 200
        body = response.json()
        assert body["frame"] == 5
        assert body["population"] == 4
        assert isinstance(body["events"], list)

    def test_reset_with_config(self, client, context):
        response = client.post(
            "/api/simulation/reset",
            json={"population": 2, "scatter_food": False, "config": {"dt": 0.05}},
        )
        assert response.status_code == 200
        assert context.simulation.config.dt == 0.05
        assert context.simulation.food_source is None

    def test_reset_with_invalid_config(self, client):
        response = client.post("/api/simulation/reset", json={"config": {"dt": -1}})
        assert response.status_code == 422

    def test_spawn(self, client):
        response = client.post("/api/simulation/spawn", json={"count": 2, "x": 1.0, "y": 2.0})
        assert response.status_code == 200
        assert response.json() == {"ids": [1, 2], "population": 2}

    def test_spawn_with_genotype(self, client):
        genotype = _random_genotype(client, node_count=3)
        response = client.post("/api/simulation/spawn", json={"genotype": genotype})
        creature_id = response.json()["ids"][0]
        detail = client.get(f"/api/simulation/creatures/{creature_id}").json()
        assert detail["segment_count"] == 2
        assert detail["body_genome"] == genotype["body"]

    def test_state(self, client):
        client.post("/api/simulation/spawn", json={"count": 3})
        response = client.get("/api/simulation/state")
        assert response.status_code == 200
        state = orjson.loads(response.content)
        assert len(state["creatures"]) == 3
        assert state["stats"]["population"] == 3

    def test_unknown_creature(self, client):
        assert client.get("/api/simulation/creatures/999").status_code == 404

    def test_step_validation(self, client):
        assert client.post("/api/simulation/step", json={"ticks": 0}).status_code == 422
