"""Integration tests for the Scene Mapper HTTP API."""

import pytest
from fastapi.testclient import TestClient

from scene_mapper.api.main import create_app


@pytest.fixture
def client():
    with TestClient(create_app()) as client:
        yield client


class TestMeta:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "catalog_rules": 7}

    def test_startup_builds_scene_services(self, client):
        from scene_mapper.services.confidence import get_confidence_estimator
        from scene_mapper.services.interpreter import get_scene_interpreter

        assert get_scene_interpreter.cache_info().currsize == 1
        assert get_confidence_estimator.cache_info().currsize == 1

    def test_root(self, client):
        data = client.get("/").json()
        assert data["name"] == "Scene Mapper API"
        assert data["version"] == "0.1.0"


class TestInterpret:

    def test_scenario(self, client, scenario_text):
        response = client.post(
            "/api/v1/scenes/interpret",
            json={"text": scenario_text, "seed": 11},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["element_count"] == 5
        assert data["inconclusive"] is False
        assert [e["category"] for e in data["scene"]["elements"]] == [
            "body", "blood", "access-point", "furniture", "room",
        ]
        for connection in data["scene"]["connections"]:
            assert "from" in connection
            assert "to" in connection
        assert 0.7 <= data["confidence"]["value"] <= 1.0
        assert data["confidence"]["source"] == "estimated"

    def test_seed_is_reproducible(self, client, scenario_text):
        payload = {"text": scenario_text, "seed": 5}
        first = client.post("/api/v1/scenes/interpret", json=payload).json()
        second = client.post("/api/v1/scenes/interpret", json=payload).json()
        assert first == second

    def test_supplied_confidence(self, client):
        response = client.post(
            "/api/v1/scenes/interpret",
            json={"text": "a knife", "supplied_confidence": 0.55},
        )
        confidence = response.json()["confidence"]
        assert confidence == {"value": 0.55, "band": "low", "source": "supplied"}

    def test_inconclusive(self, client):
        data = client.post(
            "/api/v1/scenes/interpret", json={"text": "quiet afternoon"}
        ).json()
        assert data["inconclusive"] is True
        assert data["scene"]["title"] == "Inconclusive Analysis"
        assert data["confidence"]["value"] == 0.0

    def test_empty_text_rejected(self, client):
        response = client.post("/api/v1/scenes/interpret", json={"text": ""})
        assert response.status_code == 422

    def test_blank_text_rejected(self, client):
        response = client.post("/api/v1/scenes/interpret", json={"text": "   "})
        assert response.status_code == 422
        assert response.json()["detail"] == "Scene description is empty"

    def test_confidence_out_of_range(self, client):
        response = client.post(
            "/api/v1/scenes/interpret",
            json={"text": "a knife", "supplied_confidence": 2},
        )
        assert response.status_code == 422


class TestReport:

    def test_report_from_interpreted_scene(self, client, scenario_text):
        scene = client.post(
            "/api/v1/scenes/interpret", json={"text": scenario_text, "seed": 3}
        ).json()["scene"]

        response = client.post(
            "/api/v1/scenes/report", json={"scene": scene, "confidence": 0.9}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["report"]["title"] == "Crime Scene Analyzed"
        assert data["report"]["confidence"] == "Confidence: 90% (high)"
        assert len(data["report"]["elements"]) == 5
        assert "Forensic Narrative:" in data["text"]

    def test_report_from_fixture(self, client, sample_scene):
        response = client.post(
            "/api/v1/scenes/report", json={"scene": sample_scene.to_dict()}
        )
        assert response.status_code == 200
        assert response.json()["report"]["confidence"] == ""

    def test_invalid_scene(self, client):
        response = client.post(
            "/api/v1/scenes/report",
            json={"scene": {"elements": [{"name": "X", "category": "spaceship"}]}},
        )
        assert response.status_code == 422


class TestCatalog:

    def test_catalog_order(self, client):
        data = client.get("/api/v1/scenes/catalog").json()
        assert [rule["category"] for rule in data] == [
            "body", "weapon", "blood", "footprint", "access-point", "furniture", "room",
        ]
        assert data[0]["color"] == "#1e90ff"
        assert "victim" in data[0]["synonyms"]
