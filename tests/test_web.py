"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from lift_match.config import Config
from lift_match.web import create_app


@pytest.fixture
def client(tmp_path):
    """A client against a fresh database, seeded on startup."""
    app = create_app(Config(data_dir=tmp_path, auto_expand=False))
    with TestClient(app) as client:
        yield client


def queue_unmapped(client, name="Turkish Get-Up Complex Flow"):
    response = client.post("/exercises/match", json={"name": name, "category": "conditioning"})
    assert response.json()["matched"] is False
    pending = client.get("/admin/unmapped").json()["unmapped"]
    return next(p for p in pending if p["ai_name"] == name)


class TestMatchRoutes:
    """Tests for /exercises routes."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_match_localized_name(self, client):
        """Test a Swedish catalog name resolves to its English name."""
        response = client.post("/exercises/match", json={"name": "Bänkpress"})

        assert response.status_code == 200
        data = response.json()
        assert data["matched"] is True
        assert data["confidence"] == "exact"
        assert data["exercise_name"] == "Bench Press"

    def test_match_fuzzy_reports_distance(self, client):
        data = client.post("/exercises/match", json={"name": "Deadlifts"}).json()

        assert data["confidence"] == "fuzzy"
        assert data["distance"] == 1

    def test_match_many(self, client):
        response = client.post("/exercises/match", json={"names": ["Marklyft", "Turkish Get-Up Complex Flow"]})

        results = response.json()["results"]
        assert [r["input"] for r in results] == ["Marklyft", "Turkish Get-Up Complex Flow"]
        assert [r["matched"] for r in results] == [True, False]

    def test_available_without_equipment_is_bodyweight(self, client):
        data = client.get("/exercises/available", params={"user_id": "nobody"}).json()

        assert data["count"] > 0
        assert all(e["required_equipment"] == [] for e in data["exercises"])


class TestAdminRoutes:
    """Tests for /admin routes."""

    def test_list_unmapped(self, client):
        pending = queue_unmapped(client)

        assert pending["occurrence_count"] == 1
        assert pending["metadata"]["category"] == "conditioning"

    def test_resolve_with_alias(self, client):
        pending = queue_unmapped(client)
        target = client.post("/exercises/match", json={"name": "Kettlebell Swing"}).json()

        response = client.post(
            f"/admin/unmapped/{pending['id']}/alias", json={"exercise_id": target["exercise_id"]}
        )

        assert response.status_code == 200
        data = client.post("/exercises/match", json={"name": "Turkish Get-Up Complex Flow"}).json()
        assert data["confidence"] == "alias"
        assert data["exercise_id"] == target["exercise_id"]

    def test_resolve_with_new_exercise(self, client):
        pending = queue_unmapped(client)

        response = client.post(
            f"/admin/unmapped/{pending['id']}/exercise", json={"canonical_name": "Turkish Get-Up"}
        )

        assert response.status_code == 201
        exercise = response.json()["exercise"]
        assert exercise["category"] == "conditioning"
        assert client.get("/admin/unmapped").json()["count"] == 0

    def test_duplicate_exercise_is_bad_request(self, client):
        pending = queue_unmapped(client)

        response = client.post(
            f"/admin/unmapped/{pending['id']}/exercise", json={"canonical_name": "Deadlift"}
        )

        assert response.status_code == 400

    def test_reject(self, client):
        pending = queue_unmapped(client)

        assert client.delete(f"/admin/unmapped/{pending['id']}").status_code == 200
        assert client.get("/admin/unmapped").json()["count"] == 0

    def test_missing_entry_is_404(self, client):
        assert client.delete("/admin/unmapped/9999").status_code == 404
        response = client.post("/admin/unmapped/9999/alias", json={"exercise_id": "x"})
        assert response.status_code == 404

    def test_cleanup(self, client):
        queue_unmapped(client)

        assert client.post("/admin/unmapped/cleanup").json() == {"removed": 0}
