"""Tests for skills API router."""

import json

import pytest
from fastapi.testclient import TestClient

from skillshelf.api import create_app
from skillshelf.api.schemas import SkillCreate


@pytest.fixture
def client(test_context, trust_wallet_repo):
    """Test client over a small skills repository."""
    app = create_app(test_context)
    with TestClient(app) as client:
        yield client


class TestListSkills:
    def test_list_skills_returns_empty_list_when_no_skills(self, test_context):
        test_context.config.skills_path.mkdir()
        with TestClient(create_app(test_context)) as client:
            response = client.get("/skills")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_skills_returns_skills(self, client):
        response = client.get("/skills")

        assert response.status_code == 200
        assert [s["id"] for s in response.json()] == [
            "deep-links",
            "trust-web3-provider",
            "wallet-core",
        ]


class TestGetSkill:
    def test_get_skill_returns_skill(self, client):
        response = client.get("/skills/wallet-core")

        assert response.status_code == 200
        skill = response.json()
        assert skill["name"] == "wallet-core"
        assert "Cross-platform signing library" in skill["content"]

    def test_get_skill_not_found(self, client):
        assert client.get("/skills/nonexistent").status_code == 404

    def test_get_invalid_skill(self, client, write_skill):
        write_skill("broken", raw="no frontmatter")

        assert client.get("/skills/broken").status_code == 422


class TestSearchSkills:
    def test_search_ranks_matches(self, client):
        response = client.get("/skills/search", params={"q": "sign transactions"})

        assert response.status_code == 200
        results = response.json()
        assert results[0]["id"] == "wallet-core"
        assert results[0]["score"] > 0

    def test_search_requires_query(self, client):
        assert client.get("/skills/search").status_code == 422


class TestCreateSkill:
    def test_create_skill(self, client):
        skill_data = SkillCreate(
            name="barz",
            description="Use when working with Barz smart wallets",
            content="# Barz\n\nDiamond proxy wallet.",
        )

        response = client.post("/skills/barz", json=skill_data.model_dump())

        assert response.status_code == 201
        assert response.json()["id"] == "barz"
        assert client.get("/skills/barz").status_code == 200

    def test_create_existing_conflicts(self, client):
        payload = {"name": "wallet-core", "description": "d", "content": "c"}

        assert client.post("/skills/wallet-core", json=payload).status_code == 409

    def test_create_invalid_leaves_nothing_behind(self, client, test_config):
        payload = {"name": "barz", "description": "", "content": "c"}

        assert client.post("/skills/barz", json=payload).status_code == 422
        assert not (test_config.skills_path / "barz").exists()

        payload["description"] = "Use when working with Barz smart wallets"
        assert client.post("/skills/barz", json=payload).status_code == 201


class TestUpdateSkill:
    def test_update_skill(self, client):
        payload = {"name": "wallet-core", "description": "Updated", "content": "New"}

        response = client.put("/skills/wallet-core", json=payload)

        assert response.status_code == 200
        assert response.json()["description"] == "Updated"

    def test_update_missing(self, client):
        payload = {"name": "x", "description": "d", "content": "c"}

        assert client.put("/skills/missing", json=payload).status_code == 404

    def test_invalid_update_keeps_skill(self, client):
        payload = {"name": "", "description": "Updated", "content": "New"}

        assert client.put("/skills/wallet-core", json=payload).status_code == 422

        response = client.get("/skills/wallet-core")
        assert response.status_code == 200
        assert response.json()["name"] == "wallet-core"
        assert "Cross-platform signing library" in response.json()["content"]


class TestDeleteSkill:
    def test_delete_skill_unregisters_it(self, client, test_config):
        response = client.delete("/skills/deep-links")

        assert response.status_code == 204
        assert client.get("/skills/deep-links").status_code == 404
        manifest = json.loads(test_config.manifest_path.read_text())
        assert "./skills/deep-links" not in manifest["plugins"][0]["skills"]

    def test_delete_missing(self, client):
        assert client.delete("/skills/missing").status_code == 404

    def test_delete_with_invalid_manifest_keeps_skill(self, client, test_config):
        test_config.manifest_path.write_text("{not json")

        response = client.delete("/skills/wallet-core")

        assert response.status_code == 422
        assert (test_config.skills_path / "wallet-core" / "SKILL.md").exists()

    def test_delete_without_manifest(self, client, test_config):
        test_config.manifest_path.unlink()

        assert client.delete("/skills/wallet-core").status_code == 204
        assert not (test_config.skills_path / "wallet-core").exists()
