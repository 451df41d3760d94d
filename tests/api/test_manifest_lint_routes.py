"""Tests for manifest and lint API routers."""

from fastapi.testclient import TestClient

from skillshelf.api import create_app


def test_get_manifest(test_context, trust_wallet_repo):
    with TestClient(create_app(test_context)) as client:
        response = client.get("/manifest")

    assert response.status_code == 200
    assert response.json()["name"] == "trust-wallet-skills"
    assert len(response.json()["plugins"][0]["skills"]) == 3


def test_get_manifest_missing(test_context):
    with TestClient(create_app(test_context)) as client:
        assert client.get("/manifest").status_code == 404


def test_get_manifest_invalid(test_context, test_config):
    test_config.manifest_path.parent.mkdir(parents=True)
    test_config.manifest_path.write_text("{")

    with TestClient(create_app(test_context)) as client:
        assert client.get("/manifest").status_code == 422


def test_lint_clean(test_context, trust_wallet_repo):
    with TestClient(create_app(test_context)) as client:
        response = client.get("/lint")

    assert response.status_code == 200
    report = response.json()
    assert report["ok"] is True
    assert report["skills_checked"] == 3


def test_lint_reports_issues(test_context, trust_wallet_repo, write_skill):
    write_skill("extra", name="Extra Skill")

    with TestClient(create_app(test_context)) as client:
        report = client.get("/lint").json()

    rules = {issue["rule"] for issue in report["issues"]}
    assert report["ok"] is False
    assert {"name-format", "name-mismatch", "skill-unregistered"} <= rules


def test_lint_strict_query(test_context, trust_wallet_repo, write_skill):
    write_skill("unlisted")

    with TestClient(create_app(test_context)) as client:
        assert client.get("/lint").json()["ok"] is True
        assert client.get("/lint", params={"strict": True}).json()["ok"] is False


def test_lint_reports_undecodable_skill(test_context, trust_wallet_repo, write_skill):
    skill_file = write_skill("cafe")
    skill_file.write_bytes(b"---\nname: cafe\ndescription: caf\xe9\n---\nbody\n")

    with TestClient(create_app(test_context)) as client:
        response = client.get("/lint")

    assert response.status_code == 200
    issues = [(i["rule"], i["skill_id"]) for i in response.json()["issues"]]
    assert ("frontmatter-invalid", "cafe") in issues


def test_get_config(test_context):
    with TestClient(create_app(test_context)) as client:
        response = client.get("/config")

    assert response.status_code == 200
    assert response.json()["max_name_length"] == 64
    assert response.json()["strict"] is False


def test_update_config_persists_and_applies(test_context, test_config, write_skill):
    write_skill("unlisted")

    with TestClient(create_app(test_context)) as client:
        response = client.patch(
            "/config", json={"strict": True, "require_manifest": False}
        )
        assert response.status_code == 200
        assert response.json()["strict"] is True

        report = client.get("/lint").json()

    assert report["strict"] is True
    local = (test_config.workspace / "skillshelf.local.yaml").read_text()
    assert "strict: true" in local
    assert "require_manifest: false" in local


def test_update_config_rejects_invalid_without_writing(test_context, test_config):
    with TestClient(create_app(test_context)) as client:
        response = client.patch(
            "/config", json={"strict": True, "disabled_rules": ["bogus"]}
        )

    assert response.status_code == 422
    assert not (test_config.workspace / "skillshelf.local.yaml").exists()
    assert test_context.config.lint.strict is False
