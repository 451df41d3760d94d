"""Shared test fixtures for skillshelf test suite."""

import json
from pathlib import Path
from typing import Callable

import pytest

from skillshelf.core.context import SharedContext
from skillshelf.core.manifest import ManifestStore
from skillshelf.core.skill_loader import SkillLoader
from skillshelf.utils.config import Config

SkillWriter = Callable[..., Path]


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    return Config(workspace=tmp_path)


@pytest.fixture
def test_context(test_config: Config) -> SharedContext:
    """SharedContext with test config."""
    return SharedContext(config=test_config)


@pytest.fixture
def skill_loader(test_config: Config) -> SkillLoader:
    test_config.skills_path.mkdir(parents=True, exist_ok=True)
    return SkillLoader.from_config(test_config)


@pytest.fixture
def manifest_store(test_config: Config) -> ManifestStore:
    return ManifestStore.from_config(test_config)


@pytest.fixture
def write_skill(test_config: Config) -> SkillWriter:
    """Write skills/<skill_id>/SKILL.md, raw or from name/description."""

    def _write(
        skill_id: str,
        name: str | None = None,
        description: str | None = "A test skill",
        body: str = "# Heading\n\nBody text.",
        raw: str | None = None,
    ) -> Path:
        skill_dir = test_config.skills_path / skill_id
        skill_dir.mkdir(parents=True, exist_ok=True)
        if raw is None:
            lines = ["---"]
            lines.append(f"name: {name if name is not None else skill_id}")
            if description is not None:
                lines.append(f"description: {description}")
            lines.append("---")
            raw = "\n".join(lines) + "\n\n" + body + "\n"
        skill_file = skill_dir / "SKILL.md"
        skill_file.write_text(raw)
        return skill_file

    return _write


@pytest.fixture
def write_manifest(test_config: Config) -> Callable[..., Path]:
    """Write .claude-plugin/marketplace.json with one local plugin."""

    def _write(skills: list[str] | None = None, data: dict | None = None) -> Path:
        if data is None:
            data = {
                "name": "trust-wallet-skills",
                "owner": {"name": "Trust Wallet"},
                "plugins": [
                    {
                        "name": "trust-wallet",
                        "description": "Trust Wallet developer skills",
                        "source": "./",
                        "strict": False,
                        "skills": skills or [],
                    }
                ],
            }
        path = test_config.manifest_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def trust_wallet_repo(write_skill: SkillWriter, write_manifest) -> None:
    """A small, valid skills repository."""
    write_skill(
        "trust-web3-provider",
        description="Use when integrating the Trust Wallet Web3 provider into a dApp",
        body="# Trust Web3 Provider\n\nInstall `@trustwallet/web3-provider-core`.",
    )
    write_skill(
        "wallet-core",
        description="Use when deriving addresses or signing transactions with wallet-core",
        body="# Wallet Core\n\nCross-platform signing library.",
    )
    write_skill(
        "deep-links",
        description="Use when building Trust Wallet deep links for payments and dApp browsing",
        body="# Deep Links\n\n`https://link.trustwallet.com/open_url?url=...`",
    )
    write_manifest(
        [
            "./skills/trust-web3-provider",
            "./skills/wallet-core",
            "./skills/deep-links",
        ]
    )
