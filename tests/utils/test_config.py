"""Tests for config loading, validation and path resolution."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from skillshelf.utils.config import LINT_RULES, Config, LintConfig


class TestPathResolution:
    def test_resolves_default_paths_against_workspace(self):
        config = Config(workspace=Path("/workspace"))

        assert config.skills_path == Path("/workspace/skills")
        assert config.manifest_path == Path("/workspace/.claude-plugin/marketplace.json")
        assert config.logging_path == Path("/workspace/.logs")
        assert config.skills_dir_name == "skills"

    def test_resolves_custom_relative_paths(self):
        config = Config(workspace=Path("/workspace"), skills_path=Path("docs/skills"))

        assert config.skills_path == Path("/workspace/docs/skills")
        assert config.skills_dir_name == "docs/skills"

    def test_rejects_absolute_path_outside_workspace(self):
        with pytest.raises(ValidationError) as exc:
            Config(workspace=Path("/workspace"), skills_path=Path("/etc/skills"))
        assert "skills_path must be relative" in str(exc.value)


class TestLintConfig:
    def test_defaults(self):
        lint = LintConfig()

        assert lint.disabled_rules == []
        assert lint.max_name_length == 64
        assert lint.max_description_length == 1024
        assert lint.require_manifest is True
        assert lint.strict is False

    def test_rejects_unknown_rule(self):
        with pytest.raises(ValidationError, match="Unknown lint rule"):
            LintConfig(disabled_rules=["name-format", "no-such-rule"])

    def test_rule_names_come_from_rule_table(self):
        from skillshelf.core.lint import RULES

        assert LINT_RULES == set(RULES)
        assert "frontmatter-invalid" in LINT_RULES


class TestLoad:
    def test_load_without_files_uses_defaults(self, tmp_path: Path):
        config = Config.load(tmp_path)

        assert config.workspace == tmp_path.resolve()
        assert config.skills_path == tmp_path.resolve() / "skills"

    def test_local_overrides_shared(self, tmp_path: Path):
        (tmp_path / "skillshelf.yaml").write_text(
            yaml.dump(
                {
                    "skills_path": "content/skills",
                    "lint": {"strict": True, "max_name_length": 40},
                }
            )
        )
        (tmp_path / "skillshelf.local.yaml").write_text(
            yaml.dump({"lint": {"strict": False}, "api": {"port": 9000}})
        )

        config = Config.load(tmp_path)

        assert config.skills_path == tmp_path.resolve() / "content/skills"
        assert config.lint.strict is False
        assert config.lint.max_name_length == 40
        assert config.api.port == 9000

    def test_missing_workspace_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            Config.load(tmp_path / "missing")

    def test_invalid_values_raise(self, tmp_path: Path):
        (tmp_path / "skillshelf.yaml").write_text(yaml.dump({"api": {"port": 0}}))

        with pytest.raises(ValidationError):
            Config.load(tmp_path)


class TestSetLocal:
    def test_persists_nested_value(self, tmp_path: Path):
        config = Config.load(tmp_path)

        config.set_local("lint.strict", True)

        assert config.lint.strict is True
        data = yaml.safe_load((tmp_path / "skillshelf.local.yaml").read_text())
        assert data == {"lint": {"strict": True}}
        assert Config.load(tmp_path).lint.strict is True

    def test_invalid_value_leaves_file_untouched(self, tmp_path: Path):
        config = Config.load(tmp_path)

        with pytest.raises(ValidationError):
            config.set_local("lint.disabled_rules", ["bogus"])

        assert not (tmp_path / "skillshelf.local.yaml").exists()
        assert config.lint.disabled_rules == []
