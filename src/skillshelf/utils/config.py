"""Configuration management for skillshelf."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from skillshelf.utils.lint_rules import LINT_RULES

SHARED_CONFIG_FILE = "skillshelf.yaml"
LOCAL_CONFIG_FILE = "skillshelf.local.yaml"


# ============================================================================
# Configuration Models
# ============================================================================


class LintConfig(BaseModel):
    """Skill linter configuration."""

    disabled_rules: list[str] = Field(default_factory=list)
    max_name_length: int = Field(default=64, gt=0)
    max_description_length: int = Field(default=1024, gt=0)
    require_manifest: bool = True
    strict: bool = False

    @field_validator("disabled_rules")
    @classmethod
    def rules_must_exist(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - LINT_RULES)
        if unknown:
            raise ValueError(f"Unknown lint rule(s): {', '.join(unknown)}")
        return v


class ApiConfig(BaseModel):
    """HTTP API configuration."""

    host: str = "127.0.0.1"
    port: int = Field(default=8000, gt=0, lt=65536)


# ============================================================================
# Main Configuration Class
# ============================================================================


class Config(BaseModel):
    """
    Main configuration for skillshelf.

    Configuration is loaded from the skills repository root (the workspace):
    1. skillshelf.yaml - Shared configuration committed with the repository
    2. skillshelf.local.yaml - Local overrides (optional, overrides shared)

    Both files are optional. Pydantic defaults are used for fields not
    specified in config files.
    """

    workspace: Path
    skills_path: Path = Field(default=Path("skills"))
    manifest_path: Path = Field(default=Path(".claude-plugin/marketplace.json"))
    logging_path: Path = Field(default=Path(".logs"))
    lint: LintConfig = Field(default_factory=LintConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @model_validator(mode="after")
    def resolve_paths(self) -> "Config":
        """Resolve relative paths to absolute using workspace."""
        for field_name in ("skills_path", "manifest_path", "logging_path"):
            path = getattr(self, field_name)
            if path.is_absolute():
                if path.is_relative_to(self.workspace):
                    continue
                raise ValueError(f"{field_name} must be relative, got: {path}")
            setattr(self, field_name, self.workspace / path)
        return self

    @property
    def skills_dir_name(self) -> str:
        """Skills directory relative to the workspace, as used in the manifest."""
        return self.skills_path.relative_to(self.workspace).as_posix()

    @classmethod
    def load(cls, workspace_dir: Path) -> "Config":
        """
        Load configuration from a skills repository.

        Args:
            workspace_dir: Path to the repository root

        Returns:
            Config instance with all settings loaded and validated

        Raises:
            FileNotFoundError: If the workspace directory doesn't exist
            ValidationError: If configuration is invalid
        """
        if not workspace_dir.is_dir():
            raise FileNotFoundError(f"Workspace not found: {workspace_dir}")

        config_data: dict[str, Any] = {"workspace": workspace_dir.resolve()}

        for filename in (SHARED_CONFIG_FILE, LOCAL_CONFIG_FILE):
            config_file = workspace_dir / filename
            if config_file.exists():
                with open(config_file) as f:
                    file_data = yaml.safe_load(f) or {}
                config_data = cls._deep_merge(config_data, file_data)

        return cls.model_validate(config_data)

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """
        Deep merge override dict into base dict.

        Args:
            base: Base dictionary
            override: Override dictionary (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def _set_nested(self, obj: dict, key: str, value: Any) -> None:
        """Set a nested value in a dict using dot notation."""
        keys = key.split(".")
        for k in keys[:-1]:
            if k not in obj or not isinstance(obj[k], dict):
                obj[k] = {}
            obj = obj[k]
        obj[keys[-1]] = value

    def set_local(self, key: str, value: Any) -> None:
        """
        Persist a config value to skillshelf.local.yaml.

        The in-memory config is revalidated, so an invalid value raises
        ValidationError and leaves both the file and this instance untouched.

        Args:
            key: Config key (supports dot notation, e.g., "lint.strict")
            value: New value
        """
        config_path = self.workspace / LOCAL_CONFIG_FILE
        if config_path.exists():
            with open(config_path) as f:
                data = yaml.safe_load(f) or {}
        else:
            data = {}

        self._set_nested(data, key, value)

        candidate = self.model_dump()
        for field_name in ("skills_path", "manifest_path", "logging_path"):
            candidate[field_name] = getattr(self, field_name)
        self._set_nested(candidate, key, value)
        new_config = Config.model_validate(candidate)

        with open(config_path, "w") as f:
            yaml.safe_dump(data, f, sort_keys=False)

        for field_name in Config.model_fields:
            setattr(self, field_name, getattr(new_config, field_name))
