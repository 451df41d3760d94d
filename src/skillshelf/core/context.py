from skillshelf.core.lint import Linter, LintReport
from skillshelf.core.manifest import ManifestStore
from skillshelf.core.search import SkillMatcher
from skillshelf.core.skill_loader import SkillLoader
from skillshelf.utils.config import Config


class SharedContext:
    """Global shared state for the application."""

    config: Config
    skill_loader: SkillLoader
    manifest_store: ManifestStore
    matcher: SkillMatcher

    def __init__(self, config: Config):
        self.config = config
        self.skill_loader = SkillLoader.from_config(config)
        self.manifest_store = ManifestStore.from_config(config)
        self.matcher = SkillMatcher()

    @property
    def linter(self) -> Linter:
        # Follows config.lint, which set_local may replace
        return Linter(self.config.lint)

    def lint(self, strict: bool | None = None) -> LintReport:
        """Lint the workspace's skills against its manifest."""
        return self.linter.run(
            self.config.skills_path, self.manifest_store, strict=strict
        )
