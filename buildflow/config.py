"""Configuration management for the build orchestrator."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .version import VERSION_PATTERN


class Settings(BaseSettings):
    """Build settings loaded from environment variables (BUILDFLOW_*)."""

    model_config = SettingsConfigDict(
        env_prefix="BUILDFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_root: Path = Field(default_factory=Path.cwd)

    # Directory layout (relative to project_root)
    output_dir: str = "static"
    resources_dir: str = "resources"
    public_static_dir: str = "public/static"
    asset_source_dir: str = "node_modules/@excalidraw/excalidraw/dist/excalidraw-assets"
    asset_target_dir: str = "js/excalidraw-assets"
    asset_exclude: str = "i18n-*.js"
    clean_keep: str = "yarn.lock,node_modules"
    dependency_dir: str = "node_modules"
    manifest_file: str = "package.json"
    version_file: str = "src/main/frontend/version.cljs"
    stylesheet_file: str = "css/style.css"
    version_pattern: str = VERSION_PATTERN

    # External commands (run through the shell)
    install_command: str = "yarn"
    css_build_command: str = "yarn css:build"
    css_watch_command: str = "yarn css:watch"
    electron_dev_command: str = "yarn electron:dev"
    release_build_command: str = "yarn cljs:release-electron"
    electron_make_command: str = "yarn electron:make"

    # Watch Configuration
    watch_interval: float = 0.5

    # Logging Configuration
    log_level: str = "INFO"
    log_to_file: bool = False
    log_dir: Path | None = None

    @property
    def output_path(self) -> Path:
        """Build output directory (static/)."""
        return self.project_root / self.output_dir

    @property
    def resources_path(self) -> Path:
        return self.project_root / self.resources_dir

    @property
    def public_static_path(self) -> Path:
        return self.project_root / self.public_static_dir

    @property
    def asset_source_path(self) -> Path:
        return self.project_root / self.asset_source_dir

    @property
    def asset_target_path(self) -> Path:
        """Nested output location for the third-party assets."""
        return self.output_path / self.asset_target_dir

    @property
    def dependency_path(self) -> Path:
        """Dependency directory inside the output (static/node_modules)."""
        return self.output_path / self.dependency_dir

    @property
    def manifest_path(self) -> Path:
        return self.output_path / self.manifest_file

    @property
    def version_path(self) -> Path:
        return self.project_root / self.version_file

    @property
    def stylesheet_path(self) -> Path:
        return self.output_path / self.stylesheet_file

    @property
    def log_path(self) -> Path:
        """Directory for log files (default: .buildflow/logs in the project)."""
        if self.log_dir is not None:
            return self.project_root / self.log_dir
        return self.project_root / ".buildflow" / "logs"

    @property
    def asset_exclude_list(self) -> list[str]:
        """Parse asset exclusion globs into list."""
        return [p.strip() for p in self.asset_exclude.split(",") if p.strip()]

    @property
    def clean_keep_list(self) -> list[str]:
        """Parse clean whitelist into list."""
        return [p.strip() for p in self.clean_keep.split(",") if p.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
