"""
Engine and service configuration.

Centralises all environment variable names and default values.
Uses ``pydantic_settings.BaseSettings`` for automatic environment
variable binding, type coercion, and validation.
"""

from __future__ import annotations

import functools
import pathlib

import pydantic
import pydantic_settings

from maturity_engine.utils import logger

log = logger.create_logger("Config")


class EngineSettings(pydantic_settings.BaseSettings):
    """Settings for catalog loading, gap analysis, and the HTTP shell.

    Attributes:
        catalog_dir: Directory with ``index.json`` and framework files.
            ``None`` selects the bundled catalog.
        environment: Deployment environment name.
        host: Interface uvicorn binds to.
        port: Port uvicorn listens on.
        gap_threshold: Category score (percent) below which a category
            is reported as a gap.
        gap_limit: Maximum number of category gaps reported.
    """

    catalog_dir: pathlib.Path | None = pydantic.Field(
        default=None, validation_alias="MATURITY_CATALOG_DIR"
    )
    environment: str = pydantic.Field(
        default="development", validation_alias="ENVIRONMENT"
    )
    host: str = pydantic.Field(
        default="0.0.0.0", validation_alias="UVICORN_HOST"
    )
    port: int = pydantic.Field(
        default=3001, validation_alias="UVICORN_PORT"
    )
    gap_threshold: float = pydantic.Field(
        default=75.0, ge=0, le=100, validation_alias="MATURITY_GAP_THRESHOLD"
    )
    gap_limit: int = pydantic.Field(
        default=10, ge=1, validation_alias="MATURITY_GAP_LIMIT"
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_config(self) -> str | None:
        """Check settings that cannot be expressed as field constraints.

        Returns:
            An error message string when misconfigured, or ``None`` if valid.
        """
        if self.catalog_dir is not None and not (self.catalog_dir / "index.json").exists():
            return f"MATURITY_CATALOG_DIR does not contain an index.json: {self.catalog_dir}"
        return None


@functools.lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return process-wide settings, read from the environment once."""
    settings = EngineSettings()
    problem = settings.validate_config()
    if problem:
        log.warn(problem)
    return settings
