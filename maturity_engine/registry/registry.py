"""
Framework registry: resolves a framework by id with a safe fallback.

``resolve`` never raises and never returns ``None``.  Every failure
path (no catalog, unknown id, malformed entry) degrades to the
fallback framework and is reported as a warning through the injected
logger.  Callers that must tell a real framework from the fallback
compare the returned id with the one they asked for, or use
:meth:`FrameworkRegistry.is_fallback`.
"""

from __future__ import annotations

import json

from maturity_engine import config
from maturity_engine.data import loader
from maturity_engine.data.catalog import Catalog
from maturity_engine.models.framework import Framework
from maturity_engine.registry.fallback import FALLBACK_FRAMEWORK_ID, fallback_framework
from maturity_engine.utils import errors, logger

log = logger.create_logger("Registry")

REASON_CATALOG_UNAVAILABLE = "catalog-unavailable"
REASON_NOT_FOUND = "framework-not-found"
REASON_MALFORMED = "framework-malformed"


def _has_valid_sections(framework: Framework) -> bool:
    """Shallow structural check: ``sections`` must be present and list-like."""
    return isinstance(getattr(framework, "sections", None), (tuple, list))


class FrameworkRegistry:
    """Read-only lookup over an immutable catalog."""

    def __init__(self, catalog: Catalog | None, sink: logger.Logger | None = None) -> None:
        self._catalog = catalog
        self._log = sink or log

    @property
    def catalog(self) -> Catalog | None:
        return self._catalog

    @property
    def is_available(self) -> bool:
        """Whether a non-empty catalog is loaded."""
        return self._catalog is not None and len(self._catalog) > 0

    def resolve(self, framework_id: str | None = None) -> Framework:
        """Return the framework for *framework_id*, or the fallback.

        Args:
            framework_id: Catalog id.  When omitted the first
                registered framework is returned.

        Returns:
            A structurally valid framework, never ``None``.
        """
        if self._catalog is None or len(self._catalog) == 0:
            return self._degrade(REASON_CATALOG_UNAVAILABLE, "Framework catalog is empty or unavailable", framework_id)

        if not framework_id:
            return self._catalog.frameworks[0]

        found = self._catalog.get(framework_id)
        if found is None:
            if framework_id in self._catalog.rejected:
                return self._degrade(
                    REASON_MALFORMED,
                    f"Framework '{framework_id}' failed validation",
                    framework_id,
                    {"detail": self._catalog.rejected[framework_id]},
                )
            return self._degrade(REASON_NOT_FOUND, f"Framework with id '{framework_id}' not found", framework_id)

        if not _has_valid_sections(found):
            return self._degrade(REASON_MALFORMED, f"Framework '{framework_id}' has invalid sections", framework_id)

        return found

    def list_available(self) -> tuple[Framework, ...]:
        """Every catalog framework in registration order."""
        if self._catalog is None:
            return ()
        return self._catalog.frameworks

    def list_assessable(self) -> list[Framework]:
        """Featured frameworks offered when starting a new assessment."""
        if self._catalog is None:
            return []
        return self._catalog.assessment_frameworks()

    @staticmethod
    def is_fallback(framework: Framework) -> bool:
        return framework.id == FALLBACK_FRAMEWORK_ID

    def _degrade(
        self,
        reason: str,
        message: str,
        framework_id: str | None,
        extra: dict[str, object] | None = None,
    ) -> Framework:
        """Report a degradation and return the fallback framework."""
        self._log.warn(
            f"{message}, using fallback",
            {"reason": reason, "requested": framework_id, **(extra or {})},
        )
        return fallback_framework()


def create_registry(
    settings: config.EngineSettings | None = None,
    sink: logger.Logger | None = None,
) -> FrameworkRegistry:
    """Build a registry over the configured catalog.

    A catalog that cannot be loaded is logged as an error and yields
    a registry without a catalog, which resolves every id to the
    fallback framework.
    """
    settings = settings or config.get_settings()
    sink = sink or log
    try:
        catalog: Catalog | None = loader.get_catalog(settings.catalog_dir)
    except (OSError, json.JSONDecodeError, errors.CatalogError) as exc:
        sink.error(
            "Framework catalog could not be loaded",
            {"directory": str(settings.catalog_dir or "bundled"), "error": errors.get_error_message(exc)},
        )
        catalog = None
    return FrameworkRegistry(catalog, sink=sink)
