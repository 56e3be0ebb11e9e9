"""
Data loader for the framework catalog.
Loads the JSON framework definitions listed in ``index.json`` and
parses each one into a validated :class:`Framework`.

The bundled JSON files live in the ``frameworks/`` directory next to
this module.  ``index.json`` fixes the registration order and the
featured subset offered when starting a new assessment.
"""

from __future__ import annotations

import json
import pathlib
from typing import Any

import pydantic

from maturity_engine.data.catalog import Catalog
from maturity_engine.models.framework import Framework, maturity_band_gaps
from maturity_engine.utils import errors, logger

log = logger.create_logger("Catalog")

# Resolve path to the bundled framework definitions
_DATA_DIR = pathlib.Path(__file__).resolve().parent / "frameworks"

_MANIFEST = "index.json"

# ============================================================================
# JSON File Loading
# ============================================================================


def _load_json(relative_path: str, base_dir: pathlib.Path | None = None) -> Any:
    """Load and parse a JSON file relative to the data directory.

    Raises:
        FileNotFoundError: If the JSON file does not exist.
        json.JSONDecodeError: If the file contains invalid JSON.
        CatalogError: If the file is not UTF-8 encoded.
    """
    full_path = (base_dir or _DATA_DIR) / relative_path
    if not full_path.exists():
        raise FileNotFoundError(f"Data file not found: {relative_path}")
    with open(full_path, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise json.JSONDecodeError(
                f"Invalid JSON in {relative_path}: {exc.msg}",
                exc.doc,
                exc.pos,
            ) from exc
        except UnicodeDecodeError as exc:
            raise errors.CatalogError(relative_path, f"not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc



# ============================================================================
# Framework Parsing
# ============================================================================


def _summarize_validation_error(exc: pydantic.ValidationError, limit: int = 5) -> str:
    """Condense a pydantic error into ``loc: message`` pairs."""
    parts = []
    for error in exc.errors()[:limit]:
        location = ".".join(str(p) for p in error["loc"]) or "framework"
        parts.append(f"{location}: {error['msg']}")
    if exc.error_count() > limit:
        parts.append(f"... {exc.error_count() - limit} more")
    return "; ".join(parts)


def parse_framework(raw: Any, source: str = "<memory>") -> Framework:
    """Validate a raw framework definition.

    Args:
        raw: Decoded JSON for one framework.
        source: Where the definition came from, for error messages.

    Raises:
        CatalogError: If the definition does not match the schema.
    """
    try:
        return Framework.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise errors.CatalogError(source, _summarize_validation_error(exc)) from exc


def _raw_id(raw: Any, filename: str) -> str:
    """Best-effort framework id for an entry that may not validate."""
    if isinstance(raw, dict) and isinstance(raw.get("id"), str) and raw["id"]:
        return raw["id"]
    return pathlib.Path(filename).stem


# ============================================================================
# Catalog Loading
# ============================================================================


def _read_manifest(base_dir: pathlib.Path, sink: logger.Logger) -> Catalog:
    manifest = _load_json(_MANIFEST, base_dir)
    if not isinstance(manifest, dict) or not isinstance(manifest.get("frameworks"), list):
        raise errors.CatalogError(_MANIFEST, "expected an object with a 'frameworks' list")

    frameworks: list[Framework] = []
    rejected: dict[str, str] = {}
    seen: set[str] = set()

    for filename in manifest["frameworks"]:
        if not isinstance(filename, str) or not filename:
            raise errors.CatalogError(_MANIFEST, f"framework entry {filename!r} is not a file name")
        raw = _load_json(filename, base_dir)
        try:
            framework = parse_framework(raw, filename)
        except errors.CatalogError as exc:
            framework_id = _raw_id(raw, filename)
            rejected.setdefault(framework_id, exc.reason)
            sink.warn("Rejected malformed framework", {"file": filename, "id": framework_id, "reason": exc.reason})
            continue

        if framework.id in seen:
            sink.warn("Duplicate framework id ignored", {"file": filename, "id": framework.id})
            continue

        for start, end in maturity_band_gaps(framework.maturity_levels):
            sink.warn(
                "Maturity levels leave a score gap",
                {"id": framework.id, "from": start, "to": end},
            )

        seen.add(framework.id)
        frameworks.append(framework)

    assessment_ids = []
    for framework_id in manifest.get("assessment", []):
        if not isinstance(framework_id, str):
            raise errors.CatalogError(_MANIFEST, f"featured entry {framework_id!r} is not a framework id")
        if framework_id in seen:
            assessment_ids.append(framework_id)
        else:
            sink.warn("Featured framework not in catalog", {"id": framework_id})

    return Catalog(
        frameworks=tuple(frameworks),
        rejected=rejected,
        assessment_ids=tuple(assessment_ids),
    )


def load_catalog(
    directory: str | pathlib.Path | None = None,
    sink: logger.Logger | None = None,
) -> Catalog:
    """Load every framework listed in the catalog manifest.

    Entries that fail schema validation are recorded in
    ``Catalog.rejected`` and logged rather than aborting the load.
    When two entries share an id the first registration wins.

    Args:
        directory: Directory holding ``index.json`` and the framework
            files.  Defaults to the bundled catalog.
        sink: Sink for load diagnostics.  Defaults to the module logger.

    Raises:
        FileNotFoundError: If the manifest or a listed file is missing.
        json.JSONDecodeError: If a file is not valid JSON.
        CatalogError: If the manifest itself is malformed.
    """
    sink = sink or log
    base_dir = pathlib.Path(directory) if directory else _DATA_DIR

    with sink.timed("catalog-load", "Framework catalog loaded"):
        catalog = _read_manifest(base_dir, sink)
    sink.success("Framework catalog ready", {"frameworks": len(catalog), "rejected": len(catalog.rejected)})
    return catalog


_catalog_cache: dict[pathlib.Path, Catalog] = {}


def get_catalog(directory: str | pathlib.Path | None = None) -> Catalog:
    """Get the catalog for *directory* (lazy loaded and cached)."""
    key = (pathlib.Path(directory) if directory else _DATA_DIR).resolve()
    if key not in _catalog_cache:
        _catalog_cache[key] = load_catalog(key)
    return _catalog_cache[key]


def reset_catalog_cache() -> None:
    """Forget every cached catalog so the next lookup reloads from disk."""
    _catalog_cache.clear()
