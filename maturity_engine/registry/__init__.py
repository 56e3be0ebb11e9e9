"""Registry package: framework lookup that degrades to a fallback.

The public API is :class:`FrameworkRegistry` and :func:`create_registry`.
"""

from __future__ import annotations

from maturity_engine.registry.fallback import FALLBACK_FRAMEWORK_ID, fallback_framework
from maturity_engine.registry.registry import FrameworkRegistry, create_registry

__all__ = ["FALLBACK_FRAMEWORK_ID", "FrameworkRegistry", "create_registry", "fallback_framework"]
