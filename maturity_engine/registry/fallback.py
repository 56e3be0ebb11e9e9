"""
Deterministic fallback framework.

Returned by the registry whenever the requested framework cannot be
resolved safely.  It has no sections but a complete maturity-level
table, so downstream rendering and scoring always have something valid
to work with.
"""

from __future__ import annotations

from maturity_engine.models.framework import Framework, MaturityLevel

FALLBACK_FRAMEWORK_ID = "nist-csf-v2-fallback"

FALLBACK_FRAMEWORK = Framework(
    id=FALLBACK_FRAMEWORK_ID,
    name="NIST CSF v2.0 (Fallback)",
    description="Default NIST Cybersecurity Framework v2.0",
    version="2.0",
    complexity="basic",
    estimated_time=30,
    sections=(),
    maturity_levels=(
        MaturityLevel(
            level=1,
            name="Partial",
            description="Some activities performed",
            color="#FF6B6B",
            min_score=0,
            max_score=25,
        ),
        MaturityLevel(
            level=2,
            name="Risk Informed",
            description="Risk management processes inform activities",
            color="#FFD166",
            min_score=26,
            max_score=50,
        ),
        MaturityLevel(
            level=3,
            name="Repeatable",
            description="Activities are consistently performed",
            color="#3A9CA8",
            min_score=51,
            max_score=75,
        ),
        MaturityLevel(
            level=4,
            name="Adaptive",
            description="Activities are continuously improved",
            color="#4CAF50",
            min_score=76,
            max_score=100,
        ),
    ),
)


def fallback_framework() -> Framework:
    """Return the fallback framework.

    The model is frozen and holds only tuples, so the shared instance
    is safe to hand to every caller.
    """
    return FALLBACK_FRAMEWORK
