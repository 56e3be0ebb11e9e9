"""Maturity scoring package.

Splits the calculation into validation, aggregation and
classification steps, with gap analysis on top of the finished
report.  The public API is :func:`score`.
"""

from __future__ import annotations

from maturity_engine.scoring.calculator import score
from maturity_engine.scoring.classification import classify
from maturity_engine.scoring.gaps import category_gaps, section_gaps

__all__ = ["category_gaps", "classify", "score", "section_gaps"]
