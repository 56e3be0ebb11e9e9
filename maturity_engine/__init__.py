"""Framework registry and weighted maturity scoring engine.

Frameworks (CMMC, NIST CSF v2.0, Privacy) are loaded from the bundled
JSON catalog, resolved through :mod:`maturity_engine.registry`, and
scored with :func:`maturity_engine.scoring.score`.
"""

__version__ = "1.0.0"
