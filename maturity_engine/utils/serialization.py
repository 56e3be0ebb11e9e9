"""camelCase field aliases for catalog and report models.

Framework files are authored with camelCase keys (``maturityLevels``,
``minScore``, ``riskLevel``) and score reports are returned the same
way, while the models use snake_case attributes.  Every model config
points its ``alias_generator`` at :func:`snake_to_camel`.
"""

from __future__ import annotations


def snake_to_camel(name: str) -> str:
    """Convert a snake_case field name to its camelCase catalog key.

    Only the first letter of each later word is raised; the rest of
    the word is kept as written, so ``"nist_csfV2"`` stays readable
    as ``"nistCsfV2"``.  Empty words from doubled underscores are
    dropped.

    Args:
        name: A model field name such as ``"max_score"``.

    Returns:
        The catalog key, e.g. ``"maxScore"``.
    """
    head, *words = name.split("_")
    return head + "".join(word[0].upper() + word[1:] for word in words if word)
