"""Composite keys addressing a single hideout level or project phase.

Progress records for hideout modules and projects are stored under these
keys, and the requirement calculators look them up with the same
functions. Build keys here and nowhere else.
"""

from __future__ import annotations


def hideout_key(module_id: str, level: int) -> str:
    """Return the progress key for ``level`` of hideout module ``module_id``."""

    return f"{module_id}-{level}"


def project_key(project_id: str, phase: int) -> str:
    """Return the progress key for ``phase`` of project ``project_id``."""

    return f"{project_id}-{phase}"
