"""Small, side-effect free helpers.

Keep this package dependency-light to avoid circular imports.
"""

from .datetime_fmt import fmt_dt_iso, utcnow  # noqa: F401
