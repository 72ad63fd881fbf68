"""Shared utilities: UTC datetimes and ID generation."""

from adminpass.shared.utils.datetime import ensure_utc, utc_now
from adminpass.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
