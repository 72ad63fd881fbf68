"""Logging setup."""

from adminpass.shared.telemetry.logging import setup_logging

__all__ = ["setup_logging"]
