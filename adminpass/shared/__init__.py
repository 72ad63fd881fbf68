"""Shared helpers used across layers (datetime, ids, logging, request metadata)."""
