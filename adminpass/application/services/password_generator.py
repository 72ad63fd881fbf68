"""Admin PIN generation: fixed-length numeric codes from the secrets module."""

from __future__ import annotations

import re
import secrets

PIN_LENGTH = 6


class PinGenerator:
    """Generate and recognise admin PINs (exactly `length` decimal digits)."""

    def __init__(self, length: int = PIN_LENGTH) -> None:
        if length < 4:
            raise ValueError("PIN length must be at least 4")
        self.length = length
        self._pattern = re.compile(rf"[0-9]{{{length}}}")

    def generate(self, avoid: str | None = None) -> str:
        """Return a new random PIN, re-drawing while it equals avoid."""
        while True:
            pin = str(secrets.randbelow(10**self.length)).zfill(self.length)
            if pin != avoid:
                return pin

    def is_well_formed(self, candidate: str) -> bool:
        return bool(self._pattern.fullmatch(candidate))
