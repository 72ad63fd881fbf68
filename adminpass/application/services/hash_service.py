"""Hashing of admin PINs (SHA-256 hex) with constant-time comparison."""

from __future__ import annotations

import hashlib
import hmac
from abc import ABC, abstractmethod


class HashAlgorithm(ABC):
    """Abstract hash algorithm."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation (64 hex chars)."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class PasswordHasher:
    """Single source of truth for hashing and checking admin PINs."""

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    def hash(self, password: str) -> str:
        return self.algorithm.hash(password)

    def matches(self, candidate: str, hashed_password: str) -> bool:
        """Hash candidate and compare to hashed_password in constant time."""
        return hmac.compare_digest(
            self.hash(candidate).encode("ascii"),
            hashed_password.encode("ascii"),
        )
