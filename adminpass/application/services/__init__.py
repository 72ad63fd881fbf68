"""Application services: PIN hashing and generation."""

from adminpass.application.services.hash_service import (
    HashAlgorithm,
    PasswordHasher,
    SHA256Algorithm,
)
from adminpass.application.services.password_generator import PinGenerator

__all__ = [
    "HashAlgorithm",
    "PasswordHasher",
    "PinGenerator",
    "SHA256Algorithm",
]
