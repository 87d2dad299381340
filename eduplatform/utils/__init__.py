"""EduPlatform utilities."""

from .seed_loader import load_seed, apply_seed, SeedFile, DEFAULT_SEED_FILE

__all__ = [
    "load_seed",
    "apply_seed",
    "SeedFile",
    "DEFAULT_SEED_FILE",
]
