"""Application use cases."""

from .base import BaseUseCase

__all__ = [
    "BaseUseCase",
]
