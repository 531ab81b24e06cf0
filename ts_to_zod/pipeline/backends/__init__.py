"""
Code generation backends.

Contains the schema library code generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .zod_backend import ZodBackend

__all__ = [
    "CodeBackend",
    "ZodBackend",
]
