"""Database models package"""
from .preference import Preference

__all__ = [
    "Preference",
]
