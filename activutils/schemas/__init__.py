from .units import (
    DateFormatKind,
    Instant,
    UnitSystem,
)

__all__ = [
    "DateFormatKind",
    "Instant",
    "UnitSystem",
]
