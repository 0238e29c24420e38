"""
activutils/utils/unit_converter.py
Unit conversion utilities between imperial and metric systems

Every function takes the target unit system explicitly. Resolving the
user's current system is done by the caller, see
activutils.services.unit_manager.
"""
import math
import logging
from datetime import tzinfo
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

from activutils.core.localization import Localizer, localize as default_localize
from activutils.schemas.units import DateFormatKind, Instant, UnitSystem
from activutils.utils.date_helpers import format_date, parse_date

logger = logging.getLogger(__name__)

Number = Union[int, float]


# Force, from newtons
NEWTON_TO_KG = 0.10197162
NEWTON_TO_LB = 0.22481

# Length and mass
CM_PER_INCH = 2.54
KG_PER_LB = 0.45359237
INCHES_PER_FOOT = 12

# Display buckets
GRAMS_PER_LB_BUCKET = 454
GRAMS_PER_KG = 1000
MM_PER_INCH = 25.4
MM_PER_CM = 10

UNIT_SYSTEM_DATE_FORMATS: Dict[UnitSystem, DateFormatKind] = {
    UnitSystem.IMPERIAL: DateFormatKind.IMPERIAL,
    UnitSystem.METRIC: DateFormatKind.METRIC,
}


def round_half_away(value: float) -> float:
    """Round to the nearest whole number, halves away from zero"""
    # floats this large are already whole and overflow the decimal context
    if not math.isfinite(value) or abs(value) >= 2 ** 52:
        return float(value)
    return float(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _is_integral(value: Number) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# =============================================================================
# Force
# =============================================================================


def newton_to_pounds(value: Number) -> Number:
    """Integral input gives a rounded int, fractional input an unrounded float"""
    if _is_integral(value):
        return int(round_half_away(value * NEWTON_TO_LB))
    return value * NEWTON_TO_LB


def newton_to_kg(value: Number) -> Number:
    """Integral input gives a rounded int, fractional input an unrounded float"""
    if _is_integral(value):
        return int(round_half_away(value * NEWTON_TO_KG))
    return value * NEWTON_TO_KG


def kg_to_newtons(value: float) -> float:
    return value / NEWTON_TO_KG


def lbs_to_newtons(value: float) -> float:
    return value / NEWTON_TO_LB


def convert_newton(value: Number, unit_system: UnitSystem) -> float:
    """Force in newtons expressed in the target system's unit (lb or kg)"""
    if unit_system == UnitSystem.METRIC:
        return float(newton_to_kg(float(value)))
    return float(newton_to_pounds(float(value)))


def convert_newton_to_string(
    value: Number,
    unit_system: UnitSystem,
    localize: Localizer = default_localize,
) -> str:
    """
    Force in newtons as a display string, e.g. "22 lb"

    Integral values are rounded to whole units, fractional values are not.
    """
    if unit_system == UnitSystem.METRIC:
        return f"{newton_to_kg(value)} {localize('kg')}"
    return f"{newton_to_pounds(value)} {localize('lb')}"


# =============================================================================
# Length and mass
# =============================================================================


def cm_to_inches(value: Number) -> float:
    return value / CM_PER_INCH


def inches_to_cm(value: Number) -> float:
    return value * CM_PER_INCH


def lbs_to_kg(value: Number) -> float:
    return value * KG_PER_LB


def kg_to_lbs(value: Number) -> float:
    return value / KG_PER_LB


def convert_inches(
    value: int,
    unit_system: UnitSystem,
    localize: Localizer = default_localize,
) -> str:
    """
    Height in inches as a display string

    Imperial splits into feet and inches (71 -> 5'11" ft), metric truncates
    to whole centimeters (71 -> 180 cm).
    """
    value = int(value)
    if unit_system == UnitSystem.METRIC:
        return f"{int(inches_to_cm(value))} {localize('cm')}"

    feet, inches = divmod(abs(value), INCHES_PER_FOOT)
    sign = "-" if value < 0 else ""
    return f"{sign}{feet}'{inches}\" {localize('ft')}"


def convert_lbs(
    value: int,
    unit_system: UnitSystem,
    localize: Localizer = default_localize,
) -> str:
    """Mass in pounds as a display string; metric truncates to whole kilograms"""
    value = int(value)
    if unit_system == UnitSystem.METRIC:
        return f"{int(lbs_to_kg(value))} {localize('kg')}"
    return f"{value} {localize('lbs')}"


# =============================================================================
# Display buckets
# =============================================================================


def convert_grams(value: float, unit_system: UnitSystem) -> float:
    """Grams to whole pounds (454 g buckets) or whole kilograms"""
    if unit_system == UnitSystem.METRIC:
        return round_half_away(value / GRAMS_PER_KG)
    return round_half_away(value / GRAMS_PER_LB_BUCKET)


def convert_to_grams(value: float, unit_system: UnitSystem) -> float:
    """Inverse of convert_grams, lossy after its rounding"""
    if unit_system == UnitSystem.METRIC:
        return round_half_away(value * GRAMS_PER_KG)
    return round_half_away(value * GRAMS_PER_LB_BUCKET)


def convert_millimeters(value: float, unit_system: UnitSystem) -> float:
    """Millimeters to whole inches or whole centimeters"""
    if unit_system == UnitSystem.METRIC:
        return round_half_away(value / MM_PER_CM)
    return round_half_away(value / MM_PER_INCH)


def convert_to_millimeters(value: float, unit_system: UnitSystem) -> float:
    """Inverse of convert_millimeters, lossy after its rounding"""
    if unit_system == UnitSystem.METRIC:
        return round_half_away(value * MM_PER_CM)
    return round_half_away(value * MM_PER_INCH)


# =============================================================================
# Dates and durations
# =============================================================================


def convert_date(iso_text: str, unit_system: UnitSystem, tz: Optional[tzinfo] = None) -> str:
    """
    Re-render an ISO timestamp as the unit system's date format

    Returns:
        "MM/dd/yyyy" or "dd/MM/yyyy", or "" when iso_text is not valid ISO
    """
    instant = parse_date(iso_text, DateFormatKind.ISO, tz)
    if instant is None:
        logger.debug(f"convert_date: not an ISO timestamp: {iso_text!r}")
        return ""
    return format_date(instant, UNIT_SYSTEM_DATE_FORMATS[UnitSystem(unit_system)], tz)


def date_to_db_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    """ISO rendering used for persisted and wire dates"""
    return format_date(instant, DateFormatKind.ISO, tz)


def convert_seconds_to_minutes(total_seconds: int) -> str:
    """
    Seconds as "MM:SS" within the current hour

    Whole hours are dropped: 3661 -> "01:01".
    """
    total_seconds = int(total_seconds)
    sign = "-" if total_seconds < 0 else ""
    within_hour = abs(total_seconds) % 3600
    minutes, seconds = divmod(within_hour, 60)
    return f"{sign}{minutes:02d}:{seconds:02d}"
