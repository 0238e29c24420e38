"""
activutils/utils/date_helpers.py
Date parsing and formatting for the fixed textual formats
"""
import re
import logging
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from activutils.schemas.units import DateFormatKind, Instant

logger = logging.getLogger(__name__)


DATE_FORMAT_PATTERNS: Dict[DateFormatKind, str] = {
    DateFormatKind.IMPERIAL: "MM/dd/yyyy",
    DateFormatKind.METRIC: "dd/MM/yyyy",
    DateFormatKind.ISO: "yyyy-MM-dd'T'HH:mm:ss.SSSXXXXX",
    DateFormatKind.BIRTHDAY: "yyyy-MM-dd",
}

# Pattern field -> (datetime attribute, digit count)
PATTERN_FIELDS: Dict[str, Tuple[str, int]] = {
    "yyyy": ("year", 4),
    "MM": ("month", 2),
    "dd": ("day", 2),
    "HH": ("hour", 2),
    "mm": ("minute", 2),
    "ss": ("second", 2),
    "SSS": ("millisecond", 3),
}

_FIELD_TOKEN = re.compile(r"yyyy|MM|dd|HH|mm|ss|SSS|'[^']*'")

Token = Union[str, Tuple[str, int]]


def _apply_timezone(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Attach tz to a naive wall-clock time (system local time when tz is None)"""
    if tz is None:
        return value.astimezone()
    return value.replace(tzinfo=tz)


class PatternDateFormatter:
    """
    Fixed-width formatter built from a date pattern such as ``MM/dd/yyyy``

    Supported fields: yyyy, MM, dd, HH, mm, ss, SSS and quoted literals.
    Every other character is a literal separator that must match exactly.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.tokens: List[Token] = self._tokenize(pattern)
        self._regex = re.compile(
            "".join(
                f"([0-9]{{{tok[1]}}})" if isinstance(tok, tuple) else re.escape(tok)
                for tok in self.tokens
            )
        )

    @staticmethod
    def _tokenize(pattern: str) -> List[Token]:
        tokens: List[Token] = []
        pos = 0
        for match in _FIELD_TOKEN.finditer(pattern):
            if match.start() > pos:
                tokens.append(pattern[pos:match.start()])
            text = match.group()
            if text.startswith("'"):
                tokens.append(text[1:-1])
            else:
                tokens.append(PATTERN_FIELDS[text])
            pos = match.end()
        if pos < len(pattern):
            tokens.append(pattern[pos:])
        return tokens

    def parse(self, text: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
        match = self._regex.fullmatch(text)
        if match is None:
            return None

        fields = {"year": 1970, "month": 1, "day": 1}
        groups = iter(match.groups())
        for tok in self.tokens:
            if isinstance(tok, tuple):
                fields[tok[0]] = int(next(groups))

        millisecond = fields.pop("millisecond", 0)
        try:
            value = datetime(**fields, microsecond=millisecond * 1000)
            return _apply_timezone(value, tz)
        except (ValueError, OverflowError):
            return None

    def format(self, value: datetime) -> str:
        parts = []
        for tok in self.tokens:
            if isinstance(tok, tuple):
                attr, width = tok
                number = value.microsecond // 1000 if attr == "millisecond" else getattr(value, attr)
                parts.append(str(number).zfill(width))
            else:
                parts.append(tok)
        return "".join(parts)


ISO_REGEX = re.compile(
    r"(?P<date>[0-9]{4}-[0-9]{2}-[0-9]{2})T(?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]{1,6}))?"
    r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})"
)


class IsoDateFormatter:
    """
    Strict ISO-8601 formatter

    Full date, full time with an offset (``Z`` or ``+HH:MM``) and a dash
    separated date. With fractional seconds enabled the fraction is
    required when parsing and rendered as milliseconds.
    """

    def __init__(self, fractional_seconds: bool = True):
        self.fractional_seconds = fractional_seconds
        self._date_time = PatternDateFormatter(
            "yyyy-MM-dd'T'HH:mm:ss.SSS" if fractional_seconds else "yyyy-MM-dd'T'HH:mm:ss"
        )

    def parse(self, text: str, tz: Optional[tzinfo] = None) -> Optional[datetime]:
        # tz only matters for strings without an offset, which are rejected
        match = ISO_REGEX.fullmatch(text)
        if match is None:
            return None

        fraction = match.group("fraction")
        if (fraction is None) == self.fractional_seconds:
            return None

        offset_text = match.group("offset")
        if offset_text == "Z":
            offset = timezone.utc
        else:
            hours, minutes = int(offset_text[1:3]), int(offset_text[4:6])
            if minutes >= 60:
                return None
            delta = timedelta(hours=hours, minutes=minutes)
            try:
                offset = timezone(-delta if offset_text[0] == "-" else delta)
            except ValueError:
                return None

        try:
            value = datetime.strptime(
                f"{match.group('date')}T{match.group('time')}", "%Y-%m-%dT%H:%M:%S"
            )
        except ValueError:
            return None

        if fraction:
            value = value.replace(microsecond=int(fraction.ljust(6, "0")))
        return value.replace(tzinfo=offset)

    def format(self, value: datetime) -> str:
        # Offsets with seconds (local mean time) are cut to whole minutes,
        # the wall-clock time is shifted to match
        offset_seconds = int(value.utcoffset().total_seconds()) if value.utcoffset() else 0
        sign = "-" if offset_seconds < 0 else "+"
        minutes = abs(offset_seconds) // 60
        if not minutes:
            return self._date_time.format(value.astimezone(timezone.utc)) + "Z"

        offset = timedelta(minutes=-minutes if sign == "-" else minutes)
        value = value.astimezone(timezone(offset))
        return self._date_time.format(value) + f"{sign}{minutes // 60:02d}:{minutes % 60:02d}"


@lru_cache(maxsize=None)
def formatter_for(kind: DateFormatKind) -> Union[PatternDateFormatter, IsoDateFormatter]:
    """Build the formatter for a kind from its pattern"""
    if kind == DateFormatKind.ISO:
        return IsoDateFormatter(fractional_seconds=True)
    return PatternDateFormatter(DATE_FORMAT_PATTERNS[kind])


def parse_date(text: str, kind: DateFormatKind, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    """
    Parse text in the given format

    Args:
        text: Date string
        kind: Expected format
        tz: Timezone for wall-clock values, system local time when None

    Returns:
        Parsed Instant, or None when the text does not match the format
    """
    if not isinstance(text, str):
        return None

    parsed = formatter_for(DateFormatKind(kind)).parse(text, tz)
    if parsed is None:
        logger.debug(f"Could not parse date {text!r} as {kind}")
        return None

    try:
        return Instant.from_datetime(parsed)
    except (ValidationError, OverflowError, ValueError):
        logger.debug(f"Date {text!r} is outside the representable range")
        return None


def format_date(instant: Instant, kind: DateFormatKind, tz: Optional[tzinfo] = None) -> str:
    """Format an Instant in the given format, in tz or system local time"""
    return formatter_for(DateFormatKind(kind)).format(instant.to_datetime(tz))


def as_date(text: str, kind: DateFormatKind, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    return parse_date(text, kind, tz)


def parse_imperial(text: str, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    return parse_date(text, DateFormatKind.IMPERIAL, tz)


def parse_metric(text: str, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    return parse_date(text, DateFormatKind.METRIC, tz)


def parse_iso(text: str, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    return parse_date(text, DateFormatKind.ISO, tz)


def parse_birthdate(text: str, tz: Optional[tzinfo] = None) -> Optional[Instant]:
    return parse_date(text, DateFormatKind.BIRTHDAY, tz)


def imperial_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    return format_date(instant, DateFormatKind.IMPERIAL, tz)


def metric_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    return format_date(instant, DateFormatKind.METRIC, tz)


def iso_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    return format_date(instant, DateFormatKind.ISO, tz)


def birthday_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    return format_date(instant, DateFormatKind.BIRTHDAY, tz)
