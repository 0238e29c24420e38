"""
activutils/core/environment.py
Read-only queries about the host: measurement convention and timezone
"""
import os
import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from activutils.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


# Territories that still measure in imperial/US customary units
NON_METRIC_TERRITORIES = {"US", "LR", "MM"}

LOCALE_ENV_VARS = ("LC_ALL", "LC_MEASUREMENT", "LANG")


class HostEnvironment(Protocol):
    def uses_metric_system(self) -> bool:
        ...

    def timezone(self) -> Optional[tzinfo]:
        """None means the system local timezone"""
        ...


def locale_territory(locale_name: Optional[str]) -> Optional[str]:
    """
    Extract the territory from a POSIX locale name

    Examples:
        en_US.UTF-8 -> US
        de_DE@euro -> DE
        C -> None
    """
    if not locale_name:
        return None

    name = locale_name.split(".")[0].split("@")[0]
    if "_" not in name:
        return None
    return name.split("_", 1)[1].upper() or None


def locale_uses_metric(locale_name: Optional[str]) -> bool:
    """Unknown or territory-less locales (C, POSIX) count as imperial"""
    territory = locale_territory(locale_name)
    if territory is None:
        return False
    return territory not in NON_METRIC_TERRITORIES


class SystemHostEnvironment:
    """Answers from settings overrides first, then the process environment"""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings

    def locale_name(self) -> Optional[str]:
        if self.config.LOCALE:
            return self.config.LOCALE
        for var in LOCALE_ENV_VARS:
            value = os.environ.get(var)
            if value:
                return value
        return None

    def uses_metric_system(self) -> bool:
        return locale_uses_metric(self.locale_name())

    def timezone(self) -> Optional[tzinfo]:
        if not self.config.TIMEZONE:
            return None
        try:
            return ZoneInfo(self.config.TIMEZONE)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.config.TIMEZONE!r}, using system local time")
            return None


@dataclass(frozen=True)
class FixedHostEnvironment:
    """Host answers fixed at construction"""

    metric: bool = True
    tz: Optional[tzinfo] = None

    def uses_metric_system(self) -> bool:
        return self.metric

    def timezone(self) -> Optional[tzinfo]:
        return self.tz
