"""
activutils/services/preference_service.py
The user's current unit system, persisted in a key-value store
"""
import logging
from typing import Optional

from activutils.core.config import settings
from activutils.core.environment import HostEnvironment
from activutils.schemas.units import UnitSystem
from activutils.services.settings_store import KeyValueStore

logger = logging.getLogger(__name__)


class UnitPreferenceService:
    """
    Reads and writes the current unit system

    The stored value is read on every access. When nothing usable is stored
    the host's locale decides: metric locales get Metric, all others Imperial.
    """

    def __init__(
        self,
        store: KeyValueStore,
        environment: HostEnvironment,
        key: Optional[str] = None,
    ):
        self.store = store
        self.environment = environment
        self.key = key or settings.UNIT_SYSTEM_KEY

    def default_unit_system(self) -> UnitSystem:
        if self.environment.uses_metric_system():
            return UnitSystem.METRIC
        return UnitSystem.IMPERIAL

    def get_current_unit_system(self) -> UnitSystem:
        stored = self.store.get(self.key)
        if stored is None:
            return self.default_unit_system()

        try:
            return UnitSystem(stored)
        except ValueError:
            logger.warning(f"Ignoring unknown unit system {stored!r} stored under {self.key!r}")
            return self.default_unit_system()

    def set_current_unit_system(self, value: Optional[UnitSystem]) -> None:
        """Persist value; None leaves the stored preference untouched"""
        if value is None:
            return

        value = UnitSystem(value)
        self.store.set(self.key, value.value)
        logger.info(f"Current unit system set to {value.value}")
