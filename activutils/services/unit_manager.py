"""
activutils/services/unit_manager.py
Conversions bound to the user's current unit system
"""
import logging
from typing import Optional

from activutils.core.config import Settings, settings as default_settings
from activutils.core.environment import HostEnvironment, SystemHostEnvironment
from activutils.core.localization import Localizer, make_localizer
from activutils.db.session import init_db, make_engine, make_session_factory
from activutils.schemas.units import Instant, UnitSystem
from activutils.services.preference_service import UnitPreferenceService
from activutils.services.settings_store import SqlKeyValueStore
from activutils.utils import unit_converter

logger = logging.getLogger(__name__)


class UnitManager:
    """
    Holds the preference service, localizer and host environment

    Every method takes an optional unit_system. When it is omitted the
    current preference is read and used.

    Usage:
        manager = UnitManager.from_settings()
        manager.convert_inches(71)            # current system
        manager.convert_inches(71, UnitSystem.METRIC)
        manager.close()
    """

    def __init__(
        self,
        preferences: UnitPreferenceService,
        localize: Localizer,
        environment: HostEnvironment,
        engine=None,
    ):
        self.preferences = preferences
        self.localize = localize
        self.environment = environment
        # set by from_settings, which owns it
        self.engine = engine

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "UnitManager":
        """
        Manager backed by the SQL store at config.DATABASE_URL

        The manager owns the engine it creates; call close() when done.
        """
        config = config or default_settings
        engine = make_engine(config.DATABASE_URL)
        init_db(engine)
        logger.info(f"Unit preferences stored in {engine.url.render_as_string(hide_password=True)}")

        environment = SystemHostEnvironment(config)
        preferences = UnitPreferenceService(
            SqlKeyValueStore(make_session_factory(engine)),
            environment,
            key=config.UNIT_SYSTEM_KEY,
        )
        return cls(
            preferences,
            make_localizer(config.LOCALE_DOMAIN, config.LOCALE_DIR),
            environment,
            engine=engine,
        )

    def close(self) -> None:
        """Dispose of the engine created by from_settings"""
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    # Preference

    @property
    def current_unit_system(self) -> UnitSystem:
        return self.preferences.get_current_unit_system()

    @current_unit_system.setter
    def current_unit_system(self, value: Optional[UnitSystem]) -> None:
        self.preferences.set_current_unit_system(value)

    def resolve_unit_system(self, unit_system: Optional[UnitSystem] = None) -> UnitSystem:
        if unit_system is None:
            return self.preferences.get_current_unit_system()
        return UnitSystem(unit_system)

    # Force

    def convert_newton(self, value, unit_system: Optional[UnitSystem] = None) -> float:
        return unit_converter.convert_newton(value, self.resolve_unit_system(unit_system))

    def convert_newton_to_string(self, value, unit_system: Optional[UnitSystem] = None) -> str:
        return unit_converter.convert_newton_to_string(
            value, self.resolve_unit_system(unit_system), self.localize
        )

    # Length and mass

    def convert_inches(self, value: int, unit_system: Optional[UnitSystem] = None) -> str:
        return unit_converter.convert_inches(
            value, self.resolve_unit_system(unit_system), self.localize
        )

    def convert_lbs(self, value: int, unit_system: Optional[UnitSystem] = None) -> str:
        return unit_converter.convert_lbs(
            value, self.resolve_unit_system(unit_system), self.localize
        )

    # Buckets

    def convert_grams(self, value: float, unit_system: Optional[UnitSystem] = None) -> float:
        return unit_converter.convert_grams(value, self.resolve_unit_system(unit_system))

    def convert_to_grams(self, value: float, unit_system: Optional[UnitSystem] = None) -> float:
        return unit_converter.convert_to_grams(value, self.resolve_unit_system(unit_system))

    def convert_millimeters(self, value: float, unit_system: Optional[UnitSystem] = None) -> float:
        return unit_converter.convert_millimeters(value, self.resolve_unit_system(unit_system))

    def convert_to_millimeters(self, value: float, unit_system: Optional[UnitSystem] = None) -> float:
        return unit_converter.convert_to_millimeters(value, self.resolve_unit_system(unit_system))

    # Dates

    def convert_date(self, iso_text: str, unit_system: Optional[UnitSystem] = None) -> str:
        return unit_converter.convert_date(
            iso_text, self.resolve_unit_system(unit_system), self.environment.timezone()
        )

    def date_to_db_string(self, instant: Instant) -> str:
        return unit_converter.date_to_db_string(instant, self.environment.timezone())

    @staticmethod
    def convert_seconds_to_minutes(total_seconds: int) -> str:
        return unit_converter.convert_seconds_to_minutes(total_seconds)
