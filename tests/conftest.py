from datetime import timedelta, timezone

import pytest

from activutils.core.environment import FixedHostEnvironment
from activutils.db.session import init_db, make_engine, make_session_factory
from activutils.services.preference_service import UnitPreferenceService
from activutils.services.settings_store import InMemoryKeyValueStore
from activutils.services.unit_manager import UnitManager


# Fixed offset so results do not depend on the machine's timezone
UTC_PLUS_3 = timezone(timedelta(hours=3))


@pytest.fixture
def tz():
    return UTC_PLUS_3


@pytest.fixture
def metric_env(tz):
    return FixedHostEnvironment(metric=True, tz=tz)


@pytest.fixture
def imperial_env(tz):
    return FixedHostEnvironment(metric=False, tz=tz)


@pytest.fixture
def memory_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def session_factory():
    """Session factory over a fresh in-memory SQLite database"""
    engine = make_engine("sqlite://")
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture
def manager(memory_store, metric_env):
    """Manager on a metric host with suffixes returned unchanged"""
    preferences = UnitPreferenceService(memory_store, metric_env)
    return UnitManager(preferences, lambda key: key, metric_env)
