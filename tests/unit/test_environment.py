"""Tests for host locale and timezone queries"""

import logging

import pytest

from activutils.core.config import Settings
from activutils.core.environment import (
    FixedHostEnvironment,
    SystemHostEnvironment,
    locale_territory,
    locale_uses_metric,
)


class TestLocaleTerritory:
    @pytest.mark.parametrize(
        "name,territory",
        [
            ("en_US.UTF-8", "US"),
            ("de_DE@euro", "DE"),
            ("bg_BG", "BG"),
            ("C", None),
            ("C.UTF-8", None),
            ("", None),
            (None, None),
        ],
    )
    def test_territory(self, name, territory) -> None:
        assert locale_territory(name) == territory

    @pytest.mark.parametrize(
        "name,metric",
        [
            ("en_US.UTF-8", False),
            ("en_LR", False),
            ("my_MM", False),
            ("en_GB.UTF-8", True),
            ("de_DE", True),
            ("POSIX", False),
            (None, False),
        ],
    )
    def test_uses_metric(self, name, metric) -> None:
        assert locale_uses_metric(name) is metric


class TestSystemHostEnvironment:
    def test_settings_locale_wins(self, monkeypatch) -> None:
        monkeypatch.setenv("LC_ALL", "en_US.UTF-8")
        env = SystemHostEnvironment(Settings(LOCALE="en_GB"))
        assert env.uses_metric_system() is True

    def test_environment_variables_in_order(self, monkeypatch) -> None:
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.setenv("LC_MEASUREMENT", "fr_FR.UTF-8")
        monkeypatch.setenv("LANG", "en_US.UTF-8")
        env = SystemHostEnvironment(Settings(LOCALE=None))
        assert env.locale_name() == "fr_FR.UTF-8"
        assert env.uses_metric_system() is True

    def test_no_locale_is_imperial(self, monkeypatch) -> None:
        for var in ("LC_ALL", "LC_MEASUREMENT", "LANG"):
            monkeypatch.delenv(var, raising=False)
        env = SystemHostEnvironment(Settings(LOCALE=None))
        assert env.uses_metric_system() is False

    def test_timezone_unset_is_system_local(self) -> None:
        assert SystemHostEnvironment(Settings(TIMEZONE=None)).timezone() is None

    def test_unknown_timezone_falls_back(self, caplog) -> None:
        env = SystemHostEnvironment(Settings(TIMEZONE="Mars/Olympus_Mons"))
        with caplog.at_level(logging.WARNING):
            assert env.timezone() is None
        assert "Mars/Olympus_Mons" in caplog.text


class TestFixedHostEnvironment:
    def test_fixed_answers(self, tz) -> None:
        env = FixedHostEnvironment(metric=False, tz=tz)
        assert env.uses_metric_system() is False
        assert env.timezone() is tz
