"""
activutils/core/localization.py
Lookup of user-facing unit suffixes
"""
import gettext
from functools import lru_cache
from typing import Callable, Optional

from activutils.core.config import settings

Localizer = Callable[[str], str]


@lru_cache(maxsize=None)
def get_translations(domain: str, localedir: Optional[str] = None) -> gettext.NullTranslations:
    """Missing catalogs give NullTranslations, which return the key unchanged"""
    return gettext.translation(domain, localedir=localedir, fallback=True)


def make_localizer(domain: str, localedir: Optional[str] = None) -> Localizer:
    return get_translations(domain, localedir).gettext


def localize(key: str) -> str:
    """Localize with the catalog configured in settings"""
    return make_localizer(settings.LOCALE_DOMAIN, settings.LOCALE_DIR)(key)
