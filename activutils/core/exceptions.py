"""
activutils/core/exceptions.py
Library exception types
"""


class ActivUtilsError(Exception):
    """Base class for errors raised by activutils"""


class PreferenceStoreError(ActivUtilsError):
    """The persisted preference store could not be read or written"""

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key
