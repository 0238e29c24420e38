"""Date formats and imperial/metric unit conversion"""

__version__ = "0.1.0"
