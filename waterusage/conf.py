"""
App settings for the water usage tracker.

Values are read from the ``WATERUSAGE`` dict in the Django settings module;
anything missing falls back to DEFAULTS.
"""

from django.conf import settings
from django.utils.module_loading import import_string

DEFAULTS = {
    "MAX_LOGS": 10000,
    "LOGGING_FEE": 500,
    "BURN_PRINCIPAL": "SP000000000000000000002Q6VF78",
    "VERIFIED_ORACLES": [],
    "CLOCK": "waterusage.environment.wall_clock",
    "FEE_TRANSFER": "waterusage.environment.LedgerFeeTransfer",
    "ORACLE_DIRECTORY": "waterusage.environment.SettingsOracleDirectory",
}


def get(name):
    return getattr(settings, "WATERUSAGE", {}).get(name, DEFAULTS[name])


def load(name):
    """Import the object whose dotted path is configured under ``name``."""
    return import_string(get(name))


def default_max_logs():
    return get("MAX_LOGS")


def default_logging_fee():
    return get("LOGGING_FEE")
