"""
Configuration module for budgetkeeper.

Contains constants, settings, and configuration values used throughout the application.
"""

import os
from decimal import Decimal
from pathlib import Path

# Version
VERSION = "0.1.0"

# Application paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
LOG_DIR = PROJECT_ROOT / "logs"

# Database configuration
DEFAULT_DB_PATH = DATA_DIR / "budgetkeeper.db"
DEBUG_DB_PATH = DATA_DIR / "budgetkeeper-debug.db"
DB_TIMEOUT = 10.0  # seconds

# Collection names
BUDGET_COLLECTION = "Budget"
PAYMENT_COLLECTION = "PaymentItems"
APP_STATE_COLLECTION = "AppState"

# Well-known key of the singleton AppState document
APP_STATE_ID = "app-state"

# Money handling
AMOUNT_QUANTUM = Decimal("0.01")
MONTHS_PER_YEAR = 12

# Chart generation
CHART_DPI = 150
CHART_FORMAT = "png"
CHART_WIDTH = 10
CHART_HEIGHT = 6

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "budgetkeeper.log"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Error messages
ERROR_MESSAGES = {
    "storage_error": "The budget database could not be read or written.",
    "duplicate_id": "A document with id {id} already exists in {collection}.",
}

_TRUTHY = {"1", "true", "yes", "on"}


def is_debug() -> bool:
    """Whether the debug database should be used."""
    return os.getenv("BUDGETKEEPER_DEBUG", "").strip().lower() in _TRUTHY


def get_connection_string() -> str:
    """
    Resolve the store connection string.

    An explicit BUDGETKEEPER_DB wins; otherwise the debug flag picks
    between the debug and the default database file.
    """
    explicit = os.getenv("BUDGETKEEPER_DB")
    if explicit:
        return explicit
    return str(DEBUG_DB_PATH if is_debug() else DEFAULT_DB_PATH)


def ensure_directories():
    """Ensure required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)


def get_log_level():
    """Get the configured log level."""
    import logging

    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return level_map.get(LOG_LEVEL.upper(), logging.INFO)
