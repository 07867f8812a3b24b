"""
config.py

Runtime configuration read from environment variables:
 - TITANIC_EDA_LOG_LEVEL: logging level name (default INFO)
 - TITANIC_EDA_SAVEDIR:   where reports, charts and exports go (default save_dir)
 - TITANIC_EDA_BINS:      histogram bin count (default 10)

Command-line flags in run.py take precedence over these values.
"""

import logging
import os

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

LOG_LEVEL = os.getenv("TITANIC_EDA_LOG_LEVEL", "INFO").upper()
DEFAULT_SAVEDIR = os.getenv("TITANIC_EDA_SAVEDIR", "save_dir")


def read_bin_count(default: int = 10) -> int:
    raw = os.getenv("TITANIC_EDA_BINS")
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"[config] TITANIC_EDA_BINS={raw!r} is not an integer, using {default}.")
        return default


DEFAULT_BIN_COUNT = read_bin_count()


def configure_logging(level=None):
    """
    Install the root handler used by the CLI. Safe to call more than once.
    """
    level_name = (level or LOG_LEVEL).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)
    # matplotlib is chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    return numeric_level
