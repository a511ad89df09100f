"""Package logger: a single loguru stdout sink with an elapsed-time prefix.

The starting level comes from ``MCMC_SUMMARY_LOG_LEVEL`` (default ``INFO``)
and can be changed at runtime with :func:`set_level`.
"""

import os
import sys
import time
from typing import Optional

from loguru import logger

LEVEL_ENV = "MCMC_SUMMARY_LOG_LEVEL"
DEFAULT_LEVEL = "INFO"
_PACKAGE = "mcmc_summary"

logger.remove()

logger.level("DEBUG", color="<d>")
logger.level("INFO", color="<k>")
logger.level("WARNING", color="<yellow>")
logger.level("ERROR", color="<red>")
logger.level("CRITICAL", color="<red>")

_START_TIME = time.time()


def default_level() -> str:
    return os.environ.get(LEVEL_ENV, DEFAULT_LEVEL).strip().upper() or DEFAULT_LEVEL


def _source(name: Optional[str]) -> str:
    """``mcmc_summary.summary.report`` -> ``summary.report``."""
    if not name:
        return _PACKAGE
    if name.startswith(_PACKAGE + "."):
        return name[len(_PACKAGE) + 1 :]
    return name


def _format(record) -> str:
    elapsed = int(time.time() - _START_TIME)
    minutes, seconds = divmod(elapsed, 60)
    source = _source(record["name"])
    # message and exception stay placeholders, loguru fills them in
    return (
        f"|{minutes:02d}:{seconds:02d}| <blue>MCMCSummary</blue> "
        f"<cyan>{source}</cyan> | <bold><level>{{level}}</level></bold> | "
        "<level>{message}</level>\n{exception}"
    )


_handler_id = logger.add(sys.stdout, format=_format, level=default_level())


def set_level(level: Optional[str] = None):
    """Swap the stdout sink for one at ``level`` (env default when ``None``)."""
    global _handler_id
    level = level or default_level()
    try:
        logger.remove(_handler_id)
    except ValueError:
        logger.remove()
    _handler_id = logger.add(sys.stdout, format=_format, level=level)
