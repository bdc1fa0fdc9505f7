"""
Loguru setup.

Production writes one JSON object per line for log shippers; other
environments write coloured text with full tracebacks. Modules log through
``from agri_inventory.core.logging import logger``.
"""

import sys
from typing import Any, Dict

from loguru import logger

from agri_inventory.core.config import Environment, settings


def sink_options(environment: Environment) -> Dict[str, Any]:
    options: Dict[str, Any] = {
        "format": settings.logging.format,
        "level": settings.logging.level,
    }
    if environment == Environment.PRODUCTION:
        options.update(colorize=False, serialize=True)
    else:
        options.update(
            colorize=environment != Environment.TESTING,
            backtrace=True,
            diagnose=environment == Environment.DEVELOPMENT,
        )
    return options


def setup_logging() -> None:
    logger.remove()
    logger.add(sys.stdout, **sink_options(settings.environment))
    logger.debug(f"Logging configured for {settings.environment.value} at level {settings.logging.level}")


setup_logging()
