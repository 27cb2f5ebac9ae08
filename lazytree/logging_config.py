"""Console logging setup for the ``lazytree`` command.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once, by the CLI.
"""

from __future__ import annotations

import logging
import logging.config

__all__ = ["setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Configure a stderr handler; ``verbose`` lowers the level to DEBUG."""
    level = "DEBUG" if verbose else "WARNING"
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "simple": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "simple",
                    "stream": "ext://sys.stderr",
                    "level": level,
                },
            },
            "loggers": {
                "lazytree": {
                    "handlers": ["console"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )
