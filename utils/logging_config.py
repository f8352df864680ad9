"""
===============================================================================
Flue Logging Configuration
===============================================================================
Builds the logging.config.dictConfig dictionary: one stdout handler on the
root logger, with werkzeug's own access log quietened.
"""

import logging.config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def build_logging_config(level: str = "INFO") -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": LOG_FORMAT,
            },
        },
        "handlers": {
            "default": {
                "formatter": "default",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {"handlers": ["default"], "level": level, "propagate": True},
            # Request lines are logged by the app itself
            "werkzeug": {"handlers": ["default"], "level": "WARNING", "propagate": False},
        },
    }


def setup_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(build_logging_config(level))
