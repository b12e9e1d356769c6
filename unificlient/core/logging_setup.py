"""
Loggers used by `Unifi`, selected by its `debug` and `silent` arguments:

- `unificlient_default`: informational messages on stdout, problems on stderr.
- `unificlient_debug`: as the default, plus timestamped debug output on stderr.
- `unificlient_silent`: drops everything.

Python warnings, such as ambiguous search results, are routed into logging.
"""

import logging
import logging.config

DEBUG_LOGGER_NAME = "unificlient_debug"
DEFAULT_LOGGER_NAME = "unificlient_default"
SILENT_LOGGER_NAME = "unificlient_silent"


class LoggingInfoOnlyFilter(logging.Filter):
    def filter(self, record):
        return record.levelno == logging.INFO


class LoggingIgnoreInfoFilter(logging.Filter):
    def filter(self, record):
        return record.levelno != logging.INFO


def _stderr_handler(level: str, formatter: str) -> dict:
    return {
        "level": level,
        "class": "logging.StreamHandler",
        "formatter": formatter,
        "stream": "ext://sys.stderr",
        "filters": ["ignore_info"],
    }


logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "brief": {"format": "%(message)s"},
            "problem": {"format": "[%(levelname)s] %(message)s"},
            "debug": {
                "format": "%(asctime)s [%(module)s:%(lineno)d - %(levelname)s]: %(message)s"
            },
        },
        "filters": {
            "info_only": {"()": LoggingInfoOnlyFilter},
            "ignore_info": {"()": LoggingIgnoreInfoFilter},
        },
        "handlers": {
            "info_stdout": {
                "level": "INFO",
                "class": "logging.StreamHandler",
                "formatter": "brief",
                "stream": "ext://sys.stdout",
                "filters": ["info_only"],
            },
            "problem_stderr": _stderr_handler("WARNING", "problem"),
            "debug_stderr": _stderr_handler("DEBUG", "debug"),
        },
        "loggers": {
            DEFAULT_LOGGER_NAME: {
                "handlers": ["info_stdout", "problem_stderr"],
                "level": "INFO",
            },
            DEBUG_LOGGER_NAME: {
                "handlers": ["info_stdout", "debug_stderr"],
                "level": "DEBUG",
            },
            SILENT_LOGGER_NAME: {"handlers": [], "propagate": False},
            # request logging is done through spans
            "httpx": {"level": "WARNING"},
            "httpcore": {"level": "WARNING"},
        },
    }
)
logging.captureWarnings(True)
