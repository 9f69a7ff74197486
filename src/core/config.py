"""
Runtime configuration.

Defaults live in this module and can be overridden through environment variables:

    export QUORIDOR_LOG_LEVEL=DEBUG
    export QUORIDOR_DEFAULT_TIME_CONTROL=300+5

The game rules themselves (board size, number of walls) are not configurable; those are module constants in src/quoridor.
"""

import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TIME_CONTROL = "correspondence"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_LOG_LEVEL
    default_time_control: str = DEFAULT_TIME_CONTROL


def load_settings() -> Settings:
    """Read the settings from the environment (falls back to the module defaults)."""
    return Settings(
        log_level=os.getenv("QUORIDOR_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        default_time_control=os.getenv(
            "QUORIDOR_DEFAULT_TIME_CONTROL", DEFAULT_TIME_CONTROL
        ).lower(),
    )


def configure_logging(settings: Settings) -> None:
    """Meant to be called once by the application entrypoint. The library itself never configures logging."""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(settings.log_level)
