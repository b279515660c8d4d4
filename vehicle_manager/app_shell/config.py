import logging
import os
from pathlib import Path

from vehicle_manager.rules.loader import DEFAULT_RULES_PATH
from vehicle_manager.rules.models import Rules

RULES_PATH_ENV = "VEHICLE_MANAGER_RULES"


def rules_path_from_env() -> Path:
    """Rules path from the environment, falling back to ./rules.yaml."""
    env_path = os.environ.get(RULES_PATH_ENV)
    if env_path:
        return Path(env_path)
    return DEFAULT_RULES_PATH


def configure_logging(rules: Rules) -> None:
    """
    Apply logging settings from rules before the editor starts.
    """
    logging.basicConfig(
        level=getattr(logging, rules.logging.level),
        format=rules.logging.format,
    )
