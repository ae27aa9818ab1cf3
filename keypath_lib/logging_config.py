from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from keypath_lib.config import load_settings


def configure_logging(config_path: Optional[Path] = None) -> logging.Logger:
    """Configure root logging from the codec settings file.

    Falls back to WARNING when the settings file cannot be parsed, then
    replaces any existing root handlers with one using the project format.
    Returns the module logger for the caller.
    """
    try:
        level_name = load_settings(config_path).log_level
    except (OSError, ValueError, ValidationError, yaml.YAMLError):
        level_name = 'WARNING'
    level = getattr(logging, level_name)

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)
    logger.info('Log level set to: %s', logging.getLevelName(level))
    return logger
