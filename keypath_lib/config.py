from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('config/keypath.yml')
CONFIG_ENV_VAR = 'KEYPATH_CONFIG'


class CodecSettings(BaseModel):
    model_config = ConfigDict(extra='ignore')

    path_separator: str = '.'
    use_cache: bool = True
    document_format: Literal['json', 'yaml'] = 'json'
    log_level: str = 'WARNING'

    @field_validator('path_separator')
    @classmethod
    def _separator_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError('path_separator must not be empty')
        return v

    @field_validator('log_level')
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f'unknown log level {v!r}')
        return level


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    if config_path is not None:
        return Path(config_path)
    env = os.environ.get(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def load_settings(config_path: Optional[Path] = None) -> CodecSettings:
    """Load codec settings from a YAML file.

    A missing file yields the defaults. Invalid values raise pydantic's
    `ValidationError`; a file that is not a YAML mapping raises `ValueError`.
    """
    path = resolve_config_path(config_path)
    if not path.exists():
        logger.debug('No settings file at %s; using defaults', path)
        return CodecSettings()
    with path.open('r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f'{path} must contain a YAML mapping')
    settings = CodecSettings(**raw)
    logger.debug('Loaded settings from %s: %s', path, settings)
    return settings
