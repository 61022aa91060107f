"""Configuration management utilities."""

from typing import Optional
from pathlib import Path
import json
import re
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from loguru import logger

from ..loader.naming import DEFAULT_NAMESPACE

_NAMESPACE_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


class LoaderSettings(BaseModel):
    """Settings of the policy loader."""

    # Base namespace canonical identifiers are composed under
    namespace: str = Field(default=DEFAULT_NAMESPACE)

    log_level: str = Field(default="INFO")
    log_file: Optional[str] = None

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, value: str) -> str:
        if not _NAMESPACE_PATTERN.match(value):
            raise ValueError(f"Invalid namespace: '{value}'. Must be a dotted Python identifier")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Invalid log_level: '{value}'. Must be one of {sorted(_LOG_LEVELS)}")
        return level


def load_config(config_path: Path) -> LoaderSettings:
    """Load loader settings from a YAML or JSON file.

    The settings may sit at the top level of the file or under a
    ``policy_loader`` section.

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file cannot be parsed or holds invalid settings
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, 'r') as f:
        try:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                config_data = yaml.safe_load(f)
            elif config_path.suffix.lower() == '.json':
                config_data = json.load(f)
            else:
                raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to parse config file {config_path}: {e}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    settings_data = config_data.get('policy_loader', config_data)
    try:
        settings = LoaderSettings(**settings_data)
    except (ValidationError, TypeError) as e:
        raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    logger.info(f"Configuration loaded: namespace '{settings.namespace}', "
               f"log level {settings.log_level}")
    return settings


def save_config(settings: LoaderSettings, config_path: Path) -> None:
    """Save loader settings to file."""
    config_path = Path(config_path)
    suffix = config_path.suffix.lower()
    if suffix not in ['.yaml', '.yml', '.json']:
        raise ValueError(f"Unsupported configuration file format: {config_path.suffix}")

    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = {'policy_loader': settings.model_dump()}

    with open(config_path, 'w') as f:
        if suffix == '.json':
            json.dump(config_dict, f, indent=2)
        else:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    logger.info(f"Configuration saved to {config_path}")
