"""Configuration loading."""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from asg_deployer.config.schemas import AppConfig, AWSProviderConfig, DeployDefaults, LoggingConfig
from asg_deployer.domain.base.exceptions import ConfigurationError

CONFIG_DIR_ENV = "ASG_DEPLOYER_CONFDIR"
LOG_LEVEL_ENV = "ASG_DEPLOYER_LOG_LEVEL"
CONFIG_FILE_NAME = "config.yml"

logger = logging.getLogger(__name__)


class ConfigurationManager:
    """
    Loads the application configuration from YAML.

    The file is taken from the explicit path when given, otherwise from
    ``$ASG_DEPLOYER_CONFDIR/config.yml``. A missing file yields the schema
    defaults. ``ASG_DEPLOYER_LOG_LEVEL`` overrides the configured log level.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        self._config_path = Path(config_path) if config_path else self._default_path()
        self._config: Optional[AppConfig] = None

    @staticmethod
    def _default_path() -> Optional[Path]:
        config_dir = os.environ.get(CONFIG_DIR_ENV)
        if not config_dir:
            return None
        return Path(config_dir) / CONFIG_FILE_NAME

    @property
    def config_path(self) -> Optional[Path]:
        return self._config_path

    def load(self) -> AppConfig:
        """Load and validate the configuration; cached after the first call."""
        if self._config is None:
            self._config = self._build(self._read_raw())
        return self._config

    def _read_raw(self) -> dict[str, Any]:
        if self._config_path is None or not self._config_path.exists():
            logger.debug("No configuration file found at %s, using defaults", self._config_path)
            return {}

        try:
            with open(self._config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in {self._config_path}: {e}",
                {"config_path": str(self._config_path)},
            ) from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid configuration format in {self._config_path}: expected a mapping",
                {"config_path": str(self._config_path)},
            )
        logger.debug("Loaded configuration from %s", self._config_path)
        return data

    def _build(self, raw: dict[str, Any]) -> AppConfig:
        log_level = os.environ.get(LOG_LEVEL_ENV)
        if log_level:
            raw = {**raw, "logging": {**(raw.get("logging") or {}), "level": log_level}}

        try:
            return AppConfig.model_validate(raw)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}",
                {"config_path": str(self._config_path), "errors": e.errors()},
            ) from e

    def get_deploy_defaults(self) -> DeployDefaults:
        return self.load().deploy_defaults

    def get_aws_config(self) -> AWSProviderConfig:
        return self.load().aws

    def get_logging_config(self) -> LoggingConfig:
        return self.load().logging
