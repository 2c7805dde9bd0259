"""Configuration loading for the translation updater.

Settings come from built-in defaults, an optional YAML file and the
environment. The Crowdin token is only ever expected from the environment in
automation runs, but a YAML value is accepted for local use.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..utils.core.exceptions import ConfigurationError
from .schema import UpdaterConfig

logger = logging.getLogger(__name__)

TOKEN_ENV_VAR = "CROWDIN_PERSONAL_TOKEN"


class ConfigManager:
    """Loads and validates :class:`UpdaterConfig` instances."""

    @staticmethod
    def read_yaml(config_path: Path) -> dict[str, object]:
        """
        Read a YAML configuration file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            The parsed mapping (empty for an empty file)

        Raises:
            ConfigurationError: If the file is missing, malformed or not a mapping
        """
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw_config_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if raw_config_data is None:
            return {}
        if not isinstance(raw_config_data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a YAML dictionary, got {type(raw_config_data).__name__}"
            )
        return raw_config_data  # pyright: ignore[reportUnknownVariableType]

    @staticmethod
    def load_config(
        config_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
        root_dir: Path | None = None,
    ) -> UpdaterConfig:
        """
        Build the run configuration.

        Args:
            config_path: Optional YAML file with overrides
            environ: Environment to read the token from (defaults to os.environ)
            root_dir: Repository root overriding the file value

        Returns:
            UpdaterConfig: Validated configuration object

        Raises:
            ConfigurationError: If the token is missing or validation fails
        """
        env = os.environ if environ is None else environ
        config_data = ConfigManager.read_yaml(config_path) if config_path else {}

        crowdin_section = config_data.get("crowdin") or {}
        if not isinstance(crowdin_section, dict):
            raise ConfigurationError("'crowdin' section must be a mapping")
        crowdin_data: dict[str, object] = dict(crowdin_section)  # pyright: ignore[reportUnknownArgumentType]

        token = env.get(TOKEN_ENV_VAR)
        if token:
            crowdin_data["token"] = token
        if not crowdin_data.get("token"):
            raise ConfigurationError(
                f"Crowdin token is required (set the {TOKEN_ENV_VAR} environment variable)"
            )
        config_data["crowdin"] = crowdin_data

        if root_dir is not None:
            config_data["root_dir"] = root_dir

        try:
            config = UpdaterConfig.model_validate(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        config.root_dir = config.root_dir.expanduser().resolve()
        logger.debug(f"Loaded configuration for project {config.crowdin.project_id}")
        return config
