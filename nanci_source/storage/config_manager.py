"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from nanci_source.exceptions import ConfigurationError
from nanci_source.models.config import SourceConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the plugin's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> SourceConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error: the built-in defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Options set to None are ignored.

        Returns:
            A validated SourceConfig object.

        Raises:
            ConfigurationError: If the config file is unreadable or validation fails.
        """
        config_from_file: dict[str, Any] = {}

        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            config_from_file = self._get_config_as_dict()
        else:
            log.debug(f"No config file at '{self.config_file_path}', using defaults.")

        if cli_options:
            config_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        return SourceConfig.build(**config_from_file)

    def save_new_config(self, settings: dict[str, Any]) -> None:
        """
        Creates and saves a new configuration file.

        Args:
            settings: A dictionary of settings to save. Missing keys get defaults.

        Raises:
            ConfigurationError: If the settings are invalid or cannot be written.
        """
        validated = SourceConfig.build(**settings)

        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {
            key: self._to_ini_value(getattr(validated, key))
            for key in SourceConfig.get_ini_keys()
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        timeout = section.get("timeout", "").strip()
        try:
            timeout_value = float(timeout) if timeout else None
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid timeout value in configuration file: '{timeout}'"
            ) from e

        defaults = SourceConfig()
        return {
            "base_address": section.get("base_address", defaults.base_address),
            "account_name": section.get("account_name", defaults.account_name),
            "access_key": section.get("access_key", defaults.access_key),
            "user_agent": section.get("user_agent", defaults.user_agent),
            "timeout": timeout_value,
        }

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = SourceConfig()
        needs_saving = False

        config_section = self._parser["DEFAULT"]

        for key in SourceConfig.get_ini_keys():
            if key not in config_section:
                config_section[key] = self._to_ini_value(getattr(defaults, key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving

    @staticmethod
    def _to_ini_value(value: Any) -> str:
        return "" if value is None else str(value)
