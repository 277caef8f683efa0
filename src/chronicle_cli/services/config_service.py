"""Configuration service: loads and saves ``config.json``."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import ValidationError as PydanticValidationError

from chronicle_cli.config import AppConfig
from chronicle_cli.errors import AppError
from chronicle_cli.utils import exit_codes

logger = logging.getLogger(__name__)


class ConfigService:
    """Single source of truth for the application configuration."""

    def __init__(self, config_dir: Path | None = None):
        self.config_dir = config_dir or Path(user_config_dir("chronicle_cli"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration, writing defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
            self.save_config()
        except PydanticValidationError as e:
            logger.error("invalid config file %s: %s", self.config_path, e)
            raise AppError(
                f"Invalid config file {self.config_path}: {e}",
                exit_code=exit_codes.ERROR_INVALID_ARGS,
            ) from e
        except OSError as e:
            raise AppError(
                f"Failed to load config: {e}", exit_code=exit_codes.ERROR_STORAGE
            ) from e

        return self._config

    def save_config(self) -> None:
        """Save the current configuration."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))
            self.config_path.chmod(0o600)
        except OSError as e:
            raise AppError(
                f"Failed to save config: {e}", exit_code=exit_codes.ERROR_STORAGE
            ) from e

    def set_value(self, key: str, value: str) -> AppConfig:
        """
        Set a dotted config key such as ``focus.work_minutes``.

        The value is parsed as JSON when possible, so ``50`` and ``false``
        become an int and a bool. The whole config is revalidated before
        saving; an invalid value leaves the stored config unchanged.
        """
        data: dict[str, Any] = self.config.model_dump()
        parts = key.split(".")
        target = data
        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS)
            target = target[part]
        if parts[-1] not in target:
            raise AppError(f"Unknown config key: {key}", exit_codes.ERROR_INVALID_ARGS)

        try:
            parsed: Any = json.loads(value)
        except json.JSONDecodeError:
            parsed = value
        target[parts[-1]] = parsed

        try:
            new_config = AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise AppError(
                f"Invalid value for {key}: {value}", exit_codes.ERROR_INVALID_ARGS
            ) from e

        self._config = new_config
        self.save_config()
        return new_config

    def reset_config(self) -> AppConfig:
        """Reset configuration to defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
