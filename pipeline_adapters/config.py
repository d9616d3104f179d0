"""
Configuration for pipeline_adapters.

Provides Config settings model, YAML settings source and logging setup.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from pipeline_adapters.constants import TransferDefaults
from pipeline_adapters.models import ContainerReference, TransferSettings


# ============================================
# Configuration Helpers
# ============================================


def _resolve_env_vars(value: Any) -> Any:
    """
    Recursively resolve ${VAR_NAME} environment variable references.

    Args:
        value: Value to process (can be str, dict, list, or primitive)

    Returns:
        Value with all ${VAR_NAME} references replaced with actual env var values

    Raises:
        ValueError: If referenced environment variable is not set
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}]+)\}"

        def replace_var(match):
            var_name = match.group(1)
            env_value = os.getenv(var_name)
            if env_value is None:
                raise ValueError(
                    f"Environment variable '{var_name}' is referenced in config "
                    f"but not set. Please set it before starting."
                )
            return env_value

        return re.sub(pattern, replace_var, value)
    elif isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    else:
        return value


# ============================================
# Custom Settings Source for YAML Config
# ============================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads config from YAML file specified by CONFIG_FILE env var."""

    def get_field_value(self, field, field_name):
        """Not used in Pydantic v2 - use __call__ instead."""
        pass

    def __call__(self):
        """Load configuration from YAML file with ${VAR} resolution."""
        config_file = os.getenv("CONFIG_FILE")

        if not config_file:
            return {}

        config_path = Path(config_file)
        if not config_path.exists():
            logging.getLogger(__name__).warning(f"CONFIG_FILE set but file not found: {config_file}")
            return {}

        try:
            with open(config_path) as f:
                yaml_data = yaml.safe_load(f)

            if yaml_data is None:
                return {}

            return _resolve_env_vars(yaml_data)

        except Exception as e:
            logging.getLogger(__name__).error(f"Failed to load YAML config from {config_file}: {e}")
            raise


# ============================================
# Configuration Models
# ============================================


class Config(BaseSettings):
    """Configuration for blob transfers and the command line entry point."""

    # Storage settings
    storage_account: str | None = Field(
        default=None,
        description="Azure storage account name",
        validation_alias=AliasChoices("storage_account", "AZURE_STORAGE_ACCOUNT"),
    )
    storage_access_key: str | None = Field(
        default=None,
        description="Shared access key for the storage account (null = anonymous access)",
        validation_alias=AliasChoices("storage_access_key", "AZURE_STORAGE_KEY"),
    )
    storage_container: str | None = Field(
        default=None,
        description="Blob container name",
        validation_alias=AliasChoices("storage_container", "AZURE_STORAGE_CONTAINER"),
    )
    storage_prefix: str = Field(default="", description="Folder inside the container that scopes all items")
    storage_account_url: str | None = Field(
        default=None, description="Blob service endpoint override (e.g. an emulator); null = public cloud endpoint"
    )
    keep_prefix: bool = Field(default=False, description="Keep the prefix on listed and downloaded item paths")

    # Transfer settings
    upload_block_size: int = Field(
        default=TransferDefaults.BLOCK_SIZE, description="Block size for chunked uploads (bytes)", gt=0
    )
    upload_max_concurrency: int = Field(
        default=TransferDefaults.MAX_CONCURRENCY, description="Concurrent block transfers per upload", gt=0
    )
    transfer_timeout: int = Field(
        default=TransferDefaults.TIMEOUT_SECONDS, description="Time budget per upload/download (seconds)", gt=0
    )
    download_max_retries: int = Field(
        default=TransferDefaults.DOWNLOAD_MAX_RETRIES, description="Maximum retries for a download", ge=0
    )
    list_page_size: int = Field(
        default=TransferDefaults.LIST_PAGE_SIZE, description="Blobs requested per listing page", gt=0
    )

    # Logging settings
    log_level: str = Field(default="INFO", description="Python logging level (DEBUG, INFO, WARNING, ERROR)")

    model_config = SettingsConfigDict(
        extra="ignore",  # Ignore unknown fields from YAML
        validate_assignment=True,  # Validate when fields are modified
        case_sensitive=False,  # Case-insensitive env var matching (STORAGE_PREFIX → storage_prefix)
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        """
        Customize settings source priority.

        Priority (highest to lowest):
        1. init_settings: Explicit constructor arguments (CLI overrides)
        2. env_settings: Environment variables
        3. YamlConfigSettingsSource: YAML file (with ${VAR} resolution)
        """
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
        )

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()

    def container_reference(self) -> ContainerReference:
        """
        Build the container reference for the configured storage settings.

        Raises:
            ValueError: If account or container is not configured
        """
        missing = [name for name in ("storage_account", "storage_container") if not getattr(self, name)]
        if missing:
            raise ValueError(f"Missing storage configuration: {', '.join(missing)}")
        return ContainerReference(
            storage_account=self.storage_account,
            container_name=self.storage_container,
            access_key=self.storage_access_key,
            prefix_folder_path=self.storage_prefix,
            account_url=self.storage_account_url,
            keep_prefix=self.keep_prefix,
        )

    def transfer_settings(self) -> TransferSettings:
        return TransferSettings(
            block_size=self.upload_block_size,
            max_concurrency=self.upload_max_concurrency,
            timeout=self.transfer_timeout,
            download_max_retries=self.download_max_retries,
            list_page_size=self.list_page_size,
        )


# ============================================
# Logging Setup
# ============================================


def setup_logging(config: Config) -> logging.Logger:
    """
    Configure logging for the pipeline_adapters package.

    Args:
        config: Configuration object

    Returns:
        Configured package logger
    """
    package_logger = logging.getLogger("pipeline_adapters")
    package_logger.setLevel(getattr(logging, config.log_level.upper()))

    # Clear existing handlers to avoid duplicates
    package_logger.handlers = []

    class ColoredFormatter(logging.Formatter):
        """Formatter that adds colors to log levels."""

        COLORS = {
            "DEBUG": "\033[36m",  # Cyan
            "INFO": "\033[32m",  # Green
            "WARNING": "\033[33m",  # Yellow
            "ERROR": "\033[31m",  # Red
            "CRITICAL": "\033[35m",  # Magenta
        }
        RESET = "\033[0m"

        def format(self, record):
            levelname = record.levelname
            if levelname in self.COLORS:
                record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"
            return super().format(record)

    formatter = ColoredFormatter("[%(asctime)s - %(levelname)s - %(name)s]: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    package_logger.debug(f"Logging configured at {config.log_level} level")

    return package_logger


# ============================================
# Environment Helpers
# ============================================


def get_config(**overrides: Any) -> Config:
    """
    Get configuration from YAML file (if specified) with environment variable overrides.

    Loading order (via custom settings sources):
    1. Explicit keyword overrides (CLI arguments) - highest priority
    2. Environment variables (auto-detected by BaseSettings)
    3. YAML file (if CONFIG_FILE env var set, with ${VAR} resolution)
    4. Field defaults - lowest priority

    Raises:
        ValueError: If config is invalid or references an unset env var
    """
    return Config(**{k: v for k, v in overrides.items() if v is not None})
