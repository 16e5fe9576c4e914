"""Configuration management for the bean implementation generator."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class GeneratorConfig(BaseModel):
    """Naming and layout of generated implementation classes."""

    impl_suffix: str = Field(
        default="Impl",
        description="Appended to the interface name to form the class name",
    )
    namespace_suffix: str = Field(
        default="impl",
        description="Module suffix under which generated classes are published",
    )
    field_prefix: str = Field(
        default="_",
        description="Prefix of the backing attribute holding a property value",
    )
    install_namespace: bool = Field(
        default=False,
        description="Register generated namespaces in sys.modules (enables pickling)",
    )

    @field_validator("impl_suffix")
    @classmethod
    def validate_impl_suffix(cls, v: str) -> str:
        """Class name suffix must keep the generated name an identifier."""
        if not v or not v.isidentifier():
            msg = f"Invalid implementation suffix: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("namespace_suffix")
    @classmethod
    def validate_namespace_suffix(cls, v: str) -> str:
        """Namespace suffix must be a valid module name component."""
        if not v or not v.isidentifier():
            msg = f"Invalid namespace suffix: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("field_prefix")
    @classmethod
    def validate_field_prefix(cls, v: str) -> str:
        """Backing fields must not collide with accessor names."""
        if not v or not f"{v}x".isidentifier():
            msg = f"Invalid field prefix: {v!r}"
            raise ValueError(msg)
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: str = "text"
    console_colorized: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            msg = f"Invalid log level: {v}"
            raise ValueError(msg)
        return level

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log output format."""
        if v not in ("json", "text"):
            msg = f"Invalid log format: {v}"
            raise ValueError(msg)
        return v


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="BEANGEN_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Configuration sections
    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "Settings":
        """Load settings from YAML configuration file."""
        if not config_path.exists():
            msg = f"Configuration file not found: {config_path}"
            raise FileNotFoundError(msg)

        with config_path.open() as f:
            config_data = yaml.safe_load(f)

        # Expand environment variables in configuration
        config_data = cls._expand_env_vars(config_data)

        if not config_data:
            return cls()

        # Values from the file take precedence over environment values
        env_settings = cls()
        init_data = {
            field_name: getattr(env_settings, field_name)
            for field_name in cls.model_fields
        }
        init_data.update(config_data)
        return cls(**init_data)

    @staticmethod
    def _expand_env_vars(config: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(config, dict):
            return {k: Settings._expand_env_vars(v) for k, v in config.items()}
        if isinstance(config, list):
            return [Settings._expand_env_vars(item) for item in config]
        if isinstance(config, str) and config.startswith("${") and config.endswith("}"):
            env_var = config[2:-1]
            return os.getenv(env_var, config)
        return config


class SettingsManager:
    """Manages the singleton settings instance."""

    def __init__(self):
        self._settings: Settings | None = None

    def get(self) -> Settings:
        """Get application settings singleton."""
        if self._settings is None:
            self._settings = self._load(None)
        return self._settings

    def reload(self, config_path: Path | None = None) -> Settings:
        """Reload settings from configuration file."""
        self._settings = self._load(config_path)
        return self._settings

    @staticmethod
    def _load(config_path: Path | None) -> Settings:
        if config_path is None:
            config_path = Path(os.getenv("BEANGEN_CONFIG_PATH", "beangen.yaml"))
        if config_path.exists():
            return Settings.from_yaml(config_path)
        return Settings()


_settings_manager = SettingsManager()


def get_settings() -> Settings:
    """Get application settings."""
    return _settings_manager.get()


def reload_settings(config_path: Path | None = None) -> Settings:
    """Reload application settings."""
    return _settings_manager.reload(config_path)
