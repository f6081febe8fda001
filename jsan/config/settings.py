"""
Centralized Configuration Management for jsan

This module provides the process-wide settings using Pydantic for validation.
Settings are read once from the environment (and an optional YAML or JSON file)
and are treated as read-only afterwards.
"""

import logging
import os
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(
        'WARNING',
        description="Logging level"
    )
    log_format: Literal['json', 'human'] = Field(
        'human',
        description="Log output format"
    )
    log_output: str = Field(
        'stderr',
        description="Log output destination (stdout, stderr, or file path)"
    )

    model_config = ConfigDict(env_prefix='JSAN_')


class CodecConfig(BaseSettings):
    """Encoder/decoder defaults."""

    extended_types: bool = Field(
        False,
        description="Tag extended kinds when encode() is called without options"
    )
    warn_on_fallback: bool = Field(
        False,
        description="Log lossy fallback conversions at WARNING instead of DEBUG"
    )

    model_config = ConfigDict(env_prefix='JSAN_')


_SECTIONS = {'logging': LoggingConfig, 'codec': CodecConfig}


def _with_environment(section_cls: type[BaseSettings], file_section: dict[str, Any]) -> dict[str, Any]:
    """Overlay the section's JSAN_* environment values on a file section."""
    from_env = section_cls()
    return {**file_section, **from_env.model_dump(include=from_env.model_fields_set)}


class Settings(BaseSettings):
    """Main settings class combining all configuration sections."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)

    config_file: Optional[Path] = Field(
        None,
        description="Path to configuration file (YAML or JSON)"
    )

    @model_validator(mode='before')
    @classmethod
    def load_from_file(cls, values):
        """Load configuration from file if specified."""
        if isinstance(values, dict):
            config_file = values.get('config_file') or os.getenv('JSAN_CONFIG_FILE')

            if config_file and os.path.exists(config_file):
                import json

                import yaml

                config_file = str(config_file)
                with open(config_file) as f:
                    if config_file.endswith('.json'):
                        file_config = json.load(f)
                    elif config_file.endswith(('.yml', '.yaml')):
                        file_config = yaml.safe_load(f) or {}
                    else:
                        raise ValueError(f"Unsupported config file format: {config_file}")

                # Sections given explicitly take precedence over the file,
                # JSAN_* variables take precedence within a file section
                for key, value in file_config.items():
                    if key in values and values[key] is not None:
                        continue
                    section_cls = _SECTIONS.get(key)
                    if section_cls is not None and isinstance(value, dict):
                        value = _with_environment(section_cls, value)
                    values[key] = value

        return values

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump(mode='json')

    def to_yaml(self) -> str:
        """Export settings to YAML format."""
        import yaml
        return yaml.safe_dump(self.to_dict(), default_flow_style=False)

    def to_json(self) -> str:
        """Export settings to JSON format."""
        import json
        return json.dumps(self.to_dict(), indent=2)

    def save(self, filepath: Path) -> None:
        """Save configuration to file."""
        filepath = Path(filepath)

        if filepath.suffix == '.json':
            content = self.to_json()
        elif filepath.suffix in ['.yml', '.yaml']:
            content = self.to_yaml()
        else:
            raise ValueError(f"Unsupported file format: {filepath.suffix}")

        with open(filepath, 'w') as f:
            f.write(content)

        logging.getLogger(__name__).info(f"Configuration saved to {filepath}")

    model_config = ConfigDict(
        env_prefix='JSAN_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=False
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get global settings instance (singleton pattern)."""
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """Force reload of settings from environment."""
    global _settings
    _settings = None
    return get_settings()


def get_codec_config() -> CodecConfig:
    """Get encoder/decoder defaults."""
    return get_settings().codec


def get_logging_config() -> LoggingConfig:
    """Get logging configuration."""
    return get_settings().logging
