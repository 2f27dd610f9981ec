"""Application settings using Pydantic for configuration management."""

import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field, field_validator
import yaml

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Environment variables that override values from the YAML file
ENV_OVERRIDES = {
    "PNGMETA_LOG_LEVEL": "log_level",
    "PNGMETA_LOG_FILE": "log_file",
    "PNGMETA_MAX_UPLOAD_BYTES": "max_upload_bytes",
}


class Settings(BaseModel):
    """Application settings with validation."""

    # Server settings
    host: str = Field(default="127.0.0.1", description="Host to bind")
    port: int = Field(default=7863, description="Port to serve")
    max_upload_bytes: int = Field(default=20_000_000, description="Largest PNG accepted by the API, in bytes")

    # Logging settings
    log_level: str = Field(default="INFO", description="Log level for the pngmeta logger")
    log_file: Optional[Path] = Field(default=None, description="Log to this file instead of stderr")

    @field_validator('port')
    @classmethod
    def validate_port(cls, v):
        """Validate port range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {v}")
        return v

    @field_validator('max_upload_bytes')
    @classmethod
    def validate_max_upload_bytes(cls, v):
        if v <= 0:
            raise ValueError(f"max_upload_bytes must be positive, got {v}")
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize and validate the log level name."""
        level = str(v).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level

    @field_validator('log_file', mode='before')
    @classmethod
    def expand_log_file(cls, v):
        if v in (None, ""):
            return None
        return Path(v).expanduser()

    @classmethod
    def load_from_yaml(cls, config_file: Optional[Path] = None) -> 'Settings':
        """Load settings from YAML file with env var override capability."""
        config_file = config_file or Path("config/config.yml")

        config_data = {}
        if config_file.exists():
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    config_data = yaml.safe_load(f) or {}
            except Exception as e:
                print(f"Warning: Could not load {config_file}: {e}")

        for env_name, field_name in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                config_data[field_name] = value

        return cls(**config_data)
