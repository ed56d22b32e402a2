"""Common configuration classes."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent.parent / "config" / "gateway.yaml"


class BaseConfig(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        from_attributes=True,
    )


class LoggingConfig(BaseConfig):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        description="Root log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format",
    )
    filename: str | None = Field(
        default=None,
        description="Optional rotating log file",
    )
    max_bytes: int = Field(
        default=10 * 1024 * 1024,
        gt=0,
        description="Rotate the log file after this many bytes",
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        description="Number of rotated files to keep",
    )

    def configure(self) -> None:
        """Setup logging based on configuration."""
        logging.basicConfig(level=self.level.upper(), format=self.format)

        if self.filename:
            handler = RotatingFileHandler(
                filename=self.filename,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
            )
            handler.setFormatter(logging.Formatter(self.format))
            logging.getLogger().addHandler(handler)


class RootConfig(BaseConfig):
    """Root configuration."""

    lookup: dict[str, Any] = Field(
        default_factory=dict,
        description="Tweet lookup configuration",
    )
    sentiment: dict[str, Any] = Field(
        default_factory=dict,
        description="Sentiment analysis configuration",
    )
    logging: LoggingConfig | None = Field(
        default=None,
        description="Logging configuration",
    )

    def __init__(self, **data):
        """Initialize root config."""
        super().__init__(**data)
        if self.logging:
            self.logging.configure()


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file."""

    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


TConf = TypeVar("TConf", bound=BaseConfig)
