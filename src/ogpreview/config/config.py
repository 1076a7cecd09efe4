"""
Configuration management for OGPreview using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class ExtractionSettings(BaseModel):
    """Configuration for the scan/group/materialize pipeline."""

    keep_self_closing_tags: bool = Field(
        default=False,
        description="Report self-closing tags such as <meta ... /> instead of discarding them.",
    )


class FetchConfig(BaseModel):
    """Configuration for fetching documents over HTTP."""

    timeout: float = Field(default=30.0, description="HTTP request timeout in seconds.")
    user_agent: str = Field(
        default="OGPreviewBot/0.1 (+https://ogp.me)",
        description="User-Agent string for HTTP requests.",
    )
    max_retries: int = Field(default=2, description="Retry attempts for transient failures.")
    backoff_base_seconds: float = Field(default=0.5, description="First retry delay; doubles per attempt.")
    max_document_bytes: int = Field(default=5_000_000, description="Largest body accepted, in bytes.")

    @field_validator("timeout", "max_document_bytes")
    @classmethod
    def validate_positive(cls, v: float) -> float:
        """Ensure timeouts and size limits are positive."""
        if v <= 0:
            raise ValueError("must be greater than zero")
        return v

    @field_validator("max_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_retries cannot be negative")
        return v

    @field_validator("backoff_base_seconds")
    @classmethod
    def validate_backoff(cls, v: float) -> float:
        if v < 0:
            raise ValueError("backoff_base_seconds cannot be negative")
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging and metrics."""

    enabled: bool = True
    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to console.",
    )

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "OGPreview"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="OGPREVIEW_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)

    @classmethod
    def load(cls) -> Config:
        """Load from the discovered config file, or defaults plus environment."""
        config_path = find_config_file()
        if config_path is None:
            return cls()
        log.info("Loading configuration from: %s", config_path)
        return cls.from_yaml(config_path)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    paths_to_check = [
        current_dir / "ogpreview.yaml",
        current_dir / "ogpreview.yml",
    ]
    for path in paths_to_check:
        if path.exists():
            return path

    return None
