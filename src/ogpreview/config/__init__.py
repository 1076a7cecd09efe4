"""Configuration models for OGPreview."""

from .config import Config, ExtractionSettings, FetchConfig, MonitoringConfig, find_config_file

__all__ = ["Config", "ExtractionSettings", "FetchConfig", "MonitoringConfig", "find_config_file"]
