"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class CapabilitiesConfig(BaseSettings):
    """Correspondent bank capabilities configuration"""

    # Capabilities source
    capabilities_path: str = "capabilities.json"
    reload_on_each_call: bool = False  # Re-read the file on every query

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stderr

    class Config:
        env_prefix = "CAPABILITIES_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = CapabilitiesConfig()


def get_config() -> CapabilitiesConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> CapabilitiesConfig:
    """Reload configuration from environment"""
    global config
    config = CapabilitiesConfig()
    return config
