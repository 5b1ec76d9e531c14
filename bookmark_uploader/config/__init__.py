"""Configuration loading for the Bookmark Uploader."""

from .configuration import Configuration
from .pydantic_config import (
    ConfigurationManager,
    LoggingConfig,
    ParserConfig,
    TagRulesConfig,
    UploaderConfig,
    format_config_error,
)

__all__ = [
    "Configuration",
    "ConfigurationManager",
    "LoggingConfig",
    "ParserConfig",
    "TagRulesConfig",
    "UploaderConfig",
    "format_config_error",
]
