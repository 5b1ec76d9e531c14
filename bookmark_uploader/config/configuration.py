"""
Configuration access for the Bookmark Uploader.

Wraps the Pydantic-based ConfigurationManager and exposes the values the
import session and CLI need.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from ..core.data_models import LinkTagStrategy
from ..core.tag_deriver import TagRules
from .pydantic_config import ConfigurationManager, LoggingConfig, UploaderConfig


class Configuration:
    """
    Configuration facade used by the CLI.

    Example:
        >>> config = Configuration()
        >>> config.tag_rules().fallback_tag
        'Other'
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to user configuration file (TOML/JSON)
        """
        self._manager = ConfigurationManager(config_path)
        self._config = self._manager.config

    @property
    def config(self) -> UploaderConfig:
        """Get the underlying Pydantic configuration."""
        return self._config

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update configuration from command-line arguments.

        Args:
            args: Dictionary of validated arguments
        """
        self._manager.update_from_cli_args(args)
        self._config = self._manager.config

    def tag_rules(self) -> TagRules:
        return self._config.tags.to_rules()

    @property
    def markup_parser(self) -> str:
        return self._config.parser.markup_parser

    @property
    def default_strategy(self) -> LinkTagStrategy:
        return self._config.default_strategy

    @property
    def logging(self) -> LoggingConfig:
        return self._config.logging

    def create_sample_config(self, output_path: Path, format: str = "toml") -> None:
        self._manager.create_sample_config(output_path, format)
