"""
Pydantic-based configuration system for Bookmark Uploader.

Settings are grouped into tag rules, parser and logging sections and can be
loaded from TOML or JSON files, environment variables and CLI overrides.
"""

import json
import os
import sys
import warnings
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import toml
from pydantic import (
    BaseModel,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from ..core.data_models import LinkTagStrategy, sanitize_category_name
from ..core.tag_deriver import (
    DEFAULT_FALLBACK_TAG,
    DEFAULT_MAX_TAG_NAME_LENGTH,
    DEFAULT_RESERVED_TAG_NAME,
    TagRules,
)
from ..utils.error_handler import ConfigurationError

ENV_FALLBACK_TAG = "BOOKMARK_UPLOADER_FALLBACK_TAG"
ENV_LOG_LEVEL = "BOOKMARK_UPLOADER_LOG_LEVEL"


class TagRulesConfig(BaseModel):
    """How folder names turn into tags."""

    fallback_tag: str = Field(
        default=DEFAULT_FALLBACK_TAG,
        min_length=1,
        description="Tag attached to every bookmark",
        json_schema_extra={
            "error_msg": "Fallback tag must be a non-empty name. "
            "It is always attached and cannot be removed."
        },
    )
    max_tag_name_length: int = Field(
        default=DEFAULT_MAX_TAG_NAME_LENGTH,
        ge=1,
        le=100,
        description="Longest folder name that can become a tag",
        json_schema_extra={
            "error_msg": "Maximum tag name length must be between 1 and 100. "
            "Tags should stay short and readable."
        },
    )
    reserved_tag_name: str = Field(
        default=DEFAULT_RESERVED_TAG_NAME,
        description="Folder name never checked as a tag by default",
    )

    @field_validator("fallback_tag")
    @classmethod
    def validate_fallback_tag(cls, v):
        """The fallback tag goes into URLs just like folder names."""
        sanitized = sanitize_category_name(v)
        if sanitized != v:
            raise ValueError(
                "Fallback tag must not contain '/', '+' or whitespace "
                f"(suggestion: '{sanitized}')"
            )
        return v

    @model_validator(mode="after")
    def validate_fallback_length(self):
        if len(self.fallback_tag) > self.max_tag_name_length:
            warnings.warn(
                f"Fallback tag '{self.fallback_tag}' is longer than "
                f"max_tag_name_length ({self.max_tag_name_length}); "
                "it will still be attached to every bookmark.",
                UserWarning,
            )
        return self

    def to_rules(self) -> TagRules:
        return TagRules(
            fallback_tag=self.fallback_tag,
            max_tag_name_length=self.max_tag_name_length,
            reserved_tag_name=self.reserved_tag_name,
        )


class ParserConfig(BaseModel):
    """Markup parsing settings."""

    markup_parser: Literal["lxml", "html.parser"] = Field(
        default="lxml",
        description="BeautifulSoup tree builder",
        json_schema_extra={
            "error_msg": "Markup parser must be 'lxml' or 'html.parser'. "
            "Recommended: lxml for large exports."
        },
    )


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Root log level"
    )
    log_file: Optional[Path] = Field(
        default=None, description="Optional log file (timestamp is appended)"
    )
    console_output: bool = Field(default=True, description="Log to the console")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class UploaderConfig(BaseModel):
    """Main configuration model."""

    tags: TagRulesConfig = Field(default_factory=TagRulesConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    default_strategy: LinkTagStrategy = Field(
        default=LinkTagStrategy.FOLDER_PATH,
        description="Tag linking strategy used when none is given",
        json_schema_extra={
            "error_msg": "Strategy must be 'folder_path', 'closed_folder' or 'other'."
        },
    )


class ConfigurationManager:
    """Manages loading and validation of configuration from multiple sources."""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to configuration file (TOML or JSON)
        """
        self._config: Optional[UploaderConfig] = None
        self._load_configuration(config_path)

    def _get_default_config_paths(self) -> list:
        """Get list of default configuration file paths to try."""
        if getattr(sys, "frozen", False):
            app_dir = Path(sys.executable).parent
            return [
                app_dir / "config" / "user_config.toml",
                app_dir / "config" / "user_config.json",
            ]

        return [
            Path.cwd() / "bookmark_uploader.toml",
            Path.cwd() / "bookmark_uploader.json",
        ]

    def _load_configuration(self, config_path: Optional[Path] = None) -> None:
        """Load configuration from file or use defaults."""
        config_data: Dict[str, Any] = {}

        if config_path:
            config_data = self._load_config_file(Path(config_path))
        else:
            for path in self._get_default_config_paths():
                if path.exists():
                    config_data = self._load_config_file(path)
                    break

        self._apply_env_overrides(config_data)

        try:
            self._config = UploaderConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Load configuration from TOML or JSON file."""
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix not in (".toml", ".json"):
            raise ConfigurationError(f"Unsupported configuration file format: {config_path.suffix}")

        try:
            if suffix == ".toml":
                return toml.load(config_path)
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (toml.TomlDecodeError, json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}") from e

    def _apply_env_overrides(self, config_data: Dict[str, Any]) -> None:
        """Environment variables win over file values."""
        fallback_tag = os.getenv(ENV_FALLBACK_TAG)
        log_level = os.getenv(ENV_LOG_LEVEL)

        if fallback_tag:
            config_data.setdefault("tags", {})["fallback_tag"] = fallback_tag
        if log_level:
            config_data.setdefault("logging", {})["level"] = log_level

    def update_from_cli_args(self, args: Dict[str, Any]) -> None:
        """Update configuration from command-line arguments."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")

        config_dict = self._config.model_dump()

        if args.get("strategy"):
            config_dict["default_strategy"] = args["strategy"]

        if args.get("markup_parser"):
            config_dict["parser"]["markup_parser"] = args["markup_parser"]

        if args.get("verbose"):
            config_dict["logging"]["level"] = "DEBUG"

        try:
            self._config = UploaderConfig(**config_dict)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    @property
    def config(self) -> UploaderConfig:
        """Get the current configuration."""
        if not self._config:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def create_sample_config(self, output_path: Path, format: str = "toml") -> None:
        """Create a sample configuration file."""
        sample_config = {
            "default_strategy": LinkTagStrategy.FOLDER_PATH.value,
            "tags": {
                "fallback_tag": DEFAULT_FALLBACK_TAG,
                "max_tag_name_length": DEFAULT_MAX_TAG_NAME_LENGTH,
                "reserved_tag_name": DEFAULT_RESERVED_TAG_NAME,
            },
            "parser": {"markup_parser": "lxml"},
            "logging": {"level": "INFO", "console_output": True},
        }

        if format.lower() == "toml":
            with open(output_path, "w", encoding="utf-8") as f:
                toml.dump(sample_config, f)
        elif format.lower() == "json":
            with open(output_path, "w", encoding="utf-8") as f:
                json.dump(sample_config, f, indent=2)
        else:
            raise ValueError(f"Unsupported format: {format}")


class ConfigurationErrorFormatter:
    """Formats Pydantic validation errors into user-friendly messages."""

    @staticmethod
    def format_validation_error(error: ValidationError) -> str:
        """
        Convert Pydantic ValidationError into a user-friendly error message.

        Args:
            error: Pydantic ValidationError instance

        Returns:
            Formatted error message with helpful guidance
        """
        error_messages = []

        for error_detail in error.errors():
            location = ConfigurationErrorFormatter._format_error_location(
                error_detail["loc"]
            )
            error_messages.append(
                ConfigurationErrorFormatter._format_by_error_type(
                    location,
                    error_detail["type"],
                    error_detail,
                    error_detail.get("input", "N/A"),
                )
            )

        header = "Configuration Validation Failed:\n"
        separator = "\n" + "-" * 60 + "\n"
        footer = (
            "\n\nTips:\n"
            "- Check the configuration file format (TOML or JSON)\n"
            "- Ensure numeric values are within the allowed ranges\n"
            "- Use 'bookmark-uploader --create-config PATH' to generate a sample file"
        )

        return header + separator + "\n".join(error_messages) + footer

    @staticmethod
    def _format_error_location(location: tuple) -> str:
        """Format the error location path."""
        if not location:
            return "Configuration"

        path_parts = []
        for part in location:
            if isinstance(part, str):
                path_parts.append(part)
            else:
                path_parts.append(f"[{part}]")

        return " -> ".join(path_parts)

    @staticmethod
    def _format_by_error_type(
        location: str, error_type: str, error_detail: dict, input_value
    ) -> str:
        """Format error message based on Pydantic error type."""

        if error_type == "missing":
            return f"x {location}: Required field is missing"

        if error_type in (
            "greater_than_equal",
            "less_than_equal",
            "greater_than",
            "less_than",
        ):
            ctx = error_detail.get("ctx", {})
            limit = next(iter(ctx.values()), "limit")
            operator = {
                "greater_than_equal": ">=",
                "less_than_equal": "<=",
                "greater_than": ">",
                "less_than": "<",
            }[error_type]
            return f"x {location}: Value must be {operator} {limit} (got: {input_value})"

        if error_type in ("literal_error", "enum"):
            expected = error_detail.get("ctx", {}).get("expected", "valid option")
            return f"x {location}: Must be one of {expected} (got: {input_value})"

        if error_type == "string_too_short":
            min_length = error_detail.get("ctx", {}).get("min_length", "minimum")
            return (
                f"x {location}: String too short, minimum {min_length} "
                f"characters (got: {len(str(input_value))})"
            )

        msg = error_detail.get("msg", "Invalid configuration value")
        return f"x {location}: {msg} (got: {input_value})"


def format_config_error(error: Exception) -> str:
    """
    Format any configuration-related error into a user-friendly message.

    Args:
        error: Exception that occurred during configuration

    Returns:
        Formatted error message
    """
    if isinstance(error, ValidationError):
        return ConfigurationErrorFormatter.format_validation_error(error)

    if isinstance(error, FileNotFoundError):
        return (
            f"Configuration File Not Found:\n"
            f"x {error}\n\n"
            f"Solutions:\n"
            f"- Create a configuration file using: bookmark-uploader --create-config PATH\n"
            f"- Use default configuration by omitting the --config parameter"
        )

    return f"Unexpected Configuration Error:\nx {error}"
