"""
Input validation utilities for the Bookmark Uploader.

This module provides validation functions for command-line arguments.
"""

import os
from pathlib import Path
from typing import Union

from ..core.bookmark_html_parser import BookmarkHTMLParser
from .error_handler import ValidationError


def validate_input_file(file_path: Union[str, Path]) -> Path:
    """
    Validate that the bookmark export exists and is readable.

    Args:
        file_path: Path to the exported bookmark file

    Returns:
        Validated Path object

    Raises:
        ValidationError: If file doesn't exist, isn't readable or isn't HTML
    """
    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"Input file does not exist: {file_path}")

    if not path.is_file():
        raise ValidationError(f"Input path is not a file: {file_path}")

    if not os.access(path, os.R_OK):
        raise ValidationError(f"Input file is not readable: {file_path}")

    if path.suffix.lower() not in BookmarkHTMLParser.SUPPORTED_EXTENSIONS:
        raise ValidationError(f"Input file must be an HTML bookmark export, got: {path.suffix}")

    return path.absolute()


def validate_output_file(file_path: Union[str, Path]) -> Path:
    """
    Validate that output file path is writable.

    Args:
        file_path: Path to the payload file

    Returns:
        Validated Path object

    Raises:
        ValidationError: If path isn't writable or parent can't be created
    """
    path = Path(file_path)

    parent = path.parent
    if not parent.exists():
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ValidationError(f"Cannot create output directory: {parent}: {e}")

    if not os.access(parent, os.W_OK):
        raise ValidationError(f"Output directory is not writable: {parent}")

    if path.exists() and not os.access(path, os.W_OK):
        raise ValidationError(f"Output file exists and is not writable: {file_path}")

    if path.suffix.lower() != ".json":
        raise ValidationError(f"Output file must be a JSON file, got: {path.suffix}")

    return path.absolute()


def validate_config_file(file_path: Union[str, Path, None]) -> Union[Path, None]:
    """
    Validate configuration file if provided.

    Args:
        file_path: Path to the config file or None

    Returns:
        Validated Path object or None

    Raises:
        ValidationError: If file doesn't exist or isn't readable
    """
    if file_path is None:
        return None

    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"Configuration file does not exist: {file_path}")

    if not path.is_file():
        raise ValidationError(f"Configuration path is not a file: {file_path}")

    if not os.access(path, os.R_OK):
        raise ValidationError(f"Configuration file is not readable: {file_path}")

    if path.suffix.lower() not in [".toml", ".json"]:
        raise ValidationError(
            f"Configuration file must be .toml or .json file, got: {path.suffix}"
        )

    return path.absolute()
