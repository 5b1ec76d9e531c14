"""
Command-line interface for the Bookmark Uploader.

This module drives one import session from the command line: parse a
browser bookmark export, adjust the folder selection and tags, and hand the
resulting upload payload to the JSON writer.
"""

import argparse
import logging
import sys
import warnings
from pathlib import Path
from typing import Set

from bookmark_uploader import __version__
from bookmark_uploader.config.configuration import Configuration
from bookmark_uploader.core.bookmark_html_parser import BookmarkHTMLParser
from bookmark_uploader.core.data_models import (
    LinkTagStrategy,
    direct_bookmarks_key,
    sanitize_category_name,
)
from bookmark_uploader.core.export_guide import EXPORT_GUIDE
from bookmark_uploader.core.session import ImportSession
from bookmark_uploader.core.tree_index import find_categories_by_name, iter_category_nodes
from bookmark_uploader.core.uploaders import JSONPayloadWriter
from bookmark_uploader.utils.error_handler import (
    BookmarkUploaderError,
    ConfigurationError,
    EmptySelectionWarning,
    ValidationError,
)
from bookmark_uploader.utils.logging_setup import setup_logging
from bookmark_uploader.utils.tree_render import render_selection
from bookmark_uploader.utils.validation import (
    validate_config_file,
    validate_input_file,
    validate_output_file,
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_EMPTY_SELECTION = 2


class CLIInterface:
    """Command line interface for one bookmark import."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser."""
        parser = argparse.ArgumentParser(
            prog="bookmark-uploader",
            description=(
                "Bookmark Uploader - turn a browser bookmark export into "
                "tagged bookmarks ready for upload"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-uploader --input bookmarks.html --output payload.json
  bookmark-uploader --input bookmarks.html --strategy closed_folder --show-tree
  bookmark-uploader --input bookmarks.html --exclude-folder Archive \\
    --direct-only Work --uncheck-tag Reading
  bookmark-uploader --guide

Tag strategies:
  folder_path    every ancestor folder of a bookmark becomes a tag
  closed_folder  only the innermost folder becomes a tag
  other          only the fallback tag is attached

Folder selection:
  Every folder starts selected. --exclude-folder drops a folder and all of
  its sub-folders; --direct-only keeps only the bookmarks placed directly in
  a folder. Use --show-tree to see folder keys and the resulting tags.

Configuration:
  Settings can be provided via TOML or JSON files (--config, or
  bookmark_uploader.toml in the current directory).
  Environment variables: BOOKMARK_UPLOADER_FALLBACK_TAG,
  BOOKMARK_UPLOADER_LOG_LEVEL
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )
        parser.add_argument(
            "--guide",
            action="store_true",
            help="Show how to export bookmarks from common browsers and exit",
        )
        parser.add_argument(
            "--create-config",
            metavar="PATH",
            help="Write a sample configuration file (.toml or .json) and exit",
        )

        parser.add_argument(
            "--input",
            "-i",
            help="Bookmark export (Netscape bookmark HTML file)",
        )
        parser.add_argument(
            "--output",
            "-o",
            help="Payload JSON file (written to stdout if omitted)",
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Custom configuration file path (TOML or JSON format)",
        )
        parser.add_argument(
            "--strategy",
            choices=[s.value for s in LinkTagStrategy],
            help="Tag linking strategy (default: from configuration, folder_path)",
        )
        parser.add_argument(
            "--markup-parser",
            choices=["lxml", "html.parser"],
            help="BeautifulSoup tree builder used to read the export",
        )
        parser.add_argument(
            "--exclude-folder",
            action="append",
            default=[],
            metavar="NAME",
            help="Do not import this folder or its sub-folders (repeatable)",
        )
        parser.add_argument(
            "--direct-only",
            action="append",
            default=[],
            metavar="NAME",
            help="Import only the bookmarks placed directly in this folder (repeatable)",
        )
        parser.add_argument(
            "--uncheck-tag",
            action="append",
            default=[],
            metavar="NAME",
            help="Do not attach this tag (repeatable)",
        )
        parser.add_argument(
            "--show-tree",
            action="store_true",
            help="Print the folder tree, tags and summary before writing the payload",
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable debug logging",
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> dict:
        """
        Validate all arguments and return processed values.

        Raises:
            ValidationError: If any validation fails
        """
        if not args.input:
            raise ValidationError("Input file is required (use --input/-i)")

        input_path = validate_input_file(args.input)
        output_path = validate_output_file(args.output) if args.output else None
        config_path = validate_config_file(args.config)

        return {
            "input_path": input_path,
            "output_path": output_path,
            "config_path": config_path,
            "strategy": args.strategy,
            "markup_parser": args.markup_parser,
            "exclude_folders": list(args.exclude_folder),
            "direct_only": list(args.direct_only),
            "uncheck_tags": list(args.uncheck_tag),
            "show_tree": args.show_tree,
            "verbose": args.verbose,
        }

    def process_arguments(self, validated_args: dict) -> Configuration:
        """
        Load configuration, apply command-line overrides and set up logging.
        """
        config = Configuration(validated_args["config_path"])
        config.update_from_args(validated_args)
        setup_logging(config.logging, verbose=validated_args["verbose"])
        return config

    def _handle_create_config(self, output: str) -> int:
        path = Path(output)
        fmt = "json" if path.suffix.lower() == ".json" else "toml"
        try:
            Configuration().create_sample_config(path, fmt)
        except (OSError, ConfigurationError) as e:
            print(f"Error creating configuration file: {e}", file=sys.stderr)
            return EXIT_ERROR
        print(f"Sample configuration written to {path}")
        return EXIT_OK

    def build_session(self, config: Configuration) -> ImportSession:
        return ImportSession(
            parser=BookmarkHTMLParser(markup_parser=config.markup_parser),
            tag_rules=config.tag_rules(),
            default_strategy=config.default_strategy,
        )

    def apply_selection(self, session: ImportSession, validated_args: dict) -> None:
        """Apply folder and tag choices from the command line to the session."""
        logger = logging.getLogger(__name__)
        checked = set(session.checked_keys)

        for name in validated_args["exclude_folders"]:
            matches = find_categories_by_name(session.tree, sanitize_category_name(name))
            if not matches:
                logger.warning(f"No folder named '{name}' to exclude")
            for category in matches:
                checked -= _subtree_keys(category)

        for name in validated_args["direct_only"]:
            matches = find_categories_by_name(session.tree, sanitize_category_name(name))
            if not matches:
                logger.warning(f"No folder named '{name}' for --direct-only")
            for category in matches:
                checked -= _subtree_keys(category)
                checked.add(direct_bookmarks_key(category.id))

        if checked != set(session.checked_keys):
            session.set_checked_keys(checked)

        if validated_args["uncheck_tags"]:
            session.uncheck_tags(
                *(sanitize_category_name(name) for name in validated_args["uncheck_tags"])
            )

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        try:
            parsed_args = self.parse_args(args)

            if parsed_args.guide:
                print(EXPORT_GUIDE)
                return EXIT_OK

            if parsed_args.create_config:
                return self._handle_create_config(parsed_args.create_config)

            validated_args = self.validate_args(parsed_args)
            config = self.process_arguments(validated_args)

            logger = logging.getLogger(__name__)
            logger.info("Bookmark Uploader CLI starting")
            logger.info(f"Input file: {validated_args['input_path']}")
            logger.info(f"Strategy: {config.default_strategy.value}")

            session = self.build_session(config)
            session.open_file(validated_args["input_path"])
            self.apply_selection(session, validated_args)

            if validated_args["show_tree"]:
                print(
                    render_selection(
                        session.display_tree,
                        session.checked_keys,
                        session.tag_options(),
                        summary=str(session.summary()),
                    ),
                    file=sys.stderr,
                )

            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always", EmptySelectionWarning)
                payload = session.submit()

            if payload is None:
                for warning in caught:
                    print(f"Warning: {warning.message}", file=sys.stderr)
                return EXIT_EMPTY_SELECTION

            writer = JSONPayloadWriter(validated_args["output_path"])
            result = writer.upload(payload)
            for message in result.warnings:
                logger.warning(message)
            logger.info(f"{result.count} bookmarks written to {result.destination}")
            return EXIT_OK

        except ValidationError as e:
            print(f"Validation Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except ConfigurationError as e:
            print(f"Configuration Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except BookmarkUploaderError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            logging.getLogger(__name__).exception("Unexpected error in CLI")
            return EXIT_ERROR


def _subtree_keys(category) -> Set[str]:
    keys: Set[str] = set()
    for node in iter_category_nodes(category):
        keys.add(node.id)
        keys.add(direct_bookmarks_key(node.id))
    return keys


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
