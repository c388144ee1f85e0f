"""
Command-line interface for the Bookmark Importer.

This module provides the CLI for importing browser bookmark exports and
writing the normalized records as JSON.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from bookmark_importer.config.pydantic_config import ConfigurationManager
from bookmark_importer.core.import_module import BookmarkImporter, ImportOptions
from bookmark_importer.utils.error_handler import BookmarkImportError
from bookmark_importer.utils.logging_setup import setup_logging


class ProgressReporter:
    """Shows pipeline progress events as a tqdm bar on stderr."""

    def __init__(self, enabled: bool = True):
        self.pbar = tqdm(
            total=100,
            desc="Starting",
            unit="%",
            file=sys.stderr,
            leave=False,
            disable=not enabled,
        )

    def __call__(self, step: str, percent: int) -> None:
        self.pbar.set_description(step.title())
        self.pbar.update(max(percent - self.pbar.n, 0))

    def close(self) -> None:
        self.pbar.close()


class CLIInterface:
    """Command line interface for bookmark imports."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser."""
        parser = argparse.ArgumentParser(
            prog="bookmark-importer",
            description=(
                "Bookmark Importer - Import browser bookmark exports "
                "(HTML, Netscape, JSON) as normalized records"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-importer bookmarks.html
  bookmark-importer bookmarks.html --output records.json
  bookmark-importer chrome_bookmarks.json --max-bookmarks 1000 --verbose
  bookmark-importer export.html --no-validate-urls --keep-duplicates
  bookmark-importer --create-config bookmark_importer.toml

Configuration:
  Size limits and default options can be provided in a TOML or JSON file.
  bookmark_importer.toml (or .json) in the current directory is loaded
  automatically; use --config to point at another file.
  The BOOKMARK_IMPORTER_MAX_BOOKMARKS environment variable overrides the
  configured bookmark cap.

Exit codes:
  0  import succeeded (including files with no usable bookmarks)
  1  the file could not be read, recognized or imported
            """,
        )

        parser.add_argument(
            "--version", "-V", action="version", version="%(prog)s 1.0.0"
        )

        parser.add_argument(
            "input",
            nargs="?",
            help="Bookmark export file (.html, .htm or .json)",
        )
        parser.add_argument(
            "--output",
            "-o",
            help="Write the JSON result to this file instead of stdout",
        )
        parser.add_argument(
            "--config",
            "-c",
            help="Configuration file (TOML or JSON)",
        )
        parser.add_argument(
            "--create-config",
            metavar="PATH",
            help="Write a configuration file with the default values and exit",
        )

        # Import options
        parser.add_argument(
            "--max-bookmarks",
            type=int,
            help="Keep at most this many bookmarks, first ones in file order",
        )
        parser.add_argument(
            "--no-validate-urls",
            action="store_true",
            help="Keep bookmarks whose URL is not absolute",
        )
        parser.add_argument(
            "--keep-duplicates",
            action="store_true",
            help="Keep every bookmark even when URLs repeat",
        )
        parser.add_argument(
            "--no-folders",
            action="store_true",
            help="Leave folder names out of the result",
        )

        # Output control
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Log pipeline details and print an import summary",
        )
        parser.add_argument(
            "--no-progress",
            action="store_true",
            help="Do not show the progress bar",
        )
        parser.add_argument(
            "--log-file",
            help="Also write log messages to this file",
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def build_options(
        self, args: argparse.Namespace, manager: ConfigurationManager
    ) -> ImportOptions:
        """
        Merge command line flags over configured defaults.

        Raises:
            ValueError: If --max-bookmarks is negative
        """
        options = ImportOptions.from_config(manager.config)
        if args.max_bookmarks is not None:
            if args.max_bookmarks < 0:
                raise ValueError("--max-bookmarks cannot be negative")
            options.max_bookmarks = args.max_bookmarks
        if args.no_validate_urls:
            options.validate_urls = False
        if args.keep_duplicates:
            options.filter_duplicates = False
        if args.no_folders:
            options.include_folders = False
        return options

    def _handle_create_config(self, output: str) -> int:
        """Write a configuration file holding the default values."""
        output_path = Path(output)
        if output_path.exists():
            print(f"Configuration file already exists: {output_path}", file=sys.stderr)
            return 1

        fmt = "json" if output_path.suffix.lower() == ".json" else "toml"
        try:
            ConfigurationManager().create_sample_config(output_path, fmt)
        except (OSError, BookmarkImportError) as e:
            print(f"Error creating configuration file: {e}", file=sys.stderr)
            return 1

        print(f"Created configuration file: {output_path}", file=sys.stderr)
        return 0

    def _write_result(self, payload: dict, output: Optional[str]) -> None:
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(text + "\n", encoding="utf-8")
        else:
            sys.stdout.write(text + "\n")

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        parsed_args = self.parse_args(args)

        if parsed_args.create_config:
            return self._handle_create_config(parsed_args.create_config)

        if not parsed_args.input:
            self.parser.print_usage(sys.stderr)
            print("Error: an input file is required", file=sys.stderr)
            return 1

        setup_logging(
            "DEBUG" if parsed_args.verbose else "WARNING", parsed_args.log_file
        )
        logger = logging.getLogger(__name__)

        progress = None
        try:
            manager = ConfigurationManager(parsed_args.config)
            options = self.build_options(parsed_args, manager)

            progress = ProgressReporter(enabled=not parsed_args.no_progress)
            options.progress_callback = progress

            logger.info(f"Importing {parsed_args.input}")
            importer = BookmarkImporter(options, manager.config)
            result = asyncio.run(importer.import_file(parsed_args.input))
            progress.close()

            self._write_result(result.to_dict(), parsed_args.output)

            if parsed_args.verbose:
                print(result.stats.get_summary(), file=sys.stderr)
            return 0

        except (BookmarkImportError, ValueError) as e:
            if progress:
                progress.close()
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            if progress:
                progress.close()
            print(f"Error: {e}", file=sys.stderr)
            logger.exception("Unexpected error in CLI")
            return 1


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
