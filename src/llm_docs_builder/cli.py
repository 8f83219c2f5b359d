#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/llm_docs_builder/cli.py
"""Command-line interface for llm-docs-builder.

Examples
--------
Generate ``llms.txt`` from a docs directory::

    $ llm-docs-builder generate --docs ./docs

Transform one file and print the result::

    $ llm-docs-builder transform --docs docs/guide.md --preset moderate

Transform a remote page::

    $ llm-docs-builder transform --url https://example.com/docs/guide.html

Write ``*.llm.md`` copies next to every Markdown file::

    $ llm-docs-builder bulk-transform --docs ./docs --config llm-docs-builder.yml

Measure the context savings of a page::

    $ llm-docs-builder compare --url https://example.com/docs/ --file docs/index.md

"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

from llm_docs_builder.constants import DEFAULT_OUTPUT_PATH
from llm_docs_builder.exceptions import (
    ConfigurationError,
    FileError,
    LlmDocsBuilderError,
    NetworkError,
    ValidationError,
)
from llm_docs_builder.exceptions import FileNotFoundError as DocsFileNotFoundError
from llm_docs_builder.logging_utils import configure_logging
from llm_docs_builder.options import BuilderOptions, CompressionPresets

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_NETWORK_ERROR = 8

DEFAULT_COMMAND = "generate"

COMMAND_HELP = """\
Commands:
  generate        Generate llms.txt from documentation (default)
  transform       Transform a markdown file to be AI-friendly
  bulk-transform  Transform all markdown files in directory
  compare         Compare content sizes to measure context savings
  parse           Parse existing llms.txt file
  validate        Validate llms.txt file
  version         Show version

For advanced configuration (base_url, title, description, convert_urls), use a config file.
"""

COMPARE_USAGE = """\
URL required for compare command (use -u/--url)

Examples:
  # Compare remote versions (different User-Agents)
  llm-docs-builder compare --url https://example.com/docs/page.html

  # Compare remote with local file
  llm-docs-builder compare --url https://example.com/docs/page.html --file docs/page.md"""


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, NetworkError):
        return EXIT_NETWORK_ERROR

    if isinstance(exception, (ValidationError, ConfigurationError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="llm-docs-builder",
        description="Build and optimize documentation for LLMs.",
        epilog=COMMAND_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", help="Command to run (default: generate)")
    parser.add_argument("-c", "--config", help="Configuration file path (default: llm-docs-builder.yml)")
    parser.add_argument("-d", "--docs", help="Path to documentation directory or file")
    parser.add_argument("-o", "--output", help="Output file path")
    parser.add_argument("-u", "--url", help="URL to fetch for comparison or transformation")
    parser.add_argument("-f", "--file", help="Local markdown file for comparison")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    parser.add_argument(
        "--preset",
        choices=CompressionPresets.names(),
        help="Compression preset applied before config file values",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["summary", "json", "xml"],
        default="summary",
        help="Output format for the parse command (default: summary)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode with timestamps and logger names in log output",
    )
    parser.add_argument("--version", action="store_true", help="Show version")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    ``--trace`` takes precedence, then ``--verbose`` (which only lowers the
    default level), then ``--log-level``.
    """
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _collect_overrides(parsed_args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if parsed_args.docs is not None:
        overrides["docs"] = parsed_args.docs
    if parsed_args.output is not None:
        overrides["output"] = parsed_args.output
    if parsed_args.verbose:
        overrides["verbose"] = True
    return overrides


def build_options(parsed_args: argparse.Namespace, **extra: Any) -> BuilderOptions:
    """Merge preset, configuration file and command-line values."""
    from llm_docs_builder.config import load_config, merge_with_options

    config = load_config(parsed_args.config)
    base = CompressionPresets.get(parsed_args.preset) if parsed_args.preset else None
    overrides = {**_collect_overrides(parsed_args), **extra}
    return merge_with_options(config, overrides, base=base)


def _require_path(path: Path, description: str) -> None:
    if not path.exists():
        raise DocsFileNotFoundError(str(path), message=f"{description} not found: {path}")


def handle_generate(parsed_args: argparse.Namespace) -> int:
    """Generate ``llms.txt`` and, in verbose mode, report validation warnings."""
    from llm_docs_builder.generator import Generator
    from llm_docs_builder.validator import Validator

    options = build_options(parsed_args)
    docs_path = Path(options.docs)
    _require_path(docs_path, "Documentation path")

    if options.verbose:
        print(f"Generating llms.txt from {docs_path}...")

    content = Generator(docs_path, options).generate()
    print(f"Successfully generated {options.output}")

    if options.verbose:
        validator = Validator(content)
        if validator.is_valid():
            print("Valid llms.txt format")
        else:
            print("Validation warnings:")
            for error in validator.errors:
                print(f"  - {error}")
    return EXIT_SUCCESS


def handle_transform(parsed_args: argparse.Namespace) -> int:
    """Transform one file, or a fetched page, for AI consumption."""
    from llm_docs_builder._input_utils import write_text_file
    from llm_docs_builder.markdown_transformer import MarkdownTransformer

    if parsed_args.url:
        from llm_docs_builder.url_fetcher import UrlFetcher

        content = UrlFetcher().fetch(parsed_args.url)
        options = build_options(parsed_args, content=content, source_url=parsed_args.url)
        file_path: Path | None = None
        if options.verbose:
            print(f"Transforming {parsed_args.url}...")
    else:
        options = build_options(parsed_args)
        file_path = Path(options.docs)
        if not file_path.is_file():
            raise DocsFileNotFoundError(str(file_path), message=f"File not found: {file_path}")
        if options.verbose:
            print(f"Transforming {file_path}...")

    transformed = MarkdownTransformer(file_path, options).transform()

    if options.output and options.output != DEFAULT_OUTPUT_PATH:
        write_text_file(options.output, transformed)
        print(f"Transformed content saved to {options.output}")
    else:
        print(transformed)
    return EXIT_SUCCESS


def handle_bulk_transform(parsed_args: argparse.Namespace) -> int:
    """Transform every Markdown file under ``--docs``."""
    from llm_docs_builder.bulk_transformer import BulkTransformer

    options = build_options(parsed_args)
    docs_path = Path(options.docs)
    _require_path(docs_path, "Documentation path")
    if not docs_path.is_dir():
        raise ValidationError(
            f"Path must be a directory for bulk transformation: {docs_path}",
            parameter_name="docs",
            parameter_value=str(docs_path),
        )

    if options.verbose:
        print(f"Bulk transforming markdown files in {docs_path}...")
        print(f"Using suffix: {options.suffix}")
        if options.excludes:
            print(f"Excludes: {', '.join(options.excludes)}")

    transformed_files = BulkTransformer(docs_path, options).transform_all()

    if not transformed_files:
        print("No markdown files found to transform")
        return EXIT_SUCCESS

    print(f"Successfully transformed {len(transformed_files)} files:")
    for file_name in transformed_files:
        print(f"  {file_name}")
    return EXIT_SUCCESS


def _llms_txt_path(parsed_args: argparse.Namespace) -> Path:
    file_path = Path(parsed_args.docs or DEFAULT_OUTPUT_PATH)
    if not file_path.is_file():
        raise DocsFileNotFoundError(str(file_path), message=f"File not found: {file_path}")
    return file_path


def _link_count(section: Any) -> int:
    return len(section) if isinstance(section, list) else 0


def handle_parse(parsed_args: argparse.Namespace) -> int:
    """Print a summary, JSON or XML rendering of an ``llms.txt`` file."""
    from llm_docs_builder.parser import Parser

    parsed = Parser(_llms_txt_path(parsed_args)).parse()

    if parsed_args.output_format == "json":
        print(json.dumps(parsed.to_dict(), indent=2, ensure_ascii=False))
    elif parsed_args.output_format == "xml":
        print(parsed.to_xml())
    else:
        print(f"Title: {parsed.title}")
        print(f"Description: {parsed.description}")
        print(f"Documentation Links: {_link_count(parsed.documentation_links)}")
        print(f"Example Links: {_link_count(parsed.example_links)}")
        print(f"Optional Links: {_link_count(parsed.optional_links)}")
    return EXIT_SUCCESS


def handle_validate(parsed_args: argparse.Namespace) -> int:
    """Validate an ``llms.txt`` file, listing the problems found."""
    from llm_docs_builder._input_utils import read_text_file
    from llm_docs_builder.validator import Validator

    validator = Validator(read_text_file(_llms_txt_path(parsed_args)))
    if validator.is_valid():
        print("Valid llms.txt file")
        return EXIT_SUCCESS

    print("Invalid llms.txt file")
    print("\nErrors:")
    for error in validator.errors:
        print(f"  - {error}")
    return EXIT_ERROR


def handle_compare(parsed_args: argparse.Namespace) -> int:
    """Compare the human and AI versions of ``--url``."""
    if not parsed_args.url:
        print(COMPARE_USAGE, file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    from llm_docs_builder.comparator import Comparator
    from llm_docs_builder.output_formatter import OutputFormatter

    result = Comparator(parsed_args.url, local_file=parsed_args.file).compare()
    OutputFormatter.display_comparison_results(result)
    return EXIT_SUCCESS


def handle_version(parsed_args: argparse.Namespace | None = None) -> int:
    from llm_docs_builder import __version__

    print(f"llm-docs-builder version {__version__}")
    return EXIT_SUCCESS


COMMAND_HANDLERS: dict[str, Callable[[argparse.Namespace], int]] = {
    "generate": handle_generate,
    "transform": handle_transform,
    "bulk-transform": handle_bulk_transform,
    "compare": handle_compare,
    "parse": handle_parse,
    "validate": handle_validate,
    "version": handle_version,
}


def main(args: list[str] | None = None) -> int:
    """Execute the CLI and return the process exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.version:
        return handle_version(parsed_args)

    command = parsed_args.command or DEFAULT_COMMAND
    handler = COMMAND_HANDLERS.get(command)
    if handler is None:
        print(f"Unknown command: {command}", file=sys.stderr)
        print("Run 'llm-docs-builder --help' for usage information", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    _setup_logging_level(parsed_args)

    try:
        return handler(parsed_args)
    except LlmDocsBuilderError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
