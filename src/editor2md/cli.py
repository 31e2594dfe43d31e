#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for editor2md.

Examples
--------
Convert a saved editor export:
    $ editor2md content.html

Read from stdin and write to a file:
    $ cat content.html | editor2md - --out content.md

Preview the result in the terminal:
    $ editor2md content.html --rich

Use environment variables for defaults:
    $ export EDITOR2MD_MAX_DEPTH=50
    $ export EDITOR2MD_STRICT=true
    $ editor2md content.html
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from . import __version__
from .exceptions import Editor2MdError, InputError, ValidationError
from .html2markdown import html_to_markdown
from .logging_utils import configure_logging
from .options import ConversionOptions

logger = logging.getLogger(__name__)

ENV_PREFIX = "EDITOR2MD_"
TRUE_VALUES = ("true", "1", "yes", "on")


def get_env_var_value(key: str) -> Optional[str]:
    """Get environment variable with EDITOR2MD_ prefix.

    Parameters
    ----------
    key : str
        The parameter name (e.g., 'max_depth', 'log_level')

    Returns
    -------
    Optional[str]
        Environment variable value or None if not set
    """
    return os.environ.get(f"{ENV_PREFIX}{key.upper().replace('-', '_')}")


def apply_env_vars_to_parser(parser: argparse.ArgumentParser) -> None:
    """Apply environment variables as defaults to parser arguments.

    CLI arguments still take precedence over environment variables.
    """
    for action in parser._actions:
        if not action.dest or action.dest in ("help", "version", "input"):
            continue
        env_value = get_env_var_value(action.dest)
        if env_value is None:
            continue

        if isinstance(action, argparse._StoreTrueAction):
            action.default = env_value.lower() in TRUE_VALUES
        elif action.type is not None:
            try:
                action.default = action.type(env_value)
            except (ValueError, argparse.ArgumentTypeError):
                logger.warning("Invalid value for %s%s: %s", ENV_PREFIX, action.dest.upper(), env_value)
        elif action.choices and env_value not in action.choices:
            logger.warning(
                "Invalid choice for %s%s: %s. Choices: %s",
                ENV_PREFIX,
                action.dest.upper(),
                env_value,
                list(action.choices),
            )
        else:
            action.default = env_value


def positive_int(value: str) -> int:
    """Validate positive integer for argparse."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value} is not a valid integer") from None
    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive integer")
    return ivalue


def load_options_from_json(json_file_path: str) -> dict[str, Any]:
    """Load conversion options from a JSON file.

    Raises
    ------
    ValidationError
        If the file cannot be read, is not valid JSON or is not an object.
    """
    json_path = Path(json_file_path)
    try:
        options = json.loads(json_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(
            f"Cannot read options file {json_file_path}: {e}", parameter_name="options_json", original_error=e
        ) from e
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON in options file {json_file_path}: {e}", parameter_name="options_json", original_error=e
        ) from e

    if not isinstance(options, dict):
        raise ValidationError(
            f"Options JSON file must contain a JSON object, got {type(options).__name__}",
            parameter_name="options_json",
            parameter_value=options,
        )
    return options


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="editor2md",
        description="Convert rich-text editor HTML to Markdown.",
    )
    parser.add_argument("input", nargs="?", default="-", help="HTML file to convert, or '-' for stdin (default)")
    parser.add_argument("--out", "-o", help="Write Markdown to this file instead of stdout")
    parser.add_argument("--max-depth", type=positive_int, help="Maximum element nesting depth")
    parser.add_argument("--strict", action="store_true", help="Fail instead of degrading when the depth limit is hit")
    parser.add_argument("--options-json", help="JSON file with conversion options")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("--trace", action="store_true", help="Include timestamps and logger names in log output")
    parser.add_argument("--rich", action="store_true", help="Render the Markdown in the terminal with rich")
    parser.add_argument("--version", action="version", version=f"editor2md {__version__}")

    apply_env_vars_to_parser(parser)
    return parser


def build_options(parsed_args: argparse.Namespace) -> ConversionOptions:
    """Merge JSON file options with explicit CLI flags into ConversionOptions."""
    values: dict[str, Any] = {}
    if parsed_args.options_json:
        values.update(load_options_from_json(parsed_args.options_json))
    if parsed_args.max_depth is not None:
        values["max_depth"] = parsed_args.max_depth
    if parsed_args.strict:
        values["strict"] = True
    return ConversionOptions.from_dict(values)


def read_input(input_arg: str) -> Any:
    if input_arg == "-":
        return sys.stdin.buffer.read()
    path = Path(input_arg)
    if not path.is_file():
        raise InputError(f"Input file does not exist: {input_arg}", input_type="path")
    return path


def render_preview(markdown: str) -> None:
    """Print the Markdown through rich; failures are reported, never raised."""
    try:
        from rich.console import Console
        from rich.markdown import Markdown
    except ImportError:
        print("Error: Rich library not installed. Install with: pip install editor2md[rich]", file=sys.stderr)
        return

    console = Console()
    try:
        console.print(Markdown(markdown))
    except Exception as e:
        logger.debug("Preview rendering failed", exc_info=True)
        console.print(f"[red]Error rendering preview: {e}[/red]")


def main(args: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        options = build_options(parsed_args)
        source = read_input(parsed_args.input)
    except (ValidationError, InputError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 2

    try:
        markdown = html_to_markdown(source, options=options)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except Editor2MdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed_args.out:
        output_path = Path(parsed_args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(markdown, encoding="utf-8")
        logger.info("Converted %s -> %s", parsed_args.input, output_path)

    if parsed_args.rich:
        render_preview(markdown)
    elif not parsed_args.out:
        sys.stdout.write(markdown)
    return 0


if __name__ == "__main__":
    sys.exit(main())
