"""Command line entry point for the clc calculator."""

import argparse
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import List

import yaml

from clc import clc_history_store
from clc.clc import CLC
from clc.clc_error import CLCError
from clc.clc_formatter import alfred_error, alfred_result, format_value
from clc.clc_history import CLCHistory
from clc.clc_settings import CLCSettings, DEFAULT_CONFIG_PATH


LOG_FILE_NAME = "clc.log"


def setup_logging(log_dir: str, level: str, verbose: bool = False) -> List[logging.Handler]:
    """
    Configure logging to a rotating file in log_dir, plus stderr when verbose.

    Returns:
        The handlers installed on the root logger, so the caller can remove them
    """
    log_dir = os.path.expanduser(log_dir)
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Keep up to 6 log files, max 1MB each
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILE_NAME),
        maxBytes=1024*1024,  # 1MB
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    handlers: List[logging.Handler] = [file_handler]

    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setFormatter(formatter)
        handlers.append(stream_handler)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else level.upper())
    for handler in handlers:
        root.addHandler(handler)

    return handlers


def remove_logging(handlers: List[logging.Handler]) -> None:
    """Detach and close handlers installed by setup_logging."""
    root = logging.getLogger()
    for handler in handlers:
        root.removeHandler(handler)
        handler.close()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="clc",
        description="Command line calculator with fixed-width integers, floats and units",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -e '0xFF + 1'           # 256
  %(prog)s -e 'u8(0x1FF)'          # 255
  %(prog)s -e 'celsius(212°F)'     # 100°C
  %(prog)s -e '$0 * 2'             # Double the previous result
  echo '4K + 512B' | %(prog)s      # Read the expression from stdin
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument('--expr', '-e', help='Expression to evaluate')
    source.add_argument('--file', '-f', help='Read the expression from a file')

    parser.add_argument('--alfred', action='store_true',
                        help='Write Alfred script filter JSON')
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH,
                        help='Configuration file path')
    parser.add_argument('--history-file',
                        help='History file path (overrides the configuration)')
    parser.add_argument('--history-size', type=int,
                        help='Number of results to keep (overrides the configuration)')
    parser.add_argument('--no-history', action='store_true',
                        help='Neither load nor save the history')
    parser.add_argument('--log-dir',
                        help='Log directory (overrides the configuration)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')
    return parser


def load_settings(args: argparse.Namespace) -> CLCSettings:
    """Load the configuration file and apply command line overrides."""
    settings = CLCSettings.load_from_file(args.config)

    if args.history_file is not None:
        settings.history_file = args.history_file

    if args.history_size is not None:
        settings.history_size = args.history_size

    if args.log_dir is not None:
        settings.log_dir = args.log_dir

    return settings


def read_expression(args: argparse.Namespace) -> str:
    """
    Read the expression from --expr, --file or one line of stdin.

    Raises:
        OSError: If the file cannot be read
    """
    if args.expr is not None:
        return args.expr

    if args.file is not None:
        with open(args.file, 'r', encoding='utf-8') as f:
            return f.read()

    return sys.stdin.readline()


def report_error(message: str, alfred: bool) -> None:
    """Write an error to stderr, or as Alfred JSON to stdout."""
    if alfred:
        print(alfred_error(message))
        return

    print(message, file=sys.stderr)


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)

    except (OSError, ValueError, yaml.YAMLError) as e:
        report_error(f"Failed to load configuration {args.config}: {e}", args.alfred)
        return 1

    config_errors = settings.validate()
    if config_errors:
        report_error("Configuration errors found:\n" + "\n".join(f"  - {error}" for error in config_errors), args.alfred)
        return 1

    try:
        handlers = setup_logging(settings.log_dir, settings.log_level, args.verbose)

    except OSError as e:
        report_error(f"Failed to set up logging in {settings.log_dir}: {e}", args.alfred)
        return 1

    logger = logging.getLogger("CLCMain")

    try:
        try:
            expression = read_expression(args)

        except OSError as e:
            logger.warning("Failed to read expression: %s", e)
            report_error(str(e), args.alfred)
            return 1

        if args.no_history:
            history = CLCHistory(settings.history_size)

        else:
            history = clc_history_store.load(settings.history_file, settings.history_size)

        calculator = CLC(history, max_depth=settings.max_depth)

        try:
            result = calculator.evaluate(expression)

        except CLCError as e:
            logger.warning("Rejected expression %r: %s", expression, e.message)
            report_error(e.message if args.alfred else str(e), args.alfred)
            return 1

        print(alfred_result(result) if args.alfred else format_value(result))

        if not args.no_history:
            try:
                clc_history_store.save(history, settings.history_file)

            except OSError as e:
                logger.warning("Failed to save history to %s: %s", settings.history_file, e)
                print(f"Failed to save history: {e}", file=sys.stderr)
                return 1

        return 0

    finally:
        remove_logging(handlers)


if __name__ == "__main__":
    sys.exit(main())
