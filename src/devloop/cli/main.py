"""
Command-line interface for the devloop supervisor.

Usage:
    devloop [options] SOURCE... [-- CHILD_ARGS...]

Example:
    devloop -o bin/server -d internal main.go util.go -- --port 8080

Everything after the first ``--`` is passed verbatim to the built
executable every time it is (re)started.
"""

import argparse
import logging
import queue
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import load_config
from ..models.config import DEFAULT_OUTPUT
from ..orchestration import Coordinator, SignalHandler, new_event_queue
from ..system import check_command_installed
from ..validation import ValidationError, handle_cli_error

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

CHILD_ARGS_MARKER = "--"


def split_child_args(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split the command line at the first ``--`` into own and child arguments."""
    argv = list(argv)
    if CHILD_ARGS_MARKER in argv:
        index = argv.index(CHILD_ARGS_MARKER)
        return argv[:index], argv[index + 1:]
    return argv, []


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devloop",
        description="Rebuild and restart an executable whenever its sources change.",
        epilog="Arguments after a literal '--' are forwarded to the executable.",
    )
    parser.add_argument(
        "sources",
        nargs="*",
        help="Source files passed to the compiler and watched for changes.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help=f"Executable file to build and run (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "-r",
        "--root",
        type=str,
        default=None,
        help="Root directory the executable path is resolved against.",
    )
    parser.add_argument(
        "-d",
        "--dir",
        dest="watch_dirs",
        action="append",
        default=[],
        help="Directory to watch for changes (repeatable).",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="TOML configuration file (default: ./devloop.toml if present).",
    )
    parser.add_argument(
        "--compiler",
        type=str,
        default=None,
        help="Compiler command prefix (default: 'go build').",
    )
    parser.add_argument(
        "--output-flag",
        type=str,
        default=None,
        help="Flag introducing the output path for the compiler (default: '-o').",
    )
    parser.add_argument(
        "--interval",
        dest="poll_interval",
        type=float,
        default=None,
        help="Polling interval in seconds (default: 0.25).",
    )
    parser.add_argument(
        "--build-log",
        type=str,
        default=None,
        help="Append every build's command and output to this file.",
    )
    parser.add_argument(
        "--no-kill-on-exit",
        dest="kill_on_exit",
        action="store_const",
        const=False,
        default=None,
        help="Leave a running child alive when the supervisor exits.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level: DEBUG, INFO, WARNING or ERROR.",
    )
    return parser


def _overrides_from_args(args: argparse.Namespace, child_args: List[str]) -> Dict[str, Any]:
    return {
        "sources": args.sources,
        "output": args.output,
        "root": args.root,
        "watch_dirs": args.watch_dirs,
        "child_args": child_args,
        "compiler": args.compiler,
        "output_flag": args.output_flag,
        "poll_interval": args.poll_interval,
        "build_log": args.build_log,
        "kill_on_exit": args.kill_on_exit,
        "log_level": args.log_level,
    }


def main_cli(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main command-line interface for devloop.

    Loads and validates the configuration, installs the signal handlers and
    runs the coordinator until a signal or an unsupervised child exit.

    Returns:
        Exit status: 0 on clean shutdown

    Raises:
        SystemExit: With status 1 on configuration errors, before the loop starts
    """
    own_args, child_args = split_child_args(sys.argv[1:] if argv is None else argv)
    args = build_parser().parse_args(own_args)

    try:
        config = load_config(
            _overrides_from_args(args, child_args),
            config_path=Path(args.config) if args.config else None,
        )
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    logging.getLogger().setLevel(config.log_level)

    if not check_command_installed(config.compiler[0]):
        logger.warning(
            f"Compiler '{config.compiler[0]}' was not found on PATH; builds will fail until it is available"
        )
    if config.child_args:
        logger.info(f"Child arguments: {config.child_args}")

    events: "queue.Queue" = new_event_queue()
    coordinator = Coordinator.from_config(config, events)
    try:
        coordinator.build_log.open()
    except IOError as e:
        handle_cli_error(
            error=e,
            context="opening build log",
            exit_code=1,
            logger=logger,
        )

    signal_handler = SignalHandler(events)
    signal_handler.setup_signal_handlers()
    try:
        return coordinator.run()
    finally:
        signal_handler.cleanup_signal_handlers()


if __name__ == "__main__":
    sys.exit(main_cli())
