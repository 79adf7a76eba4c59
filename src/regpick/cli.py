"""CLI entry point for regpick.

Reads candidate lines from a file or a pipe, lets the user pick one on the
terminal and prints it to stdout.
"""

from __future__ import annotations

import argparse
import io
import logging
import sys

from regpick.config import PickerConfig, default_prompt
from regpick.errors import TerminalError
from regpick.keybindings import KeybindingsManager
from regpick.picker import Chosen, Picker
from regpick.source import read_lines
from regpick.terminal import ProcessTerminal

logger = logging.getLogger(__name__)

EXIT_CHOSEN = 0
EXIT_CANCELLED = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="regpick",
        description="Interactively pick one line of input by regular expression",
    )
    parser.add_argument("file", nargs="?", help="Read lines from FILE instead of stdin")
    parser.add_argument("--prompt", default=None, help="Query prompt (default: $REGPICK_PROMPT or 'QUERY> ')")
    parser.add_argument("-i", "--ignore-case", action="store_true", help="Match case-insensitively")
    parser.add_argument("--trim-blank", action="store_true", help="Drop empty and whitespace-only lines")
    parser.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    parser.add_argument("--log-file", default=None, help="Write log records to this file")
    return parser.parse_args(argv)


def setup_logging(level: str, log_file: str | None) -> None:
    kwargs: dict[str, object] = {}
    if log_file:
        kwargs["filename"] = log_file
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        **kwargs,
    )


def load_lines(args: argparse.Namespace) -> list[str]:
    if args.file:
        with open(args.file, encoding="utf-8", errors="replace") as f:
            return read_lines(f, trim_blank=args.trim_blank)
    stdin = sys.stdin
    if isinstance(stdin, io.TextIOWrapper):
        stdin.reconfigure(errors="replace")
    return read_lines(stdin, trim_blank=args.trim_blank)


def run(args: argparse.Namespace) -> int:
    """Run one picker session and return the process exit status."""
    if not args.file and sys.stdin.isatty():
        print("regpick: no input; pipe lines in or pass a FILE", file=sys.stderr)
        return EXIT_ERROR

    config = PickerConfig(
        prompt=args.prompt if args.prompt is not None else default_prompt(),
        ignore_case=args.ignore_case,
        trim_blank=args.trim_blank,
    )

    try:
        lines = load_lines(args)
    except OSError as exc:
        print(f"regpick: {exc}", file=sys.stderr)
        return EXIT_ERROR
    logger.info("loaded %d lines", len(lines))

    picker = Picker(lines, config)
    try:
        with ProcessTerminal(KeybindingsManager(config.keybindings)) as terminal:
            result = picker.run(terminal)
    except TerminalError as exc:
        logger.error("terminal failure: %s", exc)
        print(f"regpick: {exc}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    if isinstance(result, Chosen):
        sys.stdout.write(result.text + "\n")
        sys.stdout.flush()
        return EXIT_CHOSEN
    return EXIT_CANCELLED


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    sys.exit(run(args))


if __name__ == "__main__":
    main()
