"""Command-line interface for the Tale lexer."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from tale.errors import LexError
from tale.logger import configure as configure_logging
from tale.logger import get_logger

log = get_logger(__name__)

FORMATS = ("text", "json")


class ConfigError(Exception):
    """Raised for malformed or unreadable configuration."""


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    labels: bool
    strict: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="tale",
        description="Tokenize a Tale script and print its token stream",
    )
    p.add_argument("input", help="Input .tale file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Listing format (default: text)",
    )
    p.add_argument(
        "--labels",
        action="store_true",
        default=None,
        help="Use readable token names (Input Header) instead of INPUT_HEADER",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Fail when the input ends inside an action",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover tale.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and rescan")
    p.add_argument("--debug", action="store_true", help="Trace tokens and captures to stderr")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "tale.toml"

    if not path.is_file():
        if config_path is not None:
            raise ConfigError(f"config file not found: {path}")
        log.debug("no config file at %s", path)
        return {}

    log.debug("loading config from %s", path)
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    strict = False
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_strict = cfg_lexer.get("strict")
        if isinstance(cfg_strict, bool):
            strict = cfg_strict
    if args.strict is not None:
        strict = args.strict

    fmt = "text"
    labels = False
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise ConfigError(
                    f"invalid output format {cfg_format!r} (expected one of: {', '.join(FORMATS)})"
                )
            fmt = cfg_format
        cfg_labels = cfg_output.get("labels")
        if isinstance(cfg_labels, bool):
            labels = cfg_labels
    if args.format is not None:
        fmt = args.format
    if args.labels is not None:
        labels = args.labels

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        labels=labels,
        strict=strict,
        watch=args.watch,
        debug=args.debug,
    )


def scan_file(options: CliOptions) -> str:
    """Read and tokenize a Tale file, returning the rendered token listing."""
    from tale.debug import dump_trace, format_tokens, tokens_to_json
    from tale.lexer import Lexer

    # newline="" keeps \r and \r\n as written; the lexer tracks them itself
    with open(options.input_file, encoding="utf-8", newline="") as f:
        source = f.read()
    lexer = Lexer(source, str(options.input_file))

    if options.debug:
        tokens = dump_trace(lexer)
    else:
        tokens = list(lexer)

    if options.strict:
        lexer.check()

    log.debug("%s: %d tokens", options.input_file, len(tokens))

    if options.format == "json":
        return tokens_to_json(tokens)
    return format_tokens(tokens, labels=options.labels)


def _write(options: CliOptions, listing: str) -> None:
    if options.output_file:
        options.output_file.write_text(listing, encoding="utf-8")
    else:
        sys.stdout.write(listing)
        sys.stdout.flush()


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, rescan on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    _write(options, scan_file(options))
                    print(f"Scanned {options.input_file}", file=sys.stderr)
                except LexError as exc:
                    print(exc.format(), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        options = resolve_options(args)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        listing = scan_file(options)
    except LexError as exc:
        print(exc.format(), file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 2

    _write(options, listing)
    return 0
