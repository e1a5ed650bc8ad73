"""Command-line interface for slotml."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from slotml.config import ParseOptions
from slotml.errors import ParseError

CONFIG_NAME = "slotml.toml"
FORMATS = ("json", "tree")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    format: str
    tokens: bool
    parse_options: ParseOptions
    watch: bool
    verbose: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="slotml",
        description="Parse a template with ${...} slots and print its AST",
    )
    p.add_argument("input", help="Input template file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-f",
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: json)",
    )
    p.add_argument("--tokens", action="store_true", help="Print the token stream instead")
    p.add_argument(
        "--html",
        action="store_true",
        help="Use the HTML void and raw-text element tables",
    )
    p.add_argument(
        "--void",
        action="append",
        default=[],
        metavar="NAME",
        help="Element without children or closing tag (repeatable)",
    )
    p.add_argument(
        "--raw-text",
        action="append",
        default=[],
        metavar="NAME",
        help="Element whose body is unparsed text (repeatable)",
    )
    p.add_argument("--strict", action="store_true", help="Require closing tags to match")
    p.add_argument(
        "--preserve-whitespace",
        action="store_true",
        help="Keep whitespace-only text nodes",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and reparse")
    p.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _str_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    return []


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    html = False
    void: list[str] = []
    raw_text: list[str] = []
    strict = False
    preserve = False

    cfg_parser = config.get("parser")
    if isinstance(cfg_parser, dict):
        if isinstance(cfg_parser.get("html"), bool):
            html = cfg_parser["html"]
        void.extend(_str_list(cfg_parser.get("void_elements")))
        raw_text.extend(_str_list(cfg_parser.get("raw_text_elements")))
        if isinstance(cfg_parser.get("strict"), bool):
            strict = cfg_parser["strict"]
        if isinstance(cfg_parser.get("preserve_whitespace"), bool):
            preserve = cfg_parser["preserve_whitespace"]

    html = html or args.html
    void.extend(args.void)
    raw_text.extend(args.raw_text)
    strict = strict or args.strict
    preserve = preserve or args.preserve_whitespace

    # Output format: default < config < CLI
    fmt = "json"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict) and cfg_output.get("format") in FORMATS:
        fmt = cfg_output["format"]
    if args.format is not None:
        fmt = args.format

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        tokens=args.tokens,
        parse_options=ParseOptions.build(
            html=html,
            void_elements=void,
            raw_text_elements=raw_text,
            strict_closing=strict,
            preserve_whitespace=preserve,
        ),
        watch=args.watch,
        verbose=args.verbose,
    )


def compile_file(options: CliOptions) -> str:
    """Read and parse a template file, returning the formatted output."""
    from slotml.debug import dump_ast, dump_tokens
    from slotml.lexer import tokenize
    from slotml.parser import parse_template
    from slotml.serialize import to_data
    from slotml.template import split_template

    source = options.input_file.read_text(encoding="utf-8")
    template = split_template(source)
    buf = io.StringIO()

    if options.tokens:
        tokens = tokenize(
            template.segments,
            template.slot_count,
            options.parse_options.raw_text_elements,
        )
        dump_tokens(tokens, file=buf)
        return buf.getvalue()

    root = parse_template(template, options.parse_options)

    if options.format == "tree":
        dump_ast(root, file=buf)
        return buf.getvalue()

    return json.dumps(to_data(root), indent=2) + "\n"


def _write_output(options: CliOptions, text: str) -> None:
    if options.output_file:
        options.output_file.write_text(text, encoding="utf-8")
    else:
        sys.stdout.write(text)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, reparse on each modification."""
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
                    _write_output(options, compile_file(options))
                    sys.stdout.flush()
                    print(f"Parsed {options.input_file}", file=sys.stderr)
                except ParseError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if options.watch:
        watch_loop(options)
        return 0

    try:
        text = compile_file(options)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ParseError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    _write_output(options, text)
    return 0
