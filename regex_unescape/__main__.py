"""
regex-unescape - Command Line Entry Point

Supports running with: python -m regex_unescape
"""

import argparse
import json
import logging
import os
import re
import sys
import time
from typing import List, Optional, Tuple

from .config import Settings, get_settings, reset_settings
from .scanner import iter_escapes, unescape
from .schemas import EscapeTokenModel, UnescapeResult, UnescapeReport

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_USAGE = 2

LINE_PATTERN = re.compile(r"[^\n]*\n|[^\n]+")


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="regex-unescape",
        description="Decode regex-escaped text back to its literal form",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    # Input settings
    input_group = parser.add_argument_group("Input Settings")
    input_group.add_argument(
        "texts",
        nargs="*",
        metavar="TEXT",
        help="Escaped text to decode (reads --file or stdin when omitted)",
    )
    input_group.add_argument(
        "--file",
        type=str,
        default=None,
        help="Read escaped text from a file ('-' for stdin)",
    )
    input_group.add_argument(
        "--lines",
        action="store_true",
        default=None,
        help="Decode each line independently (line endings are kept as-is)",
    )
    input_group.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Encoding of --file, stdin and stdout (default from REGEX_UNESCAPE_ENCODING or utf-8)",
    )
    input_group.add_argument(
        "--max-input-chars",
        type=int,
        default=None,
        help="Refuse inputs longer than this (0 = unlimited)",
    )

    # Output settings
    output_group = parser.add_argument_group("Output Settings")
    output_group.add_argument(
        "--json",
        action="store_const",
        const="json",
        dest="output_format",
        default=None,
        help="Print a JSON report instead of the decoded text",
    )
    output_group.add_argument(
        "--explain",
        action="store_true",
        help="Include the per-escape breakdown in the JSON report",
    )
    output_group.add_argument(
        "--output-errors",
        type=str,
        default=None,
        choices=["backslashreplace", "surrogatepass", "replace", "strict"],
        help="How to write characters stdout cannot encode (default backslashreplace)",
    )

    # Logging settings
    log_group = parser.add_argument_group("Logging Settings")
    log_group.add_argument(
        "--log-level",
        type=str.upper,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default from REGEX_UNESCAPE_LOG_LEVEL or WARNING)",
    )

    return parser.parse_args(argv)


def apply_args(args) -> Settings:
    """Push explicitly given arguments into the environment and reload settings."""
    env_mapping = {
        "REGEX_UNESCAPE_ENCODING": args.encoding,
        "REGEX_UNESCAPE_OUTPUT_FORMAT": args.output_format,
        "REGEX_UNESCAPE_OUTPUT_ERRORS": args.output_errors,
        "REGEX_UNESCAPE_LINE_MODE": None if args.lines is None else str(args.lines).lower(),
        "REGEX_UNESCAPE_MAX_INPUT_CHARS": None if args.max_input_chars is None else str(args.max_input_chars),
        "REGEX_UNESCAPE_LOG_LEVEL": args.log_level,
    }

    # Command line wins over values already in the environment
    for key, value in env_mapping.items():
        if value is not None:
            os.environ[key] = value

    reset_settings()
    return get_settings()


def read_sources(args, encoding: str) -> List[str]:
    """Collect the input texts named on the command line."""
    if args.texts:
        if args.file is not None:
            logger.warning("Both TEXT arguments and --file given; ignoring --file")
        return list(args.texts)

    if args.file is None or args.file == "-":
        logger.debug(f"Reading escaped text from stdin ({encoding})")
        return [sys.stdin.buffer.read().decode(encoding)]

    logger.debug(f"Reading escaped text from {args.file} ({encoding})")
    with open(args.file, "r", encoding=encoding, newline="") as f:
        return [f.read()]


def write_output(text: str, settings: Settings) -> None:
    """Encode text with the configured codec and write it to stdout."""
    data = text.encode(settings.encoding, settings.output_errors)
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def split_lines(text: str) -> List[Tuple[str, str]]:
    """Split text into (content, line ending) pairs on \\n and \\r\\n only."""
    pairs = []
    for match in LINE_PATTERN.finditer(text):
        raw = match.group(0)
        if raw.endswith("\r\n"):
            pairs.append((raw[:-2], "\r\n"))
        elif raw.endswith("\n"):
            pairs.append((raw[:-1], "\n"))
        else:
            pairs.append((raw, ""))
    return pairs


def build_result(text: str, line: Optional[int], explain: bool) -> UnescapeResult:
    tokens = None
    if explain:
        tokens = [EscapeTokenModel.from_token(t, text) for t in iter_escapes(text)]
    return UnescapeResult(input=text, output=unescape(text), line=line, tokens=tokens)


def render_report(sources: List[str], settings: Settings, explain: bool, start_time: float) -> str:
    results = []
    for source in sources:
        if settings.line_mode:
            for number, (content, _) in enumerate(split_lines(source), start=1):
                results.append(build_result(content, number, explain))
        else:
            results.append(build_result(source, None, explain))

    report = UnescapeReport(
        success=True,
        message=f"Decoded {len(results)} input(s)",
        processing_time=time.time() - start_time,
        results=results,
    )
    # ensure_ascii writes lone surrogates as \uXXXX escapes
    return json.dumps(report.model_dump(mode="python"), ensure_ascii=True, indent=2) + "\n"


def render_text(sources: List[str], settings: Settings, from_arguments: bool) -> str:
    pieces = []
    for source in sources:
        if settings.line_mode:
            for content, ending in split_lines(source):
                pieces.append(unescape(content) + ending)
        else:
            pieces.append(unescape(source))
        if from_arguments:
            pieces.append("\n")
    return "".join(pieces)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    settings = apply_args(args)
    logging.basicConfig(**settings.logging_config())

    try:
        sources = read_sources(args, settings.encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        logger.error(f"Failed to read input: {e}")
        return EXIT_USAGE

    for source in sources:
        if settings.exceeds_limit(source):
            logger.error(
                f"Input of {len(source)} characters exceeds the limit of "
                f"{settings.max_input_chars}"
            )
            return EXIT_USAGE

    if args.explain and settings.output_format != "json":
        logger.warning("--explain only applies to JSON output; ignoring")

    start_time = time.time()

    if settings.output_format == "json":
        output = render_report(sources, settings, args.explain, start_time)
    else:
        output = render_text(sources, settings, bool(args.texts))

    try:
        write_output(output, settings)
    except (UnicodeEncodeError, LookupError) as e:
        logger.error(f"Failed to encode output as {settings.encoding}: {e}")
        return EXIT_USAGE

    logger.info(f"Decoded {len(sources)} input(s) in {time.time() - start_time:.4f}s")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
