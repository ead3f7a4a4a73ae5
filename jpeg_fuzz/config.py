"""
Configuration defaults and parsing for jpeg-fuzz.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from jpeg_fuzz.init_check import REQUIRED_KEYS
from jpeg_fuzz.target import DEFAULT_FORMATS


@dataclass
class Config:
    """Runtime configuration."""

    required_keys: Tuple[str, ...] = REQUIRED_KEYS
    formats: Tuple[str, ...] = DEFAULT_FORMATS
    debug: bool = False
    # argv for libFuzzer: program name first, then every argument not consumed here
    fuzzer_args: List[str] = field(default_factory=list)


def parse_args(argv: Optional[list] = None) -> Config:
    """
    Parse a full argv (program name first) into Config.

    Unknown arguments, including libFuzzer flags, corpus directories and
    -D<key>=<value> property tokens, are kept in fuzzer_args in their
    original order. libFuzzer re-executes that argv for fork/jobs workers,
    which is how the properties reach child processes.
    """
    if argv is None:
        argv = sys.argv
    prog, rest = argv[0], list(argv[1:])
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Fuzz Pillow's JPEG decoder; setup failures exit with code 3.",
        allow_abbrev=False,
        add_help=False,
    )
    # No -h: libFuzzer's -help=1 must pass through
    parser.add_argument(
        "--help",
        action="help",
        help="Show this help message and exit",
    )
    parser.add_argument(
        "--required-key",
        action="append",
        dest="required_keys",
        metavar="KEY",
        default=None,
        help="Property that must reach the worker (repeatable, default: foo, bar)",
    )
    parser.add_argument(
        "--format",
        action="append",
        dest="formats",
        metavar="NAME",
        default=None,
        help="Pillow format the decoder is restricted to (repeatable, default: JPEG)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parsed, remaining = parser.parse_known_args(rest)
    return Config(
        required_keys=tuple(parsed.required_keys or REQUIRED_KEYS),
        formats=tuple(f.upper() for f in parsed.formats or DEFAULT_FORMATS),
        debug=parsed.debug,
        fuzzer_args=[prog] + remaining,
    )


def setup_logging(debug: bool = False) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
