"""
One-time check that the driver's properties reached this worker process.

Must run before the first input is decoded. On failure the process exits
with SETUP_FAILURE_EXIT_CODE, which libFuzzer never uses for a finding, so
a broken setup cannot end up in the crash corpus.
"""

import logging
import sys
from typing import List, Mapping, NoReturn, Optional, Sequence, TextIO

logger = logging.getLogger(__name__)

# Only used to verify that properties are passed down to child processes.
REQUIRED_KEYS = ("foo", "bar")

SETUP_FAILURE_EXIT_CODE = 3

# libFuzzer: internal error, -timeout_exitcode default, -error_exitcode default
FINDING_EXIT_CODES = frozenset({1, 70, 77})


def missing_keys(
    snapshot: Mapping[str, Optional[str]], required_keys: Sequence[str] = REQUIRED_KEYS
) -> List[str]:
    """Return required keys that are absent or None, in declaration order."""
    return [key for key in required_keys if snapshot.get(key) is None]


def verify_propagation(
    snapshot: Mapping[str, Optional[str]],
    required_keys: Sequence[str] = REQUIRED_KEYS,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Return normally if every required key is present in snapshot.

    Otherwise print a single diagnostic line to stream (default stderr) and
    raise SystemExit(SETUP_FAILURE_EXIT_CODE).
    """
    logger.debug("Configuration snapshot: %s", dict(snapshot))
    missing = missing_keys(snapshot, required_keys)
    if not missing:
        return
    fail_setup(
        "Did not pass all required properties to the worker process "
        f"(missing: {', '.join(missing)}).",
        stream,
    )


def fail_setup(message: str, stream: Optional[TextIO] = None) -> NoReturn:
    """Print one ERROR line to stream (default stderr) and exit with code 3."""
    out = stream if stream is not None else sys.stderr
    print(f"ERROR: {message}", file=out)
    out.flush()
    raise SystemExit(SETUP_FAILURE_EXIT_CODE)
