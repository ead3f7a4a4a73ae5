"""
Replay entry point: run crash artifacts through the harness without atheris.

Run: jpeg-fuzz-replay -Dfoo=1 -Dbar=1 crash-1234 fuzz/corpus/jpeg/

Arguments starting with "-" are flags, not inputs; name an artifact such as
"-crash" as "./-crash".

Exit codes: 0 nothing reproduced, 1 at least one unclassified failure
reproduced, 2 usage error, 3 properties did not reach the process.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from jpeg_fuzz.config import Config, parse_args, setup_logging
from jpeg_fuzz.outcome import OutcomeKind
from jpeg_fuzz.properties import ConfigSnapshot, capture_snapshot
from jpeg_fuzz.replay import replay
from jpeg_fuzz.worker import Worker

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REPRODUCED = 1
EXIT_USAGE = 2


def run(config: Config, snapshot: ConfigSnapshot) -> int:
    """
    Initialize a worker from snapshot and replay the inputs in config.

    Returns exit code. A propagation failure raises SystemExit(3) before any
    input is read.
    """
    setup_logging(config.debug)

    worker = Worker(snapshot, config.required_keys, config.formats)
    worker.initialize()

    paths = [Path(arg) for arg in config.fuzzer_args[1:] if not arg.startswith("-")]
    if not paths:
        logger.error("No inputs given to replay")
        return EXIT_USAGE

    try:
        report = replay(worker, paths)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_USAGE

    logger.info(
        "Replayed %d input(s): %d success, %d recognized error, "
        "%d unclassified failure",
        len(report.results),
        report.count(OutcomeKind.SUCCESS),
        report.count(OutcomeKind.RECOGNIZED_ERROR),
        report.count(OutcomeKind.UNCLASSIFIED_FAILURE),
    )
    return EXIT_REPRODUCED if report.reproduced else EXIT_OK


def main(argv: Optional[list] = None) -> None:
    """Entry point for the jpeg-fuzz-replay script."""
    if argv is None:
        argv = sys.argv
    snapshot = capture_snapshot(argv)
    config = parse_args(argv)
    sys.exit(run(config, snapshot))


if __name__ == "__main__":
    main()
