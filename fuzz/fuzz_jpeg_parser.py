#!/usr/bin/env python3
"""
LibFuzzer harness for Pillow's JPEG decoder (Image.open + load).

Feed raw bytes as a JPEG file. Truncated, broken or unidentified images are
expected rejections; any other exception is a finding.
The worker exits with code 3 if the -D properties did not reach it.
Run: python fuzz/fuzz_jpeg_parser.py fuzz/corpus/jpeg/ -Dfoo=1 -Dbar=1 [options]
"""

import sys
from typing import List, Tuple

try:
    import atheris
except ImportError:
    print("Install atheris: pip install atheris")
    sys.exit(1)

with atheris.instrument_imports():
    from PIL import Image, ImageFile, JpegImagePlugin  # noqa: F401

from jpeg_fuzz.config import parse_args, setup_logging
from jpeg_fuzz.properties import capture_snapshot
from jpeg_fuzz.worker import Worker


def fuzzer_initialize(argv: list) -> Tuple[Worker, List[str]]:
    """
    Initialization hook: check property propagation before any input.

    Returns the ready worker and the argv meant for libFuzzer.
    """
    snapshot = capture_snapshot(argv)
    config = parse_args(argv)
    setup_logging(config.debug)
    worker = Worker(snapshot, config.required_keys, config.formats)
    worker.initialize()
    return worker, config.fuzzer_args


def main() -> None:
    worker, fuzzer_args = fuzzer_initialize(sys.argv)
    # fuzzer_args keeps the -D properties so fork/jobs children inherit them
    atheris.Setup(fuzzer_args, worker.test_one_input)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
