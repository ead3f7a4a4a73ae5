"""
Replay crash artifacts through the worker without atheris.

If an artifact still fails here, the failure is in the decoder and not an
instrumentation artifact.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from jpeg_fuzz.outcome import Outcome, OutcomeKind
from jpeg_fuzz.worker import Worker

logger = logging.getLogger(__name__)


@dataclass
class ReplayReport:
    """Per-file outcomes in replay order."""

    results: List[Tuple[Path, Outcome]] = field(default_factory=list)

    def count(self, kind: OutcomeKind) -> int:
        return sum(1 for _, outcome in self.results if outcome.kind is kind)

    @property
    def failures(self) -> List[Tuple[Path, Outcome]]:
        return [(p, o) for p, o in self.results if not o.benign]

    @property
    def reproduced(self) -> bool:
        """True if at least one input still fails outside the recognized set."""
        return bool(self.failures)


def collect_inputs(paths: Iterable[Path]) -> List[Path]:
    """Expand directories to their files (sorted); missing paths raise."""
    inputs: List[Path] = []
    for path in paths:
        if path.is_dir():
            inputs.extend(sorted(p for p in path.iterdir() if p.is_file()))
        elif path.is_file():
            inputs.append(path)
        else:
            raise FileNotFoundError(f"Input not found: {path}")
    return inputs


def replay_file(worker: Worker, path: Path) -> Outcome:
    """Run one artifact; a failure escaping the worker becomes an outcome."""
    data = path.read_bytes()
    try:
        return worker.test_one_input(data)
    except Exception as e:
        logger.error("%s: unclassified failure", path, exc_info=True)
        return Outcome.unclassified(e)


def replay(worker: Worker, paths: Iterable[Path]) -> ReplayReport:
    """Replay every input under paths and collect the outcomes."""
    report = ReplayReport()
    for path in collect_inputs(paths):
        outcome = replay_file(worker, path)
        logger.info("%s: %s", path, outcome.describe())
        report.results.append((path, outcome))
    return report
