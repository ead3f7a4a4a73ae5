"""
Smoke tests for the libFuzzer entry script. Skips when atheris unavailable.
"""

import importlib.util
import io
from pathlib import Path
from unittest.mock import patch

import pytest

atheris = pytest.importorskip("atheris")

from jpeg_fuzz.outcome import OutcomeKind  # noqa: E402
from jpeg_fuzz.worker import WorkerState  # noqa: E402

SCRIPT = Path(__file__).resolve().parent.parent / "fuzz" / "fuzz_jpeg_parser.py"


@pytest.fixture(scope="module")
def fuzz_module():
    spec = importlib.util.spec_from_file_location("fuzz_jpeg_parser", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestFuzzerInitialize:
    """Initialization hook of the entry script."""

    def test_properties_present(self, fuzz_module, jpeg_bytes: bytes) -> None:
        argv = ["fuzz_jpeg_parser.py", "-Dfoo=1", "-Dbar=1"]
        worker, fuzzer_args = fuzz_module.fuzzer_initialize(argv)
        assert fuzzer_args == argv
        assert worker.state is WorkerState.READY
        assert worker.test_one_input(jpeg_bytes).kind is OutcomeKind.SUCCESS
        assert worker.test_one_input(b"").kind is OutcomeKind.RECOGNIZED_ERROR

    def test_properties_missing(self, fuzz_module, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("JPEG_FUZZ_FOO", "JPEG_FUZZ_BAR"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("sys.stderr", io.StringIO())
        with pytest.raises(SystemExit) as excinfo:
            fuzz_module.fuzzer_initialize(["fuzz_jpeg_parser.py", "-Dfoo=1"])
        assert excinfo.value.code == 3

    def test_bad_format_with_missing_properties_exits_3(
        self, fuzz_module, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        for name in ("JPEG_FUZZ_FOO", "JPEG_FUZZ_BAR"):
            monkeypatch.delenv(name, raising=False)
        stderr = io.StringIO()
        monkeypatch.setattr("sys.stderr", stderr)
        with pytest.raises(SystemExit) as excinfo:
            fuzz_module.fuzzer_initialize(["fuzz_jpeg_parser.py", "--format", "JPG"])
        assert excinfo.value.code == 3
        assert "Did not pass all required properties" in stderr.getvalue()


class TestFuzzMain:
    """argv handed to libFuzzer."""

    def test_setup_receives_fuzzer_args(
        self, fuzz_module, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        argv = [
            "fuzz_jpeg_parser.py",
            "--format",
            "JPEG",
            "--required-key",
            "foo",
            "corpus/",
            "-Dfoo=1",
            "-runs=10",
        ]
        monkeypatch.setattr("sys.argv", argv)
        with patch.object(fuzz_module.atheris, "Setup") as setup, patch.object(
            fuzz_module.atheris, "Fuzz"
        ) as fuzz:
            fuzz_module.main()
        passed_argv = setup.call_args[0][0]
        assert passed_argv == ["fuzz_jpeg_parser.py", "corpus/", "-Dfoo=1", "-runs=10"]
        assert "JPEG" not in passed_argv
        fuzz.assert_called_once_with()
