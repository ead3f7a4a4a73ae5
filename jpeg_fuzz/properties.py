"""
Process-level properties forwarded from the driver to the worker.

Two sources, both inherited by child processes:

- environment variables prefixed JPEG_FUZZ_ (JPEG_FUZZ_FOO=1 -> "foo")
- -D<key>=<value> arguments on the command line (-Dfoo=1 -> "foo"),
  which win over the environment

The snapshot is captured once at process start and never re-read.
"""

import os
from typing import Dict, Iterable, Iterator, Mapping, Optional

ENV_PREFIX = "JPEG_FUZZ_"
ARG_PREFIX = "-D"


def _is_property_arg(arg: str) -> bool:
    return arg.startswith(ARG_PREFIX) and len(arg) > len(ARG_PREFIX)


def parse_property_args(argv: Iterable[str]) -> Dict[str, str]:
    """Collect -Dkey=value tokens. -Dkey alone sets the empty string."""
    props: Dict[str, str] = {}
    for arg in argv:
        if not _is_property_arg(arg):
            continue
        key, _, value = arg[len(ARG_PREFIX) :].partition("=")
        if key:
            props[key] = value
    return props


def parse_property_env(environ: Mapping[str, str]) -> Dict[str, str]:
    """Collect JPEG_FUZZ_* environment variables, keys lower-cased."""
    props: Dict[str, str] = {}
    for name, value in environ.items():
        if name.startswith(ENV_PREFIX) and len(name) > len(ENV_PREFIX):
            props[name[len(ENV_PREFIX) :].lower()] = value
    return props


class ConfigSnapshot(Mapping[str, str]):
    """
    Read-only view of the properties seen at process start.

    Holds a private copy, so later changes to os.environ or sys.argv do not
    show through.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: Dict[str, str] = dict(values or {})

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigSnapshot({self._values!r})"


def capture_snapshot(
    argv: Iterable[str], environ: Optional[Mapping[str, str]] = None
) -> ConfigSnapshot:
    """Build the snapshot from argv and the environment (default: os.environ)."""
    if environ is None:
        environ = os.environ
    values = parse_property_env(environ)
    values.update(parse_property_args(argv))
    return ConfigSnapshot(values)
