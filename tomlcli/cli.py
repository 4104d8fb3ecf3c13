"""Command that parses a command line against a TOML specification."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import fields
from pathlib import Path

from tomlcli.args import ArgumentError, config

__all__ = ["main"]

DEFAULT_SPEC = "config.toml"


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments with the given spec file and print the resulting values.

    The first argument names the spec file unless it starts with ``-``;
    otherwise ``config.toml`` is used. Remaining arguments are parsed
    against the spec.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    if args and not args[0].startswith("-"):
        spec_path, rest = args[0], args[1:]
    else:
        spec_path, rest = DEFAULT_SPEC, args
    try:
        cls = config(spec_path, "Config")
        cfg = cls.parse(rest, prog=Path(spec_path).stem)
    except (ArgumentError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    print(f"Config: {cfg!r}")
    for item in fields(cfg):
        print(f"{item.name} = {getattr(cfg, item.name)!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())