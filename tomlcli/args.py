"""Command-line parsing driven by a :class:`~tomlcli.spec.ConfigSpec`.

Each field becomes a ``--long`` option (the field id unless ``long`` is
given). A value is taken from the command line first, then from the
field's environment variable, then from its default. Fields with nested
fields become groups of options and nested objects.
"""

from __future__ import annotations

import argparse
import dataclasses
import os
import re
import sys
from collections.abc import Mapping, Sequence
from os import PathLike
from pathlib import Path
from typing import Any

from tomlcli.spec import ConfigSpec, FieldSpec

__all__ = [
    "ArgumentError",
    "convert",
    "build_parser",
    "parse_args",
    "make_config_class",
    "config",
]


class ArgumentError(Exception):
    """Raised when command-line or environment values cannot be used."""


_INT_TYPES: dict[str, tuple[bool, int]] = {
    **{f"u{bits}": (False, bits) for bits in (8, 16, 32, 64, 128)},
    **{f"i{bits}": (True, bits) for bits in (8, 16, 32, 64, 128)},
    "usize": (False, 64),
    "isize": (True, 64),
}
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)
_PY_TYPES: dict[str, type] = {
    **{name: int for name in _INT_TYPES},
    "f32": float,
    "f64": float,
    "bool": bool,
    "String": str,
    "char": str,
    "PathBuf": Path,
}


def convert(type_name: str, text: str) -> Any:
    """Convert ``text`` to a value of the named field type."""
    if type_name in _INT_TYPES:
        signed, bits = _INT_TYPES[type_name]
        pattern = _SIGNED_RE if signed else _UNSIGNED_RE
        if not pattern.fullmatch(text):
            raise ArgumentError(f"invalid digit found in string {text!r} for {type_name}")
        value = int(text)
        low, high = (-(2 ** (bits - 1)), 2 ** (bits - 1) - 1) if signed else (0, 2**bits - 1)
        if not low <= value <= high:
            raise ArgumentError(f"number {text} out of range for {type_name}")
        return value
    if type_name in ("f32", "f64"):
        if not _FLOAT_RE.fullmatch(text):
            raise ArgumentError(f"invalid float literal {text!r}")
        return float(text)
    if type_name == "bool":
        if text not in ("true", "false"):
            raise ArgumentError(f"invalid value {text!r} for bool: expected true or false")
        return text == "true"
    if type_name == "String":
        return text
    if type_name == "PathBuf":
        return Path(text)
    if type_name == "char":
        if len(text) != 1:
            raise ArgumentError(f"expected a single character, got {text!r}")
        return text
    raise ArgumentError(f"unsupported type: {type_name}")


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgumentError(message)


def _long(f: FieldSpec) -> str:
    return f"--{f.long_arg or f.id}"


def _help(f: FieldSpec) -> str:
    parts = [f.doc] if f.doc else []
    if f.env:
        parts.append(f"[env: {f.env}]")
    if f.default is not None:
        parts.append(f"[default: {f.default}]")
    return " ".join(parts).replace("%", "%%")


def _add_fields(target: Any, parser: argparse.ArgumentParser, fields: Sequence[FieldSpec]) -> None:
    for f in fields:
        if f.has_subtype:
            group = parser.add_argument_group(f.field_type, f.doc)
            _add_fields(group, parser, f.fields)
            continue
        flags = [_long(f)]
        if f.short_arg:
            flags.insert(0, f"-{f.short_arg}")
        options: dict[str, Any] = {"dest": f.id, "default": None, "help": _help(f)}
        if f.field_type == "bool":
            options.update(action="store_const", const=True)
        else:
            options["metavar"] = f.id
        try:
            target.add_argument(*flags, **options)
        except argparse.ArgumentError as exc:
            raise ArgumentError(str(exc)) from exc


def build_parser(spec: ConfigSpec, prog: str | None = None) -> argparse.ArgumentParser:
    """Build an argument parser with one option per field of ``spec``."""
    parser = _Parser(prog=prog, allow_abbrev=False)
    _add_fields(parser, parser, spec.fields)
    return parser


def _resolve(
    fields: Sequence[FieldSpec], given: Mapping[str, Any], environ: Mapping[str, str]
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for f in fields:
        if f.has_subtype:
            result[f.name] = _resolve(f.fields, given, environ)
            continue
        raw = given.get(f.id)
        if raw is None and f.env and f.env in environ:
            raw = environ[f.env]
        if raw is None:
            raw = f.default
        if raw is None:
            if f.is_optional:
                result[f.name] = None
            elif f.field_type == "bool":
                result[f.name] = False
            else:
                raise ArgumentError(
                    f"the following required argument was not provided: {_long(f)} <{f.id}>"
                )
            continue
        if isinstance(raw, bool):
            result[f.name] = raw
            continue
        try:
            result[f.name] = convert(f.field_type, raw)
        except ArgumentError as exc:
            raise ArgumentError(f"invalid value {raw!r} for '{_long(f)} <{f.id}>': {exc}") from exc
    return result


def parse_args(
    spec: ConfigSpec,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
    prog: str | None = None,
) -> dict[str, Any]:
    """Parse ``argv`` and ``environ`` into nested dictionaries of values."""
    argv = sys.argv[1:] if argv is None else list(argv)
    environ = os.environ if environ is None else environ
    namespace = build_parser(spec, prog).parse_args(argv)
    return _resolve(spec.fields, vars(namespace), environ)


def _annotation(f: FieldSpec) -> Any:
    try:
        py_type = _PY_TYPES[f.field_type]
    except KeyError:
        raise ArgumentError(f"unsupported type: {f.field_type}") from None
    return py_type | None if f.is_optional else py_type


def _zero(f: FieldSpec) -> Any:
    if f.is_optional:
        return None
    py_type = _PY_TYPES[f.field_type]
    return Path() if py_type is Path else py_type()


def _from_values(cls: type, values: Mapping[str, Any]) -> Any:
    kwargs = {
        f.name: _from_values(cls._nested[f.name], values[f.name]) if f.has_subtype else values[f.name]
        for f in cls._field_specs
    }
    return cls(**kwargs)


def _default(cls: type) -> Any:
    kwargs = {
        f.name: _default(cls._nested[f.name]) if f.has_subtype else _zero(f)
        for f in cls._field_specs
    }
    return cls(**kwargs)


def _make_class(
    name: str, fields: Sequence[FieldSpec], spec: ConfigSpec, is_main: bool
) -> type:
    nested = {f.name: _make_class(f.field_type, f.fields, spec, False) for f in fields if f.has_subtype}
    dc_fields = [(f.name, nested[f.name] if f.has_subtype else _annotation(f)) for f in fields]
    namespace: dict[str, Any] = {}
    if is_main:

        def parse(cls, argv=None, environ=None, prog=None):
            """Parse the command line and environment into an instance."""
            return _from_values(cls, parse_args(spec, argv, environ, prog))

        def new(cls):
            """Return an instance holding each type's zero value."""
            return _default(cls)

        namespace.update(parse=classmethod(parse), new=classmethod(new))
    try:
        cls = dataclasses.make_dataclass(name, dc_fields, namespace=namespace)
    except (TypeError, ValueError) as exc:
        raise ArgumentError(f"cannot build {name}: {exc}") from exc
    cls._field_specs = tuple(fields)
    cls._nested = nested
    return cls


def make_config_class(spec: ConfigSpec, name: str = "Config") -> type:
    """Create a dataclass for ``spec`` with ``parse`` and ``new`` class methods."""
    return _make_class(name, spec.fields, spec, True)


def config(path: str | PathLike[str] = "config.toml", name: str = "Config") -> type:
    """Load a TOML specification file and create its configuration class."""
    return make_config_class(ConfigSpec.from_file(path), name)