"""Field specifications loaded from a TOML description of a command line."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

__all__ = [
    "SpecError",
    "FieldSpec",
    "ConfigSpec",
    "table_to_field_spec",
    "get_field_type",
    "to_pascal_case",
]

log = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"type", "default", "doc", "env", "optional", "long", "short"})


class SpecError(Exception):
    """Raised when a configuration specification cannot be loaded."""


def _find(fields: Iterable[FieldSpec], name: str) -> FieldSpec | None:
    return next((f for f in fields if f.name == name), None)


@dataclass(frozen=True)
class FieldSpec:
    """One option of the command line, or a group of nested options."""

    name: str
    field_type: str
    id: str
    default: str | None = None
    doc: str | None = None
    env: str | None = None
    optional: bool | None = None
    long_arg: str | None = None
    short_arg: str | None = None
    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    @property
    def has_subtype(self) -> bool:
        """True when this field groups nested fields."""
        return bool(self.fields)

    @property
    def is_optional(self) -> bool:
        """True when the field was explicitly marked optional."""
        return bool(self.optional)

    def get_field(self, name: str) -> FieldSpec | None:
        """Return the nested field called ``name``, if any."""
        return _find(self.fields, name)


@dataclass(frozen=True)
class ConfigSpec:
    """The top-level fields of a configuration specification."""

    fields: tuple[FieldSpec, ...] = field(default_factory=tuple)

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> ConfigSpec:
        """Load a specification from a ``.toml`` file."""
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecError(f"Cannot read {path}: {exc}") from exc
        if path.suffix != ".toml":
            raise SpecError("Unsupported file format. Only .toml and .json are supported.")
        return cls.from_toml(content)

    @classmethod
    def from_toml(cls, text: str) -> ConfigSpec:
        """Parse a specification from TOML text."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise SpecError(f"Failed to parse TOML config: {exc}") from exc
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ConfigSpec:
        """Build a specification from already decoded TOML data."""
        fields = []
        for name, value in data.items():
            if isinstance(value, Mapping):
                fields.append(table_to_field_spec(name, value, None))
            else:
                log.warning("Skipping non-table field '%s'", name)
        return cls(tuple(fields))

    def get_field(self, name: str) -> FieldSpec | None:
        """Return the top-level field called ``name``, if any."""
        return _find(self.fields, name)


def _string(table: Mapping[str, Any], key: str) -> str | None:
    value = table.get(key)
    return value if isinstance(value, str) else None


def table_to_field_spec(
    name: str, table: Mapping[str, Any], parent_id: str | None
) -> FieldSpec:
    """Turn one TOML table into a field, recursing into nested tables."""
    short = _string(table, "short")
    optional = table.get("optional")
    field_id = name if parent_id is None else f"{parent_id}.{name}"

    sub_fields = tuple(
        table_to_field_spec(sub_name, sub_value, field_id)
        for sub_name, sub_value in sorted(table.items())
        if sub_name not in RESERVED_KEYS and isinstance(sub_value, Mapping)
    )

    return FieldSpec(
        name=name,
        field_type=get_field_type(table, bool(sub_fields), name),
        id=field_id,
        default=_string(table, "default"),
        doc=_string(table, "doc"),
        env=_string(table, "env"),
        optional=optional if isinstance(optional, bool) else None,
        long_arg=_string(table, "long"),
        short_arg=short if short is not None and len(short) == 1 else None,
        fields=sub_fields,
    )


def get_field_type(table: Mapping[str, Any], has_sub: bool, field_name: str) -> str:
    """Return the declared type, or a derived one when none is given."""
    declared = _string(table, "type")
    if declared is not None:
        return declared
    if has_sub:
        return f"{to_pascal_case(field_name)}Config"
    return "String"


def to_pascal_case(s: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    return s[:1].upper() + s[1:]