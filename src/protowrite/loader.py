"""Build a document tree from a JSON-compatible description.

Keys mirror the dataclass attributes in :mod:`protowrite.models`; enum
values (import type, cardinality) are given by their lower-case name. An
option or literal value that is an object with a ``fields`` key becomes a
:class:`MessageLiteral`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from protowrite.models import (
    Cardinality,
    Enum,
    EnumElement,
    Extension,
    Field,
    File,
    Import,
    ImportType,
    Message,
    MessageLiteral,
    MessageLiteralField,
    Method,
    OneOf,
    Option,
    Service,
)


class LoadError(Exception):
    """Raised when a document description cannot be mapped onto the model."""


def load_file(file_path: str) -> File:
    """Read a JSON description from disk and build its document tree."""
    try:
        data = json.loads(Path(file_path).read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise LoadError(f"{file_path}: not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise LoadError(f"{file_path}: invalid JSON: {e}") from e
    return load_document(data)


def load_document(data: Dict[str, Any]) -> File:
    if not isinstance(data, dict):
        raise LoadError(f"document must be an object, got {type(data).__name__}")
    return File(
        package=data.get("package", ""),
        imports=[_load_import(d) for d in _items(data, "imports", "import")],
        options=[_load_option(d) for d in _items(data, "options", "option")],
        extensions=[_load_extension(d) for d in _items(data, "extensions", "extension")],
        messages=[_load_message(d) for d in _items(data, "messages", "message")],
        enums=[_load_enum(d) for d in _items(data, "enums", "enum")],
        services=[_load_service(d) for d in _items(data, "services", "service")],
    )


def _items(data: Dict[str, Any], key: str, kind: str) -> List[Dict[str, Any]]:
    """The objects listed under `key`; a missing or null section is empty."""
    items = data.get(key) or []
    if not isinstance(items, list):
        raise LoadError(f"'{key}' must be a list, got {type(items).__name__}")
    for item in items:
        if not isinstance(item, dict):
            raise LoadError(f"{kind} must be an object, got {type(item).__name__}: {item!r}")
    return items


def _require(data: Dict[str, Any], key: str, kind: str) -> Any:
    if key not in data:
        raise LoadError(f"{kind} is missing required key '{key}': {data}")
    return data[key]


def _load_import(data: Dict[str, Any]) -> Import:
    type_name = data.get("type", "default")
    try:
        import_type = ImportType(type_name)
    except ValueError:
        raise LoadError(f"unknown import type '{type_name}'") from None
    return Import(path=_require(data, "path", "import"), type=import_type)


def _load_value(value: Any) -> Any:
    if isinstance(value, dict):
        fields = _items(value, "fields", "literal field")
        return MessageLiteral(
            fields=[
                MessageLiteralField(
                    name=_require(f, "name", "literal field"),
                    value=_load_value(_require(f, "value", "literal field")),
                )
                for f in fields
            ],
            single_line=value.get("single_line", False),
        )
    return value


def _load_option(data: Dict[str, Any], compact: bool = False) -> Option:
    return Option(
        name=_require(data, "name", "option"),
        value=_load_value(_require(data, "value", "option")),
        compact=data.get("compact", compact),
    )


def _load_field(data: Dict[str, Any]) -> Field:
    card_name = data.get("cardinality", "default")
    try:
        cardinality = Cardinality(card_name)
    except ValueError:
        raise LoadError(f"unknown cardinality '{card_name}'") from None
    return Field(
        type=_require(data, "type", "field"),
        name=_require(data, "name", "field"),
        id=_require(data, "id", "field"),
        cardinality=cardinality,
        # field options are always rendered inside brackets
        options=[_load_option(d, compact=True) for d in _items(data, "options", "option")],
    )


def _load_fields(data: Dict[str, Any]) -> List[Field]:
    return [_load_field(d) for d in _items(data, "fields", "field")]


def _load_extension(data: Dict[str, Any]) -> Extension:
    return Extension(name=_require(data, "name", "extension"), fields=_load_fields(data))


def _load_oneof(data: Dict[str, Any]) -> OneOf:
    return OneOf(name=_require(data, "name", "oneof"), fields=_load_fields(data))


def _load_enum(data: Dict[str, Any]) -> Enum:
    return Enum(
        name=_require(data, "name", "enum"),
        elements=[
            EnumElement(
                name=_require(d, "name", "enum element"),
                value=_require(d, "value", "enum element"),
                comment=d.get("comment", ""),
            )
            for d in _items(data, "elements", "enum element")
        ],
        comment=data.get("comment", ""),
    )


def _load_message(data: Dict[str, Any]) -> Message:
    return Message(
        name=_require(data, "name", "message"),
        fields=_load_fields(data),
        oneofs=[_load_oneof(d) for d in _items(data, "oneofs", "oneof")],
        messages=[_load_message(d) for d in _items(data, "messages", "message")],
        enums=[_load_enum(d) for d in _items(data, "enums", "enum")],
        extensions=[_load_extension(d) for d in _items(data, "extensions", "extension")],
        options=[_load_option(d) for d in _items(data, "options", "option")],
        comment=data.get("comment", ""),
    )


def _load_service(data: Dict[str, Any]) -> Service:
    return Service(
        name=_require(data, "name", "service"),
        methods=[
            Method(
                name=_require(d, "name", "method"),
                input=_require(d, "input", "method"),
                output=_require(d, "output", "method"),
                options=[_load_option(o) for o in _items(d, "options", "option")],
            )
            for d in _items(data, "methods", "method")
        ],
    )
