"""Node definitions for a proto3 document tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum as _Enum
from typing import List, Union


class ImportType(_Enum):
    DEFAULT = "default"
    PUBLIC = "public"
    WEAK = "weak"


class Cardinality(_Enum):
    DEFAULT = "default"
    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"


@dataclass
class MessageLiteralField:
    """One `name: value` entry of a message literal."""

    name: str
    value: Value


@dataclass
class MessageLiteral:
    """A brace-delimited literal, used as the value of an option."""

    fields: List[MessageLiteralField] = field(default_factory=list)
    single_line: bool = False


Value = Union[str, int, float, bool, MessageLiteral]


@dataclass
class Option:
    """`option name = value;`, or `name = value` inside brackets when compact.

    No check is performed on the name or the value: strings are emitted as
    given, so the caller supplies quotes where the schema needs them.
    """

    name: str
    value: Value
    compact: bool = False


@dataclass
class Import:
    path: str
    type: ImportType = ImportType.DEFAULT


@dataclass
class Field:
    """A field declaration: [cardinality] type name = id [options];"""

    type: str
    name: str
    id: int
    cardinality: Cardinality = Cardinality.DEFAULT
    options: List[Option] = field(default_factory=list)


@dataclass
class OneOf:
    name: str
    fields: List[Field] = field(default_factory=list)


@dataclass
class EnumElement:
    name: str
    value: int
    comment: str = ""


@dataclass
class Enum:
    name: str
    elements: List[EnumElement] = field(default_factory=list)
    comment: str = ""


@dataclass
class Extension:
    """An `extend <name> { ... }` block; name is the extended type."""

    name: str
    fields: List[Field] = field(default_factory=list)


@dataclass
class Message:
    """A message definition.

    Children are rendered in a fixed order regardless of how they were
    added: one-ofs, extensions, options, enums, nested messages, fields.
    """

    name: str
    fields: List[Field] = field(default_factory=list)
    oneofs: List[OneOf] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)
    extensions: List[Extension] = field(default_factory=list)
    options: List[Option] = field(default_factory=list)
    comment: str = ""


@dataclass
class Method:
    name: str
    input: str
    output: str
    options: List[Option] = field(default_factory=list)


@dataclass
class Service:
    name: str
    methods: List[Method] = field(default_factory=list)


@dataclass
class File:
    """Top-level representation of a .proto file."""

    package: str = ""
    imports: List[Import] = field(default_factory=list)
    options: List[Option] = field(default_factory=list)
    extensions: List[Extension] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)
    services: List[Service] = field(default_factory=list)
