"""Chained helpers for assembling a document tree.

Builders only create and append nodes; all formatting happens in
:mod:`protowrite.encoder`.
"""

from __future__ import annotations

from typing import List, Optional

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
    Value,
)


def string_field(name: str, id: int) -> Field:
    return Field(type="string", name=name, id=id)


def uint64_field(name: str, id: int) -> Field:
    return Field(type="uint64", name=name, id=id)


class Builder:
    """Entry point: one factory method per buildable node kind."""

    def file(self) -> FileBuilder:
        return FileBuilder(File())

    def message(self, name: str) -> MessageBuilder:
        return MessageBuilder(Message(name=name))

    def enum(self, name: str) -> EnumBuilder:
        return EnumBuilder(Enum(name=name))

    def enum_element(self, name: str, value: int) -> EnumElementBuilder:
        return EnumElementBuilder(EnumElement(name=name, value=value))

    def extension(self, name: str) -> ExtensionBuilder:
        return ExtensionBuilder(Extension(name=name))

    def oneof(self, name: str) -> OneOfBuilder:
        return OneOfBuilder(OneOf(name=name))

    def service(self, name: str) -> ServiceBuilder:
        return ServiceBuilder(Service(name=name))

    def message_literal(self) -> MessageLiteralBuilder:
        return MessageLiteralBuilder(MessageLiteral())


class _NodeBuilder:
    def __init__(self, obj):
        self.object = obj

    def build(self):
        return self.object

    def must_build(self):
        return self.build()


class _FieldsMixin:
    """string_field / uint64_field / field for builders holding fields."""

    def _fields(self) -> List[Field]:
        return self.object.fields

    def string_field(self, name: str, id: int):
        self._fields().append(string_field(name, id))
        return self

    def uint64_field(self, name: str, id: int):
        self._fields().append(uint64_field(name, id))
        return self

    def field(
        self,
        type: str,
        name: str,
        id: int,
        cardinality: Cardinality = Cardinality.DEFAULT,
        options: Optional[List[Option]] = None,
    ):
        return self.fields(
            Field(
                type=type,
                name=name,
                id=id,
                cardinality=cardinality,
                options=list(options or []),
            )
        )

    def fields(self, *v: Field):
        self._fields().extend(v)
        return self


class FileBuilder(_NodeBuilder):
    def package(self, s: str) -> FileBuilder:
        self.object.package = s
        return self

    def import_(self, path: str, type: ImportType = ImportType.DEFAULT) -> FileBuilder:
        """Add a single import."""
        return self.imports(Import(path=path, type=type))

    def imports(self, *v: Import) -> FileBuilder:
        self.object.imports.extend(v)
        return self

    def option(self, name: str, value: Value) -> FileBuilder:
        self.object.options.append(Option(name=name, value=value))
        return self

    def extensions(self, *v: Extension) -> FileBuilder:
        self.object.extensions.extend(v)
        return self

    def messages(self, *v: Message) -> FileBuilder:
        self.object.messages.extend(v)
        return self

    def enums(self, *v: Enum) -> FileBuilder:
        self.object.enums.extend(v)
        return self

    def services(self, *v: Service) -> FileBuilder:
        self.object.services.extend(v)
        return self


class MessageBuilder(_FieldsMixin, _NodeBuilder):
    def comment(self, s: str) -> MessageBuilder:
        self.object.comment = s
        return self

    def option(self, name: str, value: Value) -> MessageBuilder:
        self.object.options.append(Option(name=name, value=value))
        return self

    def oneofs(self, *v: OneOf) -> MessageBuilder:
        self.object.oneofs.extend(v)
        return self

    def extensions(self, *v: Extension) -> MessageBuilder:
        self.object.extensions.extend(v)
        return self

    def enums(self, *v: Enum) -> MessageBuilder:
        self.object.enums.extend(v)
        return self

    def messages(self, *v: Message) -> MessageBuilder:
        self.object.messages.extend(v)
        return self


class EnumBuilder(_NodeBuilder):
    def comment(self, s: str) -> EnumBuilder:
        self.object.comment = s
        return self

    def element(self, name: str, value: int) -> EnumBuilder:
        return self.elements(EnumElement(name=name, value=value))

    def elements(self, *v: EnumElement) -> EnumBuilder:
        self.object.elements.extend(v)
        return self


class EnumElementBuilder(_NodeBuilder):
    def comment(self, s: str) -> EnumElementBuilder:
        self.object.comment = s
        return self


class ExtensionBuilder(_FieldsMixin, _NodeBuilder):
    pass


class OneOfBuilder(_FieldsMixin, _NodeBuilder):
    pass


class ServiceBuilder(_NodeBuilder):
    def method(
        self,
        name: str,
        input: str,
        output: str,
        options: Optional[List[Option]] = None,
    ) -> ServiceBuilder:
        self.object.methods.append(
            Method(name=name, input=input, output=output, options=list(options or []))
        )
        return self


class MessageLiteralBuilder(_NodeBuilder):
    def single_line(self, v: bool = True) -> MessageLiteralBuilder:
        self.object.single_line = v
        return self

    def field(self, name: str, value: Value) -> MessageLiteralBuilder:
        self.object.fields.append(MessageLiteralField(name=name, value=value))
        return self
