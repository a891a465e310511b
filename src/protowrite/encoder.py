"""Render a protowrite document tree into proto3 schema text.

Each node kind has an ``encode_<kind>(node, ctx, dst)`` function which
writes its text to ``dst`` (anything with a ``write(str)`` method) and, for
containers, calls the encoders of its children with a deepened
:class:`IndentContext`. Every declaration starts with a newline followed by
its indentation, so a container only has to write its closing brace.

The output is not validated: duplicate field numbers, unresolved types and
the like are rendered as given.
"""

from __future__ import annotations

import io
from functools import lru_cache
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from jinja2 import Environment, FileSystemLoader

from protowrite.indent import IndentContext
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
from protowrite.values import format_value, quote

SYNTAX = "proto3"


class EncodeError(Exception):
    """Raised when a declaration cannot be rendered.

    Carries the kind of the failed declaration, its index within its
    container and the name of the container. The underlying failure is kept
    in ``cause`` (and as ``__cause__``).
    """

    def __init__(self, kind: str, index: int, parent: str, cause: BaseException):
        self.kind = kind
        self.index = index
        self.parent = parent
        self.cause = cause
        super().__init__(f'failed to encode {kind} {index} for "{parent}": {cause}')

    @property
    def root_cause(self) -> BaseException:
        """The original failure at the bottom of the chain."""
        err: BaseException = self
        while isinstance(err, EncodeError):
            err = err.cause
        return err

    @property
    def path(self) -> List[Tuple[str, int, str]]:
        """(kind, index, parent) for every level, outermost first."""
        result = []
        err: BaseException = self
        while isinstance(err, EncodeError):
            result.append((err.kind, err.index, err.parent))
            err = err.cause
        return result


# Failures a container wraps with its own position before re-raising.
_FAILURES = (EncodeError, OSError, TypeError)


@lru_cache(maxsize=None)
def _templates():
    template_dir = Path(__file__).parent / "templates"
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
    )
    return env.get_template("proto.j2").module


def _encode_all(
    kind: str,
    parent: str,
    items: Sequence,
    encode: Callable,
    ctx: IndentContext,
    dst,
    before: str = "",
    between: str = "",
) -> None:
    """Encode `items` in order, wrapping the first failure with its position."""
    for i, item in enumerate(items):
        if before:
            dst.write(before)
        if between and i > 0:
            dst.write(between)
        try:
            encode(item, ctx, dst)
        except _FAILURES as e:
            raise EncodeError(kind, i, parent, e) from e


def _comment(text: str, ctx: IndentContext, dst) -> None:
    for line in text.splitlines():
        dst.write(f"\n{ctx.indent}// {line}")


# -- leaves --


def encode_import(imp: Import, ctx: IndentContext, dst) -> None:
    dst.write(f"\n{ctx.indent}import")
    if imp.type == ImportType.PUBLIC:
        dst.write(" public")
    elif imp.type == ImportType.WEAK:
        dst.write(" weak")
    dst.write(f" {quote(imp.path)};")


def encode_option(opt: Option, ctx: IndentContext, dst) -> None:
    """Write an option statement, or a bare `name = value` when compact.

    Compact options are joined with commas by the enclosing field.
    """
    value = format_value(opt.value, ctx, opt.name)
    if opt.compact:
        dst.write(f"{opt.name} = {value}")
    else:
        dst.write(f"\n{ctx.indent}option {opt.name} = {value};")


def encode_message_literal(
    literal: MessageLiteral,
    ctx: IndentContext,
    dst,
    owner: str = "",
) -> None:
    """Write `{ ... }`; `ctx` is the depth of the line holding the brace."""
    dst.write("{")
    inner = ctx.deepen()
    for i, lf in enumerate(literal.fields):
        if not literal.single_line:
            dst.write(f"\n{inner.indent}")
        elif i > 0:
            dst.write(" ")
        try:
            encode_message_literal_field(lf, inner, dst)
        except _FAILURES as e:
            raise EncodeError("literal field", i, owner, e) from e
    if not literal.single_line:
        dst.write(f"\n{ctx.indent}")
    dst.write("}")


def encode_message_literal_field(lf: MessageLiteralField, ctx: IndentContext, dst) -> None:
    dst.write(f"{lf.name}: {format_value(lf.value, ctx, lf.name)}")


def encode_enum_element(el: EnumElement, ctx: IndentContext, dst) -> None:
    dst.write(f"\n{ctx.indent}{el.name} = {el.value};")
    if el.comment:
        # must stay on one line
        dst.write(" // " + el.comment.replace("\n", " "))


def encode_compact_option(opt: Option, ctx: IndentContext, dst) -> None:
    """Write `name = value`, whatever the option's own compact flag says."""
    dst.write(f"{opt.name} = {format_value(opt.value, ctx, opt.name)}")


def encode_field(f: Field, ctx: IndentContext, dst) -> None:
    dst.write(f"\n{ctx.indent}")
    if f.cardinality != Cardinality.DEFAULT:
        dst.write(f"{f.cardinality.value} ")
    dst.write(f"{f.type} {f.name} = {f.id}")
    if f.options:
        # only the bracketed form is valid after a field
        dst.write(" [")
        _encode_all("option", f.name, f.options, encode_compact_option, ctx, dst, between=", ")
        dst.write("]")
    dst.write(";")


# -- containers --


def _block(
    keyword: str,
    name: str,
    kind: str,
    items: Sequence,
    encode: Callable,
    ctx: IndentContext,
    dst,
) -> None:
    """Write `keyword name { ... }` with `items` one level deeper."""
    tpl = _templates()
    dst.write(tpl.open_block(ctx.indent, keyword, name))
    _encode_all(kind, name, items, encode, ctx.deepen(), dst)
    dst.write(tpl.close_block(ctx.indent))


def encode_enum(e: Enum, ctx: IndentContext, dst) -> None:
    if e.comment:
        _comment(e.comment, ctx, dst)
    _block("enum", e.name, "enum element", e.elements, encode_enum_element, ctx, dst)


def encode_oneof(oo: OneOf, ctx: IndentContext, dst) -> None:
    _block("oneof", oo.name, "field", oo.fields, encode_field, ctx, dst)


def encode_extension(ext: Extension, ctx: IndentContext, dst) -> None:
    _block("extend", ext.name, "field", ext.fields, encode_field, ctx, dst)


def encode_message(m: Message, ctx: IndentContext, dst) -> None:
    if m.comment:
        _comment(m.comment, ctx, dst)
    tpl = _templates()
    dst.write(tpl.open_block(ctx.indent, "message", m.name))
    inner = ctx.deepen()
    # Fixed order: declarations come before the fields that use them.
    _encode_all("oneof", m.name, m.oneofs, encode_oneof, inner, dst)
    _encode_all("extension", m.name, m.extensions, encode_extension, inner, dst)
    _encode_all("option", m.name, m.options, encode_option, inner, dst)
    _encode_all("enum", m.name, m.enums, encode_enum, inner, dst)
    _encode_all("message", m.name, m.messages, encode_message, inner, dst)
    _encode_all("field", m.name, m.fields, encode_field, inner, dst)
    dst.write(tpl.close_block(ctx.indent))


def encode_method(method: Method, ctx: IndentContext, dst) -> None:
    tpl = _templates()
    dst.write(tpl.rpc(ctx.indent, method.name, method.input, method.output))
    if method.options:
        dst.write(" {")
        _encode_all("option", method.name, method.options, encode_option, ctx.deepen(), dst)
        dst.write(tpl.close_block(ctx.indent))
    dst.write(";")


def encode_service(svc: Service, ctx: IndentContext, dst) -> None:
    _block("service", svc.name, "method", svc.methods, encode_method, ctx, dst)


def encode_file(f: File, ctx: IndentContext, dst) -> None:
    dst.write(ctx.indent + _templates().header(SYNTAX, f.package))

    if f.imports:
        dst.write("\n")
        _encode_all("import", f.package, f.imports, encode_import, ctx, dst)
    if f.options:
        dst.write("\n")
        _encode_all("option", f.package, f.options, encode_option, ctx, dst)

    _encode_all("extension", f.package, f.extensions, encode_extension, ctx, dst, before="\n")
    _encode_all("message", f.package, f.messages, encode_message, ctx, dst, before="\n")
    _encode_all("enum", f.package, f.enums, encode_enum, ctx, dst, before="\n")
    _encode_all("service", f.package, f.services, encode_service, ctx, dst, before="\n")


_ENCODERS = {
    File: encode_file,
    Import: encode_import,
    Option: encode_option,
    MessageLiteral: encode_message_literal,
    MessageLiteralField: encode_message_literal_field,
    Message: encode_message,
    Field: encode_field,
    OneOf: encode_oneof,
    Enum: encode_enum,
    EnumElement: encode_enum_element,
    Extension: encode_extension,
    Service: encode_service,
    Method: encode_method,
}


def encode(node, ctx: IndentContext, dst) -> None:
    """Encode any document node with the encoder for its kind."""
    try:
        encoder = _ENCODERS[type(node)]
    except KeyError:
        raise TypeError(f"cannot encode {type(node).__name__!r}") from None
    encoder(node, ctx, dst)


# -- entry points --


def write(document: File, dst, indent: Optional[str] = None) -> None:
    """Render `document` into `dst`.

    `indent` overrides the module-level indentation unit for this call.
    On failure, whatever was already written to `dst` is meaningless.
    """
    ctx = IndentContext.root(indent)
    try:
        encode_file(document, ctx, dst)
    except EncodeError:
        raise
    except (OSError, TypeError) as e:
        raise EncodeError("file", 0, document.package, e) from e


def marshal(document: File, indent: Optional[str] = None) -> bytes:
    """Render `document` and return the UTF-8 encoded schema text."""
    buf = io.StringIO()
    write(document, buf, indent=indent)
    return buf.getvalue().encode("utf-8")


def render(node, indent: Optional[str] = None) -> str:
    """Render a single node at depth zero and return the text."""
    buf = io.StringIO()
    encode(node, IndentContext.root(indent), buf)
    return buf.getvalue()
