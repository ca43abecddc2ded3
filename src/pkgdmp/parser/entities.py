"""Declaration entities extracted from a Go package.

Every entity implements the Symbol capability and renders itself back to Go
declaration text. `to_dict()` gives the structured form, leaving out empty
values.
"""

from dataclasses import dataclass, field
from typing import Optional

from .gofmt import format_source
from .render import fields_list, mk_comment, signature
from .symbols import SymbolKind, is_exported_ident


def embedded_name(type_text: str) -> str:
    """Name of an embedded field: `*pkg.Reader[T]` -> `Reader`."""
    name = type_text.lstrip("*").split("[", 1)[0]
    return name.rsplit(".", 1)[-1]


def _compact(d: dict) -> dict:
    return {k: v for k, v in d.items() if v not in ("", None, [], False)}


@dataclass
class Field:
    """A struct field, function parameter, result, or receiver."""
    type: str                       # Type text, e.g. "*MyStruct"
    names: list[str] = field(default_factory=list)
    doc: str = ""
    comment: str = ""               # Trailing line comment
    tag: str = ""                   # Raw struct tag, e.g. `json:"name"`
    kind: SymbolKind = SymbolKind.STRUCT_FIELD

    def ident(self) -> str:
        if self.names:
            return self.names[0]
        if self.kind is SymbolKind.STRUCT_FIELD:
            return embedded_name(self.type)
        return ""

    def is_exported(self) -> bool:
        return is_exported_ident(self.ident())

    def symbol_kind(self) -> SymbolKind:
        return self.kind

    def render(self) -> str:
        out = mk_comment(self.doc)
        if self.names:
            out += f"{', '.join(self.names)} {self.type}"
        else:
            out += self.type
        if self.tag:
            out += f" {self.tag}"
        if self.comment:
            out += f" // {self.comment}"
        return out

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        return {"type": self.type} | _compact({
            "doc": self.doc,
            "comment": self.comment,
            "tag": self.tag,
            "names": list(self.names),
        })


@dataclass
class Value:
    """A value in a const declaration."""
    type: str
    value: str = ""
    specific: bool = False          # Type written out or taken from a conversion

    def to_dict(self) -> dict:
        return {"type": self.type} | _compact({"value": self.value, "specific": self.specific})


@dataclass
class Const:
    """A single const spec, possibly declaring several names."""
    names: list[str]
    values: list[Value] = field(default_factory=list)
    type: str = ""                  # Explicit type text, if written
    exprs: list[str] = field(default_factory=list, repr=False)

    def ident(self) -> str:
        return self.names[0]

    def is_exported(self) -> bool:
        return is_exported_ident(self.names[0])

    def symbol_kind(self) -> SymbolKind:
        return SymbolKind.CONST

    def render(self) -> str:
        out = ", ".join(self.names)
        if self.type:
            out += f" {self.type}"
        if self.exprs:
            out += f" = {', '.join(self.exprs)}"
        return out

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        return {"names": list(self.names), "values": [v.to_dict() for v in self.values]}


@dataclass
class ConstGroup:
    """One const declaration, grouped or not."""
    consts: list[Const] = field(default_factory=list)
    doc: str = ""

    def render(self) -> str:
        if not self.consts:
            return ""

        out = mk_comment(self.doc) + "const "

        if len(self.consts) == 1:
            return out + self.consts[0].render()

        out += "(\n"
        for c in self.consts:
            out += f"    {c.render()}\n"
        return out + ")"

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        return _compact({"doc": self.doc}) | {"consts": [c.to_dict() for c in self.consts]}


@dataclass
class Func:
    """A function, a method when receiver is set, or an interface method."""
    name: str
    doc: str = ""
    receiver: Optional[Field] = None
    params: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)
    func_kw: bool = True            # False for interface method signatures

    def ident(self) -> str:
        return self.name

    def is_exported(self) -> bool:
        return is_exported_ident(self.name)

    def symbol_kind(self) -> SymbolKind:
        if self.receiver is not None:
            return SymbolKind.METHOD
        return SymbolKind.FUNC

    def render(self) -> str:
        out = mk_comment(self.doc)
        if self.func_kw:
            out += "func "
        if self.receiver is not None:
            out += f"({self.receiver.render()}) "
        return out + self.name + signature(self.params, self.results)

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        d = {}
        if self.receiver is not None:
            d["receiver"] = self.receiver.to_dict()
        d["name"] = self.name
        return d | _compact({
            "doc": self.doc,
            "params": [p.to_dict() for p in self.params],
            "results": [r.to_dict() for r in self.results],
        })


_TYPE_KINDS = {
    "struct": SymbolKind.STRUCT_TYPE,
    "interface": SymbolKind.INTERFACE_TYPE,
    "func": SymbolKind.FUNC_TYPE,
    "map": SymbolKind.MAP_TYPE,
    "chan": SymbolKind.CHAN_TYPE,
    "array": SymbolKind.ARRAY_TYPE,
}

_CHAN_PREFIXES = {
    "recv": "<-chan",
    "send": "chan<-",
    "both": "chan",
}


@dataclass
class TypeDef:
    """A type definition tagged by shape.

    `type` is one of struct, interface, func, map, chan, array, or the
    aliased type text for a plain alias such as `type MyInt int`.
    """
    name: str
    type: str
    doc: str = ""
    key: str = ""                   # map
    value: str = ""                 # map
    dir: str = ""                   # chan: recv, send, both
    elt: str = ""                   # chan, array
    len: str = ""                   # array; empty for slices
    params: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)
    methods: list[Func] = field(default_factory=list)

    def ident(self) -> str:
        return self.name

    def is_exported(self) -> bool:
        return is_exported_ident(self.name)

    def symbol_kind(self) -> SymbolKind:
        return _TYPE_KINDS.get(self.type, SymbolKind.IDENT_TYPE)

    def _header(self) -> str:
        if self.type == "struct":
            body = "".join(f"{f.render()}\n" for f in self.fields)
            return f"struct {{\n{body}}}" if body else "struct {}"
        if self.type == "interface":
            body = "".join(f"    {m.render()}\n" for m in self.methods)
            return f"interface {{\n{body}}}" if body else "interface {}"
        if self.type == "func":
            return "func" + signature(self.params, self.results)
        if self.type == "map":
            return f"map[{self.key}]{self.value}"
        if self.type == "chan":
            return f"{_CHAN_PREFIXES.get(self.dir, 'chan')} {self.elt}"
        if self.type == "array":
            return f"[{self.len}]{self.elt}"
        return self.type

    def render(self) -> str:
        out = mk_comment(self.doc) + f"type {self.name} {self._header()}"

        if self.type != "interface":
            for m in self.methods:
                out += f"\n\n{m.render()}"

        return out

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict:
        return {"type": self.type, "name": self.name} | _compact({
            "doc": self.doc,
            "key": self.key,
            "value": self.value,
            "dir": self.dir,
            "elt": self.elt,
            "len": self.len,
            "params": [p.to_dict() for p in self.params],
            "results": [r.to_dict() for r in self.results],
            "fields": [f.to_dict() for f in self.fields],
            "methods": [m.to_dict() for m in self.methods],
        })


@dataclass
class Package:
    """A Go package reduced to its declarations."""
    name: str
    doc: str = ""
    consts: list[ConstGroup] = field(default_factory=list)
    types: list[TypeDef] = field(default_factory=list)
    funcs: list[Func] = field(default_factory=list)

    def ident(self) -> str:
        return self.name

    def is_exported(self) -> bool:
        return True

    def symbol_kind(self) -> SymbolKind:
        return SymbolKind.PACKAGE

    def render(self) -> str:
        """Unformatted package declaration source."""
        out = mk_comment(self.doc) + f"package {self.name}"

        for c in self.consts:
            out += f"\n\n{c.render()}"
        for t in self.types:
            out += f"\n\n{t.render()}"
        for f in self.funcs:
            out += f"\n\n{f.render()}"

        return out + "\n"

    def __str__(self) -> str:
        return self.render()

    def source(self) -> str:
        """Package declaration source formatted by gofmt.

        Raises FormatError; str(package) still gives the raw text.
        """
        return format_source(self.render())

    def to_dict(self) -> dict:
        return {"name": self.name} | _compact({
            "doc": self.doc,
            "consts": [c.to_dict() for c in self.consts],
            "types": [t.to_dict() for t in self.types],
            "funcs": [f.to_dict() for f in self.funcs],
        })
