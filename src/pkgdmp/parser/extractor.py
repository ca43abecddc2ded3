"""Extract filtered declaration entities from a loaded Go package."""

import hashlib
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..errors import ExtractionError
from ..summarizer import synopsis
from .entities import Const, ConstGroup, Field, Func, Package, TypeDef, Value
from .filters import SymbolFilter, all_of, filters_fingerprint
from .goast import DocFunc, DocType, DocValue, GoPackage, leading_doc, trailing_doc
from .symbols import Symbol, SymbolKind
from .typetext import chan_dir, expr_text, named, node_text, type_text

logger = logging.getLogger(__name__)

# Types of untyped basic literals.
LITERAL_TYPES = {
    "int_literal": "int",
    "float_literal": "float64",
    "imaginary_literal": "complex128",
    "rune_literal": "rune",
    "interpreted_string_literal": "string",
    "raw_string_literal": "string",
}

IDENT_VALUES = frozenset({"identifier", "iota", "true", "false", "nil"})

PARAM_NODES = frozenset({"parameter_declaration", "variadic_parameter_declaration"})


@dataclass(frozen=True)
class ParserOptions:
    """Configuration for a Parser."""
    exclude_docs: bool = False
    full_docs: bool = False
    exclude_tags: bool = False
    symbol_filters: tuple = ()

    def fingerprint(self) -> str:
        h = hashlib.sha256()
        h.update(f"{self.exclude_docs}:{self.full_docs}:{self.exclude_tags}\n".encode("utf-8"))
        h.update(filters_fingerprint(self.symbol_filters).encode("utf-8"))
        return h.hexdigest()


class Parser:
    """Turns GoPackage views into filtered Package entities.

    A Parser holds no state besides its options, so one instance can be used
    for any number of packages.
    """

    def __init__(self, options: Optional[ParserOptions] = None):
        self.options = options or ParserOptions()
        self._include = all_of(self.options.symbol_filters)

    def include_symbol(self, symbol: Symbol) -> bool:
        return self._include(symbol)

    def include_package(self, name: str) -> bool:
        """Check a package name against the filters before extracting it."""
        return self.include_symbol(Package(name=name))

    def package(self, go_pkg: GoPackage) -> Package:
        """Extract a filtered Package.

        Raises ExtractionError on a const value shape outside the Go grammar;
        nothing is returned for the package in that case.
        """
        consts: list[ConstGroup] = []
        types: list[TypeDef] = []
        funcs: list[Func] = []

        try:
            consts.extend(self._parse_consts(go_pkg.consts))
        except ExtractionError as e:
            raise ExtractionError(f"package {go_pkg.name}: parsing constants", str(e)) from e

        for dt in go_pkg.types:
            try:
                self._parse_type(dt, consts, types, funcs)
            except ExtractionError as e:
                raise ExtractionError(f"package {go_pkg.name}: parsing types", str(e)) from e

        funcs.extend(self._parse_funcs(go_pkg.funcs))

        return Package(
            name=go_pkg.name,
            doc=self.mk_doc(go_pkg.doc),
            consts=consts,
            types=types,
            funcs=funcs,
        )

    def mk_doc(self, full_doc: str) -> str:
        """Apply the doc mode: none, full, or first-sentence synopsis."""
        if self.options.exclude_docs:
            return ""

        full_doc = full_doc.strip()
        if full_doc.startswith("// "):
            full_doc = full_doc[3:]

        if self.options.full_docs:
            return full_doc

        return synopsis(full_doc)

    def _parse_consts(self, values: Sequence[DocValue]) -> list[ConstGroup]:
        groups = []
        for value in values:
            cg = self._parse_const_group(value)
            if cg.consts:
                groups.append(cg)
        return groups

    def _parse_const_group(self, value: DocValue) -> ConstGroup:
        consts = []

        for spec in value.specs:
            names = [node_text(n) for n in spec.children_by_field_name("name")]
            typ = spec.child_by_field_name("type")
            values_node = spec.child_by_field_name("value")
            exprs = named(values_node) if values_node is not None else []

            c = Const(
                names=names,
                type=type_text(typ) if typ is not None else "",
                exprs=[expr_text(e) for e in exprs],
            )

            if not self.include_symbol(c):
                continue

            context = f"const {', '.join(names)} (line {spec.start_point[0] + 1})"
            c.values = [self._const_value(e, typ, context) for e in exprs]
            consts.append(c)

        return ConstGroup(doc=self.mk_doc(value.doc), consts=consts)

    def _const_value(self, expr, typ, context: str) -> Value:
        t = expr.type

        if t in LITERAL_TYPES:
            val = Value(type=LITERAL_TYPES[t], value=node_text(expr))
        elif t == "call_expression":
            args = expr.child_by_field_name("arguments")
            first = named(args)[:1] if args is not None else []
            literal = node_text(first[0]) if first and first[0].type in LITERAL_TYPES else ""
            fn = expr_text(expr.child_by_field_name("function"))
            val = Value(type=fn, value=literal, specific=True)
        elif t == "type_conversion_expression":
            operand = expr.child_by_field_name("operand")
            literal = node_text(operand) if operand is not None and operand.type in LITERAL_TYPES else ""
            val = Value(type=type_text(expr.child_by_field_name("type")), value=literal, specific=True)
        elif t in IDENT_VALUES:
            val = Value(type=node_text(expr))
        else:
            raise ExtractionError(context, f"unsupported const value {t} {expr_text(expr)!r}")

        if typ is not None:
            val.type = type_text(typ)
            val.specific = True

        return val

    def _parse_type(self, dt: DocType, consts: list, types: list, funcs: list) -> None:
        # Associated consts and factory functions do not depend on whether
        # the type itself is shown.
        try:
            consts.extend(self._parse_consts(dt.consts))
        except ExtractionError as e:
            raise ExtractionError(f"parsing consts for {dt.name} type", str(e)) from e

        funcs.extend(self._parse_funcs(dt.funcs))

        td = self._type_def(dt)
        methods = self._parse_funcs(dt.methods)

        if td is not None and self.include_symbol(td):
            td.methods.extend(methods)
            types.append(td)
            return

        # promotion
        funcs.extend(methods)

    def _type_def(self, dt: DocType) -> Optional[TypeDef]:
        """Build a TypeDef by shape, or None for an unrecognized shape.

        Type parameters are not kept: `type List[T any] struct{...}` becomes
        `type List struct {...}` while its methods keep `*List[T]` receivers.
        """
        if dt.spec is None:
            return None

        node = dt.spec.child_by_field_name("type")
        t = node.type if node is not None else ""
        td = TypeDef(name=dt.name, type="", doc=self.mk_doc(dt.doc))

        if t == "type_identifier":
            td.type = node_text(node)
        elif t == "struct_type":
            td.type = "struct"
            td.fields = self._parse_struct_fields(node)
        elif t == "interface_type":
            td.type = "interface"
            td.methods = self._parse_interface_methods(node)
        elif t == "function_type":
            td.type = "func"
            td.params = self._parse_params(node.child_by_field_name("parameters"), SymbolKind.PARAM_FIELD)
            td.results = self._parse_results(node.child_by_field_name("result"))
        elif t == "map_type":
            td.type = "map"
            td.key = type_text(node.child_by_field_name("key"))
            td.value = type_text(node.child_by_field_name("value"))
        elif t == "channel_type":
            td.type = "chan"
            td.elt = type_text(node.child_by_field_name("value"))
            td.dir = chan_dir(node)
        elif t in ("array_type", "slice_type"):
            td.type = "array"
            td.elt = type_text(node.child_by_field_name("element"))
            length = node.child_by_field_name("length")
            if length is not None:
                td.len = expr_text(length)
        else:
            logger.debug("type %s has unsupported shape %s; skipped", dt.name, t or "<none>")
            return None

        return td

    def _parse_struct_fields(self, node) -> list[Field]:
        fields = []
        for decl_list in named(node):
            if decl_list.type != "field_declaration_list":
                continue
            for decl in named(decl_list):
                if decl.type != "field_declaration":
                    continue
                f = self._parse_struct_field(decl)
                if self.include_symbol(f):
                    fields.append(f)
        return fields

    def _parse_struct_field(self, decl) -> Field:
        names = [node_text(n) for n in decl.children_by_field_name("name")]
        typ = type_text(decl.child_by_field_name("type"))

        if not names and any(c.type == "*" for c in decl.children):
            typ = "*" + typ

        tag = ""
        tag_node = decl.child_by_field_name("tag")
        if tag_node is not None and not self.options.exclude_tags:
            tag = node_text(tag_node)

        return Field(
            type=typ,
            names=names,
            doc=self.mk_doc(leading_doc(decl)),
            comment=self.mk_doc(trailing_doc(decl)),
            tag=tag,
            kind=SymbolKind.STRUCT_FIELD,
        )

    def _parse_interface_methods(self, node) -> list[Func]:
        # Interface methods are a contract: never filtered, docs not kept.
        methods = []
        for elem in named(node):
            if elem.type not in ("method_elem", "method_spec"):
                continue
            methods.append(Func(
                name=node_text(elem.child_by_field_name("name")),
                params=self._parse_params(elem.child_by_field_name("parameters"), SymbolKind.PARAM_FIELD),
                results=self._parse_results(elem.child_by_field_name("result")),
                func_kw=False,
            ))
        return methods

    def _parse_params(self, node, kind: SymbolKind) -> list[Field]:
        if node is None:
            return []

        fields = []
        for p in named(node):
            if p.type not in PARAM_NODES:
                continue
            typ = type_text(p.child_by_field_name("type"))
            if p.type == "variadic_parameter_declaration":
                typ = "..." + typ
            fields.append(Field(
                type=typ,
                names=[node_text(n) for n in p.children_by_field_name("name")],
                kind=kind,
            ))
        return fields

    def _parse_results(self, node) -> list[Field]:
        if node is None:
            return []
        if node.type == "parameter_list":
            return self._parse_params(node, SymbolKind.RESULT_FIELD)
        return [Field(type=type_text(node), kind=SymbolKind.RESULT_FIELD)]

    def _parse_funcs(self, funcs: Sequence[DocFunc]) -> list[Func]:
        parsed = []
        for df in funcs:
            fn = self._parse_func(df)
            if self.include_symbol(fn):
                parsed.append(fn)
        return parsed

    def _parse_func(self, df: DocFunc) -> Func:
        decl = df.decl

        receiver = None
        receivers = self._parse_params(decl.child_by_field_name("receiver"), SymbolKind.RECEIVER_FIELD)
        if receivers:
            receiver = receivers[0]

        return Func(
            name=df.name,
            doc=self.mk_doc(df.doc),
            receiver=receiver,
            params=self._parse_params(decl.child_by_field_name("parameters"), SymbolKind.PARAM_FIELD),
            results=self._parse_results(decl.child_by_field_name("result")),
            func_kw=True,
        )


def new_parser(
    exclude_docs: bool = False,
    full_docs: bool = False,
    exclude_tags: bool = False,
    symbol_filters: Sequence[SymbolFilter] = (),
) -> Parser:
    """Convenience constructor for a Parser."""
    return Parser(ParserOptions(
        exclude_docs=exclude_docs,
        full_docs=full_docs,
        exclude_tags=exclude_tags,
        symbol_filters=tuple(symbol_filters),
    ))
