"""Load Go source into a documentation-augmented package view.

tree-sitter gives a concrete syntax tree with comments as sibling nodes. This
module reattaches doc comments to declarations and groups declarations the way
Go's doc reader does: methods under their receiver type, factory functions and
typed const groups under the type they produce.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

import pathspec
from tree_sitter_language_pack import get_parser

from ..errors import LoadError
from .typetext import named, node_text

logger = logging.getLogger(__name__)

# Files never read as part of a package.
DEFAULT_EXCLUDES = ["*_test.go"]

PREDECLARED_TYPES = frozenset({
    "any", "bool", "byte", "comparable", "complex64", "complex128", "error",
    "float32", "float64", "int", "int8", "int16", "int32", "int64", "rune",
    "string", "uint", "uint8", "uint16", "uint32", "uint64", "uintptr",
})

# Typed specs needed before a const group belongs to its type.
CONST_TYPE_THRESHOLD = 0.75

_DIRECTIVE = re.compile(r"^([a-z0-9]+:[a-z0-9]|line |extern |export )")


@dataclass
class DocValue:
    """A const declaration with its doc comment."""
    doc: str
    decl: object                    # const_declaration node
    specs: list = field(default_factory=list)


@dataclass
class DocFunc:
    """A function or method declaration with its doc comment."""
    name: str
    doc: str
    decl: object                    # function_declaration / method_declaration node


@dataclass
class DocType:
    """A declared type and the declarations associated with it."""
    name: str
    doc: str = ""
    spec: object = None             # type_spec / type_alias node
    consts: list[DocValue] = field(default_factory=list)
    funcs: list[DocFunc] = field(default_factory=list)
    methods: list[DocFunc] = field(default_factory=list)


@dataclass
class GoFile:
    """One parsed Go source file."""
    filename: str
    package: str
    doc: str
    root: object
    has_error: bool = False


@dataclass
class GoPackage:
    """All declarations of one Go package, in source order."""
    name: str
    doc: str = ""
    consts: list[DocValue] = field(default_factory=list)
    types: list[DocType] = field(default_factory=list)
    funcs: list[DocFunc] = field(default_factory=list)
    files: list[str] = field(default_factory=list)


def comment_text(comments: list) -> str:
    """Text of a comment group with comment markers removed.

    Directive comments such as `//go:generate` are dropped, trailing spaces
    and surrounding blank lines are removed.
    """
    lines = []
    for node in comments:
        c = node_text(node)
        if c.startswith("//"):
            c = c[2:]
            if c.startswith(" "):
                c = c[1:]
            elif _DIRECTIVE.match(c):
                continue
            lines.append(c)
        else:
            lines.extend(c[2:-2].split("\n"))

    cleaned: list[str] = []
    for line in lines:
        line = line.rstrip()
        if not line and (not cleaned or not cleaned[-1]):
            continue
        cleaned.append(line)

    while cleaned and not cleaned[-1]:
        cleaned.pop()

    return "\n".join(cleaned)


def leading_comments(node) -> list:
    """Comment nodes directly above node, with no blank line in between."""
    comments = []
    row = node.start_point[0]
    prev = node.prev_named_sibling

    while prev is not None and prev.type == "comment":
        if prev.end_point[0] != row - 1:
            break
        before = prev.prev_named_sibling
        if before is not None and before.type != "comment" and before.end_point[0] == prev.start_point[0]:
            # trailing comment of the previous declaration
            break
        comments.insert(0, prev)
        row = prev.start_point[0]
        prev = prev.prev_named_sibling

    return comments


def leading_doc(node) -> str:
    return comment_text(leading_comments(node))


def trailing_doc(node) -> str:
    """Text of a comment starting on the line where node ends."""
    nxt = node.next_named_sibling
    if nxt is not None and nxt.type == "comment" and nxt.start_point[0] == node.end_point[0]:
        return comment_text([nxt])
    return ""


def base_type_name(node) -> tuple[str, bool]:
    """Base type name of a type expression and whether it is imported."""
    if node is None:
        return "", False

    t = node.type
    if t in ("type_identifier", "identifier"):
        return node_text(node), False
    if t == "pointer_type":
        return base_type_name(named(node)[-1])
    if t == "generic_type":
        return base_type_name(node.child_by_field_name("type"))
    if t == "parenthesized_type":
        return base_type_name(named(node)[0])
    if t == "qualified_type":
        return node_text(node.child_by_field_name("name")), True
    return "", False


def parse_source(content: str, filename: str = "file.go") -> GoFile:
    """Parse one Go source file."""
    parser = get_parser("go")
    tree = parser.parse(content.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        logger.warning("syntax errors in %s; declarations may be incomplete", filename)

    package, doc = "", ""
    for child in named(root):
        if child.type == "package_clause":
            ident = named(child)
            package = node_text(ident[0]) if ident else ""
            doc = leading_doc(child)
            break

    return GoFile(filename=filename, package=package, doc=doc, root=root, has_error=root.has_error)


def _type_specs(decl) -> list:
    return [c for c in named(decl) if c.type in ("type_spec", "type_alias")]


def _receiver_type(decl):
    receiver = decl.child_by_field_name("receiver")
    if receiver is None:
        return None
    params = named(receiver)
    if not params:
        return None
    return params[0].child_by_field_name("type")


def _result_types(decl) -> list:
    result = decl.child_by_field_name("result")
    if result is None:
        return []
    if result.type != "parameter_list":
        return [result]
    return [p.child_by_field_name("type") for p in named(result)]


def _type_params(decl) -> set:
    tparams = decl.child_by_field_name("type_parameters")
    if tparams is None:
        return set()
    return {node_text(n) for p in named(tparams) for n in p.children_by_field_name("name")}


def _factory_type(decl, declared: dict) -> Optional[str]:
    """Type a function constructs, if it returns exactly one package type."""
    tparams = _type_params(decl)
    found, count = None, 0

    for typ in _result_types(decl):
        if typ is not None and typ.type in ("slice_type", "array_type"):
            typ = typ.child_by_field_name("element")
        name, imported = base_type_name(typ)
        if not name or imported or name in PREDECLARED_TYPES:
            continue
        if name in tparams:
            return None
        if name in declared:
            found = name
            count += 1
            if count > 1:
                break

    return found if count == 1 else None


def _const_type(specs: list, declared: dict) -> Optional[str]:
    """Dominant type of a const group, if it is a package type."""
    dom_name, dom_freq, prev = "", 0, ""

    for spec in specs:
        typ = spec.child_by_field_name("type")
        name = ""
        if typ is not None:
            n, imported = base_type_name(typ)
            if not imported:
                name = n
        elif spec.child_by_field_name("value") is None:
            name = prev

        if name:
            if dom_name and dom_name != name:
                dom_name = ""
                break
            dom_name = name
            dom_freq += 1
        prev = name

    if dom_name in declared and dom_freq >= int(len(specs) * CONST_TYPE_THRESHOLD):
        return dom_name
    return None


def build_package(files: list[GoFile]) -> GoPackage:
    """Collect the declarations of files belonging to one package."""
    if not files:
        raise LoadError("no Go files to build a package from")

    pkg = GoPackage(name=files[0].package, files=[f.filename for f in files])

    # First pass: every declared type, so methods and factories declared
    # before their type still find it.
    declared: dict[str, DocType] = {}
    for f in files:
        for child in named(f.root):
            if child.type != "type_declaration":
                continue
            for spec in _type_specs(child):
                name = node_text(spec.child_by_field_name("name"))
                declared.setdefault(name, DocType(name=name))
    pkg.types = list(declared.values())

    for f in files:
        if f.doc:
            pkg.doc = f"{pkg.doc}\n{f.doc}" if pkg.doc else f.doc

        for child in named(f.root):
            if child.type == "const_declaration":
                specs = [c for c in named(child) if c.type == "const_spec"]
                value = DocValue(doc=leading_doc(child), decl=child, specs=specs)
                owner = _const_type(specs, declared)
                if owner:
                    declared[owner].consts.append(value)
                else:
                    pkg.consts.append(value)

            elif child.type == "type_declaration":
                decl_doc = leading_doc(child)
                for spec in _type_specs(child):
                    dt = declared[node_text(spec.child_by_field_name("name"))]
                    if dt.spec is not None:
                        logger.debug("duplicate type %s in %s ignored", dt.name, f.filename)
                        continue
                    dt.spec = spec
                    dt.doc = leading_doc(spec) or decl_doc

            elif child.type == "function_declaration":
                fn = DocFunc(name=node_text(child.child_by_field_name("name")), doc=leading_doc(child), decl=child)
                owner = _factory_type(child, declared)
                if owner:
                    declared[owner].funcs.append(fn)
                else:
                    pkg.funcs.append(fn)

            elif child.type == "method_declaration":
                fn = DocFunc(name=node_text(child.child_by_field_name("name")), doc=leading_doc(child), decl=child)
                recv, imported = base_type_name(_receiver_type(child))
                if recv in declared and not imported:
                    declared[recv].methods.append(fn)
                else:
                    logger.debug("method %s on undeclared type %r dropped", fn.name, recv)

    return pkg


def package_from_source(content: str, filename: str = "file.go") -> GoPackage:
    """Build a package from a single source string."""
    return build_package([parse_source(content, filename)])


def discover_go_files(directory: Path, exclude_patterns: Iterable[str] = ()) -> list[Path]:
    """Go files directly inside directory, minus test files and exclusions."""
    spec = pathspec.PathSpec.from_lines("gitwildmatch", [*DEFAULT_EXCLUDES, *exclude_patterns])

    return sorted(
        p for p in directory.iterdir()
        if p.is_file() and p.suffix == ".go" and not spec.match_file(p.name)
    )


def load_packages(directory: str, exclude_patterns: Iterable[str] = ()) -> list[GoPackage]:
    """Parse every package in a directory (not recursive).

    Returns packages in the order their first file sorts in.
    """
    path = Path(directory).expanduser()
    if not path.is_dir():
        raise LoadError(f"not a directory: {directory}")

    go_files = discover_go_files(path, exclude_patterns)
    if not go_files:
        raise LoadError(f"no Go files found in {directory}")

    by_package: dict[str, list[GoFile]] = {}
    for file_path in go_files:
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise LoadError(f"reading {file_path}: {e}") from e

        parsed = parse_source(content, file_path.name)
        if not parsed.package:
            logger.warning("%s has no package clause; skipped", file_path)
            continue
        by_package.setdefault(parsed.package, []).append(parsed)

    logger.debug("loaded %d package(s) from %s", len(by_package), path)

    return [build_package(files) for files in by_package.values()]
