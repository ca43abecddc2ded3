"""Print tree-sitter Go type expressions back to source-like text.

The set of type shapes is small and closed, so this is a plain dispatch on
node type rather than a visitor.
"""

IDENT_NODES = frozenset({
    "identifier",
    "type_identifier",
    "field_identifier",
    "package_identifier",
})


def node_text(node) -> str:
    return node.text.decode("utf-8")


def named(node) -> list:
    """Named children, without comments."""
    return [c for c in node.named_children if c.type != "comment"]


def chan_dir(node) -> str:
    """Direction of a channel_type node: recv, send, or both."""
    tokens = [c.type for c in node.children if not c.is_named]
    if tokens[:1] == ["<-"]:
        return "recv"
    if tokens[:2] == ["chan", "<-"]:
        return "send"
    return "both"


_CHAN_PREFIXES = {"recv": "<-chan", "send": "chan<-", "both": "chan"}

# Literals whose text must survive untouched, whitespace included.
VERBATIM_NODES = frozenset({
    "interpreted_string_literal",
    "raw_string_literal",
    "rune_literal",
})


def expr_text(node) -> str:
    """Expression text with whitespace between tokens collapsed.

    String and rune literals are kept verbatim and comments are dropped.
    """
    if node.type in VERBATIM_NODES or node.child_count == 0:
        return node_text(node)

    out, prev_end = "", None
    for child in node.children:
        if child.type == "comment":
            continue
        if prev_end is not None and child.start_byte > prev_end:
            out += " "
        out += expr_text(child)
        prev_end = child.end_byte
    return out


def param_text(node) -> str:
    """Text of one parameter_declaration or variadic_parameter_declaration."""
    names = [node_text(n) for n in node.children_by_field_name("name")]
    typ = type_text(node.child_by_field_name("type"))
    if node.type == "variadic_parameter_declaration":
        typ = "..." + typ
    if names:
        return f"{', '.join(names)} {typ}"
    return typ


def params_text(node) -> str:
    """Text of a parameter_list including the parentheses."""
    if node is None:
        return "()"
    return "(" + ", ".join(param_text(p) for p in named(node)) + ")"


def field_text(node) -> str:
    """Text of one field_declaration of an inline struct type."""
    names = [node_text(n) for n in node.children_by_field_name("name")]
    typ = type_text(node.child_by_field_name("type"))
    if not names and any(c.type == "*" for c in node.children):
        typ = "*" + typ
    out = f"{', '.join(names)} {typ}" if names else typ
    tag = node.child_by_field_name("tag")
    if tag is not None:
        out += " " + node_text(tag)
    return out


def elem_text(node) -> str:
    """Text of one interface element: a method or an embedded type set."""
    if node.type in ("method_elem", "method_spec"):
        params = params_text(node.child_by_field_name("parameters"))
        result = result_text(node.child_by_field_name("result"))
        name = node_text(node.child_by_field_name("name"))
        return f"{name}{params} {result}" if result else f"{name}{params}"
    return expr_text(node)


def result_text(node) -> str:
    """Text of a function result: a type or a parameter_list."""
    if node is None:
        return ""
    if node.type != "parameter_list":
        return type_text(node)
    decls = named(node)
    if len(decls) == 1 and not decls[0].children_by_field_name("name"):
        return param_text(decls[0])
    return params_text(node)


def type_text(node) -> str:
    """Render a type node the way gofmt would print it."""
    if node is None:
        return ""

    t = node.type

    if t in IDENT_NODES:
        return node_text(node)
    if t == "pointer_type":
        return "*" + type_text(named(node)[-1])
    if t == "qualified_type":
        pkg = node.child_by_field_name("package")
        name = node.child_by_field_name("name")
        return f"{node_text(pkg)}.{node_text(name)}"
    if t == "slice_type":
        return "[]" + type_text(node.child_by_field_name("element"))
    if t == "array_type":
        length = expr_text(node.child_by_field_name("length"))
        return f"[{length}]" + type_text(node.child_by_field_name("element"))
    if t == "implicit_length_array_type":
        return "[...]" + type_text(node.child_by_field_name("element"))
    if t == "map_type":
        key = type_text(node.child_by_field_name("key"))
        value = type_text(node.child_by_field_name("value"))
        return f"map[{key}]{value}"
    if t == "channel_type":
        value = type_text(node.child_by_field_name("value"))
        return f"{_CHAN_PREFIXES[chan_dir(node)]} {value}"
    if t == "function_type":
        params = params_text(node.child_by_field_name("parameters"))
        result = result_text(node.child_by_field_name("result"))
        return f"func{params} {result}" if result else f"func{params}"
    if t == "generic_type":
        base = type_text(node.child_by_field_name("type"))
        args = node.child_by_field_name("type_arguments")
        if args is None:
            return base
        return base + "[" + ", ".join(type_text(a) for a in named(args)) + "]"
    if t == "parenthesized_type":
        return "(" + type_text(named(node)[0]) + ")"
    if t == "struct_type":
        fields = [
            field_text(f)
            for decls in named(node)
            for f in named(decls)
            if f.type == "field_declaration"
        ]
        return "struct { " + "; ".join(fields) + " }" if fields else "struct{}"
    if t == "interface_type":
        elems = [elem_text(e) for e in named(node)]
        return "interface { " + "; ".join(elems) + " }" if elems else "interface{}"

    if t == "type_elem" and len(named(node)) == 1:
        return type_text(named(node)[0])

    # unions and other constraints
    return expr_text(node)
