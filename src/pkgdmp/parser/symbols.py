"""Symbol capability and symbol kinds."""

from enum import Enum
from typing import Protocol


class SymbolKind(Enum):
    """Kinds of package symbols used for filtering."""
    PACKAGE = "package"              # package mypackage
    CONST = "const"                  # const myConst = ...
    IDENT_TYPE = "identType"         # type MyInt int
    FUNC_TYPE = "funcType"           # type MyFunc func(...)
    STRUCT_TYPE = "structType"       # type MyStruct struct { ... }
    INTERFACE_TYPE = "interfaceType" # type MyInterface interface { ... }
    MAP_TYPE = "mapType"             # type MyMap map[...]...
    CHAN_TYPE = "chanType"           # type MyChan chan ...
    ARRAY_TYPE = "arrayType"         # type MyArray []string
    FUNC = "func"                    # func MyFunc(...)
    METHOD = "method"                # func (r T) MyMethod(...)
    STRUCT_FIELD = "structField"
    PARAM_FIELD = "paramField"
    RESULT_FIELD = "resultField"
    RECEIVER_FIELD = "receiverField"

    def __str__(self) -> str:
        return self.value


# Kinds every filter must include. Dropping a parameter or receiver would
# produce an invalid signature, and the package is the filtering root.
UNFILTERABLE_KINDS = frozenset({
    SymbolKind.PACKAGE,
    SymbolKind.PARAM_FIELD,
    SymbolKind.RESULT_FIELD,
    SymbolKind.RECEIVER_FIELD,
})


class Symbol(Protocol):
    """Anything that can be offered to a symbol filter."""

    def ident(self) -> str: ...

    def is_exported(self) -> bool: ...

    def symbol_kind(self) -> SymbolKind: ...


def is_exported_ident(name: str) -> bool:
    """Return True if the first character of name is its own upper case.

    Raises ValueError for an empty name.
    """
    if not name:
        raise ValueError("cannot determine export status of an empty identifier")
    first = name[:1]
    return first.upper() == first


def is_unfilterable(symbol: Symbol) -> bool:
    return symbol.symbol_kind() in UNFILTERABLE_KINDS
