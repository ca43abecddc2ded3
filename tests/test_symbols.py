"""Tests for symbol kinds and export status."""

import pytest

from pkgdmp.parser import Const, Field, Func, Package, SymbolKind, TypeDef, is_exported_ident
from pkgdmp.parser.symbols import UNFILTERABLE_KINDS, is_unfilterable


def test_is_exported_ident():
    """Exported means the first character is its own upper case."""
    assert is_exported_ident("Foo")
    assert not is_exported_ident("foo")
    assert is_exported_ident("MyExported")
    assert not is_exported_ident("myUnexported")
    # A caseless first character compares equal to its upper case.
    assert is_exported_ident("_foo")


def test_is_exported_ident_empty():
    """An empty identifier has no export status."""
    with pytest.raises(ValueError):
        is_exported_ident("")


def test_symbol_kind_strings():
    """Kind values are the names used in diagnostics."""
    assert str(SymbolKind.IDENT_TYPE) == "identType"
    assert str(SymbolKind.STRUCT_FIELD) == "structField"
    assert str(SymbolKind.METHOD) == "method"


def test_unfilterable_kinds():
    """Package, params, results and receivers can never be filtered."""
    assert UNFILTERABLE_KINDS == {
        SymbolKind.PACKAGE,
        SymbolKind.PARAM_FIELD,
        SymbolKind.RESULT_FIELD,
        SymbolKind.RECEIVER_FIELD,
    }
    assert is_unfilterable(Package(name="p"))
    assert is_unfilterable(Field(type="int", names=["x"], kind=SymbolKind.PARAM_FIELD))
    assert not is_unfilterable(Field(type="int", names=["x"]))


def test_entity_kinds():
    """Entities report the kind matching their shape."""
    assert Const(names=["A"]).symbol_kind() is SymbolKind.CONST
    assert Func(name="F").symbol_kind() is SymbolKind.FUNC
    recv = Field(type="*T", names=["t"], kind=SymbolKind.RECEIVER_FIELD)
    assert Func(name="M", receiver=recv).symbol_kind() is SymbolKind.METHOD

    assert TypeDef(name="S", type="struct").symbol_kind() is SymbolKind.STRUCT_TYPE
    assert TypeDef(name="I", type="interface").symbol_kind() is SymbolKind.INTERFACE_TYPE
    assert TypeDef(name="F", type="func").symbol_kind() is SymbolKind.FUNC_TYPE
    assert TypeDef(name="M", type="map").symbol_kind() is SymbolKind.MAP_TYPE
    assert TypeDef(name="C", type="chan").symbol_kind() is SymbolKind.CHAN_TYPE
    assert TypeDef(name="A", type="array").symbol_kind() is SymbolKind.ARRAY_TYPE
    assert TypeDef(name="N", type="int").symbol_kind() is SymbolKind.IDENT_TYPE


def test_package_always_exported():
    """A lower case package name is still exported."""
    assert Package(name="mypkg").is_exported()


def test_embedded_field_ident():
    """Embedded struct fields are identified by their base type name."""
    assert Field(type="*Base").ident() == "Base"
    assert Field(type="io.Reader").ident() == "Reader"
    assert Field(type="*pkg.List[T]").ident() == "List"
    assert not Field(type="*base").is_exported()
    assert Field(type="string", names=["a", "B"]).ident() == "a"
