"""Tests for the dump tools."""

from pkgdmp.tools import dump_package, list_symbol_kinds

SOURCE = """package store

// Store keeps values.
type Store struct {
	Name string `json:"name"`
	data map[string]string
}

// NewStore creates a Store.
func NewStore() *Store { return &Store{} }

// Get returns a value.
func (s *Store) Get(key string) string { return s.data[key] }
"""


def test_dump_package_json(tmp_path):
    (tmp_path / "store.go").write_text(SOURCE)

    result = dump_package(str(tmp_path), format="json")

    assert result["success"] is True
    assert result["package_count"] == 1
    pkg = result["packages"][0]
    assert pkg["name"] == "store"
    assert pkg["types"][0]["name"] == "Store"
    assert pkg["types"][0]["fields"] == [{"type": "string", "tag": '`json:"name"`', "names": ["Name"]}]
    assert pkg["types"][0]["methods"][0]["name"] == "Get"
    assert pkg["funcs"][0]["name"] == "NewStore"


def test_dump_package_options(tmp_path):
    (tmp_path / "store.go").write_text(SOURCE)

    result = dump_package(str(tmp_path), only="func", no_tags=True, unexported=True, format="json")
    pkg = result["packages"][0]

    assert "types" not in pkg
    assert [f["name"] for f in pkg["funcs"]] == ["NewStore"]


def test_dump_package_text(tmp_path):
    (tmp_path / "store.go").write_text(SOURCE)

    result = dump_package(str(tmp_path), matching="^(Store|Get)$")

    assert result["success"] is True
    source = result["sources"][0]["source"]
    assert result["sources"][0]["name"] == "store"
    assert "type Store struct" in source
    assert "func (s *Store) Get(key string) string" in source
    assert "NewStore" not in source


def test_dump_package_errors(tmp_path):
    assert dump_package(str(tmp_path / "missing"))["success"] is False
    assert "error" in dump_package(str(tmp_path), matching="(")
    assert dump_package(str(tmp_path), format="yaml")["error"] == "Unknown format: yaml"


def test_list_symbol_kinds():
    result = list_symbol_kinds()

    assert result["count"] == 10
    kinds = {k["name"]: k["kind"] for k in result["kinds"]}
    assert kinds["struct"] == "structType"
    assert kinds["identType"] == "identType"
