"""Unit tests for snapshot parsing and loading."""

import json

import pytest
from pydantic import ValidationError
from decl_index.core.errors import SnapshotLoadError
from decl_index.core.snapshot import Declaration, Kind, Snapshot, load_snapshot, parse_snapshot


class TestLoadSnapshot:
    """Test cases for load_snapshot and parse_snapshot."""

    def test_load_from_file(self, snapshot_file):
        snapshot = load_snapshot(snapshot_file)

        assert list(snapshot.declarations) == [
            "Nat.succ", "Nat.add", "Nat.add_comm", "instAddNat", "Monoid",
        ]
        assert snapshot.instances_for == {"Nat": ["instAddNat"]}
        assert snapshot.imported_by["Mathlib.Init"] == ["Mathlib.Data.Nat", "Mathlib.Unknown"]
        assert snapshot.imports == ["Mathlib.Init"]

    def test_declaration_fields(self, snapshot_file):
        decl = load_snapshot(snapshot_file).declarations["Nat.add_comm"]

        assert isinstance(decl, Declaration)
        assert decl.kind is Kind.THEOREM
        assert decl.doc_link == "./Mathlib/Init.html#Nat.add_comm"
        assert decl.source_link == "https://example.org/src/Nat.add_comm"

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotLoadError):
            load_snapshot(tmp_path / "missing.bmp")

    def test_malformed_json(self):
        with pytest.raises(SnapshotLoadError):
            parse_snapshot("{not json")

    def test_wrong_shape(self):
        with pytest.raises(SnapshotLoadError):
            parse_snapshot(json.dumps({"declarations": ["Nat.add"]}))

    def test_unknown_kind(self):
        doc = {"declarations": {"x": {
            "sourceLink": "", "name": "x", "kind": "lemma", "docLink": "", "doc": "",
        }}}
        with pytest.raises(SnapshotLoadError):
            parse_snapshot(json.dumps(doc))

    def test_every_field_is_optional(self):
        snapshot = parse_snapshot("{}")

        assert snapshot.declarations == {}
        assert snapshot.instances == {}
        assert snapshot.instances_for == {}
        assert snapshot.imports == []
        assert snapshot.imported_by == {}
        assert snapshot.modules == {}

    def test_unknown_fields_are_ignored(self):
        snapshot = parse_snapshot(json.dumps({"modules": {"A": "./A.html"}, "version": 3}))
        assert snapshot.modules == {"A": "./A.html"}

    def test_insertion_order_preserved(self):
        names = ["z", "10", "a", "2"]
        doc = {"modules": {name: f"./{name}.html" for name in names}}
        assert list(parse_snapshot(json.dumps(doc)).modules) == names


class TestDeclaration:
    """Test cases for the Declaration model."""

    def test_is_frozen(self, sample_snapshot):
        decl = sample_snapshot.declarations["Nat.add"]
        with pytest.raises(ValidationError):
            decl.name = "Nat.mul"

    def test_serializes_with_camel_case_keys(self, sample_snapshot):
        dumped = sample_snapshot.declarations["Nat.add"].model_dump(by_alias=True, mode="json")
        assert dumped == {
            "sourceLink": "https://example.org/src/Nat.add",
            "name": "Nat.add",
            "kind": "def",
            "docLink": "./Mathlib/Init.html#Nat.add",
            "doc": "Addition of natural numbers.",
        }

    def test_snapshot_accepts_field_names(self):
        snapshot = Snapshot(instances_for={"Nat": ["instAddNat"]})
        assert snapshot.instances_for == {"Nat": ["instAddNat"]}
