"""Shared fixtures for the declaration index tests."""

import json

import pytest

from decl_index.core.engine import SearchEngine
from decl_index.core.snapshot import Snapshot
from decl_index.core.store import SnapshotStore


def make_decl(name, kind="def", doc=""):
    """Build a declaration record in the on-disk (camelCase) shape."""
    return {
        "sourceLink": f"https://example.org/src/{name}",
        "name": name,
        "kind": kind,
        "docLink": f"./Mathlib/Init.html#{name}",
        "doc": doc,
    }


@pytest.fixture
def decl_factory():
    return make_decl


@pytest.fixture
def sample_document():
    """A small declaration document covering every field."""
    return {
        "declarations": {
            "Nat.succ": make_decl("Nat.succ", "ctor", "The successor of a natural number."),
            "Nat.add": make_decl("Nat.add", "def", "Addition of natural numbers."),
            "Nat.add_comm": make_decl("Nat.add_comm", "theorem", "Addition is commutative."),
            "instAddNat": make_decl("instAddNat", "instance"),
            "Monoid": make_decl("Monoid", "class", "A semigroup with an identity element."),
        },
        "instances": {"Add": ["instAddNat", "instAddMissing"]},
        "instancesFor": {"Nat": ["instAddNat"]},
        "imports": ["Mathlib.Init"],
        "importedBy": {"Mathlib.Init": ["Mathlib.Data.Nat", "Mathlib.Unknown"]},
        "modules": {
            "Mathlib.Init": "./Mathlib/Init.html",
            "Mathlib.Data.Nat": "./Mathlib/Data/Nat.html",
        },
    }


@pytest.fixture
def sample_snapshot(sample_document):
    return Snapshot.model_validate(sample_document)


@pytest.fixture
def sample_store(sample_snapshot):
    return SnapshotStore(sample_snapshot)


@pytest.fixture
def engine(sample_store):
    """A search engine attached to the sample snapshot."""
    return SearchEngine(sample_store)


@pytest.fixture
def snapshot_file(tmp_path, sample_document):
    """The sample document written to disk."""
    path = tmp_path / "declaration-data.bmp"
    path.write_text(json.dumps(sample_document), encoding="utf-8")
    return path
