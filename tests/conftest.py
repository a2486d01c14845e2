"""Pytest configuration and shared fixtures for tagview tests."""

from __future__ import annotations

from typing import Any

import pytest

from tagview.records import TagRecord
from tagview.tree import TreeStore, VisibilityState
from tests.factories import make_element, make_record


@pytest.fixture
def sample_tree() -> tuple[TreeStore, VisibilityState, dict[str, int]]:
    """A small tree with every node closed.

        root
        ├── a
        │   ├── a1
        │   └── a2
        │       └── a2x
        ├── b
        └── c
            └── c1
    """
    store = TreeStore("root")
    ids = {"root": store.root}
    ids["a"] = store.add_child(store.root, "a")
    ids["a1"] = store.add_child(ids["a"], "a1")
    ids["a2"] = store.add_child(ids["a"], "a2")
    ids["a2x"] = store.add_child(ids["a2"], "a2x")
    ids["b"] = store.add_child(store.root, "b")
    ids["c"] = store.add_child(store.root, "c")
    ids["c1"] = store.add_child(ids["c"], "c1")
    return store, VisibilityState(store), ids


@pytest.fixture
def open_sample_tree(sample_tree):
    """The sample tree with every node that has children open."""
    store, state, ids = sample_tree
    state.expand_recursive(store.root)
    return store, state, ids


@pytest.fixture
def two_records() -> list[TagRecord]:
    """Two records sharing most tags, differing in the patient name."""
    return [
        make_record(
            "f1",
            make_element(0x0008, 0x0020, "20240101", vr="DA", name="StudyDate"),
            make_element(0x0010, 0x0010, "Doe^J", vr="PN", name="PatientName"),
        ),
        make_record(
            "f2",
            make_element(0x0008, 0x0020, "20240101", vr="DA", name="StudyDate"),
            make_element(0x0010, 0x0010, "Roe^R", vr="PN", name="PatientName"),
        ),
    ]


@pytest.fixture
def dicom_json_dataset() -> dict[str, Any]:
    """A DICOM JSON model dataset covering the common value shapes."""
    return {
        "00080020": {"vr": "DA", "Value": ["20240101"]},
        "00080060": {"vr": "CS", "Value": ["MR"]},
        "00100010": {"vr": "PN", "Value": [{"Alphabetic": "Doe^John"}]},
        "00280010": {"vr": "US", "Value": [512]},
        "00281050": {"vr": "DS", "Value": [40, 400]},
        "00081115": {"vr": "SQ", "Value": [{}, {}]},
        "7FE00010": {"vr": "OW", "BulkDataURI": "http://example.com/pixels"},
    }
