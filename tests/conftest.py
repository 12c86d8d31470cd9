"""Shared fixtures for rootline tests."""

import json
import os

import pytest

EXAMPLE_PARENTS = [None, "A", "A", None]
EXAMPLE_CHILDREN = ["A", "B", "C", "D"]


@pytest.fixture
def example_columns():
    """Two lineages: A with leaves B and C, and isolated D."""
    return list(EXAMPLE_PARENTS), list(EXAMPLE_CHILDREN)


@pytest.fixture
def example_csv(tmp_path):
    """The two-lineage example as a CSV file with empty parent cells."""
    path = tmp_path / "lineage.csv"
    path.write_text("parent,child\n,A\nA,B\nA,C\n,D\n", encoding="utf-8")
    return path


@pytest.fixture
def write_json(tmp_path):
    """Write a JSON table to tmp_path and return its path."""

    def _write(data, name="lineage.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run in an empty directory with no rootline environment overrides."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("ROOTLINE_"):
            monkeypatch.delenv(name)
    return tmp_path
