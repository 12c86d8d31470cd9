"""Tests for graph/extract.py - parent/child columns to nodes and links."""

import pytest

from rootline.errors import DataIntegrityError
from rootline.graph import LineageGraph, Link, extract_graph


class TestExtractGraph:
    """Tests for extract_graph()."""

    def test_example_nodes_and_links(self, example_columns):
        graph = extract_graph(*example_columns)

        assert graph.nodes == ["A", "B", "C", "D"]
        assert graph.links == [Link("A", "B"), Link("A", "C")]

    def test_null_parent_registers_child_without_link(self):
        graph = extract_graph([None], ["orphan"])

        assert graph.nodes == ["orphan"]
        assert graph.links == []

    def test_nodes_are_union_of_both_columns(self):
        parents = ["p1", None, "p2", "c1"]
        children = ["c1", "p2", "c2", "c3"]

        graph = extract_graph(parents, children)

        expected = {v for v in parents + children if v is not None}
        assert set(graph.nodes) == expected
        assert len(graph.nodes) == len(expected)

    def test_duplicate_rows_dedupe_nodes_but_keep_links(self):
        graph = extract_graph(["A", "A"], ["B", "B"])

        assert graph.nodes == ["B", "A"]
        assert graph.link_count() == 2

    def test_link_endpoints_are_nodes(self):
        graph = extract_graph(["x", "y", None], ["y", "z", "x"])

        for link in graph.links:
            assert link.source in graph.nodes
            assert link.target in graph.nodes
            assert link.target is not None

    def test_links_keep_row_order(self):
        graph = extract_graph(["r", "r", "r"], ["c3", "c1", "c2"])

        assert [link.target for link in graph.links] == ["c3", "c1", "c2"]

    def test_numeric_identifiers(self):
        graph = extract_graph([None, 1, 1], [1, 2, 3])

        assert graph.nodes == [1, 2, 3]
        assert graph.links == [Link(1, 2), Link(1, 3)]

    def test_null_child_row_is_skipped(self):
        graph = extract_graph(["A", None], [None, "B"])

        assert graph.nodes == ["B"]
        assert graph.links == []

    def test_mismatched_lengths_fail_fast(self):
        with pytest.raises(DataIntegrityError, match="3 values"):
            extract_graph([None, "A", "A"], ["A", "B"])

    @pytest.mark.parametrize("bad", [["x"], {"id": "x"}, ("x",), object()])
    def test_non_primitive_child_rejected(self, bad):
        with pytest.raises(DataIntegrityError, match="Row 1: child value"):
            extract_graph([None, None], ["ok", bad])

    def test_non_primitive_parent_rejected(self):
        with pytest.raises(DataIntegrityError, match="Row 0: parent value"):
            extract_graph([["p"]], ["c"])

    def test_bool_and_float_identifiers_accepted(self):
        graph = extract_graph([None, 1.5], [True, 2.5])

        assert graph.nodes == [True, 2.5, 1.5]

    def test_empty_columns(self):
        graph = extract_graph([], [])

        assert graph == LineageGraph()


class TestMultiParentPolicy:
    """Tests for the multi_parent option."""

    def test_duplicate_policy_keeps_every_link(self):
        graph = extract_graph(["A", "X"], ["B", "B"])

        assert graph.links == [Link("A", "B"), Link("X", "B")]

    def test_reject_policy_raises(self):
        with pytest.raises(DataIntegrityError, match="multiple parents"):
            extract_graph(["A", "X"], ["B", "B"], multi_parent="reject")

    def test_reject_policy_allows_repeated_row(self):
        graph = extract_graph(["A", "A"], ["B", "B"], multi_parent="reject")

        assert graph.link_count() == 2

    def test_unknown_policy(self):
        with pytest.raises(ValueError, match="Unknown multi-parent policy"):
            extract_graph([], [], multi_parent="merge")


class TestLineageGraphSerialization:
    """Tests for LineageGraph.to_dict()."""

    def test_to_dict_shape(self, example_columns):
        data = extract_graph(*example_columns).to_dict()

        assert data == {
            "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}, {"id": "D"}],
            "links": [
                {"source": "A", "target": "B"},
                {"source": "A", "target": "C"},
            ],
        }
