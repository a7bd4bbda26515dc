"""Tests for RelationGraph."""
from __future__ import annotations

import threading

import pytest

from aumos_rebac.graph.relation_graph import RelationGraph
from aumos_rebac.graph.tuples import RelationTuple, RelationType


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def graph() -> RelationGraph:
    return RelationGraph()


@pytest.fixture()
def team_graph() -> RelationGraph:
    return RelationGraph(
        [
            RelationTuple("alice", "memberOf", "team1"),
            RelationTuple("bob", "memberOf", "team1"),
            RelationTuple("team1", "editor", "doc1"),
            RelationTuple("alice", "viewer", "doc1"),
        ]
    )


# ---------------------------------------------------------------------------
# add_relation
# ---------------------------------------------------------------------------


class TestAddRelation:
    def test_added_relation_is_visible(self, graph: RelationGraph) -> None:
        graph.add_relation(RelationTuple("user1", "owns", "doc1"))
        assert graph.has_direct_relation("user1", "owns", "doc1") is True

    def test_adding_twice_is_idempotent(self, graph: RelationGraph) -> None:
        edge = RelationTuple("user1", "owns", "doc1")
        graph.add_relation(edge)
        once = graph.get_relations("user1")
        graph.add_relation(edge)
        assert graph.get_relations("user1") == once
        assert len(graph) == 1

    def test_same_subject_and_relation_different_object_are_distinct(
        self, graph: RelationGraph
    ) -> None:
        first = RelationTuple("user1", "owns", "doc1")
        second = RelationTuple("user1", "owns", "doc2")
        graph.add_relation(first)
        graph.add_relation(second)
        relations = graph.get_relations("user1")
        assert relations == [first, second]

    def test_adds_to_reverse_index(self, graph: RelationGraph) -> None:
        edge = RelationTuple("team1", "editor", "doc1")
        graph.add_relation(edge)
        assert graph.get_reverse_relations("doc1") == [edge]

    def test_add_relations_bulk(self, graph: RelationGraph) -> None:
        graph.add_relations(
            [
                RelationTuple("a", "memberOf", "b"),
                RelationTuple("b", "memberOf", "c"),
                RelationTuple("a", "memberOf", "b"),
            ]
        )
        assert len(graph) == 2

    def test_self_loop_allowed(self, graph: RelationGraph) -> None:
        loop = RelationTuple("group1", "manages", "group1")
        graph.add_relation(loop)
        assert graph.get_relations("group1") == [loop]
        assert graph.get_reverse_relations("group1") == [loop]


# ---------------------------------------------------------------------------
# remove_relation
# ---------------------------------------------------------------------------


class TestRemoveRelation:
    def test_removes_existing_relation(self, graph: RelationGraph) -> None:
        edge = RelationTuple("user1", "owns", "doc1")
        graph.add_relation(edge)
        graph.remove_relation(edge)
        assert graph.has_direct_relation("user1", "owns", "doc1") is False

    def test_removal_is_symmetric(self, graph: RelationGraph) -> None:
        edge = RelationTuple("user1", "owns", "doc1")
        graph.add_relation(edge)
        graph.remove_relation(edge)
        assert edge not in graph.get_reverse_relations("doc1")
        assert graph.get_relations("user1") == []

    def test_removing_absent_relation_is_noop(self, team_graph: RelationGraph) -> None:
        before = list(team_graph)
        team_graph.remove_relation(RelationTuple("carol", "owns", "doc9"))
        assert list(team_graph) == before
        assert len(team_graph) == 4

    def test_removing_from_empty_graph_is_noop(self, graph: RelationGraph) -> None:
        graph.remove_relation(RelationTuple("x", "owns", "y"))
        assert len(graph) == 0

    def test_empty_entries_are_pruned(self, graph: RelationGraph) -> None:
        edge = RelationTuple("user1", "owns", "doc1")
        graph.add_relation(edge)
        graph.remove_relation(edge)
        assert graph.entities() == set()

    def test_other_edges_survive(self, team_graph: RelationGraph) -> None:
        team_graph.remove_relation(RelationTuple("alice", "memberOf", "team1"))
        assert team_graph.get_relations("alice") == [RelationTuple("alice", "viewer", "doc1")]
        assert team_graph.get_reverse_relations("team1") == [
            RelationTuple("bob", "memberOf", "team1")
        ]


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class TestQueries:
    def test_has_direct_relation_false_when_absent(self, graph: RelationGraph) -> None:
        assert graph.has_direct_relation("user1", "owns", "doc1") is False

    def test_has_direct_relation_accepts_enum(self, team_graph: RelationGraph) -> None:
        assert team_graph.has_direct_relation("team1", RelationType.EDITOR, "doc1") is True

    def test_has_direct_relation_unknown_label_is_false(self, team_graph: RelationGraph) -> None:
        assert team_graph.has_direct_relation("team1", "admin", "doc1") is False

    def test_get_relations_all(self, graph: RelationGraph) -> None:
        first = RelationTuple("user1", "owns", "doc1")
        second = RelationTuple("user1", "editor", "doc2")
        graph.add_relation(first)
        graph.add_relation(second)
        assert graph.get_relations("user1") == [first, second]

    def test_get_relations_filtered(self, team_graph: RelationGraph) -> None:
        assert team_graph.get_relations("alice", "viewer") == [
            RelationTuple("alice", "viewer", "doc1")
        ]

    def test_get_relations_filtered_missing_relation(self, team_graph: RelationGraph) -> None:
        assert team_graph.get_relations("alice", RelationType.OWNS) == []

    def test_get_relations_unknown_subject(self, team_graph: RelationGraph) -> None:
        assert team_graph.get_relations("nobody") == []

    def test_get_reverse_relations_all(self, team_graph: RelationGraph) -> None:
        assert team_graph.get_reverse_relations("doc1") == [
            RelationTuple("team1", "editor", "doc1"),
            RelationTuple("alice", "viewer", "doc1"),
        ]

    def test_get_reverse_relations_filtered(self, team_graph: RelationGraph) -> None:
        assert team_graph.get_reverse_relations("team1", "memberOf") == [
            RelationTuple("alice", "memberOf", "team1"),
            RelationTuple("bob", "memberOf", "team1"),
        ]

    def test_entities(self, team_graph: RelationGraph) -> None:
        assert team_graph.entities() == {"alice", "bob", "team1", "doc1"}

    def test_contains(self, team_graph: RelationGraph) -> None:
        assert RelationTuple("team1", "editor", "doc1") in team_graph
        assert RelationTuple("team1", "owns", "doc1") not in team_graph
        assert "team1" not in team_graph

    def test_iteration_follows_insertion_order(self, team_graph: RelationGraph) -> None:
        assert [str(edge) for edge in team_graph] == [
            "alice -[memberOf]-> team1",
            "alice -[viewer]-> doc1",
            "bob -[memberOf]-> team1",
            "team1 -[editor]-> doc1",
        ]

    def test_forward_and_reverse_agree(self, team_graph: RelationGraph) -> None:
        forward = set(team_graph)
        reverse = {
            edge
            for entity in team_graph.entities()
            for edge in team_graph.get_reverse_relations(entity)
        }
        assert forward == reverse


# ---------------------------------------------------------------------------
# clear / copy
# ---------------------------------------------------------------------------


class TestClearAndCopy:
    def test_clear_removes_everything(self, team_graph: RelationGraph) -> None:
        team_graph.clear()
        assert len(team_graph) == 0
        assert team_graph.has_direct_relation("team1", "editor", "doc1") is False
        assert team_graph.get_relations("alice") == []
        assert team_graph.get_reverse_relations("doc1") == []

    def test_clear_empty_graph_is_noop(self, graph: RelationGraph) -> None:
        graph.clear()
        assert len(graph) == 0

    def test_copy_is_independent(self, team_graph: RelationGraph) -> None:
        snapshot = team_graph.copy()
        snapshot.add_relation(RelationTuple("carol", "owns", "doc1"))
        team_graph.remove_relation(RelationTuple("alice", "viewer", "doc1"))
        assert RelationTuple("carol", "owns", "doc1") not in team_graph
        assert RelationTuple("alice", "viewer", "doc1") in snapshot
        assert len(snapshot) == 5
        assert len(team_graph) == 3

    def test_copy_preserves_order(self, team_graph: RelationGraph) -> None:
        assert list(team_graph.copy()) == list(team_graph)

    def test_repr(self, team_graph: RelationGraph) -> None:
        assert repr(team_graph) == "RelationGraph(relations=4, entities=4)"


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestConcurrentWriters:
    def test_parallel_writers_keep_indices_consistent(self, graph: RelationGraph) -> None:
        def writer(prefix: str) -> None:
            for i in range(200):
                graph.add_relation(RelationTuple(f"{prefix}-{i}", "memberOf", "team"))

        threads = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(graph) == 800
        assert len(graph.get_reverse_relations("team")) == 800
