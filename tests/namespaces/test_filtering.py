"""Tests for filtered clones and state snapshots."""

from nscover.namespaces.builder import build_forest
from nscover.namespaces.filtering import (
    TreeState,
    clone_filtered,
    matches,
    normalize_term,
    restore_state,
    snapshot_state,
)
from nscover.namespaces.node import NamespaceNode, find_node, iter_nodes


def _names(roots: list[NamespaceNode]) -> list[str]:
    return [node.name for node in iter_nodes(roots)]


class TestMatching:
    def test_normalize_strips_and_casefolds(self) -> None:
        assert normalize_term("  Api.EXT ") == "api.ext"
        assert normalize_term(None) == ""

    def test_whitespace_only_term_matches_everything(self) -> None:
        node = NamespaceNode("Api")
        assert matches(node, normalize_term("   "))

    def test_substring_match_on_full_name(self) -> None:
        node = NamespaceNode("Company.Api.External")
        assert matches(node, "api.ext")
        assert not matches(node, "internal")


class TestCloneFiltered:
    """Pruning and state transfer."""

    def test_given_empty_term_when_cloned_then_full_structure(self) -> None:
        roots = build_forest(["A.B", "A.C", "D"])

        clones = clone_filtered(roots, "")

        assert _names(clones) == _names(roots)
        assert all(c is not s for c, s in zip(iter_nodes(clones), iter_nodes(roots), strict=True))

    def test_given_term_when_cloned_then_keeps_matches_and_ancestors(self) -> None:
        """Non-matching branches without matching descendants are pruned."""
        # Given
        roots = build_forest(["Api.External.Fake", "Api.Internal", "Core"])

        # When
        clones = clone_filtered(roots, "fake")

        # Then
        assert _names(clones) == ["Api", "Api.External", "Api.External.Fake"]

    def test_given_matching_parent_then_children_kept_only_if_matching(self) -> None:
        roots = build_forest(["Api.External", "Api.Internal"])

        clones = clone_filtered(roots, "api")

        # Every node contains "api" in its full name
        assert _names(clones) == ["Api", "Api.External", "Api.Internal"]

    def test_given_no_match_then_empty(self) -> None:
        roots = build_forest(["Api.External"])

        assert clone_filtered(roots, "zzz") == []

    def test_given_term_then_survivors_expanded(self) -> None:
        roots = build_forest(["Api.External"])
        for node in iter_nodes(roots):
            node.expanded = False

        clones = clone_filtered(roots, "external")

        assert all(node.expanded for node in iter_nodes(clones))

    def test_given_state_then_state_wins_over_source(self) -> None:
        """Recorded checked/expanded values override the source nodes."""
        # Given
        roots = build_forest(["A.B"])
        state = TreeState(checked={"A.B": False}, expanded={"A": False})

        # When
        clones = clone_filtered(roots, "", state)

        # Then
        assert not find_node(clones, "A.B").checked  # type: ignore[union-attr]
        assert not find_node(clones, "A").expanded  # type: ignore[union-attr]
        assert find_node(clones, "A").checked  # type: ignore[union-attr]

    def test_given_unrecorded_node_then_source_state_used(self) -> None:
        roots = build_forest(["A.B"])
        find_node(roots, "A.B").restore(checked=False, expanded=False)  # type: ignore[union-attr]

        clones = clone_filtered(roots, "", TreeState())

        assert not find_node(clones, "A.B").checked  # type: ignore[union-attr]

    def test_clone_parent_links_are_rebuilt(self) -> None:
        roots = build_forest(["A.B"])

        clones = clone_filtered(roots, "b")

        child = find_node(clones, "A.B")
        assert child is not None
        assert child.parent is clones[0]

    def test_filtering_is_idempotent(self) -> None:
        roots = build_forest(["Api.External.Fake", "Api.Internal", "Core.Util"])

        once = clone_filtered(roots, "ex")
        twice = clone_filtered(once, "ex", snapshot_state(once))

        assert _names(once) == _names(twice)


class TestSnapshots:
    def test_snapshot_then_restore_round_trips(self) -> None:
        roots = build_forest(["A.B", "A.C"])
        find_node(roots, "A.B").set_checked(False)  # type: ignore[union-attr]
        state = snapshot_state(roots)

        fresh = build_forest(["A.B", "A.C", "A.D"])
        restore_state(fresh, state)

        assert not find_node(fresh, "A.B").checked  # type: ignore[union-attr]
        assert find_node(fresh, "A.C").checked  # type: ignore[union-attr]
        # Unknown names keep their defaults
        assert find_node(fresh, "A.D").checked  # type: ignore[union-attr]
        assert len(state) == 3


class TestPruningExample:
    def test_parent_retained_for_matching_child(self) -> None:
        """{A -> {A.B, A.C}} filtered by "B" leaves A -> {A.B}, expanded."""
        roots = build_forest(["A.B", "A.C"])
        roots[0].expanded = False

        clones = clone_filtered(roots, "B")

        assert _names(clones) == ["A", "A.B"]
        assert clones[0].expanded


class TestSnapshotParents:
    def test_restore_rederives_parent_of_unrecorded_child(self) -> None:
        """A checked child missing from the snapshot re-checks its parent."""
        roots = build_forest(["A.B"])
        find_node(roots, "A").set_checked(False)  # type: ignore[union-attr]
        state = snapshot_state(roots)

        fresh = build_forest(["A.B", "A.C"])
        restore_state(fresh, state)

        assert not find_node(fresh, "A.B").checked  # type: ignore[union-attr]
        assert find_node(fresh, "A").checked  # type: ignore[union-attr]


class TestCloneSource:
    def test_clones_link_to_their_source(self) -> None:
        roots = build_forest(["A.B"])

        clones = clone_filtered(roots, "")

        assert clones[0].source is roots[0]
        assert find_node(clones, "A.B").source is find_node(roots, "A.B")  # type: ignore[union-attr]
