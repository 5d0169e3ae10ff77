"""Filtered, state-preserving views over a namespace forest.

The visible tree is regenerated on every change instead of being patched:
the previous visible expansion state is captured into a name-keyed map and
the authoritative forest is cloned with pruning. Clones take their checked
values from the authoritative nodes and their expansion from the capture.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nscover.core.logging import get_logger
from nscover.namespaces.builder import build_forest
from nscover.namespaces.node import NamespaceNode, derive_checked, iter_nodes

if TYPE_CHECKING:
    from nscover.namespaces.model import ProjectNamespaceModel

log = get_logger("namespaces.filtering")


@dataclass
class TreeState:
    """Checked/expanded values keyed by node name."""

    checked: dict[str, bool] = field(default_factory=dict)
    expanded: dict[str, bool] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.checked)


def snapshot_state(roots: Iterable[NamespaceNode]) -> TreeState:
    state = TreeState()
    for node in iter_nodes(roots):
        state.checked[node.name] = node.checked
        state.expanded[node.name] = node.expanded
    return state


def restore_state(roots: Iterable[NamespaceNode], state: TreeState) -> None:
    """Apply a snapshot in place. Names absent from the snapshot keep their values.

    Parents are re-derived afterwards, since a child absent from the snapshot
    may be checked under a parent recorded as unchecked.
    """
    roots = list(roots)
    for node in iter_nodes(roots):
        node.restore(
            checked=state.checked.get(node.name, node.checked),
            expanded=state.expanded.get(node.name, node.expanded),
        )
    derive_checked(roots)


def normalize_term(term: str | None) -> str:
    return (term or "").strip().casefold()


def matches(node: NamespaceNode, term: str) -> bool:
    """Case-insensitive substring match on the full name. Empty term matches all."""
    return not term or term in node.name.casefold()


def clone_filtered(
    roots: Iterable[NamespaceNode],
    term: str | None,
    state: TreeState | None = None,
) -> list[NamespaceNode]:
    """Clone the forest keeping matches and the ancestors leading to them.

    Clones take checked/expanded from ``state`` when the name is recorded,
    otherwise the source node's values. With a non-empty term every surviving
    clone is expanded so matches are visible. Each clone links back to its
    source node, so toggling a clone updates the source forest.
    """
    needle = normalize_term(term)
    state = state or TreeState()

    def clone(node: NamespaceNode) -> NamespaceNode | None:
        kept_children = [c for c in (clone(child) for child in node.children) if c is not None]
        if not kept_children and not matches(node, needle):
            return None

        copy = NamespaceNode(
            node.name,
            checked=state.checked.get(node.name, node.checked),
            expanded=True if needle else state.expanded.get(node.name, node.expanded),
            source=node,
        )
        for child in kept_children:
            copy.add_child(child)
        return copy

    return [c for c in (clone(root) for root in roots) if c is not None]


class TreeFilterEngine:
    """Recomputes a project's visible forest from its authoritative one."""

    def rebuild(self, model: ProjectNamespaceModel) -> None:
        visible_state = snapshot_state(model.visible_roots)

        if model.needs_regeneration:
            previous = snapshot_state(model.all_roots)
            roots = build_forest(model.namespaces)
            restore_state(roots, previous)
            model.replace_forest(roots)
            log.debug(
                "namespace_forest_regenerated",
                project=model.name,
                namespaces=len(model.namespaces),
                restored=len(previous),
            )

        # Checked values come from the authoritative forest, which every
        # visible edit reaches through the clone's source link.
        expansion = TreeState(expanded=visible_state.expanded)
        model.visible_roots = clone_filtered(model.all_roots, model.filter_text, expansion)
