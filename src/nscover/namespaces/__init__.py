"""Namespace hierarchy: tree building, filtering and selection."""

from nscover.namespaces.builder import build_forest
from nscover.namespaces.filtering import (
    TreeFilterEngine,
    TreeState,
    clone_filtered,
    snapshot_state,
)
from nscover.namespaces.model import ProjectNamespaceModel
from nscover.namespaces.node import (
    NamespaceNode,
    derive_checked,
    find_node,
    iter_nodes,
    selected_namespaces,
    set_expanded,
    unselected_namespaces,
)

__all__ = [
    "NamespaceNode",
    "ProjectNamespaceModel",
    "TreeFilterEngine",
    "TreeState",
    "build_forest",
    "clone_filtered",
    "derive_checked",
    "find_node",
    "iter_nodes",
    "selected_namespaces",
    "set_expanded",
    "snapshot_state",
    "unselected_namespaces",
]
