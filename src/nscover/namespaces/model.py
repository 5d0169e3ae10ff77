"""Per-project namespace selection model.

``all_roots`` is authoritative. ``visible_roots`` is a pruned clone of it for
the current ``filter_text``. Every edit made through this model is applied to
both forests by node name, so selections survive filtering and rebuilds.
"""

from __future__ import annotations

from collections.abc import Iterable

from nscover.namespaces.filtering import TreeFilterEngine
from nscover.namespaces.node import (
    NamespaceNode,
    derive_checked,
    find_node,
    iter_nodes,
    selected_namespaces,
    unselected_namespaces,
)

_engine = TreeFilterEngine()


class ProjectNamespaceModel:
    """Namespace forest for one project, plus its filtered view."""

    def __init__(
        self,
        name: str = "",
        namespaces: Iterable[str] = (),
        *,
        filter_text: str = "",
    ) -> None:
        self.name = name
        self.namespaces: frozenset[str] = frozenset(namespaces)
        self.filter_text = filter_text
        self.all_roots: list[NamespaceNode] = []
        self.visible_roots: list[NamespaceNode] = []
        self._built_from: frozenset[str] | None = None
        self.rebuild()

    @property
    def needs_regeneration(self) -> bool:
        return self._built_from != self.namespaces

    def replace_forest(self, roots: list[NamespaceNode]) -> None:
        self.all_roots = roots
        self._built_from = self.namespaces

    def rebuild(self) -> None:
        _engine.rebuild(self)

    def set_namespaces(self, namespaces: Iterable[str]) -> None:
        """Replace the namespace set and regenerate both forests if it changed."""
        self.namespaces = frozenset(namespaces)
        self.rebuild()

    def set_filter(self, filter_text: str | None) -> None:
        self.filter_text = filter_text or ""
        self.rebuild()

    def find(self, name: str) -> NamespaceNode | None:
        """Authoritative node for ``name``."""
        return find_node(self.all_roots, name)

    def find_visible(self, name: str) -> NamespaceNode | None:
        return find_node(self.visible_roots, name)

    def set_checked(self, name: str, checked: bool) -> bool:
        """Toggle a namespace with cascade in both forests.

        The cascade runs on the authoritative forest, so it also reaches
        descendants hidden by the current filter and derives ancestors from
        all of their children. Returns False when the name is unknown.
        """
        node = self.find(name)
        if node is None:
            return False
        node.set_checked(checked)
        self._sync_visible()
        return True

    def set_expanded(self, name: str, expanded: bool) -> bool:
        found = False
        for node in (self.find(name), self.find_visible(name)):
            if node is not None:
                node.expanded = expanded
                found = True
        return found

    def _sync_visible(self) -> None:
        for clone in iter_nodes(self.visible_roots):
            if clone.source is not None:
                clone.restore(checked=clone.source.checked, expanded=clone.expanded)

    def apply_deselected(self, deselected: Iterable[str]) -> int:
        """Uncheck persisted names without cascading. Returns how many matched.

        Parents are re-derived afterwards: a namespace added since the names
        were saved stays checked and keeps its parent checked.
        """
        names = set(deselected)
        matched = [node for node in iter_nodes(self.all_roots) if node.name in names]
        for node in matched:
            node.restore(checked=False, expanded=node.expanded)
        derive_checked(self.all_roots)
        self._sync_visible()
        return len(matched)

    def deselected_namespaces(self) -> list[str]:
        """Every unchecked node name; this is what gets persisted."""
        return [node.name for node in iter_nodes(self.all_roots) if not node.checked]

    def selected_namespaces(self) -> list[str]:
        return selected_namespaces(self.all_roots)

    def unselected_namespaces(self) -> list[str]:
        return unselected_namespaces(self.all_roots)
