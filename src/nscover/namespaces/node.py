"""Namespace tree nodes with checkbox-style selection.

A forest is a plain ``list[NamespaceNode]`` of roots. Children lists are the
only owning edges; ``parent`` is a weak back-reference used for upward state
derivation only.

Checkbox semantics:
- Changing a node's ``checked`` value overwrites every descendant.
- An ancestor is shown checked iff at least one immediate child is checked.
  Ancestors are re-derived after the downward pass, bottom-up, by direct
  assignment so no update re-enters the cascade.

A clone made for a filtered view keeps a ``source`` link to the node it was
copied from. Toggling a clone toggles its source and copies the result back
into the clone's tree.
"""

from __future__ import annotations

import weakref
from collections.abc import Callable, Iterable, Iterator


class NamespaceNode:
    """One dotted-path segment of a namespace hierarchy.

    ``name`` is the full dotted path (``Api.External.Fake``), unique within a
    project's forest.
    """

    __slots__ = ("name", "children", "_checked", "expanded", "_parent", "_source", "__weakref__")

    def __init__(
        self,
        name: str,
        *,
        checked: bool = True,
        expanded: bool = True,
        parent: NamespaceNode | None = None,
        source: NamespaceNode | None = None,
    ) -> None:
        self.name = name
        self.children: list[NamespaceNode] = []
        self._checked = checked
        self.expanded = expanded
        self._parent: weakref.ReferenceType[NamespaceNode] | None = None
        self._source = source
        if parent is not None:
            parent.add_child(self)

    def __repr__(self) -> str:
        return (
            f"NamespaceNode({self.name!r}, checked={self._checked}, "
            f"expanded={self.expanded}, children={len(self.children)})"
        )

    @property
    def parent(self) -> NamespaceNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def source(self) -> NamespaceNode | None:
        """Node this one was cloned from, if any."""
        return self._source

    @property
    def segment(self) -> str:
        """Last dotted segment, used for display."""
        return self.name.rsplit(".", 1)[-1]

    @property
    def checked(self) -> bool:
        return self._checked

    @checked.setter
    def checked(self, value: bool) -> None:
        self.set_checked(value)

    def add_child(self, child: NamespaceNode) -> NamespaceNode:
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def ancestors(self) -> Iterator[NamespaceNode]:
        """Yield parent, grandparent, ... up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> NamespaceNode:
        node = self
        while (parent := node.parent) is not None:
            node = parent
        return node

    def set_checked(self, value: bool) -> list[NamespaceNode]:
        """Toggle this node and cascade.

        Returns every node whose checked value changed, in update order
        (this subtree first, then affected ancestors). On a clone the cascade
        runs on the source tree, so descendants missing from the clone are
        reached and ancestors are derived from all of their children.
        """
        if self._source is not None:
            return self._follow_source(self._source.set_checked(value))

        changed = [node for node in iter_nodes([self]) if node._checked != value]
        for node in changed:
            node._checked = value

        for ancestor in self.ancestors():
            derived = any(child._checked for child in ancestor.children)
            if derived == ancestor._checked:
                break
            ancestor._checked = derived
            changed.append(ancestor)
        return changed

    def _follow_source(self, changed_sources: Iterable[NamespaceNode]) -> list[NamespaceNode]:
        root = [self.root()]
        changed: list[NamespaceNode] = []
        for source in changed_sources:
            clone = find_node(root, source.name)
            if clone is not None and clone._checked != source._checked:
                clone._checked = source._checked
                changed.append(clone)
        return changed

    def restore(self, *, checked: bool, expanded: bool) -> None:
        """Assign state without cascading (snapshot restore)."""
        self._checked = checked
        self.expanded = expanded

    def is_fully_checked(self) -> bool:
        """True when this node and every descendant are checked."""
        return all(node._checked for node in iter_nodes([self]))

    def is_fully_unchecked(self) -> bool:
        return not any(node._checked for node in iter_nodes([self]))


def iter_nodes(roots: Iterable[NamespaceNode]) -> Iterator[NamespaceNode]:
    """Depth-first, pre-order walk over a forest."""
    stack = list(reversed(list(roots)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def find_node(roots: Iterable[NamespaceNode], name: str) -> NamespaceNode | None:
    """Find a node by full name, descending only into matching prefixes."""
    for root in roots:
        if root.name == name:
            return root
        if name.startswith(root.name + "."):
            return find_node(root.children, name)
    return None


def derive_checked(roots: Iterable[NamespaceNode]) -> None:
    """Recompute every parent's checked value from its immediate children.

    Leaves keep their values. Used after state is assigned without cascading.
    """
    for node in reversed(list(iter_nodes(roots))):
        if node.children:
            node._checked = any(child._checked for child in node.children)


def set_expanded(roots: Iterable[NamespaceNode], expanded: bool) -> None:
    """Expand or collapse every node of a forest."""
    for node in iter_nodes(roots):
        node.expanded = expanded


def _collect(
    node: NamespaceNode,
    predicate: Callable[[NamespaceNode], bool],
    result: list[str],
) -> None:
    if predicate(node):
        result.append(node.name)
        return
    for child in node.children:
        _collect(child, predicate, result)


def selected_namespaces(roots: Iterable[NamespaceNode]) -> list[str]:
    """Most general names whose whole subtree is checked.

    A fully checked root yields only the root name; otherwise each child is
    considered independently.
    """
    result: list[str] = []
    for root in roots:
        _collect(root, NamespaceNode.is_fully_checked, result)
    return result


def unselected_namespaces(roots: Iterable[NamespaceNode]) -> list[str]:
    """Most general names whose whole subtree is unchecked."""
    result: list[str] = []
    for root in roots:
        _collect(root, NamespaceNode.is_fully_unchecked, result)
    return result
