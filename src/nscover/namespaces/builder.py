"""Build a namespace forest from fully-qualified namespace strings."""

from __future__ import annotations

from collections.abc import Iterable

from nscover.namespaces.node import NamespaceNode


def build_forest(namespaces: Iterable[str]) -> list[NamespaceNode]:
    """Group dotted namespaces into a forest of NamespaceNode roots.

    ``{"Api", "Api.External", "Api.External.Fake"}`` becomes a single ``Api``
    root with ``Api.External`` under it and ``Api.External.Fake`` below that.

    Nodes are keyed by their dot-joined prefix rather than by segment, so two
    subtrees sharing a leaf segment (``A.Models`` / ``B.Models``) never
    collide. Input is sorted first so output order is deterministic. Malformed
    strings are not rejected; they simply yield degenerate nodes.
    """
    by_path: dict[str, NamespaceNode] = {}
    roots: list[NamespaceNode] = []

    for namespace in sorted(set(namespaces)):
        parent: NamespaceNode | None = None
        path = ""
        for depth, part in enumerate(namespace.split(".")):
            path = part if depth == 0 else f"{path}.{part}"
            node = by_path.get(path)
            if node is None:
                node = NamespaceNode(path, parent=parent)
                by_path[path] = node
                if parent is None:
                    roots.append(node)
            parent = node

    return roots
