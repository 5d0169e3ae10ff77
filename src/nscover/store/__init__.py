"""Selection store: persisted deselections and report history."""

from nscover.store.db import Database
from nscover.store.models import NamespaceSelection, SolutionReport
from nscover.store.selection import SelectionStore

__all__ = [
    "Database",
    "NamespaceSelection",
    "SelectionStore",
    "SolutionReport",
]
