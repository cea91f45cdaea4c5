"""PassReport and ReconcileResult dataclasses for reconciliation output.

This module provides the result types returned by DocumentNormalizer.normalize()
and the tree-level reconcile() call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["PassReport", "ReconcileResult"]


@dataclass(frozen=True, slots=True)
class PassReport:
    """Outcome of reordering one target collection.

    Attributes:
        collection: Label of the reordered collection, e.g. "elements",
            "relationships" or "containers[Web App]".
        size: Number of nodes in the target collection.
        matched: Nodes whose key was found in the order table.
        unmatched: Nodes placed after the matched ones, in input order.
        duplicate_keys: Keys that occurred more than once in the reference
            selection for this pass.
    """

    collection: str
    size: int
    matched: int
    unmatched: int
    duplicate_keys: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Result of reconciling a target document against a reference.

    Attributes:
        document: The target document, with its collections reordered in
            place.
        passes: One report per reordered collection, in execution order.
        computation_time_ms: Wall-clock duration in milliseconds.
    """

    document: Any
    passes: tuple[PassReport, ...]
    computation_time_ms: float

    @property
    def unmatched(self) -> int:
        """Total number of nodes that had no counterpart in the reference."""
        return sum(p.unmatched for p in self.passes)
