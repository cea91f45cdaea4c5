"""Order tables and the stable reorderer.

An ``OrderTable`` maps composite identity keys to the position each node held
in the reference document.  ``Reorderer.reorder`` then permutes a target
collection so that matched nodes follow the reference order.  Nodes absent
from the table share a single rank placed after every matched rank; because
the sort is stable (``numpy.argsort(kind="stable")``) they keep their input
order, which is what puts newly-added nodes at the end, in the order they were
added.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from diagram_reconcile.algorithm.config import DuplicateKeyPolicy, ReconcileConfig
from diagram_reconcile.algorithm.keys import KeyBuilder
from diagram_reconcile.tree.selector import PathExpression, select

__all__ = ["OrderTable", "Reorderer"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OrderTable:
    """Key -> reference position, built once per reordering pass.

    Attributes:
        positions:  Composite key to zero-based index within the selected
                    reference nodes.
        duplicates: Keys seen more than once in the reference, in order of
                    first collision.  Their relative order cannot be
                    recovered.
    """

    positions: dict[str, int] = field(default_factory=dict)
    duplicates: tuple[str, ...] = ()
    unmatched_position: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Rank given to keys missing from the table: len(self) when the
        # reference had no duplicate keys, never below a stored position.
        highest = max(self.positions.values(), default=-1)
        object.__setattr__(
            self, "unmatched_position", max(len(self.positions), highest + 1)
        )

    def __len__(self) -> int:
        return len(self.positions)

    def __contains__(self, key: object) -> bool:
        return key in self.positions

    def position(self, key: str) -> int:
        return self.positions.get(key, self.unmatched_position)


@dataclass(frozen=True, slots=True)
class Reorderer:
    """Builds order tables from a reference tree and applies them to targets.

    Attributes:
        keys:             Builds the composite identity keys.
        duplicate_policy: Which position a repeated reference key keeps.
    """

    keys: KeyBuilder = field(default_factory=KeyBuilder)
    duplicate_policy: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS

    @classmethod
    def from_config(cls, config: ReconcileConfig) -> Reorderer:
        """Build a reorderer from the key and duplicate settings of ``config``."""
        return cls(
            keys=KeyBuilder(
                separator=config.key_separator, whitespace=config.whitespace
            ),
            duplicate_policy=config.duplicate_policy,
        )

    def build_order(
        self,
        reference_root: Any,
        selector: PathExpression,
        properties: Sequence[str],
    ) -> OrderTable:
        """Select reference nodes and record ``key -> index`` for each.

        Args:
            reference_root: Reference document; read, never modified.
            selector:       Path expression selecting the ordered nodes.
            properties:     Property names forming the composite key.

        Returns:
            An ``OrderTable``.  Empty when the selector matches nothing.
        """
        positions: dict[str, int] = {}
        duplicates: list[str] = []
        seen_twice: set[str] = set()
        for index, node in enumerate(select(reference_root, selector)):
            key = self.keys.key(node, properties)
            if key in positions:
                if key not in seen_twice:
                    seen_twice.add(key)
                    duplicates.append(key)
                if self.duplicate_policy == DuplicateKeyPolicy.FIRST_WINS:
                    continue
            positions[key] = index

        if duplicates:
            logger.warning(
                "duplicate identity keys under %s (%s kept): %s",
                selector,
                self.duplicate_policy,
                ", ".join(duplicates),
            )
        return OrderTable(positions=positions, duplicates=tuple(duplicates))

    def ranks(
        self,
        collection: Sequence[Any],
        table: OrderTable,
        properties: Sequence[str],
    ) -> np.ndarray:
        """Return the reference rank of every node in ``collection``."""
        positions = table.positions
        fallback = table.unmatched_position
        key = self.keys.key
        return np.fromiter(
            (positions.get(key(node, properties), fallback) for node in collection),
            dtype=np.int64,
            count=len(collection),
        )

    def reorder(
        self,
        collection: list[Any],
        table: OrderTable,
        properties: Sequence[str],
    ) -> list[Any]:
        """Stably permute ``collection`` in place to follow ``table``.

        Args:
            collection: Target sequence; permuted in place.
            table:      Order table built from the reference.
            properties: Property names forming the composite key (must match
                        the ones used to build ``table``).

        Returns:
            ``collection`` itself, now a permutation of its former contents.
        """
        if not collection:
            return collection
        return self.apply_ranks(collection, self.ranks(collection, table, properties))

    @staticmethod
    def apply_ranks(collection: list[Any], ranks: np.ndarray) -> list[Any]:
        """Stably sort ``collection`` in place by precomputed ``ranks``."""
        if not collection:
            return collection
        order = np.argsort(ranks, kind="stable")
        collection[:] = [collection[i] for i in order.tolist()]
        return collection
