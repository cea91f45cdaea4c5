"""DocumentNormalizer: orchestrator that restores reference ordering in a target.

This is the wiring layer between the path selector, the key builder and the
reorderer.  It runs three independent passes over the target document, each
using the reference document as the ordering oracle:

1. root ``elements``, keyed by ``name``;
2. root ``relationships``, keyed by ``source`` + ``destination``;
3. ``containers`` of every target element (at any depth) that owns some,
   ordered like the containers of the reference element with the same
   ``name``.  When no such reference element exists the table is empty and
   the containers keep their order.

Pass 3 correlates elements by name, so it does not depend on the outcome of
pass 1.  The reference is only read; the target's sequences are permuted in
place.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any

from diagram_reconcile.algorithm.config import ReconcileConfig
from diagram_reconcile.algorithm.ordering import OrderTable, Reorderer
from diagram_reconcile.result import PassReport, ReconcileResult
from diagram_reconcile.tree.selector import (
    PathExpression,
    descendants,
    descendants_where,
    select,
)

__all__ = [
    "CONTAINER_KEY",
    "ELEMENT_KEY",
    "RELATIONSHIP_KEY",
    "DocumentNormalizer",
]

logger = logging.getLogger(__name__)

ELEMENT_KEY: tuple[str, ...] = ("name",)
RELATIONSHIP_KEY: tuple[str, ...] = ("source", "destination")
CONTAINER_KEY: tuple[str, ...] = ("name",)


class DocumentNormalizer:
    """Reorders a target diagram's collections to follow a reference diagram.

    Example::

        from diagram_reconcile.normalizer import DocumentNormalizer

        reference = {"elements": [{"name": "Y"}, {"name": "X"}]}
        target = {"elements": [{"name": "X"}, {"name": "Y"}, {"name": "Z"}]}
        result = DocumentNormalizer().normalize(reference, target)
        [e["name"] for e in result.document["elements"]]   # ["Y", "X", "Z"]
    """

    def __init__(self, config: ReconcileConfig | None = None) -> None:
        """Initialise the normalizer.

        Args:
            config: Reconciliation settings.  Defaults to ``ReconcileConfig()``.
        """
        self._config: ReconcileConfig = (
            config if config is not None else ReconcileConfig()
        )
        self._reorderer = Reorderer.from_config(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, reference: Any, target: Any) -> ReconcileResult:
        """Reorder ``target``'s collections in place following ``reference``.

        Args:
            reference: Document before the edit session (read only).
            target:    Document after the edit session (mutated in place).

        Returns:
            A ``ReconcileResult`` carrying ``target`` and one ``PassReport``
            per reordered collection.
        """
        t0 = time.perf_counter()
        reports: list[PassReport] = []

        for field, properties in (
            ("elements", ELEMENT_KEY),
            ("relationships", RELATIONSHIP_KEY),
        ):
            collection = self._root_collection(target, field)
            if collection is None:
                continue
            table = self._reorderer.build_order(
                reference, descendants(field), properties
            )
            reports.append(self._apply(field, collection, table, properties))

        reports.extend(self._normalize_containers(reference, target))

        elapsed_ms = (time.perf_counter() - t0) * 1000.0
        logger.debug(
            "reconciled %d collection(s) in %.2f ms", len(reports), elapsed_ms
        )
        return ReconcileResult(
            document=target,
            passes=tuple(reports),
            computation_time_ms=elapsed_ms,
        )

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _normalize_containers(
        self, reference: Any, target: Any
    ) -> list[PassReport]:
        reports: list[PassReport] = []
        owners = select(target, descendants_where("elements", having="containers"))
        for element in owners:
            containers = element["containers"]
            if not isinstance(containers, list):
                continue
            name = element.get("name")
            table = self._reorderer.build_order(
                reference, self.container_selector(name), CONTAINER_KEY
            )
            reports.append(
                self._apply(f"containers[{name}]", containers, table, CONTAINER_KEY)
            )
        return reports

    @staticmethod
    def container_selector(name: Any) -> PathExpression:
        """``$..elements[?(@.containers && @.name==name)].containers[*]``"""
        return descendants_where("elements", having="containers", name=name).then(
            "containers"
        )

    def _apply(
        self,
        label: str,
        collection: list[Any],
        table: OrderTable,
        properties: Sequence[str],
    ) -> PassReport:
        ranks = self._reorderer.ranks(collection, table, properties)
        unmatched = int((ranks == table.unmatched_position).sum())
        self._reorderer.apply_ranks(collection, ranks)
        logger.debug(
            "%s: %d node(s), %d unmatched", label, len(collection), unmatched
        )
        return PassReport(
            collection=label,
            size=len(collection),
            matched=len(collection) - unmatched,
            unmatched=unmatched,
            duplicate_keys=table.duplicates,
        )

    @staticmethod
    def _root_collection(document: Any, field: str) -> list[Any] | None:
        if not isinstance(document, Mapping):
            return None
        value = document.get(field)
        return value if isinstance(value, list) else None
