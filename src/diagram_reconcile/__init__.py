"""Diagram reconcile - restore the original ordering of re-serialized diagrams."""

from __future__ import annotations

from diagram_reconcile.algorithm.config import (
    DuplicateKeyPolicy,
    KeyWhitespace,
    ReconcileConfig,
)
from diagram_reconcile.algorithm.keys import KeyBuilder
from diagram_reconcile.algorithm.ordering import OrderTable, Reorderer
from diagram_reconcile.api import (
    build_order,
    cleanup_document,
    prepare_document,
    prune,
    reconcile,
    reconcile_documents,
    reorder,
    sort_document,
)
from diagram_reconcile.errors import DocumentParseError, ReconcileError
from diagram_reconcile.markers import normalize_marker, space_sequence_items
from diagram_reconcile.normalizer import DocumentNormalizer
from diagram_reconcile.result import PassReport, ReconcileResult
from diagram_reconcile.tree.pruner import EmptyValuePruner
from diagram_reconcile.tree.selector import (
    PathExpression,
    descendants,
    descendants_where,
    select,
)

__version__: str = "0.1.0"
__all__: list[str] = [
    "DocumentNormalizer",
    "DocumentParseError",
    "DuplicateKeyPolicy",
    "EmptyValuePruner",
    "KeyBuilder",
    "KeyWhitespace",
    "OrderTable",
    "PassReport",
    "PathExpression",
    "ReconcileConfig",
    "ReconcileError",
    "ReconcileResult",
    "Reorderer",
    "build_order",
    "cleanup_document",
    "descendants",
    "descendants_where",
    "normalize_marker",
    "prepare_document",
    "prune",
    "reconcile",
    "reconcile_documents",
    "reorder",
    "select",
    "sort_document",
    "space_sequence_items",
]
