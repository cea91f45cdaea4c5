"""Public API functions for diagram-reconcile.

Tree-level functions work on already parsed documents:
``reconcile``, ``prune``, ``build_order`` and ``reorder``.

Text-level functions chain a markup format (YAML by default) around them and
mirror the steps an editor integration performs when saving a diagram:
``prepare_document``, ``cleanup_document``, ``sort_document`` and
``reconcile_documents``.

Each call creates fresh collaborators; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from diagram_reconcile.algorithm.config import ReconcileConfig
from diagram_reconcile.algorithm.ordering import OrderTable, Reorderer
from diagram_reconcile.errors import DocumentParseError
from diagram_reconcile.formats import YamlFormat
from diagram_reconcile.markers import normalize_marker, space_sequence_items
from diagram_reconcile.normalizer import DocumentNormalizer
from diagram_reconcile.result import ReconcileResult
from diagram_reconcile.tree.pruner import EmptyValuePruner
from diagram_reconcile.tree.selector import PathExpression

if TYPE_CHECKING:
    from diagram_reconcile.protocols import MarkupFormat

__all__ = [
    "build_order",
    "cleanup_document",
    "prepare_document",
    "prune",
    "reconcile",
    "reconcile_documents",
    "reorder",
    "sort_document",
]

logger = logging.getLogger(__name__)


def _config(config: ReconcileConfig | None) -> ReconcileConfig:
    return config if config is not None else ReconcileConfig()


def _load(markup: MarkupFormat, text: str, role: str) -> Any:
    try:
        if isinstance(markup, YamlFormat):
            return markup.load(text, role=role)
        return markup.load(text)
    except DocumentParseError:
        raise
    except ValueError as exc:
        raise DocumentParseError(role, str(exc)) from exc


# ----------------------------------------------------------------------
# Tree level
# ----------------------------------------------------------------------


def reconcile(
    reference: Any,
    target: Any,
    config: ReconcileConfig | None = None,
) -> ReconcileResult:
    """Reorder ``target``'s collections in place to follow ``reference``.

    Args:
        reference: Parsed document before the edit (read only).
        target:    Parsed document after the edit (mutated in place).
        config:    Reconciliation settings.  Defaults to ``ReconcileConfig()``.

    Returns:
        A ``ReconcileResult`` whose ``document`` is ``target``.
    """
    return DocumentNormalizer(config=config).normalize(reference, target)


def prune(tree: Any, config: ReconcileConfig | None = None) -> Any:
    """Return a copy of ``tree`` without null or empty-string values."""
    cfg = _config(config)
    return EmptyValuePruner(
        drop_emptied_containers=cfg.drop_emptied_containers
    ).prune(tree)


def build_order(
    reference: Any,
    selector: PathExpression,
    properties: Sequence[str],
    config: ReconcileConfig | None = None,
) -> OrderTable:
    """Build the ``key -> position`` table of the nodes ``selector`` matches."""
    reorderer = Reorderer.from_config(_config(config))
    return reorderer.build_order(reference, selector, properties)


def reorder(
    collection: list[Any],
    table: OrderTable,
    properties: Sequence[str],
    config: ReconcileConfig | None = None,
) -> list[Any]:
    """Stably permute ``collection`` in place following ``table``."""
    reorderer = Reorderer.from_config(_config(config))
    return reorderer.reorder(collection, table, properties)


# ----------------------------------------------------------------------
# Text level
# ----------------------------------------------------------------------


def prepare_document(text: str, config: ReconcileConfig | None = None) -> str:
    """Make ``text`` start with the document marker (see ``normalize_marker``)."""
    return normalize_marker(text, marker=_config(config).marker)


def cleanup_document(
    text: str,
    config: ReconcileConfig | None = None,
    markup: MarkupFormat | None = None,
) -> str:
    """Parse ``text``, prune empty values and serialize it again.

    Raises:
        DocumentParseError: ``text`` is not valid markup.
    """
    fmt: Any = markup if markup is not None else YamlFormat()
    return fmt.dump(prune(_load(fmt, text, "target"), config=config))


def sort_document(
    reference_text: str,
    target_text: str,
    config: ReconcileConfig | None = None,
    markup: MarkupFormat | None = None,
) -> str:
    """Parse both documents, reorder the target after the reference, serialize.

    Raises:
        DocumentParseError: Either text is not valid markup.
    """
    fmt: Any = markup if markup is not None else YamlFormat()
    reference = _load(fmt, reference_text, "reference")
    target = _load(fmt, target_text, "target")
    return fmt.dump(reconcile(reference, target, config=config).document)


def reconcile_documents(
    reference_text: str,
    edited_text: str,
    config: ReconcileConfig | None = None,
    markup: MarkupFormat | None = None,
) -> str:
    """Turn an edited diagram back into a file-ready text.

    Pipeline: marker-normalize the reference, parse both documents, prune the
    edited one, reorder it after the reference, serialize, then space out
    sequence items.

    Args:
        reference_text: Diagram text as it was before the edit session.
        edited_text:    Diagram text sent back by the editor.
        config:         Reconciliation settings.
        markup:         Markup format; ``YamlFormat()`` when None.

    Returns:
        The reconciled diagram text.

    Raises:
        DocumentParseError: Either text is not valid markup.
    """
    cfg = _config(config)
    fmt: Any = markup if markup is not None else YamlFormat()
    reference = _load(fmt, prepare_document(reference_text, config=cfg), "reference")
    edited = prune(_load(fmt, edited_text, "target"), config=cfg)
    result = reconcile(reference, edited, config=cfg)
    if result.unmatched:
        logger.info(
            "%d node(s) without counterpart in the reference were placed last",
            result.unmatched,
        )
    return space_sequence_items(fmt.dump(result.document))
