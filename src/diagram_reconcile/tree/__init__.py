"""Tree subpackage for document-tree primitives.

Re-exports the public API for the tree module:
- select / PathExpression: tagged-segment path selection
- descendants / descendants_where: builders for the supported path shapes
- EmptyValuePruner: bottom-up removal of null and empty-string values
"""

from diagram_reconcile.tree.pruner import EmptyValuePruner, is_empty_value
from diagram_reconcile.tree.selector import (
    Condition,
    PathExpression,
    Segment,
    SegmentKind,
    descendants,
    descendants_where,
    select,
)

__all__ = [
    "Condition",
    "EmptyValuePruner",
    "PathExpression",
    "Segment",
    "SegmentKind",
    "descendants",
    "descendants_where",
    "is_empty_value",
    "select",
]
