"""Algorithm subpackage: identity keys, order tables and configuration.

Public API:
- KeyBuilder:      composite identity key construction
- OrderTable:      key -> reference position mapping
- Reorderer:       builds order tables and applies the stable permutation
- ReconcileConfig: immutable run configuration
"""

from diagram_reconcile.algorithm.config import (
    DuplicateKeyPolicy,
    KeyWhitespace,
    ReconcileConfig,
)
from diagram_reconcile.algorithm.keys import KeyBuilder
from diagram_reconcile.algorithm.ordering import OrderTable, Reorderer

__all__ = [
    "DuplicateKeyPolicy",
    "KeyBuilder",
    "KeyWhitespace",
    "OrderTable",
    "ReconcileConfig",
    "Reorderer",
]
