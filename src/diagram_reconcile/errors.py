"""Exceptions raised by diagram-reconcile.

The reconciliation core itself never raises for missing fields; the only
failures surfaced to callers come from parsing markup text.
"""

from __future__ import annotations

__all__ = ["DocumentParseError", "ReconcileError"]


class ReconcileError(Exception):
    """Base class for all diagram-reconcile errors."""


class DocumentParseError(ReconcileError, ValueError):
    """Markup text could not be parsed into a document tree.

    Attributes:
        role: Which input failed, e.g. "reference" or "target".
        detail: Parser message, including the line/column mark when known.
    """

    def __init__(self, role: str, detail: str) -> None:
        self.role = role
        self.detail = detail
        super().__init__(f"could not parse {role} document: {detail}")
