"""EmptyValuePruner: strips null and empty-string values from a document tree.

Editors that re-serialize a diagram tend to emit ``description: ''`` or
``tags: null`` for every unset property.  The pruner removes exactly those two
values; ``0``, ``False``, empty sequences and empty mappings are data and
survive.

The tree is rebuilt bottom-up: children are pruned before their parent is
assembled, and the input is never mutated.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

__all__ = ["EmptyValuePruner", "is_empty_value"]


def is_empty_value(value: Any) -> bool:
    """Return True for the two values the pruner removes: None and ""."""
    return value is None or (isinstance(value, str) and value == "")


@dataclass(frozen=True, slots=True)
class EmptyValuePruner:
    """Rebuilds a tree without null or empty-string values.

    Attributes:
        drop_emptied_containers: When True, a mapping or sequence whose
            children were all pruned away is removed from its parent as
            well.  Containers that were already empty are left alone.

    Example::
        pruner = EmptyValuePruner()
        pruner.prune({"a": None, "b": "", "c": "x", "d": 0, "e": False})
        # {"c": "x", "d": 0, "e": False}
    """

    drop_emptied_containers: bool = False

    def prune(self, tree: Any) -> Any:
        """Return a pruned copy of ``tree``.

        Scalars are returned as-is.  The root itself is never removed, even
        when it is an empty value or ends up empty.
        """
        pruned, _ = self._rebuild(tree)
        return pruned

    def _rebuild(self, node: Any) -> tuple[Any, bool]:
        """Return ``(pruned_node, emptied)``.

        ``emptied`` is True when ``node`` was a non-empty container that lost
        every child during pruning.
        """
        if isinstance(node, Mapping):
            out: dict[Any, Any] = {}
            for key, value in node.items():
                if self._keep(value):
                    child, emptied = self._rebuild(value)
                    if not (emptied and self.drop_emptied_containers):
                        out[key] = child
            return out, bool(node) and not out

        if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
            items: list[Any] = []
            for value in node:
                if self._keep(value):
                    child, emptied = self._rebuild(value)
                    if not (emptied and self.drop_emptied_containers):
                        items.append(child)
            return items, bool(node) and not items

        return node, False

    @staticmethod
    def _keep(value: Any) -> bool:
        return not is_empty_value(value)
