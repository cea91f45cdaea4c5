"""Path selection over parsed document trees.

A path expression is an explicit tuple of tagged segments evaluated left to
right against a list of "current" nodes, starting from ``[root]``:

- DESCEND(field):     every value stored under ``field`` at any depth,
                      current node included, in pre-order document order.
- CHILD(field):       the value stored under ``field`` on each mapping.
- WILDCARD:           every item of each sequence (values of a mapping).
- FILTER(conditions): items of each sequence satisfying every condition.

Only the shapes needed for reconciliation are offered as helpers:

    descendants("elements")                          # $..elements[*]
    descendants_where("elements", having="containers", name="A")
        .then("containers")                          # ...containers[*]

Selecting never raises: a path that matches nothing returns ``[]``.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

__all__ = [
    "Condition",
    "PathExpression",
    "Segment",
    "SegmentKind",
    "descendants",
    "descendants_where",
    "select",
]

# Marks a presence-only condition (no literal to compare against).
_PRESENT: Any = object()


class SegmentKind(StrEnum):
    """The four segment kinds understood by ``select``."""

    DESCEND = auto()
    CHILD = auto()
    WILDCARD = auto()
    FILTER = auto()


def _is_sequence(value: Any) -> bool:
    # str and bytes are sequences too, but never collections in a document
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _children(value: Any) -> Iterator[Any]:
    if isinstance(value, Mapping):
        yield from value.values()
    elif _is_sequence(value):
        yield from value


@dataclass(frozen=True, slots=True)
class Condition:
    """A single filter test applied to a candidate mapping.

    Attributes:
        field: Property name examined on the candidate.
        value: Literal the property must equal; ``_PRESENT`` when the test
            only requires the property to exist with a non-null value.
    """

    field: str
    value: Any = _PRESENT

    def matches(self, node: Any) -> bool:
        if not isinstance(node, Mapping):
            return False
        if self.value is _PRESENT:
            return node.get(self.field) is not None
        return self.field in node and node[self.field] == self.value

    def __str__(self) -> str:
        if self.value is _PRESENT:
            return f"@.{self.field}"
        return f"@.{self.field}=={json.dumps(self.value, default=str)}"


@dataclass(frozen=True, slots=True)
class Segment:
    """One tagged step of a path expression."""

    kind: SegmentKind
    field: str = ""
    conditions: tuple[Condition, ...] = ()

    def apply(self, nodes: list[Any]) -> list[Any]:
        """Map the current node list to the next one."""
        out: list[Any] = []
        for node in nodes:
            if self.kind == SegmentKind.DESCEND:
                out.extend(self._descend(node))
            elif self.kind == SegmentKind.CHILD:
                if isinstance(node, Mapping) and self.field in node:
                    out.append(node[self.field])
            elif self.kind == SegmentKind.WILDCARD:
                out.extend(_children(node))
            elif _is_sequence(node):
                out.extend(
                    item
                    for item in node
                    if all(cond.matches(item) for cond in self.conditions)
                )
        return out

    def _descend(self, node: Any) -> Iterator[Any]:
        if isinstance(node, Mapping) and self.field in node:
            yield node[self.field]
        for child in _children(node):
            yield from self._descend(child)

    def __str__(self) -> str:
        if self.kind == SegmentKind.DESCEND:
            return f"..{self.field}"
        if self.kind == SegmentKind.CHILD:
            return f".{self.field}"
        if self.kind == SegmentKind.WILDCARD:
            return "[*]"
        return "[?(" + " && ".join(str(c) for c in self.conditions) + ")]"


@dataclass(frozen=True, slots=True)
class PathExpression:
    """An ordered tuple of segments; renders as its JSONPath equivalent."""

    segments: tuple[Segment, ...] = ()

    def then(self, field: str) -> PathExpression:
        """Return a new expression continuing with ``.field[*]``."""
        return PathExpression(
            (
                *self.segments,
                Segment(SegmentKind.CHILD, field),
                Segment(SegmentKind.WILDCARD),
            )
        )

    def __str__(self) -> str:
        return "$" + "".join(str(s) for s in self.segments)


def descendants(field: str) -> PathExpression:
    """Every item of every ``field`` sequence at any depth (``$..field[*]``)."""
    return PathExpression(
        (Segment(SegmentKind.DESCEND, field), Segment(SegmentKind.WILDCARD))
    )


def descendants_where(
    field: str,
    having: str | None = None,
    **equals: Any,
) -> PathExpression:
    """Like ``descendants`` but keeps only items passing a filter.

    Args:
        field:   Field searched for at any depth.
        having:  Optional property that must be present (and non-null).
        equals:  Properties that must equal the given literals.

    Returns:
        ``$..field[?(@.having && @.k==v ...)]``
    """
    conditions: list[Condition] = []
    if having is not None:
        conditions.append(Condition(having))
    conditions.extend(Condition(k, v) for k, v in equals.items())
    return PathExpression(
        (
            Segment(SegmentKind.DESCEND, field),
            Segment(SegmentKind.FILTER, conditions=tuple(conditions)),
        )
    )


def select(root: Any, expression: PathExpression) -> list[Any]:
    """Evaluate ``expression`` against ``root``; ``[]`` when nothing matches."""
    nodes: list[Any] = [root]
    for segment in expression.segments:
        nodes = segment.apply(nodes)
        if not nodes:
            break
    return nodes
