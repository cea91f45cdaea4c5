"""MarkupFormat Protocol for the diagram-reconcile parser/serializer extension point.

Defines the structural interface every markup format must satisfy.  Users can
plug in their own format (JSON, a round-trip YAML library, ...) without
inheriting from any base class: any class with conformant ``load`` and
``dump`` methods passes ``isinstance`` checks.

Example::

    import json
    from diagram_reconcile.protocols import MarkupFormat

    class JsonFormat:
        def load(self, text: str):
            return json.loads(text)

        def dump(self, tree) -> str:
            return json.dumps(tree, indent=2)

    assert isinstance(JsonFormat(), MarkupFormat)  # True
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MarkupFormat(Protocol):
    """Structural protocol for markup formats.

    ``load`` must turn text into a tree of mappings, sequences and scalars,
    raising ``DocumentParseError`` (or any ``ValueError``) on malformed input.
    ``dump`` must serialize such a tree back to text, preserving mapping key
    order.
    """

    def load(self, text: str) -> Any: ...

    def dump(self, tree: Any) -> str: ...
