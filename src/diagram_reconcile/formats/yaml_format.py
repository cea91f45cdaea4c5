"""YamlFormat: PyYAML-backed MarkupFormat for diagram documents.

Serialization follows the layout of the editor that produced the diagrams:
mapping keys keep their insertion order, block sequences are indented under
their parent key, and long strings are never folded.  That layout is what
``space_sequence_items`` expects when it spaces out list entries.
"""

from __future__ import annotations

from typing import Any

import yaml

from diagram_reconcile.errors import DocumentParseError

__all__ = ["IndentedDumper", "YamlFormat"]


class IndentedDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences nested in mappings.

    PyYAML writes ``key:\\n- item`` by default; this dumper writes
    ``key:\\n  - item``.
    """

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)


class YamlFormat:
    """Parses and serializes YAML diagram documents.

    Satisfies the ``MarkupFormat`` Protocol structurally.

    Args:
        role: Default label used in ``DocumentParseError`` messages.
    """

    def __init__(self, role: str = "document") -> None:
        self._role = role

    def load(self, text: str, role: str | None = None) -> Any:
        """Parse ``text`` with ``yaml.safe_load``.

        Raises:
            DocumentParseError: The text is not valid YAML.  The original
                ``yaml.YAMLError`` is chained as ``__cause__``.
        """
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentParseError(role or self._role, str(exc)) from exc

    def dump(self, tree: Any) -> str:
        """Serialize ``tree`` in block style, keeping key order."""
        return yaml.dump(
            tree,
            Dumper=IndentedDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            width=float("inf"),
        )
