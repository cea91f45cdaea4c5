"""KeyBuilder: composite identity keys for correlating nodes across documents.

Two independently parsed documents share no object identity, so "the same"
element is recognised by the values of a fixed list of properties:

- elements and containers:  ("name",)            -> "Web App"      -> "Web_App"
- relationships:            ("source", "destination")
                                                  -> "User.Web_App"

Missing or null properties contribute an empty segment, so a key is always
produced and never raises.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from diagram_reconcile.algorithm.config import KeyWhitespace

__all__ = ["KeyBuilder"]

# Any single whitespace character (spaces, tabs, newlines)
_WHITESPACE = re.compile(r"\s")


def _segment(value: Any) -> str:
    # bool before the generic str() so YAML booleans read as they do on disk
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True, slots=True)
class KeyBuilder:
    """Builds composite identity strings from node properties.

    Attributes:
        separator:  Joins the per-property segments.  Defaults to ".".
        whitespace: LEGACY rewrites only the first space to "_"; ALL rewrites
                    every whitespace character to "_".

    Example::
        builder = KeyBuilder()
        builder.key({"source": "User", "destination": "Web App"},
                    ("source", "destination"))
        # "User.Web_App"
    """

    separator: str = "."
    whitespace: KeyWhitespace = KeyWhitespace.ALL

    def key(self, node: Any, properties: Sequence[str]) -> str:
        """Return the composite key of ``node`` for ``properties``.

        Args:
            node:       Any tree node.  Non-mappings yield only empty segments.
            properties: Ordered property names forming the identity.

        Returns:
            The joined, whitespace-rewritten key.  Nodes with equal values for
            ``properties`` always produce equal keys, whatever other fields
            they carry.
        """
        fields = node if isinstance(node, Mapping) else {}
        joined = self.separator.join(_segment(fields.get(p)) for p in properties)
        if self.whitespace == KeyWhitespace.LEGACY:
            return joined.replace(" ", "_", 1)
        return _WHITESPACE.sub("_", joined)
