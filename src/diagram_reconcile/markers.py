"""Text-level transforms applied around parsing and serialization.

- normalize_marker: guarantees the document-start marker leads the text.
  The rendering surface refuses documents that do not begin with it.
- space_sequence_items: cosmetic blank line before each indented sequence
  item that follows a scalar line, so consecutive list entries read as blocks.

Neither function looks at the document structure.
"""

from __future__ import annotations

import re

__all__ = ["DEFAULT_MARKER", "normalize_marker", "space_sequence_items"]

DEFAULT_MARKER = "---"

# A line not ending in ":" followed by an indented "- " item.
# "\s" also matches newlines, so a run of blank lines is absorbed into group 2.
_ITEM_AFTER_SCALAR = re.compile(r"([^:])\n(\s+)-")


def normalize_marker(text: str, marker: str = DEFAULT_MARKER) -> str:
    """Return ``text`` starting exactly at its first ``marker``.

    Any preamble before the marker is discarded.  When the marker does not
    occur at all, it is prepended on its own line and ``text`` follows
    unchanged.
    """
    index = text.find(marker)
    if index >= 0:
        return text[index:]
    return f"{marker}\n{text}"


def space_sequence_items(text: str) -> str:
    """Insert a blank line before sequence items that close a mapping."""
    return _ITEM_AFTER_SCALAR.sub(r"\1\n\n\2-", text)
