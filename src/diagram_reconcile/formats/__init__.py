"""Markup formats for diagram-reconcile.

Provides ``YamlFormat`` (PyYAML) as the default implementation of the
``MarkupFormat`` protocol used by the text-level API.
"""

from __future__ import annotations

from diagram_reconcile.formats.yaml_format import IndentedDumper, YamlFormat

__all__ = ["IndentedDumper", "YamlFormat"]
