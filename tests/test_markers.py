"""Tests for the text-level marker normalizer and sequence-item spacing."""

from __future__ import annotations

import pytest

from diagram_reconcile.markers import (
    DEFAULT_MARKER,
    normalize_marker,
    space_sequence_items,
)


class TestNormalizeMarker:
    def test_missing_marker_is_prepended(self) -> None:
        text = "type: Container\nelements: []\n"
        assert normalize_marker(text) == "---\n" + text

    def test_preamble_is_discarded(self) -> None:
        text = "# exported by the editor\n\n---\ntype: Container\n"
        assert normalize_marker(text) == "---\ntype: Container\n"

    def test_text_already_starting_with_marker_unchanged(self) -> None:
        text = "---\ntype: Container\n"
        assert normalize_marker(text) == text

    def test_first_occurrence_wins(self) -> None:
        text = "junk---\na: 1\n---\nb: 2\n"
        assert normalize_marker(text) == "---\na: 1\n---\nb: 2\n"

    def test_empty_text(self) -> None:
        assert normalize_marker("") == "---\n"

    def test_custom_marker(self) -> None:
        assert normalize_marker("a: 1\n", marker="%YAML") == "%YAML\na: 1\n"

    def test_default_marker(self) -> None:
        assert DEFAULT_MARKER == "---"


class TestSpaceSequenceItems:
    def test_blank_line_between_mapping_items(self) -> None:
        text = (
            "elements:\n"
            "  - name: A\n"
            "    type: Person\n"
            "  - name: B\n"
            "    type: Software System\n"
        )
        assert space_sequence_items(text) == (
            "elements:\n"
            "  - name: A\n"
            "    type: Person\n"
            "\n"
            "  - name: B\n"
            "    type: Software System\n"
        )

    def test_first_item_after_key_untouched(self) -> None:
        text = "elements:\n  - name: A\n"
        assert space_sequence_items(text) == text

    def test_unindented_items_untouched(self) -> None:
        text = "- a\n- b\n"
        assert space_sequence_items(text) == text

    @pytest.mark.parametrize("text", ["", "type: Container\n", "a: 1\nb: 2\n"])
    def test_text_without_sequences_untouched(self, text: str) -> None:
        assert space_sequence_items(text) == text
