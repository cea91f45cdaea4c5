"""Tests for OrderTable and Reorderer.

Covers:
- build_order(): positions, empty selections, duplicate policies
- OrderTable.unmatched_position never below a matched rank
- reorder(): reference order restored, unmatched nodes last and stable,
  permutation completeness, in-place mutation, empty collections
- apply_ranks(): stable sort by precomputed ranks
"""

from __future__ import annotations

import dataclasses
import datetime
import logging

import numpy as np
import pytest

from diagram_reconcile.algorithm.config import (
    DuplicateKeyPolicy,
    KeyWhitespace,
    ReconcileConfig,
)
from diagram_reconcile.algorithm.ordering import OrderTable, Reorderer
from diagram_reconcile.tree.selector import descendants, descendants_where

NAME = ("name",)


def named(*names: str) -> list[dict[str, str]]:
    return [{"name": n} for n in names]


def names_of(collection: list[dict[str, str]]) -> list[str]:
    return [node["name"] for node in collection]


@pytest.fixture
def reorderer() -> Reorderer:
    return Reorderer()


# ---------------------------------------------------------------------------
# build_order
# ---------------------------------------------------------------------------


class TestBuildOrder:
    def test_positions_follow_reference(self, reorderer: Reorderer) -> None:
        reference = {"elements": named("Y", "X", "W")}
        table = reorderer.build_order(reference, descendants("elements"), NAME)
        assert table.positions == {"Y": 0, "X": 1, "W": 2}
        assert len(table) == 3
        assert table.duplicates == ()

    def test_empty_selection_gives_empty_table(self, reorderer: Reorderer) -> None:
        table = reorderer.build_order({}, descendants("elements"), NAME)
        assert len(table) == 0
        assert table.unmatched_position == 0

    def test_reference_not_mutated(self, reorderer: Reorderer) -> None:
        reference = {"elements": named("B", "A")}
        reorderer.build_order(reference, descendants("elements"), NAME)
        assert names_of(reference["elements"]) == ["B", "A"]

    def test_duplicates_last_wins(
        self, reorderer: Reorderer, caplog: pytest.LogCaptureFixture
    ) -> None:
        reference = {"elements": named("A", "B", "A")}
        with caplog.at_level(logging.WARNING):
            table = reorderer.build_order(reference, descendants("elements"), NAME)
        assert table.positions == {"A": 2, "B": 1}
        assert table.duplicates == ("A",)
        assert "duplicate identity keys" in caplog.text

    def test_duplicates_first_wins(self) -> None:
        reorderer = Reorderer(duplicate_policy=DuplicateKeyPolicy.FIRST_WINS)
        reference = {"elements": named("A", "B", "A")}
        table = reorderer.build_order(reference, descendants("elements"), NAME)
        assert table.positions == {"A": 0, "B": 1}
        assert table.duplicates == ("A",)

    def test_duplicate_reported_once(self, reorderer: Reorderer) -> None:
        reference = {"elements": named("A", "A", "A")}
        table = reorderer.build_order(reference, descendants("elements"), NAME)
        assert table.duplicates == ("A",)

    def test_duplicate_warning_renders_date_names(
        self, reorderer: Reorderer, caplog: pytest.LogCaptureFixture
    ) -> None:
        day = datetime.date(2020, 1, 1)
        reference = {"elements": [{"name": day, "containers": named("c", "c")}]}
        selector = descendants_where("elements", having="containers", name=day).then(
            "containers"
        )
        with caplog.at_level(logging.WARNING):
            table = reorderer.build_order(reference, selector, NAME)
        assert table.duplicates == ("c",)
        assert '@.name=="2020-01-01"' in caplog.text


class TestOrderTable:
    def test_unmatched_position_is_size_without_duplicates(self) -> None:
        table = OrderTable(positions={"a": 0, "b": 1})
        assert table.unmatched_position == 2
        assert table.position("zzz") == 2
        assert table.position("b") == 1

    def test_unmatched_position_after_highest_rank(self) -> None:
        table = OrderTable(positions={"A": 2, "B": 1}, duplicates=("A",))
        assert table.unmatched_position == 3

    def test_unmatched_position_stored_once(self) -> None:
        table = OrderTable(positions={"a": 0, "b": 1})
        assert "unmatched_position" in {f.name for f in dataclasses.fields(table)}
        assert "unmatched_position" not in repr(table)
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.unmatched_position = 0  # type: ignore[misc]

    def test_contains(self) -> None:
        table = OrderTable(positions={"a": 0})
        assert "a" in table
        assert "b" not in table


# ---------------------------------------------------------------------------
# reorder
# ---------------------------------------------------------------------------


class TestReorder:
    def test_matches_reference_order(self, reorderer: Reorderer) -> None:
        table = OrderTable(positions={"Y": 0, "X": 1})
        target = named("X", "Y", "Z")
        reorderer.reorder(target, table, NAME)
        assert names_of(target) == ["Y", "X", "Z"]

    def test_unmatched_keep_relative_order(self, reorderer: Reorderer) -> None:
        table = OrderTable(positions={"B": 0, "A": 1})
        target = named("N1", "A", "N2", "B", "N3")
        reorderer.reorder(target, table, NAME)
        assert names_of(target) == ["B", "A", "N1", "N2", "N3"]

    def test_empty_table_keeps_order(self, reorderer: Reorderer) -> None:
        target = named("c", "a", "b")
        reorderer.reorder(target, OrderTable(), NAME)
        assert names_of(target) == ["c", "a", "b"]

    def test_empty_collection_is_noop(self, reorderer: Reorderer) -> None:
        target: list[dict[str, str]] = []
        assert reorderer.reorder(target, OrderTable(positions={"a": 0}), NAME) == []

    def test_in_place_and_returned(self, reorderer: Reorderer) -> None:
        target = named("b", "a")
        result = reorderer.reorder(target, OrderTable(positions={"a": 0, "b": 1}), NAME)
        assert result is target
        assert names_of(target) == ["a", "b"]

    def test_is_a_permutation(self, reorderer: Reorderer) -> None:
        table = OrderTable(positions={"d": 0, "b": 1, "a": 2})
        target = named("a", "b", "c", "d", "e", "b")
        before = [id(node) for node in target]
        reorderer.reorder(target, table, NAME)
        assert sorted(id(node) for node in target) == sorted(before)
        assert len(target) == len(before)

    def test_target_duplicates_keep_relative_order(self, reorderer: Reorderer) -> None:
        first, second = {"name": "a", "n": 1}, {"name": "a", "n": 2}
        target = [first, {"name": "b"}, second]
        reorderer.reorder(target, OrderTable(positions={"b": 0, "a": 1}), NAME)
        assert target == [{"name": "b"}, first, second]

    def test_unmatched_after_duplicated_reference_rank(
        self, reorderer: Reorderer
    ) -> None:
        reference = {"elements": named("A", "B", "A")}
        table = reorderer.build_order(reference, descendants("elements"), NAME)
        target = named("New", "A", "B")
        reorderer.reorder(target, table, NAME)
        assert names_of(target) == ["B", "A", "New"]

    def test_ranks(self, reorderer: Reorderer) -> None:
        table = OrderTable(positions={"x": 0, "y": 1})
        ranks = reorderer.ranks(named("y", "q", "x"), table, NAME)
        assert ranks.tolist() == [1, 2, 0]

    def test_apply_ranks_sorts_stably(self) -> None:
        target = named("c", "a", "b", "d")
        Reorderer.apply_ranks(target, np.array([1, 0, 1, 0]))
        assert names_of(target) == ["a", "d", "c", "b"]

    def test_apply_ranks_empty_collection(self) -> None:
        target: list[dict[str, str]] = []
        assert Reorderer.apply_ranks(target, np.array([], dtype=np.int64)) == []


class TestFromConfig:
    def test_settings_carried_over(self) -> None:
        config = ReconcileConfig(
            key_separator="|",
            whitespace=KeyWhitespace.LEGACY,
            duplicate_policy=DuplicateKeyPolicy.FIRST_WINS,
        )
        reorderer = Reorderer.from_config(config)
        assert reorderer.keys.separator == "|"
        assert reorderer.keys.whitespace == KeyWhitespace.LEGACY
        assert reorderer.duplicate_policy == DuplicateKeyPolicy.FIRST_WINS
