"""Tests for chain traversal."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from roll_tables.engine.chain import ChainStopReason, ChainTraversal, roll_table, traverse
from roll_tables.engine.resolver import RollFunction
from roll_tables.models import PlaceholderTable, RolledTable


class TestTraverse:
    """Tests for traversal termination and ordering."""

    def test_follows_chain(
        self,
        chain_tables: dict[str, RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a two-table chain yields both outcomes in order."""
        result = traverse(chain_tables, "FirstTable", scripted_chooser(), roll=roll_sequence(2))

        assert list(result.outcomes) == ["FirstTable", "SecondTable"]
        assert result.stop_reason == ChainStopReason.MISSING_TABLE
        assert result.last_table == ""

    def test_cycle_stops(
        self,
        loop_tables: dict[str, RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a two-table loop resolves each table once."""
        result = traverse(loop_tables, "LoopTable1", scripted_chooser(), roll=roll_sequence(1))

        assert list(result.outcomes) == ["LoopTable1", "LoopTable2"]
        assert result.stop_reason == ChainStopReason.CYCLE_DETECTED
        assert result.last_table == "LoopTable1"

    def test_self_link(
        self,
        rolled_table_factory: Callable[..., RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a table that links to itself is resolved once."""
        tables = {"Echo": rolled_table_factory("Echo", "1d6", [["1-6", "Again", "Echo"]])}

        result = traverse(tables, "Echo", scripted_chooser(), roll=roll_sequence(4))

        assert list(result.outcomes) == ["Echo"]
        assert result.stop_reason == ChainStopReason.CYCLE_DETECTED

    def test_missing_start_table(
        self,
        chain_tables: dict[str, RolledTable],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test an unknown start table gives no outcomes."""
        result = traverse(chain_tables, "Nowhere", scripted_chooser())

        assert result.outcomes == {}
        assert result.stop_reason == ChainStopReason.MISSING_TABLE
        assert result.last_table == "Nowhere"

    def test_missing_next_table(
        self,
        rolled_table_factory: Callable[..., RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a link to an unknown table ends the chain after recording the outcome."""
        tables = {"Start": rolled_table_factory("Start", "1d6", [["1-6", "Go", "Nowhere"]])}

        result = traverse(tables, "Start", scripted_chooser(), roll=roll_sequence(5))

        assert list(result.outcomes) == ["Start"]
        assert result.last_table == "Nowhere"

    def test_no_matching_row(
        self,
        chain_tables: dict[str, RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a roll outside SecondTable's rows stops there without an outcome."""
        result = traverse(chain_tables, "FirstTable", scripted_chooser(), roll=roll_sequence(1, 6))

        assert list(result.outcomes) == ["FirstTable"]
        assert result.stop_reason == ChainStopReason.NO_OUTCOME
        assert result.last_table == "SecondTable"

    def test_cancelled_placeholder(
        self,
        rolled_table_factory: Callable[..., RolledTable],
        placeholder_table_factory: Callable[..., PlaceholderTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test cancelling a choice keeps outcomes gathered so far."""
        tables = {
            "Wind": rolled_table_factory("Wind", "1d4", [["1-4", "Gale", "Shelter"]]),
            "Shelter": placeholder_table_factory("Shelter", "Where?", [["Cave", "Dry"]]),
        }

        result = traverse(tables, "Wind", scripted_chooser(), roll=roll_sequence(2))

        assert list(result.outcomes) == ["Wind"]
        assert result.stop_reason == ChainStopReason.NO_OUTCOME
        assert result.last_table == "Shelter"

    def test_unrollable_table_mid_chain(
        self,
        rolled_table_factory: Callable[..., RolledTable],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a table whose dice cannot be rolled stops the chain and keeps earlier outcomes."""
        tables = {
            "Start": rolled_table_factory("Start", "1d1", [["1", "ok", "Broken"]]),
            "Broken": rolled_table_factory("Broken", "1d0", [["1", "Never"]]),
        }

        result = traverse(tables, "Start", scripted_chooser())

        assert list(result.outcomes) == ["Start"]
        assert result.stop_reason == ChainStopReason.NO_OUTCOME
        assert result.last_table == "Broken"

    def test_outcomes_bounded_by_table_count(
        self,
        rolled_table_factory: Callable[..., RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test a fully linked ring never yields more outcomes than tables."""
        names = [f"Ring{index}" for index in range(5)]
        tables = {
            name: rolled_table_factory(name, "1d6", [["1-6", name, names[(index + 1) % len(names)]]])
            for index, name in enumerate(names)
        }

        result = traverse(tables, "Ring2", scripted_chooser(), roll=roll_sequence(3))

        assert len(result.outcomes) == len(tables)
        assert list(result.outcomes) == ["Ring2", "Ring3", "Ring4", "Ring0", "Ring1"]


class TestChainTraversalSteps:
    """Tests for driving the traversal generator directly."""

    def test_yields_placeholder_tables(
        self,
        placeholder_table_factory: Callable[..., PlaceholderTable],
    ) -> None:
        """Test the generator pauses at a placeholder table and resumes with the choice."""
        shelter = placeholder_table_factory("Shelter", "Where?", [["Cave", "Dry"], ["Tree", "Wet"]])
        steps = ChainTraversal({"Shelter": shelter}, "Shelter").steps()

        pending = next(steps)
        assert isinstance(pending, PlaceholderTable)
        assert pending.name == "Shelter"

        try:
            steps.send(shelter.rows[1])
        except StopIteration as stop:
            result = stop.value
        else:
            raise AssertionError("traversal should have finished")

        assert result.outcomes["Shelter"].row.value == "Wet"

    def test_rolled_only_chain_never_yields(
        self,
        chain_tables: dict[str, RolledTable],
        roll_sequence: Callable[..., RollFunction],
    ) -> None:
        """Test a chain of rolled tables completes on the first step."""
        steps = ChainTraversal(chain_tables, "FirstTable", roll=roll_sequence(1)).steps()

        try:
            next(steps)
        except StopIteration as stop:
            assert len(stop.value.outcomes) == 2
        else:
            raise AssertionError("rolled tables should not pause")


class TestRollTable:
    """Tests for the roll_table convenience wrapper."""

    def test_returns_outcome_mapping(
        self,
        chain_tables: dict[str, RolledTable],
        roll_sequence: Callable[..., RollFunction],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test roll_table returns outcomes keyed by table name."""
        outcomes = roll_table(chain_tables, "FirstTable", scripted_chooser(), roll=roll_sequence(1))

        assert len(outcomes) == 2
        assert outcomes["SecondTable"].row.value == "Second result"

    def test_loop_terminates_with_real_dice(
        self,
        loop_tables: dict[str, RolledTable],
        scripted_chooser: Callable[..., Any],
    ) -> None:
        """Test the loop terminates with real dice rolls."""
        outcomes = roll_table(loop_tables, "LoopTable1", scripted_chooser())

        assert len(outcomes) == 2
