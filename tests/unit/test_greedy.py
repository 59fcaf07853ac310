"""Tests for interval scheduling and fractional knapsack traces."""

import pytest

from algotrace.algorithms.step import StepKind
from algotrace.engine import build_trace

INTERVALS = [
    [1, 4], [3, 5], [0, 6], [5, 7], [3, 9], [5, 9],
    [6, 10], [8, 11], [8, 12], [2, 14], [12, 16],
]


class TestIntervalScheduling:
    def test_earliest_finish_selection(self):
        trace = build_trace("interval_scheduling", {"intervals": INTERVALS})
        assert trace.final_state["selected"] == [0, 3, 7, 10]
        assert "Done: 4 non-overlapping" in trace.final_step.message

    def test_sort_step_comes_first(self):
        trace = build_trace("interval_scheduling", {"intervals": INTERVALS})
        assert trace[0].kind is StepKind.ASSIGN
        assert trace[0].state["order"] == list(range(len(INTERVALS)))

    def test_one_compare_and_decision_per_interval(self):
        trace = build_trace("interval_scheduling", {"intervals": INTERVALS})
        assert trace.count(StepKind.COMPARE) == len(INTERVALS)
        assert trace.count(StepKind.SELECT) + trace.count(StepKind.REJECT) == len(INTERVALS)

    def test_touching_intervals_are_compatible(self):
        trace = build_trace("interval_scheduling", {"intervals": [[1, 2], [2, 3]]})
        assert trace.final_state["selected"] == [0, 1]

    def test_equal_end_times_keep_input_order(self):
        trace = build_trace("interval_scheduling", {"intervals": [[2, 5], [1, 5]]})
        assert trace.final_state["order"] == [0, 1]
        assert trace.final_state["selected"] == [0]

    def test_dict_intervals(self):
        trace = build_trace("interval_scheduling", {"intervals": [{"start": 0, "end": 1}]})
        assert trace.final_state["selected"] == [0]


class TestFractionalKnapsack:
    def test_classic_instance(self):
        trace = build_trace(
            "fractional_knapsack",
            {"weights": [10, 20, 30], "values": [60, 100, 120], "capacity": 50},
        )
        state = trace.final_state
        assert state["total_value"] == pytest.approx(240)
        assert state["fractions"][:2] == [1.0, 1.0]
        assert state["fractions"][2] == pytest.approx(2 / 3)
        assert state["remaining"] == 0

    def test_ratio_order(self):
        trace = build_trace(
            "fractional_knapsack",
            {"weights": [5, 1, 2], "values": [5, 4, 2], "capacity": 100},
        )
        # ratios 1, 4, 1: stable for the tie between items 0 and 2
        assert trace[0].state["order"] == [1, 0, 2]
        assert trace.final_state["total_value"] == pytest.approx(11)

    def test_full_knapsack_rejects_the_rest(self):
        trace = build_trace(
            "fractional_knapsack",
            {"weights": [1, 1], "values": [2, 1], "capacity": 1},
        )
        assert trace.count(StepKind.REJECT) == 1
        assert trace.final_step.kind is StepKind.REJECT
        assert trace.final_state["fractions"] == [1.0, 0.0]

    def test_zero_capacity(self):
        trace = build_trace(
            "fractional_knapsack",
            {"weights": [1], "values": [1], "capacity": 0},
        )
        assert trace.final_state["total_value"] == 0
