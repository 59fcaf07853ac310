"""Tests for linear and binary search traces."""

import math

import pytest

from algotrace.algorithms.step import StepKind
from algotrace.engine import build_trace

SORTED = [2, 5, 8, 12, 16, 23, 38, 45, 56, 67, 78]


class TestBinarySearch:
    def test_hit_on_first_probe(self):
        trace = build_trace("binary_search", {"values": SORTED, "target": 23})
        assert len(trace) == 2
        assert trace[0].kind is StepKind.COMPARE
        assert trace[0].state["mid"] == 5
        assert trace.final_step.kind is StepKind.SELECT
        assert trace.final_state["found"] == 5

    def test_each_probe_records_window(self):
        trace = build_trace("binary_search", {"values": SORTED, "target": 67})
        windows = [(s.state["left"], s.state["right"], s.state["mid"]) for s in trace]
        assert windows[0] == (6, 10, 5)
        assert trace.final_state["found"] == 9

    def test_absent_target_reports_not_found(self):
        trace = build_trace("binary_search", {"values": [1, 3, 5, 7, 9, 11, 13], "target": 4})
        assert len(trace) == 3
        assert trace.final_step.kind is StepKind.REJECT
        assert "not found" in trace.final_step.message
        assert trace.final_state["found"] is None

    @pytest.mark.parametrize("n", [1, 2, 3, 7, 8, 11, 16, 33, 100])
    def test_absent_target_step_bound(self, n):
        values = list(range(0, 2 * n, 2))
        bound = math.ceil(math.log2(n)) + 1
        for target in range(-1, 2 * n + 1, 2):
            trace = build_trace("binary_search", {"values": values, "target": target})
            assert len(trace) <= bound
            assert "not found" in trace.final_step.message
            assert "found" not in trace.final_step.highlights

    def test_empty_input(self):
        assert len(build_trace("binary_search", {"values": [], "target": 1})) == 0


class TestLinearSearch:
    def test_found(self):
        trace = build_trace("linear_search", {"values": [4, 2, 7], "target": 7})
        assert [s.kind for s in trace] == [
            StepKind.COMPARE, StepKind.COMPARE, StepKind.COMPARE, StepKind.SELECT,
        ]
        assert trace.final_state["found"] == 2

    def test_first_occurrence_wins(self):
        trace = build_trace("linear_search", {"values": [1, 9, 9], "target": 9})
        assert trace.final_state["found"] == 1

    def test_not_found(self):
        trace = build_trace("linear_search", {"values": [4, 2, 7], "target": 5})
        assert trace.count(StepKind.COMPARE) == 3
        assert trace.final_step.kind is StepKind.REJECT
        assert "not found" in trace.final_step.message
        assert trace.final_state["found"] is None
