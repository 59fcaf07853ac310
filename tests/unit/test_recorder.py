"""Tests for the trace recorder protocol, metrics, comparison and export."""

import json

import pytest

from algotrace.algorithms.step import Step, StepBuilder, StepKind
from algotrace.engine import (
    TraceRecorder,
    build_trace,
    compare,
    compute_metrics,
    export_metrics,
    export_trace,
)
from algotrace.errors import OutOfOrderStepError


def _steps(n):
    sb = StepBuilder(array=[0])
    return [sb.build(StepKind.ASSIGN, f"step {i}") for i in range(n)]


class TestRecorderProtocol:
    def test_record_and_finish(self):
        rec = TraceRecorder()
        handle = rec.begin("demo", {"values": [1]})
        for step in _steps(3):
            rec.record(step)
        trace = rec.finish(handle)
        assert len(trace) == 3
        assert trace.algorithm_id == "demo"
        assert trace.input == {"values": [1]}
        assert trace.generation == handle.generation

    def test_only_last_step_is_final(self):
        rec = TraceRecorder()
        handle = rec.begin("demo")
        for step in _steps(3):
            rec.record(step)
        trace = rec.finish(handle)
        assert [s.is_final for s in trace] == [False, False, True]

    def test_empty_run(self):
        rec = TraceRecorder()
        trace = rec.finish(rec.begin("demo"))
        assert len(trace) == 0

    def test_record_without_begin(self):
        with pytest.raises(OutOfOrderStepError, match="no open run"):
            TraceRecorder().record(_steps(1)[0])

    def test_record_out_of_order(self):
        rec = TraceRecorder()
        rec.begin("demo")
        steps = _steps(2)
        with pytest.raises(OutOfOrderStepError, match="expected index 0"):
            rec.record(steps[1])

    def test_record_twice(self):
        rec = TraceRecorder()
        rec.begin("demo")
        step = _steps(1)[0]
        rec.record(step)
        with pytest.raises(OutOfOrderStepError):
            rec.record(step)

    def test_record_after_finish(self):
        rec = TraceRecorder()
        handle = rec.begin("demo")
        steps = _steps(2)
        rec.record(steps[0])
        rec.finish(handle)
        with pytest.raises(OutOfOrderStepError):
            rec.record(steps[1])

    def test_finish_twice(self):
        rec = TraceRecorder()
        handle = rec.begin("demo")
        rec.finish(handle)
        with pytest.raises(OutOfOrderStepError):
            rec.finish(handle)

    def test_stale_handle(self):
        rec = TraceRecorder()
        old = rec.begin("demo")
        new = rec.begin("demo")
        assert new.generation == old.generation + 1
        with pytest.raises(OutOfOrderStepError, match="Stale handle"):
            rec.finish(old)
        assert len(rec.finish(new)) == 0

    def test_input_is_copied(self):
        values = [3, 1]
        rec = TraceRecorder()
        handle = rec.begin("demo", {"values": values})
        values.append(9)
        assert rec.finish(handle).input == {"values": [3, 1]}


class TestBuildTrace:
    def test_generation_increases_with_shared_recorder(self):
        rec = TraceRecorder()
        first = build_trace("bubble_sort", {"values": [2, 1]}, recorder=rec)
        second = build_trace("bubble_sort", {"values": [2, 1]}, recorder=rec)
        assert second.generation == first.generation + 1
        assert first.steps == second.steps

    def test_steps_do_not_share_state(self):
        trace = build_trace("bubble_sort", {"values": [3, 2, 1]})
        arrays = [s.state["array"] for s in trace]
        assert len({id(a) for a in arrays}) == len(arrays)

    def test_prefix_replay_is_monotonic(self):
        first = build_trace("insertion_sort", {"values": [4, 2, 3, 1]})
        for k in range(len(first) - 1):
            prefix = first.steps[:k + 1]
            longer = first.steps[:k + 2]
            assert longer[:-1] == prefix

    def test_logs_build(self, caplog):
        with caplog.at_level("INFO", logger="algotrace.engine.recorder"):
            build_trace("bubble_sort", {"values": [2, 1]})
        assert "Built bubble_sort trace" in caplog.text


class TestMetrics:
    def test_bubble_metrics(self):
        metrics = compute_metrics(build_trace("bubble_sort", {"values": [5, 3, 1]}))
        assert metrics.label == "Bubble Sort"
        assert metrics.total_steps == 9
        assert metrics.comparisons == 3
        assert metrics.writes == 3
        assert metrics.kind_counts["swap"] == 3
        assert metrics.wall_time_ms >= 0
        assert metrics.final_message.startswith("Array is sorted")

    def test_graph_metrics(self):
        graph = [("A", "B", 1), ("B", "C", 1)]
        metrics = compute_metrics(build_trace("dijkstra", {"graph": graph, "source": "A"}))
        assert metrics.nodes_visited == 3
        assert metrics.edges_relaxed == 2

    def test_compare_runs(self):
        bubble = compute_metrics(build_trace("bubble_sort", {"values": [5, 3, 1]}))
        merge = compute_metrics(build_trace("merge_sort", {"values": [5, 3, 1]}))
        result = compare(bubble, merge)
        assert merge.total_steps == 12
        assert result.winner_steps == "left"
        assert result.winner_comparisons == "right"
        assert result.winner_writes == "left"

    def test_compare_tie(self):
        metrics = compute_metrics(build_trace("lis", {"values": [1, 2]}))
        result = compare(metrics, metrics)
        assert result.winner_steps == "tie"

    def test_export_metrics(self):
        metrics = compute_metrics(build_trace("bubble_sort", {"values": [1]}))
        assert export_metrics(metrics)["algorithm_id"] == "bubble_sort"


class TestExport:
    def test_json_safe(self):
        trace = build_trace("dijkstra", {"graph": [("A", "B", 2)], "source": "A"})
        exported = export_trace(trace)
        text = json.dumps(exported, allow_nan=False)
        assert '"inf"' in text
        assert exported["steps"][0]["state"]["distances"] == {"A": 0, "B": "inf"}
        assert exported["input"]["graph"]["nodes"][0]["id"] == "A"

    def test_step_fields(self):
        exported = export_trace(build_trace("bubble_sort", {"values": [2, 1]}))
        first = exported["steps"][0]
        assert first["kind"] == "compare"
        assert first["indices"] == [0, 1]
        assert exported["steps"][-1]["is_final"] is True

    def test_table_coordinates_become_lists(self):
        exported = export_trace(build_trace("lcs", {"first": "A", "second": "A"}))
        assert exported["steps"][0]["indices"] == [1, 1]
