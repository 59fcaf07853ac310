"""Tests for the Step / Trace data types and the StepBuilder primitives."""

import pytest

from algotrace.algorithms.step import INF, Step, StepBuilder, StepKind, Trace, fmt


class TestStepBuilderSnapshots:
    def test_build_deep_copies_state(self):
        sb = StepBuilder(array=[3, 1, 2])
        step = sb.build(StepKind.ASSIGN, "initial")
        sb.swap_indices("array", 0, 1)
        assert step.state["array"] == [3, 1, 2]
        assert sb.state["array"] == [1, 3, 2]

    def test_constructor_copies_caller_data(self):
        values = [1, 2]
        sb = StepBuilder(array=values)
        sb.set_cell("array", 0, 99)
        assert values == [1, 2]

    def test_set_cell_on_table(self):
        sb = StepBuilder(table=[[0, 0], [0, 0]])
        sb.set_cell("table", (1, 0), 7)
        assert sb.state["table"] == [[0, 0], [7, 0]]

    def test_mark_visited_is_idempotent(self):
        sb = StepBuilder()
        sb.mark_visited("A")
        sb.mark_visited("A")
        sb.mark_visited("B")
        assert sb.state["visited"] == ["A", "B"]

    def test_update_distance(self):
        sb = StepBuilder(distances={"A": 0, "B": INF})
        sb.update_distance("B", 4)
        assert sb.state["distances"] == {"A": 0, "B": 4}

    def test_indices_increase_by_one(self):
        sb = StepBuilder(array=[1])
        steps = [sb.build(StepKind.ASSIGN, str(i)) for i in range(4)]
        assert [s.index for s in steps] == [0, 1, 2, 3]


class TestStepBuilderHighlights:
    def test_marks_persist_until_unmarked(self):
        sb = StepBuilder(array=[1, 2])
        sb.mark("sorted", 1)
        first = sb.build(StepKind.SELECT, "one")
        second = sb.build(StepKind.COMPARE, "two", highlights={"comparing": [0, 1]})
        sb.unmark("sorted")
        third = sb.build(StepKind.ASSIGN, "three")
        assert first.highlights == {"sorted": [1]}
        assert second.highlights == {"sorted": [1], "comparing": [0, 1]}
        assert third.highlights == {}

    def test_compare_defaults_comparing_tag(self):
        step = StepBuilder(array=[2, 1]).compare([0, 1], "2 vs 1", line=4)
        assert step.kind is StepKind.COMPARE
        assert step.highlights["comparing"] == [0, 1]
        assert step.pseudocode_line == 4

    def test_swap_applies_and_tags(self):
        sb = StepBuilder(array=[2, 1])
        step = sb.swap("array", 0, 1, "swap")
        assert step.kind is StepKind.SWAP
        assert step.state["array"] == [1, 2]
        assert step.highlights["swapping"] == [0, 1]

    def test_decide_maps_to_select_or_reject(self):
        sb = StepBuilder()
        assert sb.decide(True, "yes").kind is StepKind.SELECT
        assert sb.decide(False, "no").kind is StepKind.REJECT

    def test_pseudocode_line_carries_over(self):
        sb = StepBuilder()
        sb.build(StepKind.ASSIGN, "a", line=3)
        assert sb.build(StepKind.ASSIGN, "b").pseudocode_line == 3


class TestTrace:
    def _trace(self):
        steps = (
            Step(index=0, kind=StepKind.COMPARE, message="c", state={"array": [1]}),
            Step(index=1, kind=StepKind.SWAP, message="s", state={"array": [2]}),
            Step(index=2, kind=StepKind.COMPARE, message="c", state={"array": [3]}),
        )
        return Trace(algorithm_id="demo", steps=steps)

    def test_sequence_protocol(self):
        trace = self._trace()
        assert len(trace) == 3
        assert trace[1].kind is StepKind.SWAP
        assert [s.index for s in trace] == [0, 1, 2]

    def test_counts(self):
        trace = self._trace()
        assert trace.count(StepKind.COMPARE) == 2
        assert [s.index for s in trace.of_kind(StepKind.SWAP)] == [1]

    def test_final_state_is_a_copy(self):
        trace = self._trace()
        state = trace.final_state
        state["array"].append(99)
        assert trace.final_step.state["array"] == [3]

    def test_empty_trace(self):
        trace = Trace(algorithm_id="demo")
        assert trace.final_step is None
        assert trace.final_state == {}

    def test_step_is_frozen(self):
        step = Step(index=0, kind=StepKind.VISIT, message="v")
        with pytest.raises(Exception):
            step.index = 5


class TestFmt:
    def test_whole_floats_drop_decimal(self):
        assert fmt(4.0) == "4"

    def test_infinity(self):
        assert fmt(INF) == "∞"
        assert fmt(-INF) == "-∞"

    def test_fraction(self):
        assert fmt(0.5) == "0.5"

    def test_non_float(self):
        assert fmt("A") == "A"
        assert fmt(3) == "3"

    def test_inf_compares_against_finite(self):
        assert 10 ** 18 < INF
        assert min(INF, 7) == 7
