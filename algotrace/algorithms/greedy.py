"""
greedy.py — Greedy Algorithms
==============================
Two classic greedy strategies that share one shape: sort the candidates
by a greedy key, then walk them once, accepting or rejecting each.

Interval scheduling (activity selection):
  • ASSIGN  – intervals ordered by end time (stable: ties keep input order)
  • COMPARE – candidate start vs. end of the last accepted interval
  • SELECT / REJECT – compatible when start ≥ last_end

Fractional knapsack:
  • ASSIGN  – items ordered by value/weight ratio, descending (stable)
  • COMPARE – candidate weight vs. remaining capacity
  • SELECT  – whole item, or the fraction that still fits
  • REJECT  – knapsack already full
"""

from typing import Any, Dict, Generator, List, Mapping, Sequence

from algotrace.algorithms import validation
from algotrace.algorithms.step import INF, Step, StepBuilder, StepKind, fmt
from algotrace.errors import InvalidInputError


INTERVAL_PSEUDOCODE: List[str] = [
    "def IntervalScheduling(intervals):",                 # 0
    "    sort intervals by end time",                     # 1
    "    last_end ← -∞; chosen ← []",                     # 2
    "    for (start, end) in intervals:",                 # 3
    "        if start ≥ last_end:",                       # 4
    "            chosen.append((start, end))",            # 5
    "            last_end ← end",                         # 6
    "    return chosen",                                  # 7
]

FRACTIONAL_PSEUDOCODE: List[str] = [
    "def FractionalKnapsack(items, W):",                  # 0
    "    sort items by value/weight, descending",         # 1
    "    remaining ← W; total ← 0",                       # 2
    "    for item in items:",                             # 3
    "        if remaining = 0: break",                    # 4
    "        take ← min(1, remaining / weight)",          # 5
    "        total += take · value",                      # 6
    "        remaining -= take · weight",                 # 7
    "    return total",                                   # 8
]


# ---------------------------------------------------------------------------
# Interval scheduling
# ---------------------------------------------------------------------------
def prepare_intervals(raw: Mapping[str, Any]) -> Dict[str, Any]:
    intervals = validation.require(raw, "intervals")
    if isinstance(intervals, (str, bytes)) or not isinstance(intervals, Sequence):
        raise InvalidInputError("'intervals' must be a list of [start, end] pairs")
    validation.bounded(intervals, "intervals")
    clean: List[List[float]] = []
    for i, item in enumerate(intervals):
        if isinstance(item, Mapping):
            start, end = validation.require(item, "start"), validation.require(item, "end")
        elif isinstance(item, Sequence) and len(item) == 2:
            start, end = item
        else:
            raise InvalidInputError(f"intervals[{i}] must be a [start, end] pair, got {item!r}")
        start = validation.number(start, f"intervals[{i}].start")
        end = validation.number(end, f"intervals[{i}].end")
        if start >= end:
            raise InvalidInputError(f"intervals[{i}] = [{start}, {end}] must start before it ends")
        clean.append([start, end])
    return {"intervals": clean}


def interval_scheduling(intervals: List[List[float]]) -> Generator[Step, None, None]:
    n = len(intervals)
    if n == 0:
        return
    sb = StepBuilder(intervals=[list(iv) for iv in intervals], order=[], selected=[], last_end=-INF)

    order = sorted(range(n), key=lambda i: intervals[i][1])
    sb.set("order", order)
    yield sb.build(
        StepKind.ASSIGN,
        "Sort intervals by end time: " + ", ".join(f"[{fmt(intervals[i][0])}, {fmt(intervals[i][1])}]" for i in order),
        indices=order,
        line=1,
    )

    for pos, idx in enumerate(order):
        start, end = intervals[idx]
        last_end = sb.state["last_end"]
        label = f"[{fmt(start)}, {fmt(end)}]"
        yield sb.compare(
            [idx],
            f"Consider interval {idx} {label}: start {fmt(start)} vs last end {fmt(last_end)}",
            line=4, considering=idx,
        )

        if start >= last_end:
            sb.set("selected", sb.state["selected"] + [idx])
            sb.set("last_end", end)
            sb.mark("selected", idx)
            message = f"Select {label}: it starts at or after {fmt(last_end)}. Total: {len(sb.state['selected'])}"
            accepted, line = True, 5
        else:
            sb.mark("rejected", idx)
            message = f"Reject {label}: it overlaps the interval ending at {fmt(last_end)}"
            accepted, line = False, 4

        if pos == n - 1:
            message += f". Done: {len(sb.state['selected'])} non-overlapping interval(s)"
        yield sb.decide(accepted, message, indices=(idx,), line=line)


# ---------------------------------------------------------------------------
# Fractional knapsack
# ---------------------------------------------------------------------------
def prepare_fractional(raw: Mapping[str, Any]) -> Dict[str, Any]:
    weights, values = validation.items(raw)
    return {"weights": weights, "values": values, "capacity": validation.capacity(raw)}


def fractional_knapsack(weights: List[float], values: List[float], capacity: float) -> Generator[Step, None, None]:
    n = len(weights)
    if n == 0:
        return
    sb = StepBuilder(order=[], fractions=[0.0] * n, remaining=capacity, total_value=0.0)

    ratios = [values[i] / weights[i] for i in range(n)]
    order = sorted(range(n), key=lambda i: -ratios[i])
    sb.set("order", order)
    yield sb.build(
        StepKind.ASSIGN,
        "Sort items by value/weight ratio: " + ", ".join(f"item {i} ({fmt(ratios[i])})" for i in order),
        indices=order,
        line=1,
    )

    for idx in order:
        w, v = weights[idx], values[idx]
        remaining = sb.state["remaining"]
        if remaining <= 0:
            sb.mark("rejected", idx)
            yield sb.decide(False, f"Knapsack is full: skip item {idx}", indices=(idx,), line=4)
            continue

        yield sb.compare(
            [idx],
            f"Item {idx}: ratio {fmt(ratios[idx])}, weight {fmt(w)} vs remaining capacity {fmt(remaining)}",
            line=5, considering=idx,
        )

        take = 1.0 if w <= remaining else remaining / w
        sb.set_cell("fractions", idx, take)
        sb.set("total_value", sb.state["total_value"] + take * v)
        sb.set("remaining", 0.0 if take < 1.0 else remaining - w)
        sb.mark("selected", idx)
        if take == 1.0:
            message = f"Take all of item {idx}: +{fmt(v)} value, {fmt(sb.state['remaining'])} capacity left"
        else:
            message = f"Take {fmt(take)} of item {idx}: +{fmt(take * v)} value, knapsack is now full"
        yield sb.decide(True, message + f" (total {fmt(sb.state['total_value'])})", indices=(idx,), line=6)
