"""
knapsack.py — 0/1 Knapsack (Dynamic Programming)
=================================================
Fills dp[i][w] = best value using the first i items within capacity w,
one step per cell:

  • SELECT  – item i-1 is INCLUDED:  dp[i-1][w-wt] + val  >  dp[i-1][w]
  • REJECT  – item i-1 is EXCLUDED:  it does not fit, or including it
              is not strictly better (ties exclude)

Then BACKTRACK steps walk from dp[n][W] to row 0; a row whose value
differs from the row above means that item was taken.  The exclude-on-tie
rule above is what makes this walk reproduce the filled table's choices.

Working state:  {"table": [[…]], "selected": [item indices], "value": best | None}
"""

from typing import Any, Dict, Generator, List, Mapping

from algotrace import config
from algotrace.algorithms import validation
from algotrace.algorithms.step import Step, StepBuilder, StepKind, fmt
from algotrace.errors import InvalidInputError


PSEUDOCODE: List[str] = [
    "def Knapsack(weights, values, W):",                          # 0
    "    dp ← table[n+1][W+1] of 0",                              # 1
    "    for i in 1 … n:",                                        # 2
    "        for w in 0 … W:",                                    # 3
    "            if weight[i] > w: dp[i][w] ← dp[i-1][w]",        # 4
    "            else: dp[i][w] ← max(dp[i-1][w],",               # 5
    "                      dp[i-1][w-weight[i]] + value[i])",     # 6
    "    w ← W",                                                  # 7
    "    for i in n … 1:",                                        # 8
    "        if dp[i][w] ≠ dp[i-1][w]: take item i; w -= weight[i]",  # 9
    "    return dp[n][W]",                                        # 10
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    weights, values = validation.items(raw)
    capacity = validation.capacity(raw)
    int_weights = [validation.integer(w, f"weights[{i}]") for i, w in enumerate(weights)]
    int_capacity = validation.integer(capacity, "capacity")
    if int_capacity > config.MAX_KNAPSACK_CAPACITY:
        raise InvalidInputError(
            f"Capacity {int_capacity} exceeds the traceable maximum of {config.MAX_KNAPSACK_CAPACITY}"
        )
    return {"weights": int_weights, "values": values, "capacity": int_capacity}


def knapsack_01(weights: List[int], values: List[float], capacity: int) -> Generator[Step, None, None]:
    n = len(weights)
    if n == 0:
        return
    sb = StepBuilder(
        table=[[0] * (capacity + 1) for _ in range(n + 1)],
        selected=[],
        value=None,
    )
    dp = sb.state["table"]

    for i in range(1, n + 1):
        wt, val = weights[i - 1], values[i - 1]
        for w in range(capacity + 1):
            exclude = dp[i - 1][w]
            if wt > w:
                sb.set_cell("table", (i, w), exclude)
                yield sb.decide(
                    False,
                    f"Item {i - 1} (weight {wt}) does not fit in capacity {w}: exclude, dp[{i}][{w}] = {fmt(exclude)}",
                    indices=(i, w), line=4,
                    cell=[i, w], decision="exclude", item=i - 1, sources=[[i - 1, w]],
                )
                continue

            include = dp[i - 1][w - wt] + val
            if include > exclude:
                sb.set_cell("table", (i, w), include)
                yield sb.decide(
                    True,
                    f"Include item {i - 1}: value {fmt(include)} > exclude {fmt(exclude)}, dp[{i}][{w}] = {fmt(include)}",
                    indices=(i, w), line=6,
                    cell=[i, w], decision="include", item=i - 1, sources=[[i - 1, w], [i - 1, w - wt]],
                )
            else:
                sb.set_cell("table", (i, w), exclude)
                yield sb.decide(
                    False,
                    f"Exclude item {i - 1}: exclude {fmt(exclude)} ≥ include {fmt(include)}, dp[{i}][{w}] = {fmt(exclude)}",
                    indices=(i, w), line=5,
                    cell=[i, w], decision="exclude", item=i - 1, sources=[[i - 1, w], [i - 1, w - wt]],
                )

    # -- backtrack --
    best = dp[n][capacity]
    sb.set("value", best)
    yield sb.build(
        StepKind.BACKTRACK,
        f"Optimal value dp[{n}][{capacity}] = {fmt(best)}; trace back to find the chosen items",
        indices=(n, capacity),
        highlights={"cell": [n, capacity]},
        line=7,
    )

    w = capacity
    for i in range(n, 0, -1):
        if dp[i][w] != dp[i - 1][w]:
            sb.set("selected", [i - 1] + sb.state["selected"])
            sb.mark("chosen", i - 1)
            message = (
                f"dp[{i}][{w}] = {fmt(dp[i][w])} ≠ dp[{i - 1}][{w}] = {fmt(dp[i - 1][w])}: "
                f"item {i - 1} was taken, capacity {w} → {w - weights[i - 1]}"
            )
            cell = [i, w]
            w -= weights[i - 1]
        else:
            message = f"dp[{i}][{w}] = dp[{i - 1}][{w}] = {fmt(dp[i][w])}: item {i - 1} was not taken"
            cell = [i, w]
        yield sb.build(
            StepKind.BACKTRACK,
            message,
            indices=tuple(cell),
            highlights={"cell": cell, "item": i - 1},
            line=9,
        )
