"""
lis.py — Longest Increasing Subsequence
========================================
Classic O(n²) DP: lengths[i] = longest strictly increasing subsequence
ending at index i.

  • COMPARE   – every pair (j, i) with j < i
  • ASSIGN    – lengths[i] / parents[i] improve (strictly: ties keep the
                earlier predecessor)
  • BACKTRACK – follow parents from the best end (earliest index on ties)

Working state:  {"values", "lengths", "parents", "sequence", "length"}
"""

from typing import Any, Dict, Generator, List, Mapping

from algotrace.algorithms import validation
from algotrace.algorithms.step import Step, StepBuilder, StepKind, fmt


PSEUDOCODE: List[str] = [
    "def LIS(arr):",                                          # 0
    "    len ← [1] * n; parent ← [-1] * n",                   # 1
    "    for i in 1 … n-1:",                                  # 2
    "        for j in 0 … i-1:",                              # 3
    "            if arr[j] < arr[i] and len[j] + 1 > len[i]:",  # 4
    "                len[i] ← len[j] + 1; parent[i] ← j",     # 5
    "    end ← argmax(len)",                                  # 6
    "    follow parent[] from end",                           # 7
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {"values": validation.number_list(raw, "values")}


def lis(values: List[float]) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(values=list(values), lengths=[1] * n, parents=[-1] * n, sequence=[], length=None)
    lengths = sb.state["lengths"]

    for i in range(1, n):
        for j in range(i):
            a, b = values[j], values[i]
            if a < b and lengths[j] + 1 > lengths[i]:
                yield sb.compare(
                    [j, i],
                    f"arr[{j}]={fmt(a)} < arr[{i}]={fmt(b)} and len[{j}] + 1 = {lengths[j] + 1} > len[{i}] = {lengths[i]}",
                    line=4,
                )
                sb.set_cell("lengths", i, lengths[j] + 1)
                sb.set_cell("parents", i, j)
                yield sb.build(
                    StepKind.ASSIGN,
                    f"Extend the subsequence ending at {j}: len[{i}] = {lengths[i]}, parent[{i}] = {j}",
                    indices=(i,),
                    highlights={"extending": [j, i]},
                    line=5,
                )
            elif a < b:
                yield sb.compare(
                    [j, i],
                    f"arr[{j}]={fmt(a)} < arr[{i}]={fmt(b)} but len[{j}] + 1 = {lengths[j] + 1} does not beat len[{i}] = {lengths[i]}",
                    line=4,
                )
            else:
                yield sb.compare(
                    [j, i],
                    f"arr[{j}]={fmt(a)} ≥ arr[{i}]={fmt(b)}: cannot extend",
                    line=4,
                )

    best = max(lengths)
    end = lengths.index(best)
    sb.set("length", best)
    yield sb.build(
        StepKind.BACKTRACK,
        f"Longest length is {best}, ending at index {end}; follow the parents back",
        indices=(end,),
        line=6,
    )

    cur = end
    while cur != -1:
        sb.set("sequence", [values[cur]] + sb.state["sequence"])
        sb.mark("chosen", cur)
        parent = sb.state["parents"][cur]
        tail = f"parent is {parent}" if parent != -1 else "no parent, start of the subsequence"
        yield sb.build(
            StepKind.BACKTRACK,
            f"Take arr[{cur}]={fmt(values[cur])}; {tail}",
            indices=(cur,),
            line=7,
        )
        cur = parent
