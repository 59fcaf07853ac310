"""
merge_sort.py — Divide & Conquer Merge Sort
============================================
Top-down merge sort.  Yields:
  1. DIVIDE   – a range [l..r] is split at its midpoint
  2. MERGE    – two sorted runs are copied into the merge buffer
  3. COMPARE  – heads of the two runs are compared (ties take the left run);
                 `buffer_comparing` indexes the heads inside `buffer`
  4. ASSIGN   – the winner is written back into arr[k]
  5. SELECT   – the whole array is sorted

Working state:  {"array": [...], "buffer": {"left": [...], "right": [...]} | None}
"""

from typing import Generator, List

from algotrace.algorithms.sorting import _finish
from algotrace.algorithms.step import Step, StepBuilder, StepKind, fmt


PSEUDOCODE: List[str] = [
    "def MergeSort(arr, l, r):",                      # 0
    "    if l ≥ r: return",                           # 1
    "    m ← ⌊(l + r) / 2⌋",                          # 2
    "    MergeSort(arr, l, m)",                       # 3
    "    MergeSort(arr, m + 1, r)",                   # 4
    "    L ← arr[l..m]; R ← arr[m+1..r]",             # 5
    "    while L and R not exhausted:",               # 6
    "        if L[i] ≤ R[j]: arr[k] ← L[i]",          # 7
    "        else: arr[k] ← R[j]",                    # 8
    "    copy the rest of L, then the rest of R",     # 9
    "    return arr",                                 # 10
]


def merge_sort(values: List[float]) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(array=list(values), buffer=None)
    yield from _sort(sb, 0, n - 1, depth=0)
    sb.set("buffer", None)
    yield _finish(sb, n, line=10)


def _sort(sb: StepBuilder, left: int, right: int, depth: int) -> Generator[Step, None, None]:
    if left >= right:
        return
    mid = (left + right) // 2
    yield sb.build(
        StepKind.DIVIDE,
        f"Split [{left}..{right}] into [{left}..{mid}] and [{mid + 1}..{right}]",
        indices=(left, mid, right),
        highlights={"range": [left, right], "depth": depth},
        line=2,
    )
    yield from _sort(sb, left, mid, depth + 1)
    yield from _sort(sb, mid + 1, right, depth + 1)
    yield from _merge(sb, left, mid, right, depth)


def _merge(sb: StepBuilder, left: int, mid: int, right: int, depth: int) -> Generator[Step, None, None]:
    arr = sb.state["array"]
    left_run = arr[left:mid + 1]
    right_run = arr[mid + 1:right + 1]
    sb.set("buffer", {"left": left_run, "right": right_run})
    yield sb.build(
        StepKind.MERGE,
        f"Merge {[fmt(v) for v in left_run]} with {[fmt(v) for v in right_run]} into [{left}..{right}]",
        indices=(left, mid, right),
        highlights={"range": [left, right], "depth": depth},
        line=5,
    )

    i = j = 0
    k = left
    while i < len(left_run) and j < len(right_run):
        a, b = left_run[i], right_run[j]
        take_left = a <= b
        # arr[left..k-1] is already overwritten, so point into the buffer runs
        yield sb.build(
            StepKind.COMPARE,
            f"Compare {fmt(a)} (left run) with {fmt(b)} (right run): take {fmt(a if take_left else b)}",
            indices=(k,),
            highlights={"range": [left, right], "buffer_comparing": {"left": i, "right": j}},
            line=7 if take_left else 8,
        )
        if take_left:
            value, i = a, i + 1
        else:
            value, j = b, j + 1
        sb.set_cell("array", k, value)
        yield sb.build(
            StepKind.ASSIGN,
            f"Write {fmt(value)} to index {k}",
            indices=(k,),
            highlights={"range": [left, right]},
        )
        k += 1

    for run, start in ((left_run, i), (right_run, j)):
        for value in run[start:]:
            sb.set_cell("array", k, value)
            yield sb.build(
                StepKind.ASSIGN,
                f"Copy remaining {fmt(value)} to index {k}",
                indices=(k,),
                highlights={"range": [left, right]},
                line=9,
            )
            k += 1
