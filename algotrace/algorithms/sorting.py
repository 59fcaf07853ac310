"""
sorting.py — Elementary Comparison Sorts
=========================================
Generator-based bubble, selection and insertion sort.

Each yields:
  • COMPARE – every pair of elements the textbook algorithm examines
  • SWAP    – only when two elements are actually exchanged
  • ASSIGN  – insertion-sort shifts and the final key drop
  • SELECT  – an element settling into its final position

Working state:  {"array": [...]}  (+ "key" for insertion sort).

Tie policy: equal elements are never exchanged, so every sort here is
stable with respect to the earlier index.
"""

from typing import Any, Dict, Generator, List, Mapping

from algotrace.algorithms import validation
from algotrace.algorithms.step import Step, StepBuilder, StepKind, fmt


BUBBLE_PSEUDOCODE: List[str] = [
    "def BubbleSort(arr):",                       # 0
    "    for i in 0 … n-2:",                      # 1
    "        swapped ← False",                    # 2
    "        for j in 0 … n-i-2:",                # 3
    "            if arr[j] > arr[j+1]:",          # 4
    "                swap(arr[j], arr[j+1])",     # 5
    "                swapped ← True",             # 6
    "        if not swapped: break",              # 7
    "    return arr",                             # 8
]

SELECTION_PSEUDOCODE: List[str] = [
    "def SelectionSort(arr):",                    # 0
    "    for i in 0 … n-2:",                      # 1
    "        min ← i",                            # 2
    "        for j in i+1 … n-1:",                # 3
    "            if arr[j] < arr[min]:",          # 4
    "                min ← j",                    # 5
    "        if min ≠ i: swap(arr[i], arr[min])", # 6
    "    return arr",                             # 7
]

INSERTION_PSEUDOCODE: List[str] = [
    "def InsertionSort(arr):",                    # 0
    "    for i in 1 … n-1:",                      # 1
    "        key ← arr[i]",                       # 2
    "        j ← i - 1",                          # 3
    "        while j ≥ 0 and arr[j] > key:",      # 4
    "            arr[j+1] ← arr[j]",              # 5
    "            j ← j - 1",                      # 6
    "        arr[j+1] ← key",                     # 7
    "    return arr",                             # 8
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {"values": validation.number_list(raw, "values")}


def _finish(sb: StepBuilder, n: int, line: int) -> Step:
    sb.mark("sorted", *range(n))
    return sb.build(
        StepKind.SELECT,
        f"Array is sorted: {[fmt(v) for v in sb.state['array']]}",
        indices=range(n),
        line=line,
    )


# ---------------------------------------------------------------------------
# Bubble sort
# ---------------------------------------------------------------------------
def bubble_sort(values: List[float]) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(array=list(values))
    arr = sb.state["array"]

    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            a, b = arr[j], arr[j + 1]
            if a > b:
                yield sb.compare(
                    [j, j + 1],
                    f"Compare arr[{j}]={fmt(a)} with arr[{j + 1}]={fmt(b)}: {fmt(a)} > {fmt(b)}, out of order",
                    line=4,
                )
                yield sb.swap("array", j, j + 1, f"Swap {fmt(a)} and {fmt(b)}", line=5)
                swapped = True
            else:
                yield sb.compare(
                    [j, j + 1],
                    f"Compare arr[{j}]={fmt(a)} with arr[{j + 1}]={fmt(b)}: already in order",
                    line=4,
                )

        if not swapped:
            # nothing moved: the unsorted prefix is already in order
            yield _finish(sb, n, line=7)
            return

        settled = n - 1 - i
        sb.mark("sorted", settled)
        yield sb.build(
            StepKind.SELECT,
            f"Pass {i + 1} done: {fmt(arr[settled])} bubbles up to its final index {settled}",
            indices=(settled,),
            line=1,
        )

    yield _finish(sb, n, line=8)


# ---------------------------------------------------------------------------
# Selection sort
# ---------------------------------------------------------------------------
def selection_sort(values: List[float]) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(array=list(values))
    arr = sb.state["array"]

    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if arr[j] < arr[min_idx]:
                yield sb.compare(
                    [j, min_idx],
                    f"Compare arr[{j}]={fmt(arr[j])} with current minimum {fmt(arr[min_idx])}: smaller",
                    line=4, minimum=min_idx,
                )
                min_idx = j
                yield sb.decide(
                    True, f"New minimum {fmt(arr[j])} at index {j}",
                    indices=(j,), line=5, minimum=j,
                )
            else:
                yield sb.compare(
                    [j, min_idx],
                    f"Compare arr[{j}]={fmt(arr[j])} with current minimum {fmt(arr[min_idx])}: keep minimum",
                    line=4, minimum=min_idx,
                )

        if min_idx != i:
            yield sb.swap(
                "array", i, min_idx,
                f"Swap minimum {fmt(arr[min_idx])} into index {i} (was {fmt(arr[i])})",
                line=6,
            )
        sb.mark("sorted", i)
        yield sb.build(
            StepKind.SELECT,
            f"{fmt(arr[i])} is fixed at index {i}",
            indices=(i,),
            line=1,
        )

    yield _finish(sb, n, line=7)


# ---------------------------------------------------------------------------
# Insertion sort
# ---------------------------------------------------------------------------
def insertion_sort(values: List[float]) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(array=list(values), key=None)
    arr = sb.state["array"]

    for i in range(1, n):
        key = arr[i]
        sb.set("key", key)
        yield sb.build(
            StepKind.SELECT,
            f"Take key {fmt(key)} from index {i}; arr[0..{i - 1}] is sorted so far",
            indices=(i,),
            highlights={"key": i},
            line=2,
        )

        j = i - 1
        while j >= 0:
            if arr[j] > key:
                yield sb.compare(
                    [j, j + 1],
                    f"arr[{j}]={fmt(arr[j])} > key {fmt(key)}: shift it right",
                    line=4, key=j + 1,
                )
                sb.set_cell("array", j + 1, arr[j])
                yield sb.build(
                    StepKind.ASSIGN,
                    f"Shift {fmt(arr[j])} from index {j} to {j + 1}",
                    indices=(j, j + 1),
                    highlights={"key": j},
                    line=5,
                )
                j -= 1
            else:
                yield sb.compare(
                    [j, j + 1],
                    f"arr[{j}]={fmt(arr[j])} ≤ key {fmt(key)}: stop scanning",
                    line=4, key=j + 1,
                )
                break

        if j + 1 != i:
            sb.set_cell("array", j + 1, key)
            yield sb.build(
                StepKind.ASSIGN,
                f"Insert key {fmt(key)} at index {j + 1}",
                indices=(j + 1,),
                line=7,
            )

    sb.set("key", None)
    yield _finish(sb, n, line=8)
