"""
search.py — Linear & Binary Search
===================================
Linear search yields one COMPARE per index examined; binary search yields
one COMPARE per halving carrying the updated left / mid / right window.

A hit is followed by a SELECT step that records `found`.  An absent
target always ends with a REJECT step whose message says "not found"
and whose state leaves `found` as None.  For binary search that REJECT
*is* the probe that empties the window, so an absent target costs at
most ⌊log2 n⌋ + 1 steps.

Working state:
  linear:  {"array", "index", "found"}
  binary:  {"array", "left", "right", "mid", "found"}
"""

from typing import Any, Dict, Generator, List, Mapping

from algotrace.algorithms import validation
from algotrace.algorithms.step import Step, StepBuilder, fmt
from algotrace.errors import InvalidInputError


LINEAR_PSEUDOCODE: List[str] = [
    "def LinearSearch(arr, target):",             # 0
    "    for i in 0 … n-1:",                      # 1
    "        if arr[i] == target: return i",      # 2
    "    return NOT FOUND",                       # 3
]

BINARY_PSEUDOCODE: List[str] = [
    "def BinarySearch(arr, target):",             # 0
    "    left ← 0; right ← n - 1",                # 1
    "    while left ≤ right:",                    # 2
    "        mid ← ⌊(left + right) / 2⌋",         # 3
    "        if arr[mid] == target: return mid",  # 4
    "        if arr[mid] < target: left ← mid + 1",   # 5
    "        else: right ← mid - 1",              # 6
    "    return NOT FOUND",                       # 7
]


def prepare_linear(raw: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "values": validation.number_list(raw, "values"),
        "target": validation.number(validation.require(raw, "target"), "target"),
    }


def prepare_binary(raw: Mapping[str, Any]) -> Dict[str, Any]:
    kwargs = prepare_linear(raw)
    values = kwargs["values"]
    for i in range(1, len(values)):
        if values[i - 1] > values[i]:
            raise InvalidInputError(
                f"Binary search needs sorted input: values[{i - 1}]={values[i - 1]} > values[{i}]={values[i]}"
            )
    return kwargs


def linear_search(values: List[float], target: float) -> Generator[Step, None, None]:
    if not values:
        return
    sb = StepBuilder(array=list(values), index=None, found=None)

    for i, value in enumerate(values):
        sb.set("index", i)
        if value == target:
            yield sb.compare([i], f"arr[{i}]={fmt(value)} equals target {fmt(target)}", line=2)
            sb.set("found", i)
            yield sb.decide(True, f"Found {fmt(target)} at index {i}", indices=(i,), line=2, found=i)
            return
        yield sb.compare([i], f"arr[{i}]={fmt(value)} ≠ target {fmt(target)}: keep scanning", line=2)

    sb.set("index", None)
    yield sb.decide(False, f"Reached the end of the array: {fmt(target)} not found", line=3)


def binary_search(values: List[float], target: float) -> Generator[Step, None, None]:
    n = len(values)
    if n == 0:
        return
    sb = StepBuilder(array=list(values), left=0, right=n - 1, mid=None, found=None)
    left, right = 0, n - 1
    probe = 0

    while left <= right:
        mid = (left + right) // 2
        probe += 1
        value = values[mid]
        sb.set("mid", mid)
        head = f"Probe {probe}: window [{left}..{right}], middle index {mid} holds {fmt(value)}"

        if value == target:
            yield sb.compare([mid], f"{head} = target {fmt(target)}", line=4, window=[left, right], mid=mid)
            sb.set("found", mid)
            yield sb.decide(True, f"Found {fmt(target)} at index {mid}", indices=(mid,), line=4, found=mid)
            return

        if value < target:
            left = mid + 1
            outcome = f"{fmt(value)} < {fmt(target)}, search right half"
            line = 5
        else:
            right = mid - 1
            outcome = f"{fmt(value)} > {fmt(target)}, search left half"
            line = 6
        sb.set("left", left)
        sb.set("right", right)

        if left > right:
            yield sb.decide(
                False,
                f"{head}; {outcome}: window is empty, {fmt(target)} not found",
                indices=(mid,), line=7, mid=mid,
            )
            return
        yield sb.compare([mid], f"{head}; {outcome} [{left}..{right}]", line=line, window=[left, right], mid=mid)
