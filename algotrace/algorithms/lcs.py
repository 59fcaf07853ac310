"""
lcs.py — Longest Common Subsequence
====================================
Bottom-up table dp[i][j] = LCS length of first[:i] and second[:j].

One step per cell:
  • SELECT – first[i-1] == second[j-1]:  dp[i][j] = dp[i-1][j-1] + 1
  • ASSIGN – otherwise:                 dp[i][j] = max(dp[i-1][j], dp[i][j-1])

Then BACKTRACK steps from dp[n][m]: diagonal on a match, otherwise up
when dp[i-1][j] ≥ dp[i][j-1] (ties go up), else left.

Working state:  {"table": [[…]], "lcs": str, "length": int | None}
"""

from typing import Any, Dict, Generator, List, Mapping

from algotrace.algorithms import validation
from algotrace.algorithms.step import Step, StepBuilder, StepKind
from algotrace.errors import InvalidInputError


PSEUDOCODE: List[str] = [
    "def LCS(s1, s2):",                                       # 0
    "    dp ← table[n+1][m+1] of 0",                          # 1
    "    for i in 1 … n:",                                    # 2
    "        for j in 1 … m:",                                # 3
    "            if s1[i-1] == s2[j-1]:",                     # 4
    "                dp[i][j] ← dp[i-1][j-1] + 1",            # 5
    "            else: dp[i][j] ← max(dp[i-1][j], dp[i][j-1])",  # 6
    "    i, j ← n, m",                                        # 7
    "    while i > 0 and j > 0:",                             # 8
    "        if s1[i-1] == s2[j-1]: prepend s1[i-1]; i--, j--",  # 9
    "        elif dp[i-1][j] ≥ dp[i][j-1]: i--",              # 10
    "        else: j--",                                      # 11
    "    return dp[n][m]",                                    # 12
]


def prepare(raw: Mapping[str, Any]) -> Dict[str, Any]:
    first = validation.require(raw, "first")
    second = validation.require(raw, "second")
    for key, value in (("first", first), ("second", second)):
        if not isinstance(value, str):
            raise InvalidInputError(f"'{key}' must be a string, got {value!r}")
        validation.bounded(value, key)
    return {"first": first, "second": second}


def lcs(first: str, second: str) -> Generator[Step, None, None]:
    n, m = len(first), len(second)
    if n == 0 or m == 0:
        return
    sb = StepBuilder(table=[[0] * (m + 1) for _ in range(n + 1)], lcs="", length=None)
    dp = sb.state["table"]

    for i in range(1, n + 1):
        for j in range(1, m + 1):
            a, b = first[i - 1], second[j - 1]
            if a == b:
                sb.set_cell("table", (i, j), dp[i - 1][j - 1] + 1)
                yield sb.decide(
                    True,
                    f"'{a}' == '{b}': dp[{i}][{j}] = dp[{i - 1}][{j - 1}] + 1 = {dp[i][j]}",
                    indices=(i, j), line=5,
                    cell=[i, j], sources=[[i - 1, j - 1]], chars=[i - 1, j - 1],
                )
                continue

            up, left = dp[i - 1][j], dp[i][j - 1]
            source = [i - 1, j] if up >= left else [i, j - 1]
            sb.set_cell("table", (i, j), max(up, left))
            yield sb.build(
                StepKind.ASSIGN,
                f"'{a}' ≠ '{b}': dp[{i}][{j}] = max(up {up}, left {left}) = {dp[i][j]}",
                indices=(i, j),
                highlights={"cell": [i, j], "sources": [source], "chars": [i - 1, j - 1]},
                line=6,
            )

    # -- backtrack --
    sb.set("length", dp[n][m])
    yield sb.build(
        StepKind.BACKTRACK,
        f"LCS length is dp[{n}][{m}] = {dp[n][m]}; trace back to recover the subsequence",
        indices=(n, m),
        highlights={"cell": [n, m]},
        line=7,
    )

    i, j = n, m
    while i > 0 and j > 0:
        if first[i - 1] == second[j - 1]:
            sb.set("lcs", first[i - 1] + sb.state["lcs"])
            sb.mark("path", [i, j])
            message = f"'{first[i - 1]}' matches: prepend it, LCS so far '{sb.state['lcs']}'"
            cell, line = [i, j], 9
            i, j = i - 1, j - 1
        elif dp[i - 1][j] >= dp[i][j - 1]:
            sb.mark("path", [i, j])
            message = f"No match at ({i}, {j}): dp[{i - 1}][{j}] = {dp[i - 1][j]} ≥ dp[{i}][{j - 1}] = {dp[i][j - 1]}, move up"
            cell, line = [i, j], 10
            i -= 1
        else:
            sb.mark("path", [i, j])
            message = f"No match at ({i}, {j}): dp[{i}][{j - 1}] = {dp[i][j - 1]} > dp[{i - 1}][{j}] = {dp[i - 1][j]}, move left"
            cell, line = [i, j], 11
            j -= 1
        yield sb.build(
            StepKind.BACKTRACK,
            message,
            indices=tuple(cell),
            highlights={"cell": cell},
            line=line,
        )
