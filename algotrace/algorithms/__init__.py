"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine can trace.

    from algotrace.algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, fn, prepare, pseudocode, tags, …),
        …
    }

Each AlgoInfo is one strategy: `prepare` validates a raw input mapping
into generator kwargs, `fn` is the generator that yields Steps through a
StepBuilder's compare / swap / decide capabilities.  Adding an algorithm
is: write the generator and its `prepare`, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Mapping, Optional

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algotrace.algorithms import sorting, search, greedy
from algotrace.algorithms.merge_sort   import merge_sort   as _merge_sort,   PSEUDOCODE as _merge_pc
from algotrace.algorithms.knapsack     import knapsack_01  as _knapsack,     PSEUDOCODE as _knap_pc,  prepare as _knap_prep
from algotrace.algorithms.lcs          import lcs          as _lcs,          PSEUDOCODE as _lcs_pc,   prepare as _lcs_prep
from algotrace.algorithms.lis          import lis          as _lis,          PSEUDOCODE as _lis_pc,   prepare as _lis_prep
from algotrace.algorithms.bfs          import bfs          as _bfs,          PSEUDOCODE as _bfs_pc,   prepare as _bfs_prep
from algotrace.algorithms.dfs          import dfs          as _dfs,          PSEUDOCODE as _dfs_pc,   prepare as _dfs_prep
from algotrace.algorithms.dijkstra     import dijkstra     as _dijkstra,     PSEUDOCODE as _dij_pc,   prepare as _dij_prep
from algotrace.algorithms.bellman_ford import bellman_ford as _bf,           PSEUDOCODE as _bf_pc,    prepare as _bf_prep
from algotrace.algorithms.step import Step


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable[..., Generator[Step, None, None]]
    prepare:           Callable[[Mapping[str, Any]], Dict[str, Any]]
    pseudocode:        List[str]              # lines for the side-panel
    tags:              List[str] = field(default_factory=list)   # e.g. ["sorting", "stable"]
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    description:       str      = ""          # one-liner for the comparison table

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key,
            "label":            self.label,
            "pseudocode":       list(self.pseudocode),
            "tags":             list(self.tags),
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    # -- sorting --
    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=sorting.bubble_sort,
        prepare=sorting.prepare, pseudocode=sorting.BUBBLE_PSEUDOCODE,
        tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swaps adjacent out-of-order pairs; the largest value bubbles to the end each pass.",
    ),

    "selection_sort": AlgoInfo(
        key="selection_sort", label="Selection Sort", fn=sorting.selection_sort,
        prepare=sorting.prepare, pseudocode=sorting.SELECTION_PSEUDOCODE,
        tags=["sorting", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Repeatedly selects the minimum of the unsorted suffix and swaps it into place.",
    ),

    "insertion_sort": AlgoInfo(
        key="insertion_sort", label="Insertion Sort", fn=sorting.insertion_sort,
        prepare=sorting.prepare, pseudocode=sorting.INSERTION_PSEUDOCODE,
        tags=["sorting", "stable", "in-place"],
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Grows a sorted prefix by shifting larger values right and dropping the key in.",
    ),

    "merge_sort": AlgoInfo(
        key="merge_sort", label="Merge Sort", fn=_merge_sort,
        prepare=sorting.prepare, pseudocode=_merge_pc,
        tags=["sorting", "stable", "divide-and-conquer"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Splits the array in halves, sorts each, and merges the sorted runs.",
    ),

    # -- searching --
    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=search.linear_search,
        prepare=search.prepare_linear, pseudocode=search.LINEAR_PSEUDOCODE,
        tags=["searching"],
        complexity_time="O(n)", complexity_space="O(1)",
        description="Checks every element in order until the target turns up.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=search.binary_search,
        prepare=search.prepare_binary, pseudocode=search.BINARY_PSEUDOCODE,
        tags=["searching", "divide-and-conquer"],
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halves a sorted window around the middle element each probe.",
    ),

    # -- dynamic programming --
    "knapsack_01": AlgoInfo(
        key="knapsack_01", label="0/1 Knapsack", fn=_knapsack,
        prepare=_knap_prep, pseudocode=_knap_pc,
        tags=["dynamic-programming", "optimisation"],
        complexity_time="O(n · W)", complexity_space="O(n · W)",
        description="Fills a value table item by item and capacity by capacity, then backtracks the picks.",
    ),

    "lcs": AlgoInfo(
        key="lcs", label="Longest Common Subsequence", fn=_lcs,
        prepare=_lcs_prep, pseudocode=_lcs_pc,
        tags=["dynamic-programming", "strings"],
        complexity_time="O(m · n)", complexity_space="O(m · n)",
        description="Builds the match-length table of two strings and walks back along it.",
    ),

    "lis": AlgoInfo(
        key="lis", label="Longest Increasing Subsequence", fn=_lis,
        prepare=_lis_prep, pseudocode=_lis_pc,
        tags=["dynamic-programming"],
        complexity_time="O(n²)", complexity_space="O(n)",
        description="Extends the best increasing run ending at each earlier element.",
    ),

    # -- greedy --
    "interval_scheduling": AlgoInfo(
        key="interval_scheduling", label="Interval Scheduling", fn=greedy.interval_scheduling,
        prepare=greedy.prepare_intervals, pseudocode=greedy.INTERVAL_PSEUDOCODE,
        tags=["greedy", "optimisation"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Takes intervals by earliest finish time whenever they do not overlap.",
    ),

    "fractional_knapsack": AlgoInfo(
        key="fractional_knapsack", label="Fractional Knapsack", fn=greedy.fractional_knapsack,
        prepare=greedy.prepare_fractional, pseudocode=greedy.FRACTIONAL_PSEUDOCODE,
        tags=["greedy", "optimisation"],
        complexity_time="O(n log n)", complexity_space="O(n)",
        description="Fills the knapsack by best value-per-weight, splitting the last item.",
    ),

    # -- graphs --
    "bfs": AlgoInfo(
        key="bfs", label="Breadth-First Search", fn=_bfs,
        prepare=_bfs_prep, pseudocode=_bfs_pc,
        tags=["graph", "unweighted", "shortest-path", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    "dfs": AlgoInfo(
        key="dfs", label="Depth-First Search", fn=_dfs,
        prepare=_dfs_prep, pseudocode=_dfs_pc,
        tags=["graph", "unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra,
        prepare=_dij_prep, pseudocode=_dij_pc,
        tags=["graph", "weighted", "shortest-path"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest node. Optimal for non-negative weights.",
    ),

    "bellman_ford": AlgoInfo(
        key="bellman_ford", label="Bellman–Ford", fn=_bf,
        prepare=_bf_prep, pseudocode=_bf_pc,
        tags=["graph", "weighted", "shortest-path", "negative-edges"],
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Handles negative edges. Detects negative cycles. Slower than Dijkstra.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
]
