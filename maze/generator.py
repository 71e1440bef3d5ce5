"""Growing-tree spanning tree generation over the polar grid.

Frontier selection mixes "newest" (long corridors) with "random"
(branching); neighbor choice is a weighted best pick with jitter.
"""
import logging
from typing import NamedTuple

from shared.types import Node
from maze.constants import (
    BASE_WEIGHT, TURN_PENALTY, INWARD_BONUS, OUTWARD_PENALTY,
    OUTWARD_PENALTY_MIN_DIFFICULTY, JITTER, MIN_WEIGHT,
)
from maze.grid import PolarGrid, neighbors
from maze.rng import SeededRandom

logger = logging.getLogger(__name__)

IN, OUT, SIDE = "IN", "OUT", "SIDE"


class DifficultyParams(NamedTuple):
    branch_prob: float
    inertia_weight: float
    inward_bonus: float


class TreeResult(NamedTuple):
    """Spanning tree over a grid.

    ``nodes`` carry the final visited flags and parent indices; ``edges``
    lists (parent, child) arena indices in creation order.
    """
    nodes: list[Node]
    edges: list[tuple[int, int]]
    entry_dir: dict[int, str]


def difficulty_params(difficulty: int) -> DifficultyParams:
    """branchProb 0.10..0.42, inertia 440..200 for difficulty 1..5."""
    return DifficultyParams(
        branch_prob=0.02 + 0.08 * difficulty,
        inertia_weight=500.0 - 60.0 * difficulty,
        inward_bonus=INWARD_BONUS,
    )


def direction(grid: PolarGrid, frm: int, to: int) -> str:
    """Directional class of the move frm -> to."""
    r0, r1 = grid.nodes[frm].r, grid.nodes[to].r
    if r1 < r0:
        return IN
    if r1 > r0:
        return OUT
    return SIDE


def candidate_weight(dir_: str, prev_dir: str | None, difficulty: int,
                     params: DifficultyParams, jitter: float) -> float:
    """Weight of one unvisited neighbor; *jitter* is a draw in [0, 1)."""
    w = BASE_WEIGHT
    if prev_dir is not None:
        if prev_dir == dir_:
            w += params.inertia_weight
        else:
            w -= TURN_PENALTY
    if dir_ == IN:
        w += params.inward_bonus
    if difficulty > OUTWARD_PENALTY_MIN_DIFFICULTY and dir_ == OUT:
        w -= OUTWARD_PENALTY
    w += jitter * JITTER
    return max(MIN_WEIGHT, w)


def grow_tree(grid: PolarGrid, difficulty: int, rng: SeededRandom) -> TreeResult:
    """Grow a spanning tree from the root until the frontier is empty.

    Ties between equal weights go to the earliest candidate in neighbor
    order (CW, CCW, inward, outward).
    """
    params = difficulty_params(difficulty)
    n = len(grid.nodes)
    visited = [False] * n
    parent: list[int | None] = [None] * n
    entry_dir: dict[int, str] = {}
    edges: list[tuple[int, int]] = []

    visited[0] = True
    active = [0]
    while active:
        if rng.next() < params.branch_prob:
            pos = rng.choice_index(len(active))
        else:
            pos = len(active) - 1
        current = active[pos]

        candidates = [nb for nb in neighbors(grid, current) if not visited[nb]]
        if not candidates:
            del active[pos]
            continue

        prev_dir = entry_dir.get(current)
        best, best_dir, best_w = None, None, None
        for nb in candidates:
            d = direction(grid, current, nb)
            w = candidate_weight(d, prev_dir, difficulty, params, rng.next())
            if best_w is None or w > best_w:
                best, best_dir, best_w = nb, d, w

        visited[best] = True
        parent[best] = current
        entry_dir[best] = best_dir
        edges.append((current, best))
        active.append(best)

    nodes = [node._replace(visited=visited[i], parent=parent[i])
             for i, node in enumerate(grid.nodes)]
    logger.debug("grew tree: %d edges over %d nodes", len(edges), n)
    return TreeResult(nodes, edges, entry_dir)
