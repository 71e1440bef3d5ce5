"""Tree-to-path stitching: spanning tree -> path mini-language strings.

A junction is any tree node whose degree is not 2. Each junction-to-junction
chain becomes one sub-path (its own move-to); steps between rings are
straight lines, steps along a ring are circular arcs.
"""
from typing import NamedTuple

from shared.types import Node
from shared.geometry import wrap_angle
from shared.svg import fmt_num
from maze.constants import PATH_PRECISION


class StitchResult(NamedTuple):
    path: str
    chains: list[list[int]]   # node indices per sub-path, junction to junction


def _xy(node: Node) -> str:
    return f"{fmt_num(node.x, PATH_PRECISION)} {fmt_num(node.y, PATH_PRECISION)}"


def step_command(a: Node, b: Node, step_size: float) -> str:
    """Drawing command for the move a -> b (line across rings, arc along one)."""
    if a.r != b.r:
        return f"L {_xy(b)}"
    sweep = 1 if wrap_angle(b.theta - a.theta) > 0 else 0
    r = fmt_num(a.r * step_size, PATH_PRECISION)
    return f"A {r} {r} 0 0 {sweep} {_xy(b)}"


def tree_adjacency(edges: list[tuple[int, int]]) -> dict[int, list[int]]:
    """Undirected adjacency in edge-creation order."""
    adj: dict[int, list[int]] = {}
    for p, c in edges:
        adj.setdefault(p, []).append(c)
        adj.setdefault(c, []).append(p)
    return adj


def stitch_corridors(nodes: list[Node], edges: list[tuple[int, int]],
                     step_size: float) -> StitchResult:
    """Decompose the tree into junction-to-junction chains."""
    adj = tree_adjacency(edges)
    junctions = [idx for idx, nbrs in adj.items() if len(nbrs) != 2]
    drawn: set[tuple[int, int]] = set()
    commands, chains = [], []

    for j in junctions:
        for first in adj[j]:
            if (min(j, first), max(j, first)) in drawn:
                continue
            cmd = [f"M {_xy(nodes[j])}"]
            chain = [j]
            prev, cur = j, first
            while True:
                drawn.add((min(prev, cur), max(prev, cur)))
                cmd.append(step_command(nodes[prev], nodes[cur], step_size))
                chain.append(cur)
                nbrs = adj[cur]
                if len(nbrs) != 2:
                    break
                prev, cur = cur, (nbrs[1] if nbrs[0] == prev else nbrs[0])
            commands.append(" ".join(cmd))
            chains.append(chain)
    return StitchResult(" ".join(commands), chains)


def solution_chain(nodes: list[Node], entry_idx: int) -> list[int]:
    """Node indices from the entry cell up the parent chain to the root."""
    chain = [entry_idx]
    while nodes[chain[-1]].parent is not None:
        chain.append(nodes[chain[-1]].parent)
    return chain


def solution_path(nodes: list[Node], entry_idx: int, step_size: float) -> str:
    """One continuous sub-path from the entry cell to the root."""
    chain = solution_chain(nodes, entry_idx)
    cmd = [f"M {_xy(nodes[entry_idx])}"]
    for a, b in zip(chain, chain[1:]):
        cmd.append(step_command(nodes[a], nodes[b], step_size))
    return " ".join(cmd)
