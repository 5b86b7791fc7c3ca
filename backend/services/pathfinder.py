"""
A* direction search for computer-controlled snakes.

The search runs on the four-connected grid without wraparound: cells on
opposite edges are not neighbours, even though snakes physically wrap.
Only the first step of the shortest path is returned.
"""

import heapq
import itertools
import logging
from typing import Callable, Dict, List, Optional, Tuple

from domain.constants import DIRECTION_VECTORS
from domain.grid import Cell, Grid

logger = logging.getLogger(__name__)


class MinPriorityQueue:
    """
    Min-heap keyed by (priority, insertion order).

    Equal priorities pop in the order they were pushed, which makes the
    chosen path deterministic when several shortest paths exist.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, Cell]] = []
        self._counter = itertools.count()

    def push(self, priority: int, item: Cell) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop(self) -> Cell:
        return heapq.heappop(self._heap)[2]

    def __len__(self) -> int:
        return len(self._heap)


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(
    grid: Grid,
    start: Cell,
    goal: Cell,
    is_blocked: Callable[[Cell], bool],
) -> Optional[List[Cell]]:
    """
    Return the shortest path from start to goal (both inclusive), or None.

    Blocked and out-of-bounds cells are never expanded; the start cell is
    never tested against `is_blocked`.
    """
    if start == goal:
        return [start]

    frontier = MinPriorityQueue()
    frontier.push(manhattan(start, goal), start)
    came_from: Dict[Cell, Cell] = {}
    cost_so_far: Dict[Cell, int] = {start: 0}

    while frontier:
        current = frontier.pop()
        if current == goal:
            path = [current]
            while current != start:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path

        for _, nxt in grid.neighbors(current):
            if is_blocked(nxt):
                continue
            new_cost = cost_so_far[current] + 1
            if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                cost_so_far[nxt] = new_cost
                came_from[nxt] = current
                frontier.push(new_cost + manhattan(nxt, goal), nxt)

    return None


def direction_between(a: Cell, b: Cell) -> str:
    """Direction of the unit step from cell a to its neighbour b."""
    step = (b[0] - a[0], b[1] - a[1])
    for direction, vector in DIRECTION_VECTORS.items():
        if vector == step:
            return direction
    raise ValueError(f"Cells {a} and {b} are not neighbours.")


def compute_direction(
    start: Cell,
    goal: Cell,
    is_blocked: Callable[[Cell], bool],
    current_direction: str,
    width: int,
    height: int,
) -> str:
    """
    Pick the first step of a shortest path from start to goal.

    Args:
        start: cell the snake's head is in
        goal: target cell (the food)
        is_blocked: predicate for cells the snake must not enter
        current_direction: heading returned unchanged when there is nothing to do
        width, height: board dimensions

    Returns:
        The direction of the first step, or current_direction when start == goal
        or when no path exists.
    """
    if start == goal:
        return current_direction

    path = find_path(Grid(width, height), start, goal, is_blocked)
    if path is None:
        logger.debug("No path from %s to %s, holding %s", start, goal, current_direction)
        return current_direction

    return direction_between(path[0], path[1])
