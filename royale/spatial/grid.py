"""Spatial indexing for collision candidate queries."""

import math
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Tuple

from royale.config.combat import GRID_CELL_RADII
from royale.entities.actor import Actor

Cell = Tuple[int, int]

# Half of the 3x3 neighbourhood: visiting only these from every cell
# reaches each adjacent cell pair exactly once.
_FORWARD_OFFSETS: Tuple[Cell, ...] = ((1, 0), (-1, 1), (0, 1), (1, 1))


def cell_size_for(base_radius: float, max_effective_radius: float) -> float:
    """Cell size wide enough that any colliding pair sits in adjacent cells."""
    return max(GRID_CELL_RADII * base_radius, 2.0 * max_effective_radius, 1.0)


class SpatialGrid:
    """
    Uniform grid over the arena, rebuilt from scratch every tick.

    Divides the arena into square cells and buckets living actors by the
    cell their centre falls in. Any two actors whose centres are closer
    than one cell size land in the same or adjacent cells, so collision
    checks only need to look at the 3x3 block around each cell instead of
    every pair in the arena.
    """

    def __init__(self, width: float, height: float, cell_size: float = 150.0):
        """
        Initialize the spatial grid.

        Args:
            width: Width of the arena in pixels
            height: Height of the arena in pixels
            cell_size: Initial size of each grid cell in pixels
        """
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.cols = 1
        self.rows = 1
        self._resize(cell_size)

        # Grid storage: (col, row) -> actors in insertion order
        self.grid: Dict[Cell, List[Actor]] = defaultdict(list)

        # Actor id -> cell for neighbour lookups
        self.actor_cells: Dict[str, Cell] = {}

    def _resize(self, cell_size: float) -> None:
        self.cell_size = cell_size
        self.cols = max(1, math.ceil(self.width / cell_size))
        self.rows = max(1, math.ceil(self.height / cell_size))

    def _get_cell(self, x: float, y: float) -> Cell:
        """Get the grid cell coordinates for a position."""
        col = max(0, min(self.cols - 1, int(x / self.cell_size)))
        row = max(0, min(self.rows - 1, int(y / self.cell_size)))
        return (col, row)

    def clear(self) -> None:
        """Remove every actor from the grid."""
        self.grid.clear()
        self.actor_cells.clear()

    def rebuild(self, actors: Iterable[Actor], cell_size: float) -> None:
        """Rebuild the grid from the given living actors.

        Args:
            actors: Actors to index; dead ones are skipped
            cell_size: Cell size for this tick
        """
        self.clear()
        if cell_size != self.cell_size:
            self._resize(cell_size)

        for actor in actors:
            if not actor.alive:
                continue
            cell = self._get_cell(actor.pos.x, actor.pos.y)
            self.grid[cell].append(actor)
            self.actor_cells[actor.actor_id] = cell

    def __len__(self) -> int:
        return len(self.actor_cells)

    def occupied_cells(self) -> List[Cell]:
        """Occupied cells in row-major order."""
        return sorted(self.grid.keys(), key=lambda cell: (cell[1], cell[0]))

    def candidate_pairs(self) -> Iterator[Tuple[Actor, Actor]]:
        """Yield every unordered pair of actors in the same or adjacent cells.

        Each pair is produced exactly once. Order is deterministic: cells in
        row-major order, then actors in insertion order.
        """
        grid = self.grid
        for cell in self.occupied_cells():
            bucket = grid[cell]
            count = len(bucket)

            for i in range(count):
                a = bucket[i]
                for j in range(i + 1, count):
                    yield a, bucket[j]

            col, row = cell
            for dc, dr in _FORWARD_OFFSETS:
                other = grid.get((col + dc, row + dr))
                if not other:
                    continue
                for a in bucket:
                    for b in other:
                        yield a, b

    def neighbors(self, actor: Actor) -> List[Actor]:
        """Other actors in the 3x3 block of cells around ``actor``."""
        cell = self.actor_cells.get(actor.actor_id)
        if cell is None:
            cell = self._get_cell(actor.pos.x, actor.pos.y)

        col, row = cell
        result: List[Actor] = []
        for r in range(row - 1, row + 2):
            for c in range(col - 1, col + 2):
                for other in self.grid.get((c, r), ()):
                    if other is not actor:
                        result.append(other)
        return result
