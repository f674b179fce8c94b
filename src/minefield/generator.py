"""
Mine layout generation.

Mines are placed only once the first cell has been chosen, so that cell
can be kept out of the candidate pool.
"""
import logging
import random
from typing import Dict, FrozenSet, Optional, Tuple

from .config import BoardConfig
from .errors import InvalidConfiguration
from .geometry import is_valid_index, neighbors_of

logger = logging.getLogger(__name__)

MineLayout = FrozenSet[int]
AdjacencyCounts = Dict[int, int]


def generate(
    config: BoardConfig,
    safe_index: int,
    rng: Optional[random.Random] = None,
) -> Tuple[MineLayout, AdjacencyCounts]:
    """
    Place mines at random, keeping ``safe_index`` clear.

    Exactly ``config.mines`` distinct cells are drawn uniformly without
    replacement from every cell except ``safe_index``. The safe cell's own
    count may still be non-zero.

    Args:
        config: Board dimensions and mine count.
        safe_index: Cell that must not hold a mine.
        rng: Random source; the module-level generator if omitted.

    Returns:
        Tuple of (mine indices, adjacency count for every non-mine cell).

    Raises:
        InvalidConfiguration: If the mine count leaves no safe cell or the
            safe index is off the board.
    """
    width, height = config.width, config.height
    total = width * height
    if config.mines > total - 1:
        raise InvalidConfiguration(
            f"Cannot place {config.mines} mines on {total} cells with a safe first cell"
        )
    if not is_valid_index(safe_index, width, height):
        raise InvalidConfiguration(f"Safe index {safe_index} is off the board")

    rng = rng or random
    candidates = [index for index in range(total) if index != safe_index]
    mines = frozenset(rng.sample(candidates, config.mines))
    counts = count_adjacent_mines(mines, width, height)

    logger.debug(
        "Placed %d mines on %dx%d board, safe cell %d",
        len(mines), width, height, safe_index,
    )
    return mines, counts


def count_adjacent_mines(
    mines: FrozenSet[int], width: int, height: int
) -> AdjacencyCounts:
    """Count mine neighbours for every non-mine cell."""
    counts = {}
    for index in range(width * height):
        if index in mines:
            continue
        counts[index] = sum(
            1 for neighbor in neighbors_of(index, width, height) if neighbor in mines
        )
    return counts
