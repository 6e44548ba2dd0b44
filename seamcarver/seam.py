"""
Seam computation and removal.

Three interchangeable approaches, selected by SeamMethod:
1. DP: optimal seam from the cumulative minimum-energy table
2. Greedy: fast walk on raw energy, no lookahead (not optimal)
3. Shortest path: Dijkstra on a layered pixel graph (same optimum as DP)

Every method is written for vertical seams. A horizontal seam is the
vertical seam of the transposed energy map: entry j of that result is the
row of the removed pixel in column j.
"""

import heapq
import logging
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import torch

from .errors import DimensionError

logger = logging.getLogger(__name__)

DIRECTIONS = ('vertical', 'horizontal')


class SeamMethod(str, Enum):
    """Seam finding strategy."""

    DP = 'dp'
    GREEDY = 'greedy'
    SHORTEST_PATH = 'shortest_path'

    @classmethod
    def parse(cls, method: Union['SeamMethod', str]) -> 'SeamMethod':
        """Accept an enum member or its (case-insensitive) string value."""
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).lower())
        except ValueError:
            choices = ', '.join(m.value for m in cls)
            raise ValueError(f"Invalid method: {method!r}. Must be one of: {choices}") from None


def _check_direction(direction: str):
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def _as_energy(energy) -> torch.Tensor:
    energy = torch.as_tensor(energy, dtype=torch.float64)
    if energy.dim() != 2:
        raise ValueError(f"Energy map must be 2-D, got shape {tuple(energy.shape)}")
    if energy.shape[0] < 1 or energy.shape[1] < 1:
        raise DimensionError(f"Energy map must be at least 1x1, got {tuple(energy.shape)}")
    return energy


def _argmin(values: Sequence[float]) -> int:
    # First occurrence wins on ties
    return min(range(len(values)), key=values.__getitem__)


def _best_neighbor(row: Sequence[float], j: int) -> int:
    """Lowest of row[j], row[j-1], row[j+1]; ties resolve in that order."""
    best = j
    if j > 0 and row[j - 1] < row[best]:
        best = j - 1
    if j < len(row) - 1 and row[j + 1] < row[best]:
        best = j + 1
    return best


# ---------------------------------------------------------------------------
# Dynamic programming
# ---------------------------------------------------------------------------

def cumulative_energy(energy: torch.Tensor) -> torch.Tensor:
    """
    Cumulative minimum energy table for vertical seams.

    M[0, j] = E[0, j]
    M[i, j] = E[i, j] + min(M[i-1, j-1], M[i-1, j], M[i-1, j+1])

    Neighbors outside the image are ignored.

    Args:
        energy: Energy map (H, W)

    Returns:
        Cumulative cost table (H, W), float64
    """
    energy = _as_energy(energy)
    H, W = energy.shape

    M = energy.clone()
    for i in range(1, H):
        M_prev = M[i - 1]
        M_left = torch.full((W,), float('inf'), dtype=M.dtype, device=M.device)
        M_left[1:] = M_prev[:-1]
        M_right = torch.full((W,), float('inf'), dtype=M.dtype, device=M.device)
        M_right[:-1] = M_prev[1:]

        M[i] = energy[i] + torch.minimum(torch.minimum(M_left, M_prev), M_right)

    return M


def _vertical_dp(energy: torch.Tensor) -> List[int]:
    table = cumulative_energy(energy).tolist()
    H = len(table)

    seam = [0] * H
    j = _argmin(table[-1])
    seam[-1] = j

    # Walk back up: the cheapest parent of an optimal cell lies on an optimal path
    for i in range(H - 2, -1, -1):
        j = _best_neighbor(table[i], j)
        seam[i] = j

    return seam


# ---------------------------------------------------------------------------
# Greedy
# ---------------------------------------------------------------------------

def _vertical_greedy(energy: torch.Tensor) -> List[int]:
    rows = energy.tolist()

    j = _argmin(rows[0])
    seam = [j]
    for row in rows[1:]:
        j = _best_neighbor(row, j)
        seam.append(j)

    return seam


# ---------------------------------------------------------------------------
# Shortest path
# ---------------------------------------------------------------------------

def _layered_graph_path(rows: List[List[float]]) -> Optional[List[int]]:
    """
    Dijkstra from a virtual source to a virtual sink over the pixel graph.

    Node (i, j) has id i * W + j. The source (-1) reaches every first-row
    node at that node's energy, every node reaches its three lower
    neighbors at the destination's energy, and every last-row node reaches
    the sink (H * W) at zero cost.

    Returns:
        Column per row along the cheapest path, or None if the sink
        was never reached.
    """
    H, W = len(rows), len(rows[0])
    source, sink = -1, H * W

    def edges(node: int):
        if node == source:
            for k in range(W):
                yield k, rows[0][k]
            return
        i, j = divmod(node, W)
        if i == H - 1:
            yield sink, 0.0
            return
        below = rows[i + 1]
        for k in range(max(0, j - 1), min(W, j + 2)):
            yield (i + 1) * W + k, below[k]

    dist: Dict[int, float] = {source: 0.0}
    parent: Dict[int, int] = {}
    visited = set()
    heap: List[Tuple[float, int]] = [(0.0, source)]

    while heap:
        d, node = heapq.heappop(heap)
        if node in visited:
            continue
        visited.add(node)
        if node == sink:
            break
        for nxt, weight in edges(node):
            nd = d + weight
            if nd < dist.get(nxt, float('inf')):
                dist[nxt] = nd
                parent[nxt] = node
                heapq.heappush(heap, (nd, nxt))

    if sink not in parent:
        return None

    path = []
    node = parent[sink]
    while node != source:
        path.append(node % W)
        node = parent[node]
    path.reverse()
    return path


def _vertical_shortest_path(energy: torch.Tensor) -> List[int]:
    rows = energy.tolist()
    path = _layered_graph_path(rows)

    if path is None or len(path) != len(rows):
        found = 'no path' if path is None else f"a path of {len(path)} nodes"
        logger.warning("Shortest-path search found %s for %d rows; "
                       "falling back to the DP seam", found, len(rows))
        return _vertical_dp(energy)

    return path


# ---------------------------------------------------------------------------
# Public seam finding API
# ---------------------------------------------------------------------------

_VERTICAL_FINDERS: Dict[SeamMethod, Callable[[torch.Tensor], List[int]]] = {
    SeamMethod.DP: _vertical_dp,
    SeamMethod.GREEDY: _vertical_greedy,
    SeamMethod.SHORTEST_PATH: _vertical_shortest_path,
}


def find_seam(energy: torch.Tensor, direction: str = 'vertical',
              method: Union[SeamMethod, str] = SeamMethod.DP) -> torch.Tensor:
    """
    Compute a minimal-energy seam with the selected method.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'
        method: SeamMethod or its string value ('dp', 'greedy', 'shortest_path')

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    finder = _VERTICAL_FINDERS[SeamMethod.parse(method)]
    _check_direction(direction)
    energy = _as_energy(energy)

    if direction == 'horizontal':
        # Rows of energy.T are the columns of energy, so entry j of the
        # vertical result is the row to remove in column j
        energy = energy.t()

    return torch.tensor(finder(energy), dtype=torch.long)


def dp_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """Optimal seam via dynamic programming."""
    return find_seam(energy, direction, SeamMethod.DP)


def greedy_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Greedy seam: start at the lowest first-row pixel and follow the lowest
    raw-energy neighbor. Cheap but can be far from optimal.
    """
    return find_seam(energy, direction, SeamMethod.GREEDY)


def shortest_path_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """Optimal seam via Dijkstra on the layered pixel graph."""
    return find_seam(energy, direction, SeamMethod.SHORTEST_PATH)


def validate_seam(seam, shape: Tuple[int, int], direction: str = 'vertical') -> torch.Tensor:
    """
    Check a seam against an (H, W) grid.

    Raises:
        DimensionError: wrong length or an index outside the grid

    Returns:
        The seam as a long tensor
    """
    _check_direction(direction)
    H, W = shape
    length, bound = (H, W) if direction == 'vertical' else (W, H)

    seam = torch.as_tensor(seam, dtype=torch.long).flatten()
    if seam.numel() != length:
        raise DimensionError(
            f"{direction.capitalize()} seam has length {seam.numel()}, expected {length}")
    if length and (seam.min() < 0 or seam.max() >= bound):
        raise DimensionError(
            f"{direction.capitalize()} seam index out of range [0, {bound}): "
            f"min={seam.min().item()}, max={seam.max().item()}")
    return seam


def seam_cost(energy: torch.Tensor, seam, direction: str = 'vertical') -> float:
    """Total energy of the pixels on a seam."""
    energy = _as_energy(energy)
    seam = validate_seam(seam, tuple(energy.shape), direction)

    if direction == 'vertical':
        values = energy[torch.arange(energy.shape[0]), seam]
    else:
        values = energy[seam, torch.arange(energy.shape[1])]
    return values.sum().item()


# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------

def remove_seam(image: torch.Tensor, seam, direction: str = 'vertical') -> torch.Tensor:
    """
    Remove a seam from an image.

    Pixels before the seam index keep their position, pixels after it
    shift by one. The input image is not modified.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices
        direction: 'vertical' or 'horizontal'

    Returns:
        Carved image with one column (vertical) or row (horizontal) removed

    Raises:
        DimensionError: seam does not fit the image, or the image has
            only one column/row left in the carving direction
    """
    if image.dim() == 2:
        # Grayscale
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    C, H, W = image.shape
    seam = validate_seam(seam, (H, W), direction)

    if direction == 'vertical':
        if W < 2:
            raise DimensionError("Cannot remove a vertical seam from a 1-pixel-wide image")
        carved = torch.empty(C, H, W - 1, dtype=image.dtype, device=image.device)

        for i, col in enumerate(seam.tolist()):
            carved[:, i, :col] = image[:, i, :col]
            carved[:, i, col:] = image[:, i, col + 1:]

    else:
        if H < 2:
            raise DimensionError("Cannot remove a horizontal seam from a 1-pixel-high image")
        carved = torch.empty(C, H - 1, W, dtype=image.dtype, device=image.device)

        for j, row in enumerate(seam.tolist()):
            carved[:, :row, j] = image[:, :row, j]
            carved[:, row:, j] = image[:, row + 1:, j]

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved
