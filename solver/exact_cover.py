# solver/exact_cover.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from shapes import PIECE_DEFS, Shape, TARGET, canonical_key, free_key, unique_orientations


class OrientationCache:
    """Unique normalized orientations per shape, keyed by canonical key.

    The catalog is fixed, so entries are never invalidated.  One instance can be
    shared between threads; a racing miss just computes the same tuple twice.
    """

    def __init__(self) -> None:
        self._table: Dict[Shape, Tuple[Shape, ...]] = {}
        self._lock = threading.Lock()

    def get(self, shape: Sequence[Tuple[int, int]]) -> Tuple[Shape, ...]:
        key = canonical_key(shape)
        cached = self._table.get(key)
        if cached is not None:
            return cached
        oriented = tuple(s for _rot, _flip, s in unique_orientations(key))
        with self._lock:
            return self._table.setdefault(key, oriented)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, shape: object) -> bool:
        try:
            return canonical_key(shape) in self._table  # type: ignore[arg-type]
        except Exception:
            return False


SHARED_ORIENTATIONS = OrientationCache()


@dataclass
class SearchStats:
    nodes: int = 0
    solutions: int = 0
    limit_hit: bool = False


def _as_shape(obj: Any) -> Shape:
    """Accept a PuzzlePiece-like object, a catalog name, or raw (x, y) blocks."""
    if isinstance(obj, str):
        return PIECE_DEFS[obj]
    original = getattr(obj, "original_shape", None)
    if original is not None:
        return tuple((int(x), int(y)) for x, y in original)
    if isinstance(obj, dict):
        blocks = obj.get("originalShape") or obj.get("shape")
        if blocks is None and obj.get("shapeName"):
            return PIECE_DEFS[obj["shapeName"]]
        if blocks is None:
            raise TypeError(f"Not a piece-like value: {obj!r}")
        return tuple(
            (int(b["x"]), int(b["y"])) if isinstance(b, dict) else (int(b[0]), int(b[1]))
            for b in blocks
        )
    try:
        return tuple((int(x), int(y)) for x, y in obj)
    except Exception:
        raise TypeError(f"Not a piece-like value: {obj!r}")


def count_solutions(
    target_grid: Sequence[Sequence[int]],
    pieces: Sequence[Any],
    limit: int = 10,
    *,
    cache: Optional[OrientationCache] = None,
    stats: Optional[SearchStats] = None,
) -> int:
    """Count tilings of the TARGET cells that use every piece exactly once.

    Every trial is anchored on the first uncovered target cell in row-major order,
    so each branch must cover that cell and a tiling is reached along exactly one
    path.  Pieces of the same free shape are interchangeable: copy ``k`` of a shape
    is only tried once copies ``0..k-1`` are down, so relabelled tilings are not
    counted twice.  The search stops as soon as ``limit`` is reached; a return
    value equal to ``limit`` therefore means "at least ``limit``".
    """
    if stats is None:
        stats = SearchStats()
    try:
        limit = int(limit)
    except Exception:
        limit = 0
    if limit <= 0:
        return 0

    rows = len(target_grid)
    cols = len(target_grid[0]) if rows else 0
    orients = cache if cache is not None else SHARED_ORIENTATIONS

    shapes = [_as_shape(p) for p in pieces]
    n = len(shapes)
    piece_orients: List[Tuple[Shape, ...]] = [orients.get(s) for s in shapes]
    full_mask = (1 << n) - 1

    # bit of the previous identical piece, or 0 for the first copy of a shape
    prev_same: List[int] = [0] * n
    last_by_key: Dict[Shape, int] = {}
    for i, s in enumerate(shapes):
        key = free_key(s)
        if key in last_by_key:
            prev_same[i] = 1 << last_by_key[key]
        last_by_key[key] = i

    target_cells = sum(1 for row in target_grid for c in row if c == TARGET)
    if sum(len(s) for s in shapes) != target_cells:
        return 0

    covered = [[False] * cols for _ in range(rows)]

    def _first_uncovered() -> Optional[Tuple[int, int]]:
        for y in range(rows):
            trow = target_grid[y]
            crow = covered[y]
            for x in range(cols):
                if trow[x] == TARGET and not crow[x]:
                    return x, y
        return None

    def _fits(shape: Shape, sx: int, sy: int) -> bool:
        for bx, by in shape:
            x = sx + bx
            y = sy + by
            if x < 0 or x >= cols or y < 0 or y >= rows:
                return False
            if target_grid[y][x] != TARGET or covered[y][x]:
                return False
        return True

    def _mark(shape: Shape, sx: int, sy: int, value: bool) -> None:
        for bx, by in shape:
            covered[sy + by][sx + bx] = value

    def _search(used_mask: int, budget: int) -> int:
        stats.nodes += 1
        cell = _first_uncovered()
        if cell is None:
            if used_mask == full_mask:
                stats.solutions += 1
                return 1
            return 0
        fx, fy = cell
        count = 0
        for i in range(n):
            bit = 1 << i
            if used_mask & bit:
                continue
            if prev_same[i] and not (used_mask & prev_same[i]):
                continue
            for shape in piece_orients[i]:
                for bx, by in shape:
                    sx = fx - bx
                    sy = fy - by
                    if not _fits(shape, sx, sy):
                        continue
                    _mark(shape, sx, sy, True)
                    try:
                        count += _search(used_mask | bit, budget - count)
                    finally:
                        _mark(shape, sx, sy, False)
                    if count >= budget:
                        return count
        return count

    total = _search(0, limit)
    stats.limit_hit = total >= limit
    return min(total, limit)


__all__ = ["OrientationCache", "SHARED_ORIENTATIONS", "SearchStats", "count_solutions"]
