from typing import Any, Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model as _cp

from shapes import Shape, TARGET, free_key
from solver.exact_cover import SHARED_ORIENTATIONS, OrientationCache, _as_shape


class _CountingCallback(_cp.CpSolverSolutionCallback):
    def __init__(self, limit: int):
        super().__init__()
        self.limit = limit
        self.count = 0

    def on_solution_callback(self) -> None:
        self.count += 1
        if self.count >= self.limit:
            self.StopSearch()


def _group_shapes(shapes: Sequence[Shape]) -> List[Tuple[Shape, int]]:
    groups: Dict[Shape, int] = {}
    for s in shapes:
        key = free_key(s)
        groups[key] = groups.get(key, 0) + 1
    return list(groups.items())


def build_model(
    target_grid: Sequence[Sequence[int]],
    pieces: Sequence[Any],
    *,
    cache: Optional[OrientationCache] = None,
) -> Tuple[Optional[_cp.CpModel], Dict[str, object]]:
    """Exact-cover model over the TARGET cells.

    One Boolean per distinct cell set a shape can occupy.  Identical pieces are
    grouped and placed ``multiplicity`` times, which is what makes solution counts
    agree with :func:`solver.exact_cover.count_solutions`.
    """
    rows = len(target_grid)
    cols = len(target_grid[0]) if rows else 0
    orients = cache if cache is not None else SHARED_ORIENTATIONS
    shapes = [_as_shape(p) for p in pieces]
    meta: Dict[str, object] = {"placements": 0, "groups": 0}

    targets = [(x, y) for y in range(rows) for x in range(cols) if target_grid[y][x] == TARGET]
    if sum(len(s) for s in shapes) != len(targets):
        meta["reason"] = "area_mismatch"
        return None, meta

    model = _cp.CpModel()
    covering: Dict[Tuple[int, int], List[Any]] = {cell: [] for cell in targets}
    groups = _group_shapes(shapes)
    meta["groups"] = len(groups)

    for gi, (key, multiplicity) in enumerate(groups):
        group_vars = []
        for oi, shape in enumerate(orients.get(key)):
            for sy in range(rows):
                for sx in range(cols):
                    cells = [(sx + bx, sy + by) for bx, by in shape]
                    if not all(c in covering for c in cells):
                        continue
                    var = model.NewBoolVar(f"g{gi}_o{oi}_{sx}_{sy}")
                    group_vars.append(var)
                    for c in cells:
                        covering[c].append(var)
        if not group_vars:
            meta["reason"] = "unplaceable_piece"
            return None, meta
        model.Add(sum(group_vars) == multiplicity)
        meta["placements"] = int(meta["placements"]) + len(group_vars)

    for cell, cell_vars in covering.items():
        if not cell_vars:
            meta["reason"] = "uncoverable_cell"
            return None, meta
        model.AddExactlyOne(cell_vars)

    return model, meta


def count_solutions_cp(
    target_grid: Sequence[Sequence[int]],
    pieces: Sequence[Any],
    limit: int = 10,
    *,
    max_seconds: Optional[float] = None,
    cache: Optional[OrientationCache] = None,
) -> int:
    """CP-SAT rendition of the solution counter, capped at ``limit``.

    A search cut short by ``max_seconds`` before reaching ``limit`` reports
    ``limit``: an unfinished enumeration cannot vouch for a tight board.
    """
    try:
        limit = int(limit)
    except Exception:
        limit = 0
    if limit <= 0:
        return 0

    model, _meta = build_model(target_grid, pieces, cache=cache)
    if model is None:
        return 0

    solver = _cp.CpSolver()
    solver.parameters.enumerate_all_solutions = True
    solver.parameters.num_workers = 1
    if max_seconds is not None and max_seconds > 0:
        solver.parameters.max_time_in_seconds = float(max_seconds)

    cb = _CountingCallback(limit)
    res = solver.Solve(model, cb)
    if cb.count >= limit:
        return limit
    # OPTIMAL / INFEASIBLE mean the enumeration ran to completion
    if res not in (_cp.OPTIMAL, _cp.INFEASIBLE):
        return limit
    return cb.count


__all__ = ["build_model", "count_solutions_cp"]
