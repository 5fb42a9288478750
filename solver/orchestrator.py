# Orchestrator: bounded retry loop around placement, tightness, holes and verification
from __future__ import annotations

import logging
import random
import time
from typing import Any, Callable, Dict, List, Optional, Union

from attempt_log import emit
from config import CFG
from errors import GenerationError, PlacementExhausted, RetriesExhausted, TooLoose
from models import GenerationConfig, Puzzle, PuzzlePiece
from shapes import build_board
from solver.exact_cover import count_solutions
from solver.holes import inject_holes
from solver.placement import place_pieces, select_pieces
from solver.verify import resolve_effective_transform, verify_puzzle

Counter = Callable[..., int]


def _coerce_config(maybe: Union[GenerationConfig, Dict[str, Any], None]) -> GenerationConfig:
    if isinstance(maybe, GenerationConfig):
        return maybe
    return GenerationConfig.from_mapping(maybe if isinstance(maybe, dict) else {})


def looseness_cap(num_pieces: int) -> Optional[int]:
    """Solution cap for the tightness filter, or None when the filter is off."""
    if num_pieces < CFG.TIGHTNESS_MIN_PIECES:
        return None
    if num_pieces <= 6:
        return CFG.LOOSE_CAP_6
    return CFG.LOOSE_CAP_7


def _resolve_counter(backend: Optional[str]) -> Counter:
    name = (backend or CFG.TIGHTNESS_BACKEND or "backtrack").strip().lower()
    if name == "cp_sat":
        from solver.cp_sat import count_solutions_cp

        def _cp_counter(grid, pieces, limit):
            return count_solutions_cp(grid, pieces, limit, max_seconds=CFG.CP_MAX_SECONDS)

        return _cp_counter
    return count_solutions


def _check_tightness(grid: List[List[int]], pieces: List[PuzzlePiece], counter: Counter) -> Optional[int]:
    cap = looseness_cap(len(pieces))
    if cap is None:
        return None
    found = counter(grid, pieces, cap + 1)
    if found > cap:
        raise TooLoose(found, cap)
    return found


def _assign_start_poses(pieces: List[PuzzlePiece], rng: random.Random) -> None:
    for p in pieces:
        p.start_rotation = rng.randrange(4)
        p.start_flipped = rng.random() < 0.5
        p.effective_rotation, p.effective_flipped = resolve_effective_transform(
            p.original_shape,
            p.start_rotation,
            p.start_flipped,
            p.solution_rotation,
            p.solution_flipped,
        )


def _attempt(cfg: GenerationConfig, rng: random.Random, counter: Counter, attempt: int) -> Puzzle:
    grid = build_board(cfg.board_rows, cfg.board_cols, cfg.irregular_shape_name)
    names = select_pieces(cfg.num_pieces, cfg.asymmetric_bias, rng)
    pieces = place_pieces(grid, names, rng)
    _check_tightness(grid, pieces, counter)
    holes = inject_holes(grid, cfg.num_holes, rng)
    verify_puzzle(grid, pieces)
    _assign_start_poses(pieces, rng)
    return Puzzle(
        target_grid=grid,
        board_rows=len(grid),
        board_cols=len(grid[0]) if grid else 0,
        pieces=pieces,
        holes=holes,
        attempts=attempt,
    )


def generate(
    config: Union[GenerationConfig, Dict[str, Any], None],
    *,
    rng: Optional[random.Random] = None,
    max_attempts: Optional[int] = None,
    backend: Optional[str] = None,
) -> Puzzle:
    """Build a verified puzzle, retrying discarded attempts up to the configured bound.

    Placement dead-ends, loose boards and failed self-checks each throw away the
    attempt and start over from a blank grid.  When the bound is reached the call
    raises :class:`RetriesExhausted` carrying the config; nothing partial is ever
    returned and parameters are never relaxed here.
    """
    cfg = _coerce_config(config)
    rng = rng or random.Random()
    limit = CFG.MAX_ATTEMPTS if max_attempts is None else int(max_attempts)
    counter = _resolve_counter(backend)

    t0 = time.time()
    last_reason: Optional[str] = None
    discarded: Dict[str, int] = {}
    attempt = 0
    while attempt < limit:
        attempt += 1
        try:
            puzzle = _attempt(cfg, rng, counter, attempt)
        except GenerationError as e:
            last_reason = e.reason
            discarded[e.reason] = discarded.get(e.reason, 0) + 1
            # placement dead-ends are routine; only log the interesting discards
            if not isinstance(e, PlacementExhausted):
                emit("Attempt discarded", attempt=attempt, reason=e.reason, detail=str(e))
            continue

        emit(
            "Puzzle generated",
            attempts=attempt,
            pieces=len(puzzle.pieces),
            targets=puzzle.target_count,
            holes=len(puzzle.holes),
            board=f"{puzzle.board_rows}x{puzzle.board_cols}",
            duration=f"{time.time() - t0:.3f}s",
        )
        return puzzle

    emit(
        "Generation failed",
        level=logging.WARNING,
        attempts=attempt,
        config=cfg.to_dict(),
        discarded=discarded,
        duration=f"{time.time() - t0:.3f}s",
    )
    raise RetriesExhausted(cfg, attempt, last_reason)


__all__ = ["generate", "looseness_cap"]
