# solver/placement.py
import random
from typing import Dict, List, Optional, Sequence, Tuple

from errors import PlacementExhausted
from models import PuzzlePiece
from shapes import COLORS, PIECE_DEFS, PIECE_TIERS, Shape, TARGET, unique_orientations
from validation import can_place, place, touches

# (x, y, rotation, flipped, oriented shape)
Candidate = Tuple[int, int, int, bool, Shape]


def select_pieces(
    num_pieces: int,
    asymmetric_bias: float,
    rng: random.Random,
    available: Optional[Sequence[str]] = None,
) -> List[str]:
    """Draw ``num_pieces`` shape names, leaning towards the hard tier as the bias grows.

    Each roll picks hard below ``bias``, medium below ``bias + 0.3`` and easy
    otherwise, falling through easy → medium → hard when a tier runs dry.  Chosen
    names leave every pool so repeats only happen once the catalog is exhausted.
    """
    shapes = list(available) if available is not None else list(PIECE_DEFS.keys())
    pools: Dict[str, List[str]] = {
        tier: [n for n in names if n in shapes] for tier, names in PIECE_TIERS.items()
    }
    for pool in pools.values():
        rng.shuffle(pool)

    selected: List[str] = []
    for i in range(max(0, int(num_pieces))):
        roll = rng.random()
        if roll < asymmetric_bias and pools["hard"]:
            pool = pools["hard"]
        elif roll < asymmetric_bias + 0.3 and pools["medium"]:
            pool = pools["medium"]
        elif pools["easy"]:
            pool = pools["easy"]
        elif pools["medium"]:
            pool = pools["medium"]
        else:
            pool = pools["hard"]

        if not pool:
            pool = [s for s in shapes if s not in selected]
            if not pool:
                pool = list(shapes)  # duplicates as a last resort

        name = pool.pop(0) if pool else shapes[i % len(shapes)]
        selected.append(name)

        for tier_pool in pools.values():
            if name in tier_pool:
                tier_pool.remove(name)

    return selected


def candidate_placements(grid: List[List[int]], base: Shape, rng: random.Random, require_contact: bool) -> List[Candidate]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    orientations = unique_orientations(base)
    rng.shuffle(orientations)
    out: List[Candidate] = []
    for rotation, flipped, oriented in orientations:
        for y in range(rows):
            for x in range(cols):
                if not can_place(grid, oriented, x, y):
                    continue
                if require_contact and not touches(grid, oriented, x, y, TARGET):
                    continue
                out.append((x, y, rotation, flipped, oriented))
    return out


def place_pieces(grid: List[List[int]], names: Sequence[str], rng: random.Random) -> List[PuzzlePiece]:
    """Grow a connected target region on ``grid`` one piece at a time.

    Mutates ``grid`` (EMPTY → TARGET) and returns the pieces with their solution
    anchors; start poses are filled in later.  Raises :class:`PlacementExhausted`
    as soon as a piece has nowhere to go.
    """
    pieces: List[PuzzlePiece] = []
    for i, name in enumerate(names):
        base = PIECE_DEFS[name]
        cands = candidate_placements(grid, base, rng, require_contact=(i > 0))
        if not cands:
            raise PlacementExhausted(name, i)
        x, y, rotation, flipped, oriented = rng.choice(cands)
        place(grid, oriented, x, y, TARGET)
        pieces.append(
            PuzzlePiece(
                id=i,
                shape_name=name,
                original_shape=base,
                color=COLORS[i % len(COLORS)],
                solution_x=x,
                solution_y=y,
                solution_rotation=rotation,
                solution_flipped=flipped,
            )
        )
    return pieces


__all__ = ["select_pieces", "candidate_placements", "place_pieces"]
