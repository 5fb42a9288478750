from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from config import CFG
from shapes import Shape, TARGET, count_cells, transform


def _to_int(x: Any) -> Optional[int]:
    try:
        return int(float(x))
    except Exception:
        return None


def _to_float(x: Any) -> Optional[float]:
    try:
        return float(x)
    except Exception:
        return None


def _first(mapping: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in mapping and mapping[k] is not None:
            v = mapping[k]
            # query-string style mappings carry lists
            if isinstance(v, (list, tuple)):
                v = v[0] if v else None
            return v
    return None


@dataclass(frozen=True)
class GenerationConfig:
    num_pieces: int
    board_rows: int
    board_cols: int
    num_holes: int = 0
    asymmetric_bias: float = 0.0
    irregular_shape_name: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "GenerationConfig":
        """Build a config from camelCase or snake_case keys.

        Values that cannot be coerced fall back to the configured defaults; range
        checking is left to the generator, where bad values simply fail.
        """
        data = data or {}
        n = _to_int(_first(data, "numPieces", "num_pieces"))
        rows = _to_int(_first(data, "boardRows", "board_rows"))
        cols = _to_int(_first(data, "boardCols", "board_cols"))
        holes = _to_int(_first(data, "numHoles", "num_holes"))
        bias = _to_float(_first(data, "asymmetricBias", "asymmetric_bias"))
        irregular = _first(
            data, "irregularShapeName", "irregularShape", "irregular_shape_name"
        )
        return cls(
            num_pieces=CFG.DEFAULT_PIECES if n is None else n,
            board_rows=CFG.DEFAULT_ROWS if rows is None else rows,
            board_cols=CFG.DEFAULT_COLS if cols is None else cols,
            num_holes=0 if holes is None else holes,
            asymmetric_bias=0.0 if bias is None else bias,
            irregular_shape_name=(str(irregular) if irregular else None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "numPieces": self.num_pieces,
            "boardRows": self.board_rows,
            "boardCols": self.board_cols,
            "numHoles": self.num_holes,
            "asymmetricBias": self.asymmetric_bias,
            "irregularShapeName": self.irregular_shape_name,
        }


@dataclass
class PuzzlePiece:
    id: int
    shape_name: str
    original_shape: Shape
    color: str
    solution_x: int
    solution_y: int
    solution_rotation: int
    solution_flipped: bool
    start_rotation: int = 0
    start_flipped: bool = False
    effective_rotation: int = 0
    effective_flipped: bool = False

    @property
    def shape(self) -> Shape:
        # Players receive the base shape, never the solution pose.
        return self.original_shape

    @property
    def solution_shape(self) -> Shape:
        return transform(self.original_shape, self.solution_rotation, self.solution_flipped)

    @property
    def start_shape(self) -> Shape:
        return transform(self.original_shape, self.start_rotation, self.start_flipped)

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.solution_x + x, self.solution_y + y) for x, y in self.solution_shape]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "shapeName": self.shape_name,
            "originalShape": [{"x": x, "y": y} for x, y in self.original_shape],
            "shape": [{"x": x, "y": y} for x, y in self.shape],
            "color": self.color,
            "solutionX": self.solution_x,
            "solutionY": self.solution_y,
            "solutionRotation": self.solution_rotation,
            "solutionFlipped": self.solution_flipped,
            "startRotation": self.start_rotation,
            "startFlipped": self.start_flipped,
            "effectiveRotation": self.effective_rotation,
            "effectiveFlipped": self.effective_flipped,
        }


@dataclass
class Puzzle:
    target_grid: List[List[int]]
    board_rows: int
    board_cols: int
    pieces: List[PuzzlePiece]
    holes: List[Tuple[int, int]] = field(default_factory=list)
    attempts: int = 1

    @property
    def target_count(self) -> int:
        return count_cells(self.target_grid, TARGET)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetGrid": [list(row) for row in self.target_grid],
            "boardRows": self.board_rows,
            "boardCols": self.board_cols,
            "pieces": [p.to_dict() for p in self.pieces],
            "holes": [{"x": x, "y": y} for x, y in self.holes],
            "attempts": self.attempts,
        }
