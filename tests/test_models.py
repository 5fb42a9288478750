from config import CFG
from models import GenerationConfig, Puzzle, PuzzlePiece
from shapes import PIECE_DEFS


def test_from_mapping_camel_case():
    cfg = GenerationConfig.from_mapping(
        {
            "numPieces": "4",
            "boardRows": 6,
            "boardCols": 7.0,
            "numHoles": "2",
            "asymmetricBias": "0.25",
            "irregularShape": "T",
        }
    )
    assert cfg == GenerationConfig(4, 6, 7, 2, 0.25, "T")


def test_from_mapping_snake_case_and_query_lists():
    cfg = GenerationConfig.from_mapping(
        {"num_pieces": ["5"], "board_rows": ["6"], "board_cols": ["6"], "irregularShapeName": ["cross"]}
    )
    assert cfg.num_pieces == 5
    assert cfg.board_rows == 6
    assert cfg.irregular_shape_name == "cross"
    assert cfg.num_holes == 0
    assert cfg.asymmetric_bias == 0.0


def test_from_mapping_falls_back_on_bad_values():
    cfg = GenerationConfig.from_mapping({"numPieces": "many", "boardRows": None, "asymmetricBias": "x"})
    assert cfg.num_pieces == CFG.DEFAULT_PIECES
    assert cfg.board_rows == CFG.DEFAULT_ROWS
    assert cfg.board_cols == CFG.DEFAULT_COLS
    assert cfg.asymmetric_bias == 0.0
    assert GenerationConfig.from_mapping(None) == GenerationConfig.from_mapping({})


def test_config_to_dict_round_keys():
    cfg = GenerationConfig(3, 5, 5, irregular_shape_name="L")
    data = cfg.to_dict()
    assert data["irregularShapeName"] == "L"
    assert GenerationConfig.from_mapping(data) == cfg


def _piece():
    return PuzzlePiece(
        id=0,
        shape_name="L",
        original_shape=PIECE_DEFS["L"],
        color="#F92672",
        solution_x=1,
        solution_y=2,
        solution_rotation=1,
        solution_flipped=False,
        start_rotation=3,
        start_flipped=True,
    )


def test_piece_exposes_base_shape_only():
    p = _piece()
    assert p.shape == PIECE_DEFS["L"]
    assert p.solution_shape != p.shape
    # L rotated once: (0,0),(0,1),(0,2),(1,2) -> (2,0),(1,0),(0,0),(0,1)
    assert sorted(p.cells()) == [(1, 2), (1, 3), (2, 2), (3, 2)]


def test_piece_to_dict():
    data = _piece().to_dict()
    assert data["shapeName"] == "L"
    assert data["shape"] == data["originalShape"]
    assert data["originalShape"][3] == {"x": 1, "y": 2}
    assert data["solutionX"] == 1 and data["solutionY"] == 2
    assert data["startRotation"] == 3 and data["startFlipped"] is True
    assert set(data) >= {"effectiveRotation", "effectiveFlipped", "color", "id"}


def test_puzzle_to_dict():
    puzzle = Puzzle(
        target_grid=[[1, 1], [0, -1]],
        board_rows=2,
        board_cols=2,
        pieces=[],
        holes=[(1, 1)],
    )
    data = puzzle.to_dict()
    assert data["targetGrid"] == [[1, 1], [0, -1]]
    assert data["holes"] == [{"x": 1, "y": 1}]
    assert data["attempts"] == 1
    assert puzzle.target_count == 2
