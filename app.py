# app.py: JSON surface over the generator
from __future__ import annotations

import random
from typing import Any, Dict, List, Optional

from flask import Flask, Response, jsonify, request

from errors import RetriesExhausted
from models import GenerationConfig
from render import render_grid
from shapes import BOARD_TEMPLATES, PIECE_DEFS, PIECE_TIERS
from solver.exact_cover import count_solutions
from solver.orchestrator import generate

MAX_COUNT_LIMIT = 1000
MAX_GRID_SIDE = 8
MAX_PIECES = 7

app = Flask(__name__)


@app.after_request
def _no_cache(resp):
    # every puzzle is freshly generated
    if request.path.startswith("/api/puzzle"):
        resp.headers["Cache-Control"] = "no-store, max-age=0"
    return resp


def _merge_like_mapping() -> Dict[str, Any]:
    merged: Dict[str, Any] = {}
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        merged.update(payload)
    for k, v in request.args.to_dict(flat=False).items():
        merged.setdefault(k, v)
    return merged


def _as_int(v: Any) -> Optional[int]:
    if isinstance(v, list):
        v = v[0] if v else None
    try:
        return int(float(v))
    except Exception:
        return None


def _rng_from(data: Dict[str, Any]) -> Optional[random.Random]:
    seed = _as_int(data.get("seed"))
    return random.Random(seed) if seed is not None else None


@app.route("/api/shapes")
def shapes_catalog():
    return jsonify(
        {
            "shapes": {name: [{"x": x, "y": y} for x, y in s] for name, s in PIECE_DEFS.items()},
            "tiers": {tier: list(names) for tier, names in PIECE_TIERS.items()},
            "boards": {
                name: {"rows": t["rows"], "cols": t["cols"], "cutouts": [list(c) for c in t["cutouts"]]}
                for name, t in BOARD_TEMPLATES.items()
            },
        }
    )


@app.route("/api/puzzle", methods=["GET", "POST"])
def puzzle():
    data = _merge_like_mapping()
    cfg = GenerationConfig.from_mapping(data)
    try:
        result = generate(cfg, rng=_rng_from(data))
    except RetriesExhausted as e:
        return jsonify({"ok": False, "reason": str(e), "config": cfg.to_dict()}), 503

    fmt = request.args.get("format", "")
    if fmt == "text":
        return Response(render_grid(result.target_grid, result.pieces) + "\n", mimetype="text/plain")
    body = result.to_dict()
    body["ok"] = True
    return jsonify(body)


def _parse_solution_request(payload: Any) -> Optional[Dict[str, Any]]:
    if not isinstance(payload, dict):
        return None
    grid = payload.get("targetGrid")
    names = payload.get("pieces")
    if not isinstance(grid, list) or not grid or not all(isinstance(r, list) for r in grid):
        return None
    if not isinstance(names, list) or len(names) > MAX_PIECES:
        return None
    if len(grid) > MAX_GRID_SIDE:
        return None
    try:
        rows: List[List[int]] = [[int(c) for c in r] for r in grid]
    except Exception:
        return None
    width = len(rows[0])
    if width > MAX_GRID_SIDE or any(len(r) != width for r in rows):
        return None
    if not all(isinstance(n, str) and n in PIECE_DEFS for n in names):
        return None
    limit = _as_int(payload.get("limit"))
    if limit is None:
        limit = 10
    return {"grid": rows, "pieces": list(names), "limit": max(1, min(MAX_COUNT_LIMIT, limit))}


@app.route("/api/solutions", methods=["POST"])
def solutions():
    parsed = _parse_solution_request(request.get_json(silent=True))
    if parsed is None:
        return jsonify({"ok": False, "reason": "expected targetGrid and catalog piece names"}), 400
    found = count_solutions(parsed["grid"], parsed["pieces"], parsed["limit"])
    return jsonify({"ok": True, "count": found, "limit": parsed["limit"], "capped": found >= parsed["limit"]})


if __name__ == "__main__":
    app.run(debug=False)
