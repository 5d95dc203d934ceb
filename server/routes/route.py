"""
Purpose: Route endpoint - land routes computed server-side for clients.
Dependencies: core/pathfinding/a_star.py, core/hex/grid.py, core/config.py, flask.
Ext Hooks: Cache grids by id instead of posting them each time.
Server Only: Rules enforcement.
"""
import logging
from flask import Blueprint, request, jsonify
from core.config import RouterConfig
from core.hex.grid import HexGrid
from core.pathfinding.a_star import Router, InvalidEndpointError

log = logging.getLogger(__name__)

bp = Blueprint('route', __name__)


def _cell(value, name):
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ValueError(f"'{name}' must be a [q, r] pair")
    return (int(value[0]), int(value[1]))


@bp.route("/api/route", methods=["POST"])
def handle_route():
    data = request.get_json(silent=True)
    if not data or 'start' not in data or 'end' not in data or 'grid' not in data:
        return jsonify({"error": "Invalid data: need grid, start and end"}), 400

    try:
        start = _cell(data['start'], 'start')
        end = _cell(data['end'], 'end')
        max_range = data.get('range')
        if max_range is not None:
            max_range = int(max_range)
        grid = HexGrid.from_dict(data['grid'])
        config = RouterConfig.from_dict(data.get('weights'))
        player = data.get('player')
        hash(player)  # lists / objects cannot name a player
    except (KeyError, TypeError, ValueError) as e:
        log.warning("Rejected route request: %s", e)
        return jsonify({"error": str(e)}), 400

    try:
        result = Router(grid, config).find_route(start, end, max_range, player)
    except InvalidEndpointError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify({
        "path": [list(cell) for cell in result.path],
        "cost": result.cost,
        "found": result.found,
    })


@bp.route("/api/health", methods=["GET"])
def health():
    return jsonify({"status": "ok"})
