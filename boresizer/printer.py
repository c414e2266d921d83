import json
from typing import Any, Dict, List, Sequence, Union

from .model import BoreResult, Circle, PackingResult, TableRow


def _num(value: float) -> float:
    return round(float(value), 9)


def circle_to_dict(circle: Circle) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "name": circle.name,
        "diameter": _num(circle.diameter),
        "radius": _num(circle.radius),
        "coordinates": {"x": _num(circle.coordinates.x), "y": _num(circle.coordinates.y)},
    }
    if circle.color is not None:
        data["color"] = circle.color
    return data


def result_to_dict(result: BoreResult, include_metadata: bool = False) -> Dict[str, Any]:
    """Render ``result`` in the camelCase JSON shape.

    With ``include_metadata`` the packing outcome (``success``, ``iterations``
    and ``warnings``) is added under ``"metadata"``.
    """

    data: Dict[str, Any] = {
        "id": result.id,
        "bore": circle_to_dict(result.bore),
        "cables": [circle_to_dict(c) for c in result.cables],
        "createdAt": result.created_at,
    }
    if include_metadata:
        data["metadata"] = {
            "success": bool(result.metadata.get("success", True)),
            "iterations": int(result.metadata.get("iterations", 0)),
            "warnings": list(result.metadata.get("warnings", [])),
        }
    return data


def _cable_counts(circles: Sequence[Circle]) -> List[tuple]:
    counts: Dict[str, List[Any]] = {}
    for circle in circles:
        entry = counts.setdefault(circle.name, [circle.diameter, 0, circle.color])
        entry[1] += 1
    return [(name, diameter, count, color) for name, (diameter, count, color) in counts.items()]


def format_result(result: Union[BoreResult, PackingResult]) -> str:
    """Render a bore or packing result as a short plain-text report."""

    if isinstance(result, BoreResult):
        enclose, circles = result.bore, result.cables
        lines = [f"Result {result.id} ({result.created_at})"]
    else:
        enclose, circles = result.enclose, result.circles
        lines = [f"Packing ({'ok' if result.success else 'no feasible enclosure'}, {result.iterations} iteration(s))"]

    lines.append(f"Bore diameter: {enclose.diameter:.4f} (radius {enclose.radius:.4f})")
    lines.append(f"Cables: {len(circles)}")
    for name, diameter, count, color in _cable_counts(circles):
        suffix = f" {color}" if color else ""
        lines.append(f"  {count} x {name} (d={diameter:g}){suffix}")
    lines.append("Layout:")
    for circle in circles:
        lines.append(f"  {circle.name}: ({circle.coordinates.x:.6f}, {circle.coordinates.y:.6f}) r={circle.radius:g}")
    return "\n".join(lines)


def rows_from_json(text: str) -> List[TableRow]:
    """Parse cable rows from a JSON list or a ``{"cables": [...]}`` object."""

    payload = json.loads(text)
    if isinstance(payload, dict):
        payload = payload.get("cables", [])
    if not isinstance(payload, list):
        raise ValueError("expected a list of cable rows")
    rows = []
    for idx, item in enumerate(payload):
        if not isinstance(item, dict):
            raise ValueError(f"row {idx} is not an object")
        rows.append(TableRow.from_dict(item))
    return rows
