"""Core data structures for the packing pipeline."""

from __future__ import annotations

import numbers
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Literal, Mapping, Optional, Union

CUSTOM_CABLE = "custom"
ENCLOSE_NAME = "enclose"


class BoreInputError(ValueError):
    """Raised when caller-supplied cable rows cannot be packed."""

    code = 422


class DiameterExceededError(BoreInputError):
    """Raised when a row's diameter exceeds the configured maximum."""

    def __init__(self, diameter: float, max_diameter: float):
        super().__init__("Diameter exceeds maximum limit")
        self.diameter = diameter
        self.max_diameter = max_diameter


class NoCablesError(BoreInputError):
    """Raised when a request carries no usable cable rows."""


class TooManyCablesError(BoreInputError):
    """Raised when rows expand into more circles than allowed."""

    def __init__(self, count: int, max_circles: int):
        super().__init__(f"Exceeded maximum number of cables ({max_circles}).")
        self.count = count
        self.max_circles = max_circles


class EmptyCircleSetError(ValueError):
    """Raised when the optimizer is asked to pack zero circles."""


@dataclass(frozen=True)
class Point:
    x: float = 0.0
    y: float = 0.0


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class Circle:
    """One cable instance, or the computed enclosure."""

    name: str
    diameter: float
    radius: float
    coordinates: Point = ORIGIN
    color: Optional[str] = None

    @classmethod
    def from_diameter(cls, name: str, diameter: float, coordinates: Point = ORIGIN) -> "Circle":
        return cls(name=name, diameter=float(diameter), radius=float(diameter) / 2.0, coordinates=coordinates)

    def with_coordinates(self, x: float, y: float) -> "Circle":
        return replace(self, coordinates=Point(float(x), float(y)))

    def with_color(self, color: Optional[str]) -> "Circle":
        return replace(self, color=color)


@dataclass(frozen=True)
class Cable:
    """Named cable type with a fixed diameter, usually taken from a preset."""

    name: str
    diameter: float
    id: Optional[int] = None
    preset_id: Optional[int] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Cable":
        return cls(
            name=str(data.get("name", "")),
            diameter=_coerce_number(data.get("diameter")) or 0.0,
            id=data.get("id"),
            preset_id=data.get("presetId", data.get("preset_id")),
            category=data.get("category"),
        )


SelectedCable = Union[Cable, Literal["custom"]]


@dataclass
class TableRow:
    """One line of cable input before expansion into circles."""

    selected_cable: SelectedCable
    quantity: int = 1
    custom_name: Optional[str] = None
    custom_diameter: Optional[float] = None
    id: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return not isinstance(self.selected_cable, Cable)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TableRow":
        """Build a row from the camelCase JSON shape used by the cable table."""

        selected = data.get("selectedCable", data.get("selected_cable", CUSTOM_CABLE))
        if isinstance(selected, Mapping):
            selected_cable: SelectedCable = Cable.from_dict(selected)
        elif selected == CUSTOM_CABLE:
            selected_cable = CUSTOM_CABLE
        else:
            raise ValueError(f"invalid selectedCable {selected!r}")

        quantity = _coerce_number(data.get("quantity"))
        row_id = data.get("id")
        return cls(
            selected_cable=selected_cable,
            quantity=int(quantity) if quantity is not None else 0,
            custom_name=data.get("customName", data.get("custom_name")),
            custom_diameter=_coerce_number(data.get("customDiameter", data.get("custom_diameter"))),
            id=str(row_id) if row_id is not None else None,
        )


@dataclass
class PackingResult:
    enclose: Circle
    circles: List[Circle]
    success: bool = True
    iterations: int = 0
    warnings: List[str] = field(default_factory=list)


@dataclass
class BoreResult:
    """Packed bore ready to be handed to presentation or storage."""

    id: str
    bore: Circle
    cables: List[Circle]
    created_at: str
    metadata: Dict[str, Any] = field(default_factory=dict)


def _coerce_number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


__all__ = [
    "CUSTOM_CABLE",
    "ENCLOSE_NAME",
    "ORIGIN",
    "BoreInputError",
    "DiameterExceededError",
    "NoCablesError",
    "TooManyCablesError",
    "EmptyCircleSetError",
    "Point",
    "Circle",
    "Cable",
    "SelectedCable",
    "TableRow",
    "PackingResult",
    "BoreResult",
]
