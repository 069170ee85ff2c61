"""
WireData - Pure Python data model for schematic wires.

This module contains no Qt dependencies. A wire is an ordered list of
grid points; endpoints snapped to a terminal carry the owning component ID.
"""

from dataclasses import dataclass, field
from typing import Optional

from .grid import snap_point


@dataclass
class WirePoint:
    """A grid point, optionally anchored to a component terminal."""

    x: int
    y: int
    component_id: Optional[str] = None

    def snapped(self) -> "WirePoint":
        x, y = snap_point(self.x, self.y)
        return WirePoint(x, y, self.component_id)

    def to_dict(self) -> dict:
        data = {"x": self.x, "y": self.y}
        if self.component_id is not None:
            data["componentId"] = self.component_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WirePoint":
        return cls(x=data["x"], y=data["y"], component_id=data.get("componentId"))


@dataclass
class WireData:
    """
    Pure Python data class representing a wire.

    Two points without is_free_path is a direct terminal-to-terminal
    connection; is_free_path marks a user-drawn polyline of two or more
    points.
    """

    wire_id: str
    points: list[WirePoint] = field(default_factory=list)
    is_free_path: bool = False

    def get_component_ids(self) -> list[str]:
        """Return component IDs referenced by this wire's points, in order, without duplicates."""
        ids = []
        for point in self.points:
            if point.component_id is not None and point.component_id not in ids:
                ids.append(point.component_id)
        return ids

    def connects_component(self, component_id: str) -> bool:
        """Check if any point of this wire references the given component."""
        return any(p.component_id == component_id for p in self.points)

    def to_dict(self) -> dict:
        """Serialize wire to the design file format."""
        data = {
            "id": self.wire_id,
            "points": [p.to_dict() for p in self.points],
        }
        if self.is_free_path:
            data["isFreePath"] = True
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        return cls(
            wire_id=data["id"],
            points=[WirePoint.from_dict(p) for p in data["points"]],
            is_free_path=bool(data.get("isFreePath", False)),
        )

    def __repr__(self) -> str:
        kind = "path" if self.is_free_path else "direct"
        ends = " -> ".join(p.component_id or f"({p.x},{p.y})" for p in self.points)
        return f"WireData({self.wire_id!r}, {kind}: {ends})"
