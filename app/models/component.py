"""
ComponentData - Pure Python data model for schematic components.

This module contains no Qt dependencies. All positions are represented as
tuples (x, y) in grid units rather than QPointF.

Component types are the lowercase keys used in saved design files:
'resistor', 'capacitor', 'inductor', 'voltage_source', 'ac_source',
'dc_source', 'ground', 'diode', 'transistor', 'led', 'switch', 'bulb', 'text'
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .grid import snap_point


class ComponentType(str, Enum):
    """Closed set of placeable symbol kinds."""

    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    VOLTAGE_SOURCE = "voltage_source"
    AC_SOURCE = "ac_source"
    DC_SOURCE = "dc_source"
    GROUND = "ground"
    DIODE = "diode"
    TRANSISTOR = "transistor"
    LED = "led"
    SWITCH = "switch"
    BULB = "bulb"
    TEXT = "text"


# Palette key that arms the wire tool; never a component type
WIRE_TOOL = "wire"

COMPONENT_TYPES = [t.value for t in ComponentType]

# Types that count as a voltage source for reachability
SOURCE_TYPES = frozenset({ComponentType.VOLTAGE_SOURCE, ComponentType.AC_SOURCE, ComponentType.DC_SOURCE})

# Default display labels per component type
DEFAULT_VALUES = {
    ComponentType.INDUCTOR: "1mH",
}

# Terminal offsets per component type, relative to the component position
# before rotation. Every offset lies on the grid.
TERMINAL_GEOMETRY = {
    ComponentType.RESISTOR: [(-40, 0), (40, 0)],
    ComponentType.CAPACITOR: [(-20, 0), (20, 0)],
    ComponentType.INDUCTOR: [(-40, 0), (40, 0)],
    ComponentType.VOLTAGE_SOURCE: [(-20, 0), (20, 0)],
    ComponentType.AC_SOURCE: [(-20, 0), (20, 0)],
    ComponentType.DC_SOURCE: [(-20, 0), (20, 0)],
    ComponentType.GROUND: [(0, -20)],
    ComponentType.DIODE: [(-20, 0), (20, 0)],
    ComponentType.TRANSISTOR: [(-20, 0), (20, -20), (20, 20)],  # Base, Collector, Emitter
    ComponentType.LED: [(-20, 0), (20, 0)],
    ComponentType.SWITCH: [(-20, 0), (20, 0)],
    ComponentType.BULB: [(0, 20), (0, -20)],
    ComponentType.TEXT: [],
}


def parse_component_type(raw) -> ComponentType:
    """
    Convert a type key to a ComponentType.

    Raises:
        ValueError: If the key is the wire tool or not a known symbol.
    """
    if raw == WIRE_TOOL:
        raise ValueError("'wire' is a tool, not a placeable component type.")
    try:
        return ComponentType(raw)
    except ValueError:
        raise ValueError(f"Unknown component type {raw!r}. Valid types: {', '.join(COMPONENT_TYPES)}") from None


def default_value_for(component_type: ComponentType, value: Optional[str] = None) -> str:
    """Caller-supplied value wins, then the per-type default, then empty."""
    if value:
        return value
    return DEFAULT_VALUES.get(component_type, "")


def terminal_offsets(component_type: ComponentType, rotation: int = 0) -> list[tuple[float, float]]:
    """
    Return terminal offsets for a symbol after rotation.

    Rotation is clockwise in screen coordinates (y grows downward), matching
    the renderer's rotate() transform.
    """
    rad = math.radians(rotation)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)

    offsets = []
    for tx, ty in TERMINAL_GEOMETRY[component_type]:
        new_x = round(tx * cos_a - ty * sin_a, 6)
        new_y = round(tx * sin_a + ty * cos_a, 6)
        # Normalise -0.0 from the rounding above
        offsets.append((new_x + 0.0, new_y + 0.0))
    return offsets


@dataclass
class ComponentData:
    """
    Pure Python data class representing a placed schematic symbol.

    The model treats a component as a positioned, rotated point with an
    identity. Terminal positions are derived from the symbol geometry.
    """

    component_id: str
    component_type: ComponentType
    position: tuple[int, int]  # (x, y) in grid units, always snapped
    rotation: int = 0  # degrees; the UI only produces multiples of 90
    value: Optional[str] = None

    def get_terminal_count(self) -> int:
        return len(TERMINAL_GEOMETRY[self.component_type])

    def get_terminal_positions(self) -> list[tuple[float, float]]:
        """Return terminal positions in absolute coordinates."""
        x, y = self.position
        return [(x + dx, y + dy) for dx, dy in terminal_offsets(self.component_type, self.rotation)]

    def is_source(self) -> bool:
        return self.component_type in SOURCE_TYPES

    def is_ground(self) -> bool:
        return self.component_type == ComponentType.GROUND

    def to_dict(self) -> dict:
        """Serialize component to the design file format."""
        data = {
            "id": self.component_id,
            "type": self.component_type.value,
            "position": {"x": self.position[0], "y": self.position[1]},
            "rotation": self.rotation,
        }
        if self.value is not None:
            data["value"] = self.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from the design file format.

        The position is snapped to the grid so loaded parts honour the
        placement invariant even if the file was edited by hand.
        """
        pos = data["position"]
        return cls(
            component_id=data["id"],
            component_type=parse_component_type(data["type"]),
            position=snap_point(pos["x"], pos["y"]),
            rotation=int(data.get("rotation", 0)),
            value=data.get("value"),
        )

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.component_id!r}, type={self.component_type.value!r}, "
            f"value={self.value!r}, pos={self.position}, rot={self.rotation})"
        )
