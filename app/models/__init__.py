"""
Pure Python data models for the schematic editor.

This package contains Qt-free data classes that represent the design
document. All models use only Python standard library types (no PyQt6
dependencies).
"""

from .circuit import FILE_FORMAT_VERSION, CircuitModel
from .component import (
    COMPONENT_TYPES,
    DEFAULT_VALUES,
    SOURCE_TYPES,
    TERMINAL_GEOMETRY,
    WIRE_TOOL,
    ComponentData,
    ComponentType,
    terminal_offsets,
)
from .grid import GRID_SIZE, snap_point, snap_value
from .validation import ValidationError
from .wire import WireData, WirePoint

__all__ = [
    "CircuitModel",
    "FILE_FORMAT_VERSION",
    "ComponentData",
    "ComponentType",
    "COMPONENT_TYPES",
    "DEFAULT_VALUES",
    "SOURCE_TYPES",
    "TERMINAL_GEOMETRY",
    "WIRE_TOOL",
    "terminal_offsets",
    "GRID_SIZE",
    "snap_point",
    "snap_value",
    "ValidationError",
    "WireData",
    "WirePoint",
]
