"""
Controllers for the schematic editor.

This package contains controller classes that orchestrate operations
between the design model and views using an observer pattern. Only the
file controller touches Qt (QSettings for the recent files list).
"""

from .circuit_controller import CircuitController
from .file_controller import FileController, validate_circuit_data
from .simulation_controller import SimulationController, SimulationResult
from .undo_manager import UndoManager
from .wire_tool import WireTool, WireToolState

__all__ = [
    "CircuitController",
    "SimulationController",
    "SimulationResult",
    "FileController",
    "validate_circuit_data",
    "UndoManager",
    "WireTool",
    "WireToolState",
]
