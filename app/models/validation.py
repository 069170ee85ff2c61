"""
ValidationError - Advisory findings produced by validation and simulation.

Findings are transient: every run replaces the previous list and they are
never saved or restored by undo/redo.
"""

from dataclasses import dataclass
from typing import Optional

WARNING = "warning"
ERROR = "error"

EMPTY_CIRCUIT = "Circuit is empty"
NOT_CONNECTED = "{component_type} is not connected to any other component"
NO_VOLTAGE_SOURCE = "Circuit needs at least one voltage source"
NO_GROUND = "Circuit needs at least one ground connection"
NO_COMPLETE_PATH = "No complete circuit path found between voltage source and ground"
LOAD_FAILED = "Failed to load circuit design file"


@dataclass(frozen=True)
class ValidationError:
    """A single warning or error shown in the validation panel."""

    type: str
    message: str
    component_id: Optional[str] = None

    @classmethod
    def warning(cls, message: str, component_id: Optional[str] = None) -> "ValidationError":
        return cls(WARNING, message, component_id)

    @classmethod
    def error(cls, message: str, component_id: Optional[str] = None) -> "ValidationError":
        return cls(ERROR, message, component_id)

    @property
    def is_error(self) -> bool:
        return self.type == ERROR

    def to_dict(self) -> dict:
        data = {"type": self.type, "message": self.message}
        if self.component_id is not None:
            data["componentId"] = self.component_id
        return data
