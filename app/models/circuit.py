"""
CircuitModel - The design document.

This module contains no Qt dependencies. It holds the components and wires
of the current design and enforces the deletion cascade: no wire may
reference a component that is not in the document.
"""

import copy
from dataclasses import dataclass, field
from typing import Optional

from .component import ComponentData
from .wire import WireData

FILE_FORMAT_VERSION = "1.0"


@dataclass
class CircuitModel:
    """
    Aggregate root holding all design state that undo/redo covers.

    Components are keyed by ID and keep insertion order; wires are an
    ordered list.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)

    # --- Component operations ---

    def add_component(self, component: ComponentData) -> None:
        """Add a component to the design."""
        self.components[component.component_id] = component

    def get_component(self, component_id: str) -> Optional[ComponentData]:
        return self.components.get(component_id)

    def remove_component(self, component_id: str) -> list[WireData]:
        """
        Remove a component and every wire that references it.

        Returns:
            The removed wires, or an empty list if the component is unknown.
        """
        if component_id not in self.components:
            return []

        del self.components[component_id]
        removed = [w for w in self.wires if w.connects_component(component_id)]
        self.wires = [w for w in self.wires if not w.connects_component(component_id)]
        return removed

    # --- Wire operations ---

    def add_wire(self, wire: WireData) -> None:
        self.wires.append(wire)

    def get_wire(self, wire_id: str) -> Optional[WireData]:
        for wire in self.wires:
            if wire.wire_id == wire_id:
                return wire
        return None

    def remove_wire(self, wire_id: str) -> Optional[WireData]:
        """Remove a wire by ID and return it, or None if it does not exist."""
        for i, wire in enumerate(self.wires):
            if wire.wire_id == wire_id:
                return self.wires.pop(i)
        return None

    def wires_for_component(self, component_id: str) -> list[WireData]:
        """Return wires with at least one point referencing the component."""
        return [w for w in self.wires if w.connects_component(component_id)]

    # --- Document operations ---

    def clear(self) -> None:
        """Clear all design data."""
        self.components.clear()
        self.wires.clear()

    def is_empty(self) -> bool:
        return not self.components and not self.wires

    def snapshot(self) -> "CircuitModel":
        """Return a deep, independent copy of the document."""
        return CircuitModel(
            components=copy.deepcopy(self.components),
            wires=copy.deepcopy(self.wires),
        )

    def restore(self, snapshot: "CircuitModel") -> None:
        """
        Replace the document content with a snapshot.

        Updates the model in place (preserving the reference so views stay
        connected). The snapshot's containers are adopted, not copied; the
        caller must not keep using it.
        """
        self.components = snapshot.components
        self.wires = snapshot.wires

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize the design to the file format."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires],
            "version": FILE_FORMAT_VERSION,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CircuitModel":
        """
        Deserialize a design, keeping the IDs found in the file.

        Loading into the editor goes through FileController.load_design,
        which re-keys IDs; this is the plain structural decoder.
        """
        model = cls()
        for comp_data in data.get("components", []):
            component = ComponentData.from_dict(comp_data)
            model.components[component.component_id] = component
        for wire_data in data.get("wires", []):
            model.wires.append(WireData.from_dict(wire_data))
        return model
