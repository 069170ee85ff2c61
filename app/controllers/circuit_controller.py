"""
CircuitController - The editor store.

This module contains no Qt dependencies. It owns the CircuitModel, the
snapshot history, the wire tool and the transient view state (selection,
findings, active set), and notifies views of changes through an observer
pattern.
"""

import logging
import time
from typing import Any, Callable, Optional

from controllers.undo_manager import MAX_HISTORY_DEPTH, UndoManager
from controllers.wire_tool import DraggingWire, PointLike, WireTool, WireToolState
from models.circuit import CircuitModel
from models.component import ComponentData, default_value_for, parse_component_type
from models.grid import snap_point
from models.validation import ValidationError
from models.wire import WireData, WirePoint

logger = logging.getLogger(__name__)

# Where new components land before the user drags them
DEFAULT_POSITION = (400, 300)

_UPDATABLE_FIELDS = ("position", "rotation", "value", "component_type")


class CircuitController:
    """
    Controller for design mutations, wire drawing and undo/redo.

    Operations that reference a missing component or wire are silent
    no-ops. Views register callbacks to stay in sync.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_updated (ComponentData) - Fields of a component changed
        component_rotated (ComponentData) - A component was rotated
        component_removed (str) - A component was removed (by ID)
        wire_added (WireData) - A new wire was added
        wire_removed (str) - A wire was removed (by ID)
        design_replaced (None) - The whole document changed (undo, redo, clear, load)
        selection_changed (None) - Selected component or wire changed
        wire_tool_changed (WireToolState) - Wire tool flag or gesture changed
        wire_preview_moved (DraggingWire) - Terminal-drag preview endpoint moved
        validation_changed (list[ValidationError]) - Findings or active set replaced
        history_changed (None) - Undo/redo availability may have changed
        grid_toggled (bool) - Grid visibility changed
        design_saved (Path) - FileController wrote the design to a file
        design_opened (Path) - FileController loaded the design from a file
        recent_designs_changed (list[str]) - The recent design list was rewritten
    """

    def __init__(self, model: Optional[CircuitModel] = None, max_history: int = MAX_HISTORY_DEPTH):
        self.model = model or CircuitModel()
        self.undo_manager = UndoManager(self.model, max_depth=max_history)
        self.wire_tool = WireTool()
        self._observers: list[Callable[[str, Any], None]] = []
        self._issued_ids: set[str] = set()
        self._simulation = None
        self._files = None

        self.selected_component: Optional[str] = None
        self.selected_wire: Optional[str] = None
        self.show_grid = True
        self.validation_errors: list[ValidationError] = []
        self.active_components: set[str] = set()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Identifiers ---

    def new_id(self, prefix: str) -> str:
        """
        Generate a '<prefix>-<epoch ms>' identifier never issued before.

        A numeric suffix is added when the millisecond clock repeats.
        """
        base = f"{prefix}-{int(time.time() * 1000)}"
        candidate = base
        n = 1
        while candidate in self._issued_ids or candidate in self.model.components:
            candidate = f"{base}-{n}"
            n += 1
        self._issued_ids.add(candidate)
        return candidate

    def reserve_ids(self, ids) -> None:
        """Record externally generated IDs so they are never issued again."""
        self._issued_ids.update(ids)

    # --- History ---

    def save_to_history(self, description: str = "") -> None:
        """Snapshot the document before a mutation; clears redo history."""
        self.undo_manager.save(description)
        self._notify('history_changed', None)

    def undo(self) -> bool:
        if not self.undo_manager.undo():
            return False
        self._after_history_jump()
        return True

    def redo(self) -> bool:
        if not self.undo_manager.redo():
            return False
        self._after_history_jump()
        return True

    def can_undo(self) -> bool:
        return self.undo_manager.can_undo()

    def can_redo(self) -> bool:
        return self.undo_manager.can_redo()

    def _after_history_jump(self) -> None:
        # Selection is not restored, but it must not point at a missing item
        if self.selected_component not in self.model.components:
            self.selected_component = None
        if self.selected_wire is not None and self.model.get_wire(self.selected_wire) is None:
            self.selected_wire = None
        self._notify('design_replaced', None)
        self._notify('history_changed', None)

    # --- Selection and view flags ---

    def select_component(self, component_id: Optional[str]) -> None:
        self.selected_component = component_id
        self._notify('selection_changed', None)

    def toggle_wire_select(self, wire_id: Optional[str]) -> None:
        """Select a wire, or deselect it if it is already selected."""
        self.selected_wire = None if self.selected_wire == wire_id else wire_id
        self._notify('selection_changed', None)

    def toggle_grid(self) -> bool:
        self.show_grid = not self.show_grid
        self._notify('grid_toggled', self.show_grid)
        return self.show_grid

    # --- Component operations ---

    def add_component(self, component_type: str, value: Optional[str] = None) -> ComponentData:
        """
        Create a component at the default position and select it.

        Returns:
            The newly created ComponentData.

        Raises:
            ValueError: If component_type is not a placeable symbol.
        """
        ctype = parse_component_type(component_type)
        self.save_to_history(f"Add {ctype.value}")

        component = ComponentData(
            component_id=self.new_id(ctype.value),
            component_type=ctype,
            position=snap_point(*DEFAULT_POSITION),
            rotation=0,
            value=default_value_for(ctype, value),
        )
        self.model.add_component(component)
        self.selected_component = component.component_id
        self._notify('component_added', component)
        self._notify('selection_changed', None)
        return component

    def update_component(self, component_id: str, **updates) -> Optional[ComponentData]:
        """
        Merge fields into a component without taking a snapshot.

        Continuous drags call this on every pointer move; the gesture's
        single undo step comes from begin_component_drag().

        Accepted fields: position, rotation, value, component_type.
        A position is always re-snapped to the grid. Every field is
        converted before any is applied, so a bad field leaves the
        component untouched.
        """
        unknown = set(updates) - set(_UPDATABLE_FIELDS)
        if unknown:
            raise TypeError(f"Cannot update component field(s): {', '.join(sorted(unknown))}")

        component = self.model.components.get(component_id)
        if component is None:
            return None

        changes = {}
        if 'position' in updates:
            x, y = updates['position']
            changes['position'] = snap_point(x, y)
        if 'rotation' in updates:
            changes['rotation'] = int(updates['rotation'])
        if 'value' in updates:
            changes['value'] = updates['value']
        if 'component_type' in updates:
            changes['component_type'] = parse_component_type(updates['component_type'])

        for name, new_value in changes.items():
            setattr(component, name, new_value)

        self._notify('component_updated', component)
        return component

    def begin_component_drag(self, component_id: str) -> None:
        """Start a move gesture: one snapshot for the whole drag, then select."""
        if component_id not in self.model.components:
            return
        self.save_to_history(f"Move {component_id}")
        self.select_component(component_id)

    def delete_component(self, component_id: str) -> None:
        """Remove a component together with every wire that references it."""
        if component_id not in self.model.components:
            return

        self.save_to_history(f"Delete {component_id}")
        removed_wires = self.model.remove_component(component_id)
        for wire in removed_wires:
            if self.selected_wire == wire.wire_id:
                self.selected_wire = None
            self._notify('wire_removed', wire.wire_id)
        if self.selected_component == component_id:
            self.selected_component = None
        self.active_components.discard(component_id)
        self._notify('component_removed', component_id)

    def rotate_component(self, component_id: str) -> None:
        """Rotate a component 90 degrees clockwise as one undo step."""
        component = self.model.components.get(component_id)
        if component is None:
            return
        self.save_to_history(f"Rotate {component_id}")
        component.rotation = (component.rotation + 90) % 360
        self._notify('component_rotated', component)

    # --- Wire operations ---

    def delete_wire(self, wire_id: str) -> None:
        if self.model.get_wire(wire_id) is None:
            return
        self.save_to_history("Delete wire")
        self.model.remove_wire(wire_id)
        self.selected_wire = None
        self._notify('wire_removed', wire_id)

    def _insert_wire(self, points: list[WirePoint], is_free_path: bool) -> WireData:
        wire = WireData(wire_id=self.new_id("wire"), points=points, is_free_path=is_free_path)
        self.model.add_wire(wire)
        self._notify('wire_added', wire)
        return wire

    # --- Terminal-drag wiring ---

    @property
    def wire_mode(self) -> bool:
        return self.wire_tool.wire_mode

    @property
    def dragging_wire(self) -> Optional[DraggingWire]:
        return self.wire_tool.dragging

    @property
    def wire_points(self) -> list[WirePoint]:
        return list(self.wire_tool.points)

    @property
    def is_drawing(self) -> bool:
        return self.wire_tool.is_drawing

    def start_wire(self, component_id: str, terminal: PointLike) -> None:
        if component_id not in self.model.components:
            return
        self.wire_tool.start_drag(component_id, terminal)
        self._notify('wire_tool_changed', self.wire_tool.state)

    def update_wire(self, point: PointLike) -> None:
        if self.wire_tool.update_drag(point):
            self._notify('wire_preview_moved', self.wire_tool.dragging)

    def complete_wire(self, component_id: str, terminal: PointLike) -> Optional[WireData]:
        """
        Finish a terminal drag on another component's terminal.

        Dropping on the origin component, or on a component that does not
        exist, cancels the drag without creating a wire.
        """
        if self.wire_tool.state is not WireToolState.DRAGGING:
            return None

        if component_id not in self.model.components:
            self.cancel_wire()
            return None

        points = self.wire_tool.finish_drag(component_id, terminal)
        self._notify('wire_tool_changed', self.wire_tool.state)
        if points is None:
            return None

        self.save_to_history("Add wire")
        return self._insert_wire(points, is_free_path=False)

    def cancel_wire(self) -> None:
        self.wire_tool.cancel_drag()
        self._notify('wire_tool_changed', self.wire_tool.state)

    # --- Free-path wiring ---

    def toggle_wire_mode(self) -> bool:
        wire_mode = self.wire_tool.toggle_mode()
        self._notify('wire_tool_changed', self.wire_tool.state)
        return wire_mode

    def add_wire_point(self, point: PointLike, finish: bool = False) -> Optional[WireData]:
        """
        Click while the wire tool is armed.

        The first click snapshots history and starts a path; later clicks
        append. With finish=True the click appends its point and commits
        the path immediately.

        Returns:
            The committed wire when finish=True produced one, else None.
        """
        if not self.wire_tool.wire_mode:
            return None

        if self.wire_tool.add_point(point):
            self.save_to_history("Draw wire")
        self._notify('wire_tool_changed', self.wire_tool.state)

        if finish:
            return self.complete_wire_path()
        return None

    def complete_wire_path(self) -> Optional[WireData]:
        """Commit the accumulated path if it has at least two points."""
        points = self.wire_tool.take_path()
        if points is None:
            return None

        for point in points:
            if point.component_id is not None and point.component_id not in self.model.components:
                point.component_id = None

        self._notify('wire_tool_changed', self.wire_tool.state)
        return self._insert_wire(points, is_free_path=True)

    def cancel_wire_path(self) -> None:
        self.wire_tool.cancel_path()
        self._notify('wire_tool_changed', self.wire_tool.state)

    def handle_escape(self) -> None:
        """Escape cancels a terminal drag first, otherwise the free path."""
        if self.wire_tool.dragging is not None:
            self.cancel_wire()
        elif self.wire_tool.is_drawing:
            self.cancel_wire_path()

    # --- Whole-document operations ---

    def clear_design(self) -> None:
        """Empty the document as one undoable step."""
        self.save_to_history("Clear design")
        self.model.clear()
        self._reset_transient_state()
        self._notify('design_replaced', None)

    def replace_design(self, new_model: CircuitModel, description: str = "Load design") -> None:
        """
        Swap in a new document as one undoable step.

        The previous document is snapshotted first. Selection, wire tool
        gestures, findings and the active set are reset.
        """
        self.save_to_history(description)
        self.reserve_ids(new_model.components)
        self.reserve_ids(w.wire_id for w in new_model.wires)
        self.model.restore(new_model)
        self.wire_tool.wire_mode = False
        self._reset_transient_state()
        self.validation_errors = []
        self.active_components = set()
        self._notify('design_replaced', None)
        self._notify('validation_changed', self.validation_errors)

    def _reset_transient_state(self) -> None:
        self.selected_component = None
        self.selected_wire = None
        self.wire_tool.reset()
        self._notify('selection_changed', None)
        self._notify('wire_tool_changed', self.wire_tool.state)

    # --- Findings and active set ---

    def set_validation_results(
        self,
        findings: list[ValidationError],
        active_components: Optional[set[str]] = None,
    ) -> None:
        """Replace the findings (and optionally the active set) wholesale."""
        self.validation_errors = list(findings)
        if active_components is not None:
            self.active_components = set(active_components)
        self._notify('validation_changed', self.validation_errors)

    def clear_validation(self) -> None:
        self.set_validation_results([])

    def set_component_active(self, component_id: str, active: bool) -> None:
        if active:
            self.active_components.add(component_id)
        else:
            self.active_components.discard(component_id)
        self._notify('validation_changed', self.validation_errors)

    # --- Collaborating controllers ---

    @property
    def simulation(self):
        """Lazy SimulationController bound to this store."""
        if self._simulation is None:
            from controllers.simulation_controller import SimulationController

            self._simulation = SimulationController(self.model, self)
        return self._simulation

    @property
    def files(self):
        """Lazy FileController bound to this store."""
        if self._files is None:
            from controllers.file_controller import FileController

            self._files = FileController(self.model, self)
        return self._files

    def validate_circuit(self) -> list[ValidationError]:
        return self.simulation.validate_circuit().findings

    def simulate_circuit(self) -> set[str]:
        return self.simulation.simulate_circuit().active_components

    def get_circuit_json(self) -> str:
        return self.files.get_circuit_json()

    def load_design(self, text: str) -> bool:
        return self.files.load_design(text)
