"""
FileController - Handles design JSON encoding, loading and file I/O.

File dialog interaction is the responsibility of the view layer.
Recent files tracking uses QSettings for cross-session persistence.
"""

import json
import logging
import math
import os
import random
import string
import time
from numbers import Real
from pathlib import Path
from typing import List, Optional

from models.circuit import CircuitModel
from models.component import ComponentData, parse_component_type
from models.validation import LOAD_FAILED, ValidationError
from models.wire import WireData, WirePoint
from PyQt6.QtCore import QSettings

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10
SETTINGS_ORG = "SchematicEditor"
SETTINGS_APP = "Schematic Editor"
RECENT_DESIGNS_KEY = "designs/recent"

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def _is_number(value) -> bool:
    """True for finite real numbers that fit in a float; bools are rejected."""
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def validate_circuit_data(data) -> None:
    """
    Validate JSON structure before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    Wire points may reference component IDs that are not in the file; such
    references are dropped when the design is re-keyed.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid circuit object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "type", "position"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        parse_component_type(comp["type"])
        pos = comp["position"]
        if not isinstance(pos, dict) or "x" not in pos or "y" not in pos:
            raise ValueError(f"Component '{comp['id']}' has invalid position data.")
        if not _is_number(pos["x"]) or not _is_number(pos["y"]):
            raise ValueError(f"Component '{comp['id']}' position values must be numeric.")
        if "rotation" in comp and not _is_number(comp["rotation"]):
            raise ValueError(f"Component '{comp['id']}' rotation must be numeric.")

    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        if not isinstance(wire.get("points"), list):
            raise ValueError(f"Wire #{i + 1} is missing a 'points' list.")
        for point in wire["points"]:
            if not isinstance(point, dict) or not _is_number(point.get("x")) or not _is_number(point.get("y")):
                raise ValueError(f"Wire #{i + 1} has a point without numeric x/y.")


def generate_import_id(prefix: str, timestamp: int, index: int) -> str:
    """Build '<prefix>-<timestamp>-<index>-<9 random base36 chars>'."""
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=9))
    return f"{prefix}-{timestamp}-{index}-{suffix}"


def rekey_design(data: dict, timestamp: Optional[int] = None) -> CircuitModel:
    """
    Build a CircuitModel from validated file data with fresh IDs.

    Every component and wire gets a new ID. Wire points are remapped through
    the old -> new component mapping; references with no mapping are
    dropped. All coordinates are snapped to the grid.
    """
    if timestamp is None:
        timestamp = int(time.time() * 1000)

    model = CircuitModel()
    id_mapping: dict[str, str] = {}

    for index, comp_data in enumerate(data["components"]):
        component = ComponentData.from_dict(comp_data)
        new_id = generate_import_id(component.component_type.value, timestamp, index)
        id_mapping[str(comp_data["id"])] = new_id
        component.component_id = new_id
        model.add_component(component)

    for index, wire_data in enumerate(data["wires"]):
        points = []
        for point_data in wire_data["points"]:
            old_ref = point_data.get("componentId")
            new_ref = id_mapping.get(str(old_ref)) if old_ref is not None else None
            points.append(WirePoint(point_data["x"], point_data["y"], new_ref).snapped())
        model.add_wire(
            WireData(
                wire_id=generate_import_id("wire", timestamp, index),
                points=points,
                is_free_path=bool(wire_data.get("isFreePath", False)),
            )
        )

    return model


class FileController:
    """
    Manages design serialization and file persistence.

    When attached to a CircuitController, loads go through its history so
    that loading a file can be undone.
    """

    def __init__(self, model: Optional[CircuitModel] = None, circuit_ctrl=None):
        self.model = model or CircuitModel()
        self.circuit_ctrl = circuit_ctrl
        self.current_file: Optional[Path] = None

    def get_circuit_json(self) -> str:
        """Serialize the current design (components, wires, version) to JSON text."""
        return json.dumps(self.model.to_dict(), indent=2, ensure_ascii=False)

    def load_design(self, text) -> bool:
        """
        Replace the current design with the one encoded in text.

        A malformed file leaves the document untouched and publishes a
        single error finding.

        Returns:
            True if the design was loaded.
        """
        try:
            data = json.loads(text)
            validate_circuit_data(data)
            new_model = rekey_design(data)
        except (ValueError, TypeError, KeyError, OverflowError) as e:
            logger.warning("Error loading design: %s", e)
            if self.circuit_ctrl:
                self.circuit_ctrl.set_validation_results([ValidationError.error(LOAD_FAILED)])
            return False

        if self.circuit_ctrl:
            self.circuit_ctrl.replace_design(new_model)
        else:
            self.model.restore(new_model)

        logger.info(
            "Loaded design with %d component(s) and %d wire(s)",
            len(self.model.components),
            len(self.model.wires),
        )
        return True

    def new_circuit(self) -> None:
        """Clear the design and reset file state."""
        if self.circuit_ctrl:
            self.circuit_ctrl.clear_design()
        else:
            self.model.clear()
        self.current_file = None

    def save_circuit(self, filepath) -> None:
        """
        Save the design to a JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        filepath.write_text(self.get_circuit_json(), encoding="utf-8")
        self._set_current_file(filepath, "design_saved")

    def load_circuit(self, filepath) -> bool:
        """
        Load a design from a JSON file.

        Returns:
            True if the file held a valid design.

        Raises:
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        text = filepath.read_text(encoding="utf-8")
        if not self.load_design(text):
            return False
        self._set_current_file(filepath, "design_opened")
        return True

    def _set_current_file(self, filepath: Path, event: str) -> None:
        self.current_file = filepath
        self.remember_design(filepath)
        if self.circuit_ctrl:
            self.circuit_ctrl._notify(event, filepath)

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "Schematic Editor") -> str:
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base

    # --- Recently opened designs (persisted per user) ---

    @staticmethod
    def _settings() -> QSettings:
        return QSettings(SETTINGS_ORG, SETTINGS_APP)

    def _store_recent(self, settings: QSettings, paths: List[str]) -> None:
        settings.setValue(RECENT_DESIGNS_KEY, paths)
        if self.circuit_ctrl:
            self.circuit_ctrl._notify("recent_designs_changed", list(paths))

    def get_recent_files(self) -> List[str]:
        """
        Design files saved or opened recently, newest first.

        Entries whose file no longer exists are pruned from the settings.
        """
        settings = self._settings()
        stored = settings.value(RECENT_DESIGNS_KEY, [])
        if not isinstance(stored, list):
            stored = []

        existing = [p for p in stored if os.path.exists(p)]
        if len(existing) != len(stored):
            self._store_recent(settings, existing)
        return existing

    def remember_design(self, filepath) -> None:
        """Put a design file at the head of the recent list, capped at MAX_RECENT_FILES."""
        path_str = str(Path(filepath).absolute())
        recent = [p for p in self.get_recent_files() if p != path_str]
        self._store_recent(self._settings(), [path_str, *recent][:MAX_RECENT_FILES])

    def clear_recent_files(self) -> None:
        self._store_recent(self._settings(), [])
