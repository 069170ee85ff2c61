"""
WireTool - State machine for interactive wire placement.

This module contains no Qt dependencies and never touches the design
document. It tracks the in-flight gesture and hands finished point lists
back to the CircuitController, which owns insertion and history.

Two mutually exclusive gestures:

    Terminal drag:  IDLE -> DRAGGING(origin) -> IDLE
    Free path:      IDLE -> DRAWING([p0]) -> DRAWING([p0, ..., pn]) -> IDLE

In free-path mode every click appends a point. The path is committed
either by the explicit commit (Enter) once two or more points exist, or by
a finishing click that appends its point and commits in one step.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from models.wire import WirePoint

logger = logging.getLogger(__name__)

PointLike = Union[WirePoint, tuple[float, float]]


class WireToolState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DRAWING = "drawing"


@dataclass
class DraggingWire:
    """Origin terminal plus the live preview endpoint of a terminal drag."""

    from_component_id: str
    from_terminal: WirePoint
    to: WirePoint


def as_point(point: PointLike, component_id: Optional[str] = None) -> WirePoint:
    """Coerce a WirePoint or (x, y) tuple to a grid-snapped WirePoint."""
    if isinstance(point, WirePoint):
        owner = component_id if component_id is not None else point.component_id
        return WirePoint(point.x, point.y, owner).snapped()
    x, y = point
    return WirePoint(x, y, component_id).snapped()


class WireTool:
    """Tracks the wire tool flag and the gesture currently in progress."""

    def __init__(self):
        self.wire_mode = False
        self.dragging: Optional[DraggingWire] = None
        self.points: list[WirePoint] = []
        self.is_drawing = False

    @property
    def state(self) -> WireToolState:
        if self.dragging is not None:
            return WireToolState.DRAGGING
        if self.is_drawing:
            return WireToolState.DRAWING
        return WireToolState.IDLE

    def reset(self) -> None:
        """Drop any gesture in progress without changing the tool flag."""
        self.dragging = None
        self.points = []
        self.is_drawing = False

    def toggle_mode(self) -> bool:
        """Flip the wire tool flag and reset both gestures. Returns the new flag."""
        self.wire_mode = not self.wire_mode
        self.reset()
        logger.debug("Wire tool %s", "armed" if self.wire_mode else "disarmed")
        return self.wire_mode

    # --- Terminal drag ---

    def start_drag(self, component_id: str, terminal: PointLike) -> None:
        """Begin dragging from a terminal; abandons any free path being drawn."""
        origin = as_point(terminal, component_id)
        self.points = []
        self.is_drawing = False
        self.dragging = DraggingWire(component_id, origin, WirePoint(origin.x, origin.y))

    def update_drag(self, point: PointLike) -> bool:
        """Move the preview endpoint. Returns False when no drag is active."""
        if self.dragging is None:
            return False
        self.dragging.to = as_point(point)
        return True

    def finish_drag(self, component_id: str, terminal: PointLike) -> Optional[list[WirePoint]]:
        """
        End the drag on a target terminal.

        Returns:
            The two endpoints for a new wire, or None when there was no drag
            or the target is the origin component (the drag is cancelled).
        """
        if self.dragging is None:
            return None

        origin = self.dragging
        self.dragging = None

        if origin.from_component_id == component_id:
            logger.debug("Discarded self-connection on %s", component_id)
            return None

        return [origin.from_terminal, as_point(terminal, component_id)]

    def cancel_drag(self) -> None:
        self.dragging = None

    # --- Free path ---

    def add_point(self, point: PointLike) -> bool:
        """
        Append a point to the free path.

        Returns:
            True if this point started a new path (IDLE -> DRAWING).
            False if it extended the current path or was ignored because
            the tool is off or a terminal drag is in progress.
        """
        if not self.wire_mode or self.dragging is not None:
            return False

        snapped = as_point(point)
        if not self.is_drawing:
            self.points = [snapped]
            self.is_drawing = True
            return True

        self.points.append(snapped)
        return False

    def can_commit(self) -> bool:
        return self.is_drawing and len(self.points) >= 2

    def take_path(self) -> Optional[list[WirePoint]]:
        """Return the accumulated points and go idle, or None if fewer than two."""
        if not self.can_commit():
            return None
        points = self.points
        self.points = []
        self.is_drawing = False
        return points

    def cancel_path(self) -> None:
        self.points = []
        self.is_drawing = False
