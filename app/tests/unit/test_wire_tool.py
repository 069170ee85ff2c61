"""Tests for the wire-drawing state machine (WireTool and its store wiring).

Free-path rule: every click appends a point; the path is committed by
complete_wire_path() (Enter) once it has two or more points, or by a click
made with finish=True.
"""

import pytest
from controllers.wire_tool import WireTool, WireToolState
from models.wire import WirePoint


@pytest.fixture
def two_parts(controller):
    """Two resistors; returns (controller, first_id, second_id)."""
    a = controller.add_component("resistor")
    b = controller.add_component("resistor")
    controller.update_component(b.component_id, position=(400, 400))
    return controller, a.component_id, b.component_id


class TestTerminalDrag:
    def test_start_enters_dragging(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        assert ctrl.wire_tool.state is WireToolState.DRAGGING
        assert ctrl.dragging_wire.from_component_id == a
        assert ctrl.dragging_wire.to == WirePoint(360, 300)

    def test_update_moves_preview_only(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        wires_before = list(ctrl.model.wires)
        ctrl.update_wire((417, 355))
        assert ctrl.dragging_wire.to == WirePoint(420, 360)
        assert ctrl.model.wires == wires_before

    def test_update_when_idle_is_noop(self, controller):
        controller.update_wire((20, 20))
        assert controller.dragging_wire is None

    def test_complete_creates_direct_wire(self, two_parts):
        ctrl, a, b = two_parts
        ctrl.start_wire(a, (360, 300))
        wire = ctrl.complete_wire(b, (440, 400))

        assert wire is not None
        assert not wire.is_free_path
        assert wire.points == [WirePoint(360, 300, a), WirePoint(440, 400, b)]
        assert ctrl.model.wires == [wire]
        assert ctrl.wire_tool.state is WireToolState.IDLE

    def test_drag_created_wire_is_undoable(self, two_parts):
        ctrl, a, b = two_parts
        ctrl.start_wire(a, (360, 300))
        ctrl.complete_wire(b, (440, 400))
        ctrl.undo()
        assert ctrl.model.wires == []

    def test_self_connection_cancelled(self, two_parts):
        ctrl, a, _ = two_parts
        history = ctrl.undo_manager.get_undo_count()
        ctrl.start_wire(a, (360, 300))
        assert ctrl.complete_wire(a, (440, 300)) is None
        assert ctrl.model.wires == []
        assert ctrl.dragging_wire is None
        assert ctrl.undo_manager.get_undo_count() == history

    def test_complete_without_drag_is_noop(self, two_parts):
        ctrl, _, b = two_parts
        assert ctrl.complete_wire(b, (440, 400)) is None
        assert ctrl.model.wires == []

    def test_complete_on_missing_component_cancels(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        assert ctrl.complete_wire("ghost", (0, 0)) is None
        assert ctrl.dragging_wire is None

    def test_start_on_missing_component_ignored(self, controller):
        controller.start_wire("ghost", (0, 0))
        assert controller.wire_tool.state is WireToolState.IDLE

    def test_cancel(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        ctrl.cancel_wire()
        assert ctrl.dragging_wire is None
        assert ctrl.model.wires == []


class TestFreePath:
    def test_ignored_when_tool_off(self, controller):
        controller.add_wire_point((20, 20))
        assert not controller.is_drawing
        assert not controller.can_undo()

    def test_first_click_starts_and_snapshots(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((19, 41))
        assert controller.is_drawing
        assert controller.wire_points == [WirePoint(20, 40)]
        assert controller.undo_manager.get_undo_description() == "Draw wire"

    def test_clicks_append(self, controller):
        controller.toggle_wire_mode()
        for p in [(0, 0), (0, 40), (60, 40)]:
            controller.add_wire_point(p)
        assert [(p.x, p.y) for p in controller.wire_points] == [(0, 0), (0, 40), (60, 40)]
        assert controller.model.wires == []

    def test_commit_with_enter(self, controller):
        controller.toggle_wire_mode()
        for p in [(0, 0), (0, 40), (60, 40)]:
            controller.add_wire_point(p)
        wire = controller.complete_wire_path()

        assert wire.is_free_path
        assert len(wire.points) == 3
        assert controller.model.wires == [wire]
        assert not controller.is_drawing
        assert controller.wire_points == []

    def test_finishing_click_commits_two_point_wire(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((0, 0))
        wire = controller.add_wire_point((80, 0), finish=True)
        assert wire is not None
        assert [(p.x, p.y) for p in wire.points] == [(0, 0), (80, 0)]
        assert not controller.is_drawing

    def test_commit_with_one_point_is_noop(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((0, 0))
        assert controller.complete_wire_path() is None
        assert controller.is_drawing
        assert controller.wire_points == [WirePoint(0, 0)]
        assert controller.model.wires == []

    def test_commit_with_no_points_is_noop(self, controller):
        controller.toggle_wire_mode()
        assert controller.complete_wire_path() is None
        assert not controller.is_drawing

    def test_finishing_first_click_keeps_drawing(self, controller):
        controller.toggle_wire_mode()
        assert controller.add_wire_point((0, 0), finish=True) is None
        assert controller.is_drawing

    def test_path_undo_removes_wire(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((0, 0))
        controller.add_wire_point((40, 0), finish=True)
        controller.undo()
        assert controller.model.wires == []

    def test_terminal_references_kept_for_existing_parts(self, controller):
        comp = controller.add_component("bulb")
        controller.toggle_wire_mode()
        controller.add_wire_point(WirePoint(400, 280, comp.component_id))
        controller.add_wire_point(WirePoint(500, 280, "ghost"))
        wire = controller.complete_wire_path()
        assert wire.points[0].component_id == comp.component_id
        assert wire.points[1].component_id is None

    def test_escape_cancels_path(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((0, 0))
        controller.add_wire_point((20, 0))
        controller.handle_escape()
        assert not controller.is_drawing
        assert controller.wire_points == []
        assert controller.model.wires == []
        assert controller.wire_mode


class TestToggleWireMode:
    def test_toggle_resets_buffer(self, controller):
        controller.toggle_wire_mode()
        controller.add_wire_point((0, 0))
        assert controller.toggle_wire_mode() is False
        assert not controller.is_drawing
        assert controller.wire_points == []

    def test_toggle_cancels_terminal_drag(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        ctrl.toggle_wire_mode()
        assert ctrl.dragging_wire is None

    def test_escape_prefers_terminal_drag(self, two_parts):
        ctrl, a, _ = two_parts
        ctrl.start_wire(a, (360, 300))
        ctrl.handle_escape()
        assert ctrl.wire_tool.state is WireToolState.IDLE


class TestWireToolStandalone:
    def test_modes_are_exclusive(self):
        tool = WireTool()
        tool.toggle_mode()
        tool.add_point((0, 0))
        tool.start_drag("A", (20, 0))
        assert tool.state is WireToolState.DRAGGING
        assert tool.points == []
        assert tool.add_point((40, 0)) is False
        assert tool.points == []

    def test_take_path_requires_two_points(self):
        tool = WireTool()
        tool.toggle_mode()
        tool.add_point((0, 0))
        assert tool.take_path() is None
        tool.add_point((0, 20))
        assert len(tool.take_path()) == 2
        assert tool.state is WireToolState.IDLE

    def test_finish_drag_snaps_target(self):
        tool = WireTool()
        tool.start_drag("A", (1, 2))
        points = tool.finish_drag("B", (59, 61))
        assert points == [WirePoint(0, 0, "A"), WirePoint(60, 60, "B")]
