"""Unit tests for LayoutEditor."""

import pytest

from rackplan.application import LayoutEditor
from rackplan.domain import (
    DeviceFace,
    DeviceType,
    FailureReason,
    PlacedDevice,
    Rack,
    RackLayout,
)
from rackplan.domain.services.movement import MOVE_DOWN, MOVE_UP


class TestPlaceDevice:
    """Tests for placing devices through the editor."""

    def test_place_records_history(self, editor: LayoutEditor) -> None:
        result = editor.place_device("dell-r740", 1)

        assert result.success
        assert result.device is not None
        assert editor.rack.devices == [result.device]
        assert editor.history.undo_description == "Undo: Place PowerEdge R740"

    def test_custom_name_used_in_description(self, editor: LayoutEditor) -> None:
        editor.place_device("cisco-c9300", 5, name="core-sw")
        assert editor.history.undo_description == "Undo: Place core-sw"

    def test_rejected_place_not_recorded(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)
        result = editor.place_device("cisco-c9300", 2)

        assert not result.success
        assert result.reason == FailureReason.COLLISION
        assert editor.history.history_length == 1
        assert len(editor.rack.devices) == 1

    def test_out_of_bounds_rejected(self, editor: LayoutEditor) -> None:
        result = editor.place_device("dell-r740", 12)
        assert result.reason == FailureReason.OUT_OF_BOUNDS
        assert not editor.history.can_undo

    def test_unknown_type_rejected(self, editor: LayoutEditor) -> None:
        result = editor.place_device("no-such-type", 1)
        assert result.reason == FailureReason.UNKNOWN_DEVICE_TYPE

    def test_undo_redo_place(self, editor: LayoutEditor) -> None:
        placed = editor.place_device("dell-r740", 3).device

        assert editor.undo()
        assert editor.rack.devices == []
        assert editor.redo()
        assert [d.id for d in editor.rack.devices] == [placed.id]

    def test_new_action_clears_redo(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)
        editor.undo()
        editor.place_device("cisco-c9300", 1)
        assert not editor.history.can_redo


class TestDropDevice:
    """Tests for pointer-based placement."""

    def test_drop_snaps_to_nearest_valid_slot(self, editor: LayoutEditor) -> None:
        # y=0 is the top of a 12U rack, so the target slot is 12
        result = editor.drop_device("dell-r740", y=0, slot_pixel_height=20)

        assert result.success
        assert result.device.position == 11

    def test_drop_avoids_occupied_slots(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 5)
        # Pointer over slot 5 (rows counted from the top)
        result = editor.drop_device("cisco-c9300", y=7 * 20 + 5, slot_pixel_height=20)

        assert result.success
        assert result.device.position == 4

    def test_drop_full_rack(self, editor: LayoutEditor) -> None:
        for position in range(1, 11, 2):
            editor.place_device("dell-r740", position)
        editor.place_device("cisco-c9300", 11)
        editor.place_device("cisco-c9300", 12)

        result = editor.drop_device("cisco-c9300", y=0, slot_pixel_height=20)

        assert result.reason == FailureReason.NO_VALID_POSITION
        assert len(editor.rack.devices) == 7

    def test_drop_unknown_type(self, editor: LayoutEditor) -> None:
        result = editor.drop_device("nope", y=0, slot_pixel_height=20)
        assert result.reason == FailureReason.UNKNOWN_DEVICE_TYPE


class TestMoveDevice:
    """Tests for moving and nudging devices."""

    def test_move(self, editor: LayoutEditor) -> None:
        device = editor.place_device("dell-r740", 1).device
        result = editor.move_device(device.id, 6)

        assert result.success
        assert device.position == 6
        assert editor.history.undo_description == "Undo: Move PowerEdge R740"
        editor.undo()
        assert device.position == 1

    def test_move_to_same_slot_is_noop(self, editor: LayoutEditor) -> None:
        device = editor.place_device("dell-r740", 1).device
        result = editor.move_device(device.id, 1)

        assert result.success
        assert editor.history.history_length == 1

    def test_move_into_collision_rejected(self, editor: LayoutEditor) -> None:
        device = editor.place_device("dell-r740", 1).device
        editor.place_device("cisco-c9300", 5)

        result = editor.move_device(device.id, 4)

        assert result.reason == FailureReason.COLLISION
        assert device.position == 1
        assert editor.history.history_length == 2

    def test_move_missing_device(self, editor: LayoutEditor) -> None:
        assert editor.move_device("missing", 3).reason == FailureReason.NOT_FOUND

    def test_nudge_skips_over_blocker(self, editor: LayoutEditor) -> None:
        device = editor.place_device("cisco-c9300", 1).device
        editor.place_device("cisco-c9300", 2)

        result = editor.nudge_device(device.id, MOVE_UP)

        assert result.success
        assert device.position == 3

    def test_nudge_at_boundary(self, editor: LayoutEditor) -> None:
        device = editor.place_device("cisco-c9300", 1).device

        result = editor.nudge_device(device.id, MOVE_DOWN)

        assert result.reason == FailureReason.NO_VALID_POSITION
        assert "at boundary" in result.message
        assert not editor.history.can_redo
        assert editor.history.history_length == 1

    def test_nudge_missing_device(self, editor: LayoutEditor) -> None:
        assert editor.nudge_device("missing", MOVE_UP).reason == FailureReason.NOT_FOUND


class TestFlipAndRename:
    """Tests for face changes and renames."""

    def test_flip_toggles_face(self, editor: LayoutEditor) -> None:
        device = editor.place_device("patch-panel-24", 4).device

        assert editor.flip_device(device.id).success
        assert device.face == DeviceFace.REAR
        assert editor.history.undo_description == "Undo: Flip 24-Port Patch Panel"
        editor.undo()
        assert device.face == DeviceFace.FRONT

    def test_flip_both_face_device_is_noop(self, editor: LayoutEditor) -> None:
        device = editor.place_device("dell-r740", 1, DeviceFace.BOTH).device

        assert editor.flip_device(device.id).success
        assert device.face == DeviceFace.BOTH
        assert editor.history.history_length == 1

    def test_flip_blocked_by_half_depth_on_other_face(
        self, editor: LayoutEditor
    ) -> None:
        front = editor.place_device("patch-panel-24", 4).device
        editor.place_device("apc-pdu", 4, DeviceFace.REAR)

        result = editor.flip_device(front.id)

        assert result.reason == FailureReason.COLLISION
        assert front.face == DeviceFace.FRONT

    def test_rename(self, editor: LayoutEditor) -> None:
        device = editor.place_device("cisco-c9300", 1).device

        assert editor.rename_device(device.id, "  core  ").success
        assert device.name == "core"
        assert editor.history.undo_description == "Undo: Rename core"
        editor.undo()
        assert device.name is None

    def test_rename_unchanged_is_noop(self, editor: LayoutEditor) -> None:
        device = editor.place_device("cisco-c9300", 1).device
        editor.rename_device(device.id, "")
        assert editor.history.history_length == 1


class TestRemoveAndClear:
    """Tests for removing devices and clearing the rack."""

    def test_remove_undo_restores_same_instance(self, editor: LayoutEditor) -> None:
        first = editor.place_device("dell-r740", 1).device
        second = editor.place_device("cisco-c9300", 5).device
        editor.place_device("cisco-c9300", 6)

        assert editor.remove_device(second.id).success
        editor.undo()

        ids = [d.id for d in editor.rack.devices]
        assert ids[:2] == [first.id, second.id]

    def test_remove_missing(self, editor: LayoutEditor) -> None:
        assert editor.remove_device("missing").reason == FailureReason.NOT_FOUND
        assert not editor.history.can_undo

    def test_clear_rack(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)
        editor.place_device("cisco-c9300", 5)

        editor.clear_rack()

        assert editor.rack.devices == []
        assert editor.history.undo_description == "Undo: Clear rack (2 devices)"
        editor.undo()
        assert len(editor.rack.devices) == 2

    def test_clear_empty_rack_is_noop(self, editor: LayoutEditor) -> None:
        assert editor.clear_rack().success
        assert not editor.history.can_undo

    def test_delete_rack_keeps_settings(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)

        result = editor.delete_rack()

        assert len(result.devices) == 1
        assert editor.rack.devices == []
        assert editor.rack.name == "Homelab"
        assert editor.rack.height == 12
        assert editor.history.undo_description == "Undo: Delete rack Homelab"
        editor.undo()
        assert len(editor.rack.devices) == 1


class TestRackSettings:
    """Tests for resizing and updating the rack."""

    def test_resize_conflict_leaves_rack_unchanged(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 9)

        result = editor.resize_rack(8)

        assert result.reason == FailureReason.RESIZE_CONFLICT
        assert "PowerEdge R740 at U9-10" in result.message
        assert editor.rack.height == 12
        assert editor.history.history_length == 1

    def test_resize_and_undo(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)

        assert editor.resize_rack(4).success
        assert editor.rack.height == 4
        editor.undo()
        assert editor.rack.height == 12

    def test_resize_same_height_is_noop(self, editor: LayoutEditor) -> None:
        assert editor.resize_rack(12).success
        assert not editor.history.can_undo

    def test_update_rack(self, editor: LayoutEditor) -> None:
        assert editor.update_rack(name="Lab", desc_units=True).success
        assert editor.rack.name == "Lab"
        assert editor.rack.desc_units
        editor.undo()
        assert editor.rack.name == "Homelab"
        assert not editor.rack.desc_units

    def test_update_rack_rejects_blank_name(self, editor: LayoutEditor) -> None:
        result = editor.update_rack(name="   ")
        assert result.reason == FailureReason.INVALID_RACK
        assert not editor.history.can_undo

    def test_update_rack_unchanged_is_noop(self, editor: LayoutEditor) -> None:
        assert editor.update_rack(name="Homelab").success
        assert not editor.history.can_undo

    def test_replace_rack_rejects_collisions(self, editor: LayoutEditor) -> None:
        bad = Rack(
            name="Bad",
            height=6,
            devices=[
                PlacedDevice(device_type="dell-r740", position=1),
                PlacedDevice(device_type="cisco-c9300", position=2),
            ],
        )
        result = editor.replace_rack(bad)
        assert result.reason == FailureReason.INVALID_RACK
        assert editor.rack.name == "Homelab"


class TestDeviceTypes:
    """Tests for catalog management through the editor."""

    def test_add_device_type(self, editor: LayoutEditor) -> None:
        ups = DeviceType(slug="eaton-ups", u_height=2, model="5PX")

        assert editor.add_device_type(ups).success
        assert editor.layout.catalog.get("eaton-ups") == ups
        editor.undo()
        assert editor.layout.catalog.get("eaton-ups") is None

    def test_add_duplicate_rejected(self, editor: LayoutEditor) -> None:
        dup = DeviceType(slug="dell-r740", u_height=1)
        assert editor.add_device_type(dup).reason == FailureReason.DUPLICATE

    def test_add_invalid_slug_rejected(self, editor: LayoutEditor) -> None:
        bad = DeviceType(slug="Not A Slug", u_height=1)
        assert editor.add_device_type(bad).reason == FailureReason.INVALID_SLUG

    def test_add_type_colliding_with_placed_devices_not_recorded(self) -> None:
        layout = RackLayout(
            rack=Rack(
                height=12,
                devices=[
                    PlacedDevice(device_type="srv", position=1, id="a"),
                    PlacedDevice(device_type="srv", position=2, id="b"),
                ],
            )
        )
        editor = LayoutEditor(layout=layout)

        result = editor.add_device_type(DeviceType(slug="srv", u_height=2))

        assert result.reason == FailureReason.COLLISION
        assert not editor.history.can_undo
        assert editor.layout.catalog.get("srv") is None

    def test_update_cannot_change_slug(self, editor: LayoutEditor) -> None:
        result = editor.update_device_type("dell-r740", slug="other")

        assert result.reason == FailureReason.INVALID_SLUG
        assert not editor.history.can_undo
        assert "other" not in editor.layout.catalog

    def test_update_device_type(self, editor: LayoutEditor) -> None:
        assert editor.update_device_type("dell-r740", model="R740xd").success
        assert editor.layout.catalog.get("dell-r740").model == "R740xd"
        editor.undo()
        assert editor.layout.catalog.get("dell-r740").model == "PowerEdge R740"

    def test_update_height_that_would_collide(self, editor: LayoutEditor) -> None:
        editor.place_device("cisco-c9300", 1)
        editor.place_device("dell-r740", 2)

        result = editor.update_device_type("cisco-c9300", u_height=2)

        assert result.reason == FailureReason.COLLISION
        assert editor.layout.catalog.get("cisco-c9300").u_height == 1

    def test_delete_device_type_undo_restores_instances(
        self, editor: LayoutEditor
    ) -> None:
        editor.place_device("cisco-c9300", 1, name="sw1")
        editor.place_device("cisco-c9300", 2, name="sw2")
        editor.place_device("dell-r740", 5)

        result = editor.delete_device_type("cisco-c9300")

        assert result.success
        assert len(editor.rack.devices) == 1
        assert editor.layout.catalog.get("cisco-c9300") is None

        editor.undo()
        names = sorted(d.name for d in editor.rack.devices if d.name)
        assert names == ["sw1", "sw2"]
        assert editor.layout.catalog.get("cisco-c9300") is not None

    def test_delete_unknown_type(self, editor: LayoutEditor) -> None:
        result = editor.delete_device_type("nope")
        assert result.reason == FailureReason.UNKNOWN_DEVICE_TYPE


class TestSession:
    """Tests for loading layouts and snapshots."""

    def test_load_layout_clears_history(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)
        editor.undo()

        fresh = RackLayout(rack=Rack(name="Other", height=6))
        editor.load_layout(fresh)

        assert editor.layout is fresh
        assert not editor.history.can_undo
        assert not editor.history.can_redo

    def test_snapshot(self, editor: LayoutEditor) -> None:
        editor.place_device("dell-r740", 1)
        snapshot = editor.snapshot()

        assert snapshot["rack"]["name"] == "Homelab"
        assert snapshot["rack"]["devices"][0]["device_type"] == "dell-r740"

    def test_history_depth_bounds_undo(self, layout: RackLayout) -> None:
        from rackplan.application.history import CommandHistory

        editor = LayoutEditor(layout=layout, history=CommandHistory(max_depth=2))
        for position in (1, 2, 3):
            editor.place_device("cisco-c9300", position)

        assert editor.undo()
        assert editor.undo()
        assert not editor.undo()
        assert [d.position for d in editor.rack.devices] == [1]


@pytest.mark.parametrize("face", [DeviceFace.FRONT, DeviceFace.REAR])
def test_half_depth_devices_share_slot(editor: LayoutEditor, face: DeviceFace) -> None:
    """Opposite-face half-depth devices may share a slot."""
    editor.place_device("patch-panel-24", 3, face)
    result = editor.place_device("apc-pdu", 3, face.opposite)
    assert result.success
