"""Unit tests for converting between layout documents and the domain model."""

from typing import Any

import pytest

from rackplan.application.config import (
    ConfigError,
    EditorSettingsConfig,
    config_to_device_type,
    config_to_layout,
    layout_to_document,
    load_layout_from_dict,
)
from rackplan.application.config.schemas import DeviceTypeConfig
from rackplan.domain import (
    DeviceCatalog,
    DeviceFace,
    DeviceType,
    FormFactor,
    RackLayout,
    RackWidth,
)


def _document(devices: list[dict[str, Any]], **rack: Any) -> dict[str, Any]:
    return {
        "schema_version": "1.2",
        "rack": {"name": "Homelab", "height": 12, **rack, "devices": devices},
        "device_types": [
            {"slug": "dell-r740", "u_height": 2, "model": "PowerEdge R740"},
            {"slug": "patch-panel-24", "u_height": 1, "is_full_depth": False},
        ],
    }


class TestConfigToDeviceType:
    """Tests for config_to_device_type."""

    def test_all_fields(self) -> None:
        config = DeviceTypeConfig(
            slug="dell-r740",
            u_height=2,
            is_full_depth=True,
            model="PowerEdge R740",
            manufacturer="Dell",
            category="server",
            colour="#336699",
        )
        device_type = config_to_device_type(config)

        assert device_type == DeviceType(
            slug="dell-r740",
            u_height=2,
            is_full_depth=True,
            model="PowerEdge R740",
            manufacturer="Dell",
            category="server",
            colour="#336699",
        )

    def test_missing_depth_means_full_depth(self) -> None:
        device_type = config_to_device_type(DeviceTypeConfig(slug="x", u_height=1))
        assert device_type.is_full_depth is None
        assert device_type.full_depth


class TestConfigToLayout:
    """Tests for config_to_layout."""

    def test_builds_layout(self) -> None:
        document = load_layout_from_dict(
            _document(
                [
                    {"id": "srv", "device_type": "dell-r740", "position": 1},
                    {
                        "id": "pp",
                        "device_type": "patch-panel-24",
                        "position": 4,
                        "face": "rear",
                        "name": "Rear patch",
                    },
                ],
                width=10,
                form_factor="wall-mount",
                desc_units=True,
            )
        )

        layout = config_to_layout(document)

        rack = layout.rack
        assert rack.width == RackWidth.NARROW_10
        assert rack.form_factor == FormFactor.WALL_MOUNT
        assert rack.desc_units
        assert [d.id for d in rack.devices] == ["srv", "pp"]
        assert rack.find_device("pp").face == DeviceFace.REAR
        assert rack.find_device("pp").name == "Rear patch"
        assert layout.catalog.get("dell-r740").model == "PowerEdge R740"

    def test_missing_ids_are_generated(self) -> None:
        document = load_layout_from_dict(
            _document(
                [
                    {"device_type": "dell-r740", "position": 1},
                    {"device_type": "dell-r740", "position": 3},
                ]
            )
        )
        ids = [d.id for d in config_to_layout(document).rack.devices]
        assert len(set(ids)) == 2

    def test_colliding_devices_rejected(self) -> None:
        document = load_layout_from_dict(
            _document(
                [
                    {"id": "a", "device_type": "dell-r740", "position": 1},
                    {"id": "b", "device_type": "dell-r740", "position": 2},
                ]
            )
        )

        with pytest.raises(ConfigError) as exc_info:
            config_to_layout(document)

        error = exc_info.value
        assert error.error_type == "layout"
        assert {d["path"] for d in error.details} == {
            "rack.devices[0]",
            "rack.devices[1]",
        }

    def test_out_of_bounds_rejected(self) -> None:
        document = load_layout_from_dict(
            _document([{"id": "a", "device_type": "dell-r740", "position": 12}])
        )
        with pytest.raises(ConfigError) as exc_info:
            config_to_layout(document)
        assert exc_info.value.details[0]["value"] == "a"

    def test_fallback_library_resolves_types(self) -> None:
        library = DeviceCatalog([DeviceType(slug="ups-2u", u_height=2, model="UPS")])
        document = load_layout_from_dict(
            _document([{"device_type": "ups-2u", "position": 1}])
        )

        layout = config_to_layout(document, fallbacks=(library,))

        assert layout.catalog.get("ups-2u").model == "UPS"
        assert not layout.catalog.owns("ups-2u")


class TestLayoutToDocument:
    """Tests for layout_to_document."""

    def test_round_trip(self) -> None:
        document = load_layout_from_dict(
            _document(
                [
                    {"id": "srv", "device_type": "dell-r740", "position": 1},
                    {
                        "id": "pp",
                        "device_type": "patch-panel-24",
                        "position": 4,
                        "face": "rear",
                    },
                ]
            )
        )

        saved = layout_to_document(config_to_layout(document))

        assert saved.rack == document.rack
        assert saved.device_types == document.device_types

    def test_fallback_types_not_embedded(self) -> None:
        library = DeviceCatalog([DeviceType(slug="ups-2u", u_height=2)])
        layout = RackLayout(catalog=DeviceCatalog(fallbacks=(library,)))
        layout.place("ups-2u", 1)

        document = layout_to_document(layout)

        assert document.device_types == []
        assert document.rack.devices[0].device_type == "ups-2u"

    def test_settings_carried(self) -> None:
        document = layout_to_document(
            RackLayout(), EditorSettingsConfig(history_depth=10)
        )
        assert document.settings.history_depth == 10
        assert document.schema_version == "1.2"
