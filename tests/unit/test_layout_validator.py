"""Unit tests for whole-rack layout document checks."""

from typing import Any

from rackplan.application.config import (
    IssueSeverity,
    ValidationResult,
    load_layout_from_dict,
    validate_layout_document,
)
from rackplan.domain import DeviceCatalog, DeviceType

DEVICE_TYPES = [
    {"slug": "dell-r740", "u_height": 2, "model": "PowerEdge R740"},
    {"slug": "cisco-c9300", "u_height": 1, "model": "Catalyst 9300"},
    {"slug": "patch-panel-24", "u_height": 1, "is_full_depth": False},
    {"slug": "apc-pdu", "u_height": 1, "is_full_depth": False, "manufacturer": "APC"},
]


def _validate(devices: list[dict[str, Any]], **kwargs: Any) -> ValidationResult:
    document = load_layout_from_dict(
        {
            "schema_version": "1.2",
            "rack": {"name": "Homelab", "height": 12, "devices": devices},
            "device_types": kwargs.pop("device_types", DEVICE_TYPES),
        }
    )
    return validate_layout_document(document, **kwargs)


class TestValidationResult:
    """Tests for ValidationResult exit codes and summaries."""

    def test_exit_codes(self) -> None:
        result = ValidationResult()
        assert result.exit_code == 0
        result.add_warning("x", "careful")
        assert result.exit_code == 2
        result.add_error("y", "broken")
        assert result.exit_code == 1
        assert not result.is_valid
        assert result.has_warnings

    def test_issues_keep_discovery_order(self) -> None:
        result = ValidationResult()
        result.add_error("rack.devices[0]", "overflows", position=12)
        result.add_warning("device_types[0]", "unused")
        result.add_error("rack.devices[1]", "collides", position=3)

        assert [i.severity for i in result.issues] == [
            IssueSeverity.ERROR,
            IssueSeverity.WARNING,
            IssueSeverity.ERROR,
        ]
        assert [e.position for e in result.errors] == [12, 3]
        assert str(result.warnings[0]) == "device_types[0]: unused"

    def test_summary(self) -> None:
        result = ValidationResult()
        assert result.summary == "Validation passed. Layout is valid."
        result.add_warning("x", "careful")
        assert result.summary == "Validation passed with 1 warning(s)"
        result.add_error("y", "broken")
        assert result.summary == "Validation failed: 1 error(s), 1 warning(s)"


class TestValidateLayoutDocument:
    """Tests for validate_layout_document."""

    def test_clean_layout(self) -> None:
        result = _validate(
            [
                {"device_type": "dell-r740", "position": 1},
                {"device_type": "cisco-c9300", "position": 3},
                {"device_type": "patch-panel-24", "position": 5},
                {"device_type": "apc-pdu", "position": 5, "face": "rear"},
            ]
        )
        assert result.exit_code == 0

    def test_device_beyond_rack_top(self) -> None:
        result = _validate(
            [{"device_type": "dell-r740", "position": 12}],
            device_types=DEVICE_TYPES[:1],
        )

        assert result.exit_code == 1
        assert result.errors[0].path == "rack.devices[0]"
        assert "PowerEdge R740 at U12-13 extends beyond the 12U rack" in (
            result.errors[0].message
        )

    def test_collision_reported_for_both_devices(self) -> None:
        result = _validate(
            [
                {"device_type": "dell-r740", "position": 1},
                {"device_type": "cisco-c9300", "position": 2, "name": "core"},
            ],
            device_types=DEVICE_TYPES[:2],
        )

        assert [e.path for e in result.errors] == ["rack.devices[0]", "rack.devices[1]"]
        assert result.errors[0].message == (
            "PowerEdge R740 at U1-2: Position blocked by core"
        )
        assert result.errors[1].message == (
            "Catalyst 9300 at U2: Position blocked by PowerEdge R740"
        )

    def test_full_depth_blocks_rear(self) -> None:
        result = _validate(
            [
                {"device_type": "dell-r740", "position": 1},
                {"device_type": "patch-panel-24", "position": 2, "face": "rear"},
            ],
            device_types=[DEVICE_TYPES[0], DEVICE_TYPES[2]],
        )
        assert len(result.errors) == 2

    def test_unknown_type_is_warning(self) -> None:
        result = _validate(
            [{"device_type": "mystery-box", "position": 1}],
            device_types=[],
        )

        assert result.exit_code == 2
        warning = result.warnings[0]
        assert warning.path == "rack.devices[0]"
        assert "mystery-box" in warning.message
        assert warning.suggestion is not None

    def test_unused_type_is_warning(self) -> None:
        result = _validate(
            [{"device_type": "dell-r740", "position": 1}],
            device_types=DEVICE_TYPES[:2],
        )

        assert result.is_valid
        assert [w.path for w in result.warnings] == ["device_types[1]"]

    def test_fallback_library_types_resolved(self) -> None:
        library = DeviceCatalog([DeviceType(slug="ups-2u", u_height=2)])
        result = _validate(
            [
                {"device_type": "ups-2u", "position": 1},
                {"device_type": "ups-2u", "position": 2},
            ],
            device_types=[],
            fallbacks=(library,),
        )
        assert len(result.errors) == 2
        assert not result.warnings
