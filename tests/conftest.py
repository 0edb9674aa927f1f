"""Pytest configuration and shared fixtures for rackplan tests."""

from __future__ import annotations

import pytest

from rackplan.application import LayoutEditor, reset_factory
from rackplan.application.history import CommandHistory
from rackplan.domain import (
    DeviceCatalog,
    DeviceType,
    PlacementValidator,
    Rack,
    RackLayout,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "cli: tests that invoke the typer CLI")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared catalog and layout fixtures
# =============================================================================


@pytest.fixture
def server_2u() -> DeviceType:
    return DeviceType(
        slug="dell-r740",
        u_height=2,
        model="PowerEdge R740",
        manufacturer="Dell",
        category="server",
    )


@pytest.fixture
def switch_1u() -> DeviceType:
    return DeviceType(
        slug="cisco-c9300",
        u_height=1,
        model="Catalyst 9300",
        manufacturer="Cisco",
        category="network",
    )


@pytest.fixture
def patch_panel() -> DeviceType:
    """Half-depth 1U device."""
    return DeviceType(
        slug="patch-panel-24",
        u_height=1,
        is_full_depth=False,
        model="24-Port Patch Panel",
        category="patch-panel",
    )


@pytest.fixture
def pdu() -> DeviceType:
    """Half-depth 1U device, no model name."""
    return DeviceType(
        slug="apc-pdu",
        u_height=1,
        is_full_depth=False,
        manufacturer="APC",
        category="power",
    )


@pytest.fixture
def catalog(
    server_2u: DeviceType,
    switch_1u: DeviceType,
    patch_panel: DeviceType,
    pdu: DeviceType,
) -> DeviceCatalog:
    return DeviceCatalog([server_2u, switch_1u, patch_panel, pdu])


@pytest.fixture
def validator() -> PlacementValidator:
    return PlacementValidator()


@pytest.fixture
def rack_12u() -> Rack:
    return Rack(name="Homelab", height=12)


@pytest.fixture
def layout(rack_12u: Rack, catalog: DeviceCatalog) -> RackLayout:
    """Empty 12U rack with the shared catalog."""
    return RackLayout(rack=rack_12u, catalog=catalog)


@pytest.fixture
def editor(layout: RackLayout) -> LayoutEditor:
    return LayoutEditor(layout=layout, history=CommandHistory())


@pytest.fixture(autouse=True)
def _reset_service_factory():
    """Keep the module-level service factory isolated between tests."""
    yield
    reset_factory()
