"""Integration tests for the validate CLI command.

These tests verify the validate command works correctly end-to-end,
including:
- Valid layout files pass validation
- Malformed files produce errors
- Colliding devices are reported
- Exit codes are correct
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from rackplan.cli.main import app

# Get path to test fixtures
FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "layouts"

pytestmark = pytest.mark.cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_layout(self, runner: CliRunner) -> None:
        """A clean layout passes with exit code 0."""
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "valid_layout.json")])

        assert result.exit_code == 0
        assert "Validation passed. Layout is valid." in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "Validation failed." in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "invalid_json.json")])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Line 6" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["validate", str(FIXTURES_PATH / "unknown_field.json")])

        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "rack.colour" in result.output

    def test_colliding_devices(self, runner: CliRunner) -> None:
        """Collisions are semantic errors, reported for each device."""
        result = runner.invoke(
            app, ["validate", str(FIXTURES_PATH / "colliding_layout.json")]
        )

        assert result.exit_code == 1
        assert "rack.devices[0]" in result.output
        assert "rack.devices[1]" in result.output
        assert "Position blocked by PowerEdge R740" in result.output
        assert "Validation failed: 2 error(s)" in result.output

    def test_valid_with_warnings(self, runner: CliRunner) -> None:
        """Unknown and unused device types are warnings, exit code 2."""
        result = runner.invoke(
            app, ["validate", str(FIXTURES_PATH / "valid_with_warnings.json")]
        )

        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "mystery-box" in result.output
        assert "spare-shelf" in result.output
        assert "Validation passed with 2 warning(s)" in result.output
