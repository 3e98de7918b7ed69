"""Integration tests for CLI."""

import json
import shutil

import pytest
from click.testing import CliRunner

from indoornav.cli import main
from indoornav.schema.loader import load_map


@pytest.fixture
def runner():
    return CliRunner()


class TestValidateCommand:
    def test_validate_valid_file(self, runner, examples_dir):
        result = runner.invoke(main, ["validate", str(examples_dir / "school_map.json")])

        assert result.exit_code == 0
        assert "Validation passed" in result.output
        assert "LEGACY_STAIR_ENCODING" in result.output

    def test_validate_with_errors(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "broken_map.json")]
        )

        assert result.exit_code == 1
        assert "DUPLICATE_IDENTIFIER" in result.output
        assert "Validation failed" in result.output

    def test_validate_with_warnings(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "detached.json")]
        )

        # Warnings don't cause failure by default
        assert result.exit_code == 0
        assert "ISOLATED_NODE" in result.output
        assert "DISCONNECTED_MAP" in result.output

    def test_validate_strict_mode(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["validate", str(examples_dir / "invalid" / "detached.json"), "--strict"],
        )

        assert result.exit_code == 1

    def test_validate_json_output(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["validate", str(examples_dir / "invalid" / "detached.json"), "--format", "json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["valid"] is True
        assert data["warning_count"] == 2
        assert {i["code"] for i in data["issues"]} == {"ISOLATED_NODE", "DISCONNECTED_MAP"}

    def test_validate_unloadable_file(self, runner, examples_dir):
        result = runner.invoke(
            main, ["validate", str(examples_dir / "invalid" / "not_a_map.json")]
        )

        assert result.exit_code == 2
        assert "Error loading file" in result.output

    def test_validate_schema_error(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"nodes": {"a": {"type": "elevator"}}}')

        result = runner.invoke(main, ["validate", str(path)])

        assert result.exit_code == 2
        assert "Map validation error" in result.output

    def test_validate_missing_file(self, runner):
        result = runner.invoke(main, ["validate", "/nonexistent/map.json"])

        assert result.exit_code == 2


class TestRouteCommand:
    def test_route_across_floors(self, runner, examples_dir):
        result = runner.invoke(
            main, ["route", str(examples_dir / "school_map.json"), "exit1", "room201"]
        )

        assert result.exit_code == 0
        assert "Route exit1 -> room201: 6 stop(s), about 65 m" in result.output
        assert "Take Stairs 1 up to floor 2." in result.output
        assert "You have arrived at Room 201." in result.output

    def test_route_json(self, runner, examples_dir):
        result = runner.invoke(
            main,
            [
                "route",
                str(examples_dir / "school_map.json"),
                "exit1",
                "room201",
                "--format",
                "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["found"] is True
        assert data["route"] == [
            "exit1",
            "corridor1_1",
            "stairs1_f1",
            "stairs1_f2",
            "corridor2_1",
            "room201",
        ]
        assert data["total_distance"] == 65
        assert data["floor_changes"] == 1
        assert data["instructions"][0]["kind"] == "start"
        assert data["instructions"][-1]["text"] == "You have arrived at Room 201."

    def test_route_from_scan_code(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["route", str(examples_dir / "school_map.json"), "QR-EXIT-1", "room101", "--from-code"],
        )

        assert result.exit_code == 0
        assert "Route exit1 -> room101" in result.output

    def test_route_unknown_scan_code(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["route", str(examples_dir / "school_map.json"), "QR-NOPE", "room101", "--from-code"],
        )

        assert result.exit_code == 1
        assert "does not match any node" in result.output

    def test_route_scale_override(self, runner, examples_dir):
        result = runner.invoke(
            main,
            [
                "route",
                str(examples_dir / "school_map.json"),
                "exit1",
                "room201",
                "--pixels-per-meter",
                "5",
            ],
        )

        assert result.exit_code == 0
        assert "about 130 m" in result.output

    def test_route_cost_from_environment(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["route", str(examples_dir / "school_map.json"), "exit1", "room101", "--format", "json"],
            env={"INDOORNAV_COST_MODE": "distance"},
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["cost_mode"] == "distance"

    def test_route_not_connected(self, runner, examples_dir):
        result = runner.invoke(
            main, ["route", str(examples_dir / "invalid" / "detached.json"), "a", "c"]
        )

        assert result.exit_code == 1
        assert "No route from a to c" in result.output

    def test_route_unknown_node(self, runner, examples_dir):
        result = runner.invoke(
            main, ["route", str(examples_dir / "school_map.json"), "exit1", "ghost"]
        )

        assert result.exit_code == 2
        assert "Invalid route request" in result.output

    def test_route_same_node(self, runner, examples_dir):
        result = runner.invoke(
            main, ["route", str(examples_dir / "school_map.json"), "exit1", "exit1"]
        )

        assert result.exit_code == 2

    def test_route_invalid_scale(self, runner, examples_dir):
        result = runner.invoke(
            main,
            [
                "route",
                str(examples_dir / "school_map.json"),
                "exit1",
                "room201",
                "--pixels-per-meter",
                "0",
            ],
        )

        assert result.exit_code == 2
        assert "Invalid settings" in result.output


class TestLocateCommand:
    def test_locate_by_identifier(self, runner, examples_dir):
        result = runner.invoke(
            main, ["locate", str(examples_dir / "school_map.json"), "QR-EXIT-1"]
        )

        assert result.exit_code == 0
        assert "exit1" in result.output
        assert "Main Exit" in result.output

    def test_locate_json(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["locate", str(examples_dir / "legacy_stairs.yaml"), "door1", "--format", "json"],
        )

        assert result.exit_code == 0
        assert json.loads(result.output)[0]["id"] == "door1"

    def test_locate_unknown(self, runner, examples_dir):
        result = runner.invoke(
            main, ["locate", str(examples_dir / "school_map.json"), "QR-NOPE"]
        )

        assert result.exit_code == 1


class TestFloorCommand:
    def test_floor_lists_linked_stairs(self, runner, examples_dir):
        result = runner.invoke(main, ["floor", str(examples_dir / "school_map.json"), "2"])

        assert result.exit_code == 0
        assert "stairs1_f1" in result.output
        assert "room201" in result.output
        assert "room101" not in result.output

    def test_undefined_floor(self, runner, examples_dir):
        result = runner.invoke(main, ["floor", str(examples_dir / "school_map.json"), "5"])

        assert result.exit_code == 2
        assert "not defined" in result.output


class TestMigrateStairsCommand:
    def test_migrate_to_new_file(self, runner, examples_dir, tmp_path):
        source = tmp_path / "legacy.yaml"
        shutil.copy(examples_dir / "legacy_stairs.yaml", source)
        target = tmp_path / "migrated.json"

        result = runner.invoke(main, ["migrate-stairs", str(source), "-o", str(target)])

        assert result.exit_code == 0
        assert "Created: stairs1@2" in result.output
        assert "1 stair record(s) added" in result.output

        graph = load_map(target)
        assert graph.has_connection("stairs1@2", "room201")
        assert graph.get_node("stairs1").connects_to_floor is None
        # the source file is left alone
        assert load_map(source).get_node("stairs1").connects_to_floor == 2

    def test_migrate_in_place_is_idempotent(self, runner, examples_dir, tmp_path):
        source = tmp_path / "legacy.yaml"
        shutil.copy(examples_dir / "legacy_stairs.yaml", source)

        first = runner.invoke(main, ["migrate-stairs", str(source)])
        second = runner.invoke(main, ["migrate-stairs", str(source)])

        assert first.exit_code == 0
        assert second.exit_code == 0
        assert "0 stair record(s) added" in second.output
        assert len(load_map(source)) == 5


class TestNarrateCommand:
    def test_narrate_plays_every_step(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["narrate", str(examples_dir / "school_map.json"), "exit1", "room201", "--delay", "0"],
        )

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "1/6: Start at Main Exit. The route is about 65 m long."
        assert lines[2] == "3/6: Take Stairs 1 up to floor 2."
        assert lines[5] == "6/6: You have arrived at Room 201."
        assert lines[-1] == "Navigation complete"

    def test_narrate_not_connected(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["narrate", str(examples_dir / "invalid" / "detached.json"), "a", "c", "--delay", "0"],
        )

        assert result.exit_code == 1

    def test_narrate_negative_delay(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["narrate", str(examples_dir / "school_map.json"), "exit1", "room201", "--delay", "-1"],
        )

        assert result.exit_code == 2

    def test_narrate_from_scan_code(self, runner, examples_dir):
        result = runner.invoke(
            main,
            [
                "narrate",
                str(examples_dir / "school_map.json"),
                "QR-EXIT-1",
                "room201",
                "--from-code",
                "--delay",
                "0",
            ],
        )

        assert result.exit_code == 0
        assert result.output.startswith("1/6: Start at Main Exit.")
        assert result.output.strip().endswith("Navigation complete")

    def test_narrate_unknown_scan_code(self, runner, examples_dir):
        result = runner.invoke(
            main,
            ["narrate", str(examples_dir / "school_map.json"), "QR-NOPE", "room201", "--from-code"],
        )

        assert result.exit_code == 1
        assert "does not match any node" in result.output
