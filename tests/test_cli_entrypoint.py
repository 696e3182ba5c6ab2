from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest

typer_testing = pytest.importorskip("typer.testing")

from dungeon_locator.config import settings  # noqa: E402
from dungeon_locator.main import app  # noqa: E402

runner = typer_testing.CliRunner()


def test_console_entrypoint_exposes_app() -> None:
    module = importlib.import_module("dungeon_locator.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_chunks_command() -> None:
    result = runner.invoke(app, ["chunks", "--seed", "123456789", "--radius", "0"])

    assert result.exit_code == 0
    assert "(7, 13)" in result.output


def test_check_command_reports_entrance() -> None:
    result = runner.invoke(app, ["check", "--seed", "123456789", "--x", "120", "--z", "210"])

    assert result.exit_code == 0
    assert "'will_spawn': True" in result.output
    assert "(163, 153)" in result.output


def test_offset_and_label_commands() -> None:
    offset = runner.invoke(app, ["offset", "--seed", "123456789", "--tx", "7", "--tz", "13"])
    label = runner.invoke(app, ["label", "--seed", "123456789", "--x", "163", "--z", "153"])

    assert offset.exit_code == 0
    assert "(47, -59)" in offset.output
    assert label.exit_code == 0
    assert "BUNKER" in label.output
    assert "'approximate': True" in label.output


def test_nearest_command_reports_direction() -> None:
    result = runner.invoke(app, ["nearest", "--seed", "123456789", "--x", "0", "--z", "0", "--radius", "2"])

    assert result.exit_code == 0
    assert "(163, 153)" in result.output
    assert "East" in result.output


def test_sweep_command_marks_approximate_labels() -> None:
    result = runner.invoke(app, ["sweep", "--seed", "123456789", "--radius", "1", "--shards", "2"])

    assert result.exit_code == 0
    assert "163" in result.output
    assert "approx" in result.output


def test_exact_mode_with_missing_classifier_marks_labels_approximate(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(settings, "classifier_bin", str(tmp_path / "no-such-biome-tool"))

    label = runner.invoke(app, ["label", "--seed", "123456789", "--x", "163", "--z", "153", "--mode", "exact"])
    nearest = runner.invoke(
        app, ["nearest", "--seed", "123456789", "--x", "0", "--z", "0", "--radius", "1", "--mode", "exact"]
    )

    assert label.exit_code == 0
    assert "BUNKER (approx.)" in label.output
    assert "'approximate': True" in label.output
    assert "'approximate': False" not in label.output
    assert nearest.exit_code == 0
    assert "BUNKER (approx.)" in nearest.output


def test_exact_mode_with_working_classifier_is_unmarked(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    script = tmp_path / "biome_tool.py"
    script.write_text('import json\nprint(json.dumps({"biome": "minecraft:desert"}))\n', encoding="utf-8")
    monkeypatch.setattr(settings, "classifier_bin", sys.executable)
    monkeypatch.setattr(settings, "classifier_command", str(script))

    result = runner.invoke(app, ["label", "--seed", "123456789", "--x", "163", "--z", "153", "--mode", "exact"])

    assert result.exit_code == 0
    assert "'label': 'PYRAMID'" in result.output
    assert "'approximate': False" in result.output


def test_sweep_distance_filter_applies_to_sharded_sweep() -> None:
    args = ["sweep", "--seed", "123456789", "--radius", "1", "--max-distance", "240"]
    sequential = runner.invoke(app, args)
    sharded = runner.invoke(app, [*args, "--shards", "2"])

    assert sequential.exit_code == 0
    assert sharded.exit_code == 0
    assert "1 dungeons" in sequential.output
    assert "1 dungeons" in sharded.output
    assert "163, 153" in sharded.output


def test_seed_from_seedcracker_log(tmp_path: Path) -> None:
    log_path = tmp_path / "seedcracker.log"
    log_path.write_text("Seed: 123456789\n", encoding="utf-8")

    result = runner.invoke(app, ["chunks", "--seedcracker-file", str(log_path), "--radius", "0"])

    assert result.exit_code == 0
    assert "(7, 13)" in result.output


def test_missing_seed_exits_with_requirements(tmp_path: Path) -> None:
    result = runner.invoke(app, ["chunks", "--seedcracker-file", str(tmp_path / "none.log")])

    assert result.exit_code == 1
    assert "missing_requirements" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["chunks", "--seed", "   "],
        ["chunks", "--seed", "1", "--frequency", "0"],
        ["chunks", "--seed", "1", "--radius", "-1"],
    ],
)
def test_invalid_input_is_rejected(args: list[str]) -> None:
    result = runner.invoke(app, args)
    assert result.exit_code == 2
