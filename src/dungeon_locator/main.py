"""CLI entrypoint for the dungeon locator."""

from __future__ import annotations

import asyncio

import typer
from rich import print

from dungeon_locator.cli import candidate_table, compass_direction, grid_summary, label_text
from dungeon_locator.config import settings
from dungeon_locator.grid import grid_parameters
from dungeon_locator.labels import CliEnvironmentClassifier
from dungeon_locator.models import BlockCoord, GridCell, InvalidPlacementInput, LabelMode
from dungeon_locator.predictor import DungeonPredictor
from dungeon_locator.seed_analysis import analyze_seedcracker_file, parse_world_seed
from dungeon_locator.telemetry.logging import configure_logging

app = typer.Typer(help="Predict dungeon spawn locations from a world seed")

SEED_HELP = "World seed (number or text)"
SEEDCRACKER_HELP = "Path to SeedCrackerX log export"


@app.callback()
def main(log_level: str = typer.Option(None, help="Override DUNGEON_LOCATOR_LOG_LEVEL")) -> None:
    configure_logging(log_level or settings.log_level)


def _resolve_seed(seed: str | None, seedcracker_file: str | None) -> int:
    if seed is not None:
        try:
            return parse_world_seed(seed)
        except InvalidPlacementInput as exc:
            raise typer.BadParameter(str(exc), param_hint="--seed") from exc

    path = seedcracker_file or settings.seedcracker_log_path
    if not path:
        print({"seed": None, "missing_requirements": ["Provide --seed or --seedcracker-file"]})
        raise typer.Exit(code=1)

    knowledge = analyze_seedcracker_file(path)
    if knowledge.seed is None:
        print({"seed": None, "missing_requirements": knowledge.requirements_missing})
        raise typer.Exit(code=1)
    return knowledge.seed


def _build_environment(seed: int):
    if not settings.classifier_bin:
        return None
    return CliEnvironmentClassifier(
        binary_path=settings.classifier_bin,
        seed=seed,
        minecraft_version=settings.minecraft_version,
        command=settings.classifier_command,
    )


def _build_predictor(seed: int) -> DungeonPredictor:
    try:
        config = settings.placement_config()
    except InvalidPlacementInput as exc:
        raise typer.BadParameter(str(exc)) from exc
    return DungeonPredictor(config, environment=_build_environment(seed))


def _check_frequency(frequency: int) -> None:
    if frequency <= 0:
        raise typer.BadParameter(f"frequency must be positive, got {frequency}", param_hint="--frequency")


@app.command("settings")
def show_settings() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "spawn_frequency": settings.spawn_frequency,
            "radii": (settings.min_radius, settings.max_radius),
            "search_radius": settings.search_radius,
            "label_mode": settings.label_mode.value,
            "classifier_bin": settings.classifier_bin,
            "seedcracker_log_path": settings.seedcracker_log_path,
        }
    )


@app.command("seed-status")
def seed_status(seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP)) -> None:
    path = seedcracker_file or settings.seedcracker_log_path
    if not path:
        raise typer.BadParameter("Provide --seedcracker-file or set DUNGEON_LOCATOR_SEEDCRACKER_LOG_PATH")
    print(analyze_seedcracker_file(path))


@app.command("chunks")
def chunks(
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    frequency: int = typer.Option(None, help="Spawn frequency (default from settings)"),
    radius: int = typer.Option(None, help="Grid cells to search in each direction"),
) -> None:
    """List the anchor chunk of every grid cell in range."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    frequency = settings.spawn_frequency if frequency is None else frequency
    radius = settings.search_radius if radius is None else radius
    _check_frequency(frequency)
    try:
        tiles = predictor.predict_chunks(world_seed, frequency, radius)
    except InvalidPlacementInput as exc:
        raise typer.BadParameter(str(exc)) from exc
    print({"seed": world_seed, "chunks": [(tile.x, tile.z) for tile in tiles]})


@app.command("check")
def check(
    x: int = typer.Option(..., help="Block X"),
    z: int = typer.Option(..., help="Block Z"),
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    frequency: int = typer.Option(None, help="Spawn frequency (default from settings)"),
) -> None:
    """Check whether the chunk containing a block position holds a dungeon anchor."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    frequency = settings.spawn_frequency if frequency is None else frequency
    _check_frequency(frequency)
    entrance = predictor.check_block(world_seed, frequency, x, z)
    print(
        {
            "chunk": (x >> 4, z >> 4),
            "will_spawn": entrance is not None,
            "predicted_entrance": None if entrance is None else (entrance.x, entrance.z),
        }
    )


@app.command("offset")
def offset(
    tx: int = typer.Option(..., help="Chunk X of the anchor"),
    tz: int = typer.Option(..., help="Chunk Z of the anchor"),
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
) -> None:
    """Show the first nearby-point displacement tried for an anchor chunk."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    displacement = _build_predictor(world_seed).predict_displacement(world_seed, tx, tz)
    print({"anchor": (tx, tz), "displacement": (displacement.dx, displacement.dz), "distance": round(displacement.length, 2)})


@app.command("label")
def label(
    x: int = typer.Option(..., help="Block X of the dungeon"),
    z: int = typer.Option(..., help="Block Z of the dungeon"),
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    mode: LabelMode = typer.Option(None, help="approximate or exact (default from settings)"),
) -> None:
    """Predict the tower type at a dungeon position."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    mode = mode or settings.label_mode
    result = predictor.resolve_label(world_seed, x, z, mode)
    print(
        {
            "position": (x, z),
            "label": label_text(result.label, result.approximate),
            "approximate": result.approximate,
        }
    )


@app.command("sweep")
def sweep(
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    frequency: int = typer.Option(None, help="Spawn frequency (default from settings)"),
    radius: int = typer.Option(None, help="Grid cells to search in each direction"),
    center_x: int = typer.Option(0, help="Block X to measure distances from"),
    center_z: int = typer.Option(0, help="Block Z to measure distances from"),
    max_distance: float = typer.Option(None, help="Only list dungeons within this many blocks"),
    mode: LabelMode = typer.Option(None, help="approximate or exact (default from settings)"),
    shards: int = typer.Option(1, help="Worker threads for the sweep"),
) -> None:
    """Tabulate predicted dungeons, closest to the centre first."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    frequency = settings.spawn_frequency if frequency is None else frequency
    radius = settings.search_radius if radius is None else radius
    mode = mode or settings.label_mode
    _check_frequency(frequency)

    center = BlockCoord(center_x, center_z)
    spawn_sweep = predictor.spawn_sweep(world_seed, frequency, mode)
    try:
        if shards > 1:
            candidates = asyncio.run(spawn_sweep.sweep_concurrent(radius, shards=shards))
        else:
            candidates = spawn_sweep.sweep(radius)
    except InvalidPlacementInput as exc:
        raise typer.BadParameter(str(exc)) from exc
    if max_distance is not None:
        candidates = spawn_sweep.in_range(candidates, center, max_distance)
    else:
        candidates.sort(key=lambda candidate: candidate.displaced.distance_to(center.x, center.z))

    print(
        candidate_table(
            candidates,
            origin=(center.x, center.z),
            title=f"Seed {world_seed}: {len(candidates)} dungeons",
        )
    )


@app.command("nearest")
def nearest(
    x: int = typer.Option(..., help="Current block X"),
    z: int = typer.Option(..., help="Current block Z"),
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    frequency: int = typer.Option(None, help="Spawn frequency (default from settings)"),
    radius: int = typer.Option(10, help="Grid cells to search in each direction"),
    mode: LabelMode = typer.Option(None, help="approximate or exact (default from settings)"),
) -> None:
    """Find the predicted dungeon closest to a block position."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    frequency = settings.spawn_frequency if frequency is None else frequency
    mode = mode or settings.label_mode
    _check_frequency(frequency)

    try:
        found = predictor.find_nearest(world_seed, frequency, x, z, radius, mode)
    except InvalidPlacementInput as exc:
        raise typer.BadParameter(str(exc)) from exc
    if found is None:
        print({"nearest_dungeon": None, "missing_requirements": ["No dungeons within the search radius"]})
        raise typer.Exit(code=1)

    dx = found.displaced.x - x
    dz = found.displaced.z - z
    print(
        {
            "nearest_dungeon": {
                "label": label_text(found.label, found.label_approximate),
                "location": (found.displaced.x, found.displaced.z),
                "chunk": (found.anchor.x, found.anchor.z),
                "distance_blocks": int(found.displaced.distance_to(x, z)),
                "direction": compass_direction(dx, dz),
            }
        }
    )


@app.command("grid")
def grid(
    seed: str = typer.Option(None, help=SEED_HELP),
    seedcracker_file: str = typer.Option(None, help=SEEDCRACKER_HELP),
    frequency: int = typer.Option(None, help="Spawn frequency (default from settings)"),
) -> None:
    """Show grid geometry and the anchors of the 3x3 cells around the origin."""
    world_seed = _resolve_seed(seed, seedcracker_file)
    predictor = _build_predictor(world_seed)
    frequency = settings.spawn_frequency if frequency is None else frequency
    _check_frequency(frequency)

    resolver = predictor.spawn_sweep(world_seed, frequency).grid
    cells = []
    for gx in (-1, 0, 1):
        for gz in (-1, 0, 1):
            anchor = resolver.anchor(GridCell(gx, gz))
            center = anchor.center_block
            cells.append({"grid": (gx, gz), "chunk": (anchor.x, anchor.z), "block": (center.x, center.z)})
    print({"grid": grid_summary(frequency, grid_parameters(frequency)), "cells": cells})


if __name__ == "__main__":
    app()
