from __future__ import annotations

import asyncio

import pytest

from dungeon_locator.models import (
    BlockCoord,
    GridCell,
    InvalidPlacementInput,
    PlacementConfig,
    StructureLabel,
    TileCoord,
)
from dungeon_locator.sweep import SpawnSweep

SEED = 123456789


def test_sweep_has_one_candidate_per_cell_in_row_major_order() -> None:
    candidates = SpawnSweep(SEED).sweep(2)

    assert len(candidates) == 25
    assert [c.cell for c in candidates] == [GridCell(gx, gz) for gx in range(-2, 3) for gz in range(-2, 3)]


def test_radius_zero_yields_origin_cell() -> None:
    (candidate,) = SpawnSweep(SEED).sweep(0)

    assert candidate.cell == GridCell(0, 0)
    assert candidate.anchor == TileCoord(7, 13)
    assert candidate.anchor_block == BlockCoord(116, 212)
    assert candidate.displaced == BlockCoord(163, 153)
    assert candidate.label is StructureLabel.BUNKER


def test_sweep_agrees_with_membership() -> None:
    sweep = SpawnSweep(SEED)
    for candidate in sweep.sweep(3):
        assert sweep.contains_cell(candidate.anchor)
        shifted = TileCoord(candidate.anchor.x + 1, candidate.anchor.z + 1)
        assert not sweep.contains_cell(shifted)


def test_sweep_is_reproducible() -> None:
    assert SpawnSweep(SEED).sweep(2) == SpawnSweep(SEED).sweep(2)


def test_concurrent_sweep_matches_sequential() -> None:
    sweep = SpawnSweep(SEED, PlacementConfig(frequency=7))
    expected = sweep.sweep(4)

    assert asyncio.run(sweep.sweep_concurrent(4, shards=3)) == expected
    assert asyncio.run(sweep.sweep_concurrent(4, shards=50)) == expected


def test_nearest_picks_closest_displaced_position() -> None:
    sweep = SpawnSweep(SEED)
    nearest = sweep.nearest(2, 160, 150)

    assert nearest is not None
    assert nearest.cell == GridCell(0, 0)
    best = min(c.displaced.distance_to(160, 150) for c in sweep.sweep(2))
    assert nearest.displaced.distance_to(160, 150) == best


def test_within_filters_and_sorts_by_distance() -> None:
    sweep = SpawnSweep(SEED)
    center = BlockCoord(0, 0)
    found = sweep.within(3, center, 800)

    distances = [c.displaced.distance_to(0, 0) for c in found]
    assert distances == sorted(distances)
    assert all(distance <= 800 for distance in distances)
    assert BlockCoord(163, 153) in {c.displaced for c in found}


@pytest.mark.parametrize("radius", [-1, -10])
def test_negative_radius_rejected(radius: int) -> None:
    sweep = SpawnSweep(SEED)
    with pytest.raises(InvalidPlacementInput):
        sweep.sweep(radius)
    with pytest.raises(InvalidPlacementInput):
        sweep.nearest(radius, 0, 0)
    with pytest.raises(InvalidPlacementInput):
        asyncio.run(sweep.sweep_concurrent(radius))


def test_invalid_config_rejected_before_sweep() -> None:
    with pytest.raises(InvalidPlacementInput):
        SpawnSweep(SEED, PlacementConfig(frequency=0))
