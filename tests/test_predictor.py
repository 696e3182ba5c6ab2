from __future__ import annotations

import pytest

from dungeon_locator.models import (
    BlockCoord,
    Displacement,
    EnvironmentCategory,
    InvalidPlacementInput,
    LabelMode,
    LabelResult,
    PlacementConfig,
    StructureLabel,
    TileCoord,
)
from dungeon_locator.predictor import DungeonPredictor

SEED = 123456789


class DesertEverywhere:
    def classify(self, x: int, z: int) -> set[EnvironmentCategory] | None:
        return {EnvironmentCategory.DESERT}


class NoEnvironmentData:
    def classify(self, x: int, z: int) -> set[EnvironmentCategory] | None:
        return None


def test_reference_scenario() -> None:
    predictor = DungeonPredictor()

    chunks = predictor.predict_chunks(SEED, 10, 0)
    assert chunks == [TileCoord(7, 13)]
    assert predictor.will_spawn_at(SEED, 10, 7, 13) is True
    assert predictor.will_spawn_at(SEED, 10, 8, 14) is False


def test_predict_chunks_covers_square() -> None:
    chunks = DungeonPredictor().predict_chunks(SEED, 10, 1)

    assert len(chunks) == 9
    assert chunks[0] == TileCoord(-21, -15)
    assert chunks[4] == TileCoord(7, 13)
    assert chunks[7] == TileCoord(44, 6)


def test_predict_chunks_respects_frequency() -> None:
    assert DungeonPredictor().predict_chunks(SEED, 1, 0) == [TileCoord(1, 1)]


def test_predict_displacement() -> None:
    assert DungeonPredictor().predict_displacement(SEED, 7, 13) == Displacement(47, -59)


def test_predict_label_modes() -> None:
    approximate = DungeonPredictor()
    exact = DungeonPredictor(environment=DesertEverywhere())

    assert approximate.predict_label(SEED, 163, 153) is StructureLabel.BUNKER
    assert approximate.predict_label(SEED, 163, 153, LabelMode.EXACT) is StructureLabel.BUNKER
    assert exact.predict_label(SEED, 163, 153, LabelMode.EXACT) is StructureLabel.PYRAMID
    assert exact.predict_label(SEED, 163, 153, LabelMode.APPROXIMATE) is StructureLabel.BUNKER


def test_predict_spawns_in_exact_mode_labels_every_candidate() -> None:
    spawns = DungeonPredictor(environment=DesertEverywhere()).predict_spawns(SEED, 10, 1, LabelMode.EXACT)
    assert {spawn.label for spawn in spawns} == {StructureLabel.PYRAMID}


def test_find_nearest() -> None:
    nearest = DungeonPredictor().find_nearest(SEED, 10, 0, 0, 2)

    assert nearest is not None
    assert nearest.displaced == BlockCoord(163, 153)


def test_check_block_returns_entrance_for_anchor_chunk() -> None:
    predictor = DungeonPredictor()

    assert predictor.check_block(SEED, 10, 7 * 16 + 3, 13 * 16 + 15) == BlockCoord(163, 153)
    assert predictor.check_block(SEED, 10, 0, 0) is None


def test_queries_are_deterministic() -> None:
    predictor = DungeonPredictor()
    assert predictor.predict_spawns(SEED, 10, 2) == predictor.predict_spawns(SEED, 10, 2)
    assert predictor.predict_displacement(SEED, -30, 14) == predictor.predict_displacement(SEED, -30, 14)


def test_custom_radii_flow_through() -> None:
    predictor = DungeonPredictor(PlacementConfig(min_radius=10, max_radius=11))
    assert predictor.predict_displacement(SEED, 7, 13).length < 11


@pytest.mark.parametrize(("frequency", "radius"), [(0, 1), (-5, 1), (10, -1)])
def test_invalid_parameters_rejected(frequency: int, radius: int) -> None:
    with pytest.raises(InvalidPlacementInput):
        DungeonPredictor().predict_chunks(SEED, frequency, radius)


def test_exact_labels_from_environment_are_not_approximate() -> None:
    predictor = DungeonPredictor(environment=DesertEverywhere())

    assert predictor.resolve_label(SEED, 163, 153, LabelMode.EXACT) == LabelResult(StructureLabel.PYRAMID, False)
    spawns = predictor.predict_spawns(SEED, 10, 1, LabelMode.EXACT)
    assert not any(spawn.label_approximate for spawn in spawns)


def test_failing_environment_marks_fallback_labels_approximate() -> None:
    predictor = DungeonPredictor(environment=NoEnvironmentData())

    assert predictor.resolve_label(SEED, 163, 153, LabelMode.EXACT) == LabelResult(StructureLabel.BUNKER, True)
    nearest = predictor.find_nearest(SEED, 10, 0, 0, 1, LabelMode.EXACT)
    assert nearest is not None
    assert nearest.label is StructureLabel.BUNKER
    assert nearest.label_approximate is True


def test_approximate_mode_always_flags_labels() -> None:
    spawns = DungeonPredictor(environment=DesertEverywhere()).predict_spawns(SEED, 10, 1)
    assert all(spawn.label_approximate for spawn in spawns)
