from __future__ import annotations

import logging

from .grid import GridResolver
from .labels import EnvironmentClassifier, build_label_classifier
from .models import (
    BlockCoord,
    Displacement,
    LabelMode,
    LabelResult,
    PlacementConfig,
    SpawnCandidate,
    StructureLabel,
    TileCoord,
)
from .offset import OffsetSampler, block_to_tile
from .sweep import SpawnSweep


class DungeonPredictor:
    """Query facade over the placement pipeline.

    Each call builds fresh resolvers from its arguments, so results depend only on
    ``(seed, frequency, coordinates)`` plus the immutable base config.
    """

    def __init__(
        self,
        config: PlacementConfig | None = None,
        *,
        environment: EnvironmentClassifier | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or PlacementConfig()
        self.environment = environment
        self._logger = logger or logging.getLogger("dungeon_locator.predictor")

    def predict_chunks(self, seed: int, frequency: int, radius: int) -> list[TileCoord]:
        sweep = self.spawn_sweep(seed, frequency)
        return [sweep.grid.anchor(cell) for cell in sweep.cells(radius)]

    def will_spawn_at(self, seed: int, frequency: int, tx: int, tz: int) -> bool:
        return GridResolver(seed, self.config.with_frequency(frequency)).contains(TileCoord(tx, tz))

    def predict_displacement(self, seed: int, tx: int, tz: int) -> Displacement:
        sampler = OffsetSampler(seed, self.config.min_radius, self.config.max_radius)
        return sampler.displacement(TileCoord(tx, tz))

    def predict_label(self, seed: int, x: int, z: int, mode: LabelMode = LabelMode.APPROXIMATE) -> StructureLabel:
        return self.resolve_label(seed, x, z, mode).label

    def resolve_label(self, seed: int, x: int, z: int, mode: LabelMode = LabelMode.APPROXIMATE) -> LabelResult:
        """Label at block ``(x, z)`` and whether it came from the approximate table."""
        classifier = build_label_classifier(mode, world_seed=seed, config=self.config, environment=self.environment)
        result = classifier.resolve(BlockCoord(x, z))
        self._logger.debug(
            "label_predicted",
            extra={"x": x, "z": z, "mode": mode.value, "approximate": result.approximate, "label": result.label.value},
        )
        return result

    def predict_spawns(
        self,
        seed: int,
        frequency: int,
        radius: int,
        mode: LabelMode = LabelMode.APPROXIMATE,
    ) -> list[SpawnCandidate]:
        return self.spawn_sweep(seed, frequency, mode).sweep(radius)

    def find_nearest(
        self,
        seed: int,
        frequency: int,
        x: int,
        z: int,
        radius: int,
        mode: LabelMode = LabelMode.APPROXIMATE,
    ) -> SpawnCandidate | None:
        nearest = self.spawn_sweep(seed, frequency, mode).nearest(radius, x, z)
        if nearest is None:
            self._logger.info("nearest_not_found", extra={"x": x, "z": z, "radius": radius})
        return nearest

    def check_block(self, seed: int, frequency: int, x: int, z: int) -> BlockCoord | None:
        """Predicted entrance when the tile containing block ``(x, z)`` holds an anchor."""
        tile = block_to_tile(x, z)
        if not self.will_spawn_at(seed, frequency, tile.x, tile.z):
            return None
        return OffsetSampler(seed, self.config.min_radius, self.config.max_radius).displaced(tile)

    def spawn_sweep(self, seed: int, frequency: int, mode: LabelMode = LabelMode.APPROXIMATE) -> SpawnSweep:
        config = self.config.with_frequency(frequency)
        labels = build_label_classifier(mode, world_seed=seed, config=config, environment=self.environment)
        return SpawnSweep(seed, config, labels=labels)
