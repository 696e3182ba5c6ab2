"""Enumeration of spawn candidates over a square block of grid cells."""

from __future__ import annotations

import asyncio
import logging
import math

from .grid import GridResolver
from .labels import LabelClassifier, WeightedLabelClassifier
from .models import (
    BlockCoord,
    GridCell,
    InvalidPlacementInput,
    PlacementConfig,
    SpawnCandidate,
    TileCoord,
)
from .offset import OffsetSampler, anchor_block


def _check_radius(radius: int) -> None:
    if radius < 0:
        raise InvalidPlacementInput(f"search radius must not be negative, got {radius}")


class SpawnSweep:
    """Runs grid resolution, displacement and labelling for each cell in range.

    Candidates are produced in row-major ``(gx, gz)`` order and are recomputed on
    every call; nothing is cached between queries.
    """

    def __init__(
        self,
        world_seed: int,
        config: PlacementConfig | None = None,
        *,
        labels: LabelClassifier | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.world_seed = world_seed
        self.config = config or PlacementConfig()
        self._grid = GridResolver(world_seed, self.config)
        self._sampler = OffsetSampler(world_seed, self.config.min_radius, self.config.max_radius)
        self._labels = labels or WeightedLabelClassifier(world_seed, self.config.label_weights)
        self._logger = logger or logging.getLogger("dungeon_locator.sweep")

    @property
    def grid(self) -> GridResolver:
        return self._grid

    @staticmethod
    def cells(radius: int) -> list[GridCell]:
        _check_radius(radius)
        return [GridCell(gx, gz) for gx in range(-radius, radius + 1) for gz in range(-radius, radius + 1)]

    def candidate(self, cell: GridCell) -> SpawnCandidate:
        anchor = self._grid.anchor(cell)
        displaced = self._sampler.displaced(anchor)
        resolved = self._labels.resolve(displaced)
        return SpawnCandidate(
            cell=cell,
            anchor=anchor,
            anchor_block=anchor_block(anchor),
            displaced=displaced,
            label=resolved.label,
            label_approximate=resolved.approximate,
        )

    def sweep(self, radius: int) -> list[SpawnCandidate]:
        candidates = [self.candidate(cell) for cell in self.cells(radius)]
        self._logger.info(
            "sweep_completed",
            extra={"radius": radius, "frequency": self.config.frequency, "candidates": len(candidates)},
        )
        return candidates

    async def sweep_concurrent(self, radius: int, *, shards: int = 4) -> list[SpawnCandidate]:
        """Same result as :meth:`sweep`, with grid rows split across worker threads."""
        _check_radius(radius)
        if shards <= 0:
            raise InvalidPlacementInput(f"shards must be positive, got {shards}")

        rows = list(range(-radius, radius + 1))
        size = math.ceil(len(rows) / shards)
        chunks = [rows[start : start + size] for start in range(0, len(rows), size)]

        def _run_rows(gxs: list[int]) -> list[SpawnCandidate]:
            return [self.candidate(GridCell(gx, gz)) for gx in gxs for gz in range(-radius, radius + 1)]

        results = await asyncio.gather(*(asyncio.to_thread(_run_rows, chunk) for chunk in chunks))
        candidates = [candidate for shard in results for candidate in shard]
        self._logger.info(
            "sweep_completed",
            extra={"radius": radius, "frequency": self.config.frequency, "candidates": len(candidates), "shards": len(chunks)},
        )
        return candidates

    def contains_cell(self, tile: TileCoord) -> bool:
        return self._grid.contains(tile)

    def nearest(self, radius: int, x: float, z: float) -> SpawnCandidate | None:
        nearest: SpawnCandidate | None = None
        best = math.inf
        for candidate in self.sweep(radius):
            distance = candidate.displaced.distance_to(x, z)
            if distance < best:
                best = distance
                nearest = candidate
        return nearest

    def within(self, radius: int, center: BlockCoord, max_distance: float) -> list[SpawnCandidate]:
        """Candidates no further than ``max_distance`` blocks from ``center``, closest first."""
        return self.in_range(self.sweep(radius), center, max_distance)

    @staticmethod
    def in_range(candidates: list[SpawnCandidate], center: BlockCoord, max_distance: float) -> list[SpawnCandidate]:
        in_range = [
            candidate
            for candidate in candidates
            if candidate.displaced.distance_to(center.x, center.z) <= max_distance
        ]
        return sorted(in_range, key=lambda candidate: candidate.displaced.distance_to(center.x, center.z))
