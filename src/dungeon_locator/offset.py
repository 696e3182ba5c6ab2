"""Nearby-point sampling: the random polar offset applied to each anchor."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol

from .models import BlockCoord, Displacement, InvalidPlacementInput, TileCoord
from .rng import JavaRandom, to_int32, to_int64

BLOCKS_PER_TILE = 16
ANCHOR_BLOCK_OFFSET = 4


def anchor_block(tile: TileCoord) -> BlockCoord:
    """Block position the host starts its nearby-point search from."""
    return BlockCoord(
        x=to_int32(tile.x * BLOCKS_PER_TILE + ANCHOR_BLOCK_OFFSET),
        z=to_int32(tile.z * BLOCKS_PER_TILE + ANCHOR_BLOCK_OFFSET),
    )


def block_to_tile(x: int, z: int) -> TileCoord:
    return TileCoord(x >> 4, z >> 4)


def position_seed(world_seed: int, x: int, z: int) -> int:
    """Seed for per-position draws: a plain wrapping product, not the grid mix."""
    return to_int64(world_seed * x * z)


class TerrainValidator(Protocol):
    """Host-side check a retry driver may apply to each candidate position."""

    def is_viable(self, x: int, y_range: tuple[int, int], z: int) -> bool:
        """Return True when a dungeon can be placed at the column ``(x, z)``."""


@dataclass(frozen=True, slots=True)
class OffsetSampler:
    world_seed: int
    min_radius: int = 40
    max_radius: int = 100

    def __post_init__(self) -> None:
        if self.min_radius < 0 or self.max_radius <= self.min_radius:
            raise InvalidPlacementInput(
                f"invalid displacement radii: min={self.min_radius}, max={self.max_radius}"
            )

    def sample(self, seed: int) -> Displacement:
        """Draw one candidate displacement from a generator seeded with ``seed``.

        This is the single-candidate operation; a driver modelling the host's
        retry loop can call it repeatedly with seeds of its own choosing.
        """
        rng = JavaRandom(seed)
        distance = self.min_radius + rng.next_int(self.max_radius - self.min_radius)
        angle = rng.next_double() * 2 * math.pi
        # int() truncates toward zero like the host's fixed-point conversion.
        return Displacement(dx=int(math.cos(angle) * distance), dz=int(math.sin(angle) * distance))

    def displacement(self, tile: TileCoord) -> Displacement:
        start = anchor_block(tile)
        return self.sample(position_seed(self.world_seed, start.x, start.z))

    def displaced(self, tile: TileCoord) -> BlockCoord:
        start = anchor_block(tile)
        offset = self.sample(position_seed(self.world_seed, start.x, start.z))
        return BlockCoord(x=to_int32(start.x + offset.dx), z=to_int32(start.z + offset.dz))
