"""Grid-cell placement: which tile of each coarse cell holds the dungeon anchor."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import GridCell, GridParameters, InvalidPlacementInput, PlacementConfig, TileCoord
from .rng import JavaRandom, to_int32, to_int64

# Coordinate mix used by the host's per-region seeded random factory.
CELL_X_MULTIPLIER = 341873128712
CELL_Z_MULTIPLIER = 132897987541
CELL_SEED_SCRAMBLE = 14357617


def grid_parameters(frequency: int) -> GridParameters:
    if frequency <= 0:
        raise InvalidPlacementInput(f"frequency must be positive, got {frequency}")
    # Integer division on positive operands, then floored to the host's minimum spans.
    min_span = max(2, 8 * frequency // 10)
    max_span = max(8, 32 * frequency // 10)
    return GridParameters(min_span=min_span, max_span=max_span)


def cell_seed(world_seed: int, cell: GridCell, tag: int) -> int:
    mixed = cell.gx * CELL_X_MULTIPLIER + cell.gz * CELL_Z_MULTIPLIER + world_seed + tag
    return to_int64(mixed * CELL_SEED_SCRAMBLE)


def seed_for_cell(world_seed: int, cell: GridCell, tag: int) -> JavaRandom:
    return JavaRandom(cell_seed(world_seed, cell, tag))


@dataclass(frozen=True, slots=True)
class GridResolver:
    """Maps grid cells to anchor tiles and tiles back to the cell that may own them."""

    world_seed: int
    config: PlacementConfig = field(default_factory=PlacementConfig)

    @property
    def parameters(self) -> GridParameters:
        return grid_parameters(self.config.frequency)

    def anchor(self, cell: GridCell) -> TileCoord:
        params = self.parameters
        rng = seed_for_cell(self.world_seed, cell, self.config.grid_seed_tag)
        ox = rng.next_int(params.spread)
        oz = rng.next_int(params.spread)
        return TileCoord(
            x=to_int32(cell.gx * params.max_span + ox),
            z=to_int32(cell.gz * params.max_span + oz),
        )

    def cell_of(self, tile: TileCoord) -> GridCell:
        span = self.parameters.max_span
        # Floor division equals the host's shift-then-truncate handling of negative tiles.
        return GridCell(gx=tile.x // span, gz=tile.z // span)

    def contains(self, tile: TileCoord) -> bool:
        """Return True when ``tile`` is the anchor of the grid cell that contains it."""
        return self.anchor(self.cell_of(tile)) == tile
