from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum


class InvalidPlacementInput(ValueError):
    """Raised when prediction parameters are rejected before any computation."""


class StructureLabel(str, Enum):
    """Tower/theme variants a dungeon can be assigned."""

    ROGUE = "ROGUE"
    PYRAMID = "PYRAMID"
    JUNGLE = "JUNGLE"
    WITCH = "WITCH"
    HOUSE = "HOUSE"
    BUNKER = "BUNKER"
    ETHO = "ETHO"
    ENIKO = "ENIKO"
    UNKNOWN = "UNKNOWN"


DEFAULT_LABEL = StructureLabel.ROGUE


class EnvironmentCategory(str, Enum):
    """Coarse biome families recognized when labelling from real environment data."""

    DESERT = "desert"
    JUNGLE = "jungle"
    SWAMP = "swamp"
    MOUNTAIN = "mountain"
    FOREST = "forest"
    PLAINS = "plains"


class LabelMode(str, Enum):
    APPROXIMATE = "approximate"
    EXACT = "exact"


# Draw order matters: the categorical draw walks this table front to back.
DEFAULT_LABEL_WEIGHTS: tuple[tuple[StructureLabel, int], ...] = (
    (StructureLabel.ROGUE, 30),
    (StructureLabel.PYRAMID, 10),
    (StructureLabel.JUNGLE, 10),
    (StructureLabel.WITCH, 10),
    (StructureLabel.HOUSE, 15),
    (StructureLabel.BUNKER, 10),
    (StructureLabel.ETHO, 10),
    (StructureLabel.ENIKO, 5),
)

GRID_SEED_TAG = 10387312


@dataclass(frozen=True, slots=True)
class PlacementConfig:
    """Immutable placement parameters threaded through every prediction call."""

    frequency: int = 10
    min_radius: int = 40
    max_radius: int = 100
    grid_seed_tag: int = GRID_SEED_TAG
    label_weights: tuple[tuple[StructureLabel, int], ...] = DEFAULT_LABEL_WEIGHTS

    def __post_init__(self) -> None:
        if self.frequency <= 0:
            raise InvalidPlacementInput(f"frequency must be positive, got {self.frequency}")
        if self.min_radius < 0:
            raise InvalidPlacementInput(f"min_radius must not be negative, got {self.min_radius}")
        if self.max_radius <= self.min_radius:
            raise InvalidPlacementInput(
                f"max_radius ({self.max_radius}) must be greater than min_radius ({self.min_radius})"
            )
        if not self.label_weights:
            raise InvalidPlacementInput("label weight table is empty")
        if any(weight <= 0 for _, weight in self.label_weights):
            raise InvalidPlacementInput("label weights must all be positive")

    @property
    def total_weight(self) -> int:
        return sum(weight for _, weight in self.label_weights)

    def with_frequency(self, frequency: int) -> PlacementConfig:
        return replace(self, frequency=frequency)


@dataclass(frozen=True, slots=True)
class GridParameters:
    """Grid geometry in tiles: cells are ``max_span`` wide, anchors fall in ``[0, max_span - min_span)``."""

    min_span: int
    max_span: int

    @property
    def spread(self) -> int:
        return self.max_span - self.min_span


@dataclass(frozen=True, slots=True)
class GridCell:
    gx: int
    gz: int


@dataclass(frozen=True, slots=True)
class TileCoord:
    """Coarse (chunk) coordinate; one tile spans 16 blocks."""

    x: int
    z: int

    @property
    def center_block(self) -> BlockCoord:
        return BlockCoord(self.x * 16 + 8, self.z * 16 + 8)


@dataclass(frozen=True, slots=True)
class BlockCoord:
    x: int
    z: int

    def distance_to(self, x: float, z: float) -> float:
        return math.dist((self.x, self.z), (x, z))


@dataclass(frozen=True, slots=True)
class Displacement:
    dx: int
    dz: int

    @property
    def length(self) -> float:
        return math.hypot(self.dx, self.dz)


@dataclass(frozen=True, slots=True)
class LabelResult:
    """A label plus whether it came from the approximate weighted table."""

    label: StructureLabel
    approximate: bool


@dataclass(frozen=True, slots=True)
class SpawnCandidate:
    """One predicted dungeon: the grid cell, its anchor tile and the displaced block position.

    ``label_approximate`` is True unless the label came from real environment data.
    """

    cell: GridCell
    anchor: TileCoord
    anchor_block: BlockCoord
    displaced: BlockCoord
    label: StructureLabel = StructureLabel.UNKNOWN
    label_approximate: bool = True


@dataclass(slots=True)
class SeedKnowledge:
    seed: int | None
    confidence: float
    source: str
    requirements_missing: list[str] = field(default_factory=list)
    details: dict[str, int] = field(default_factory=dict)
