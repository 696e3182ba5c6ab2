"""Offline dungeon spawn prediction from a world seed."""

from .models import (
    BlockCoord,
    Displacement,
    EnvironmentCategory,
    GridCell,
    InvalidPlacementInput,
    LabelMode,
    LabelResult,
    PlacementConfig,
    SpawnCandidate,
    StructureLabel,
    TileCoord,
)
from .predictor import DungeonPredictor
from .rng import JavaRandom
from .sweep import SpawnSweep

__all__ = [
    "BlockCoord",
    "Displacement",
    "DungeonPredictor",
    "EnvironmentCategory",
    "GridCell",
    "InvalidPlacementInput",
    "JavaRandom",
    "LabelMode",
    "LabelResult",
    "PlacementConfig",
    "SpawnCandidate",
    "SpawnSweep",
    "StructureLabel",
    "TileCoord",
]
