from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Iterable, Protocol

from .models import (
    DEFAULT_LABEL,
    DEFAULT_LABEL_WEIGHTS,
    BlockCoord,
    EnvironmentCategory,
    InvalidPlacementInput,
    LabelMode,
    LabelResult,
    PlacementConfig,
    StructureLabel,
)
from .offset import position_seed
from .rng import JavaRandom

logger = logging.getLogger("dungeon_locator.labels")

CATEGORY_PRIORITY: tuple[tuple[EnvironmentCategory, StructureLabel], ...] = (
    (EnvironmentCategory.DESERT, StructureLabel.PYRAMID),
    (EnvironmentCategory.JUNGLE, StructureLabel.JUNGLE),
    (EnvironmentCategory.SWAMP, StructureLabel.WITCH),
    (EnvironmentCategory.MOUNTAIN, StructureLabel.BUNKER),
    (EnvironmentCategory.FOREST, StructureLabel.ETHO),
    (EnvironmentCategory.PLAINS, StructureLabel.HOUSE),
)

BIOME_KEYWORDS: dict[str, EnvironmentCategory] = {
    "desert": EnvironmentCategory.DESERT,
    "badlands": EnvironmentCategory.DESERT,
    "mesa": EnvironmentCategory.DESERT,
    "jungle": EnvironmentCategory.JUNGLE,
    "bamboo": EnvironmentCategory.JUNGLE,
    "swamp": EnvironmentCategory.SWAMP,
    "mangrove": EnvironmentCategory.SWAMP,
    "mountain": EnvironmentCategory.MOUNTAIN,
    "hills": EnvironmentCategory.MOUNTAIN,
    "peaks": EnvironmentCategory.MOUNTAIN,
    "slopes": EnvironmentCategory.MOUNTAIN,
    "forest": EnvironmentCategory.FOREST,
    "taiga": EnvironmentCategory.FOREST,
    "grove": EnvironmentCategory.FOREST,
    "plains": EnvironmentCategory.PLAINS,
    "meadow": EnvironmentCategory.PLAINS,
    "savanna": EnvironmentCategory.PLAINS,
}


class LabelClassifier(Protocol):
    approximate: bool

    def classify(self, point: BlockCoord) -> StructureLabel:
        """Return the structure label for a final dungeon position."""

    def resolve(self, point: BlockCoord) -> LabelResult:
        """Like :meth:`classify`, also reporting whether the label is approximate."""


class EnvironmentClassifier(Protocol):
    def classify(self, x: int, z: int) -> set[EnvironmentCategory] | None:
        """Return the environment categories at ``(x, z)``, or None when unavailable."""


def categories_for_biome(biome: str) -> set[EnvironmentCategory]:
    name = biome.lower().rsplit(":", 1)[-1]
    return {category for keyword, category in BIOME_KEYWORDS.items() if keyword in name}


def label_for_categories(categories: Iterable[EnvironmentCategory]) -> StructureLabel:
    present = set(categories)
    for category, label in CATEGORY_PRIORITY:
        if category in present:
            return label
    return DEFAULT_LABEL


class WeightedLabelClassifier:
    """Low-fidelity placeholder: a seeded weighted draw, unrelated to real biomes."""

    approximate = True

    def __init__(self, world_seed: int, weights: tuple[tuple[StructureLabel, int], ...] | None = None) -> None:
        if weights is None:
            weights = DEFAULT_LABEL_WEIGHTS
        if not weights:
            raise InvalidPlacementInput("label weight table is empty")
        if any(weight <= 0 for _, weight in weights):
            raise InvalidPlacementInput("label weights must all be positive")
        self._world_seed = world_seed
        self._weights = weights
        self._total = sum(weight for _, weight in weights)

    def classify(self, point: BlockCoord) -> StructureLabel:
        rng = JavaRandom(position_seed(self._world_seed, point.x, point.z))
        selection = rng.next_int(self._total)
        cumulative = 0
        for label, weight in self._weights:
            cumulative += weight
            if selection < cumulative:
                return label
        return DEFAULT_LABEL

    def resolve(self, point: BlockCoord) -> LabelResult:
        return LabelResult(self.classify(point), approximate=True)


class EnvironmentLabelClassifier:
    """Labels from real environment data, answering from ``fallback`` when data is unavailable.

    Fallback answers are reported as approximate by :meth:`resolve`.
    """

    approximate = False

    def __init__(self, environment: EnvironmentClassifier, fallback: LabelClassifier) -> None:
        self._environment = environment
        self._fallback = fallback

    def classify(self, point: BlockCoord) -> StructureLabel:
        return self.resolve(point).label

    def resolve(self, point: BlockCoord) -> LabelResult:
        categories = self._environment.classify(point.x, point.z)
        if categories is None:
            logger.warning("environment_unavailable", extra={"x": point.x, "z": point.z})
            return LabelResult(self._fallback.classify(point), approximate=True)
        return LabelResult(label_for_categories(categories), approximate=False)


class CliEnvironmentClassifier:
    """Environment lookup through an external biome tool.

    The binary must support:
      - biome-at --seed <seed> --x <x> --z <z> --version <version> --json

    and print JSON with either ``categories`` (list of names) or ``biome`` (an id).
    """

    def __init__(
        self,
        binary_path: str,
        seed: int,
        minecraft_version: str = "1.12.2",
        command: str = "biome-at",
    ) -> None:
        self.binary_path = str(Path(binary_path))
        self.seed = seed
        self.minecraft_version = minecraft_version
        self.command = command

    def classify(self, x: int, z: int) -> set[EnvironmentCategory] | None:
        payload = self._run(x=x, z=z)
        if payload is None:
            return None

        if isinstance(payload.get("categories"), list):
            known = {category.value for category in EnvironmentCategory}
            return {EnvironmentCategory(name.lower()) for name in payload["categories"] if str(name).lower() in known}
        if isinstance(payload.get("biome"), str):
            return categories_for_biome(payload["biome"])
        return None

    def _run(self, *, x: int, z: int) -> dict | None:
        cmd = [
            self.binary_path,
            self.command,
            "--seed",
            str(self.seed),
            "--x",
            str(x),
            "--z",
            str(z),
            "--version",
            self.minecraft_version,
            "--json",
        ]

        try:
            result = subprocess.run(cmd, check=True, text=True, capture_output=True)
        except (FileNotFoundError, subprocess.CalledProcessError) as exc:
            logger.debug("environment_backend_failed", extra={"error": type(exc).__name__})
            return None

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError:
            return None

        if not isinstance(payload, dict):
            return None
        return payload


def build_label_classifier(
    mode: LabelMode,
    *,
    world_seed: int,
    config: PlacementConfig | None = None,
    environment: EnvironmentClassifier | None = None,
) -> LabelClassifier:
    """Pick the classifier for ``mode``; exact mode without a backend degrades to approximate."""
    config = config or PlacementConfig()
    approximate = WeightedLabelClassifier(world_seed, config.label_weights)
    if mode is LabelMode.EXACT:
        if environment is not None:
            return EnvironmentLabelClassifier(environment, fallback=approximate)
        logger.warning("exact_labels_unavailable", extra={"fallback": LabelMode.APPROXIMATE.value})
    return approximate
