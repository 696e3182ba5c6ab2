"""CLI-side presentation helpers for predicted dungeons."""

from __future__ import annotations

from rich.table import Table

from dungeon_locator.models import GridParameters, SpawnCandidate, StructureLabel


def compass_direction(dx: float, dz: float) -> str:
    """Four-point heading from a player to a target; +z points South."""
    if abs(dx) > abs(dz):
        return "East" if dx > 0 else "West"
    return "South" if dz > 0 else "North"


def label_text(label: StructureLabel, approximate: bool) -> str:
    return f"{label.value} (approx.)" if approximate else label.value


def grid_summary(frequency: int, params: GridParameters) -> dict:
    return {
        "frequency": frequency,
        "min_span_tiles": params.min_span,
        "cell_size_tiles": params.max_span,
        "cell_size_blocks": params.max_span * 16,
    }


def candidate_table(
    candidates: list[SpawnCandidate],
    *,
    origin: tuple[int, int] = (0, 0),
    title: str | None = None,
) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Label")
    table.add_column("Cell")
    table.add_column("Chunk")
    table.add_column("Base point")
    table.add_column("Dungeon")
    table.add_column("Distance", justify="right")

    for index, candidate in enumerate(candidates, start=1):
        distance = candidate.displaced.distance_to(*origin)
        table.add_row(
            str(index),
            label_text(candidate.label, candidate.label_approximate),
            f"{candidate.cell.gx}, {candidate.cell.gz}",
            f"{candidate.anchor.x}, {candidate.anchor.z}",
            f"{candidate.anchor_block.x}, {candidate.anchor_block.z}",
            f"{candidate.displaced.x}, {candidate.displaced.z}",
            f"{distance:.0f}",
        )
    return table
