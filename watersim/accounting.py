"""Per-simulation water bookkeeping."""

from __future__ import annotations

from dataclasses import dataclass

from watersim.grid import FieldGrid


@dataclass(frozen=True)
class FrameStats:
    """Read-only counters exposed to the renderer after a frame."""

    frame: int
    total_water: float
    added_this_frame: float
    decayed_this_frame: float
    total_added: float
    total_decayed: float


@dataclass
class Accounting:
    """Added/decayed counters and running totals for one simulation instance."""

    frame: int = 0
    added_this_frame: float = 0.0
    decayed_this_frame: float = 0.0
    total_added: float = 0.0
    total_decayed: float = 0.0
    total_water: float = 0.0

    def begin_frame(self) -> None:
        self.frame += 1
        self.added_this_frame = 0.0
        self.decayed_this_frame = 0.0

    def record_added(self, delta: float) -> None:
        self.added_this_frame += delta

    def record_decayed(self, delta: float) -> None:
        self.decayed_this_frame += delta

    def end_frame(self, total_water: float) -> FrameStats:
        self.total_added += self.added_this_frame
        self.total_decayed += self.decayed_this_frame
        self.total_water = float(total_water)
        return self.stats()

    def stats(self) -> FrameStats:
        return FrameStats(
            frame=self.frame,
            total_water=self.total_water,
            added_this_frame=self.added_this_frame,
            decayed_this_frame=self.decayed_this_frame,
            total_added=self.total_added,
            total_decayed=self.total_decayed,
        )


def measure_total_water(grid: FieldGrid) -> float:
    """Sum water over every non-obstacle cell."""

    return grid.total_water()
