"""Fixed-step simulation clock driven by wall-clock time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional

MOOD_HISTORY_UPDATE = timedelta(minutes=5)
HUNGER_MOOD_UPDATE = timedelta(minutes=2)
FUN_MOOD_UPDATE = timedelta(minutes=2)
MONEY_MOOD_UPDATE = timedelta(hours=2)
CLEANLINESS_MOOD_UPDATE = timedelta(minutes=2)
BREED_RESET_INTERVAL = timedelta(minutes=30)
EGG_HATCH_ATTEMPT_INTERVAL = timedelta(minutes=30)
MAX_EGG_LIFE = timedelta(days=2)

# Points lost per second.
HUNGER_TICK_DOWN = 2.0 / 60.0
FUN_TICK_DOWN = 1.0 / 120.0

DEFAULT_TIMESTEP = timedelta(seconds=1)


class SimulationState(Enum):
    PAUSED = "Paused"
    RUNNING = "Running"

    @classmethod
    def default(cls) -> "SimulationState":
        return cls.PAUSED


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SimTime:
    """Accumulates scaled wall-clock time and spends it in fixed steps."""

    overstep: timedelta = timedelta(0)
    timestep: timedelta = DEFAULT_TIMESTEP
    last_run: datetime = field(default_factory=_utc_now)
    elapsed: timedelta = timedelta(0)

    def expend(self) -> bool:
        """Spend one timestep of accumulated time; False when not enough is left."""
        if self.overstep < self.timestep:
            return False
        self.overstep -= self.timestep
        self.elapsed += self.timestep
        return True

    def accumulate(self, now: datetime, scale: float) -> None:
        """Add the time since the last run, multiplied by ``scale``."""
        delta = now - self.last_run
        if delta < timedelta(0):
            raise ValueError("Time went backwards since the last run")
        if scale < 0:
            raise ValueError(f"Time scale must not be negative: {scale}")
        self.overstep += delta * scale
        self.last_run = now


def run_simulation_schedule(
    sim_time: SimTime,
    state: SimulationState,
    scale: float,
    update: Callable[[SimTime], None],
    now: Optional[datetime] = None,
) -> int:
    """Accumulate time and, while running, call ``update`` once per step.

    Time keeps accumulating while paused. Returns the number of steps run.
    """
    sim_time.accumulate(now if now is not None else _utc_now(), scale)
    if state is SimulationState.PAUSED:
        return 0
    steps = 0
    while sim_time.expend():
        update(sim_time)
        steps += 1
    return steps