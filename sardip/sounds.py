"""Sound effect requests and their playback."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Optional

DEFAULT_VOLUME = 1.0


class SoundEffect(Enum):
    """A sound effect; the value names its audio asset."""

    ERROR = "error"
    POOP = "poop"
    SCOOP = "poop_scoop"
    EATING = "eating"
    PLACE = "place"
    VICTORY = "victory"
    DEFEAT = "defeat"
    DRAW = "draw"
    LOWER = "lower"
    HIGHER = "higher"
    CORRECT = "correct"
    PLASTIC_DROP = "plastic_drop"


@dataclass
class PlaySoundEffect:
    """A request to play a sound, at full volume unless one is given."""

    sound: SoundEffect
    volume: Optional[float] = None

    def with_volume(self, volume: float) -> "PlaySoundEffect":
        self.volume = volume
        return self


def play_pending_sounds(
    events: Iterable[PlaySoundEffect],
    assets: Mapping[str, Any],
    play: Callable[[Any, float], Any],
) -> int:
    """Play every requested sound with ``play(asset, volume)``; return how many played."""
    played = 0
    for event in events:
        volume = DEFAULT_VOLUME if event.volume is None else event.volume
        play(assets[event.sound.value], volume)
        played += 1
    return played