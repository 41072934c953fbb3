"""Idle thoughts chosen for entities from the rule set."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Hashable, Iterable, Mapping, Optional

from sardip.events import ActionEvent
from sardip.facts import Concept, FactDb, FactQuery, RuleSet

_log = logging.getLogger(__name__)

THINK_INTERVAL = 60.0


@dataclass
class ThinkTimer:
    """A repeating timer, in seconds."""

    duration: float = THINK_INTERVAL
    elapsed: float = 0.0

    def tick(self, delta: float) -> bool:
        """Advance by ``delta`` seconds; True when the timer finished during this tick."""
        self.elapsed += delta
        if self.elapsed >= self.duration:
            self.elapsed %= self.duration
            return True
        return False

    def reset(self) -> None:
        self.elapsed = 0.0


@dataclass
class Thinker:
    """An entity that thinks, with its own facts and last thought."""

    entity: Hashable
    timer: ThinkTimer = field(default_factory=ThinkTimer)
    thought: Optional[str] = None
    facts: FactDb = field(default_factory=FactDb)


@dataclass
class TryThinkEvent:
    entity: Hashable
    concept: Concept
    facts: FactDb = field(default_factory=FactDb)

    def with_facts(self, facts: FactDb) -> "TryThinkEvent":
        self.facts = facts
        return self


def trigger_idle_thoughts(thinkers: Iterable[Thinker], delta: float) -> list[TryThinkEvent]:
    """Tick every thinker's timer and return idle-thought events for those that fired."""
    return [
        TryThinkEvent(thinker.entity, Concept.THINK_IDLE)
        for thinker in thinkers
        if thinker.timer.tick(delta)
    ]


def handle_thought(
    event: TryThinkEvent,
    thinkers: Mapping[Hashable, Thinker],
    rule_set: RuleSet,
    global_facts: FactDb,
    rng: Optional[random.Random] = None,
) -> Optional[ActionEvent]:
    """Let the event's thinker think; return the resulting actions, if any rule matched."""
    thinker = thinkers.get(event.entity)
    if thinker is None:
        raise KeyError(f"Failed to get thinker entity {event.entity!r}")

    query = (
        FactQuery(Concept.THINK_IDLE)
        .add_fact_db(global_facts)
        .add_fact_db(thinker.facts)
        .add_fact_db(event.facts)
    )
    response = query.run(rule_set, rng)
    action = None
    if response is not None:
        texts = response.now.get_text()
        thinker.thought = texts[0] if texts else None
        _log.info("%r thinks: %r", thinker.entity, thinker.thought)
        action = ActionEvent(response.now).with_entity(thinker.entity)
    thinker.timer.reset()
    return action