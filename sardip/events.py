"""Applying response actions to global and per-entity fact databases."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Hashable, Optional

from sardip.facts import ActionSet, FactDb, InsertEntityFact, InsertGlobalFact


@dataclass
class ActionEvent:
    """A set of actions to apply, optionally on behalf of an entity."""

    action_set: ActionSet
    entity: Optional[Hashable] = None

    def with_entity(self, entity: Hashable) -> "ActionEvent":
        self.entity = entity
        return self


@dataclass(frozen=True)
class FactInsert:
    """Insert a fact globally, or into an entity's database when ``entity`` is set."""

    key: str
    value: float
    expire: Optional[float] = None  # seconds
    entity: Optional[Hashable] = None


@dataclass
class _PendingDelete:
    key: str
    remaining: float
    entity: Optional[Hashable]


@dataclass
class FactWorld:
    """Global facts, per-entity facts and facts waiting to expire."""

    global_facts: FactDb = field(default_factory=FactDb)
    entities: dict = field(default_factory=dict)
    _pending: list = field(default_factory=list, repr=False)

    def entity_facts(self, entity: Hashable) -> FactDb:
        """Return the entity's fact database, creating it if needed."""
        return self.entities.setdefault(entity, FactDb())

    def insert(self, insert: FactInsert) -> None:
        if insert.entity is None:
            target = self.global_facts
        else:
            target = self.entities.get(insert.entity)
            if target is None:
                raise KeyError(f"Entity {insert.entity!r} does not have a fact database")
        target.add(insert.key, insert.value)
        if insert.expire is not None:
            self._pending.append(_PendingDelete(insert.key, insert.expire, insert.entity))

    def apply_action(self, event: ActionEvent) -> list[FactInsert]:
        """Apply the fact-inserting actions of an event and return the inserts made."""
        actions = event.action_set.actions
        if event.entity is None and any(isinstance(a, InsertEntityFact) for a in actions):
            raise ValueError("No entity provided for entity fact insert")
        inserts = []
        for action in actions:
            if isinstance(action, InsertGlobalFact):
                inserts.append(FactInsert(action.key, action.value, action.expire))
            elif isinstance(action, InsertEntityFact):
                inserts.append(
                    FactInsert(action.key, action.value, action.expire, event.entity)
                )
        for insert in inserts:
            self.insert(insert)
        return inserts

    def tick(self, delta: float) -> None:
        """Advance expiry timers by ``delta`` seconds and drop expired facts."""
        still_pending = []
        for pending in self._pending:
            pending.remaining -= delta
            if pending.remaining > 0:
                still_pending.append(pending)
                continue
            if pending.entity is None:
                self.global_facts.remove(pending.key)
            elif pending.entity in self.entities:
                self.entities[pending.entity].remove(pending.key)
        self._pending = still_pending