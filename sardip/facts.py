"""Fact databases, criteria and rule matching used to pick entity responses."""

from __future__ import annotations

import logging
import math
import random
import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Sequence, Union

_log = logging.getLogger(__name__)

F32_MAX = 3.4028234663852886e38
F32_MIN = -F32_MAX

_FX_SEED = 0x9E3779B9
_MASK32 = 0xFFFFFFFF


def _to_f32(value: float) -> float:
    """Round a number to the nearest single-precision float."""
    value = float(value)
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_f32(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        if _to_f32(float(text)) == value:
            return text
    return repr(value)


def _fx_word(state: int, word: int) -> int:
    rotated = ((state << 5) | (state >> 27)) & _MASK32
    return ((rotated ^ word) * _FX_SEED) & _MASK32


def _fx_hash32_str(text: str) -> int:
    data = text.encode("utf-8")
    full = len(data) - len(data) % 4
    state = 0
    for (word,) in struct.iter_unpack("<I", data[:full]):
        state = _fx_word(state, word)
    rest = data[full:]
    if len(rest) >= 2:
        state = _fx_word(state, int.from_bytes(rest[:2], "little"))
        rest = rest[2:]
    if rest:
        state = _fx_word(state, rest[0])
    # A string hash ends with a 0xff marker byte.
    return _fx_word(state, 0xFF)


def fact_str_hash(s) -> float:
    """Hash a string into a float fact value, ignoring case and whitespace."""
    normalized = "".join(ch for ch in str(s).lower() if not ch.isspace())
    bits = _fx_hash32_str(normalized)
    return struct.unpack(">f", bits.to_bytes(4, "big"))[0]


@dataclass
class FactDb:
    """A mapping from fact names to numeric values; missing facts read as 0."""

    facts: dict[str, float] = field(default_factory=dict)

    def add(self, key, value: float) -> None:
        self.facts[str(key)] = _to_f32(value)

    def add_str(self, key, value) -> None:
        self.facts[str(key)] = fact_str_hash(value)

    def remove(self, key) -> None:
        self.facts.pop(str(key), None)

    def get(self, key: str) -> float:
        return self.facts.get(key, 0.0)

    def remove_with_prefix(self, prefix: str) -> None:
        for key in [k for k in self.facts if k.startswith(prefix)]:
            del self.facts[key]

    def __str__(self) -> str:
        return ", ".join(f"{key}: {_format_f32(value)}" for key, value in self.facts.items())


def _lookup(fact_dbs: Sequence[FactDb], key: str) -> float:
    """Return the value of the first database holding the key, else 0."""
    for fact_db in fact_dbs:
        if key in fact_db.facts:
            return fact_db.facts[key]
    return 0.0


class Concept(Enum):
    THINK_IDLE = "ThinkIdle"
    THINK_JUST_ATE = "ThinkJustAte"
    THINK_STARTING_EATING = "ThinkStartingEating"
    EVOLVE = "Evolve"


@dataclass(frozen=True)
class RandomText:
    texts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "texts", tuple(self.texts))


@dataclass(frozen=True)
class InsertGlobalFact:
    key: str
    value: float = 1.0
    expire: Optional[float] = None  # seconds


@dataclass(frozen=True)
class InsertEntityFact:
    key: str
    value: float = 1.0
    expire: Optional[float] = None  # seconds


Action = Union[RandomText, InsertGlobalFact, InsertEntityFact]


@dataclass(frozen=True)
class ActionSet:
    actions: tuple[Action, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", tuple(self.actions))

    def get_text(self) -> list[str]:
        """All texts of the RandomText actions, in order."""
        return [
            text
            for action in self.actions
            if isinstance(action, RandomText)
            for text in action.texts
        ]


@dataclass(frozen=True)
class Response:
    now: ActionSet = field(default_factory=ActionSet)
    after: ActionSet = field(default_factory=ActionSet)


@dataclass(frozen=True)
class Criterion:
    """Holds when the fact named by ``key`` lies within [fa, fb]."""

    key: str
    fa: float
    fb: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "fa", _to_f32(self.fa))
        object.__setattr__(self, "fb", _to_f32(self.fb))

    def evaluate(self, value: float) -> bool:
        return self.fa <= value <= self.fb

    def __str__(self) -> str:
        return f"{self.key} in [{_format_f32(self.fa)}, {_format_f32(self.fb)}]"


@dataclass(frozen=True)
class Criteria:
    concept: Concept
    criterion: tuple[Criterion, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "criterion", tuple(self.criterion))

    def evaluate(self, fact_dbs: Sequence[FactDb]) -> bool:
        """True when every criterion holds against the layered databases."""
        return all(c.evaluate(_lookup(fact_dbs, c.key)) for c in self.criterion)

    def __str__(self) -> str:
        parts = "".join(f" {c}" for c in self.criterion)
        return f"concept {self.concept.value} criterion{parts}"


@dataclass(frozen=True)
class Rule:
    id: str
    criteria: Criteria
    response: Response

    def __str__(self) -> str:
        return f"Rule {self.id} criteria {self.criteria}"


@dataclass
class RuleSet:
    """Rules kept ordered from most to fewest criteria (stable)."""

    rules: list[Rule] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.rules = sorted(self.rules, key=lambda r: len(r.criteria.criterion), reverse=True)


@dataclass
class FactQuery:
    """A query for a concept against layered fact databases."""

    concept: Concept
    fact_dbs: list[FactDb] = field(default_factory=list)
    query_fact_db: FactDb = field(default_factory=FactDb)

    def add_fact(self, key, value: float) -> "FactQuery":
        self.query_fact_db.add(key, value)
        return self

    def add_fact_db(self, fact_db: FactDb) -> "FactQuery":
        self.fact_dbs.append(fact_db)
        return self

    def run(self, rule_set: RuleSet, rng: Optional[random.Random] = None) -> Optional[Response]:
        """Pick a random response among the most specific matching rules."""
        _log.debug(
            "Running fact query with %d dbs and concept %s", len(self.fact_dbs), self.concept
        )
        fact_dbs = [*self.fact_dbs, self.query_fact_db]

        matches: list[Response] = []
        level: Optional[int] = None
        for rule in rule_set.rules:
            count = len(rule.criteria.criterion)
            if level is not None and count < level:
                break
            if rule.criteria.concept != self.concept:
                continue
            if rule.criteria.evaluate(fact_dbs):
                _log.debug("Rule %s matches", rule.id)
                if not matches:
                    level = count
                matches.append(rule.response)

        if not matches:
            _log.debug("No matches found")
            return None
        return (rng or random).choice(matches)

    def single_criteria(self, criteria: Criteria) -> bool:
        """Check one criteria set against the added databases only."""
        return criteria.concept == self.concept and criteria.evaluate(self.fact_dbs)