"""Loading of raw rule-set definitions into matchable rule sets."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

from sardip.facts import (
    F32_MAX,
    F32_MIN,
    ActionSet,
    Concept,
    Criteria,
    Criterion,
    InsertEntityFact,
    InsertGlobalFact,
    RandomText,
    Response,
    Rule,
    RuleSet,
    fact_str_hash,
)

_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def _parse_number(text: str) -> float | None:
    """Parse a plain float literal, or return None when it is not one."""
    if _NUMBER_RE.fullmatch(text):
        return float(text)
    return None


@dataclass
class RawCriteria:
    concept: Concept
    facts: list[str] = field(default_factory=list)


@dataclass
class RawResponse:
    id: str
    now: list[str] = field(default_factory=list)
    after: list[str] = field(default_factory=list)


@dataclass
class RawRule:
    id: str
    criteria: RawCriteria
    response: str
    apply_facts: list[dict] = field(default_factory=list)


Entry = Union[RawResponse, RawRule]


def _entry_from_dict(item: Mapping[str, Any]) -> Entry:
    if len(item) != 1:
        raise ValueError(f"Entry must have exactly one variant: {item!r}")
    (kind, body), = item.items()
    if kind == "Response":
        return RawResponse(
            id=body["id"],
            now=list(body.get("now", [])),
            after=list(body.get("after", [])),
        )
    if kind == "Rule":
        raw_criteria = body["criteria"]
        return RawRule(
            id=body["id"],
            criteria=RawCriteria(
                concept=Concept(raw_criteria["concept"]),
                facts=list(raw_criteria.get("facts", [])),
            ),
            response=body["response"],
            apply_facts=list(body.get("apply_facts", [])),
        )
    raise ValueError(f"Unknown entry kind: {kind}")


@dataclass
class RawRuleSet:
    """A list of responses and rules, as written in a dialogue file."""

    entries: list[Entry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RawRuleSet":
        """Build from ``{"entries": [{"Response": {...}}, {"Rule": {...}}]}``."""
        return cls(entries=[_entry_from_dict(item) for item in data.get("entries", [])])

    def get_response(self, id: str) -> RawResponse:
        for entry in self.entries:
            if isinstance(entry, RawResponse) and entry.id == id:
                return entry
        raise KeyError(f"Response {id} not found")

    def get_rules(self) -> list[RawRule]:
        return [entry for entry in self.entries if isinstance(entry, RawRule)]

    def to_rule_set(self) -> RuleSet:
        """Expand every rule's alternatives and attach its parsed response."""
        rules = []
        for raw_rule in self.get_rules():
            for criteria in parse_criteria(raw_rule.criteria):
                raw_response = self.get_response(raw_rule.response)
                response = Response(
                    now=parse_actions(raw_response.now),
                    after=parse_actions(raw_response.after),
                )
                rules.append(Rule(id=raw_rule.id, criteria=criteria, response=response))
        return RuleSet(rules)


def _parse_expire(splits: Sequence[str], action: str) -> float | None:
    if len(splits) <= 2:
        return None
    seconds = _parse_number(splits[2])
    if seconds is None or not seconds >= 0 or seconds == float("inf"):
        raise ValueError(f"Invalid expiry in action: {action}")
    return seconds


def parse_actions(actions: Sequence[str]) -> ActionSet:
    """Turn action lines such as ``"RandomText a,b"`` into an ActionSet."""
    result = []
    for action in actions:
        splits = action.split(" ")
        kind = splits[0]
        if kind not in ("RandomText", "AddGlobalFact", "AddEntityFact"):
            raise ValueError(f"Invalid action: {action}")
        if len(splits) < 2:
            raise ValueError(f"Action is missing its argument: {action}")
        if kind == "RandomText":
            result.append(RandomText(tuple(splits[1].split(","))))
        elif kind == "AddGlobalFact":
            result.append(InsertGlobalFact(splits[1], 1.0, _parse_expire(splits, action)))
        else:
            result.append(InsertEntityFact(splits[1], 1.0, _parse_expire(splits, action)))
    return ActionSet(tuple(result))


def parse_criterion(criterion) -> Criterion:
    """Parse ``"Key"``, ``"Key !"`` or ``"Key <op> value"`` into a Criterion."""
    criterion = str(criterion)
    splits = criterion.split(" ")

    if len(splits) == 1:
        return Criterion(splits[0], 1.0, 1.0)

    if len(splits) == 2:
        key, operator = splits
        if operator != "!":
            raise ValueError(f"Invalid operator: {operator}")
        return Criterion(key, 0.0, 0.0)

    if len(splits) == 3:
        key, operator, raw_value = splits
        value = _parse_number(raw_value)
        if value is not None:
            if operator == "<":
                return Criterion(key, F32_MIN, value)
            if operator == ">":
                return Criterion(key, value, F32_MAX)
            if operator == "=":
                return Criterion(key, value, value)
            raise ValueError(f"Invalid operator: {operator}")
        if operator != "=":
            raise ValueError(f"Invalid operator: {operator} for string")
        hashed = fact_str_hash(raw_value)
        return Criterion(key, hashed, hashed)

    raise ValueError(f"Invalid fact: {criterion}")


def parse_criteria(criteria: RawCriteria) -> list[Criteria]:
    """Expand ``"A || B"`` alternatives into one Criteria per combination."""
    alts: list[list[Criterion]] = []
    core: list[Criterion] = []
    for fact in criteria.facts:
        if "||" in fact:
            alts.append([parse_criterion(part) for part in fact.split(" || ")])
        else:
            core.append(parse_criterion(fact))

    if not alts:
        return [Criteria(criteria.concept, tuple(core))]

    return [
        Criteria(criteria.concept, (*combo, *core))
        for combo in itertools.product(*alts)
    ]