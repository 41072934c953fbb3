import random

import pytest

from sardip.events import ActionEvent, FactInsert, FactWorld
from sardip.facts import (
    ActionSet,
    Concept,
    FactQuery,
    InsertEntityFact,
    InsertGlobalFact,
    RandomText,
)
from sardip.parse import RawCriteria, RawResponse, RawRule, RawRuleSet


def _rule(id, facts, response):
    return RawRule(id=id, criteria=RawCriteria(Concept.THINK_IDLE, facts), response=response)


@pytest.fixture
def rule_set():
    return RawRuleSet(
        entries=[
            RawResponse("Greet", ["RandomText hello"]),
            _rule("Greet", ["TimeOfDay = 12.0"], "Greet"),
            RawResponse(
                "InsertGlobalFact", ["RandomText global", "AddGlobalFact NewGlobalFact"]
            ),
            _rule("InsertGlobalFact", ["DoGlobalFact", "NewGlobalFact !"], "InsertGlobalFact"),
            RawResponse(
                "InsertEntityFact", ["RandomText entity", "AddEntityFact NewEntityFact"]
            ),
            _rule("InsertEntityFact", ["DoEntityFact", "NewEntityFact !"], "InsertEntityFact"),
        ]
    ).to_rule_set()


def test_response_insert_global_fact(rule_set):
    world = FactWorld()
    rng = random.Random(0)

    def query():
        return (
            FactQuery(Concept.THINK_IDLE)
            .add_fact_db(world.global_facts)
            .add_fact("DoGlobalFact", 1.0)
            .run(rule_set, rng)
        )

    response = query()
    assert response is not None
    assert "global" in response.now.get_text()[0]
    world.apply_action(ActionEvent(response.now))
    assert world.global_facts.get("NewGlobalFact") == 1.0
    assert query() is None


def test_response_insert_entity_fact(rule_set):
    world = FactWorld()
    entity = "pet"
    world.entity_facts(entity)
    rng = random.Random(0)

    def query():
        return (
            FactQuery(Concept.THINK_IDLE)
            .add_fact_db(world.entity_facts(entity))
            .add_fact("DoEntityFact", 1.0)
            .run(rule_set, rng)
        )

    response = query()
    assert response is not None
    assert "entity" in response.now.get_text()[0]
    world.apply_action(ActionEvent(response.now).with_entity(entity))
    assert world.entity_facts(entity).get("NewEntityFact") == 1.0
    assert world.global_facts.get("NewEntityFact") == 0.0
    assert query() is None


def test_with_entity_sets_entity():
    event = ActionEvent(ActionSet()).with_entity(7)
    assert event.entity == 7


def test_global_fact_expires():
    world = FactWorld()
    world.insert(FactInsert("Temp", 1.0, 2.0))
    world.tick(1.0)
    assert world.global_facts.get("Temp") == 1.0
    world.tick(1.0)
    assert "Temp" not in world.global_facts.facts


def test_entity_fact_expires():
    world = FactWorld()
    world.entity_facts(1)
    world.insert(FactInsert("Temp", 3.0, 0.5, entity=1))
    assert world.entity_facts(1).get("Temp") == 3.0
    world.tick(0.5)
    assert world.entity_facts(1).get("Temp") == 0.0


def test_fact_without_expiry_stays():
    world = FactWorld()
    world.insert(FactInsert("Perm", 2.0))
    world.tick(1000.0)
    assert world.global_facts.get("Perm") == 2.0


def test_insert_for_unknown_entity_raises():
    world = FactWorld()
    with pytest.raises(KeyError):
        world.insert(FactInsert("X", 1.0, entity="ghost"))


def test_entity_action_without_entity_raises():
    world = FactWorld()
    event = ActionEvent(ActionSet((InsertEntityFact("X"),)))
    with pytest.raises(ValueError):
        world.apply_action(event)


def test_apply_action_returns_inserts_and_ignores_text():
    world = FactWorld()
    event = ActionEvent(
        ActionSet((RandomText(("hi",)), InsertGlobalFact("G", 1.0, 5.0)))
    )
    inserts = world.apply_action(event)
    assert inserts == [FactInsert("G", 1.0, 5.0)]
    assert world.global_facts.facts == {"G": 1.0}
    world.tick(5.0)
    assert world.global_facts.facts == {}