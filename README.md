# sardip

The game-logic core of a small virtual pet simulation, as plain Python
objects and functions with no engine underneath. It has no dependencies
beyond the standard library.

## Modules

- `sardip.facts` – `FactDb`, a mapping of fact names to single-precision
  values where missing facts read as `0`; `fact_str_hash` turns a string
  (case and whitespace ignored) into a fact value. `Criterion`, `Criteria`,
  `Rule` and `RuleSet` describe rules; a `RuleSet` keeps its rules ordered
  from most to fewest criteria. `FactQuery` layers several databases plus its
  own query facts (`add_fact`) and `run` picks a random response among the
  matching rules with the most criteria, or returns `None`.
- `sardip.parse` – `RawRuleSet.from_dict` reads
  `{"entries": [{"Response": {...}}, {"Rule": {...}}]}` data, and
  `RawRuleSet.to_rule_set` builds a `RuleSet`, expanding `"A || B"`
  alternatives into one rule per combination. `parse_criterion` accepts
  `"Key"`, `"Key !"`, `"Key < 1.0"`, `"Key > 1.0"`, `"Key = 1.0"` and
  `"Key = word"`; `parse_actions` accepts `RandomText a,b`,
  `AddGlobalFact Key [seconds]` and `AddEntityFact Key [seconds]`. Malformed
  input raises `ValueError`; a rule naming a missing response raises
  `KeyError`.
- `sardip.events` – `ActionEvent`, `FactInsert` and `FactWorld`, which holds
  global and per-entity fact databases, applies the fact-inserting actions of
  an event (`apply_action`) and removes facts when their expiry runs out
  (`tick`).
- `sardip.text_database` – `Language` (`ENGLISH`, `KOREAN`, `Language.parse`)
  and `TextDatabase`, whose `get` falls back to English and then to the key
  itself, and which offers random default given-name and surname keys.
- `sardip.text_translation` – `KeyString` (a direct key, or a format string
  whose `~key~` parts are looked up), `KeyText` and `translate_sections`.
- `sardip.thinking` – `ThinkTimer`, `Thinker`, `TryThinkEvent`,
  `trigger_idle_thoughts` and `handle_thought`, which records a thinker's
  thought and returns the resulting `ActionEvent`.
- `sardip.simulation` – `SimTime`, a clock that accumulates scaled wall time
  and spends it in one-second steps, `SimulationState`, and
  `run_simulation_schedule`, which keeps accumulating while paused and calls
  the update once per step while running. Timing constants such as
  `HUNGER_TICK_DOWN` and `MAX_EGG_LIFE` live here too.
- `sardip.sounds` – `SoundEffect`, `PlaySoundEffect` and
  `play_pending_sounds`, which hands each asset and volume to a callback you
  provide.
- `sardip.stock_market` – `Company`, `CompanyShare`, `SharePortfolio`,
  `SharePortfolioCache`, `update_share_cache`, `initialize_companies`,
  `Order`, `BuySellOrder`, `OrderBook` and `OrderGenerator`.
- `sardip.motion` – `apply_direction` for movement, and `EntityView`,
  `HasView`, `copy_transforms`, `add_has_view` and `views_to_destroy` for
  views that mirror another entity.

## Example

```python
import random

from sardip.facts import Concept, FactDb, FactQuery
from sardip.parse import RawRuleSet

rule_set = RawRuleSet.from_dict({
    "entries": [
        {"Response": {"id": "Greet", "now": ["RandomText hello"]}},
        {"Rule": {
            "id": "Greet",
            "criteria": {"concept": "ThinkIdle", "facts": ["TimeOfDay = 12.0"]},
            "response": "Greet",
        }},
    ]
}).to_rule_set()

facts = FactDb()
facts.add("TimeOfDay", 12.0)

response = FactQuery(Concept.THINK_IDLE).add_fact_db(facts).run(rule_set, random.Random())
print(response.now.get_text())  # ['hello']
```

## What it does not do

This is a library only: there is no command, no window, no rendering and no
audio output. Rule sets and text databases are built from data you have
already loaded (`RawRuleSet.from_dict`, `TextDatabase.from_mapping`); the
package reads no files and saves no game state. `OrderGenerator.tick` only
decides how many orders are due; it does not create or match orders.

## Tests

```
pip install -e .[test]
pytest
```