"""Game-logic core for a virtual pet simulation: facts, rules, text lookup and timing."""

__version__ = "0.1.0"