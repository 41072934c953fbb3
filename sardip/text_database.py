"""Per-language text lookup with English fallback."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Union

_log = logging.getLogger(__name__)

_GIVEN_NAME_PREFIX = "names.default.given"
_SURNAME_PREFIX = "names.default.surname"


class Language(Enum):
    ENGLISH = "English"
    KOREAN = "Korean"

    @classmethod
    def parse(cls, s: str) -> "Language":
        """Parse a language from its name, e.g. ``"English"``."""
        for language in cls:
            if language.value == s:
                return language
        raise ValueError(f"Unknown language: {s}")


@dataclass
class TextDatabase:
    """Translated strings keyed by language and text key."""

    values: dict[Language, dict[str, str]] = field(default_factory=dict)
    default_given_names_keys: list[str] = field(default_factory=list)
    default_surnames_keys: list[str] = field(default_factory=list)

    @classmethod
    def from_mapping(
        cls, values: Mapping[Union[str, Language], Mapping[str, str]]
    ) -> "TextDatabase":
        """Build from ``{"English": {...}, ...}`` and collect the default name keys."""
        database = cls(
            values={
                (lang if isinstance(lang, Language) else Language.parse(lang)): dict(texts)
                for lang, texts in values.items()
            }
        )
        database.populate_default_name_keys()
        return database

    def get(self, language: Language, key: str) -> str:
        """Look up a key, falling back to English and then to the key itself."""
        if not key:
            return ""
        texts = self.values.get(language)
        if texts is None:
            raise KeyError(f"No texts for language {language.value}")
        if key in texts:
            return texts[key]
        _log.error("Key %r not found for language %s", key, language.value)
        if language is Language.ENGLISH:
            return key
        return self.get(Language.ENGLISH, key)

    def exists(self, key: str) -> bool:
        return any(key in texts for texts in self.values.values())

    def random_given_name_key(self, rng: Optional[random.Random] = None) -> str:
        if not self.default_given_names_keys:
            raise LookupError("No default given name keys")
        return (rng or random).choice(self.default_given_names_keys)

    def random_surname_key(self, rng: Optional[random.Random] = None) -> str:
        if not self.default_surnames_keys:
            raise LookupError("No default surname keys")
        return (rng or random).choice(self.default_surnames_keys)

    def populate_default_name_keys(self) -> None:
        """Collect default name keys from the English texts."""
        english = self.values.get(Language.ENGLISH)
        if english is None:
            raise KeyError("No texts for language English")
        for key in english:
            if key.startswith(_GIVEN_NAME_PREFIX):
                self.default_given_names_keys.append(key)
            elif key.startswith(_SURNAME_PREFIX):
                self.default_surnames_keys.append(key)