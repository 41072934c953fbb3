"""Text keys and format strings resolved against a text database."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from sardip.text_database import Language, TextDatabase

_FORMAT_RE = re.compile(r"~(.*?)~")


class KeyKind(Enum):
    DIRECT = "direct"
    FORMAT = "format"


@dataclass(frozen=True)
class KeyString:
    """Either a single text key or a string with ``~key~`` placeholders."""

    text: str
    kind: KeyKind = KeyKind.DIRECT

    @classmethod
    def direct(cls, key) -> "KeyString":
        return cls(str(key), KeyKind.DIRECT)

    @classmethod
    def format(cls, text) -> "KeyString":
        return cls(str(text), KeyKind.FORMAT)

    def resolve_string(self, text_database: TextDatabase, language: Language) -> str:
        if self.kind is KeyKind.DIRECT:
            return text_database.get(language, self.text)
        return _FORMAT_RE.sub(lambda m: text_database.get(language, m.group(1)), self.text)


@dataclass
class KeyText:
    """Key strings for the sections of a text, by section index."""

    keys: dict[int, KeyString] = field(default_factory=dict)

    def with_key(self, index: int, key) -> "KeyText":
        self.set(index, key)
        return self

    def with_format(self, index: int, text) -> "KeyText":
        self.keys[index] = KeyString.format(text)
        return self

    def set(self, index: int, key) -> None:
        self.keys[index] = KeyString.direct(key)


def translate_sections(
    sections: Sequence[str],
    key_text: KeyText,
    text_database: TextDatabase,
    language: Language,
) -> list[str]:
    """Return the section values with every keyed section resolved."""
    return [
        key_text.keys[i].resolve_string(text_database, language) if i in key_text.keys else value
        for i, value in enumerate(sections)
    ]