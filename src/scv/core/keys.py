"""Key presses as delivered to the controller."""

from __future__ import annotations

from dataclasses import dataclass

QUIT_KEYS = frozenset({"ctrl+c"})
BACK_KEYS = frozenset({"escape"})


@dataclass(frozen=True)
class KeyPress:
    """A single key press.

    ``key`` uses Textual's key names (``"enter"``, ``"up"``, ``"ctrl+c"``,
    ``"a"``); ``character`` is the printable character, if any.
    """

    key: str
    character: str | None = None

    @property
    def printable(self) -> bool:
        return self.character is not None and self.character.isprintable() and len(self.character) == 1

    @classmethod
    def char(cls, ch: str) -> KeyPress:
        """A printable key, as Textual reports it."""
        names = {" ": "space"}
        return cls(names.get(ch, ch), ch)
