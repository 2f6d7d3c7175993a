from __future__ import annotations

from typing import Iterable


class Section:
    """A named group of key/value pairs and raw passthrough lines.

    Keys and values live in a single insertion-ordered dict, so key order and
    the value mapping cannot drift apart. Raw lines are tracked separately and
    never interpreted.
    """

    __slots__ = ("_name", "_values", "_lines")

    def __init__(self, name: str) -> None:
        self._name = name
        self._values: dict[str, str] = {}
        self._lines: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def set(self, key: str, value: str) -> None:
        """Upsert `key`; a new key goes last, an existing key keeps its position."""

        self._values[key] = value

    def get(self, key: str, default: str = "") -> str:
        return self._values.get(key, default)

    def exists(self, key: str) -> bool:
        return key in self._values

    def delete(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        return True

    def keys(self) -> list[str]:
        return list(self._values)

    def items(self) -> list[tuple[str, str]]:
        return list(self._values.items())

    def set_lines(self, lines: Iterable[str]) -> None:
        self._lines = list(lines)

    def append_line(self, line: str) -> None:
        self._lines.append(line)

    def get_lines(self, strip_comments: bool = False) -> list[str]:
        """Return raw lines without empty entries.

        `strip_comments` is accepted for API compatibility; comment lines are
        returned either way.
        """

        return [line for line in self._lines if line not in ("", "\n")]

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Section(name={self._name!r}, keys={len(self._values)}, lines={len(self._lines)})"
