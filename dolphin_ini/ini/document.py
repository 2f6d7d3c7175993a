"""In-memory Dolphin INI document with line-oriented load/save.

Format notes:
- `[name]` starts a section; lines before the first header are dropped.
- `key = value` lines are normalized (whitespace removed, quotes removed from
  the value).
- Blank lines, `#` comments and `$` / `+` / `*` directives are kept verbatim as
  the section's raw lines.
- On save, a section with keys is written as `key=value` lines only; its raw
  lines are not written. A section without keys is written as its raw lines.
  Every section gets a header, even an empty one.

I/O failures (including bad UTF-8 and closed caller streams) never raise: they
are reported through the injected logger and the call still returns True.
"""

from __future__ import annotations

import contextlib
import io
import logging
import os
from typing import Any, Iterable, Iterator, TextIO, Union

from .parsing import is_raw_directive, parse_line, parse_section_header, strip_bom, strip_newline
from .section import Section


logger = logging.getLogger(__name__)

IniSource = Union[str, os.PathLike[str], Iterable[str]]
IniSink = Union[str, os.PathLike[str], TextIO]


def _is_path(obj: Any) -> bool:
    return isinstance(obj, (str, os.PathLike))


def _describe(obj: Any) -> str:
    return os.fspath(obj) if _is_path(obj) else type(obj).__name__


def _iter_source_lines(source: IniSource) -> Iterator[str]:
    if _is_path(source):
        # newline="" keeps "\r\n" intact; strip_newline() removes it per line.
        with open(source, encoding="utf-8", newline="") as fh:
            yield from fh
    else:
        yield from source


@contextlib.contextmanager
def _open_sink(sink: IniSink) -> Iterator[TextIO]:
    if _is_path(sink):
        with open(sink, "w", encoding="utf-8", newline="\n") as fh:
            yield fh
    else:
        try:
            yield sink  # type: ignore[misc]
        finally:
            sink.flush()  # type: ignore[union-attr]


def read_raw_sections(
    source: IniSource, names: Iterable[str] | None = None, *, log: Any = None
) -> dict[str, list[str]]:
    """Return every line of each section as written, without classification.

    `IniFile.load` turns lines without `=` into an empty key/value pair, which
    loses code bodies such as Gecko hex lines. Callers that need a section's
    text untouched read it through here instead. Read failures are logged and
    whatever was read so far is returned.
    """

    log = log or logger
    wanted = set(names) if names is not None else None
    sections: dict[str, list[str]] = {}
    current: list[str] | None = None
    first_line = True
    try:
        for raw in _iter_source_lines(source):
            line = strip_newline(raw)
            if first_line:
                line = strip_bom(line)
                first_line = False
            if line.startswith("["):
                name = parse_section_header(line)
                if name is not None:
                    current = sections.setdefault(name, []) if wanted is None or name in wanted else None
                continue
            if current is not None:
                current.append(line)
    except (OSError, ValueError) as exc:
        log.error("ini_read_failed", extra={"source": _describe(source), "error": str(exc)})

    return sections


class IniFile:
    """Ordered collection of uniquely named sections."""

    def __init__(self) -> None:
        self._sections: dict[str, Section] = {}

    @property
    def sections(self) -> list[Section]:
        return list(self._sections.values())

    def section_names(self) -> list[str]:
        return list(self._sections)

    def get_section(self, name: str) -> Section | None:
        return self._sections.get(name)

    def get_or_create_section(self, name: str) -> Section:
        section = self._sections.get(name)
        if section is None:
            section = Section(name)
            self._sections[name] = section
        return section

    def delete_section(self, name: str) -> bool:
        if name not in self._sections:
            return False
        del self._sections[name]
        return True

    def exists(self, name: str) -> bool:
        return name in self._sections

    def clear(self) -> None:
        self._sections = {}

    def set_lines(self, name: str, lines: Iterable[str]) -> None:
        self.get_or_create_section(name).set_lines(lines)

    def get_lines(self, name: str, strip_comments: bool = False) -> list[str]:
        section = self.get_section(name)
        if section is None:
            return []
        return section.get_lines(strip_comments)

    def delete_key(self, name: str, key: str) -> bool:
        section = self.get_section(name)
        if section is None:
            return False
        return section.delete(key)

    def get_keys(self, name: str) -> list[str]:
        section = self.get_section(name)
        if section is None:
            return []
        return section.keys()

    def get(self, name: str, key: str, default: str = "") -> str:
        section = self.get_section(name)
        if section is None:
            return default
        return section.get(key, default)

    def set(self, name: str, key: str, value: str) -> None:
        self.get_or_create_section(name).set(key, value)

    def load(self, source: IniSource, keep_current_data: bool = True, *, log: Any = None) -> bool:
        """Parse `source` into this document.

        Args:
            source: A filesystem path, or any iterable of text lines (an open
                text stream, a list of strings).
            keep_current_data: When False, all sections are dropped first.
                Otherwise sections and keys from `source` are merged over the
                existing ones.
            log: Logger used to report read failures. Defaults to this
                module's logger.

        Returns:
            True once the pass is over, including after a read failure. Lines
            parsed before a failure are kept.
        """

        log = log or logger
        if not keep_current_data:
            self.clear()

        current: Section | None = None
        first_line = True
        try:
            for raw in _iter_source_lines(source):
                line = strip_newline(raw)
                if first_line:
                    # Notepad likes to add a BOM.
                    line = strip_bom(line)
                    first_line = False
                current = self._consume_line(line, current)
        except (OSError, ValueError) as exc:
            log.error("ini_read_failed", extra={"source": _describe(source), "error": str(exc)})

        return True

    def loads(self, text: str, keep_current_data: bool = True, *, log: Any = None) -> bool:
        return self.load(io.StringIO(text), keep_current_data, log=log)

    def _consume_line(self, line: str, current: Section | None) -> Section | None:
        if line.startswith("["):
            name = parse_section_header(line)
            if name is None:
                return current
            return self.get_or_create_section(name)

        if current is None:
            return None

        key, value = parse_line(line)
        if key is None or value is None or is_raw_directive(line):
            current.append_line(line)
        else:
            current.set(key, value)
        return current

    def iter_output_lines(self) -> Iterator[str]:
        """Yield the serialized document, one line at a time (no newlines)."""

        for section in self._sections.values():
            yield f"[{section.name}]"
            items = section.items()
            if not items:
                yield from section.lines
            else:
                for key, value in items:
                    yield f"{key}={value}"
            yield ""

    def dumps(self) -> str:
        return "".join(f"{line}\n" for line in self.iter_output_lines())

    def save(self, sink: IniSink, *, log: Any = None) -> bool:
        """Write this document to `sink` (a path or a writable text stream).

        A path is opened, written and closed within this call; a caller-owned
        stream is flushed but left open. Write failures are logged and the
        call still returns True.
        """

        log = log or logger
        try:
            with _open_sink(sink) as out:
                for line in self.iter_output_lines():
                    out.write(f"{line}\n")
        except (OSError, ValueError) as exc:
            log.error("ini_write_failed", extra={"sink": _describe(sink), "error": str(exc)})

        return True

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __iter__(self) -> Iterator[Section]:
        return iter(list(self._sections.values()))

    def __len__(self) -> int:
        return len(self._sections)
