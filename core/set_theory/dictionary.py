"""
core/set_theory/dictionary.py — Named set-class lookup table.

Loads the tab-separated set-class reference table into an immutable
SetClassDictionary. The table ships with the package at
core/set_theory/data/set_classes.tsv and is read through importlib.resources;
parsed dictionaries are cached per source so each file is read once per
process.

Table format
============
One entry per line, four tab-separated fields:

    name <TAB> canonical_set <TAB> interval_vector <TAB> description

canonical_set and interval_vector use single alphanumeric digits
(0-9, A=10, B=11, C=12). Blank lines and lines starting with '#' are
skipped. Any other malformed row is fatal: the whole load fails with
MalformedReferenceDataError naming the source and line number.

The dictionary only maps names to entries. Canonical sets in the table are
already reduced; nothing here re-derives them.
"""

from __future__ import annotations

import importlib.resources
import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from types import MappingProxyType

from core.set_theory.arithmetic import MODULUS, digit_from_alpha
from core.set_theory.sets import parse_pitch_classes, prime_form, zero_form
from core.set_theory.types import SetClassEntry

logger = logging.getLogger(__name__)

_BUNDLED_TABLE = "set_classes.tsv"
_FIELD_COUNT = 4

_CACHE: dict[str, SetClassDictionary] = {}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class SetClassNotFoundError(KeyError):
    """Raised when a set-class name is not in the dictionary."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown set class {self.name!r}"


class MalformedReferenceDataError(ValueError):
    """Raised when the reference table contains an unparseable row."""


# ---------------------------------------------------------------------------
# Dictionary
# ---------------------------------------------------------------------------


class SetClassDictionary:
    """Immutable name → SetClassEntry mapping.

    Construct once and share by reference; instances are never mutated after
    __init__, so sharing across threads and analyzers is safe.

    Args:
        entries: Entries in table order. Names must be unique.

    Raises:
        ValueError: If two entries share a name.
    """

    def __init__(self, entries: Iterable[SetClassEntry]) -> None:
        by_name: dict[str, SetClassEntry] = {}
        by_set: dict[tuple[int, ...], SetClassEntry] = {}
        for entry in entries:
            if entry.name in by_name:
                raise ValueError(f"Duplicate set-class name {entry.name!r}")
            by_name[entry.name] = entry
            by_set.setdefault(entry.pitch_classes, entry)
        self._entries = MappingProxyType(by_name)
        self._by_set = MappingProxyType(by_set)

    @classmethod
    def from_tsv(cls, text: str, *, source: str = "<string>") -> SetClassDictionary:
        """Parse reference-table text.

        Args:
            text:   Full table contents.
            source: Label used in error messages (usually the file path).

        Raises:
            MalformedReferenceDataError: On the first malformed row.
        """
        entries: list[SetClassEntry] = []
        seen: set[str] = set()
        for line_number, raw in enumerate(text.splitlines(), start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            entry = _parse_row(line, source=source, line_number=line_number)
            if entry.name in seen:
                raise MalformedReferenceDataError(
                    f"{source}:{line_number}: duplicate set-class name {entry.name!r}"
                )
            seen.add(entry.name)
            entries.append(entry)
        return cls(entries)

    # -- lookups ------------------------------------------------------------

    def lookup(self, name: str) -> SetClassEntry | None:
        """Return the entry for ``name``, or None when absent."""
        return self._entries.get(name)

    def get(self, name: str) -> SetClassEntry:
        """Return the entry for ``name``.

        Raises:
            SetClassNotFoundError: If the name is unknown.
        """
        entry = self._entries.get(name)
        if entry is None:
            raise SetClassNotFoundError(name)
        return entry

    def identify(self, pcs: Sequence[int]) -> SetClassEntry | None:
        """Return the entry whose canonical set equals the prime form of ``pcs``.

        Duplicates are collapsed first. A single pitch class identifies as 1-1.
        """
        distinct = tuple(sorted({pc % MODULUS for pc in pcs}))
        canonical = prime_form(distinct) if len(distinct) > 1 else zero_form(distinct)
        return self._by_set.get(canonical)

    def names(self) -> list[str]:
        """Names in table order."""
        return list(self._entries)

    def by_cardinality(self, cardinality: int) -> list[SetClassEntry]:
        """Entries with exactly ``cardinality`` pitch classes, in table order."""
        return [e for e in self._entries.values() if e.cardinality == cardinality]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[SetClassEntry]:
        return iter(self._entries.values())


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def _parse_row(line: str, *, source: str, line_number: int) -> SetClassEntry:
    fields = line.split("\t")
    where = f"{source}:{line_number}"
    if len(fields) != _FIELD_COUNT:
        raise MalformedReferenceDataError(
            f"{where}: expected {_FIELD_COUNT} tab-separated fields, got {len(fields)}"
        )
    name, set_text, vector_text, description = (f.strip() for f in fields)
    if not name:
        raise MalformedReferenceDataError(f"{where}: empty set-class name")
    try:
        pitch_classes = parse_pitch_classes(set_text)
        vector = tuple(digit_from_alpha(char) for char in vector_text)
    except ValueError as exc:
        raise MalformedReferenceDataError(f"{where}: {exc}") from exc
    if not pitch_classes:
        raise MalformedReferenceDataError(f"{where}: empty canonical set for {name!r}")
    if len(vector) != 6:
        raise MalformedReferenceDataError(
            f"{where}: interval vector must have 6 digits, got {vector_text!r}"
        )
    return SetClassEntry(
        name=name,
        pitch_classes=pitch_classes,
        interval_vector=vector,
        description=description,
    )


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_set_class_dictionary(path: str | Path | None = None) -> SetClassDictionary:
    """Load a reference table, defaulting to the bundled one.

    Results are cached per resolved path (the bundled table under its own
    key), so repeated calls return the same instance.

    Args:
        path: Optional filesystem path to a table in the same format.

    Returns:
        Parsed SetClassDictionary.

    Raises:
        FileNotFoundError:           If ``path`` does not exist.
        MalformedReferenceDataError: If any row is malformed.
    """
    key = str(Path(path).resolve()) if path is not None else f"<bundled>/{_BUNDLED_TABLE}"
    if key in _CACHE:
        return _CACHE[key]

    if path is None:
        resource = importlib.resources.files("core.set_theory") / "data" / _BUNDLED_TABLE
        text = resource.read_text(encoding="utf-8")
    else:
        text = Path(path).read_text(encoding="utf-8")

    dictionary = SetClassDictionary.from_tsv(text, source=key)
    logger.info("Loaded %d set classes from %s", len(dictionary), key)
    _CACHE[key] = dictionary
    return dictionary
