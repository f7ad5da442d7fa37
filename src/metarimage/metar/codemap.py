"""Configurable code → description lookup tables."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field


class CodeMapEntry(BaseModel):
    """One row of a lookup table as it appears in config.yaml."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="METAR code, e.g. RA or BKN")
    description: str = Field(..., description="Text shown in place of the code")


class CodeMap(Mapping[str, str]):
    """Read-only lookup built from an ordered list of entries.

    Lookups use the last entry for a duplicated code. The original entry
    order is kept in ``entries`` for display and config dumps.
    """

    def __init__(self, entries: Iterable[CodeMapEntry] = ()) -> None:
        self._entries: tuple[CodeMapEntry, ...] = tuple(entries)
        self._lookup: dict[str, str] = {e.code: e.description for e in self._entries}

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> CodeMap:
        """Create a map from ``(code, description)`` tuples."""
        return cls(CodeMapEntry(code=code, description=desc) for code, desc in pairs)

    @property
    def entries(self) -> tuple[CodeMapEntry, ...]:
        """Entries in configuration order, duplicates included."""
        return self._entries

    def __getitem__(self, code: str) -> str:
        return self._lookup[code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._lookup)

    def __len__(self) -> int:
        return len(self._lookup)

    def __repr__(self) -> str:
        return f"CodeMap({len(self._entries)} entries)"
