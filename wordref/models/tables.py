"""Lookup result models.

Conjugation and definition results are pydantic models so the cache can
store them as JSON blobs and validate them on the way back out.
``TableData`` is the single table the renderer shows.
"""
from dataclasses import dataclass, field

from pydantic import BaseModel, Field


class ConjugationTable(BaseModel):
    """One tense: pronoun/form pairs under a tense label."""
    tense: str
    conjugations: list[list[str]] = Field(default_factory=list)  # [[pronoun, form], ...]

    @classmethod
    def from_cells(cls, cells: list[str]) -> "ConjugationTable":
        """Build from the flattened cell texts of a conjugation table.

        The first cell is the tense label. The rest pair up as
        (pronoun, form); an unpaired trailing cell is dropped.
        """
        if not cells:
            return cls(tense="")

        rest = cells[1:]
        pairs = [[rest[i], rest[i + 1]] for i in range(0, len(rest) - 1, 2)]
        return cls(tense=cells[0], conjugations=pairs)


class VerbConjugations(BaseModel):
    verb: str  # Canonical infinitive as normalized by the site
    conjugation_tables: list[ConjugationTable] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "VerbConjugations":
        return cls(verb="")

    def is_empty(self) -> bool:
        return not self.verb or not self.conjugation_tables


class DefinitionTable(BaseModel):
    """One sense table: a header row and 2-column data rows."""
    header: list[str] = Field(default_factory=list)
    definitions: list[list[str]] = Field(default_factory=list)  # [[source, target], ...]


class WordDefinitions(BaseModel):
    title: str
    definitions: list[DefinitionTable] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "WordDefinitions":
        return cls(title="")

    def is_empty(self) -> bool:
        return not self.definitions


@dataclass(frozen=True, slots=True)
class TableData:
    """The table currently on screen."""
    title: str
    header: list[str] = field(default_factory=list)
    items: list[list[str]] = field(default_factory=list)
