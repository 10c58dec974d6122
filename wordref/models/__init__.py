from wordref.models.cache import ConjugationRecord, DefinitionRecord, RootWordRecord
from wordref.models.tables import (
    ConjugationTable, VerbConjugations,
    DefinitionTable, WordDefinitions,
    TableData,
)

__all__ = [
    "ConjugationRecord", "DefinitionRecord", "RootWordRecord",
    "ConjugationTable", "VerbConjugations",
    "DefinitionTable", "WordDefinitions",
    "TableData",
]
