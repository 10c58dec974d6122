"""Definition page extraction.

Each ``table.WRD`` on a WordReference dictionary page (``/{from}{to}/{word}``)
lists source-language cells (``td.FrWrd``) followed by their
target-language translations (``td.ToWrd``). Translation cells are told
apart by a marker element tagged with the target language code.

Cells are grouped as source -> [targets], then emitted as 2-column rows,
one per target. The first row is the language header of the table
(e.g. ``["English", "French"]``) and becomes ``DefinitionTable.header``.
"""
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from wordref.core.errors import AppError, Err, Ok, Result, malformed_markup, word_not_found
from wordref.core.logging import http_logger
from wordref.languages import map_language
from wordref.models import DefinitionTable, WordDefinitions

log = http_logger()

TABLE_SELECTOR = "table.WRD"
CELL_SELECTOR = "tr > td.FrWrd, tr > td.ToWrd"


def target_marker_selector(to_code: str) -> str:
    return f'em[data-lang="{to_code}"], span[data-ph="sLang_{to_code}"]'


@dataclass(slots=True)
class _Group:
    """A source cell and the translation cells that follow it."""
    source: str
    targets: list[str] = field(default_factory=list)


def _cell_text(cell: Tag) -> str:
    return cell.get_text(" ", strip=True)


def group_cells(table: Tag, to_code: str) -> Result[list[_Group], AppError]:
    """Group a table's cells into source -> targets runs.

    A target cell before any source cell means the table does not have the
    expected shape and cannot be recovered.
    """
    marker = target_marker_selector(to_code)
    groups: list[_Group] = []

    for cell in table.select(CELL_SELECTOR):
        text = _cell_text(cell)
        if cell.select_one(marker) is None:
            groups.append(_Group(source=text))
            continue
        if not groups:
            return malformed_markup(to_code, "translation cell before any source cell", origin="extract.definitions")
        groups[-1].targets.append(text)

    return Ok(groups)


def extract_definition_table(table: Tag, to_language: str) -> Result[DefinitionTable, AppError]:
    """Extract one sense table as header + [source, target] rows."""
    match group_cells(table, map_language(to_language)):
        case Err(e):
            return Err(e.with_metadata(to_language=to_language))
        case Ok(groups):
            rows = [[g.source, target] for g in groups for target in g.targets]

    if not rows:
        return Ok(DefinitionTable())
    return Ok(DefinitionTable(header=rows[0], definitions=rows[1:]))


def extract_definition_tables(tables: list[Tag], to_language: str) -> list[DefinitionTable]:
    """Extract every usable table; malformed and empty tables are skipped."""
    extracted: list[DefinitionTable] = []
    for index, table in enumerate(tables):
        match extract_definition_table(table, to_language):
            case Err(e):
                log.warning("definition_table_rejected", index=index, reason=e.metadata.get("reason"))
            case Ok(definition_table) if definition_table.definitions:
                extracted.append(definition_table)
            case Ok(_):
                log.debug("definition_table_empty", index=index)
    return extracted


def parse_definition_page(
    html: str,
    word: str,
    from_language: str,
    to_language: str,
) -> Result[WordDefinitions, AppError]:
    """Parse a dictionary page into ``WordDefinitions``.

    Returns NotFound when no table yields a data row.
    """
    page = BeautifulSoup(html, "html.parser")
    tables = page.select(TABLE_SELECTOR)
    definitions = extract_definition_tables(tables, to_language)

    if not definitions:
        log.info("definitions_missing", word=word, candidates=len(tables), from_language=from_language)
        return word_not_found(word, from_language, origin="extract.definitions")

    log.debug("definitions_extracted", word=word, tables=len(definitions))
    return Ok(WordDefinitions(
        title=f"Translate '{word}' to {to_language}",
        definitions=definitions,
    ))
