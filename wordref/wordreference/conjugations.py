"""Conjugation page extraction.

A WordReference conjugation page (``/conj/{code}verbs.aspx?v=...``) holds:
- ``#conjtable``: summary table whose second column starts with the
  site's canonical infinitive for the query
- ``table.neoConj``: one table per tense, tense label first, then
  pronoun/form cells row by row
"""
from bs4 import BeautifulSoup, Tag

from wordref.core.errors import AppError, Ok, Result, verb_not_found
from wordref.core.logging import http_logger
from wordref.models import ConjugationTable, VerbConjugations

log = http_logger()

INFINITIVE_SELECTOR = "#conjtable td:nth-child(2)"
TABLE_SELECTOR = "table.neoConj"


def cell_texts(table: Tag) -> list[str]:
    """Flatten every row's cells into trimmed texts, in document order.

    Cells may nest links and markup, so each cell's full text is joined
    before trimming.
    """
    texts: list[str] = []
    for row in table.select("tr"):
        for cell in row.select("td, th"):
            texts.append(cell.get_text().strip())
    return texts


def extract_conjugation_table(table: Tag) -> ConjugationTable:
    return ConjugationTable.from_cells(cell_texts(table))


def extract_infinitive(page: BeautifulSoup) -> str:
    """First text of the summary table's second column, or ``""``."""
    cell = page.select_one(INFINITIVE_SELECTOR)
    if cell is None:
        return ""
    return next(cell.stripped_strings, "")


def parse_conjugation_page(html: str, verb: str, language: str) -> Result[VerbConjugations, AppError]:
    """Parse a conjugation page into ``VerbConjugations``.

    Returns NotFound when the page has no infinitive or no tense tables,
    which is how the site answers misspelled or unknown verbs.
    """
    page = BeautifulSoup(html, "html.parser")

    infinitive = extract_infinitive(page)
    if not infinitive:
        log.info("conjugation_infinitive_missing", verb=verb, language=language)
        return verb_not_found(verb, language, origin="extract.conjugations")

    tables = page.select(TABLE_SELECTOR)
    if not tables:
        log.info("conjugation_tables_missing", verb=verb, language=language)
        return verb_not_found(verb, language, origin="extract.conjugations")

    conjugations = VerbConjugations(
        verb=infinitive,
        conjugation_tables=[extract_conjugation_table(t) for t in tables],
    )
    log.debug(
        "conjugations_extracted",
        verb=verb,
        infinitive=infinitive,
        tables=len(conjugations.conjugation_tables),
    )
    return Ok(conjugations)
