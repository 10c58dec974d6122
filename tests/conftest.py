from pathlib import Path

import pytest

from wordref.core.errors import AppError, Ok, Result


CONJUGATION_PAGE = """
<html><body>
<table id="conjtable">
  <tr><td>infinitif</td><td><b>parler</b><br/>parlant</td></tr>
</table>
<table class="neoConj">
  <tr><th>présent</th></tr>
  <tr><td>je</td><td>parle</td></tr>
  <tr><td>tu</td><td>parles</td></tr>
  <tr><td>il</td><td>parle</td></tr>
</table>
<table class="neoConj">
  <tr><th>imparfait</th></tr>
  <tr><td>je</td><td>parlais</td></tr>
  <tr><td>tu</td><td>parlais</td></tr>
</table>
<table class="neoConj">
  <tr><th>futur simple</th></tr>
  <tr><td>je</td><td><a href="#">parlerai</a></td></tr>
</table>
</body></html>
"""

DEFINITION_PAGE = """
<html><body>
<table class="WRD">
  <tr class="langHeader">
    <td class="FrWrd"><span data-ph="sLang_fr">Français</span></td>
    <td class="ToWrd"><span data-ph="sLang_en">Anglais</span></td>
  </tr>
  <tr>
    <td class="FrWrd"><strong>parler</strong></td>
    <td class="ToWrd">speak <em class="POS2" data-lang="en">vi</em></td>
  </tr>
  <tr>
    <td class="ToWrd">talk <em class="POS2" data-lang="en">vi</em></td>
  </tr>
</table>
<table class="WRD">
  <tr class="langHeader">
    <td class="FrWrd"><span data-ph="sLang_fr">Français</span></td>
    <td class="ToWrd"><span data-ph="sLang_en">Anglais</span></td>
  </tr>
  <tr>
    <td class="FrWrd"><strong>parler de</strong></td>
    <td class="ToWrd">talk about <em class="POS2" data-lang="en">vtr</em></td>
  </tr>
</table>
</body></html>
"""

EMPTY_PAGE = "<html><body><p>No results</p></body></html>"


class FakeFetcher:
    """Serves canned pages by URL substring and counts fetches."""

    def __init__(self, pages: dict[str, str] | None = None, default: str = EMPTY_PAGE):
        self.pages = pages or {}
        self.default = default
        self.calls: list[str] = []

    async def fetch(self, url: str) -> Result[str, AppError]:
        self.calls.append(url)
        for fragment, html in self.pages.items():
            if fragment in url:
                return Ok(html)
        return Ok(self.default)


@pytest.fixture
def conjugation_page() -> str:
    return CONJUGATION_PAGE


@pytest.fixture
def definition_page() -> str:
    return DEFINITION_PAGE


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher({
        "/conj/frverbs.aspx": CONJUGATION_PAGE,
        "/fren/": DEFINITION_PAGE,
    })


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache.db"
