"""Fixtures pytest compartidas: páginas sintéticas de IMDb y transporte falso."""

import json
from pathlib import Path
from typing import Callable, Dict

import pytest
from scrapy import Selector

from imdb_metadata.exceptions import TransportError

SEARCH_URL = "https://www.imdb.com/find/?q=Avatar&s=tt&ttype=ft"
DETAIL_URL = "https://www.imdb.com/title/tt0499549/"

SEARCH_HTML = """
<html><body>
<section>
  <ul class="ipc-metadata-list">
    <li><div>
      <a class="ipc-metadata-list-summary-item__t" href="/title/tt0499549/?ref_=fn_al_tt_1">Avatar</a>
    </div></li>
    <li><div>
      <a class="ipc-metadata-list-summary-item__t" href="/title/tt1630029/?ref_=fn_al_tt_2">Avatar: The Way of Water</a>
    </div></li>
  </ul>
</section>
</body></html>
"""

EMPTY_SEARCH_HTML = """
<html><body>
<section><p>No results found for "zzqqxx"</p></section>
</body></html>
"""

BUDGET_BLOCK = """
    <li data-testid="title-boxoffice-budget">
      <span>Budget</span>
      <div><ul><li><span class="ipc-metadata-list-item__list-content-item">$237,000,000 (estimated)</span></li></ul></div>
    </li>
"""

DETAIL_HTML = """
<html><body>
<section>
  <h1><span data-testid="hero__primary-text">Avatar</span></h1>
  <ul class="ipc-inline-list ipc-inline-list--show-dividers sc-d8941411-2 cdJsTz baseAlt">
    <li><a href="/title/tt0499549/releaseinfo">2009</a></li>
    <li><a href="/title/tt0499549/parentalguide">PG-13</a></li>
    <li>2h 42m</li>
  </ul>
  <div data-testid="hero-rating-bar__aggregate-rating__score"><span>7.9</span><span>/10</span></div>
  <p><span data-testid="plot-xl">A paraplegic Marine dispatched to the moon Pandora
    on a unique mission becomes torn between following his orders and protecting
    the world he feels is his home.</span></p>
  <ul>
    <li data-testid="title-pc-principal-credit">
      <span>Director</span>
      <div><ul><li><a href="/name/nm0000116/">James Cameron</a></li></ul></div>
    </li>
    <li data-testid="title-pc-principal-credit">
      <span>Writer</span>
      <div><ul><li><a href="/name/nm0000116/">James Cameron</a></li></ul></div>
    </li>
  </ul>
</section>
<section data-testid="title-cast">
  <div data-testid="title-cast-item">
    <a data-testid="title-cast-item__actor">Sam Worthington</a>
    <a data-testid="cast-item-characters-link"><span>Jake Sully</span></a>
  </div>
  <div data-testid="title-cast-item">
    <a data-testid="title-cast-item__actor">Zoe Saldana</a>
    <a data-testid="cast-item-characters-link"><span>Neytiri</span></a>
  </div>
  <div data-testid="title-cast-item">
    <a data-testid="title-cast-item__actor">Sigourney Weaver</a>
    <a data-testid="cast-item-characters-link"><span>Dr. Grace Augustine</span></a>
  </div>
</section>
<section>
  <div data-testid="genres">
    <a class="ipc-chip"><span class="ipc-chip__text">Action</span></a>
    <a class="ipc-chip"><span class="ipc-chip__text">Adventure</span></a>
    <a class="ipc-chip"><span class="ipc-chip__text">Fantasy</span></a>
  </div>
</section>
<section>
  <ul>
    <li data-testid="title-details-origin">
      <span>Countries of origin</span>
      <div><ul>
        <li><a>United States</a></li>
        <li><a>United Kingdom</a></li>
      </ul></div>
    </li>
  </ul>
</section>
<section>
  <ul>""" + BUDGET_BLOCK + """
    <li data-testid="title-boxoffice-cumulativeworldwidegross">
      <span>Gross worldwide</span>
      <div><ul><li><span class="ipc-metadata-list-item__list-content-item">$2,923,706,026</span></li></ul></div>
    </li>
  </ul>
</section>
</body></html>
"""

EXPECTED_RECORD = {
    "url": DETAIL_URL,
    "title": "Avatar",
    "year": "2009",
    "durationMinutes": 162,
    "ratingValue": "7.9",
    "description": (
        "A paraplegic Marine dispatched to the moon Pandora on a unique mission "
        "becomes torn between following his orders and protecting the world he "
        "feels is his home."
    ),
    "budget": "237000000",
    "gross": "2923706026",
    "directors": ["James Cameron"],
    "cast": ["Sam Worthington", "Zoe Saldana", "Sigourney Weaver"],
    "characters": ["Jake Sully", "Neytiri", "Dr. Grace Augustine"],
    "genres": ["Action", "Adventure", "Fantasy"],
    "countries": ["United States", "United Kingdom"],
}


@pytest.fixture
def search_html() -> str:
    return SEARCH_HTML


@pytest.fixture
def empty_search_html() -> str:
    return EMPTY_SEARCH_HTML


@pytest.fixture
def detail_html() -> str:
    return DETAIL_HTML


@pytest.fixture
def detail_html_without_budget() -> str:
    """Ficha sin la fila de presupuesto."""
    return DETAIL_HTML.replace(BUDGET_BLOCK, "")


@pytest.fixture
def detail_tree() -> Selector:
    return Selector(text=DETAIL_HTML)


@pytest.fixture
def expected_record() -> Dict:
    return dict(EXPECTED_RECORD)


@pytest.fixture
def detail_url() -> str:
    return DETAIL_URL


@pytest.fixture
def search_url() -> str:
    return SEARCH_URL


@pytest.fixture
def fake_fetch() -> Callable[[Dict[str, str]], Callable[[str], str]]:
    """Construye un ``fetch`` que sirve páginas desde un dict url -> html."""

    def build(pages: Dict[str, str]) -> Callable[[str], str]:
        def fetch(url: str) -> str:
            if url not in pages:
                raise TransportError(f"No se pudo descargar {url}: 404")
            return pages[url]

        return fetch

    return build


@pytest.fixture
def movies_file(tmp_path: Path) -> Path:
    """Lista de entrada con dos títulos."""
    path = tmp_path / "movies.json"
    path.write_text(
        json.dumps([{"movie_name": "Avatar"}, {"movie_name": "zzqqxx"}]),
        encoding="utf-8",
    )
    return path
