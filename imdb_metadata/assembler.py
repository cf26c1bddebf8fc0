"""
Ensamblado del registro de una película.

Flujo por título: búsqueda -> ficha -> extracción de campos -> ``MovieItem``.
Cada campo se extrae de forma independiente: si uno no aparece o tiene un
formato inesperado se queda con su valor por defecto y se sigue con los
demás. Solo los fallos de documento (descarga, búsqueda sin resultados o
XPath inválido) hacen fallar el registro.

Las funciones de búsqueda y extracción no hacen I/O, de modo que las usa
tanto el spider de Scrapy como ``BatchDriver`` con un transporte inyectado.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional
from urllib.parse import quote_plus, urljoin, urlsplit, urlunsplit

from scrapy import Selector

from .exceptions import FormatError, NotFoundError
from .extractors import extract_single, is_empty, node_attr, parse_document
from .fields import FIELD_SPECS, MANY, FieldSpec
from .items import MovieItem

logger = logging.getLogger(__name__)

IMDB_BASE_URL = "https://www.imdb.com"
SEARCH_URL_TEMPLATE = IMDB_BASE_URL + "/find/?q={query}&s=tt&ttype=ft"

# Enlace del primer resultado de la búsqueda
SEARCH_RESULT_PATH = '//ul//a[@class="ipc-metadata-list-summary-item__t"]'

Fetch = Callable[[str], str]


class RecordAssembler:
    """Construye un ``MovieItem`` a partir del título de una película."""

    def __init__(
        self,
        fetch: Optional[Fetch] = None,
        base_url: str = IMDB_BASE_URL,
        search_url_template: str = SEARCH_URL_TEMPLATE,
        field_specs: Iterable[FieldSpec] = FIELD_SPECS,
    ) -> None:
        self.fetch = fetch
        self.base_url = base_url
        self.search_url_template = search_url_template
        self.field_specs = tuple(field_specs)

    def search_url(self, title: str) -> str:
        return self.search_url_template.format(query=quote_plus(title))

    def resolve_detail_url(self, search_tree: Selector, title: str = "") -> str:
        """
        URL canónica de la ficha a partir de la página de resultados.

        Se descarta la query (``?ref_=fn_al_tt_1``) y el fragmento.

        Raises:
            NotFoundError: si la búsqueda no tiene ningún resultado.
        """
        link = extract_single(search_tree, SEARCH_RESULT_PATH)
        href = node_attr(link, "href")
        if is_empty(link) or not href:
            raise NotFoundError(f"Sin resultados en la búsqueda de {title!r}")
        scheme, netloc, path, _, _ = urlsplit(urljoin(self.base_url, href))
        return urlunsplit((scheme, netloc, path, "", ""))

    def extract_record(
        self, url: str, detail_tree: Selector, position: Optional[int] = None
    ) -> MovieItem:
        values = {"position": position, "url": url}
        for spec in self.field_specs:
            try:
                values[spec.name] = spec.extract(detail_tree)
            except FormatError as exc:
                logger.warning(
                    "Campo '%s' con formato inválido en %s (%s); se usa el valor por defecto",
                    spec.name, url, exc,
                )
                values[spec.name] = [] if spec.arity == MANY else spec.default
        return MovieItem(**values)

    def assemble(self, title: str, position: Optional[int] = None) -> MovieItem:
        """
        Búsqueda, descarga de la ficha y extracción para un título.

        Raises:
            TransportError: si alguna descarga falla.
            NotFoundError: si la búsqueda no devuelve resultados.
            SelectorError: si algún XPath es inválido.
        """
        if self.fetch is None:
            raise RuntimeError("RecordAssembler.assemble necesita un transporte (fetch)")
        query = self.search_url(title)
        logger.info("%s. Búsqueda: %s", position or "-", query)
        search_tree = parse_document(self.fetch(query))
        url = self.resolve_detail_url(search_tree, title)
        detail_tree = parse_document(self.fetch(url))
        return self.extract_record(url, detail_tree, position)
