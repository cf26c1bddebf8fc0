"""
Especificación de los campos de la ficha de una película.

Cada ``FieldSpec`` une un XPath, la aridad de la extracción y el
normalizador que se aplica al texto. Se definen una sola vez y se comparten
entre todos los registros.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from scrapy import Selector

from .extractors import extract_all, extract_last, extract_single, is_empty, node_text
from .normalizers import (
    normalize_duration,
    normalize_money,
    normalize_text,
    normalize_year,
)

SINGLE = "single"
LAST = "last"
MANY = "many"

# Lista año / clasificación / duración bajo el título
HERO_METADATA_PATH = (
    '//ul[contains(@class, "ipc-inline-list--show-dividers")'
    ' and contains(@class, "baseAlt")]/li'
)


@dataclass(frozen=True)
class FieldSpec:
    name: str
    path: str
    arity: str = SINGLE
    normalize: Callable[[str], Any] = normalize_text
    default: Any = ""

    def extract(self, tree: Selector) -> Any:
        """
        Extrae y normaliza el campo.

        Si el nodo no existe devuelve ``default``; los campos MANY devuelven
        una lista (vacía si no hay coincidencias). Puede lanzar
        ``SelectorError`` y ``FormatError``.
        """
        if self.arity == MANY:
            return [self.normalize(node_text(n)) for n in extract_all(tree, self.path)]
        if self.arity == LAST:
            node = extract_last(tree, self.path)
        else:
            node = extract_single(tree, self.path)
        if is_empty(node):
            return self.default
        return self.normalize(node_text(node))


FIELD_SPECS: Tuple[FieldSpec, ...] = (
    FieldSpec("title", '//span[@data-testid="hero__primary-text"]'),
    FieldSpec("year", HERO_METADATA_PATH, normalize=normalize_year),
    FieldSpec("duration_minutes", HERO_METADATA_PATH, LAST, normalize_duration, 0),
    FieldSpec(
        "rating_value",
        '//div[@data-testid="hero-rating-bar__aggregate-rating__score"]/span',
    ),
    FieldSpec("description", '//span[@data-testid="plot-xl"]'),
    FieldSpec(
        "budget",
        '//li[@data-testid="title-boxoffice-budget"]/div//span',
        normalize=normalize_money,
    ),
    FieldSpec(
        "gross",
        '//li[@data-testid="title-boxoffice-cumulativeworldwidegross"]'
        '//span[@class="ipc-metadata-list-item__list-content-item"]',
        normalize=normalize_money,
    ),
    # Solo la primera fila de créditos principales (dirección)
    FieldSpec(
        "directors",
        '(//section//li[@data-testid="title-pc-principal-credit"]//ul)[1]//li',
        MANY,
    ),
    FieldSpec("cast", '//a[@data-testid="title-cast-item__actor"]', MANY),
    FieldSpec("characters", '//a[@data-testid="cast-item-characters-link"]', MANY),
    FieldSpec("genres", '//div[@data-testid="genres"]//span', MANY),
    FieldSpec("countries", '//li[@data-testid="title-details-origin"]//ul/li', MANY),
)
