"""
Evaluación de selectores XPath sobre el árbol de la página.

La disposición de la ficha cambia según la película (hay títulos sin
clasificación por edades, sin presupuesto, etc.), así que un selector sin
coincidencias no es un error: ``extract_single`` devuelve ``EMPTY_NODE`` y
``extract_all`` una lista vacía. Lo único que se propaga es un XPath mal
escrito (``SelectorError``).
"""

from __future__ import annotations

from typing import List

from lxml import etree
from scrapy import Selector

from .exceptions import SelectorError
from .normalizers import normalize_text

# Nodo sin texto ni atributos que se devuelve cuando no hay coincidencias
EMPTY_NODE = Selector(root=etree.Element("empty"))


def parse_document(text: str) -> Selector:
    return Selector(text=text)


def is_empty(node: Selector) -> bool:
    return node is EMPTY_NODE


def _evaluate(tree: Selector, path: str) -> List[Selector]:
    try:
        return list(tree.xpath(path))
    except ValueError as exc:
        # parsel convierte los XPathError de lxml en ValueError
        raise SelectorError(path, str(exc)) from exc


def extract_single(tree: Selector, path: str) -> Selector:
    """Primera coincidencia del selector o ``EMPTY_NODE``."""
    matches = _evaluate(tree, path)
    return matches[0] if matches else EMPTY_NODE


def extract_all(tree: Selector, path: str) -> List[Selector]:
    """Todas las coincidencias en orden de documento (posiblemente ninguna)."""
    return _evaluate(tree, path)


def extract_last(tree: Selector, path: str) -> Selector:
    """
    Última coincidencia del selector o ``EMPTY_NODE``.

    Se usa para la lista año / clasificación / duración: cuando la película
    tiene clasificación, IMDb la inserta antes de la duración, por lo que la
    duración es siempre el último elemento.
    """
    matches = extract_all(tree, path)
    return matches[-1] if matches else EMPTY_NODE


def node_text(node: Selector) -> str:
    """Texto de todos los descendientes del nodo, con espacios colapsados."""
    return normalize_text(node.xpath("string()").get(default=""))


def node_attr(node: Selector, name: str) -> str:
    return node.attrib.get(name, "")
