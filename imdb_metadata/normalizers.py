"""
Normalizadores de valores extraídos de la ficha de IMDb.

Son funciones puras: reciben el texto tal cual aparece en la página y
devuelven la forma canónica que se guarda en el registro.
"""

import re

from .exceptions import FormatError

_DURATION_JUNK = re.compile(r'[\s"]')
_NON_DIGITS = re.compile(r"[^0-9]")
_WHITESPACE = re.compile(r"\s+")
_YEAR = re.compile(r"\d{4}")
_DIGITS = re.compile(r"[0-9]+")

# Entidades que IMDb deja sin decodificar en los textos
_ENTITIES = {
    "&#x27;": "'",
}


def _component(token: str, raw: str) -> int:
    if not _DIGITS.fullmatch(token):
        raise FormatError(f"Componente de duración no numérico {token!r} en {raw!r}")
    return int(token)


def normalize_duration(raw: str) -> int:
    """
    Convierte '2h 15m' a minutos (135).

    Si falta la hora o los minutos ese componente vale 0; una cadena sin
    marcadores ('2009', '') devuelve 0. Lanza FormatError solo cuando un
    componente presente no es un entero.
    """
    value = _DURATION_JUNK.sub("", raw or "")
    total = 0
    h_idx = value.find("h")
    if h_idx != -1:
        total += _component(value[:h_idx], raw) * 60
    m_idx = value.find("m")
    if m_idx != -1:
        total += _component(value[h_idx + 1:m_idx], raw)
    return total


def normalize_money(raw: str) -> str:
    """'$1,234,567 (estimated)' -> '1234567'."""
    return _NON_DIGITS.sub("", raw or "")


def unescape_text(raw: str) -> str:
    text = raw or ""
    for entity, char in _ENTITIES.items():
        text = text.replace(entity, char)
    return text


def normalize_text(raw: str) -> str:
    """Desescapa y colapsa los espacios en blanco."""
    return _WHITESPACE.sub(" ", unescape_text(raw)).strip()


def normalize_year(raw: str) -> str:
    """Primer grupo de 4 dígitos del texto, o cadena vacía."""
    m = _YEAR.search(raw or "")
    return m.group(0) if m else ""
