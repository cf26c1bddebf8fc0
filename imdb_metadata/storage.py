"""
Lectura de la lista de títulos y escritura de un JSON por película.
"""

from __future__ import annotations

import json
import logging
import os
from typing import List

from .items import MovieItem

logger = logging.getLogger(__name__)


def read_titles(path: str) -> List[str]:
    """
    Lee ``[{"movie_name": "..."}, ...]`` y devuelve los títulos en orden.

    Raises:
        ValueError: si el documento no es una lista o falta ``movie_name``.
    """
    with open(path, encoding="utf-8") as fh:
        entries = json.load(fh)
    if not isinstance(entries, list):
        raise ValueError(f"{path}: se esperaba una lista de películas")
    titles = []
    for pos, entry in enumerate(entries, start=1):
        name = entry.get("movie_name") if isinstance(entry, dict) else None
        if not isinstance(name, str):
            raise ValueError(f"{path}: la entrada {pos} no tiene 'movie_name'")
        titles.append(name)
    return titles


class JsonRecordWriter:
    """Escribe cada registro en ``<base_path>/<posición>.json``."""

    def __init__(self, base_path: str = "data") -> None:
        self.base_path = base_path

    def open(self) -> None:
        os.makedirs(self.base_path, exist_ok=True)

    def path_for(self, position: int) -> str:
        return os.path.join(self.base_path, f"{position}.json")

    def write(self, item: MovieItem) -> str:
        position = item.get("position")
        if position is None:
            raise ValueError("El registro no tiene posición en la lista de entrada")
        self.open()
        path = self.path_for(position)
        with open(path, "w", encoding="utf-8") as fh:
            json.dump(item.to_record(), fh, indent=2, ensure_ascii=False)
        logger.debug("Registro %s guardado en %s", position, path)
        return path
