"""
Esta parte es para instanciar spiders bajo demanda.

El registro por nombre permite que la CLI lance un spider sin importar su
módulo directamente, y facilita añadir otras fuentes de datos sin modificar
el código cliente.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Type

import scrapy


class SpiderFactory:
    """Crea instancias de spiders según un nombre registrado."""

    _registry = {
        "imdb_movies": "imdb_metadata.spiders.imdb_movies.ImdbMoviesSpider",
    }

    @classmethod
    def get(cls, name: str) -> Type[scrapy.Spider]:
        """Devuelve la clase del spider indicado.

        Raises:
            ValueError: si el nombre no está registrado.
        """
        if name not in cls._registry:
            raise ValueError(f"Spider '{name}' no está registrado en la fábrica")
        module_path, class_name = cls._registry[name].rsplit(".", 1)
        return getattr(import_module(module_path), class_name)

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> scrapy.Spider:
        """Devuelve una instancia del spider indicado.

        Args:
            name: nombre del spider registrado.
            kwargs: argumentos opcionales que se pasan al constructor.
        """
        return cls.get(name)(**kwargs)
