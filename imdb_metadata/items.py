"""
Definición de Items para el proyecto IMDb.
"""

from typing import Any, Dict, List

import scrapy

# Nombre del campo del item -> clave en el JSON de salida
OUTPUT_KEYS = {
    "url": "url",
    "title": "title",
    "year": "year",
    "duration_minutes": "durationMinutes",
    "rating_value": "ratingValue",
    "description": "description",
    "budget": "budget",
    "gross": "gross",
    "directors": "directors",
    "cast": "cast",
    "characters": "characters",
    "genres": "genres",
    "countries": "countries",
}


class MovieItem(scrapy.Item):
    """Representa la ficha de una película extraída de IMDb."""

    position: int = scrapy.Field()  # posición (1..n) en la lista de entrada
    url: str = scrapy.Field()
    title: str = scrapy.Field()
    year: str = scrapy.Field()
    duration_minutes: int = scrapy.Field()
    rating_value: str = scrapy.Field()
    description: str = scrapy.Field()
    budget: str = scrapy.Field()
    gross: str = scrapy.Field()
    directors: List[str] = scrapy.Field()
    cast: List[str] = scrapy.Field()
    characters: List[str] = scrapy.Field()
    genres: List[str] = scrapy.Field()
    countries: List[str] = scrapy.Field()

    def to_record(self) -> Dict[str, Any]:
        """Registro con las claves del JSON de salida (sin ``position``)."""
        return {key: self.get(field) for field, key in OUTPUT_KEYS.items()}
