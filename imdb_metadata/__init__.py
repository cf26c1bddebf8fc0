"""Extracción de fichas de películas de IMDb a partir de una lista de títulos."""

__version__ = "0.1.0"
