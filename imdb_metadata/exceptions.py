"""
Excepciones del proyecto.

Los errores de documento (``TransportError``, ``NotFoundError`` y
``SelectorError``) hacen fallar el registro completo de un título.
``FormatError`` se absorbe campo a campo: el campo queda con su valor por
defecto y el resto del registro se sigue extrayendo.
"""


class ScraperError(Exception):
    """Error base del scraper."""


class TransportError(ScraperError):
    """No se pudo descargar una página (red, timeout o código HTTP de error)."""


class NotFoundError(ScraperError):
    """La búsqueda no devolvió ningún enlace a la ficha de la película."""


class SelectorError(ScraperError, ValueError):
    """La expresión XPath es inválida (defecto de configuración, no de datos)."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        message = f"XPath inválido: {path!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FormatError(ScraperError, ValueError):
    """Un normalizador recibió un componente no numérico."""
