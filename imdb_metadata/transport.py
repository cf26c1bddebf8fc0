"""
Transporte HTTP para el modo directo (sin Scrapy).

``HttpTransport.fetch`` es la capacidad ``fetch(url) -> html`` que se inyecta
en ``RecordAssembler``. La sesión se abre y se cierra alrededor de la
ejecución del lote usando el transporte como context manager.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

import requests

from .exceptions import TransportError
from .useragents import UserAgentPicker

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en",
}


class HttpTransport:
    """GET con ``requests.Session`` y User-Agent aleatorio."""

    def __init__(
        self,
        timeout: float = 90.0,
        headers: Optional[Dict[str, str]] = None,
        picker: Optional[UserAgentPicker] = None,
    ) -> None:
        self.timeout = timeout
        self.headers = dict(DEFAULT_HEADERS, **(headers or {}))
        self.picker = picker or UserAgentPicker()
        self.session: Optional[requests.Session] = None

    def __enter__(self) -> "HttpTransport":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open(self) -> None:
        if self.session is None:
            self.session = requests.Session()
            self.session.headers.update(self.headers)

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    def fetch(self, url: str) -> str:
        """
        Descarga ``url`` y devuelve el HTML.

        Raises:
            TransportError: error de red, timeout o código HTTP >= 400.
        """
        self.open()
        try:
            resp = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.picker.pick()},
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("Falló la descarga de %s: %s", url, exc)
            raise TransportError(f"No se pudo descargar {url}: {exc}") from exc
        return resp.text
