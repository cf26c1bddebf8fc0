from typing import Any, Dict, Optional

import scrapy
from scrapy.exceptions import CloseSpider
from scrapy.spidermiddlewares.httperror import HttpError
from twisted.internet.error import (
    ConnectionRefusedError,
    DNSLookupError,
    TCPTimedOutError,
    TimeoutError,
)

from ..assembler import RecordAssembler
from ..exceptions import NotFoundError, ScraperError, SelectorError, TransportError
from ..storage import read_titles

NETWORK_ERRORS = (TimeoutError, TCPTimedOutError, ConnectionRefusedError, DNSLookupError)


class ImdbMoviesSpider(scrapy.Spider):
    """
    Busca cada título de la lista de entrada en IMDb y extrae su ficha.

    Argumentos (``-a``): ``movies_path`` (por defecto el setting
    ``MOVIES_INPUT``) y ``halt_on_failure`` (por defecto ``HALT_ON_FAILURE``).
    """

    name = "imdb_movies"
    allowed_domains = ["imdb.com"]

    def __init__(
        self,
        movies_path: Optional[str] = None,
        halt_on_failure: Any = None,
        *args: Any,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.movies_path = movies_path
        self.halt_on_failure = halt_on_failure
        self.assembler = RecordAssembler()

    def _halts(self) -> bool:
        if self.halt_on_failure is None:
            return self.settings.getbool("HALT_ON_FAILURE", False)
        if isinstance(self.halt_on_failure, str):
            # los argumentos -a llegan como texto
            return self.halt_on_failure.lower() in ("1", "true", "yes")
        return bool(self.halt_on_failure)

    @classmethod
    def update_settings(cls, settings):
        super().update_settings(settings)
        # Al detenerse en el primer fallo no debe haber otros títulos en vuelo
        if settings.getbool("HALT_ON_FAILURE"):
            settings.set("CONCURRENT_REQUESTS", 1, priority="spider")

    async def start(self):
        # Scrapy >= 2.13; las versiones anteriores llaman a start_requests()
        for request in self.start_requests():
            yield request

    def start_requests(self):
        path = self.movies_path or self.settings.get("MOVIES_INPUT")
        titles = read_titles(path)
        self.logger.info("%d títulos leídos de %s", len(titles), path)
        for position, title in enumerate(titles, start=1):
            query = self.assembler.search_url(title)
            self.logger.info("%s. Búsqueda: %s", position, query)
            yield scrapy.Request(
                query,
                callback=self.parse,
                errback=self.on_error,
                meta={"title": title, "position": position},
                dont_filter=True,
            )

    # Parse resultados de búsqueda
    def parse(self, response, **kwargs):
        meta = response.meta
        try:
            url = self.assembler.resolve_detail_url(response.selector, meta["title"])
        except (NotFoundError, SelectorError) as exc:
            self._fail(meta, exc)
            return
        yield scrapy.Request(
            url,
            callback=self.parse_movie,
            errback=self.on_error,
            meta={"title": meta["title"], "position": meta["position"], "detail_url": url},
            # dos títulos pueden resolver a la misma ficha; cada uno necesita su fichero
            dont_filter=True,
        )

    # Parse ficha de la película
    def parse_movie(self, response):
        meta = response.meta
        try:
            item = self.assembler.extract_record(
                meta["detail_url"], response.selector, meta["position"]
            )
        except SelectorError as exc:
            self._fail(meta, exc)
            return
        yield item

    def on_error(self, failure):
        request = failure.request
        if failure.check(HttpError):
            reason = f"HTTP {failure.value.response.status}"
        elif failure.check(*NETWORK_ERRORS):
            reason = f"error de red ({failure.getErrorMessage()})"
        else:
            reason = failure.getErrorMessage()
        self._fail(request.meta, TransportError(f"No se pudo descargar {request.url}: {reason}"))

    def _fail(self, meta: Dict[str, Any], exc: ScraperError) -> None:
        self.logger.error("%s. '%s' falló: %s", meta.get("position"), meta.get("title"), exc)
        if self._halts():
            raise CloseSpider(f"titulo_fallido: {meta.get('title')}")
