"""
Middlewares personalizados para Scrapy
--------------------------------------

* RandomUserAgentMiddleware: asigna un User-Agent aleatorio por petición.
"""

from __future__ import annotations

from typing import Optional

from .useragents import UserAgentPicker


class RandomUserAgentMiddleware:
    """Asigna un User-Agent aleatorio a cada petición que no traiga uno."""

    def __init__(self, picker: Optional[UserAgentPicker] = None) -> None:
        self.picker = picker or UserAgentPicker()

    @classmethod
    def from_crawler(cls, crawler):
        return cls()

    def process_request(self, request, spider):
        request.headers.setdefault("User-Agent", self.picker.pick())
        return None
