"""
User-Agent aleatorio para las peticiones a IMDb.

Lo comparten el middleware de Scrapy y el transporte de ``requests``.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

FALLBACK_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/114.0.5735.198 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/14.1 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:115.0) Gecko/20100101 Firefox/115.0",
]


class UserAgentPicker:
    """Elige un User-Agent de fake_useragent o, si falla, de una lista fija."""

    def __init__(self) -> None:
        self.ua: Optional[UserAgent]
        try:
            self.ua = UserAgent()
        except Exception as exc:
            logger.warning("fake_useragent falló (%s); usando lista básica", exc)
            self.ua = None

    def pick(self) -> str:
        return self.ua.random if self.ua else random.choice(FALLBACK_AGENTS)
