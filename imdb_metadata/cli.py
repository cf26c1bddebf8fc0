"""
Punto de entrada de línea de comandos.

    imdb-metadata [--direct] [--halt-on-failure] [<movies_path> <output_dir>]

Sin ``--direct`` se lanza el spider ``imdb_movies`` con Scrapy; con
``--direct`` se recorre la lista de forma secuencial con ``requests``.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from scrapy.crawler import CrawlerProcess
from scrapy.settings import Settings

from .assembler import RecordAssembler
from .batch import BatchDriver
from .factories import SpiderFactory
from .storage import JsonRecordWriter, read_titles
from .transport import HttpTransport

DEFAULT_MOVIES_PATH = "./data/movies.json"
DEFAULT_OUTPUT_DIR = "./data"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imdb-metadata",
        description="Extrae la ficha de IMDb de cada película de una lista.",
    )
    parser.add_argument(
        "paths", nargs="*", metavar="<movies_path> <output_dir>",
        help="lista de títulos (JSON) y carpeta de salida",
    )
    parser.add_argument(
        "--direct", action="store_true",
        help="modo secuencial con requests en lugar de Scrapy",
    )
    parser.add_argument(
        "--halt-on-failure", action="store_true",
        help="detener el lote en el primer título fallido",
    )
    return parser


def run_crawl(movies_path: str, output_dir: str, halt_on_failure: bool) -> None:
    settings = Settings()
    settings.setmodule("imdb_metadata.settings", priority="project")
    settings.set("MOVIES_INPUT", movies_path, priority="cmdline")
    settings.set("JSON_EXPORT_DIR", output_dir, priority="cmdline")
    if halt_on_failure:
        settings.set("HALT_ON_FAILURE", True, priority="cmdline")
    process = CrawlerProcess(settings)
    process.crawl(SpiderFactory.get("imdb_movies"))
    process.start()


def run_direct(movies_path: str, output_dir: str, halt_on_failure: bool) -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    titles = read_titles(movies_path)
    with HttpTransport(timeout=float(os.getenv("DOWNLOAD_TIMEOUT", "90"))) as transport:
        driver = BatchDriver(
            RecordAssembler(transport.fetch),
            JsonRecordWriter(output_dir),
            halt_on_failure=halt_on_failure,
        )
        driver.run(titles)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.paths) not in (0, 2):
        parser.print_usage()
        return 0
    movies_path, output_dir = args.paths or (DEFAULT_MOVIES_PATH, DEFAULT_OUTPUT_DIR)
    halt = args.halt_on_failure or os.getenv("HALT_ON_FAILURE", "false").lower() in ("1", "true", "yes")
    if args.direct:
        run_direct(movies_path, output_dir, halt)
    else:
        run_crawl(movies_path, output_dir, halt)
    return 0
