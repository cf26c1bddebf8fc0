"""
Pipelines de Scrapy para manejar la persistencia de los datos.

Este módulo contiene dos pipelines:

* ``JsonExportPipeline``: escribe cada película en ``<JSON_EXPORT_DIR>/<n>.json``,
  donde ``n`` es la posición del título en la lista de entrada.
* ``DatabasePipeline``: guarda los registros en una base de datos
  (PostgreSQL o SQLite) utilizando SQLAlchemy. Crea las tablas si no existen
  e ignora las películas ya guardadas (misma URL). Solo se activa si
  ``DATABASE_URL`` está definido.
"""

from __future__ import annotations

import logging

import sqlalchemy as sa
from scrapy.exceptions import NotConfigured
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .items import MovieItem
from .storage import JsonRecordWriter

logger = logging.getLogger(__name__)


class JsonExportPipeline:
    """Exporta cada item a su propio fichero JSON."""

    def __init__(self, base_path: str = "data") -> None:
        self.writer = JsonRecordWriter(base_path)

    @classmethod
    def from_crawler(cls, crawler):  # type: ignore[override]
        base_path = crawler.settings.get("JSON_EXPORT_DIR", "data")
        return cls(base_path)

    def open_spider(self, spider):  # type: ignore[no-untyped-def]
        self.writer.open()

    def process_item(self, item, spider):
        if isinstance(item, MovieItem):
            self.writer.write(item)
        return item


class DatabasePipeline:
    """Inserta las películas y su reparto usando SQLAlchemy."""

    def __init__(self, db_url: str) -> None:
        self.db_url = db_url
        self.engine: sa.engine.Engine = sa.create_engine(self.db_url)
        self.SessionLocal = sessionmaker(bind=self.engine)
        self._setup_tables()

    @classmethod
    def from_crawler(cls, crawler):
        db_url = crawler.settings.get("DATABASE_URL")
        if not db_url:
            raise NotConfigured("DATABASE_URL no definido; DatabasePipeline desactivado")
        return cls(db_url)

    def _setup_tables(self) -> None:
        """Crea las tablas si no existen."""
        metadata = sa.MetaData()
        self.movies_table = sa.Table(
            "peliculas",
            metadata,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("url", sa.String(255), nullable=False),
            sa.Column("titulo", sa.String(255), nullable=False),
            sa.Column("anio", sa.String(4)),
            sa.Column("duracion", sa.Integer),
            sa.Column("calificacion", sa.String(8)),
            sa.Column("descripcion", sa.Text),
            sa.Column("presupuesto", sa.String(32)),
            sa.Column("recaudacion", sa.String(32)),
            sa.Column("directores", sa.Text),
            sa.Column("generos", sa.Text),
            sa.Column("paises", sa.Text),
            sa.UniqueConstraint("url", name="uq_pelicula_url"),
            extend_existing=True,
        )
        self.cast_table = sa.Table(
            "reparto",
            metadata,
            sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("pelicula_id", sa.Integer, sa.ForeignKey("peliculas.id", ondelete="CASCADE")),
            sa.Column("actor", sa.String(255), nullable=False),
            sa.Column("personaje", sa.String(255)),
            sa.Column("posicion_orden", sa.Integer),
            extend_existing=True,
        )
        metadata.create_all(self.engine)

    def _insert(self, table: sa.Table):
        if self.engine.dialect.name == "postgresql":
            return pg_insert(table)
        return sqlite_insert(table)

    def open_spider(self, spider):
        self.session: Session = self.SessionLocal()

    def close_spider(self, spider):
        self.session.commit()
        self.session.close()

    def process_item(self, item, spider):
        if isinstance(item, MovieItem):
            self._insert_movie(item)
        return item

    def _insert_movie(self, item: MovieItem) -> None:
        stmt = (
            self._insert(self.movies_table)
            .values(
                url=item.get("url"),
                titulo=item.get("title"),
                anio=item.get("year"),
                duracion=item.get("duration_minutes"),
                calificacion=item.get("rating_value"),
                descripcion=item.get("description"),
                presupuesto=item.get("budget"),
                recaudacion=item.get("gross"),
                directores=", ".join(item.get("directors") or []),
                generos=", ".join(item.get("genres") or []),
                paises=", ".join(item.get("countries") or []),
            )
            .on_conflict_do_nothing(index_elements=["url"])
        )
        try:
            result = self.session.execute(stmt)
            if result.rowcount == 0:
                # La película ya existe; no se duplica el reparto
                logger.info("La película %s ya estaba guardada", item.get("url"))
                self.session.commit()
                return
            self.session.flush()
            self._insert_cast(item)
            # Cada película se confirma por separado: un fallo posterior no la pierde
            self.session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Error al insertar película: %s", exc)
            self.session.rollback()

    def _insert_cast(self, item: MovieItem) -> None:
        pelicula_id = self.session.execute(
            sa.select(self.movies_table.c.id).where(
                self.movies_table.c.url == item.get("url")
            )
        ).scalar_one()
        characters = item.get("characters") or []
        rows = [
            {
                "pelicula_id": pelicula_id,
                "actor": actor,
                # cast y characters son paralelos, pero pueden tener distinta longitud
                "personaje": characters[pos] if pos < len(characters) else None,
                "posicion_orden": pos + 1,
            }
            for pos, actor in enumerate(item.get("cast") or [])
        ]
        if rows:
            self.session.execute(sa.insert(self.cast_table), rows)
            self.session.flush()
