import os

"""
Configuración del proyecto Scrapy para IMDb.

Los valores que cambian entre ejecuciones (ficheros de entrada y salida,
política ante fallos, base de datos) se pueden sobrescribir con variables de
entorno.
"""

BOT_NAME = "imdb_metadata"

SPIDER_MODULES = ["imdb_metadata.spiders"]
NEWSPIDER_MODULE = "imdb_metadata.spiders"

ROBOTSTXT_OBEY = False

# Ajustes de concurrencia: cada respuesta tiene su propio árbol y el fichero
# de salida se nombra por la posición del título, así que el orden no importa
CONCURRENT_REQUESTS = 8

# Lista de títulos de entrada y carpeta de salida de los JSON
MOVIES_INPUT = os.getenv("MOVIES_INPUT", "data/movies.json")
JSON_EXPORT_DIR = os.getenv("JSON_EXPORT_DIR", "data")

# True: el primer título fallido cierra el spider. False: se registra y se sigue.
# Con True el spider baja CONCURRENT_REQUESTS a 1 para que no queden otros
# títulos en vuelo al cerrarse (el argumento -a halt_on_failure no lo hace)
HALT_ON_FAILURE = os.getenv("HALT_ON_FAILURE", "false").lower() in ("1", "true", "yes")

# Cadena de conexión SQLAlchemy (vacía = DatabasePipeline desactivado)
DATABASE_URL = os.getenv("DATABASE_URL", "")

# Configuración de Middlewares
DOWNLOADER_MIDDLEWARES = {
    "imdb_metadata.middlewares.RandomUserAgentMiddleware": 400,
}

# Configuración de Pipelines
ITEM_PIPELINES = {
    "imdb_metadata.pipelines.JsonExportPipeline": 300,
    "imdb_metadata.pipelines.DatabasePipeline": 400,
}

# Ajustes de cabeceras por defecto
DEFAULT_REQUEST_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en",
}

# Desactivar cookies (puede activarse si es necesario)
COOKIES_ENABLED = False

DOWNLOAD_TIMEOUT = int(os.getenv("DOWNLOAD_TIMEOUT", "90"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
