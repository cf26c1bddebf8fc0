"""
Ejecución secuencial de un lote de títulos (modo directo).

Cada título se resuelve por completo (búsqueda, ficha, extracción y
escritura) antes de pasar al siguiente. Con ``halt_on_failure`` el primer
título fallido detiene el lote; si no, el fallo se registra y se continúa.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from .assembler import RecordAssembler
from .exceptions import NotFoundError, SelectorError, TransportError
from .storage import JsonRecordWriter

logger = logging.getLogger(__name__)

# Errores que hacen fallar un registro
RECORD_ERRORS = (TransportError, NotFoundError, SelectorError)


@dataclass
class BatchReport:
    succeeded: List[int] = field(default_factory=list)
    failed: Dict[int, Exception] = field(default_factory=dict)


class BatchDriver:
    def __init__(
        self,
        assembler: RecordAssembler,
        writer: JsonRecordWriter,
        halt_on_failure: bool = False,
    ) -> None:
        self.assembler = assembler
        self.writer = writer
        self.halt_on_failure = halt_on_failure

    def run(self, titles: Iterable[str]) -> BatchReport:
        report = BatchReport()
        self.writer.open()
        for position, title in enumerate(titles, start=1):
            try:
                item = self.assembler.assemble(title, position)
            except RECORD_ERRORS as exc:
                logger.error("%s. '%s' falló: %s", position, title, exc)
                if self.halt_on_failure:
                    raise
                report.failed[position] = exc
                continue
            self.writer.write(item)
            report.succeeded.append(position)
        logger.info(
            "Lote terminado: %d correctos, %d fallidos",
            len(report.succeeded), len(report.failed),
        )
        return report
