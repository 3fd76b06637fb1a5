"""
Construcción y envío de las consultas al portal pjud.cl.

Fase 1: una consulta de salas por corte.
Fase 2: una consulta de causas por cada combinación fecha × sala descubierta en
la fase 1, agrupadas por corte.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial

import requests
from tqdm import tqdm

from ...utils import SALA_NO_ENCONTRADA, is_list_of_lists

logger = logging.getLogger("pjudscraper.pjud.download")

ROOMS_URL = "https://www.pjud.cl/ajax/Courts/getDataTypeTableSelectedML/"
CASES_URL = "https://www.pjud.cl/ajax/Courts/constitutionOfRoomML/"
TIPO_TABLA = 3
CAMPOS_OBLIGATORIOS = ("codCorte", "condicion")


class CourtValidationError(ValueError):
    """Los parámetros de una corte están incompletos o mal formados."""


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_court(court: dict, posicion: int | None = None) -> None:
    """Verifica que la corte tenga ``codCorte`` y ``condicion``."""
    if not isinstance(court, dict):
        raise CourtValidationError(
            f"La corte en la posición {posicion} no es un diccionario: {court!r}"
        )
    faltantes = [campo for campo in CAMPOS_OBLIGATORIOS if _is_blank(court.get(campo))]
    if faltantes:
        raise CourtValidationError(
            f"La corte en la posición {posicion} ({court.get('Nombre Corte', 'sin nombre')}) "
            f"no tiene {', '.join(faltantes)}: {court!r}"
        )


def build_room_requests(courts: list[dict]) -> list[dict]:
    """
    Crea una consulta de salas por corte, en el mismo orden de ``courts``.

    Raises:
        CourtValidationError: Si la entrada no es una lista o a alguna corte le
            falta ``codCorte`` o ``condicion``.
    """
    if not isinstance(courts, list):
        raise CourtValidationError("La entrada debe ser una lista de cortes.")
    solicitudes = []
    for posicion, court in enumerate(courts):
        validate_court(court, posicion)
        solicitudes.append({
            "url": ROOMS_URL,
            "method": "post",
            "payload": {
                "codTribunal": court["codCorte"],
                "codTypeTable": TIPO_TABLA,
                "condicion": court["condicion"],
            },
        })
    return solicitudes


def case_request_keys(week_info: dict) -> list[tuple]:
    """Pares (fecha, sala) consultados para una corte, en el orden de las consultas."""
    salas = [sala for sala in week_info["salas"] if sala != SALA_NO_ENCONTRADA]
    return [(fecha, sala) for fecha in week_info["fechas"] for sala in salas]


def build_case_requests(courts_with_week_info: list[dict]) -> list[list[dict]]:
    """
    Crea las consultas de causas, una lista por corte.

    Cada elemento de la entrada tiene ``courtData`` (parámetros de la corte) y
    ``weekInfo`` (``fechas`` y ``salas`` distintas de la fase 1). Las salas cuyo
    nombre no se reconoció no se consultan.
    """
    solicitudes_por_corte = []
    for posicion, elemento in enumerate(courts_with_week_info):
        court = elemento["courtData"]
        validate_court(court, posicion)
        week_info = elemento["weekInfo"]
        if SALA_NO_ENCONTRADA in week_info["salas"]:
            logger.warning(
                "Corte %s tiene salas con nombre no reconocido; no se consultarán.",
                court.get("Nombre Corte", court["codCorte"])
            )
        solicitudes = []
        for fecha, sala in case_request_keys(week_info):
            solicitudes.append({
                "url": CASES_URL,
                "method": "post",
                "payload": {
                    "numSala": sala,
                    "codCorte": court["codCorte"],
                    "tipoTabla": TIPO_TABLA,
                    "fecha": fecha,
                    "nomSala": "",
                    "condicion": court["condicion"],
                },
            })
        solicitudes_por_corte.append(solicitudes)
    return solicitudes_por_corte


def _fetch(session: requests.Session, solicitud: dict, timeout: float | None) -> str:
    resp = session.request(
        solicitud["method"].upper(),
        solicitud["url"],
        data=solicitud["payload"],
        timeout=timeout,
    )
    resp.raise_for_status()
    return resp.text


def _fetch_batch(session, solicitudes, max_workers, timeout) -> list[str]:
    if not solicitudes:
        return []
    fetch = partial(_fetch, session, timeout=timeout)
    with ThreadPoolExecutor(max_workers=min(max_workers, len(solicitudes))) as executor:
        return list(executor.map(fetch, solicitudes))


def dispatch(
    session: requests.Session,
    solicitudes: list,
    max_workers: int = 8,
    timeout: float | None = 30,
    verbose: int = 0,
) -> list:
    """
    Envía las consultas y devuelve los cuerpos de las respuestas, con la misma forma.

    Una lista plana se envía como un único lote concurrente. Una lista de listas
    se envía lote por lote (uno por corte) y devuelve una lista de listas.

    No hay reintentos: el primer error de red o HTTP se propaga como
    ``requests.RequestException`` y aborta la ejecución.
    """
    if is_list_of_lists(solicitudes):
        respuestas = []
        for grupo in tqdm(solicitudes, desc="Descargando causas", disable=not verbose):
            respuestas.append(_fetch_batch(session, grupo, max_workers, timeout))
        return respuestas
    if verbose:
        logger.info("Enviando %d consultas.", len(solicitudes))
    return _fetch_batch(session, solicitudes, max_workers, timeout)
