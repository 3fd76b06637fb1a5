"""
Cruce de los resultados por corte.

Todas las colecciones derivadas (salas, fechas, causas) heredan el orden de la
lista de cortes. ``zip_records`` une dos colecciones por posición; para las
causas, que vienen en el orden de las consultas (fecha × sala), el cruce con
las salas se hace por la clave ``(fecha, sala_int)``.
"""
import copy
import logging

from .download import case_request_keys

logger = logging.getLogger("pjudscraper.pjud.assemble")


class AlignmentError(ValueError):
    """Las colecciones a cruzar no están alineadas (largos distintos o cortes repetidas)."""


def zip_records(primary: list[dict], secondary: list, field: str) -> list[dict]:
    """
    Devuelve una copia de ``primary`` con ``secondary[i]`` en ``primary[i][field]``.

    Ninguna de las entradas se modifica.

    Raises:
        AlignmentError: Si las listas tienen largos distintos.
    """
    if len(primary) != len(secondary):
        raise AlignmentError(
            f"No se puede agregar '{field}': {len(primary)} elementos "
            f"frente a {len(secondary)}."
        )
    zipped = copy.deepcopy(primary)
    for elemento, dato in zip(zipped, secondary):
        elemento[field] = copy.deepcopy(dato)
    return zipped


def court_key(court: dict) -> tuple:
    return (str(court["codCorte"]), str(court["condicion"]))


def index_by_court(courts: list[dict], values: list) -> dict:
    """Vista ``{(codCorte, condicion): valor}`` de una colección alineada con ``courts``."""
    if len(courts) != len(values):
        raise AlignmentError(
            f"Se esperaban {len(courts)} elementos (uno por corte), se recibieron {len(values)}."
        )
    indice = {}
    for court, value in zip(courts, values):
        clave = court_key(court)
        if clave in indice:
            raise AlignmentError(f"Corte repetida en la lista de cortes: {clave}")
        indice[clave] = value
    return indice


def _cases_for_rooms(court: dict, salas: list[dict], week_info: dict, grupos: list) -> list:
    claves = case_request_keys(week_info)
    if len(claves) != len(grupos):
        raise AlignmentError(
            f"Corte {court.get('Nombre Corte', court['codCorte'])}: se hicieron "
            f"{len(claves)} consultas de causas pero hay {len(grupos)} respuestas."
        )
    causas_por_clave = dict(zip(claves, grupos))
    claves_salas = {(sala["fecha"], sala["sala_int"]) for sala in salas}
    descartados = [c for c in claves if c not in claves_salas and causas_por_clave[c]]
    if descartados:
        logger.warning(
            "Corte %s: %d grupo(s) de causas sin sala constituida se descartan: %s",
            court.get("Nombre Corte", court["codCorte"]), len(descartados), descartados
        )
    return [causas_por_clave.get((sala["fecha"], sala["sala_int"]), []) for sala in salas]


def assemble_courts(
    courts: list[dict],
    rooms_by_court: list[list[dict]],
    week_info: list[dict],
    cases_by_court: list[list[list[dict]]],
) -> list[dict]:
    """
    Une cortes, salas, semanas y causas en un registro por corte.

    Returns:
        list[dict]: ``{"courtData", "roomsData", "weekInfo", "casesData"}`` por corte,
        con ``casesData[i]`` igual a las causas de ``roomsData[i]``.
    """
    salas = index_by_court(courts, rooms_by_court)
    semanas = index_by_court(courts, week_info)
    causas = index_by_court(courts, cases_by_court)

    causas_alineadas = []
    for court in courts:
        clave = court_key(court)
        causas_alineadas.append(
            _cases_for_rooms(court, salas[clave], semanas[clave], causas[clave])
        )

    agregados = [{"courtData": court} for court in courts]
    agregados = zip_records(agregados, rooms_by_court, "roomsData")
    agregados = zip_records(agregados, week_info, "weekInfo")
    agregados = zip_records(agregados, causas_alineadas, "casesData")
    logger.debug("Cruzadas %d cortes.", len(agregados))
    return agregados
