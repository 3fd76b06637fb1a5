"""
Parse de las respuestas HTML del portal pjud.cl.

El portal devuelve fragmentos HTML (no JSON). Los datos viven en la tabla del
último ``<div class="panel-body">`` del documento, tres celdas por registro:

    - salas:  fecha | nombre de la sala | relator
    - causas: lugar | carátula | id de ingreso
"""
import logging
from datetime import datetime

from bs4 import BeautifulSoup

from ...utils import is_list_of_lists, ordinal_name_to_number, strip_accents

logger = logging.getLogger("pjudscraper.pjud.parse")

SALAS = "salas"
CAUSAS = "causas"

CAMPOS = {
    SALAS: ("fecha", "sala_str", "relator"),
    CAUSAS: ("lugar", "caratula", "id_ingreso"),
}

PANEL_CLASS = "panel-body"
# Sólo las respuestas de salas traen esta tabla
TABLA_SALAS_ID = "dataTypeTable"
AVISOS_INDISPONIBILIDAD = ("mantencion", "no disponible")
FORMATO_FECHA = "%d/%m/%Y"


class StructuralParseError(ValueError):
    """La respuesta no tiene la estructura esperada (p.ej. no hay panel de contenido)."""

    def __init__(self, message: str, html: str | None = None):
        super().__init__(message)
        self.html = html


class PortalUnavailableError(StructuralParseError):
    """El portal respondió con un aviso de mantención en lugar de la tabla."""


def extract_records(html: str, kind: str) -> list[dict]:
    """
    Extrae los registros de un documento HTML de salas o de causas.

    Args:
        html (str): Cuerpo de la respuesta.
        kind (str): ``"salas"`` o ``"causas"``; la variante la define quien hizo
            la consulta, la tabla ``dataTypeTable`` sólo se usa para confirmarla.

    Returns:
        list[dict]: Registros en el orden del documento. Una lista vacía es un
        resultado válido (sala sin causas).

    Raises:
        PortalUnavailableError: Si la página es un aviso de mantención.
        StructuralParseError: Si no hay panel de contenido o la variante no coincide.
    """
    if kind not in CAMPOS:
        raise ValueError(f"Tipo de registro '{kind}' no soportado. Use 'salas' o 'causas'.")
    soup = BeautifulSoup(html, "html.parser")

    paneles = soup.find_all("div", class_=PANEL_CLASS)
    if not paneles:
        texto = strip_accents(soup.get_text(" ", strip=True)).lower()
        if any(aviso in texto for aviso in AVISOS_INDISPONIBILIDAD):
            raise PortalUnavailableError(
                f"El portal no está disponible (respuesta de {kind}): {texto[:200]}",
                html=html,
            )
        raise StructuralParseError(
            f"No se encontró ningún panel '{PANEL_CLASS}' en la respuesta de {kind}. "
            "Verifique si la estructura de la página cambió.",
            html=html,
        )

    es_sala = soup.find("table", id=TABLA_SALAS_ID) is not None
    if es_sala != (kind == SALAS):
        raise StructuralParseError(
            f"Se esperaba una respuesta de {kind}, pero la tabla "
            f"'{TABLA_SALAS_ID}' {'está' if es_sala else 'no está'} presente.",
            html=html,
        )
    logger.debug("Respuesta de %s con %d panel(es); usando el último.", kind, len(paneles))

    celdas = [td.get_text(" ", strip=True) for td in paneles[-1].find_all("td")]
    n_completas = len(celdas) - len(celdas) % 3
    if n_completas != len(celdas):
        logger.warning(
            "Respuesta de %s con %d celdas (no múltiplo de 3); se descartan las últimas %d.",
            kind, len(celdas), len(celdas) - n_completas
        )

    registros = []
    for i in range(0, n_completas, 3):
        registro = dict(zip(CAMPOS[kind], celdas[i:i + 3]))
        if kind == SALAS:
            registro["sala_int"] = ordinal_name_to_number(registro["sala_str"])
        registros.append(registro)
    return registros


def parse_responses(bodies: list, kind: str) -> list:
    """
    Aplica ``extract_records`` manteniendo la forma de la entrada.

    Una lista plana de HTMLs devuelve una lista de listas de registros; una lista
    agrupada por corte devuelve un nivel más de anidamiento.
    """
    if is_list_of_lists(bodies):
        return [[extract_records(html, kind) for html in grupo] for grupo in bodies]
    return [extract_records(html, kind) for html in bodies]


def extract_week_info(rooms_by_court: list[list[dict]]) -> list[dict]:
    """Fechas y números de sala distintos de cada corte, en el orden en que aparecen."""
    week_info = []
    for salas in rooms_by_court:
        week_info.append({
            "fechas": list(dict.fromkeys(sala["fecha"] for sala in salas)),
            "salas": list(dict.fromkeys(sala["sala_int"] for sala in salas)),
        })
    return week_info


def week_label(rooms: list[dict]) -> str:
    """Etiqueta "Semana del <primera fecha> al <última fecha>" de una lista de salas."""
    fechas = [sala["fecha"] for sala in rooms if sala.get("fecha")]
    if not fechas:
        raise ValueError("No hay fechas para calcular la semana.")
    ordenadas = sorted(fechas, key=lambda f: datetime.strptime(f, FORMATO_FECHA))
    return f"Semana del {ordenadas[0]} al {ordenadas[-1]}"
