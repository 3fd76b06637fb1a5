"""
Proyección de los registros por corte a filas para la planilla semanal.
"""
import logging
import re

import pandas as pd

from ...utils import normalize_caption

logger = logging.getLogger("pjudscraper.pjud.rows")

COLUMNS = [
    "fecha",
    "corte",
    "lugar",
    "caratula",
    "id_ingreso",
    "relator",
    "sala",
    # columnas reservadas para anotaciones manuales
    "nota_1",
    "nota_2",
    "nota_3",
]
COLUMNA_CORTE = "Nombre Corte"


def project_rows(aggregated: list[dict]) -> pd.DataFrame:
    """Una fila por causa: ``[fecha, corte, lugar, caratula, id_ingreso, relator, sala, "", "", ""]``."""
    filas = []
    for registro in aggregated:
        nombre_corte = registro["courtData"].get(COLUMNA_CORTE) or ""
        for sala, causas in zip(registro["roomsData"], registro["casesData"]):
            for causa in causas:
                filas.append([
                    sala["fecha"],
                    nombre_corte,
                    causa["lugar"],
                    causa["caratula"],
                    causa["id_ingreso"],
                    sala["relator"],
                    sala["sala_int"],
                    "",
                    "",
                    "",
                ])
    return pd.DataFrame(filas, columns=COLUMNS)


def rows_by_court(df: pd.DataFrame) -> dict[str, pd.DataFrame]:
    """Separa las filas por nombre de corte, en el orden en que aparecen."""
    return {
        corte: grupo.reset_index(drop=True)
        for corte, grupo in df.groupby("corte", sort=False, dropna=False)
    }


def filter_pattern(terms: list[str]) -> re.Pattern:
    """
    Expresión que encuentra cualquiera de los términos en una carátula normalizada.

    Raises:
        ValueError: Si no hay ningún término no vacío; una lista vacía no
            debe interpretarse como "todas las causas".
    """
    normalizados = [normalize_caption(t).strip() for t in terms if t and t.strip()]
    if not normalizados:
        raise ValueError("La lista de términos de filtro está vacía.")
    return re.compile("|".join(re.escape(t) for t in normalizados))


def filter_rows(df: pd.DataFrame, terms: list[str]) -> pd.DataFrame:
    """Filas cuya carátula contiene alguno de los términos (sin distinguir mayúsculas ni acentos)."""
    patron = filter_pattern(terms)
    caratulas = df["caratula"].astype(str).map(normalize_caption)
    mascara = caratulas.map(lambda c: patron.search(c) is not None).astype(bool)
    return df[mascara].reset_index(drop=True)


def project(aggregated: list[dict], terms: list[str]) -> dict:
    """Devuelve ``{"todo", "por_corte", "filtrado"}`` a partir de los registros por corte."""
    todo = project_rows(aggregated)
    filtrado = filter_rows(todo, terms)
    logger.info("%d causas en total, %d tras el filtro.", len(todo), len(filtrado))
    return {
        "todo": todo,
        "por_corte": rows_by_court(todo),
        "filtrado": filtrado,
    }
