"""
Entradas y salidas tabulares: cortes, términos de filtro, planillas semanales y
el registro de la última semana procesada.
"""
import json
import logging
import os
import re

import pandas as pd

from .download import CourtValidationError

logger = logging.getLogger("pjudscraper.pjud.storage")

CLAVE_ULTIMA_SEMANA = "ultima_semana"


def court_parameters_from_table(rows: list[list]) -> list[dict]:
    """
    Convierte una tabla (primera fila = encabezados) en una lista de cortes.

    Las columnas se leen por nombre, no por posición. Las filas vacías se ignoran.
    """
    if not rows:
        raise CourtValidationError("La tabla de cortes está vacía.")
    encabezados = [str(h).strip() for h in rows[0]]
    courts = []
    for fila in rows[1:]:
        if all(valor is None or str(valor).strip() == "" for valor in fila):
            continue
        courts.append(dict(zip(encabezados, fila)))
    if not courts:
        raise CourtValidationError("La tabla de cortes no tiene ninguna corte.")
    return courts


def read_court_parameters(path: str) -> list[dict]:
    """Lee las cortes desde un CSV (encabezados en la primera fila)."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    rows = [list(df.columns)] + df.values.tolist()
    return court_parameters_from_table(rows)


def read_filter_terms(path: str) -> list[str]:
    """Lee los términos de filtro, uno por línea."""
    with open(path, 'r', encoding='utf-8') as f:
        return [linea.strip() for linea in f if linea.strip()]


def _safe_filename(nombre: str) -> str:
    return re.sub(r'[\\/:*?"<>|]+', "-", nombre).strip() or "sin_nombre"


def export_week(result: dict, path: str) -> str:
    """
    Escribe la semana en ``<path>/<semana>/``: ``Todo.csv``, un CSV por corte y
    ``Filtrado.csv``. Devuelve la carpeta creada.
    """
    carpeta = os.path.join(path, _safe_filename(result["semana"]))
    if not os.path.isdir(carpeta):
        os.makedirs(carpeta)
    result["todo"].to_csv(os.path.join(carpeta, "Todo.csv"), index=False)
    for corte, df in result["por_corte"].items():
        df.to_csv(os.path.join(carpeta, f"{_safe_filename(str(corte))}.csv"), index=False)
    result["filtrado"].to_csv(os.path.join(carpeta, "Filtrado.csv"), index=False)
    logger.info("Semana exportada en '%s'.", carpeta)
    return carpeta


class MemoryStateStore:
    """Registro clave-valor en memoria."""

    def __init__(self, initial: dict | None = None):
        self._data = dict(initial or {})

    def get(self, key: str, default=None):
        return self._data.get(key, default)

    def set(self, key: str, value) -> None:
        self._data[key] = value


class JsonStateStore:
    """Registro clave-valor persistido en un archivo JSON."""

    def __init__(self, path: str):
        self.path = path

    def _load(self) -> dict:
        if not os.path.isfile(self.path):
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def get(self, key: str, default=None):
        return self._load().get(key, default)

    def set(self, key: str, value) -> None:
        data = self._load()
        data[key] = value
        carpeta = os.path.dirname(self.path)
        if carpeta and not os.path.isdir(carpeta):
            os.makedirs(carpeta)
        with open(self.path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
