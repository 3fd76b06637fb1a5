"""Normalización de textos del portal (acentos y nombres ordinales de salas)."""
import re

import unidecode

SALA_NO_ENCONTRADA = -1
ACENTOS = re.compile("[áéíóúÁÉÍÓÚñÑüÜ]")

# El índice 0 es de relleno para que "primera" quede en 1
NOMBRES_SALAS = [
    "dummy index",
    "primera",
    "segunda",
    "tercera",
    "cuarta",
    "quinta",
    "sexta",
    "septima",
    "octava",
    "novena",
    "decima",
    "undecima",
    "duodecima",
    "decimotercera",
]

def strip_accents(text: str) -> str:
    """Quita los acentos del texto (á → a, Ú → U, ñ → n). El resto de los caracteres no cambia."""
    return ACENTOS.sub(lambda m: unidecode.unidecode(m.group()), text)

def ordinal_name_to_number(text: str) -> int:
    """Convierte el nombre de una sala ("Segunda", "DÉCIMA") en su número.

    Devuelve ``SALA_NO_ENCONTRADA`` si el nombre no está en la lista de referencia.
    """
    nombre = strip_accents(text).strip().lower()
    if nombre not in NOMBRES_SALAS[1:]:
        return SALA_NO_ENCONTRADA
    return NOMBRES_SALAS.index(nombre)

def normalize_caption(text: str) -> str:
    """Versión sin acentos y en minúsculas de una carátula, para filtrar."""
    return strip_accents(text).lower()

def is_list_of_lists(obj) -> bool:
    """Indica si ``obj`` es una lista agrupada (lista de listas). Una lista vacía es plana."""
    return bool(obj) and all(isinstance(element, list) for element in obj)
