"""
pjudscraper
~~~~~~~~~~~
Interfaz pública: pjud.scraper(<sigla>, **kwargs)

La implementación real de cada raspador vive en:
- pjudscraper.courts.<sigla>.client.<Sigla>Scraper
"""
from importlib import import_module
from typing import Any
from importlib.metadata import version

# Mapea la sigla que escribe el usuario →  ruta del módulo y clase
_SCRAPERS: dict[str, str] = {
    "pjud": "pjudscraper.courts.pjud.client:PJUDScraper",
}

def scraper(sigla: str, *args: Any, **kwargs: Any):
    """
    Factory que devuelve el raspador correcto.

    Ejemplos
    --------
    >>> import pjudscraper as pj
    >>> pjud = pj.scraper("pjud", verbose=1)
    """
    sigla = sigla.lower()
    if sigla not in _SCRAPERS:
        raise ValueError(
            f"Raspador '{sigla}' no soportado. Disponibles: {', '.join(_SCRAPERS)}"
        )
    path, cls_name = _SCRAPERS[sigla].split(":")
    mod = import_module(path)        # importa sólo cuando se pide (lazy)
    cls = getattr(mod, cls_name)
    return cls(*args, **kwargs)

__version__ = version("pjudscraper")
__all__ = ["scraper"]
