"""Clase base para los raspadores del Poder Judicial."""
from abc import ABC
from datetime import datetime
import logging
import os
import tempfile

logger = logging.getLogger("pjudscraper.core")


class BaseScraper(ABC):
    """Clase base para raspadores de tribunales."""

    def __init__(self, tribunal_name: str):
        self.tribunal_name = tribunal_name
        self.verbose = 0
        self.download_path = None

    def set_verbose(self, verbose: int):
        """Define el nivel de verbosidad del raspador.

        Args:
            verbose (int): 0 = silencioso, 1 = progreso, 2+ = depuración.
        """
        self.verbose = verbose

    def set_download_path(self, path: str | None, create: bool = True):
        """Define la carpeta de trabajo. Con ``create`` y sin ruta, usa un directorio temporal."""
        if path is None:
            if not create:
                self.download_path = None
                return
            path = tempfile.mkdtemp()
        if not os.path.isdir(path):
            if self.verbose:
                logger.info("La carpeta '%s' no existe. Creándola...", path)
            os.makedirs(path)
        self.download_path = path
        if self.verbose:
            logger.info("Carpeta de trabajo definida como '%s'.", path)

    def save_debug_html(self, html: str, prefix: str) -> str | None:
        """Guarda un HTML problemático en ``<download_path>/<tribunal>_debug`` y devuelve la ruta."""
        if self.download_path is None:
            return None
        debug_dir = os.path.join(self.download_path, f"{self.tribunal_name.lower()}_debug")
        if not os.path.isdir(debug_dir):
            os.makedirs(debug_dir)
        timestamp = datetime.now().strftime("%Y%m%d%H%M%S%f")
        debug_file = os.path.join(debug_dir, f"{prefix}_{timestamp}.html")
        with open(debug_file, 'w', encoding='utf-8') as f:
            f.write(html)
        return debug_file
