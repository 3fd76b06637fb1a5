"""
Raspador de las tablas semanales del Poder Judicial de Chile (pjud.cl).

El portal publica, para cada corte, la constitución de sus salas (fecha, sala y
relator) y, para cada sala y fecha, las causas en tabla. La descarga ocurre en
dos fases dependientes:

    1. salas: una consulta por corte → fechas y salas de la semana
    2. causas: una consulta por corte × fecha × sala descubierta en la fase 1

FLUJO:
    client.py (esta interfaz) → download.py → parse.py → assemble.py → rows.py

La lista de cortes define el orden de todas las colecciones derivadas. Cualquier
error de validación, red o estructura aborta la ejecución completa: o se obtiene
una semana consistente, o no se obtiene nada.
"""
import logging

import requests

from ...core.base import BaseScraper
from .assemble import assemble_courts, zip_records
from .download import CASES_URL, ROOMS_URL, build_case_requests, build_room_requests, dispatch
from .parse import CAUSAS, SALAS, StructuralParseError, extract_week_info, parse_responses, week_label
from .rows import filter_pattern, project
from .storage import CLAVE_ULTIMA_SEMANA

logger = logging.getLogger('pjudscraper.pjud')


class PJUDScraper(BaseScraper):
    """
    Raspador de salas y causas del portal pjud.cl.

    Attributes:
        session (requests.Session): Sesión HTTP compartida por todas las consultas.
        max_workers (int): Consultas simultáneas dentro de un lote.
        timeout (float): Tiempo máximo de cada consulta, en segundos.
    """

    ROOMS_URL = ROOMS_URL
    CASES_URL = CASES_URL

    def __init__(
        self,
        verbose: int = 0,
        download_path: str | None = None,
        max_workers: int = 8,
        timeout: float | None = 30,
    ):
        """
        Args:
            verbose (int, optional): 0 = sin logs, 1 = progreso. Default: 0.
            download_path (str, optional): Carpeta donde se guardan los HTML que no
                se pudieron leer. Si es None no se guardan. Default: None.
            max_workers (int, optional): Consultas simultáneas por lote. Default: 8.
            timeout (float, optional): Tiempo máximo por consulta. Default: 30.
        """
        super().__init__("PJUD")
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': 'Mozilla/5.0 (compatible; PjudScraper/0.1)',
            'Accept': 'text/html,application/xhtml+xml,*/*;q=0.8',
            'Accept-Language': 'es-CL,es;q=0.9,en;q=0.6',
            'X-Requested-With': 'XMLHttpRequest',
        })
        self.set_verbose(verbose)
        self.set_download_path(download_path, create=False)
        self.max_workers = max_workers
        self.timeout = timeout

    def _dispatch(self, solicitudes: list) -> list:
        return dispatch(
            self.session,
            solicitudes,
            max_workers=self.max_workers,
            timeout=self.timeout,
            verbose=self.verbose,
        )

    def _parse(self, bodies: list, kind: str) -> list:
        try:
            return parse_responses(bodies, kind)
        except StructuralParseError as e:
            debug_file = self.save_debug_html(e.html, f"{kind}_error") if e.html else None
            logger.error('Respuesta de %s ilegible: %s. HTML guardado en: %s', kind, e, debug_file)
            raise

    # SALAS -------------------------------------------------------------------
    def salas_download(self, courts: list[dict]) -> list[str]:
        """Descarga la constitución de salas de cada corte (un HTML por corte)."""
        return self._dispatch(build_room_requests(courts))

    def salas_parse(self, bodies: list[str]) -> list[list[dict]]:
        """Extrae las salas de cada HTML descargado."""
        return self._parse(bodies, SALAS)

    def salas(self, courts: list[dict]) -> list[list[dict]]:
        """Descarga y extrae las salas de cada corte."""
        return self.salas_parse(self.salas_download(courts))

    # CAUSAS ------------------------------------------------------------------
    def causas_download(self, courts: list[dict], week_info: list[dict]) -> list[list[str]]:
        """
        Descarga las causas de cada corte para todas sus fechas y salas.

        ``week_info`` viene de ``extract_week_info`` y debe estar alineado con ``courts``.
        """
        con_semana = zip_records([{"courtData": c} for c in courts], week_info, "weekInfo")
        solicitudes = build_case_requests(con_semana)
        if self.verbose:
            logger.info("Consultas de causas: %d", sum(len(s) for s in solicitudes))
        return self._dispatch(solicitudes)

    def causas_parse(self, bodies: list[list[str]]) -> list[list[list[dict]]]:
        """Extrae las causas de cada HTML, agrupadas por corte."""
        return self._parse(bodies, CAUSAS)

    def causas(self, courts: list[dict], week_info: list[dict]) -> list[list[list[dict]]]:
        """Descarga y extrae las causas de cada corte."""
        return self.causas_parse(self.causas_download(courts, week_info))

    # SEMANA ------------------------------------------------------------------
    def semana(self, courts: list[dict], terms: list[str], state_store=None) -> dict | None:
        """
        Ejecuta el flujo completo de la semana.

        Args:
            courts (list[dict]): Cortes con ``codCorte``, ``condicion`` y ``Nombre Corte``.
            terms (list[str]): Términos para filtrar carátulas. No puede estar vacía.
            state_store (optional): Objeto con ``get``/``set`` donde se guarda la
                última semana procesada. Si la semana recién calculada es la misma,
                no se descargan las causas y se devuelve None.

        Returns:
            dict | None: ``{"semana", "cortes", "todo", "por_corte", "filtrado"}``.
        """
        build_room_requests(courts)
        filter_pattern(terms)

        rooms = self.salas(courts)
        label = week_label(next((r for r in rooms if r), []))
        if self.verbose:
            logger.info("%s", label)
        if state_store is not None and state_store.get(CLAVE_ULTIMA_SEMANA) == label:
            logger.info("La %s ya fue procesada; no hay nada que hacer.", label.lower())
            return None

        week_info = extract_week_info(rooms)
        cases = self.causas(courts, week_info)
        aggregated = assemble_courts(courts, rooms, week_info, cases)
        resultado = {"semana": label, "cortes": aggregated}
        resultado.update(project(aggregated, terms))

        if state_store is not None:
            state_store.set(CLAVE_ULTIMA_SEMANA, label)
        return resultado
