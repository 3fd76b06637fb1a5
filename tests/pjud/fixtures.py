"""Respuestas HTML y sesión HTTP falsas para las pruebas del portal pjud.cl."""
import threading

import requests

SALAS_HTML = """
<div class="panel panel-default">
  <div class="panel-heading">Corte de Apelaciones</div>
  <div class="panel-body">Constitución de salas de la semana</div>
</div>
<div class="panel panel-default">
  <div class="panel-body">
    <table id="dataTypeTable" class="table">
      <thead><tr><th>Fecha</th><th>Sala</th><th>Relator</th></tr></thead>
      <tbody>
        <tr><td>20/11/2023</td><td><a href="#">Segunda</a></td><td>Relator N&uacute;&ntilde;ez</td></tr>
        <tr><td> 21/11/2023 </td><td>DÉCIMA</td><td>Relatora Pérez</td></tr>
      </tbody>
    </table>
  </div>
</div>
"""

CAUSAS_HTML = """
<div class="panel-body">
  <table id="dataIntegationRoom">
    <tr><th>Lugar</th><th>Carátula</th><th>Ingreso</th></tr>
    <tr><td>1</td><td>Recurso de Queja</td><td>Civil-1234-2023</td></tr>
    <tr><td>2</td><td>Amparo Económico</td><td>Protección-99-2023</td></tr>
  </table>
</div>
"""

CAUSAS_VACIAS_HTML = """
<div class="panel-body">
  <table id="dataIntegationRoom">
    <tr><th>Lugar</th><th>Carátula</th><th>Ingreso</th></tr>
  </table>
</div>
"""

SIN_PANEL_HTML = "<html><body><h1>Error</h1><p>Algo salió mal.</p></body></html>"

MANTENCION_HTML = "<html><body><p>Sitio en mantención. Vuelva más tarde.</p></body></html>"


def salas_html(filas: list[tuple]) -> str:
    """Documento de salas con las filas (fecha, sala, relator) dadas."""
    cuerpo = "".join(
        f"<tr><td>{fecha}</td><td>{sala}</td><td>{relator}</td></tr>"
        for fecha, sala, relator in filas
    )
    return (
        '<div class="panel-body"><table id="dataTypeTable">'
        f"<tbody>{cuerpo}</tbody></table></div>"
    )


def causas_html(filas: list[tuple]) -> str:
    """Documento de causas con las filas (lugar, carátula, ingreso) dadas."""
    cuerpo = "".join(
        f"<tr><td>{lugar}</td><td>{caratula}</td><td>{ingreso}</td></tr>"
        for lugar, caratula, ingreso in filas
    )
    return f'<div class="panel-body"><table id="dataIntegationRoom">{cuerpo}</table></div>'


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """
    Sesión que responde con ``handler(url, data)`` y registra las consultas.

    ``handler`` devuelve un texto o un ``FakeResponse``.
    """

    def __init__(self, handler):
        self.handler = handler
        self.calls = []
        self.headers = {}
        self._lock = threading.Lock()

    def request(self, method, url, data=None, timeout=None):
        with self._lock:
            self.calls.append({"method": method, "url": url, "data": dict(data or {})})
        respuesta = self.handler(url, data or {})
        if isinstance(respuesta, FakeResponse):
            return respuesta
        return FakeResponse(respuesta)
