"""Pruebas del cruce de resultados por corte."""
import copy
import logging

import pytest

from pjudscraper.courts.pjud.assemble import (
    AlignmentError,
    assemble_courts,
    index_by_court,
    zip_records,
)
from pjudscraper.courts.pjud.parse import extract_week_info


def test_zip_records():
    primary = [{"a": 1}, {"a": 2}]
    original = copy.deepcopy(primary)
    resultado = zip_records(primary, ["x", "y"], "campo")
    assert resultado == [{"a": 1, "campo": "x"}, {"a": 2, "campo": "y"}]
    assert primary == original


def test_zip_records_repeated_on_same_base():
    base = [{"a": 1}]
    uno = zip_records(base, [[1]], "uno")
    dos = zip_records(base, [[2]], "dos")
    assert "dos" not in uno[0]
    assert "uno" not in dos[0]
    uno[0]["uno"].append(99)
    assert dos[0]["dos"] == [2]


@pytest.mark.parametrize("secondary", [[], ["x"], ["x", "y", "z"]])
def test_zip_records_length_mismatch(secondary):
    with pytest.raises(AlignmentError):
        zip_records([{"a": 1}, {"a": 2}], secondary, "campo")


def test_index_by_court_rejects_duplicates():
    cortes = [
        {"codCorte": "10", "condicion": "C"},
        {"codCorte": "10", "condicion": "C"},
    ]
    with pytest.raises(AlignmentError, match="repetida"):
        index_by_court(cortes, [1, 2])


def test_index_by_court_same_code_other_condition():
    cortes = [
        {"codCorte": "10", "condicion": "C"},
        {"codCorte": 10, "condicion": "S"},
    ]
    assert index_by_court(cortes, ["a", "b"]) == {("10", "C"): "a", ("10", "S"): "b"}


def _sala(fecha, sala_int, relator="R"):
    return {"fecha": fecha, "sala_str": str(sala_int), "sala_int": sala_int, "relator": relator}


def test_assemble_maps_cases_onto_rooms():
    """Las causas vienen en orden fecha × sala y se cruzan con cada sala por clave."""
    cortes = [{"codCorte": "10", "condicion": "C", "Nombre Corte": "Arica"}]
    salas = [[_sala("20/11/2023", 2), _sala("21/11/2023", 3)]]
    week_info = extract_week_info(salas)
    # consultas: (20,2) (20,3) (21,2) (21,3)
    causas = [[
        [{"caratula": "A"}],
        [],
        [{"caratula": "C"}],
        [{"caratula": "D"}, {"caratula": "E"}],
    ]]
    agregados = assemble_courts(cortes, salas, week_info, causas)
    assert len(agregados) == 1
    registro = agregados[0]
    assert registro["courtData"] == cortes[0]
    assert registro["roomsData"] == salas[0]
    assert registro["weekInfo"] == {"fechas": ["20/11/2023", "21/11/2023"], "salas": [2, 3]}
    assert len(registro["casesData"]) == len(registro["roomsData"])
    assert registro["casesData"] == [
        [{"caratula": "A"}],
        [{"caratula": "D"}, {"caratula": "E"}],
    ]


def test_assemble_unknown_room_has_no_cases():
    cortes = [{"codCorte": "10", "condicion": "C"}]
    salas = [[_sala("20/11/2023", -1), _sala("20/11/2023", 1)]]
    week_info = extract_week_info(salas)
    causas = [[[{"caratula": "A"}]]]
    registro = assemble_courts(cortes, salas, week_info, causas)[0]
    assert registro["casesData"] == [[], [{"caratula": "A"}]]


def test_assemble_wrong_number_of_case_groups():
    cortes = [{"codCorte": "10", "condicion": "C"}]
    salas = [[_sala("20/11/2023", 1), _sala("20/11/2023", 2)]]
    with pytest.raises(AlignmentError, match="2 consultas"):
        assemble_courts(cortes, salas, extract_week_info(salas), [[[]]])


def test_assemble_wrong_number_of_courts():
    cortes = [{"codCorte": "10", "condicion": "C"}, {"codCorte": "11", "condicion": "C"}]
    with pytest.raises(AlignmentError):
        assemble_courts(cortes, [[]], [{"fechas": [], "salas": []}], [[]])


def test_assemble_warns_on_cases_without_room(caplog):
    """Las consultas fecha × sala sin sala constituida que traen causas se informan."""
    cortes = [{"codCorte": "10", "condicion": "C", "Nombre Corte": "Arica"}]
    salas = [[_sala("20/11/2023", 1), _sala("21/11/2023", 2)]]
    # consultas: (20,1) (20,2) (21,1) (21,2)
    causas = [[
        [{"caratula": "A"}],
        [{"caratula": "PERDIDA1"}],
        [{"caratula": "PERDIDA2"}],
        [{"caratula": "D"}],
    ]]
    with caplog.at_level(logging.WARNING, logger="pjudscraper.pjud.assemble"):
        registro = assemble_courts(cortes, salas, extract_week_info(salas), causas)[0]
    assert registro["casesData"] == [[{"caratula": "A"}], [{"caratula": "D"}]]
    assert "Arica: 2 grupo(s)" in caplog.text


def test_assemble_no_warning_for_empty_groups_without_room(caplog):
    cortes = [{"codCorte": "10", "condicion": "C", "Nombre Corte": "Arica"}]
    salas = [[_sala("20/11/2023", 1), _sala("21/11/2023", 2)]]
    causas = [[[{"caratula": "A"}], [], [], [{"caratula": "D"}]]]
    with caplog.at_level(logging.WARNING, logger="pjudscraper.pjud.assemble"):
        assemble_courts(cortes, salas, extract_week_info(salas), causas)
    assert "sin sala constituida" not in caplog.text
