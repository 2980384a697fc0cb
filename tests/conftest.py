"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from app import app


def build_timetable_payload(entries, frequencies=None):
    """Raw horarios_origen_destino JSON.

    entries: iterable of (line_id, line_code, times, code) or
    (line_id, line_code, times, code, notes) tuples
    frequencies: iterable of (id, code, name) tuples
    """
    horario = []
    for entry in entries:
        line_id, line_code, times, code = entry[:4]
        notes = entry[4] if len(entry) > 4 else ""
        horario.append({
            "idlinea": line_id,
            "codigo": line_code,
            "horas": list(times),
            "dias": code,
            "observaciones": notes,
        })
    return {
        "bloques": [],
        "horario": horario,
        "frecuencias": [
            {"idfrecuencia": freq_id, "acronimo": code, "nombre": name}
            for freq_id, code, name in (frequencies or [])
        ],
    }


@pytest.fixture
def timetable_payload():
    """Factory fixture for raw timetable payloads."""
    return build_timetable_payload


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def api_base_url():
    """Base URL for API endpoints."""
    return "/api/v1"
