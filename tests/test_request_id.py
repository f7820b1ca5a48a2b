# Nombre de archivo: test_request_id.py
# Ubicación de archivo: tests/test_request_id.py
# Descripción: Verifica que la API genere o propague X-Request-ID

import logging
import uuid

from core.logging import RequestIdFilter, request_id_var


def test_request_id_generado(client) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    header = resp.headers.get("X-Request-ID")
    assert header is not None
    uuid.UUID(header)


def test_request_id_propagado(client) -> None:
    resp = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert resp.headers["X-Request-ID"] == "abc-123"


def test_request_id_en_errores(client) -> None:
    resp = client.get("/records", headers={"X-Request-ID": "req-401"})
    assert resp.status_code == 401
    assert resp.headers["X-Request-ID"] == "req-401"


def test_filtro_inyecta_request_id() -> None:
    token = request_id_var.set("req-xyz")
    try:
        record = logging.LogRecord("api", logging.INFO, __file__, 1, "msg", None, None)
        assert RequestIdFilter().filter(record) is True
        assert record.request_id == "req-xyz"
    finally:
        request_id_var.reset(token)
