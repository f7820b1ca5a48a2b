# Nombre de archivo: test_api_metrics.py
# Ubicación de archivo: tests/test_api_metrics.py
# Descripción: Prueba del endpoint /metrics de la API principal


def test_metrics_endpoint_muestra_datos(client) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    data = resp.json()
    assert "total_requests" in data
    assert "average_latency_ms" in data
    assert data["submissions_created"] == 0


def test_metrics_incrementa_con_cada_solicitud(app, client) -> None:
    app.state.metrics.reset()
    client.get("/health")
    primera = client.get("/metrics").json()["total_requests"]
    client.get("/health")
    segunda = client.get("/metrics").json()["total_requests"]
    assert segunda == primera + 2


def test_metrics_cuenta_envios(app, client, login, principal, transport, intervention_payload) -> None:
    login(principal)
    transport.succeed = False
    client.post("/interventions", json=intervention_payload)
    client.post("/interventions", json={})
    data = client.get("/metrics").json()
    assert data["submissions_created"] == 1
    assert data["submissions_rejected"] == 1
    assert data["notifications_failed"] == 1
