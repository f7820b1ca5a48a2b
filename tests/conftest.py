# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (PYTHONPATH, almacén SQLite en memoria, transportes falsos)

from __future__ import annotations

import os
import struct
import sys
import zlib
from pathlib import Path
from typing import List, Sequence

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

# Evita archivos de log y conexiones reales al importar la app
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from core.auth import Principal  # noqa: E402
from core.config import Settings  # noqa: E402
from core.repositories.records import SqlRecordStore  # noqa: E402
from core.services.email_service import EmailAttachment, EmailResult, ReportMailer  # noqa: E402
from db.base import Base  # noqa: E402
from db.session import build_engine, build_session_factory  # noqa: E402
from modules.informes_registros.config import LETTERHEAD_PATH  # noqa: E402
from modules.informes_registros.photos import PhotoFetcher  # noqa: E402

PHOTO_HOST = "https://photos.test"


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def zero_size_png() -> bytes:
    """PNG bien formado cuyo encabezado declara 0x0 píxeles."""
    header = struct.pack(">IIBBBBB", 0, 0, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + _png_chunk(b"IHDR", header) + _png_chunk(b"IEND", b"")


def truncated_png() -> bytes:
    """Firma PNG y un IHDR cortado a mitad."""
    return LETTERHEAD_PATH.read_bytes()[:20]


class FakeTransport:
    """Transporte en memoria que registra cada envío."""

    name = "fake"

    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.sent: List[dict] = []

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        self.sent.append({"to": list(to), "subject": subject, "body": body, "attachments": list(attachments)})
        if self.succeed:
            return EmailResult(True, "ok", transport=self.name)
        return EmailResult(False, "Error al enviar correo", "simulated outage", self.name)


def _photo_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path
    if path == "/photo.png":
        return httpx.Response(200, content=LETTERHEAD_PATH.read_bytes(), headers={"content-type": "image/png"})
    if path == "/slow.png":
        raise httpx.ConnectTimeout("timed out", request=request)
    if path == "/page.html":
        return httpx.Response(200, text="<html></html>", headers={"content-type": "text/html"})
    if path == "/broken.png":
        return httpx.Response(200, content=b"not really a png", headers={"content-type": "image/png"})
    if path == "/truncated.png":
        return httpx.Response(200, content=truncated_png(), headers={"content-type": "image/png"})
    if path == "/zero.png":
        return httpx.Response(200, content=zero_size_png(), headers={"content-type": "image/png"})
    return httpx.Response(404)


@pytest.fixture
def photo_png() -> bytes:
    return LETTERHEAD_PATH.read_bytes()


@pytest.fixture(params=["truncated", "zero_size"])
def malformed_png(request) -> bytes:
    return truncated_png() if request.param == "truncated" else zero_size_png()


@pytest.fixture
def photo_fetcher() -> PhotoFetcher:
    return PhotoFetcher(timeout=1.0, transport=httpx.MockTransport(_photo_handler))


@pytest.fixture
def store() -> SqlRecordStore:
    engine = build_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield SqlRecordStore(build_session_factory(engine))
    engine.dispose()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def settings() -> Settings:
    cfg = Settings()
    cfg.daily_submission_limit = 15
    cfg.admin_emails = ("admin@example.com",)
    cfg.secret_key = "test-secret"
    return cfg


@pytest.fixture
def principal() -> Principal:
    return Principal(id="emp-042", email="j.doe@example.com", name="J. Doe")


@pytest.fixture
def app(settings, store, transport, photo_fetcher):
    from api.app.main import create_app

    return create_app(
        settings=settings,
        store=store,
        mailer=ReportMailer(transport),
        photo_fetcher=photo_fetcher,
    )


@pytest.fixture
def login(app):
    """Fija el principal de la sesión sin pasar por la emisión externa de cookies."""

    from api.app.deps import get_optional_principal

    def _login(user: Principal | None) -> None:
        app.dependency_overrides[get_optional_principal] = lambda: user

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)


@pytest.fixture
def intervention_payload() -> dict:
    return {
        "startDate": "2024-05-01",
        "endDate": "2024-05-03",
        "entrepriseName": "Acme",
        "responsable": "J. Doe",
        "teamMembers": ["A. Smith", "B. Jones"],
        "siteName": "North Plant",
        "photoUrl": "",
        "recipientEmails": ["ops@example.com"],
    }


@pytest.fixture
def reclamation_payload() -> dict:
    return {
        "date": "2024-06-10",
        "stationName": "Station 7",
        "reclamationType": "electric",
        "description": "Breaker trips under load",
        "recipientEmails": ["ops@example.com", "lead@example.com"],
    }
