# Nombre de archivo: test_photo_fetcher.py
# Ubicación de archivo: tests/test_photo_fetcher.py
# Descripción: Pruebas de la descarga best-effort de fotos para el informe

from __future__ import annotations

import asyncio

import httpx

from modules.informes_registros.photos import PhotoFetcher


def _fetch(fetcher: PhotoFetcher, url):
    return asyncio.run(fetcher.fetch(url))


def test_descarga_ok(photo_fetcher, photo_png) -> None:
    result = _fetch(photo_fetcher, "https://photos.test/photo.png")
    assert result.ok is True
    assert result.content == photo_png
    assert result.content_type == "image/png"


def test_404(photo_fetcher) -> None:
    result = _fetch(photo_fetcher, "https://photos.test/missing.png")
    assert result.ok is False
    assert result.reason == "http_404"


def test_timeout(photo_fetcher) -> None:
    result = _fetch(photo_fetcher, "https://photos.test/slow.png")
    assert result.ok is False
    assert result.reason == "timeout"


def test_contenido_no_imagen(photo_fetcher) -> None:
    assert _fetch(photo_fetcher, "https://photos.test/page.html").reason == "invalid_content"


def test_sin_url(photo_fetcher) -> None:
    assert _fetch(photo_fetcher, None).reason == "no_url"


def test_url_invalida(photo_fetcher) -> None:
    assert _fetch(photo_fetcher, "notaurl").ok is False


def test_demasiado_grande(photo_fetcher) -> None:
    photo_fetcher.max_bytes = 10
    assert _fetch(photo_fetcher, "https://photos.test/photo.png").reason == "too_large"


def test_cuerpo_sin_content_length_se_corta_al_superar_el_maximo(photo_png) -> None:
    leidos = []

    async def _cuerpo():
        for _ in range(50):
            leidos.append(1)
            yield b"\x89PNG" + b"\x00" * 1020

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "image/png"}, content=_cuerpo())

    fetcher = PhotoFetcher(transport=httpx.MockTransport(handler), max_bytes=4096)
    result = _fetch(fetcher, "https://photos.test/stream.png")
    assert result.ok is False
    assert result.reason == "too_large"
    assert len(leidos) < 50


def test_cuerpo_sin_content_length_dentro_del_limite(photo_png) -> None:
    async def _cuerpo():
        yield photo_png[:100]
        yield photo_png[100:]

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, headers={"content-type": "image/png"}, content=_cuerpo())

    result = _fetch(PhotoFetcher(transport=httpx.MockTransport(handler)), "https://photos.test/stream.png")
    assert result.ok is True
    assert result.content == photo_png
