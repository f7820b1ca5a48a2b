# Nombre de archivo: photos.py
# Ubicación de archivo: modules/informes_registros/photos.py
# Descripción: Descarga best-effort de la foto adjunta a un registro (un intento, timeout acotado)

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

MAX_PHOTO_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True, slots=True)
class PhotoFetchResult:
    """Resultado de la descarga: contenido si ok, motivo si falló."""

    ok: bool
    content: Optional[bytes] = None
    content_type: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def failure(cls, reason: str) -> "PhotoFetchResult":
        return cls(ok=False, reason=reason)


class PhotoFetcher:
    """Obtiene imágenes por HTTP sin propagar errores al generador del informe."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_bytes: int = MAX_PHOTO_BYTES,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.max_bytes = max_bytes

    async def fetch(self, url: Optional[str]) -> PhotoFetchResult:
        if not url:
            return PhotoFetchResult.failure("no_url")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    content_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
                    if not content_type.startswith("image/"):
                        logger.warning(
                            "action=fetch_photo stage=invalid_content url=%s content_type=%s", url, content_type
                        )
                        return PhotoFetchResult.failure("invalid_content")

                    declared = response.headers.get("content-length", "")
                    if declared.isdigit() and int(declared) > self.max_bytes:
                        logger.warning("action=fetch_photo stage=too_large url=%s declared=%s", url, declared)
                        return PhotoFetchResult.failure("too_large")

                    # El cuerpo se lee por partes y se corta apenas supera el máximo
                    buffer = bytearray()
                    async for chunk in response.aiter_bytes():
                        buffer.extend(chunk)
                        if len(buffer) > self.max_bytes:
                            logger.warning("action=fetch_photo stage=too_large url=%s limit=%s", url, self.max_bytes)
                            return PhotoFetchResult.failure("too_large")
        except httpx.TimeoutException as exc:
            logger.warning("action=fetch_photo stage=timeout url=%s error=%s", url, exc)
            return PhotoFetchResult.failure("timeout")
        except httpx.HTTPStatusError as exc:
            logger.warning("action=fetch_photo stage=http_status url=%s status=%s", url, exc.response.status_code)
            return PhotoFetchResult.failure(f"http_{exc.response.status_code}")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            logger.warning("action=fetch_photo stage=request_error url=%s error=%s", url, exc)
            return PhotoFetchResult.failure("request_error")

        content = bytes(buffer)
        if not content:
            return PhotoFetchResult.failure("empty")

        logger.debug("action=fetch_photo stage=ok url=%s bytes=%s", url, len(content))
        return PhotoFetchResult(ok=True, content=content, content_type=content_type)


__all__ = ["PhotoFetcher", "PhotoFetchResult"]
