# Nombre de archivo: email_service.py
# Ubicación de archivo: core/services/email_service.py
# Descripción: Transportes de correo (API transaccional / SMTP) y despachador de informes adjuntos

from __future__ import annotations

import base64
import logging
import smtplib
from dataclasses import dataclass
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import List, Literal, Optional, Protocol, Sequence

import httpx

from core.config import ResendSettings, Settings, SmtpSettings

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

ReportKind = Literal["intervention", "reclamation"]


@dataclass
class EmailAttachment:
    """Representa un archivo adjunto."""

    filename: str
    content: bytes
    mime_type: str = "application/octet-stream"


@dataclass
class EmailResult:
    """Resultado del envío de correo."""

    success: bool
    message: str
    error: Optional[str] = None
    transport: Optional[str] = None


class EmailTransport(Protocol):
    """Contrato común de los mecanismos de entrega."""

    name: str

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        """Entrega el correo; nunca lanza por fallas esperables."""


class SmtpTransport:
    """Envío directo por SMTP (STARTTLS en 587, SSL implícito en 465)."""

    name = "smtp"

    def __init__(self, settings: SmtpSettings) -> None:
        self.settings = settings

    def is_configured(self) -> bool:
        return self.settings.enabled and bool(self.settings.host)

    def _build_message(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment],
    ) -> MIMEMultipart:
        msg = MIMEMultipart("mixed")
        msg["From"] = formataddr((self.settings.from_name, self.settings.from_email))
        msg["To"] = ", ".join(to)
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "plain", "utf-8"))
        for attachment in attachments:
            _, _, subtype = attachment.mime_type.partition("/")
            part = MIMEApplication(attachment.content, _subtype=subtype or "octet-stream")
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            msg.attach(part)
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.settings.port == 465:
            return smtplib.SMTP_SSL(self.settings.host, self.settings.port, timeout=self.settings.timeout)
        return smtplib.SMTP(self.settings.host, self.settings.port, timeout=self.settings.timeout)

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        if not self.is_configured():
            logger.error("action=send_email transport=smtp error=smtp_not_configured")
            return EmailResult(
                success=False,
                message="Servicio de email no configurado",
                error="SMTP_HOST no está definido en las variables de entorno",
                transport=self.name,
            )

        try:
            msg = self._build_message(to, subject, body, attachments)
            with self._connect() as server:
                if self.settings.use_tls and self.settings.port != 465:
                    server.starttls()
                if self.settings.user and self.settings.password:
                    server.login(self.settings.user, self.settings.password)
                server.sendmail(self.settings.from_email, list(to), msg.as_string())
        except smtplib.SMTPAuthenticationError as exc:
            logger.error("action=send_email transport=smtp error=auth_failed detail=%s", exc)
            return EmailResult(False, "Error de autenticación SMTP", "Credenciales de correo inválidas", self.name)
        except smtplib.SMTPRecipientsRefused as exc:
            logger.error("action=send_email transport=smtp error=recipients_refused detail=%s", exc)
            return EmailResult(False, "Destinatarios rechazados", f"El servidor rechazó los destinatarios: {exc}", self.name)
        except (smtplib.SMTPException, OSError) as exc:
            # OSError cubre timeouts y conexiones rechazadas
            logger.error("action=send_email transport=smtp error=smtp_error detail=%s", exc)
            return EmailResult(False, "Error al enviar correo", str(exc), self.name)

        logger.info(
            "action=send_email transport=smtp to=%s subject=%s attachments=%d success=true",
            len(to),
            subject[:50],
            len(attachments),
        )
        return EmailResult(True, f"Correo enviado exitosamente a {len(to)} destinatario(s)", transport=self.name)


class ResendTransport:
    """Envío mediante la API HTTP transaccional de Resend."""

    name = "resend"

    def __init__(self, settings: ResendSettings, http_client: Optional[httpx.Client] = None) -> None:
        self.settings = settings
        # Solo se cierra el cliente creado acá; uno inyectado pertenece a quien lo pasó
        self._owns_client = http_client is None
        self.http_client = http_client or httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    def close(self) -> None:
        if self._owns_client:
            self.http_client.close()

    def is_configured(self) -> bool:
        return self.settings.enabled

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        if not self.is_configured():
            return EmailResult(False, "API de correo no configurada", "RESEND_API_KEY ausente", self.name)

        payload = {
            "from": self.settings.from_email,
            "to": list(to),
            "subject": subject,
            "text": body,
            "attachments": [
                {
                    "filename": attachment.filename,
                    "content": base64.b64encode(attachment.content).decode("ascii"),
                    "content_type": attachment.mime_type,
                }
                for attachment in attachments
            ],
        }
        try:
            response = self.http_client.post(
                "/emails",
                json=payload,
                headers={"Authorization": f"Bearer {self.settings.api_key}"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "action=send_email transport=resend error=http_status status=%s",
                exc.response.status_code,
            )
            return EmailResult(False, "La API de correo rechazó el envío", f"HTTP {exc.response.status_code}", self.name)
        except httpx.HTTPError as exc:
            logger.error("action=send_email transport=resend error=request_failed detail=%s", exc)
            return EmailResult(False, "No se pudo contactar la API de correo", str(exc), self.name)

        try:
            data = response.json()
        except ValueError:
            data = {}
        message_id = data.get("id") if isinstance(data, dict) else None
        logger.info("action=send_email transport=resend to=%s message_id=%s success=true", len(to), message_id)
        return EmailResult(True, f"Correo enviado exitosamente a {len(to)} destinatario(s)", transport=self.name)


class FallbackTransport:
    """Prueba los transportes en orden y se queda con el primer éxito."""

    name = "fallback"

    def __init__(self, transports: Sequence[EmailTransport]) -> None:
        if not transports:
            raise ValueError("FallbackTransport requiere al menos un transporte")
        self.transports = list(transports)

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        result: Optional[EmailResult] = None
        for transport in self.transports:
            result = transport.send(to, subject, body, attachments)
            if result.success:
                return result
            logger.warning(
                "action=send_email stage=failover from=%s error=%s",
                transport.name,
                result.error,
            )
        return result  # type: ignore[return-value]

    def close(self) -> None:
        for transport in self.transports:
            closer = getattr(transport, "close", None)
            if closer is not None:
                closer()


class DisabledTransport:
    """Transporte nulo cuando no hay proveedor configurado."""

    name = "disabled"

    def send(
        self,
        to: Sequence[str],
        subject: str,
        body: str,
        attachments: Sequence[EmailAttachment] = (),
    ) -> EmailResult:
        logger.error("action=send_email transport=disabled error=no_provider_configured")
        return EmailResult(False, "No hay servicio de correo disponible", "Sin RESEND_API_KEY ni SMTP_HOST", self.name)


def build_transport(settings: Settings) -> EmailTransport:
    """Elige el transporte una única vez al iniciar.

    API transaccional primero cuando hay API key real; SMTP como alternativa
    (o único transporte) cuando SMTP_HOST está definido.
    """

    transports: List[EmailTransport] = []
    if settings.resend.enabled:
        transports.append(ResendTransport(settings.resend))
    if settings.smtp.enabled:
        transports.append(SmtpTransport(settings.smtp))

    if not transports:
        logger.warning("action=build_transport selected=disabled")
        return DisabledTransport()
    if len(transports) == 1:
        logger.info("action=build_transport selected=%s", transports[0].name)
        return transports[0]
    logger.info("action=build_transport selected=%s", ",".join(t.name for t in transports))
    return FallbackTransport(transports)


class ReportMailer:
    """Despacha un informe DOCX adjunto a una lista de destinatarios."""

    def __init__(self, transport: EmailTransport) -> None:
        self.transport = transport

    def close(self) -> None:
        """Libera los recursos del transporte (cliente HTTP) al apagar la app."""

        closer = getattr(self.transport, "close", None)
        if closer is not None:
            closer()

    def send_report_email(
        self,
        recipients: Sequence[str],
        subject: str,
        document: bytes,
        filename: str,
        report_kind: ReportKind,
    ) -> bool:
        """Devuelve True si algún transporte aceptó el correo; nunca lanza."""

        if not recipients:
            logger.error("action=send_report_email kind=%s error=no_recipients", report_kind)
            return False

        logger.info("action=send_report_email kind=%s recipients=%s", report_kind, len(recipients))
        attachment = EmailAttachment(filename=filename, content=document, mime_type=DOCX_MIME_TYPE)
        try:
            result = self.transport.send(
                list(recipients),
                subject,
                f"Please find the attached {report_kind} report.",
                [attachment],
            )
        except Exception as exc:  # noqa: BLE001
            logger.exception("action=send_report_email kind=%s error=unexpected detail=%s", report_kind, exc)
            return False

        if not result.success:
            logger.warning(
                "action=send_report_email kind=%s success=false transport=%s error=%s",
                report_kind,
                result.transport,
                result.error,
            )
        return result.success


__all__ = [
    "EmailAttachment",
    "EmailResult",
    "EmailTransport",
    "SmtpTransport",
    "ResendTransport",
    "FallbackTransport",
    "DisabledTransport",
    "ReportMailer",
    "build_transport",
    "DOCX_MIME_TYPE",
]
