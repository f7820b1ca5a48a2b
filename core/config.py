# Nombre de archivo: config.py
# Ubicación de archivo: core/config.py
# Descripción: Configuración centralizada (entorno) para la API de intervenciones y reclamaciones

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path

from core.secrets import get_secret

# Valores que los despliegues dejan como marcador y no deben considerarse credenciales reales
PLACEHOLDER_API_KEYS = frozenset({"", "dummy-key", "changeme", "re_xxx"})

DEFAULT_LOGO_PATH = Path(__file__).resolve().parents[1] / "modules" / "informes_registros" / "assets" / "letterhead.png"


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("true", "1", "yes")


def _as_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip().lower() for item in value.split(",") if item.strip())


@dataclass(slots=True)
class SmtpSettings:
    """Configuración SMTP para envío de correos."""

    host: str
    port: int
    user: str
    password: str
    from_email: str
    from_name: str
    use_tls: bool
    timeout: float
    enabled: bool


@dataclass(slots=True)
class ResendSettings:
    """Configuración del proveedor transaccional (API HTTP de Resend)."""

    api_key: str
    base_url: str
    from_email: str
    timeout: float

    @property
    def enabled(self) -> bool:
        return self.api_key.strip() not in PLACEHOLDER_API_KEYS


@dataclass(slots=True)
class ReportSettings:
    """Parámetros del documento DOCX generado por cada envío."""

    logo_path: Path
    company_name: str
    photo_timeout: float
    default_priority: str
    default_status: str


@dataclass(slots=True)
class Settings:
    smtp: SmtpSettings
    resend: ResendSettings
    reports: ReportSettings
    database_url: str
    db_auto_create: bool
    daily_submission_limit: int
    admin_emails: tuple[str, ...]
    secret_key: str
    log_level: str

    def __init__(self) -> None:
        mail_from = getenv("MAIL_FROM", getenv("SMTP_FROM", "noreply@srm-sm.com"))
        email_timeout = float(getenv("EMAIL_TIMEOUT", "15"))
        self.smtp = SmtpSettings(
            host=getenv("SMTP_HOST", ""),
            port=int(getenv("SMTP_PORT", "587")),
            user=getenv("SMTP_USER", ""),
            password=get_secret("SMTP_PASS", "") or "",
            from_email=getenv("SMTP_FROM_EMAIL", mail_from),
            from_name=getenv("SMTP_FROM_NAME", "SRM-SM Rapports"),
            use_tls=_as_bool(getenv("SMTP_USE_TLS"), default=True),
            timeout=email_timeout,
            enabled=bool(getenv("SMTP_HOST")),
        )
        self.resend = ResendSettings(
            api_key=get_secret("RESEND_API_KEY", "") or "",
            base_url=getenv("RESEND_BASE_URL", "https://api.resend.com"),
            from_email=mail_from,
            timeout=email_timeout,
        )
        self.reports = ReportSettings(
            logo_path=Path(getenv("REPORT_LOGO_PATH", str(DEFAULT_LOGO_PATH))),
            company_name=getenv("REPORT_COMPANY_NAME", "UTILITY FIRM"),
            photo_timeout=float(getenv("PHOTO_FETCH_TIMEOUT", "10")),
            default_priority=getenv("REPORT_DEFAULT_PRIORITY", "Medium"),
            default_status=getenv("REPORT_DEFAULT_STATUS", "Pending"),
        )
        self.database_url = getenv(
            "DATABASE_URL",
            f"postgresql+psycopg://{getenv('POSTGRES_USER', 'srm')}:{get_secret('POSTGRES_PASSWORD', 'superseguro')}"
            f"@{getenv('POSTGRES_HOST', 'postgres')}:{getenv('POSTGRES_PORT', '5432')}/{getenv('POSTGRES_DB', 'srm')}",
        )
        self.db_auto_create = _as_bool(getenv("DB_AUTO_CREATE"))
        self.daily_submission_limit = int(getenv("DAILY_SUBMISSION_LIMIT", "15"))
        self.admin_emails = _as_list(getenv("ADMIN_EMAILS"))
        self.secret_key = get_secret("WEB_SECRET_KEY", "dev-secret-change") or "dev-secret-change"
        self.log_level = getenv("LOG_LEVEL", "INFO").upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
