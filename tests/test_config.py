# Nombre de archivo: test_config.py
# Ubicación de archivo: tests/test_config.py
# Descripción: Pruebas de lectura de configuración desde variables de entorno y secretos

from __future__ import annotations

from core.config import Settings
from core.secrets import get_secret


def test_valores_por_defecto(monkeypatch) -> None:
    for name in ("SMTP_HOST", "RESEND_API_KEY", "DAILY_SUBMISSION_LIMIT", "ADMIN_EMAILS", "SMTP_USE_TLS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    assert settings.smtp.enabled is False
    assert settings.smtp.use_tls is True
    assert settings.resend.enabled is False
    assert settings.daily_submission_limit == 15
    assert settings.admin_emails == ()
    assert settings.reports.company_name
    assert settings.reports.logo_path.name == "letterhead.png"


def test_lee_el_entorno(monkeypatch) -> None:
    monkeypatch.setenv("SMTP_HOST", "smtp.ejemplo.com")
    monkeypatch.setenv("SMTP_PORT", "465")
    monkeypatch.setenv("SMTP_USE_TLS", "false")
    monkeypatch.setenv("RESEND_API_KEY", "re_live_abc")
    monkeypatch.setenv("DAILY_SUBMISSION_LIMIT", "3")
    monkeypatch.setenv("ADMIN_EMAILS", " Boss@Example.com , ops@example.com,")
    monkeypatch.setenv("PHOTO_FETCH_TIMEOUT", "2.5")

    settings = Settings()

    assert settings.smtp.enabled is True
    assert settings.smtp.port == 465
    assert settings.smtp.use_tls is False
    assert settings.resend.enabled is True
    assert settings.daily_submission_limit == 3
    assert settings.admin_emails == ("boss@example.com", "ops@example.com")
    assert settings.reports.photo_timeout == 2.5


def test_secreto_desde_archivo(monkeypatch, tmp_path) -> None:
    secret_file = tmp_path / "smtp_pass"
    secret_file.write_text("desde-archivo\n", encoding="utf-8")
    monkeypatch.delenv("SMTP_PASS", raising=False)
    monkeypatch.setenv("SMTP_PASS_FILE", str(secret_file))

    assert get_secret("SMTP_PASS") == "desde-archivo"


def test_secreto_env_tiene_prioridad(monkeypatch, tmp_path) -> None:
    secret_file = tmp_path / "smtp_pass"
    secret_file.write_text("desde-archivo", encoding="utf-8")
    monkeypatch.setenv("SMTP_PASS", "desde-env")
    monkeypatch.setenv("SMTP_PASS_FILE", str(secret_file))

    assert get_secret("SMTP_PASS") == "desde-env"


def test_secreto_ausente_devuelve_default(monkeypatch) -> None:
    monkeypatch.delenv("NO_EXISTE_SECRETO", raising=False)
    monkeypatch.delenv("NO_EXISTE_SECRETO_FILE", raising=False)
    assert get_secret("NO_EXISTE_SECRETO", "fallback") == "fallback"
