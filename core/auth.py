# Nombre de archivo: auth.py
# Ubicación de archivo: core/auth.py
# Descripción: Principal de sesión consumido por la API (la emisión de sesiones es externa)

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

SESSION_USER_KEY = "user"


@dataclass(frozen=True, slots=True)
class Principal:
    """Usuario autenticado asociado a la solicitud."""

    id: str
    email: str
    name: Optional[str] = None

    def is_admin(self, admin_emails: tuple[str, ...]) -> bool:
        return bool(self.email) and self.email.lower() in admin_emails


def principal_from_session(session: Mapping[str, Any]) -> Optional[Principal]:
    """Extrae el principal de la cookie de sesión; None si falta o está incompleta."""

    data = session.get(SESSION_USER_KEY)
    if not isinstance(data, Mapping):
        return None
    user_id = str(data.get("id") or "").strip()
    email = str(data.get("email") or "").strip()
    if not user_id:
        return None
    return Principal(id=user_id, email=email, name=data.get("name") or None)


__all__ = ["Principal", "principal_from_session", "SESSION_USER_KEY"]
