# Nombre de archivo: records.py
# Ubicación de archivo: core/repositories/records.py
# Descripción: Almacén de intervenciones y reclamaciones (alta, conteo diario, listados y borrado)

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, time, timezone
from typing import Any, Callable, List, Mapping, Optional, Protocol, Union

from sqlalchemy import delete, func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.errors import PersistenceError
from db.models.records import Intervention, Reclamation, RecordKind

logger = logging.getLogger(__name__)

StoredRecord = Union[Intervention, Reclamation]

_MODELS = {
    RecordKind.INTERVENTION: Intervention,
    RecordKind.RECLAMATION: Reclamation,
}


def start_of_local_day(now: Optional[datetime] = None) -> datetime:
    """Medianoche del día en curso (hora local del servidor) expresada en UTC."""

    local_now = (now or datetime.now()).astimezone()
    midnight = datetime.combine(local_now.date(), time.min, tzinfo=local_now.tzinfo)
    return midnight.astimezone(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    # SQLite devuelve datetimes naive aunque la columna sea timezone=True
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class RecordStore(Protocol):
    """Contrato consumido por el flujo de envío."""

    def count_today_records(self, user_id: str, now: Optional[datetime] = None) -> int:
        """Intervenciones + reclamaciones del usuario creadas desde la medianoche."""

    def create_intervention(self, fields: Mapping[str, Any]) -> Intervention:
        """Persiste una intervención y la devuelve con id y created_at."""

    def create_reclamation(self, fields: Mapping[str, Any]) -> Reclamation:
        """Persiste una reclamación y la devuelve con id y created_at."""

    def list_records(self, user_id: str) -> List[StoredRecord]:
        """Registros del usuario, más recientes primero."""

    def list_all_records(self) -> List[StoredRecord]:
        """Registros de todos los usuarios, más recientes primero."""

    def get_record(self, kind: RecordKind, record_id: int) -> Optional[StoredRecord]:
        """Busca un registro por tipo e id."""

    def delete_user_records(self, user_id: str) -> int:
        """Elimina todos los registros del usuario y devuelve la cantidad borrada."""


@dataclass
class SqlRecordStore:
    """Implementación sobre SQLAlchemy (PostgreSQL en producción, SQLite en tests)."""

    session_factory: sessionmaker
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)

    def _run(self, action: str, fn: Callable[[Session], Any]) -> Any:
        try:
            with self.session_factory() as session:
                return fn(session)
        except SQLAlchemyError as exc:
            logger.error("action=record_store stage=%s error=%s", action, exc)
            raise PersistenceError() from exc

    def ping(self) -> dict:
        """Realiza un SELECT 1 y devuelve info básica para /health."""
        try:
            with self.session_factory() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("action=db_health error=%s", exc)
            return {"db": "error", "detail": str(exc)}
        return {"db": "ok"}

    def count_today_records(self, user_id: str, now: Optional[datetime] = None) -> int:
        desde = start_of_local_day(now)

        def _count(session: Session) -> int:
            total = 0
            for model in (Intervention, Reclamation):
                total += session.scalar(
                    select(func.count())
                    .select_from(model)
                    .where(model.user_id == user_id, model.created_at >= desde)
                ) or 0
            return total

        return self._run("count_today", _count)

    def _create(self, model, fields: Mapping[str, Any]) -> StoredRecord:
        def _insert(session: Session) -> StoredRecord:
            record = model(**dict(fields), created_at=self.clock())
            session.add(record)
            session.commit()
            session.refresh(record)
            record.created_at = ensure_aware(record.created_at)
            return record

        record = self._run(f"create_{model.kind.value}", _insert)
        logger.info(
            "action=record_store stage=created kind=%s id=%s user_id=%s",
            model.kind.value,
            record.id,
            record.user_id,
        )
        return record

    def create_intervention(self, fields: Mapping[str, Any]) -> Intervention:
        return self._create(Intervention, fields)

    def create_reclamation(self, fields: Mapping[str, Any]) -> Reclamation:
        return self._create(Reclamation, fields)

    def _list(self, user_id: Optional[str]) -> List[StoredRecord]:
        def _query(session: Session) -> List[StoredRecord]:
            rows: List[StoredRecord] = []
            for model in (Intervention, Reclamation):
                stmt = select(model)
                if user_id is not None:
                    stmt = stmt.where(model.user_id == user_id)
                rows.extend(session.scalars(stmt).all())
            for row in rows:
                row.created_at = ensure_aware(row.created_at)
            rows.sort(key=lambda r: r.created_at, reverse=True)
            return rows

        return self._run("list", _query)

    def list_records(self, user_id: str) -> List[StoredRecord]:
        return self._list(user_id)

    def list_all_records(self) -> List[StoredRecord]:
        return self._list(None)

    def get_record(self, kind: RecordKind, record_id: int) -> Optional[StoredRecord]:
        model = _MODELS[RecordKind(kind)]

        def _get(session: Session) -> Optional[StoredRecord]:
            record = session.get(model, record_id)
            if record is not None:
                record.created_at = ensure_aware(record.created_at)
            return record

        return self._run("get", _get)

    def delete_user_records(self, user_id: str) -> int:
        def _delete(session: Session) -> int:
            borrados = 0
            for model in (Intervention, Reclamation):
                result = session.execute(delete(model).where(model.user_id == user_id))
                borrados += result.rowcount or 0
            session.commit()
            return borrados

        total = self._run("delete_user", _delete)
        logger.info("action=record_store stage=deleted user_id=%s total=%s", user_id, total)
        return total


__all__ = ["RecordStore", "SqlRecordStore", "StoredRecord", "start_of_local_day", "ensure_aware"]
