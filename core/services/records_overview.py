# Nombre de archivo: records_overview.py
# Ubicación de archivo: core/services/records_overview.py
# Descripción: Resumen por usuario de intervenciones y reclamaciones para la vista de administración

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from core.repositories.records import StoredRecord
from core.schemas import serialize_record


def summarize_by_owner(records: Iterable[StoredRecord]) -> List[Dict[str, Any]]:
    """Agrupa los registros por ``user_id``.

    Espera los registros ordenados del más reciente al más antiguo (como los
    devuelve ``list_all_records``), de modo que el primero de cada usuario
    define su ``lastActivity``. El resultado conserva ese orden.
    """

    owners: Dict[str, Dict[str, Any]] = {}
    for record in records:
        serialized = serialize_record(record)
        owner = owners.get(record.user_id)
        if owner is None:
            owner = owners[record.user_id] = {
                "userId": record.user_id,
                "userEmail": record.user_email,
                "interventionsCount": 0,
                "reclamationsCount": 0,
                "totalRecords": 0,
                "lastActivity": serialized["createdAt"],
                "interventions": [],
                "reclamations": [],
            }
        if not owner["userEmail"] and record.user_email:
            owner["userEmail"] = record.user_email

        bucket = "interventions" if record.kind.value == "intervention" else "reclamations"
        owner[bucket].append(serialized)
        owner[f"{bucket}Count"] += 1
        owner["totalRecords"] += 1
    return list(owners.values())


__all__ = ["summarize_by_owner"]
