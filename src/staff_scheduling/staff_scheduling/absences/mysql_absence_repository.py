from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AbsenceStatus, AbsenceType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceRequest
from .repository import AbsenceRepository

_COLUMNS = """
    id, staff_id, hotel_id, request_type, start_date, end_date, status, notes,
    data_processing_consent, consent_date, created_at, updated_at
"""


def _to_request(r: dict) -> AbsenceRequest:
    return AbsenceRequest(
        request_id=str(r["id"]),
        staff_id=str(r["staff_id"]),
        hotel_id=str(r["hotel_id"]),
        request_type=AbsenceType(r["request_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=AbsenceStatus(r["status"]),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        data_processing_consent=bool(r.get("data_processing_consent")),
        consent_date=r.get("consent_date"),
    )


class MySQLAbsenceRepository(AbsenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, request: AbsenceRequest) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO absence_requests(
                    id, staff_id, hotel_id, request_type, start_date, end_date, status, notes,
                    data_processing_consent, consent_date, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    request.request_id,
                    request.staff_id,
                    request.hotel_id,
                    request.request_type.value,
                    request.start_date,
                    request.end_date,
                    request.status.value,
                    request.notes,
                    int(request.data_processing_consent),
                    request.consent_date,
                    request.created_at,
                    request.updated_at,
                ),
            )
        return request.request_id

    def get_by_id(self, *, request_id: str) -> Optional[AbsenceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM absence_requests WHERE id=%s", (str(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_staff(
        self,
        *,
        staff_id: str,
        hotel_id: Optional[str] = None,
        status: Optional[AbsenceStatus] = None,
        limit: int = 200,
    ) -> Sequence[AbsenceRequest]:
        clauses = ["staff_id=%s"]
        params: list[object] = [str(staff_id)]
        if hotel_id is not None:
            clauses.append("hotel_id=%s")
            params.append(str(hotel_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM absence_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_overlapping(
        self,
        *,
        staff_id: str,
        start: date,
        end: date,
        hotel_id: Optional[str] = None,
    ) -> Sequence[AbsenceRequest]:
        clauses = ["staff_id=%s", "start_date <= %s", "end_date >= %s"]
        params: list[object] = [str(staff_id), end, start]
        if hotel_id is not None:
            clauses.append("hotel_id=%s")
            params.append(str(hotel_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM absence_requests
                WHERE {where}
                ORDER BY start_date ASC, created_at ASC
                """,
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def update_notes(self, *, request_id: str, notes: Optional[str], at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE absence_requests
                SET notes=%s, updated_at=%s
                WHERE id=%s AND status=%s
                """,
                (notes, at, str(request_id), AbsenceStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def update_status(self, *, request_id: str, status: AbsenceStatus, at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE absence_requests
                SET status=%s, updated_at=%s
                WHERE id=%s AND status=%s
                """,
                (status.value, at, str(request_id), AbsenceStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def delete(self, *, request_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM absence_requests WHERE id=%s", (str(request_id),))
            return cur.rowcount > 0
