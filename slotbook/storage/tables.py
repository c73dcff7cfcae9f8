# File: slotbook/storage/tables.py
"""
Keyed record tables over a Database.

Each table maps one dataclass to one SQL table and offers the CRUD
contract the stores rely on. No business rules live here.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Tuple, TypeVar

from slotbook.models.appointments import Appointment, appointment_from_dict
from slotbook.models.errors import NotFoundError, ValidationError
from slotbook.models.events import Event, event_from_dict
from slotbook.storage.database import Database
from slotbook.utils.logger import LoggerMixin

R = TypeVar("R")


def _encode(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class Table(Generic[R], LoggerMixin):
    """DB access only for one record type."""

    name: str = ""
    entity: str = "record"
    columns: Tuple[str, ...] = ()

    def __init__(self, database: Database):
        self.database = database

    # Subclasses map rows <-> records
    def _to_row(self, record: R) -> Dict[str, Any]:
        raise NotImplementedError

    def _from_row(self, row: Dict[str, Any]) -> R:
        raise NotImplementedError

    def _column_list(self, names) -> str:
        return ", ".join(f'"{name}"' for name in names)

    def add(self, record: R) -> int:
        """Insert a record; the id is assigned when the record has none."""
        row = self._to_row(record)
        if row.get("id") is None:
            row.pop("id", None)
        names = list(row)
        placeholders = ", ".join("?" for _ in names)
        sql = f'INSERT INTO {self.name} ({self._column_list(names)}) VALUES ({placeholders})'
        with self.database.transaction() as conn:
            cursor = conn.execute(sql, [row[n] for n in names])
            new_id = cursor.lastrowid
        self.logger.debug(f"Inserted {self.entity} {new_id}")
        return new_id

    def get(self, record_id: int) -> R:
        rows = self.database.fetch_all(
            f"SELECT * FROM {self.name} WHERE id = ?", (record_id,)
        )
        if not rows:
            raise NotFoundError(self.entity, record_id)
        return self._from_row(dict(rows[0]))

    def put(self, record: R) -> None:
        """Insert or fully replace the record with the same id."""
        row = self._to_row(record)
        if row.get("id") is None:
            raise ValidationError("id", f"{self.entity} put requires an id")
        names = list(row)
        updates = ", ".join(f'"{n}" = excluded."{n}"' for n in names if n != "id")
        placeholders = ", ".join("?" for _ in names)
        sql = (
            f"INSERT INTO {self.name} ({self._column_list(names)}) VALUES ({placeholders}) "
            f"ON CONFLICT(id) DO UPDATE SET {updates}"
        )
        with self.database.transaction() as conn:
            conn.execute(sql, [row[n] for n in names])
        self.logger.debug(f"Stored {self.entity} {row['id']}")

    def update_fields(self, record_id: int, **fields: Any) -> None:
        """Partial update of the named columns."""
        unknown = [name for name in fields if name not in self.columns or name == "id"]
        if unknown:
            raise ValidationError(unknown[0], f"not an updatable {self.entity} field")
        if not fields:
            return
        assignments = ", ".join(f'"{name}" = ?' for name in fields)
        params = [_encode(v) for v in fields.values()] + [record_id]
        with self.database.transaction() as conn:
            cursor = conn.execute(
                f"UPDATE {self.name} SET {assignments} WHERE id = ?", params
            )
            matched = cursor.rowcount
        if matched == 0:
            raise NotFoundError(self.entity, record_id)
        self.logger.debug(f"Updated {self.entity} {record_id}: {', '.join(fields)}")

    def delete(self, record_id: int) -> None:
        with self.database.transaction() as conn:
            cursor = conn.execute(f"DELETE FROM {self.name} WHERE id = ?", (record_id,))
            matched = cursor.rowcount
        if matched == 0:
            raise NotFoundError(self.entity, record_id)
        self.logger.debug(f"Deleted {self.entity} {record_id}")

    def list_all(self) -> List[R]:
        """Full scan, in storage order."""
        rows = self.database.fetch_all(f"SELECT * FROM {self.name}")
        return [self._from_row(dict(row)) for row in rows]

    def count(self) -> int:
        return self.database.fetch_all(f"SELECT COUNT(*) FROM {self.name}")[0][0]


class EventTable(Table[Event]):
    name = "events"
    entity = "event"
    columns = (
        "id", "title", "description", "location", "status",
        "from_datetime", "to_datetime", "created_at",
    )

    def _to_row(self, record: Event) -> Dict[str, Any]:
        return record.to_dict()

    def _from_row(self, row: Dict[str, Any]) -> Event:
        return event_from_dict(row)


class AppointmentTable(Table[Appointment]):
    name = "appointments"
    entity = "appointment"
    columns = (
        "id", "first_name", "last_name", "phone", "email",
        "note", "datetime", "created_at",
    )

    def _to_row(self, record: Appointment) -> Dict[str, Any]:
        return record.to_dict()

    def _from_row(self, row: Dict[str, Any]) -> Appointment:
        return appointment_from_dict(row)
