# File: slotbook/core/event_store.py

from typing import Union

from slotbook.core.record_store import TimedRecordStore
from slotbook.models.enums import EventStatus
from slotbook.models.events import Event, coerce_status


class EventStore(TimedRecordStore[Event]):
    """Operator events. Never overlap-checked."""

    entity = "event"

    def update_status(self, record_id: int, status: Union[EventStatus, str]) -> None:
        """
        Change only the status of an event, then reload.

        Every transition is allowed; status is an operator toggle.

        Raises:
            ValidationError: unknown status value
            NotFoundError: unknown id
            StorageError
        """
        with self._operation("update status of"):
            new_status = coerce_status(status)
            self._table.update_fields(record_id, status=new_status)
            self._reload()
        self.logger.info(f"Event {record_id} status -> {new_status.value}")
