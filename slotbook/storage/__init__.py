from .database import Database, SCHEMA_VERSION
from .tables import Table, EventTable, AppointmentTable
from .state_file import JsonStateFile

__all__ = [
    "Database",
    "SCHEMA_VERSION",
    "Table",
    "EventTable",
    "AppointmentTable",
    "JsonStateFile",
]
