"""
Incident store exports.

Clean interface for the gateway to import storage components.
"""

from incidents.base import IncidentStore, StorageReadError, StorageWriteError
from incidents.json_file import JsonFileIncidentStore
from incidents.sqlite import SQLiteIncidentStore
from incidents.serialized import SerializedIncidentStore
from incidents.stub import FailingIncidentStore, InMemoryIncidentStore
from incidents.types import (
    NO_DESCRIPTION,
    IncidentCollection,
    IncidentRecord,
    MediaAttachment,
)

__all__ = [
    "IncidentStore",
    "StorageReadError",
    "StorageWriteError",
    "JsonFileIncidentStore",
    "SQLiteIncidentStore",
    "InMemoryIncidentStore",
    "FailingIncidentStore",
    "SerializedIncidentStore",
    "IncidentRecord",
    "IncidentCollection",
    "MediaAttachment",
    "NO_DESCRIPTION",
]
