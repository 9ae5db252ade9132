"""
JSON file store — one JSON document per key in a data directory.

The on-disk analogue of browser local storage: ``invoices.json``,
``clients.json`` and ``business_profile.json``. A missing file loads as the
empty default. A file that exists but cannot be read or validated raises
:class:`StorageError` instead, so the next whole-collection save never
replaces records it could not load. Failed writes raise too. Writes go
through a temporary file and an atomic rename so a reader never sees half a
document.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import TypeAdapter

from invoicedesk.exceptions import StorageError
from invoicedesk.models.business import BusinessProfile
from invoicedesk.models.client import Client
from invoicedesk.models.invoice import Invoice
from invoicedesk.storage.base import BaseStore

logger = logging.getLogger("invoicedesk.storage.json")

T = TypeVar("T")

STORAGE_KEYS = {
    "invoices": "invoices.json",
    "clients": "clients.json",
    "business_profile": "business_profile.json",
}

_INVOICES = TypeAdapter(list[Invoice])
_CLIENTS = TypeAdapter(list[Client])
_PROFILE = TypeAdapter(BusinessProfile | None)


class JSONFileStore(BaseStore):
    """Persist collections as pretty-printed JSON files.

    Usage::

        store = JSONFileStore("~/.invoicedesk")
        invoices = store.load_invoices()
        store.save_invoices(invoices)
    """

    name = "json"

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self.directory / STORAGE_KEYS[key]

    def _load(self, key: str, adapter: TypeAdapter[T], default: T) -> T:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return adapter.validate_json(path.read_bytes())
        except (OSError, ValueError) as e:
            logger.error("Error loading %s from %s: %s", key, path, e)
            raise StorageError(key, str(e), action="read") from e

    def _save(self, key: str, adapter: TypeAdapter[Any], value: Any) -> None:
        path = self._path(key)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}-", suffix=".tmp")
            with os.fdopen(fd, "wb") as f:
                f.write(adapter.dump_json(value, indent=2))
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(key, str(e)) from e
        logger.debug("Saved %s to %s", key, path)

    def load_invoices(self) -> list[Invoice]:
        return self._load("invoices", _INVOICES, [])

    def save_invoices(self, invoices: list[Invoice]) -> None:
        self._save("invoices", _INVOICES, invoices)

    def load_clients(self) -> list[Client]:
        return self._load("clients", _CLIENTS, [])

    def save_clients(self, clients: list[Client]) -> None:
        self._save("clients", _CLIENTS, clients)

    def load_business_profile(self) -> BusinessProfile | None:
        return self._load("business_profile", _PROFILE, None)

    def save_business_profile(self, profile: BusinessProfile) -> None:
        self._save("business_profile", _PROFILE, profile)

    def clear(self) -> None:
        for key in STORAGE_KEYS:
            self._path(key).unlink(missing_ok=True)
        logger.info("Cleared all data in %s", self.directory)
