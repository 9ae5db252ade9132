"""Persistence backends behind a common store interface."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from invoicedesk.storage.base import BaseStore
from invoicedesk.storage.json_store import JSONFileStore
from invoicedesk.storage.memory import InMemoryStore

if TYPE_CHECKING:
    from invoicedesk.config import InvoiceDeskConfig

logger = logging.getLogger("invoicedesk.storage")

__all__ = ["BaseStore", "InMemoryStore", "JSONFileStore", "create_store"]


def create_store(config: InvoiceDeskConfig) -> BaseStore:
    """Build the storage backend selected in the configuration."""
    if config.storage.backend == "memory":
        logger.info("Using in-memory storage")
        return InMemoryStore()
    logger.info("Using JSON storage in %s", config.storage.path)
    return JSONFileStore(config.storage.path)
