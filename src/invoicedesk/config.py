"""
InvoiceDesk configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """Where and how invoices, clients and the business profile are kept."""

    backend: Literal["json", "memory"] = Field(default="json", description="Storage backend")
    directory: str = Field(
        default="~/.invoicedesk",
        description="Directory holding the JSON collections (json backend only)",
    )

    @property
    def path(self) -> Path:
        return Path(self.directory).expanduser()


class InvoiceDeskConfig(BaseModel):
    """Root configuration for InvoiceDesk."""

    storage: StorageConfig = Field(default_factory=StorageConfig)

    invoice_prefix: str = Field(default="INV", pattern=r"^[A-Z0-9\-]{1,10}$")
    currency: str = Field(default="USD")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="WARNING")

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> InvoiceDeskConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_dir = os.environ.get("INVOICEDESK_DATA_DIR")
        env_backend = os.environ.get("INVOICEDESK_STORAGE")
        env_currency = os.environ.get("INVOICEDESK_CURRENCY")
        env_log_level = os.environ.get("INVOICEDESK_LOG_LEVEL")

        if env_dir or env_backend:
            storage = data.get("storage", {})
            if env_dir:
                storage["directory"] = env_dir
            if env_backend:
                storage["backend"] = env_backend.lower()
            data["storage"] = storage

        if env_currency:
            data["currency"] = env_currency.upper()
        if env_log_level:
            data["log_level"] = env_log_level.upper()

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
