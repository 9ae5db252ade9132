"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from invoicedesk.config import InvoiceDeskConfig


class TestConfig:
    def test_default_config(self) -> None:
        config = InvoiceDeskConfig()
        assert config.storage.backend == "json"
        assert config.storage.path == Path("~/.invoicedesk").expanduser()
        assert config.invoice_prefix == "INV"
        assert config.currency == "USD"
        assert config.log_level == "WARNING"

    def test_load_from_yaml(self, tmp_path: Path) -> None:
        yaml_content = {
            "storage": {"backend": "memory"},
            "invoice_prefix": "ACME",
            "currency": "EUR",
        }
        config_file = tmp_path / "invoicedesk.yaml"
        config_file.write_text(yaml.dump(yaml_content))

        config = InvoiceDeskConfig.load(str(config_file))
        assert config.storage.backend == "memory"
        assert config.invoice_prefix == "ACME"
        assert config.currency == "EUR"

    def test_load_with_overrides(self) -> None:
        config = InvoiceDeskConfig.load(None, currency="GBP", storage={"backend": "memory"})
        assert config.currency == "GBP"
        assert config.storage.backend == "memory"

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("INVOICEDESK_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("INVOICEDESK_STORAGE", "MEMORY")
        monkeypatch.setenv("INVOICEDESK_CURRENCY", "cad")
        monkeypatch.setenv("INVOICEDESK_LOG_LEVEL", "debug")

        config = InvoiceDeskConfig.load()
        assert config.storage.path == tmp_path
        assert config.storage.backend == "memory"
        assert config.currency == "CAD"
        assert config.log_level == "DEBUG"

    def test_env_beats_file(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        config_file = tmp_path / "invoicedesk.yaml"
        config_file.write_text(yaml.dump({"currency": "EUR"}))
        monkeypatch.setenv("INVOICEDESK_CURRENCY", "JPY")

        assert InvoiceDeskConfig.load(str(config_file)).currency == "JPY"

    def test_missing_config_file(self) -> None:
        config = InvoiceDeskConfig.load("/nonexistent/config.yaml")
        # Should use defaults without error
        assert config.invoice_prefix == "INV"

    def test_unknown_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INVOICEDESK_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            InvoiceDeskConfig.load()

    def test_invalid_prefix_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InvoiceDeskConfig(invoice_prefix="inv 2024")
