"""Tests for environment-driven settings (gengo_client.config)."""

from __future__ import annotations

import pytest

from gengo_client.config import (
    DEFAULT_TIMEOUT,
    PRODUCTION_BASE_URL,
    SANDBOX_BASE_URL,
    ClientMode,
    base_url_for,
    load_timeout,
)
from gengo_client.errors import GengoConfigError


class TestBaseUrlFor:
    def test_known_modes(self):
        assert base_url_for(ClientMode.PRODUCTION) == PRODUCTION_BASE_URL
        assert base_url_for("sandbox") == SANDBOX_BASE_URL

    def test_unknown_mode(self):
        with pytest.raises(GengoConfigError, match="staging"):
            base_url_for("staging")


class TestLoadTimeout:
    def test_default_when_unset(self, monkeypatch):
        monkeypatch.delenv("GENGO_TIMEOUT", raising=False)
        assert load_timeout() == DEFAULT_TIMEOUT

    def test_blank_means_default(self, monkeypatch):
        monkeypatch.setenv("GENGO_TIMEOUT", "  ")
        assert load_timeout() == DEFAULT_TIMEOUT

    def test_numeric_value(self, monkeypatch):
        monkeypatch.setenv("GENGO_TIMEOUT", "12.5")
        assert load_timeout() == 12.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-3", "nan"])
    def test_invalid_value_names_variable(self, monkeypatch, raw):
        monkeypatch.setenv("GENGO_TIMEOUT", raw)
        with pytest.raises(GengoConfigError, match="GENGO_TIMEOUT"):
            load_timeout()
