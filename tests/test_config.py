"""
Settings loaded from the environment.
"""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from food_ordering.core import config as core_config
from food_ordering.core.config import EnvironmentMode, Settings, get_settings


def test_defaults(settings, data_dir):
    assert settings.env_mode is EnvironmentMode.DEVELOPMENT
    assert settings.cache_ttl_seconds == 300
    assert settings.document_store_enabled is False
    assert settings.orders_file == data_dir / "orders.json"
    assert settings.order_counter_file == data_dir / "orders.counter.json"


def test_env_mode_is_case_insensitive(data_dir, monkeypatch):
    monkeypatch.setenv("ENV_MODE", "PRODUCTION")
    core_config.get_settings.cache_clear()

    assert get_settings().env_mode is EnvironmentMode.PRODUCTION


def test_unknown_env_mode_is_rejected(data_dir, monkeypatch):
    monkeypatch.setenv("ENV_MODE", "qa")

    with pytest.raises(ValidationError):
        Settings()


def test_port_variable_sets_api_port(data_dir, monkeypatch):
    monkeypatch.setenv("PORT", "8080")

    assert Settings().api_port == 8080


def test_cors_origins_list_skips_blanks(data_dir, monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", " https://a.example , ,https://b.example")

    assert Settings().cors_origins_list == ["https://a.example", "https://b.example"]


def test_blank_database_url_disables_document_store(data_dir, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "  ")

    assert Settings().document_store_enabled is False
