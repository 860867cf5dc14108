# File: tests/test_sentry.py
"""Tests for Sentry setup and event filtering."""

import pytest

from caixapdv.core.sentry import filter_sensitive_data, init_sentry


class TestInitSentry:
    """Sentry stays off without a usable DSN."""

    def test_disabled_without_dsn(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("SENTRY_DSN", raising=False)

        assert init_sentry() is False

    def test_disabled_with_placeholder_dsn(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SENTRY_DSN", "your-sentry-dsn-here")

        assert init_sentry() is False


class TestFilterSensitiveData:
    """SQL text never leaves the process."""

    @pytest.fixture(autouse=True)
    def production(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVIRONMENT", "production")

    def test_sql_extras_dropped(self):
        event = {"extra": {"sql": "SELECT *", "query": "UPDATE vendas SET", "caixa": "abc"}}

        filtered = filter_sensitive_data(event, {})

        assert filtered["extra"] == {"query": "UPDATE vendas SET", "caixa": "abc"}

    def test_breadcrumb_values_filtered(self):
        event = {
            "breadcrumbs": {
                "values": [
                    {"message": "executing SQL statement"},
                    {"message": "caixa.opened"},
                ]
            }
        }

        filtered = filter_sensitive_data(event, {})

        assert filtered["breadcrumbs"]["values"] == [{"message": "caixa.opened"}]

    def test_breadcrumb_list_filtered(self):
        event = {"breadcrumbs": [{"message": "sql: SELECT 1"}, {"message": "webhook.received"}]}

        filtered = filter_sensitive_data(event, {})

        assert filtered["breadcrumbs"] == [{"message": "webhook.received"}]

    def test_test_environment_untouched(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        event = {"extra": {"sql": "SELECT 1"}}

        assert filter_sensitive_data(event, {}) == {"extra": {"sql": "SELECT 1"}}
