from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from ean_mobile.config.settings import Settings
from ean_mobile.core.logging import configure_logging


def test_settings_builds_common_params():
    settings = Settings(_env_file=None, cid="123", api_key="key", locale="fr_FR", currency_code="EUR")

    assert settings.common_params() == {
        "cid": "123",
        "minorRev": "20",
        "locale": "fr_FR",
        "currencyCode": "EUR",
        "apiKey": "key",
    }
    assert settings.suggestion_limit == 6


def test_settings_reads_prefixed_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("EAN_CID", "999")
    monkeypatch.setenv("EAN_SUGGESTION_LIMIT", "3")

    settings = Settings(_env_file=None)

    assert settings.cid == "999"
    assert settings.suggestion_limit == 3
    assert "apiKey" not in Settings(_env_file=None, api_key=None).common_params()


@pytest.mark.parametrize(
    "overrides",
    [{"suggestion_limit": 0}, {"api_base_url": "not-a-url"}],
)
def test_settings_rejects_invalid_values(overrides):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **overrides)


def test_configure_logging_writes_log_file(tmp_path):
    configure_logging("debug", tmp_path / "logs")
    logging.getLogger("ean_mobile.test").debug("hello")

    assert (tmp_path / "logs" / "ean_mobile.log").exists()

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
