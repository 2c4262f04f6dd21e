import logging

import pytest

from sha256crypt import Config, Sha256Definition
from sha256crypt.config import ROUNDS_ENV, get_rounds


def test_default_when_unset(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(ROUNDS_ENV, raising=False)
    assert Config.from_env().ROUNDS == 5000


def test_rounds_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(ROUNDS_ENV, "12000")
    cfg = Config.from_env()
    assert cfg.ROUNDS == 12000
    assert cfg.definition == Sha256Definition(12000)


def test_invalid_value_falls_back(caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="sha256crypt.config"):
        assert get_rounds("lots") == 5000
    assert "not an integer" in caplog.text


@pytest.mark.parametrize("raw,expected", [("10", 1000), ("5000000000", 999_999_999)])
def test_out_of_range_value_is_clamped(raw, expected, caplog: pytest.LogCaptureFixture):
    with caplog.at_level(logging.WARNING, logger="sha256crypt.config"):
        assert get_rounds(raw) == expected
    assert "must be between" in caplog.text


def test_blank_value_uses_default():
    assert get_rounds("  ") == 5000
