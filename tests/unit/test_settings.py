from __future__ import annotations

import pytest

from notelink.config import _env
from notelink.config.secrets import get_pairing_key
from notelink.runtime.settings import load_settings


def test_get_int_parses_and_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTELINK_TEST_INT", "12")
    assert _env.get_int("NOTELINK_TEST_INT", 5) == 12

    monkeypatch.setenv("NOTELINK_TEST_INT", "twelve")
    assert _env.get_int("NOTELINK_TEST_INT", 5) == 5

    monkeypatch.delenv("NOTELINK_TEST_INT")
    assert _env.get_int("NOTELINK_TEST_INT", 5) == 5


@pytest.mark.parametrize("raw", ["0", "off", "disabled", "none"])
def test_disabled_values_turn_features_off(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("NOTELINK_TEST_FLOAT", raw)
    assert _env.get_float("NOTELINK_TEST_FLOAT", 2.5) == 0.0
    monkeypatch.setenv("NOTELINK_TEST_BOOL", raw)
    assert _env.get_bool("NOTELINK_TEST_BOOL", True) is False


def test_get_bool_truthy(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTELINK_TEST_BOOL", "yes")
    assert _env.get_bool("NOTELINK_TEST_BOOL", False) is True


def test_get_str_blank_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTELINK_TEST_STR", "   ")
    assert _env.get_str("NOTELINK_TEST_STR", "/ws") == "/ws"


def test_pairing_key_is_read_at_call_time(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NOTELINK_PAIRING_KEY", "  s3cret ")
    assert get_pairing_key() == "s3cret"
    assert load_settings().auth.pairing_key == "s3cret"


def test_load_settings_defaults_are_sane() -> None:
    settings = load_settings()

    assert settings.protocol.min_summary_chars >= 1
    assert settings.protocol.transient_max_bytes > 0
    assert settings.limits.pending_timeout_s >= 0
    assert settings.limits.inbound_queue_max >= 1
    assert settings.link.ws_path.startswith("/")
