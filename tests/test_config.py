from __future__ import annotations

from amlich.core.config import (
    DEFAULT_TZ_OFFSET_HOURS,
    LunarConfig,
    config_from_env,
    tz_offset_from_env,
)


def test_defaults():
    assert LunarConfig().tz_offset_hours == DEFAULT_TZ_OFFSET_HOURS == 7.0


def test_tz_offset_from_env(monkeypatch):
    monkeypatch.delenv("AMLICH_TZ_OFFSET", raising=False)
    assert tz_offset_from_env() == 7.0

    monkeypatch.setenv("AMLICH_TZ_OFFSET", " 8 ")
    assert tz_offset_from_env() == 8.0
    assert config_from_env() == LunarConfig(tz_offset_hours=8.0)

    monkeypatch.setenv("AMLICH_TZ_OFFSET", "")
    assert tz_offset_from_env(5.5) == 5.5

    monkeypatch.setenv("AMLICH_TZ_OFFSET", "UTC+7")
    assert tz_offset_from_env() == 7.0
