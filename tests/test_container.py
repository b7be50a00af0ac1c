from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.daily_checkin.daily_checkin.checkin.memory_attendance_store import InMemoryAttendanceStore
from src.daily_checkin.daily_checkin.checkin.mysql_attendance_store import MySQLAttendanceStore
from src.daily_checkin.daily_checkin.container import build_container
from src.daily_checkin.daily_checkin.core.exceptions import ConfigError


def make_settings(tmp_path, **overrides):
    values = dict(
        STORE_BACKEND="memory",
        UPLOAD_DIR=str(tmp_path / "uploads"),
        TOKEN_MD5="ecd0e0f08eab7690",
        SMTP_HOST="",
        SCHEDULER_TICK_SECONDS=15,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_memory_backend_wiring(tmp_path, settings, gateway):
    container = build_container(make_settings(tmp_path), settings_provider=settings, gateway=gateway)

    assert isinstance(container.attendance_store, InMemoryAttendanceStore)
    assert container.gateway is gateway
    assert container.token_verifier("secret")
    assert not container.token_verifier("wrong")
    assert (tmp_path / "uploads").is_dir()
    assert [p.name for p in container.checkin_service.persons()] == ["Alice", "Bob"]


def test_unknown_backend_is_rejected(tmp_path, settings, gateway):
    with pytest.raises(ConfigError):
        build_container(make_settings(tmp_path, STORE_BACKEND="sqlite"), settings_provider=settings, gateway=gateway)


def test_mysql_backend_requires_db_config(tmp_path, settings, gateway):
    with pytest.raises(ConfigError):
        build_container(make_settings(tmp_path, STORE_BACKEND="mysql"), settings_provider=settings, gateway=gateway)


def test_mysql_backend_uses_the_configured_database(tmp_path, settings, gateway):
    first = build_container(
        make_settings(tmp_path, STORE_BACKEND="mysql", DB_CONFIG={"database": "first"}),
        settings_provider=settings,
        gateway=gateway,
    )
    second = build_container(
        make_settings(tmp_path, STORE_BACKEND="mysql", DB_CONFIG={"database": "second"}),
        settings_provider=settings,
        gateway=gateway,
    )

    assert isinstance(first.attendance_store, MySQLAttendanceStore)
    assert first.attendance_store.conn_factory.config.database == "first"
    assert second.attendance_store.conn_factory.config.database == "second"
