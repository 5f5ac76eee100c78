"""
Unit tests for db/store.py and db/database.py.

EventStore runs against in-memory SQLite; engine construction is checked
without opening a MySQL connection.
"""

import ssl
import threading

import pytest
from pymysql.constants import CLIENT
from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool

from core.config import Settings
from db.database import POOL_OPTIONS, build_engine, build_ssl_context, build_url
from db.store import EventStore, StoreError, driver_message


# ---------------------------------------------------------------------------
# EventStore
# ---------------------------------------------------------------------------

class TestEventStore:

    def test_create_returns_new_id_and_rowcounts_report_matches(self, store):
        event_id = store.create_event("Finals", "Tennis", "2024-06-01")
        assert store.update_event(event_id, "Finals", "Tennis", "2024-06-01") == 1
        assert store.set_winner(event_id, "A. Player") == 1
        assert store.delete_event(event_id) == 1
        assert store.delete_event(event_id) == 0

    def test_create_returns_each_assigned_id(self, store):
        first = store.create_event("Finals", "Tennis", "2024-06-01")
        second = store.create_event("Semis", "Tennis", "2024-05-30", "A. Player")
        assert (first, second) == (1, 2)

    def test_list_returns_plain_dicts(self, store):
        store.create_event("Finals", "Tennis", "2024-06-01", "A. Player")
        [row] = store.list_events()
        assert row == {
            "event_id": 1,
            "event_name": "Finals",
            "sport": "Tennis",
            "event_date": "2024-06-01",
            "winner_player_name": "A. Player",
        }

    def test_unknown_id_matches_nothing(self, store):
        assert store.update_event(42, "Finals", "Tennis", "2024-06-01") == 0
        assert store.set_winner(42, "A. Player") == 0

    def test_failure_raises_store_error_with_driver_message(self, broken_store):
        with pytest.raises(StoreError) as excinfo:
            broken_store.list_events()
        assert excinfo.value.message == "no such table: events"

    def test_connect_reports_success(self, store):
        assert store.connect() is True

    def test_connect_failure_is_reported_not_raised(self, tmp_path, caplog):
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'events.db'}")
        with caplog.at_level("ERROR", logger="db.store"):
            assert EventStore(engine).connect() is False
        assert "Database connection failed" in caplog.text


class TestDriverMessage:

    def test_mysql_style_args_yield_the_message_part(self):
        exc = Exception(2003, "Can't connect to MySQL server on 'db' (timed out)")
        assert driver_message(exc) == "Can't connect to MySQL server on 'db' (timed out)"

    def test_single_argument_errors_use_str(self):
        assert driver_message(Exception("no such table: events")) == "no such table: events"

    def test_wrapped_errors_are_unwrapped(self):
        class Wrapped(Exception):
            def __init__(self, orig):
                super().__init__("wrapper text")
                self.orig = orig

        orig = Exception(1146, "Table 'app.events' doesn't exist")
        assert driver_message(Wrapped(orig)) == "Table 'app.events' doesn't exist"


# ---------------------------------------------------------------------------
# Engine construction
# ---------------------------------------------------------------------------

@pytest.fixture()
def cfg():
    return Settings(
        _env_file=None,
        db_host="db.example.com",
        db_port=12345,
        db_user="events_app",
        db_password="s3cret",
        db_database="defaultdb",
    )


class TestBuildEngine:

    def test_url_uses_pymysql_and_settings(self, cfg):
        url = build_url(cfg)
        assert url.drivername == "mysql+pymysql"
        assert url.host == "db.example.com"
        assert url.port == 12345
        assert url.username == "events_app"
        assert url.password == "s3cret"
        assert url.database == "defaultdb"

    def test_ssl_context_verifies_certificate_and_host(self):
        ctx = build_ssl_context()
        assert ctx.verify_mode == ssl.CERT_REQUIRED
        assert ctx.check_hostname is True

    def test_engine_uses_shared_pool_options(self, cfg):
        engine = build_engine(cfg)
        assert engine.pool.size() == 1
        assert engine.pool.timeout() is None

    def test_every_connection_gets_a_verifying_tls_context(self, cfg):
        engine = build_engine(cfg)
        cparams = {}
        for listener in engine.dialect.dispatch.do_connect:
            listener(engine.dialect, None, [], cparams)
        assert isinstance(cparams["ssl"], ssl.SSLContext)
        assert cparams["ssl"].verify_mode == ssl.CERT_REQUIRED
        assert cparams["ssl"].check_hostname is True

    def test_missing_ca_file_fails_the_connection_not_the_import(self, cfg, tmp_path):
        cfg.db_ssl_ca = str(tmp_path / "missing-ca.pem")
        store = EventStore(build_engine(cfg))
        assert store.connect() is False
        with pytest.raises(StoreError) as excinfo:
            store.ping()
        assert "No such file" in excinfo.value.message

    def test_rowcount_reports_matched_rows(self, cfg):
        engine = build_engine(cfg)
        _, kwargs = engine.dialect.create_connect_args(engine.url)
        assert kwargs["client_flag"] & CLIENT.FOUND_ROWS


def test_second_checkout_waits_for_the_shared_connection(tmp_path):
    # Same pool options as production, on a file-backed SQLite database
    engine = create_engine(
        f"sqlite:///{tmp_path / 'events.db'}",
        connect_args={"check_same_thread": False},
        poolclass=QueuePool,
        **POOL_OPTIONS,
    )
    acquired = threading.Event()

    def second_request():
        with engine.connect():
            acquired.set()

    first = engine.connect()
    worker = threading.Thread(target=second_request, daemon=True)
    worker.start()
    try:
        assert not acquired.wait(0.3)
    finally:
        first.close()
    assert acquired.wait(5)
    worker.join(5)
    engine.dispose()
