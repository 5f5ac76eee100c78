"""Database engine construction.

The service talks to a single MySQL database over TLS through PyMySQL.
The engine keeps exactly one connection for the life of the process
(POOL_OPTIONS); requests take turns on it and wait for as long as it takes.
"""

from __future__ import annotations

import ssl
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine

from core.config import Settings, settings

POOL_OPTIONS = {
    "pool_size": 1,
    "max_overflow": 0,
    "pool_timeout": None,   # block until the shared connection is free
}


def build_ssl_context(cafile: Optional[str] = None) -> ssl.SSLContext:
    """TLS context for the database connection.

    create_default_context() verifies the server certificate and host name.
    """
    return ssl.create_default_context(cafile=cafile)


def build_url(cfg: Settings) -> URL:
    return URL.create(
        "mysql+pymysql",
        username=cfg.db_user or None,
        password=cfg.db_password or None,
        host=cfg.db_host,
        port=cfg.db_port,
        database=cfg.db_database or None,
    )


def build_engine(cfg: Settings = settings) -> Engine:
    """Create the engine. No connection is opened until first use.

    The TLS context is built on each connect, so an unreadable CA file shows
    up as a failed connection instead of an import error.

    The MySQL dialect sets the FOUND_ROWS client flag, so rowcount on UPDATE
    reports matched rows rather than changed rows.
    """
    engine = create_engine(
        build_url(cfg),
        connect_args={"connect_timeout": cfg.db_connect_timeout},
        **POOL_OPTIONS,
    )

    @event.listens_for(engine, "do_connect")
    def _require_tls(dialect, conn_rec, cargs, cparams):
        cparams["ssl"] = build_ssl_context(cfg.db_ssl_ca)

    return engine


engine = build_engine()
