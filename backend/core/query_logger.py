"""
SQL query logging for SQLAlchemy engines.

Times every statement and reports slow ones on the
``sqlalchemy.performance`` logger.
"""

import logging
import time

from sqlalchemy import event
from sqlalchemy.engine import Engine

from .config import settings

logger = logging.getLogger(__name__)
query_logger = logging.getLogger("sqlalchemy.performance")


def setup_query_logging(engine: Engine):
    """
    Setup query logging for an SQLAlchemy engine

    Args:
        engine: SQLAlchemy engine instance
    """

    @event.listens_for(engine, "before_cursor_execute")
    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.time())

        if settings.log_sql_queries:
            logger.debug("Start Query: %s", statement)

    @event.listens_for(engine, "after_cursor_execute")
    def after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        total_time = time.time() - conn.info["query_start_time"].pop(-1)

        if total_time > settings.slow_query_threshold:
            query_logger.warning(
                f"SLOW QUERY ({total_time:.3f}s): {statement[:200]}..."
            )

        if settings.log_sql_queries:
            logger.debug("Query Complete in %.3fs", total_time)

    @event.listens_for(engine, "connect")
    def setup_sqlite_pragma(dbapi_conn, connection_record):
        """Enable foreign keys on SQLite connections"""
        if engine.url.get_backend_name() == "sqlite":
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            cursor.close()
