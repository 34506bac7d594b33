"""
PostgreSQL key-value store adapter - Implements KeyValueStore protocol.

This module provides a PostgreSQL implementation of the domain's
key-value store port using psycopg3 with raw SQL. Each collection is a
single row of the ``kv_store`` table, replaced as a whole on write.

The schema is created by the SQL files in ``migrations/``, applied at
startup by run_migrations().
"""

import logging
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreError

logger = logging.getLogger(__name__)


class PostgresKeyValueStore:
    """
    Implements KeyValueStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def get(self, key: str) -> str | None:
        sql = "SELECT value FROM kv_store WHERE key = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                row = cursor.fetchone()
        except psycopg.Error as e:
            logger.error(f"Failed to read key {key}: {e}")
            raise StoreError(f"Cannot read key '{key}'") from e

        return row[0] if row is not None else None

    def set(self, key: str, value: str) -> None:
        """
        Upsert the whole value of a key.

        Uses INSERT ... ON CONFLICT DO UPDATE so the write is a single
        atomic statement whether or not the key already exists.
        """
        sql = """
            INSERT INTO kv_store (key, value, updated_at)
            VALUES (%s, %s, NOW())
            ON CONFLICT (key) DO UPDATE
            SET value = EXCLUDED.value,
                updated_at = NOW()
        """

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key, value))
                conn.commit()
        except psycopg.Error as e:
            logger.error(f"Failed to write key {key}: {e}")
            raise StoreError(f"Cannot write key '{key}'") from e

    def delete(self, key: str) -> None:
        sql = "DELETE FROM kv_store WHERE key = %s"

        try:
            with self._pool.connection() as conn, conn.cursor() as cursor:
                cursor.execute(sql, (key,))
                conn.commit()
        except psycopg.Error as e:
            logger.error(f"Failed to delete key {key}: {e}")
            raise StoreError(f"Cannot delete key '{key}'") from e


MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def pending_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[Path]:
    """Return the schema files to apply, ordered by file name."""
    if not migrations_dir.is_dir():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return []
    return sorted(migrations_dir.glob("*.sql"))


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Create the kv_store schema.

    All files run inside one transaction, so a failing file leaves the
    database as it was. Files must be idempotent since they run on every
    start.

    Args:
        pool: psycopg3 ConnectionPool instance
        migrations_dir: Directory holding the ``*.sql`` files

    Returns:
        Names of the files applied

    Raises:
        StoreError: If a file cannot be read or executed
    """
    sql_files = pending_migrations(migrations_dir)
    if not sql_files:
        return []

    applied: list[str] = []
    try:
        with pool.connection() as conn, conn.transaction():
            for sql_file in sql_files:
                conn.execute(sql_file.read_text(encoding="utf-8"))
                applied.append(sql_file.name)
    except (OSError, psycopg.Error) as e:
        failed = sql_files[len(applied)].name
        logger.error(f"Schema setup failed at {failed}: {e}")
        raise StoreError(f"Cannot apply schema file '{failed}'") from e

    logger.info(f"Schema ready ({', '.join(applied)})")
    return applied
