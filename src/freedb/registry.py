"""Registry owning named tables and their persistence."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from freedb.config import Settings, get_settings
from freedb.exceptions import CorruptDatabaseError, TableExists, TableNotFound
from freedb.logging import get_logger
from freedb.schema import Schema
from freedb.storage import read_snapshot, write_snapshot
from freedb.table import Table

logger = get_logger("registry")


def normalize_name(name: Any) -> str:
    """Return the canonical form of a table name."""
    return str(name).strip()


class Registry:
    """Named tables with whole-store persistence to a single file.

    The registry loads its file on creation (unless ``autoload`` is off) and
    saves it again on ``close()``. Both automatic steps log failures instead
    of raising; explicit ``save_to_file``/``load_from_file``/``flush`` calls
    raise.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        *,
        autoload: bool | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize a registry.

        Args:
            path: Database file. Defaults to the configured ``db_file``.
            autoload: Whether to load ``path`` now. Defaults to the
                configured ``autoload``.
            settings: Settings to use instead of the environment's.
        """
        settings = settings or get_settings()
        self.path = Path(path if path is not None else settings.db_file)
        self._tables: dict[str, Table] = {}
        self._lock = threading.Lock()
        self._closed = False

        if settings.autoload if autoload is None else autoload:
            self.auto_load()

    def create_table(self, name: Any, schema: Schema | Mapping[Any, Any] | str) -> bool:
        """Create a table unless one with that name exists.

        A duplicate name is logged and leaves the registry unchanged.

        Args:
            name: Table name.
            schema: A Schema, a mapping of column name to kind, or a
                declaration string.

        Returns:
            True if the table was created, False if the name was taken.

        Raises:
            UnsupportedType: If the schema declares an unknown kind.
            SchemaSyntaxError: If a declaration string is malformed.
        """
        name = normalize_name(name)
        schema = Schema.coerce_schema(schema)
        with self._lock:
            try:
                self._create_table(name, schema)
            except TableExists as e:
                logger.error("table_exists", table=name, error=str(e))
                return False
        logger.info("table_created", table=name, columns=list(schema))
        return True

    def _create_table(self, name: str, schema: Schema) -> None:
        if name in self._tables:
            raise TableExists(name)
        self._tables[name] = Table(schema)

    def table(self, name: Any) -> Table:
        """Get a table by name.

        Raises:
            TableNotFound: If no table has that name.
        """
        name = normalize_name(name)
        table = self._tables.get(name)
        if table is None:
            raise TableNotFound(name)
        return table

    def tables(self) -> set[str]:
        """Return the names of all tables."""
        return set(self._tables)

    def save_to_file(self, path: Path | str | None = None) -> Path:
        """Write every table to ``path`` (default: the registry's path).

        Raises:
            OSError: If the file cannot be written.
        """
        path = Path(path) if path is not None else self.path
        with self._lock:
            size = write_snapshot(path, self._tables)
        logger.info("database_saved", path=str(path), tables=len(self._tables), size=size)
        return path

    def load_from_file(self, path: Path | str | None = None) -> None:
        """Replace all tables with the contents of ``path``.

        Raises:
            DatabaseFileNotFound: If ``path`` does not exist.
            CorruptDatabaseError: If the file cannot be decoded.
        """
        path = Path(path) if path is not None else self.path
        tables = read_snapshot(path)
        for name, table in tables.items():
            if not isinstance(name, str) or not isinstance(table, Table):
                raise CorruptDatabaseError(f"Unexpected entry for table {name!r} in {path}")
        with self._lock:
            self._tables = tables
        logger.info("database_loaded", path=str(path), tables=sorted(tables))

    def auto_load(self) -> bool:
        """Load the registry's file, logging instead of raising on failure.

        Returns:
            True if the file was loaded.
        """
        if not self.path.exists():
            logger.info("database_missing", path=str(self.path), detail="starting with an empty database")
            return False
        try:
            self.load_from_file(self.path)
        except Exception as e:
            logger.error("auto_load_failed", path=str(self.path), error=str(e))
            return False
        return True

    def auto_save(self) -> bool:
        """Save to the registry's file, logging instead of raising on failure.

        Returns:
            True if the file was written.
        """
        try:
            self.save_to_file(self.path)
        except Exception as e:
            logger.error("auto_save_failed", path=str(self.path), error=str(e))
            return False
        return True

    def flush(self) -> Path:
        """Save to the registry's file, raising on failure."""
        return self.save_to_file(self.path)

    def close(self) -> None:
        """Save the registry once; later calls do nothing."""
        if self._closed:
            return
        self._closed = True
        self.auto_save()

    def __getitem__(self, name: Any) -> Table:
        return self.table(name)

    def __contains__(self, name: object) -> bool:
        return normalize_name(name) in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __enter__(self) -> Registry:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
