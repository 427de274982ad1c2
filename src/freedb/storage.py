"""Snapshot file format for a whole registry.

Layout::

    b"FRDB"             magic
    <H                  format version
    <I                  payload length
    payload             pickled {table name: Table}

Paths ending in ``.gz`` are gzip-compressed as a whole.
"""

from __future__ import annotations

import gzip
import os
import pickle
import struct
import tempfile
import zlib
from pathlib import Path
from typing import Any

from freedb.exceptions import CorruptDatabaseError, DatabaseFileNotFound

MAGIC = b"FRDB"
VERSION = 1
HEADER_SIZE = len(MAGIC) + struct.calcsize("<H") + struct.calcsize("<I")


def _opener(path: Path) -> Any:
    return gzip.open if path.suffix == ".gz" else open


def encode_snapshot(tables: dict[str, Any]) -> bytes:
    """Serialize a name to Table mapping into snapshot bytes (uncompressed)."""
    payload = pickle.dumps(tables, protocol=pickle.HIGHEST_PROTOCOL)
    return MAGIC + struct.pack("<H", VERSION) + struct.pack("<I", len(payload)) + payload


def decode_snapshot(data: bytes) -> dict[str, Any]:
    """Decode snapshot bytes produced by ``encode_snapshot``.

    Raises:
        CorruptDatabaseError: If the data is not a valid snapshot.
    """
    if len(data) < HEADER_SIZE or data[:4] != MAGIC:
        raise CorruptDatabaseError("Invalid database file (bad magic bytes)")

    version = struct.unpack("<H", data[4:6])[0]
    if version != VERSION:
        raise CorruptDatabaseError(f"Unsupported database file version: {version}")

    payload_len = struct.unpack("<I", data[6:10])[0]
    payload = data[HEADER_SIZE:]
    if len(payload) != payload_len:
        raise CorruptDatabaseError(
            f"Truncated database file: expected {payload_len} payload bytes, "
            f"got {len(payload)}"
        )

    try:
        tables = pickle.loads(payload)
    except Exception as e:
        raise CorruptDatabaseError(f"Cannot decode database payload: {e}") from e

    if not isinstance(tables, dict):
        raise CorruptDatabaseError(
            f"Unexpected database payload type: {type(tables).__name__}"
        )
    return tables


def write_snapshot(path: Path | str, tables: dict[str, Any]) -> int:
    """Write a snapshot, replacing any existing file. Returns bytes written.

    The data goes to a temporary file in the same directory first and is then
    moved over ``path``, so readers never see a partial file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = encode_snapshot(tables)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    os.close(fd)
    tmp_path = Path(tmp_name)
    try:
        with _opener(path)(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return len(data)


def read_snapshot(path: Path | str) -> dict[str, Any]:
    """Read a snapshot written by ``write_snapshot``.

    Raises:
        DatabaseFileNotFound: If ``path`` does not exist.
        CorruptDatabaseError: If the file cannot be decoded.
    """
    path = Path(path)
    if not path.exists():
        raise DatabaseFileNotFound(path)

    try:
        with _opener(path)(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        raise DatabaseFileNotFound(path) from e
    except (gzip.BadGzipFile, zlib.error, EOFError) as e:
        raise CorruptDatabaseError(f"Cannot decompress database file: {e}") from e
    return decode_snapshot(data)
