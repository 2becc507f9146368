import os
import sqlite3
from pathlib import Path
from typing import Generator, Optional, Union

from db_migrations import apply_migrations

APP_DIR = Path(__file__).resolve().parent

PathLike = Union[str, Path]


def resolve_db_path(path: Optional[PathLike] = None) -> Path:
    """Explicit path, else DB_PATH, else DB_DIR/galaxy.db. The environment is read per call."""
    if path is not None:
        return Path(path)
    db_dir = Path(os.environ.get("DB_DIR", str(APP_DIR / "data")))
    return Path(os.environ.get("DB_PATH", str(db_dir / "galaxy.db")))


def connect_db(path: Optional[PathLike] = None) -> sqlite3.Connection:
    db_path = resolve_db_path(path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), timeout=30)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys=ON;")
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA busy_timeout=30000;")
    return conn


def init_db(path: Optional[PathLike] = None) -> sqlite3.Connection:
    """Open the galaxy database with every schema migration applied."""
    conn = connect_db(path)
    apply_migrations(conn)
    return conn


def get_db(path: Optional[PathLike] = None) -> Generator[sqlite3.Connection, None, None]:
    """Yield a migrated connection and close it when the caller is done."""
    conn = init_db(path)
    try:
        yield conn
    finally:
        conn.close()
