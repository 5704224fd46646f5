"""SQLite ledger of repositories that have already been triaged."""

import sqlite3
from pathlib import Path

from .files import get_hash
from .models import Repository

DEFAULT_DB_PATH = Path(__file__).parent.parent / "results" / "repositories.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS processed_repositories (
    url_hash TEXT PRIMARY KEY,  -- sha1 of url
    url TEXT NOT NULL,
    provider TEXT NOT NULL,
    status TEXT NOT NULL,  -- 'scanned', 'timeout', 'error', 'too_large'
    size_bytes INTEGER,
    processed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    path = db_path or DEFAULT_DB_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path, timeout=30)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.executescript(SCHEMA)
    conn.commit()
    conn.close()


def get_db(db_path: Path | None = None) -> sqlite3.Connection:
    """Get a database connection."""
    path = db_path or DEFAULT_DB_PATH
    conn = sqlite3.connect(path, timeout=30)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.row_factory = sqlite3.Row
    return conn


def mark_processed(
    db_path: Path | None,
    repository: Repository,
    status: str,
    size_bytes: int | None = None,
) -> None:
    """Record (or overwrite) the outcome for a repository."""
    conn = get_db(db_path)
    conn.execute(
        """
        INSERT OR REPLACE INTO processed_repositories (url_hash, url, provider, status, size_bytes)
        VALUES (?, ?, ?, ?, ?)
    """,
        (get_hash(repository.url), repository.url, repository.provider.value, status, size_bytes),
    )
    conn.commit()
    conn.close()


def is_processed(db_path: Path | None, url: str) -> bool:
    conn = get_db(db_path)
    row = conn.execute(
        "SELECT 1 FROM processed_repositories WHERE url_hash = ?", (get_hash(url),)
    ).fetchone()
    conn.close()
    return row is not None


def filter_unprocessed(db_path: Path | None, repositories: list[Repository]) -> list[Repository]:
    """Drop repositories already in the ledger, preserving order."""
    if not repositories:
        return []
    conn = get_db(db_path)
    hashes = [get_hash(r.url) for r in repositories]
    placeholders = ",".join("?" * len(hashes))
    cursor = conn.execute(
        f"SELECT url_hash FROM processed_repositories WHERE url_hash IN ({placeholders})",
        hashes,
    )
    done = {row["url_hash"] for row in cursor.fetchall()}
    conn.close()
    return [r for r, h in zip(repositories, hashes) if h not in done]


def get_processed_count(db_path: Path | None = None) -> int:
    conn = get_db(db_path)
    count = conn.execute("SELECT COUNT(*) FROM processed_repositories").fetchone()[0]
    conn.close()
    return count


def get_status_counts(db_path: Path | None = None) -> dict[str, int]:
    """Count of ledger rows per status."""
    conn = get_db(db_path)
    cursor = conn.execute(
        "SELECT status, COUNT(*) AS n FROM processed_repositories GROUP BY status"
    )
    counts = {row["status"]: row["n"] for row in cursor.fetchall()}
    conn.close()
    return counts
