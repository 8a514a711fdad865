"""Simple migration runner for SQLite using provided SQL files in migrations/"""
from pathlib import Path
import sqlite3
import sys

BASE = Path(__file__).parent
MIGRATIONS = sorted((BASE / "migrations").glob("*.sql"))


def sqlite_path(url: str) -> Path:
    """Turn a `sqlite:///path` URL into a filesystem path."""
    prefix = "sqlite:///"
    if not url.startswith(prefix):
        raise ValueError(f"run_migrations only supports SQLite URLs, got: {url}")
    return Path(url[len(prefix):])


def run(db_path: Path = None):
    """Execute SQL migration files against the configured SQLite database.

    The function applies every `migrations/*.sql` file in lexical
    order. Each file uses `IF NOT EXISTS`, so re-running is safe.
    """
    if db_path is None:
        if str(BASE) not in sys.path:
            sys.path.insert(0, str(BASE))
        from portfolio_api.config import settings
        db_path = sqlite_path(settings.DATABASE_URL)
    print("Using database:", db_path)
    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    for m in MIGRATIONS:
        print("Applying:", m.name)
        sql = m.read_text(encoding="utf-8")
        cur.executescript(sql)
    conn.commit()
    conn.close()
    print("Migrations applied.")


if __name__ == '__main__':
    run()
