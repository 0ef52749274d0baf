"""Write the ranked report as TSV and, optionally, into DuckDB."""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

import duckdb

from .models import WantedTemplate

logger = logging.getLogger(__name__)

REPORT_TABLE = "wanted_templates"


def write_report(rows: Sequence[WantedTemplate], stream: TextIO) -> None:
    """One `title<TAB>count` line per row, no header."""
    for row in rows:
        stream.write(f"{row.title}\t{row.count}\n")
    logger.info("Wrote %d wanted templates", len(rows))


def save_to_db(db_path: str, rows: Sequence[WantedTemplate]) -> None:
    """
    Store the ranked report in the wanted_templates table.
    The table lives in the default schema so that no database file name
    can shadow it, and is recreated on every run.

    Args:
        db_path: Path to DuckDB database file
        rows: Ranked report rows
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = duckdb.connect(db_path)
    try:
        conn.execute(f"DROP TABLE IF EXISTS {REPORT_TABLE}")
        conn.execute(f"""
            CREATE TABLE {REPORT_TABLE} (
                rank INTEGER PRIMARY KEY,
                title VARCHAR NOT NULL,
                count BIGINT NOT NULL
            )
        """)
        if rows:
            conn.executemany(
                f"INSERT INTO {REPORT_TABLE} (rank, title, count) VALUES (?, ?, ?)",
                [(i, row.title, row.count) for i, row in enumerate(rows, start=1)],
            )
    finally:
        conn.close()
    logger.info("Saved %d wanted templates to %s", len(rows), db_path)
