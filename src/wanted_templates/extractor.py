"""Read page, templatelinks and linktarget rows out of MediaWiki SQL dumps."""

import logging
import mmap
from collections.abc import Iterator, Sequence
from typing import Any, Optional

from mwsql import Dump

from .models import LinkTarget, Page, TemplateLink

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 10**6


class DumpIOError(OSError):
    """A dump could not be opened or memory-mapped."""

    def __init__(self, action: str, path: str, reason: Exception):
        self.action = action
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to {action} {path}: {reason}")


class DumpSchemaError(ValueError):
    """A dump lacks a column needed to build its records."""


def ensure_mappable(path: str) -> None:
    """Open path and map it read-only, raising DumpIOError on failure.

    Used as a preflight so a missing or unreadable input aborts the run
    before any dump is parsed. Empty files cannot be mapped.
    """
    try:
        dump_file = open(path, "rb")
    except OSError as e:
        raise DumpIOError("open", path, e) from e
    with dump_file:
        try:
            with mmap.mmap(dump_file.fileno(), 0, access=mmap.ACCESS_READ):
                pass
        except (OSError, ValueError) as e:
            raise DumpIOError("map", path, e) from e


def open_dump(path: str) -> Dump:
    """Parse the dump header. Rows are read lazily later."""
    try:
        return Dump.from_file(path)
    except OSError as e:
        raise DumpIOError("open", path, e) from e


def dump_columns(path: str) -> list[str]:
    """Column names declared by the dump's CREATE TABLE statement."""
    return list(open_dump(path).col_names)


def _index(columns: Sequence[str], name: str, path: str) -> int:
    try:
        return columns.index(name)
    except ValueError:
        raise DumpSchemaError(f"{path} has no column {name!r}") from None


def _optional_index(columns: Sequence[str], name: str) -> Optional[int]:
    return columns.index(name) if name in columns else None


def _value(row: Sequence[Any], idx: Optional[int]) -> Any:
    """Field at idx, or None for an absent column, SQL NULL or an empty field.

    mwsql decodes an unquoted NULL to an empty field. No title or id is
    empty, so both read as None. A quoted 'NULL' stays the string "NULL".
    """
    if idx is None:
        return None
    value = row[idx]
    if value is None or value == "":
        return None
    return value


def _rows(dump: Dump, path: str) -> Iterator[list]:
    count = 0
    for row in dump.rows():
        count += 1
        if count % PROGRESS_EVERY == 0:
            logger.debug("%s: %s rows", path, f"{count:,}")
        yield row
    logger.debug("%s: finished after %s rows", path, f"{count:,}")


def read_pages(path: str) -> Iterator[Page]:
    """Yield every row of a page dump. Each call starts a fresh pass."""
    dump = open_dump(path)
    columns = list(dump.col_names)
    id_idx = _index(columns, "page_id", path)
    ns_idx = _index(columns, "page_namespace", path)
    title_idx = _index(columns, "page_title", path)

    def records() -> Iterator[Page]:
        for row in _rows(dump, path):
            yield Page(id=row[id_idx], namespace=row[ns_idx], title=row[title_idx])

    return records()


def read_template_links(path: str) -> Iterator[TemplateLink]:
    """Yield every row of a templatelinks dump, in either schema."""
    dump = open_dump(path)
    columns = list(dump.col_names)
    from_idx = _index(columns, "tl_from", path)
    ns_idx = _optional_index(columns, "tl_namespace")
    title_idx = _optional_index(columns, "tl_title")
    target_idx = _optional_index(columns, "tl_target_id")
    if target_idx is None and (ns_idx is None or title_idx is None):
        raise DumpSchemaError(
            f"{path} has neither tl_target_id nor tl_namespace/tl_title columns"
        )

    def records() -> Iterator[TemplateLink]:
        for row in _rows(dump, path):
            yield TemplateLink(
                source_id=row[from_idx],
                namespace=_value(row, ns_idx),
                title=_value(row, title_idx),
                target_id=_value(row, target_idx),
            )

    return records()


def read_link_targets(path: str) -> Iterator[LinkTarget]:
    """Yield every row of a linktarget dump."""
    dump = open_dump(path)
    columns = list(dump.col_names)
    id_idx = _index(columns, "lt_id", path)
    ns_idx = _index(columns, "lt_namespace", path)
    title_idx = _index(columns, "lt_title", path)

    def records() -> Iterator[LinkTarget]:
        for row in _rows(dump, path):
            yield LinkTarget(id=row[id_idx], namespace=row[ns_idx], title=row[title_idx])

    return records()
