"""Shared fixtures: small SQL dumps laid out like the MediaWiki ones."""

import pytest

DUMP_COLUMNS = {
    "page": (
        "page",
        [
            ("page_id", "int(8) unsigned NOT NULL AUTO_INCREMENT"),
            ("page_namespace", "int(11) NOT NULL DEFAULT 0"),
            ("page_title", "varbinary(255) NOT NULL DEFAULT ''"),
            ("page_is_redirect", "tinyint(1) unsigned NOT NULL DEFAULT 0"),
        ],
        "page_id",
    ),
    "templatelinks": (
        "templatelinks",
        [
            ("tl_from", "int(8) unsigned NOT NULL DEFAULT 0"),
            ("tl_target_id", "bigint(20) unsigned NOT NULL"),
            ("tl_from_namespace", "int(11) NOT NULL DEFAULT 0"),
        ],
        "tl_from",
    ),
    "templatelinks_direct": (
        "templatelinks",
        [
            ("tl_from", "int(8) unsigned NOT NULL DEFAULT 0"),
            ("tl_namespace", "int(11) NOT NULL DEFAULT 0"),
            ("tl_title", "varbinary(255) NOT NULL DEFAULT ''"),
            ("tl_from_namespace", "int(11) NOT NULL DEFAULT 0"),
        ],
        "tl_from",
    ),
    # Transition-era layout carrying both the title columns and tl_target_id
    "templatelinks_both": (
        "templatelinks",
        [
            ("tl_from", "int(8) unsigned NOT NULL DEFAULT 0"),
            ("tl_namespace", "int(11) NOT NULL DEFAULT 0"),
            ("tl_title", "varbinary(255) DEFAULT NULL"),
            ("tl_from_namespace", "int(11) NOT NULL DEFAULT 0"),
            ("tl_target_id", "bigint(20) unsigned DEFAULT NULL"),
        ],
        "tl_from",
    ),
    "linktarget": (
        "linktarget",
        [
            ("lt_id", "bigint(20) unsigned NOT NULL AUTO_INCREMENT"),
            ("lt_namespace", "int(11) NOT NULL"),
            ("lt_title", "varbinary(255) NOT NULL"),
        ],
        "lt_id",
    ),
}


def _sql_value(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, int):
        return str(value)
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def render_dump(kind: str, rows: list[tuple]) -> str:
    table, columns, primary_key = DUMP_COLUMNS[kind]
    lines = [
        "-- MySQL dump 10.19  Distrib 10.3.38-MariaDB, for debian-linux-gnu (x86_64)",
        "--",
        "-- Host: 10.64.0.1    Database: enwiktionary",
        "-- ------------------------------------------------------",
        "-- Server version\t10.4.26-MariaDB-log",
        "",
        f"DROP TABLE IF EXISTS `{table}`;",
        f"CREATE TABLE `{table}` (",
    ]
    lines += [f"  `{name}` {dtype}," for name, dtype in columns]
    lines += [
        f"  PRIMARY KEY (`{primary_key}`)",
        ") ENGINE=InnoDB DEFAULT CHARSET=binary;",
        "",
        f"LOCK TABLES `{table}` WRITE;",
    ]
    if rows:
        values = ",".join(
            "(" + ",".join(_sql_value(v) for v in row) + ")" for row in rows
        )
        lines.append(f"INSERT INTO `{table}` VALUES {values};")
    lines += ["UNLOCK TABLES;", ""]
    return "\n".join(lines)


@pytest.fixture
def make_dump(tmp_path):
    """Write a dump of the given kind and return its path as a string.

    Rows list every column of the kind in declaration order.
    """

    def _make(kind: str, rows: list[tuple], name: str | None = None) -> str:
        path = tmp_path / (name or f"{kind}.sql")
        path.write_text(render_dump(kind, rows), encoding="utf-8")
        return str(path)

    return _make
