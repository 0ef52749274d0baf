"""CLI entry point for the wanted-templates pipeline."""

import argparse
import logging
import sys

from .config import PipelineConfig
from .extractor import DumpIOError, DumpSchemaError
from .pipeline import run_pipeline

logger = logging.getLogger("wanted_templates")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wanted-templates",
        description="List templates transcluded by main and reconstruction pages that do not exist, most wanted first.",
    )
    parser.add_argument(
        "-p",
        "--page",
        default="page.sql",
        help="Path of page.sql (default: page.sql)",
    )
    parser.add_argument(
        "-t",
        "--template-links",
        default="templatelinks.sql",
        help="Path of templatelinks.sql (default: templatelinks.sql)",
    )
    parser.add_argument(
        "-l",
        "--link-target",
        default=None,
        help="Path of linktarget.sql. Selects the link-target schema; "
        "without it the schema is detected from templatelinks.sql and "
        "linktarget.sql is used when needed",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the report to this file instead of standard output",
    )
    parser.add_argument(
        "--db",
        default=None,
        help="Also store the report in this DuckDB database",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the pipeline from the command line."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    config = PipelineConfig(
        page_path=args.page,
        template_links_path=args.template_links,
        link_target_path=args.link_target,
        output_path=args.output,
        db_path=args.db,
    )

    try:
        report = run_pipeline(config)
    except (DumpIOError, DumpSchemaError) as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info(
        "%s schema: %d pages (%d in scope, %d templates), %d links (%d qualifying), %d wanted templates in %.2fs",
        report.schema,
        report.pages_read,
        report.entry_pages,
        report.existing_templates,
        report.links_read,
        report.qualifying_links,
        report.wanted_templates,
        report.duration_seconds,
    )
    sys.exit(0)


if __name__ == "__main__":
    main()
