"""Orchestrator tying Extract, Transform and Load together."""

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Optional, TextIO

from .config import DEFAULT_LINK_TARGET_PATH, PipelineConfig
from .extractor import (
    dump_columns,
    ensure_mappable,
    read_link_targets,
    read_pages,
    read_template_links,
)
from .loader import save_to_db, write_report
from .models import WantedTemplate
from .transformer import (
    DirectResolver,
    IndirectResolver,
    Resolver,
    aggregate,
    classify_pages,
    rank,
    to_wanted_templates,
)

logger = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    """Summary report from a pipeline run."""

    schema: str
    pages_read: int
    entry_pages: int
    existing_templates: int
    link_targets_kept: int
    links_read: int
    qualifying_links: int
    wanted_templates: int
    duration_seconds: float
    pages_duration_seconds: float
    links_duration_seconds: float
    wanted: list[WantedTemplate] = field(default_factory=list, repr=False)


def link_target_path_for(config: PipelineConfig) -> Optional[str]:
    """Path of the linktarget dump to use, or None for the direct schema.

    An explicit path always selects the indirect schema. Otherwise the
    templatelinks header decides: tl_target_id without tl_title means the
    titles live in linktarget.sql.
    """
    if config.link_target_path is not None:
        return config.link_target_path
    columns = dump_columns(config.template_links_path)
    if "tl_target_id" in columns and "tl_title" not in columns:
        return DEFAULT_LINK_TARGET_PATH
    return None


def run_pipeline(config: PipelineConfig, stream: Optional[TextIO] = None) -> PipelineReport:
    """Run the full pipeline: read dumps, rank wanted templates, write the report.

    Nothing is written until every dump has been read, so an I/O failure
    leaves no partial output.
    """
    start = time.perf_counter()

    ensure_mappable(config.page_path)
    ensure_mappable(config.template_links_path)
    link_target_path = link_target_path_for(config)
    if link_target_path is not None:
        ensure_mappable(link_target_path)

    logger.info(
        "Starting wanted-templates pipeline (%s schema)",
        "indirect" if link_target_path else "direct",
    )

    # Link passes read the finished page sets
    t0 = time.perf_counter()
    scope = classify_pages(read_pages(config.page_path))
    pages_duration = time.perf_counter() - t0
    logger.info("Pages: done in %.2fs", pages_duration)

    t1 = time.perf_counter()
    resolver: Resolver
    if link_target_path is not None:
        indirect = IndirectResolver.from_link_targets(
            read_link_targets(link_target_path), scope
        )
        link_targets_kept = len(indirect.target_index)
        resolver = indirect
    else:
        resolver = DirectResolver(scope)
        link_targets_kept = 0
    counts = aggregate(resolver.resolve(read_template_links(config.template_links_path)))
    wanted = to_wanted_templates(rank(counts))
    links_duration = time.perf_counter() - t1
    logger.info(
        "Links: %d read, %d qualifying, %d wanted templates in %.2fs",
        resolver.links_read,
        counts.total(),
        len(wanted),
        links_duration,
    )

    # The database goes first so a failure there leaves no TSV behind
    if config.db_path:
        save_to_db(config.db_path, wanted)

    if config.output_path:
        with open(config.output_path, "w", encoding="utf-8") as out_file:
            write_report(wanted, out_file)
    else:
        write_report(wanted, stream or sys.stdout)

    total_duration = time.perf_counter() - start
    logger.info("Pipeline complete. Duration: %.2fs", total_duration)

    return PipelineReport(
        schema=resolver.schema,
        pages_read=scope.pages_read,
        entry_pages=len(scope.entry_ids),
        existing_templates=len(scope.template_titles),
        link_targets_kept=link_targets_kept,
        links_read=resolver.links_read,
        qualifying_links=counts.total(),
        wanted_templates=len(wanted),
        duration_seconds=total_duration,
        pages_duration_seconds=pages_duration,
        links_duration_seconds=links_duration,
        wanted=wanted,
    )
