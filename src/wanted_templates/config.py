"""Pipeline configuration with defaults, overridable via CLI."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PipelineConfig:
    """Configuration for the wanted-templates pipeline."""

    page_path: str = "page.sql"
    template_links_path: str = "templatelinks.sql"
    # None means "detect from the templatelinks header"
    link_target_path: Optional[str] = None
    output_path: Optional[str] = None
    db_path: Optional[str] = None


DEFAULT_LINK_TARGET_PATH = "linktarget.sql"

MAIN_NAMESPACE = 0
TEMPLATE_NAMESPACE = 10
RECONSTRUCTION_NAMESPACE = 118

ENTRY_NAMESPACES = frozenset({MAIN_NAMESPACE, RECONSTRUCTION_NAMESPACE})
