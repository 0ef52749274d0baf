"""Title helpers shared by the transform and load stages."""

from collections.abc import Set

TRACKING_TEMPLATE = "tracking"
SUBPAGE_SEPARATOR = "/"


def is_tracking_template(title: str) -> bool:
    """Check if title is Template:tracking or one of its subpages."""
    return title == TRACKING_TEMPLATE or title.startswith(
        TRACKING_TEMPLATE + SUBPAGE_SEPARATOR
    )


def is_excluded(title: str, template_titles: Set[str]) -> bool:
    """Check if a transcluded title must be left out of the report."""
    return title in template_titles or is_tracking_template(title)


def collation_key(title: str) -> str:
    """Case-insensitive, accent-sensitive key used for counting and ordering."""
    return title.casefold()


def display_title(title: str) -> str:
    """Convert an internal title (underscores) to its display form (spaces)."""
    return title.replace("_", " ")
