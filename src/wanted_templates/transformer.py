"""Join pages and template links into ranked wanted-template counts."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from .config import ENTRY_NAMESPACES, TEMPLATE_NAMESPACE
from .models import LinkTarget, Page, TemplateLink, WantedTemplate
from .utils import collation_key, display_title, is_excluded

logger = logging.getLogger(__name__)


@dataclass
class PageScope:
    """Sets derived from the page dump, read-only once built."""

    template_titles: set[str] = field(default_factory=set)
    entry_ids: set[int] = field(default_factory=set)
    pages_read: int = 0


def classify_pages(pages: Iterable[Page]) -> PageScope:
    """Split pages into existing template titles and in-scope source ids."""
    scope = PageScope()
    for page in pages:
        scope.pages_read += 1
        if page.namespace == TEMPLATE_NAMESPACE:
            scope.template_titles.add(page.title)
        elif page.namespace in ENTRY_NAMESPACES:
            scope.entry_ids.add(page.id)
    logger.info(
        "Classified %d pages: %d in scope, %d existing templates",
        scope.pages_read,
        len(scope.entry_ids),
        len(scope.template_titles),
    )
    return scope


class Resolver(Protocol):
    """Turns template links into the titles of wanted templates they transclude."""

    schema: str
    links_read: int

    def resolve(self, links: Iterable[TemplateLink]) -> Iterator[str]:
        ...


class DirectResolver:
    """For templatelinks dumps that carry tl_namespace and tl_title.

    Filtering happens per link.
    """

    schema = "direct"

    def __init__(self, scope: PageScope):
        self.scope = scope
        self.links_read = 0

    def resolve(self, links: Iterable[TemplateLink]) -> Iterator[str]:
        entry_ids = self.scope.entry_ids
        template_titles = self.scope.template_titles
        for link in links:
            self.links_read += 1
            if (
                link.namespace == TEMPLATE_NAMESPACE
                and link.title is not None
                and link.source_id in entry_ids
                and not is_excluded(link.title, template_titles)
            ):
                yield link.title


class IndirectResolver:
    """For templatelinks dumps that point at linktarget rows via tl_target_id.

    Existence and tracking filters run once per distinct target while the
    index is built, so resolving a link is two membership tests.
    """

    schema = "indirect"

    def __init__(self, scope: PageScope, target_index: dict[int, str]):
        self.scope = scope
        self.target_index = target_index
        self.links_read = 0

    @classmethod
    def from_link_targets(
        cls, link_targets: Iterable[LinkTarget], scope: PageScope
    ) -> "IndirectResolver":
        target_index: dict[int, str] = {}
        targets_read = 0
        for target in link_targets:
            targets_read += 1
            if target.namespace == TEMPLATE_NAMESPACE and not is_excluded(
                target.title, scope.template_titles
            ):
                target_index[target.id] = target.title
        logger.info(
            "Indexed %d of %d link targets as candidate wanted templates",
            len(target_index),
            targets_read,
        )
        return cls(scope, target_index)

    def resolve(self, links: Iterable[TemplateLink]) -> Iterator[str]:
        entry_ids = self.scope.entry_ids
        target_index = self.target_index
        for link in links:
            self.links_read += 1
            if link.source_id not in entry_ids or link.target_id is None:
                continue
            title = target_index.get(link.target_id)
            if title is not None:
                yield title


class WantedCounts:
    """Occurrence counts keyed by case-folded title.

    Each key remembers the code-point-smallest spelling seen, so the title
    shown for "foo_bar" / "Foo_Bar" does not depend on dump order.
    """

    def __init__(self):
        self._counts: dict[str, int] = {}
        self._titles: dict[str, str] = {}

    def add(self, title: str) -> None:
        key = collation_key(title)
        self._counts[key] = self._counts.get(key, 0) + 1
        seen = self._titles.get(key)
        if seen is None or title < seen:
            self._titles[key] = title

    def __len__(self) -> int:
        return len(self._counts)

    def __getitem__(self, title: str) -> int:
        return self._counts[collation_key(title)]

    def __contains__(self, title: str) -> bool:
        return collation_key(title) in self._counts

    def total(self) -> int:
        return sum(self._counts.values())

    def items(self) -> Iterator[tuple[str, int]]:
        for key, count in self._counts.items():
            yield self._titles[key], count


def aggregate(titles: Iterable[str]) -> WantedCounts:
    """Count qualifying transclusions per case-insensitive title."""
    counts = WantedCounts()
    for title in titles:
        counts.add(title)
    return counts


def _rank_key(item: tuple[str, int]) -> tuple[int, str, str]:
    title, count = item
    return -count, collation_key(title), title


def rank(counts: WantedCounts) -> list[tuple[str, int]]:
    """Order by count descending, then case-insensitive title, then raw title."""
    return sorted(counts.items(), key=_rank_key)


def to_wanted_templates(ranked: Iterable[tuple[str, int]]) -> list[WantedTemplate]:
    """Convert ranked (internal title, count) pairs into display rows."""
    return [
        WantedTemplate(title=display_title(title), count=count)
        for title, count in ranked
    ]
