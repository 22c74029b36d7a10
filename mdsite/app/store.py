"""Indexed, read-only view over one processed catalog.

A Store is built once from the processor's maps and never modified after
``build_store`` returns, so it can be shared between request threads without
locking. Every list it hands out is a tuple over the same Entry objects.
"""

import logging
import types
from collections.abc import Iterable, Mapping

import pydantic

from . import errors, models

logger = logging.getLogger(__name__)

LATEST_TITLE = 'Latest Posts'
FEATURED_TITLE = 'Featured Posts'


class Limits(pydantic.BaseModel):
    """Cutoffs for the derived entry lists."""

    latest: int = pydantic.Field(default=9, ge=0)
    latest_small: int = pydantic.Field(default=4, ge=0)
    featured: int = pydantic.Field(default=3, ge=0)
    # A category must have more than this many posts before related posts
    # are shown, and this many are shown.
    related: int = pydantic.Field(default=6, ge=1)


class Store:
    """Entries and categories plus every index the site queries."""

    def __init__(
        self,
        entries_by_slug: Mapping[str, models.Entry],
        categories_by_slug: Mapping[str, models.Category],
        limits: Limits | None = None,
    ) -> None:
        self.limits = limits or Limits()
        self._entries_by_slug = dict(entries_by_slug)
        self._categories_by_slug = dict(categories_by_slug)

        posts: list[models.Entry] = []
        pages: list[models.Entry] = []
        for entry in self._entries_by_slug.values():
            if entry.is_blog:
                posts.append(entry)
            else:
                pages.append(entry)

        # sorted() is stable with reverse=True, so equal timestamps keep
        # their input order.
        posts = sorted(posts, key=lambda e: e.latest_ts, reverse=True)

        by_category: dict[str, list[models.Entry]] = {}
        for entry in posts:
            if entry.category.is_empty:
                continue
            category_posts = by_category.setdefault(entry.category.slug, [])
            category_posts.append(entry)
            entry.category_index = len(category_posts) - 1

        self._posts = tuple(posts)
        self._pages = tuple(pages)
        self._posts_by_category = {
            slug: tuple(entries) for slug, entries in by_category.items()
        }
        self._latest = self._posts[: self.limits.latest]
        self._latest_small = self._latest[: self.limits.latest_small]
        self._featured = tuple(e for e in self._posts if e.is_featured)[
            : self.limits.featured
        ]
        self._categories = tuple(
            sorted(self._categories_by_slug.values(), key=lambda c: (c.title, c.slug))
        )
        self._sections = self._build_sections()

    def _build_sections(self) -> Mapping[str, models.Section]:
        sections: dict[str, models.Section] = {}
        for slug, entries in self._posts_by_category.items():
            category = self._categories_by_slug.get(slug, entries[0].category)
            sections[slug] = models.Section(category=category, entries=entries)

        sections[models.SECTION_LATEST] = models.Section(
            category=models.Category(title=LATEST_TITLE), entries=self._latest
        )
        sections[models.SECTION_FEATURED] = models.Section(
            category=models.Category(title=FEATURED_TITLE), entries=self._featured
        )
        sections[models.SECTION_ALL] = models.Section(
            category=models.Category(), entries=self._posts
        )
        return types.MappingProxyType(sections)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def all_posts(self) -> tuple[models.Entry, ...]:
        """Blog entries, newest first."""
        return self._posts

    def all_pages(self) -> tuple[models.Entry, ...]:
        return self._pages

    def all_categories(self) -> tuple[models.Category, ...]:
        return self._categories

    def latest(self) -> tuple[models.Entry, ...]:
        return self._latest

    def latest_small(self) -> tuple[models.Entry, ...]:
        """The short latest list shown beside a single entry."""
        return self._latest_small

    def featured(self) -> tuple[models.Entry, ...]:
        return self._featured

    def by_slug(self, slug: str) -> models.Entry | None:
        return self._entries_by_slug.get(slug)

    def category(self, slug: str) -> models.Category | None:
        return self._categories_by_slug.get(slug)

    def by_category(
        self, category: models.Category | str
    ) -> tuple[models.Entry, ...] | None:
        """Posts of a category in global order, or None for an unknown category."""
        if isinstance(category, models.Category):
            known = self._categories_by_slug.get(category.slug)
            if known != category:
                return None
            category = category.slug
        return self._posts_by_category.get(category)

    def related(self, entry: models.Entry) -> tuple[models.Entry, ...]:
        """The next posts after entry in its category, wrapping around.

        Empty for pages and for categories with no more posts than the
        related limit.
        """
        if entry.is_page:
            return ()

        category_posts = self._posts_by_category.get(entry.category.slug)
        if category_posts is None:
            return ()

        limit = self.limits.related
        count = len(category_posts)
        if count <= limit:
            return ()

        start = entry.category_index + 1
        return tuple(category_posts[(start + i) % count] for i in range(limit))

    def sections(self) -> Mapping[str, models.Section]:
        return self._sections

    def homepage(self, section_slugs: Iterable[str]) -> tuple[models.Section, ...]:
        """Resolve configured homepage slugs to sections, in order."""
        resolved: list[models.Section] = []
        for slug in section_slugs:
            section = self._sections.get(slug)
            if section is None:
                raise errors.SectionNotFoundError(slug)
            resolved.append(section)
        return tuple(resolved)


def build_store(
    entries_by_slug: Mapping[str, models.Entry],
    categories_by_slug: Mapping[str, models.Category],
    limits: Limits | None = None,
) -> Store:
    """Build every derived index over the processed maps."""
    store = Store(entries_by_slug, categories_by_slug, limits)
    logger.info(
        'Indexed %d posts, %d pages, %d categories',
        len(store.all_posts()),
        len(store.all_pages()),
        len(store.all_categories()),
    )
    return store
