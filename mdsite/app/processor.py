"""Turns markdown source files into entries and categories.

The processor is all-or-nothing: every call to ``process`` starts from empty
maps and any error propagates before a result is returned, so a caller never
sees a partial catalog.
"""

import dataclasses
import logging
import pathlib
from collections.abc import Callable, Iterable
from typing import Any

import yaml

from . import errors, metadata, models, render

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = 'unknown post'

Renderer = Callable[[bytes], tuple[str, dict[str, Any]]]
Reader = Callable[[pathlib.Path | str], bytes]


@dataclasses.dataclass(frozen=True)
class ProcessResult:
    """The canonical maps produced by one processing pass."""

    entries_by_slug: dict[str, models.Entry]
    categories_by_slug: dict[str, models.Category]


def discover_sources(posts_dir: pathlib.Path | str) -> list[pathlib.Path]:
    """List markdown files under posts_dir, recursively, in sorted order."""
    return sorted(pathlib.Path(posts_dir).glob('**/*.md'))


class Processor:
    """Parses markdown sources into entries.

    The markdown renderer and file reader are injected so callers (and tests)
    can swap them out.
    """

    def __init__(
        self,
        render_fn: Renderer = render.render_markdown,
        read_fn: Reader = render.read_file,
        slugify_fn: Callable[[str], str] = render.slugify,
    ) -> None:
        self.render_fn = render_fn
        self.read_fn = read_fn
        self.slugify_fn = slugify_fn

    def process(self, paths: Iterable[pathlib.Path | str]) -> ProcessResult:
        """Process the files in the given order and return the collected maps."""
        entries_by_slug: dict[str, models.Entry] = {}
        categories_by_slug: dict[str, models.Category] = {}

        for path in paths:
            source = self.read_fn(path)
            try:
                entry = self.process_source(
                    source, entries_by_slug, categories_by_slug
                )
            except (UnicodeDecodeError, yaml.YAMLError) as e:
                raise errors.RenderError(str(path), str(e)) from e
            if entry is None:
                logger.debug('Skipped draft %s', path)
            else:
                logger.debug('Processed %s as [%s]', path, entry.slug)

        logger.info(
            'Processed %d entries, %d categories',
            len(entries_by_slug),
            len(categories_by_slug),
        )
        return ProcessResult(entries_by_slug, categories_by_slug)

    def process_source(
        self,
        source: bytes,
        entries_by_slug: dict[str, models.Entry],
        categories_by_slug: dict[str, models.Category],
    ) -> models.Entry | None:
        """Build one entry from a markdown source and register it.

        Returns None for drafts. New categories are added to
        categories_by_slug; the entry is added to entries_by_slug.
        """
        body, meta = self.render_fn(source)

        label = meta.get('slug', UNKNOWN_LABEL)
        m = metadata.MetadataExtractor(meta, str(label))

        if m.get_bool('draft', False):
            return None

        title = m.require_string('title')
        heading = m.require_string('heading')
        slug = m.require_string('slug')
        description = m.require_string('description')

        is_featured = m.get_bool('featured', False)
        is_page = m.get_bool('page', False)
        is_blog = not is_page

        if slug in entries_by_slug:
            raise errors.SlugCollisionError(slug)

        pubdate, pubdate_ts = '', 0
        updated, updated_ts = '', 0
        if is_blog:
            pubdate, pubdate_ts = m.require_date('pubdate')
            updated, updated_ts = m.get_date('updated')

        category = models.Category()
        if is_blog:
            category = self._resolve_category(
                m.require_string('category'), categories_by_slug
            )

        show_lead = not m.get_bool('hide_image', False)

        image = models.Image()
        if is_blog:
            image = models.Image(
                url=m.require_string('image_url'),
                alt=m.require_string('image_alt'),
                type=models.IMAGE_TYPE,
                width=models.IMAGE_WIDTH,
                height=models.IMAGE_HEIGHT,
            )

        entry = models.Entry(
            is_page=is_page,
            is_blog=is_blog,
            is_featured=is_featured,
            show_lead=show_lead,
            slug=slug,
            title=title,
            heading=heading,
            description=description,
            category=category,
            image=image,
            body=body,
            pubdate=pubdate,
            pubdate_ts=pubdate_ts,
            updated=updated,
            updated_ts=updated_ts,
        )
        entries_by_slug[slug] = entry
        return entry

    def _resolve_category(
        self, title: str, categories_by_slug: dict[str, models.Category]
    ) -> models.Category:
        """Return the registered category for title, registering it if new.

        Titles that differ only in a way the slug hides (for example case)
        would silently merge two categories, so they are rejected.
        """
        slug = self.slugify_fn(title)
        existing = categories_by_slug.get(slug)
        if existing is not None:
            if existing.title != title:
                raise errors.CategoryCollisionError(title, existing.title)
            return existing

        category = models.Category(slug=slug, title=title)
        categories_by_slug[slug] = category
        return category
