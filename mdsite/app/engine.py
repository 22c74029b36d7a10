"""Builds site snapshots and publishes them for concurrent readers.

A rebuild always happens off to the side: config, content and indexes are
built into a new Snapshot and only then swapped in. Readers take the current
reference once per request and never lock.
"""

import dataclasses
import logging
import pathlib
import threading
from collections.abc import Mapping

from . import config, errors, models, processor, store

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Paths:
    """Filesystem locations of a site project."""

    config: pathlib.Path
    posts: pathlib.Path
    media: pathlib.Path
    export: pathlib.Path

    @classmethod
    def from_strings(
        cls, config_path: str, posts: str, media: str, export: str
    ) -> 'Paths':
        return cls(
            config=pathlib.Path(config_path),
            posts=pathlib.Path(posts),
            media=pathlib.Path(media),
            export=pathlib.Path(export),
        )


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """One fully indexed, immutable build of the site."""

    config: config.SiteConfig
    store: store.Store
    homepage: tuple[models.Section, ...]


class Engine:
    """Owns the published snapshot and rebuilds it on demand."""

    def __init__(
        self,
        paths: Paths,
        debug: bool = False,
        listen_addr: str = ':4000',
        themes: Mapping[str, config.Theme] = config.THEMES,
        content_processor: processor.Processor | None = None,
    ) -> None:
        self.paths = paths
        self.debug = debug
        self.listen_addr = listen_addr
        self.themes = themes
        self.processor = content_processor or processor.Processor()
        self._snapshot: Snapshot | None = None
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> Snapshot:
        """The currently published snapshot."""
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError('site has not been loaded')
        return snapshot

    def build(self) -> Snapshot:
        """Build a new snapshot without publishing it.

        Raises ConfigError or ContentError if anything is invalid.
        """
        site_config = config.read_config(
            self.paths.config,
            debug=self.debug,
            listen_addr=self.listen_addr,
            themes=self.themes,
        )
        sources = processor.discover_sources(self.paths.posts)
        result = self.processor.process(sources)
        content = store.build_store(
            result.entries_by_slug, result.categories_by_slug, site_config.limits
        )
        homepage = content.homepage(site_config.homepage_sections)
        return Snapshot(config=site_config, store=content, homepage=homepage)

    def publish(self, snapshot: Snapshot) -> None:
        with self._lock:
            self._snapshot = snapshot

    def load(self) -> Snapshot:
        """Build and publish a snapshot, raising on failure."""
        snapshot = self.build()
        self.publish(snapshot)
        return snapshot

    def reload(self) -> bool:
        """Rebuild and publish, keeping the current snapshot on failure."""
        try:
            snapshot = self.build()
        except (errors.ConfigError, errors.ContentError, OSError):
            logger.exception('Rebuild failed, keeping the previous snapshot')
            return False
        self.publish(snapshot)
        logger.info('Published a new snapshot')
        return True
