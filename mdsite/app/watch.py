"""Polls the source files and rebuilds the site when they change."""

import logging
import pathlib
import threading

from . import engine

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0

Fingerprint = frozenset[tuple[str, int, int]]


def fingerprint(paths: engine.Paths) -> Fingerprint:
    """Path, mtime and size of the config file and every markdown source."""
    files: list[pathlib.Path] = [paths.config]
    if paths.posts.is_dir():
        files.extend(paths.posts.glob('**/*.md'))

    stats: set[tuple[str, int, int]] = set()
    for path in files:
        try:
            stat = path.stat()
        except FileNotFoundError:
            continue
        stats.add((str(path), stat.st_mtime_ns, stat.st_size))
    return frozenset(stats)


class Watcher:
    """Background thread that calls ``engine.reload()`` after source changes."""

    def __init__(
        self, site_engine: engine.Engine, interval: float = DEFAULT_INTERVAL
    ) -> None:
        self.engine = site_engine
        self.interval = interval
        self._last = fingerprint(site_engine.paths)
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def check(self) -> bool:
        """Poll once. Returns True if a change was seen and a reload attempted."""
        current = fingerprint(self.engine.paths)
        if current == self._last:
            return False
        self._last = current
        logger.info('Source change detected, rebuilding')
        self.engine.reload()
        return True

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            try:
                self.check()
            except Exception:
                logger.exception('Watch poll failed')

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run, name='mdsite-watch', daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
