"""Exports the site as static files by recording each route's response."""

import datetime
import logging
import pathlib
import shutil

import fastapi
import fastapi.testclient

from . import engine

logger = logging.getLogger(__name__)

STATIC_ROUTES = [
    '/',
    '/styles.css',
    '/sitemap/',
    '/sitemap.xml',
    '/robots.txt',
    '/CNAME',
    '/404/',
]
STAMP_FILE = '.mdsite'
STAMP_FORMAT = '%a %b %d %H:%M:%S UTC %Y'


class ExportError(RuntimeError):
    """A route could not be exported."""


def collect_urls(snapshot: engine.Snapshot, media_dir: pathlib.Path) -> list[str]:
    """Every route of the site: fixed pages, media files, entries and categories."""
    urls = list(STATIC_ROUTES)

    if media_dir.is_dir():
        for path in sorted(media_dir.rglob('*')):
            relative = path.relative_to(media_dir)
            if path.is_file() and not any(p.startswith('.') for p in relative.parts):
                urls.append(f'/media/{relative.as_posix()}')

    content = snapshot.store
    urls.extend(entry.route for entry in content.all_posts())
    urls.extend(entry.route for entry in content.all_pages())
    urls.extend(category.route for category in content.all_categories())
    return urls


def make_path(output_path: pathlib.Path, url: str) -> pathlib.Path:
    """Output file for a route.

    ``/404/`` becomes ``404.html``, routes without an extension become
    ``<route>/index.html``, everything else is written as-is.
    """
    if url == '/404/':
        return output_path / '404.html'

    path = output_path / url.strip('/')
    if not path.suffix and url != '/CNAME':
        path = path / 'index.html'
    return path


class Exporter:
    """Writes the responses of the given routes under output_path."""

    def __init__(
        self, app: fastapi.FastAPI, urls: list[str], output_path: pathlib.Path
    ) -> None:
        self.app = app
        self.urls = urls
        self.output_path = output_path

    def export(self) -> None:
        if self.output_path.exists():
            shutil.rmtree(self.output_path)
        self.output_path.mkdir(parents=True)

        now = datetime.datetime.now(datetime.UTC)
        (self.output_path / STAMP_FILE).write_text(now.strftime(STAMP_FORMAT))

        with fastapi.testclient.TestClient(self.app) as client:
            for url in self.urls:
                self.export_page(client, url)

        logger.info('Exported %d routes to %s', len(self.urls), self.output_path)

    def export_page(self, client: fastapi.testclient.TestClient, url: str) -> None:
        response = client.get(url, follow_redirects=False)
        if response.status_code != 200:
            raise ExportError(
                f'expected URL {url} to return 200, but it returned '
                f'{response.status_code} instead'
            )

        path = make_path(self.output_path, url)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(response.content)
        logger.debug('Exported %s to %s', url, path)
