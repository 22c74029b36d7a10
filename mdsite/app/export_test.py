"""Unit tests for export.py module."""

import pathlib
import unittest

import fastapi
import fastapi.responses

from mdsite.app import engine, engine_test, export, main


class TestMakePath(unittest.TestCase):
    """Tests for mapping routes to output files."""

    def test_paths(self) -> None:
        """Routes map to files under the output directory."""
        out = pathlib.Path('dist')
        cases = {
            '/': out / 'index.html',
            '/404/': out / '404.html',
            '/CNAME': out / 'CNAME',
            '/styles.css': out / 'styles.css',
            '/sitemap.xml': out / 'sitemap.xml',
            '/sitemap/': out / 'sitemap' / 'index.html',
            '/go1/': out / 'go1' / 'index.html',
            '/category/golang/': out / 'category' / 'golang' / 'index.html',
            '/media/img/a.webp': out / 'media' / 'img' / 'a.webp',
        }
        for url, expected in cases.items():
            with self.subTest(url=url):
                self.assertEqual(export.make_path(out, url), expected)


class TestExport(engine_test.SiteDirTestCase):
    """Tests for collecting and exporting routes."""

    def setUp(self) -> None:
        super().setUp()
        self.write_post('go1')
        self.write_post('tomatoes', category='Gardening', pubdate='2024-02-01')
        (self.paths.media / 'go1.webp').write_bytes(b'RIFF')
        (self.paths.media / 'img').mkdir()
        (self.paths.media / 'img' / 'b.webp').write_bytes(b'RIFF')
        (self.paths.media / '.gitkeep').write_bytes(b'')
        self.engine = engine.Engine(self.paths)
        self.snapshot = self.engine.load()

    def test_collect_urls(self) -> None:
        """Fixed routes, media, entries and categories are all listed."""
        urls = export.collect_urls(self.snapshot, self.paths.media)
        self.assertEqual(urls[: len(export.STATIC_ROUTES)], export.STATIC_ROUTES)
        self.assertIn('/media/go1.webp', urls)
        self.assertIn('/media/img/b.webp', urls)
        self.assertNotIn('/media/.gitkeep', urls)
        self.assertIn('/go1/', urls)
        self.assertIn('/tomatoes/', urls)
        self.assertIn('/category/golang/', urls)
        self.assertIn('/category/gardening/', urls)

    def test_collect_urls_without_media(self) -> None:
        """A missing media directory contributes no routes."""
        urls = export.collect_urls(self.snapshot, self.paths.media / 'missing')
        self.assertFalse(any(url.startswith('/media/') for url in urls))

    def test_export(self) -> None:
        """Every route is written to the output directory."""
        out = self.paths.export
        (out / 'stale').mkdir(parents=True)
        exporter = export.Exporter(
            main.create_site_app(self.engine),
            export.collect_urls(self.snapshot, self.paths.media),
            out,
        )
        exporter.export()

        self.assertFalse((out / 'stale').exists())
        self.assertTrue((out / export.STAMP_FILE).is_file())
        self.assertIn('<html', (out / 'index.html').read_text().lower())
        self.assertIn('Page Not Found', (out / '404.html').read_text())
        self.assertEqual((out / 'CNAME').read_text(), 'test.example')
        self.assertTrue((out / 'styles.css').is_file())
        self.assertTrue((out / 'sitemap.xml').is_file())
        self.assertTrue((out / 'sitemap' / 'index.html').is_file())
        self.assertEqual((out / 'media' / 'img' / 'b.webp').read_bytes(), b'RIFF')
        self.assertIn('Body.', (out / 'go1' / 'index.html').read_text())
        self.assertTrue((out / 'category' / 'gardening' / 'index.html').is_file())

    def test_export_fails_on_non_200(self) -> None:
        """A route that does not answer 200 aborts the export."""
        exporter = export.Exporter(
            main.create_site_app(self.engine), ['/', '/missing/'], self.paths.export
        )
        with self.assertRaises(export.ExportError) as ctx:
            exporter.export()
        self.assertIn('/missing/', str(ctx.exception))
        self.assertIn('404', str(ctx.exception))

    def test_redirects_are_not_followed(self) -> None:
        """Redirects count as failures."""
        app = fastapi.FastAPI()

        @app.get('/old/')
        def old() -> fastapi.responses.RedirectResponse:  # pyright: ignore
            return fastapi.responses.RedirectResponse('/new/')

        exporter = export.Exporter(app, ['/old/'], self.paths.export)
        with self.assertRaises(export.ExportError):
            exporter.export()


if __name__ == '__main__':
    unittest.main()
