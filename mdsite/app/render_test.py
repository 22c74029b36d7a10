"""Unit tests for render.py module."""

import datetime
import pathlib
import tempfile
import unittest

from mdsite.app import render

SOURCE = b"""---
title: 'Test Post'
slug: test-post
pubdate: 2025-01-01
featured: true
---

# Test Post

Some test content here.

```python
def hello():
    print("Hello, world!")
```

| Column 1 | Column 2 |
|----------|----------|
| A        | B        |
"""


class TestRenderMarkdown(unittest.TestCase):
    """Tests for render_markdown."""

    def test_metadata_parsed(self) -> None:
        """Front matter is returned as a typed mapping."""
        _, meta = render.render_markdown(SOURCE)
        self.assertEqual(meta['title'], 'Test Post')
        self.assertEqual(meta['slug'], 'test-post')
        self.assertEqual(meta['pubdate'], datetime.date(2025, 1, 1))
        self.assertIs(meta['featured'], True)

    def test_body_rendered(self) -> None:
        """The body is converted to HTML with headings, code and tables."""
        html, _ = render.render_markdown(SOURCE)
        self.assertIn('<h1', html)
        self.assertIn('id="test-post"', html)
        self.assertIn('<table>', html)
        self.assertIn('hello', html)
        self.assertNotIn('title:', html)

    def test_no_front_matter(self) -> None:
        """A file without front matter has empty metadata."""
        html, meta = render.render_markdown(b'Just text')
        self.assertEqual(meta, {})
        self.assertIn('Just text', html)


class TestReadFile(unittest.TestCase):
    """Tests for read_file."""

    def test_reads_bytes(self) -> None:
        """read_file returns the raw bytes of a file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / 'post.md'
            path.write_bytes(SOURCE)
            self.assertEqual(render.read_file(path), SOURCE)
            self.assertEqual(render.read_file(str(path)), SOURCE)


class TestSlugify(unittest.TestCase):
    """Tests for slugify."""

    def test_lowercases_and_hyphenates(self) -> None:
        """Spaces become hyphens and letters are lowercased."""
        self.assertEqual(render.slugify('Gardening Tips'), 'gardening-tips')

    def test_case_variants_collide(self) -> None:
        """Titles differing only in case share a slug."""
        self.assertEqual(
            render.slugify('Gardening Tips'), render.slugify('GarDENing TIPS')
        )

    def test_trims_whitespace(self) -> None:
        """Leading and trailing whitespace is dropped."""
        self.assertEqual(render.slugify('  Golang '), 'golang')


if __name__ == '__main__':
    unittest.main()
