"""Markdown rendering, file reading and slug helpers used by the processor."""

import pathlib
from typing import Any

import frontmatter  # type: ignore[reportMissingTypeStubs]
import markdown

MARKDOWN_EXTENSIONS = ['fenced_code', 'codehilite', 'tables', 'toc', 'nl2br']
MARKDOWN_EXTENSION_CONFIGS: dict[str, dict[str, Any]] = {
    'codehilite': {'pygments_style': 'tango', 'noclasses': True},
}


def render_markdown(source: bytes) -> tuple[str, dict[str, Any]]:
    """Split front matter from the body and render the body to HTML.

    Returns the rendered HTML and the raw metadata mapping.
    """
    post = frontmatter.loads(source.decode('utf-8'))
    html = markdown.markdown(
        post.content,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
    )
    return html, dict(post.metadata)


def read_file(path: pathlib.Path | str) -> bytes:
    """Read a source file as raw bytes."""
    return pathlib.Path(path).read_bytes()


def slugify(text: str) -> str:
    """Trim and lowercase the text, then replace spaces with hyphens."""
    return text.strip().lower().replace(' ', '-')
