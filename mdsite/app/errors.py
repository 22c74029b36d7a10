"""Build-time errors raised while processing content and building the store.

Every ContentError aborts the whole processing/indexing pass. None of them
are shown to readers; they are reported to the operator.
"""


class ContentError(ValueError):
    """Base class for errors that invalidate a content build."""


class MissingFieldError(ContentError):
    """A required front matter key is absent."""

    def __init__(self, key: str, label: str) -> None:
        self.key = key
        self.label = label
        super().__init__(f'{key} is required [{label}]')


class InvalidDateError(ContentError):
    """A date field is present but is not a calendar date."""

    def __init__(self, key: str, label: str, raw: object) -> None:
        self.key = key
        self.label = label
        self.raw = raw
        super().__init__(f'{key} is not a valid date: {raw!r} [{label}]')


class FieldTypeError(ContentError):
    """A front matter value has the wrong type."""

    def __init__(self, key: str, label: str, expected: type, value: object) -> None:
        self.key = key
        self.label = label
        self.expected = expected
        self.value = value
        super().__init__(
            f'{key} must be {expected.__name__}, got {type(value).__name__} [{label}]'
        )


class SlugCollisionError(ContentError):
    """Two source files produced the same entry slug."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f'post collision [{slug}]')


class CategoryCollisionError(ContentError):
    """Two different category titles slugify to the same slug."""

    def __init__(self, title1: str, title2: str) -> None:
        self.title1 = title1
        self.title2 = title2
        super().__init__(f'category collision [{title1}] and [{title2}]')


class SectionNotFoundError(ContentError):
    """A homepage section slug matches no category or pseudo-category."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f'cannot find section [{slug}]')


class RenderError(ContentError):
    """A source file is not UTF-8 or its front matter cannot be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f'cannot parse [{path}]: {reason}')


class ConfigError(ValueError):
    """The site config file is unreadable or invalid."""
