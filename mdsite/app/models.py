"""Content model: entries, categories, lead images and homepage sections."""

import pydantic

# Image settings shared by every lead image on the site.
IMAGE_TYPE = 'webp'
IMAGE_WIDTH = '800'
IMAGE_HEIGHT = '450'

# Reserved section slugs for the homepage pseudo-categories.
SECTION_LATEST = '$latest'
SECTION_FEATURED = '$featured'
SECTION_ALL = '$all'


class Image(pydantic.BaseModel):
    """A lead image. An empty url means there is no image."""

    model_config = pydantic.ConfigDict(frozen=True)

    url: str = ''
    alt: str = ''
    type: str = ''
    width: str = ''
    height: str = ''

    @property
    def is_empty(self) -> bool:
        return self.url == ''


class Category(pydantic.BaseModel):
    """A content grouping. Two categories are equal iff slug and title match.

    The empty category (no slug) is attached to standalone pages.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    slug: str = ''
    title: str = ''

    @property
    def is_empty(self) -> bool:
        return self.slug == ''

    @property
    def route(self) -> str:
        """URL path of the category listing, e.g. ``/category/golang/``."""
        return f'/category/{self.slug}/'


class Entry(pydantic.BaseModel):
    """One processed content item: a blog post or a standalone page.

    Entries are shared by reference between every index of a store and must
    not be modified once indexed. ``category_index`` is written by the store
    while it builds the per-category lists.
    """

    is_page: bool = False
    is_blog: bool = True
    is_featured: bool = False
    show_lead: bool = True

    slug: str
    title: str
    heading: str
    description: str

    category: Category = Category()
    image: Image = Image()
    body: str = ''

    # Long-form display date ("January 2, 2006") and its UNIX timestamp.
    pubdate: str = ''
    pubdate_ts: int = 0
    updated: str = ''
    updated_ts: int = 0

    category_index: int = 0

    @property
    def latest_ts(self) -> int:
        """The most recent of the publish and update timestamps."""
        return max(self.updated_ts, self.pubdate_ts)

    @property
    def route(self) -> str:
        """URL path of the entry, e.g. ``/some-post/``."""
        return f'/{self.slug}/'


class Section(pydantic.BaseModel):
    """A named group of entries used to compose the homepage.

    For pseudo-sections (latest, featured, all) the category is not a real
    category and carries only a display title.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    category: Category
    entries: tuple[Entry, ...] = ()
