"""Site configuration loaded from a JSON file and validated with pydantic."""

import pathlib
from collections.abc import Mapping
from typing import Literal

import pydantic

from . import errors, models, store

META_IMAGE_URL = '/media/meta-img.webp'
SIMPLE_SUFFIX = '-simple'
SIMPLE_SECONDARY = '#0f172a'  # slate-900


class Theme(pydantic.BaseModel):
    """A colour profile for the site."""

    model_config = pydantic.ConfigDict(frozen=True)

    primary: str
    secondary: str
    link: str


DEFAULT_THEME = Theme(primary='#4338ca', secondary='#0f172a', link='#1d4ed8')

THEMES: Mapping[str, Theme] = {
    'purple': Theme(primary='#4f46e5', secondary='#4338ca', link='#2563eb'),
    'green': Theme(primary='#0f766e', secondary='#0f766e', link='#0369a1'),
    'pink': Theme(primary='#db2777', secondary='#be185d', link='#4f46e5'),
    'blue': Theme(primary='#0284c7', secondary='#0284c7', link='#2563eb'),
    'red': Theme(primary='#b91c1c', secondary='#be123c', link='#4f46e5'),
    'black': Theme(primary='#0f172a', secondary='#0f172a', link='#2563eb'),
}


class Link(pydantic.BaseModel):
    """An anchor link for the navbar or footer."""

    text: str
    href: str


class Site(pydantic.BaseModel):
    """Site-wide settings. The last four fields are derived on load."""

    name: str
    host: str
    tagline: str = ''
    description: str = ''
    theme: str = ''
    display: Literal['grid', 'list'] = 'grid'

    title: str = ''
    url: str = ''
    email: str = ''
    image: models.Image = models.Image()


class SiteConfig(pydantic.BaseModel):
    """The whole config file plus runtime settings."""

    model_config = pydantic.ConfigDict(populate_by_name=True)

    site: Site
    homepage: list[str] | None = None
    navbar_links: list[Link] = pydantic.Field(
        default_factory=list, alias='navbarLinks'
    )
    footer_links: list[Link] = pydantic.Field(
        default_factory=list, alias='footerLinks'
    )
    repository: str = ''
    limits: store.Limits = pydantic.Field(default_factory=store.Limits)

    resolved_theme: Theme = DEFAULT_THEME
    debug: bool = False
    listen_addr: str = ':4000'

    @property
    def homepage_sections(self) -> list[str]:
        if self.homepage is None:
            return [models.SECTION_LATEST]
        return self.homepage


def resolve_theme(name: str, themes: Mapping[str, Theme] = THEMES) -> Theme:
    """Look up a theme by name.

    ``<name>-simple`` selects the named theme with a plain secondary colour.
    An empty name selects the default theme.
    """
    if not name:
        return DEFAULT_THEME

    is_simple = name.endswith(SIMPLE_SUFFIX)
    if is_simple:
        name = name[: -len(SIMPLE_SUFFIX)]

    theme = themes.get(name)
    if theme is None:
        raise errors.ConfigError(f'could not load theme [{name}]')
    if is_simple:
        theme = theme.model_copy(update={'secondary': SIMPLE_SECONDARY})
    return theme


def load_config(
    data: bytes | str,
    debug: bool = False,
    listen_addr: str = ':4000',
    themes: Mapping[str, Theme] = THEMES,
) -> SiteConfig:
    """Parse config JSON and fill in the derived site fields.

    In debug mode the host points at the local server.
    """
    try:
        config = SiteConfig.model_validate_json(data)
    except pydantic.ValidationError as e:
        raise errors.ConfigError(f'invalid config: {e}') from e

    site = config.site
    site.url = f'https://{site.host}'
    site.email = f'admin@{site.host}'
    site.title = f'{site.name} - {site.tagline}'
    site.image = models.Image(
        url=META_IMAGE_URL,
        alt=site.title,
        type=models.IMAGE_TYPE,
        width=models.IMAGE_WIDTH,
        height=models.IMAGE_HEIGHT,
    )

    if debug:
        site.host = f'localhost{listen_addr}'
        site.url = f'http://{site.host}'
        site.email = f'admin@{site.host}'

    config.resolved_theme = resolve_theme(site.theme, themes)
    config.debug = debug
    config.listen_addr = listen_addr
    return config


def read_config(
    path: pathlib.Path | str,
    debug: bool = False,
    listen_addr: str = ':4000',
    themes: Mapping[str, Theme] = THEMES,
) -> SiteConfig:
    """Read and load a config file."""
    try:
        data = pathlib.Path(path).read_bytes()
    except OSError as e:
        raise errors.ConfigError(f'read config: {e}') from e
    return load_config(data, debug=debug, listen_addr=listen_addr, themes=themes)
