"""FastAPI application serving the site from the engine's current snapshot."""

import datetime
import logging
import pathlib
import traceback
from typing import Any

import fastapi
import fastapi.exception_handlers
import fastapi.responses
import fastapi.staticfiles
import jinja2
import starlette.exceptions

import common.app

from . import engine, middleware

logger = logging.getLogger(__name__)

APP_DIR = pathlib.Path(__file__).resolve().parent
TEMPLATES_DIR = APP_DIR / 'templates'

ROBOTS_TEMPLATE = 'robots.txt.jinja2'
SITEMAP_XML_TEMPLATE = 'sitemap.xml.jinja2'
STYLES_TEMPLATE = 'styles.css.jinja2'

LASTMOD_FORMAT = '%Y-%m-%dT00:00:00+00:00'
# Templates are named <name>.<format>.jinja2; only markup formats are escaped.
AUTOESCAPE_EXTENSIONS = ['html.jinja2', 'xml.jinja2']


def sitemap_urls(snapshot: engine.Snapshot) -> list[tuple[str, str]]:
    """Absolute URLs of every page with its lastmod date (empty if unknown)."""
    base = snapshot.config.site.url
    content = snapshot.store
    urls: list[tuple[str, str]] = [(f'{base}/', '')]
    for entry in content.all_posts():
        lastmod = ''
        if entry.latest_ts > 0:
            lastmod = datetime.datetime.fromtimestamp(
                entry.latest_ts, datetime.UTC
            ).strftime(LASTMOD_FORMAT)
        urls.append((f'{base}{entry.route}', lastmod))
    for entry in content.all_pages():
        urls.append((f'{base}{entry.route}', ''))
    for category in content.all_categories():
        urls.append((f'{base}{category.route}', ''))
    return urls


def create_site_app(site_engine: engine.Engine) -> fastapi.FastAPI:
    """Create the site app. Every request reads the snapshot published at that time."""
    app = common.app.create_app('Site')
    templates = common.app.make_templates(TEMPLATES_DIR)
    templates.env.autoescape = jinja2.select_autoescape(AUTOESCAPE_EXTENSIONS)

    app.add_middleware(
        middleware.CacheControlMiddleware, prefix='/media/', debug=site_engine.debug
    )
    app.add_middleware(middleware.SecurityHeadersMiddleware)

    def context(
        request: fastapi.Request, snapshot: engine.Snapshot, **extra: Any
    ) -> dict[str, Any]:
        site = snapshot.config.site
        page_url = f'{site.url}{request.url.path}'
        data: dict[str, Any] = {
            'site': site,
            'page_url': page_url,
            'image': site.image,
            'title': site.title,
            'description': site.description,
            'heading': site.tagline,
            'navbar_links': snapshot.config.navbar_links,
            'footer_links': snapshot.config.footer_links,
            'theme': snapshot.config.resolved_theme,
            'display': site.display,
            'categories': snapshot.store.all_categories(),
            'copyright': datetime.date.today().year,
            'debug': snapshot.config.debug,
        }
        data.update(extra)
        return data

    def render_error(
        request: fastapi.Request, status_code: int, app_error: str, trace: str = ''
    ) -> fastapi.responses.HTMLResponse:
        snapshot = site_engine.snapshot
        name = snapshot.config.site.name
        titles = {
            '404': f'Page Not Found - {name}',
            '500': f'Internal Server Error - {name}',
        }
        response = templates.TemplateResponse(
            request=request,
            name='error.html.jinja2',
            context=context(
                request,
                snapshot,
                app_error=app_error,
                app_trace=trace if snapshot.config.debug else '',
                title=titles[app_error],
                latest_posts=snapshot.store.latest(),
            ),
            status_code=status_code,
        )
        # 500 responses are sent from outside the middleware stack.
        if status_code == 500:
            response.headers.update(middleware.SECURITY_HEADERS)
        return response

    @app.exception_handler(starlette.exceptions.HTTPException)
    async def http_error(
        request: fastapi.Request, exc: starlette.exceptions.HTTPException
    ) -> fastapi.responses.Response:
        if exc.status_code == 404:
            return render_error(request, 404, '404')
        return await fastapi.exception_handlers.http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def server_error(
        request: fastapi.Request, exc: Exception
    ) -> fastapi.responses.Response:
        logger.exception('Unhandled error on %s', request.url.path, exc_info=exc)
        trace = ''.join(traceback.format_exception(exc))
        return render_error(request, 500, '500', trace)

    @app.get('/', response_class=fastapi.responses.HTMLResponse)
    async def index(request: fastapi.Request) -> fastapi.responses.HTMLResponse:
        """Render the homepage sections."""
        snapshot = site_engine.snapshot
        return templates.TemplateResponse(
            request=request,
            name='index.html.jinja2',
            context=context(request, snapshot, sections=snapshot.homepage),
        )

    @app.get('/styles.css')
    async def styles(request: fastapi.Request) -> fastapi.responses.Response:
        """Render the stylesheet with the configured theme colours."""
        snapshot = site_engine.snapshot
        css = templates.get_template(STYLES_TEMPLATE).render(
            theme=snapshot.config.resolved_theme
        )
        return fastapi.responses.Response(content=css, media_type='text/css')

    @app.get('/sitemap/', response_class=fastapi.responses.HTMLResponse)
    async def sitemap_html(
        request: fastapi.Request,
    ) -> fastapi.responses.HTMLResponse:
        """Render the list of every post."""
        snapshot = site_engine.snapshot
        name = snapshot.config.site.name
        return templates.TemplateResponse(
            request=request,
            name='sitemap.html.jinja2',
            context=context(
                request,
                snapshot,
                title=f'Sitemap - Browse through all Posts on {name}',
                description=(
                    f'Browse through the sitemap on {name} '
                    'and take a look at our posts.'
                ),
                heading='Posts',
                posts=snapshot.store.all_posts(),
            ),
        )

    @app.get('/sitemap.xml')
    async def sitemap_xml(request: fastapi.Request) -> fastapi.responses.Response:
        """Render the XML sitemap."""
        snapshot = site_engine.snapshot
        xml = templates.get_template(SITEMAP_XML_TEMPLATE).render(
            urls=sitemap_urls(snapshot)
        )
        return fastapi.responses.Response(content=xml, media_type='application/xml')

    @app.get('/robots.txt', response_class=fastapi.responses.PlainTextResponse)
    async def robots(request: fastapi.Request) -> str:
        snapshot = site_engine.snapshot
        return templates.get_template(ROBOTS_TEMPLATE).render(
            site_url=snapshot.config.site.url
        )

    @app.get('/CNAME', response_class=fastapi.responses.PlainTextResponse)
    async def cname(request: fastapi.Request) -> str:
        return site_engine.snapshot.config.site.host

    @app.get('/404/', response_class=fastapi.responses.HTMLResponse)
    async def not_found_page(
        request: fastapi.Request,
    ) -> fastapi.responses.HTMLResponse:
        """Render the not-found page with a 200 so it can be exported."""
        return render_error(request, 200, '404')

    app.mount(
        '/media',
        fastapi.staticfiles.StaticFiles(
            directory=site_engine.paths.media, check_dir=False
        ),
        name='media',
    )

    @app.get('/category/{slug}/', response_class=fastapi.responses.HTMLResponse)
    async def category(
        request: fastapi.Request, slug: str
    ) -> fastapi.responses.HTMLResponse:
        """Render the posts of one category."""
        snapshot = site_engine.snapshot
        found = snapshot.store.category(slug)
        posts = snapshot.store.by_category(slug)
        if found is None or posts is None:
            logger.info('Cannot find posts for category [%s]', slug)
            raise fastapi.HTTPException(status_code=404, detail='Category not found')

        name = snapshot.config.site.name
        return templates.TemplateResponse(
            request=request,
            name='category.html.jinja2',
            context=context(
                request,
                snapshot,
                title=(
                    f'{found.title} related Posts - '
                    f'Explore our Content on {name}'
                ),
                description=(
                    f'Browse through the {found.title} category on {name} '
                    'and take a look at our posts.'
                ),
                heading=found.title,
                category=found,
                posts=posts,
            ),
        )

    @app.get('/{slug}/', response_class=fastapi.responses.HTMLResponse)
    async def entry(
        request: fastapi.Request, slug: str
    ) -> fastapi.responses.HTMLResponse:
        """Render a single post or page."""
        snapshot = site_engine.snapshot
        found = snapshot.store.by_slug(slug)
        if found is None:
            raise fastapi.HTTPException(status_code=404, detail='Post not found')

        image = snapshot.config.site.image if found.image.is_empty else found.image
        return templates.TemplateResponse(
            request=request,
            name='post.html.jinja2',
            context=context(
                request,
                snapshot,
                title=found.title,
                description=found.description,
                heading=found.heading,
                image=image,
                post=found,
                latest_posts=snapshot.store.latest_small(),
                related_posts=snapshot.store.related(found),
            ),
        )

    return app
