"""Command line entry point: serve, export or check a site project."""

import argparse
import logging
import sys

import uvicorn

import common.log
import common.settings
from mdsite.app import engine, errors, export, main, scaffold, watch

logger = logging.getLogger('mdsite')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mdsite', description='Markdown site generator and server'
    )
    parser.add_argument('--config', default=common.settings.CONFIG_PATH)
    parser.add_argument('--posts', default=common.settings.POSTS_PATH)
    parser.add_argument('--media', default=common.settings.MEDIA_PATH)
    parser.add_argument('--output', default=common.settings.EXPORT_PATH)
    parser.add_argument('--verbose', '-v', action='store_true')

    commands = parser.add_subparsers(dest='command', required=True)

    serve = commands.add_parser('serve', help='Run the development server')
    serve.add_argument('--listen', default=common.settings.LISTEN_ADDR)
    serve.add_argument(
        '--debug',
        action=argparse.BooleanOptionalAction,
        default=common.settings.DEBUG,
        help='Point site URLs at the local server and disable media caching',
    )
    serve.add_argument(
        '--watch', action='store_true', help='Rebuild when source files change'
    )

    commands.add_parser('export', help='Write the site as static files')
    commands.add_parser('check', help='Process and index the content, then exit')

    init = commands.add_parser(
        'init', help='Create a new project from the sample config and posts'
    )
    init.add_argument('directory', nargs='?', default='.')
    return parser


def split_listen(listen_addr: str) -> tuple[str, int]:
    """Split ``host:port`` (host optional) into uvicorn arguments."""
    host, _, port = listen_addr.rpartition(':')
    return host or '127.0.0.1', int(port)


def make_engine(args: argparse.Namespace) -> engine.Engine:
    paths = engine.Paths.from_strings(args.config, args.posts, args.media, args.output)
    return engine.Engine(
        paths,
        debug=getattr(args, 'debug', False),
        listen_addr=getattr(args, 'listen', common.settings.LISTEN_ADDR),
    )


def run_serve(site_engine: engine.Engine, use_watcher: bool) -> None:
    watcher = watch.Watcher(site_engine) if use_watcher else None
    if watcher is not None:
        watcher.start()
    host, port = split_listen(site_engine.listen_addr)
    logger.info('Starting server on %s', site_engine.listen_addr)
    try:
        uvicorn.run(main.create_site_app(site_engine), host=host, port=port)
    finally:
        if watcher is not None:
            watcher.stop()


def run_export(site_engine: engine.Engine) -> None:
    snapshot = site_engine.snapshot
    exporter = export.Exporter(
        main.create_site_app(site_engine),
        export.collect_urls(snapshot, site_engine.paths.media),
        site_engine.paths.export,
    )
    exporter.export()


def run_init(directory: str) -> int:
    try:
        scaffold.scaffold(directory)
    except OSError:
        logger.exception('Could not create the project')
        return 1
    return 0


def main_cli(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    common.log.configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == 'init':
        return run_init(args.directory)

    site_engine = make_engine(args)
    try:
        snapshot = site_engine.load()
    except (errors.ConfigError, errors.ContentError, OSError):
        logger.exception('Could not build the site')
        return 1

    if args.command == 'check':
        content = snapshot.store
        print(
            f'Parsed {len(content.all_posts())} posts, '
            f'{len(content.all_pages())} pages, '
            f'{len(content.all_categories())} categories'
        )
    elif args.command == 'export':
        try:
            run_export(site_engine)
        except (export.ExportError, OSError):
            logger.exception('Export failed')
            return 1
    else:
        run_serve(site_engine, args.watch)
    return 0


if __name__ == '__main__':
    sys.exit(main_cli())
