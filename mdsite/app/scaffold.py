"""Creates a new site project from the bundled sample project."""

import logging
import pathlib
import shutil

logger = logging.getLogger(__name__)

SAMPLE_DIR = pathlib.Path(__file__).resolve().parent.parent / 'sample'
# The sample is copied under this directory so the default paths find it.
PROJECT_ASSETS = 'assets'


def sample_files(sample_dir: pathlib.Path = SAMPLE_DIR) -> list[pathlib.Path]:
    """Files of the sample project, relative to sample_dir."""
    return sorted(
        path.relative_to(sample_dir)
        for path in sample_dir.rglob('*')
        if path.is_file()
    )


def scaffold(
    target: pathlib.Path | str, sample_dir: pathlib.Path = SAMPLE_DIR
) -> list[pathlib.Path]:
    """Copy the sample config, posts and media into ``<target>/assets``.

    Nothing is copied if any destination file already exists. Returns the
    written paths.
    """
    assets = pathlib.Path(target) / PROJECT_ASSETS
    files = sample_files(sample_dir)

    existing = [assets / f for f in files if (assets / f).exists()]
    if existing:
        raise FileExistsError(f'refusing to overwrite [{existing[0]}]')

    written: list[pathlib.Path] = []
    for relative in files:
        destination = assets / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(sample_dir / relative, destination)
        written.append(destination)

    logger.info('Created %d files under %s', len(written), assets)
    return written
