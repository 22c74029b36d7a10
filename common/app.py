"""Core FastAPI application utilities shared by the site server."""

import pathlib
from typing import Any

import fastapi
import fastapi.templating

import common.log

# ---------------------------------------------------------------------------
# Health router
# ---------------------------------------------------------------------------

_health_router = fastapi.APIRouter()


@_health_router.api_route('/health', methods=['GET', 'HEAD'])
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {'status': 'healthy'}


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def make_templates(
    directory: pathlib.Path | str, **env_globals: Any
) -> fastapi.templating.Jinja2Templates:
    """Create a Jinja2Templates instance with the given globals pre-set."""
    templates = fastapi.templating.Jinja2Templates(directory=str(directory))
    templates.env.globals.update(env_globals)  # type: ignore[reportUnknownMemberType]
    return templates


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(title: str, **kwargs: Any) -> fastapi.FastAPI:
    """Create a FastAPI app with health endpoint and logging configured.

    Additional keyword arguments are forwarded to FastAPI.__init__ (e.g. lifespan).
    """
    app = fastapi.FastAPI(title=title, **kwargs)
    common.log.configure_logging()
    app.include_router(_health_router)
    return app
