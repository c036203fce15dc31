"""
Application entry point for serving a single callable.

Creates a FastAPI application and wires together:
- The callable endpoint (one path, all methods)
- Error handlers (CallError to JSON envelope)
- Logging configuration

No business logic belongs here.
"""

from fastapi import FastAPI

from oncall.core.config import Settings, settings
from oncall.interfaces.endpoint import Callable
from oncall.shared.errors.handlers import register_error_handlers
from oncall.shared.logging import configure_logging


def create_app(
    callable_endpoint: Callable, path: str = "/", config: Settings | None = None
) -> FastAPI:
    """Create a FastAPI application serving one callable endpoint.

    Args:
        callable_endpoint: The callable to serve.
        path: URL path of the endpoint.
        config: Settings to use. Defaults to the environment settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    config = config or settings
    configure_logging(level=config.log_level)

    app = FastAPI(
        title=config.project_name,
        version=config.version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    register_error_handlers(app)

    app.add_route(path, callable_endpoint, include_in_schema=False)

    return app
