"""yt-media: YouTube video, audio, and transcript tools over MCP."""

__version__ = "1.0.0"

from yt_media.core.dispatcher import Dispatcher
from yt_media.core.models import Failure, Outcome, Success
from yt_media.core.options import ServerOptions


def create_dispatcher(options: ServerOptions | None = None, **backends) -> Dispatcher:
    """Build a dispatcher wired to the default (or given) backends.

    This is the primary library entry point.

    Args:
        options: Configuration options. Uses defaults if not provided.
        **backends: Optional `media`, `captions`, and `transcoder` overrides.

    Returns:
        A Dispatcher over the full operation registry.
    """
    from yt_media.core.registry import build_registry
    from yt_media.services.operations import MediaOperations

    if options is None:
        options = ServerOptions()

    return Dispatcher(build_registry(options), MediaOperations(options, **backends))


def invoke(name: str, parameters: dict | None = None, options: ServerOptions | None = None) -> Outcome:
    """Run a single operation by name and return its outcome."""
    return create_dispatcher(options).dispatch(name, parameters)


__all__ = [
    "__version__",
    "create_dispatcher",
    "invoke",
    "Dispatcher",
    "ServerOptions",
    "Outcome",
    "Success",
    "Failure",
]
