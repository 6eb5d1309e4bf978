from .app import Sentiero, create_router, define_route
from .context import ExecutionContext
from .core.loader import discover, module_loader
from .errors import RouteConfigError, SentieroError
from .lib import __version__
from .models.request import Request
from .models.response import Response

__all__ = [
    "Sentiero",
    "create_router",
    "define_route",
    "discover",
    "module_loader",
    "ExecutionContext",
    "Request",
    "Response",
    "RouteConfigError",
    "SentieroError",
    "__version__",
]
