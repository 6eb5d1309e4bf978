from typing import Any, Awaitable, Callable, Mapping

from .models.response import Response

Params = dict[str, str]
Handler = Callable[[Any, Any, Any, Params], Awaitable[Response]]
RouteModule = Mapping[str, Handler] | Any
Lifespan = Callable[[Any], Any]
