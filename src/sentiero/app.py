from http.client import responses
from typing import Any, Dict, Mapping

from yarl import URL

try:
    import uvicorn
except ModuleNotFoundError:
    uvicorn = None

from .context import ExecutionContext
from .core.router.filebased import FileRouter, Routes
from .logger import logger
from .models.request import from_asgi
from .models.response import Response
from .types import Handler, Lifespan, RouteModule
from .utils import http
from .utils.log import access_line


def lookup_handler(module: RouteModule, method: str) -> Handler | None:
    if isinstance(module, Mapping):
        handler = module.get(method)
    else:
        handler = getattr(module, method, None)
    return handler if callable(handler) else None


class Sentiero:
    def __init__(
        self,
        routes: Routes,
        *,
        env: Any = None,
        root: str = "routes",
        suffix: str = ".py",
        lifespan: Lifespan | None = None,
    ):
        self.router = FileRouter(routes, root=root, suffix=suffix)
        self.env = env
        self.lifespan = lifespan
        self.logger = logger

    @property
    def routes(self):
        return self.router.routes

    async def dispatch(self, request, env: Any = None, ctx: Any = None) -> Response:
        """Route *request* to the handler of the first route matching its path.

        A matching route that lacks a handler for the method answers 405
        without trying later routes. Errors from loaders and handlers are
        not caught here.
        """
        url = request.url if isinstance(request.url, URL) else URL(str(request.url))
        path = self.router.normalize(url.raw_path)
        method = request.method.upper()

        matched = self.router.match(path)
        if matched is None:
            return http.plain(404)

        route, params = matched
        module = await route.loader()
        handler = lookup_handler(module, method)
        if handler is None:
            return http.plain(405)
        return await handler(request, env, ctx, params)

    async def __asgi_lifespan_handle(self, scope: Dict[str, Any], receive: Any, send: Any):
        gen = self.lifespan(self) if self.lifespan else None
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                if gen:
                    try:
                        await anext(gen)
                    except StopAsyncIteration:
                        pass
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                if gen:
                    try:
                        await anext(gen)
                    except StopAsyncIteration:
                        pass
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def __asgi_http_handle(self, scope: Dict[str, Any], receive: Any, send: Any):
        req = await from_asgi(scope, receive)
        ctx = ExecutionContext()
        try:
            resp = http.convert_body(await self.dispatch(req, self.env, ctx))
            await resp._asgi(send)

            client = "{}:{}".format(*scope["client"]) if scope.get("client") else "-"
            logger.info(
                access_line(
                    client,
                    req.method,
                    scope["path"],
                    resp.status_code,
                    responses.get(resp.status_code, "UNKNOWN"),
                )
            )
        finally:
            await ctx.drain()

    async def __call__(self, scope: Dict[str, Any], receive: Any, send: Any):
        if scope["type"] == "http":
            await self.__asgi_http_handle(scope, receive, send)
        elif scope["type"] == "lifespan":
            await self.__asgi_lifespan_handle(scope, receive, send)

    def serve(self, host: str = "127.0.0.1", port: int = 8765, **kwargs) -> None:
        if uvicorn is None:
            raise ModuleNotFoundError(
                "uvicorn not found, can be installed with pip install sentiero[server]."
            )
        uvicorn.run(self, host=host, port=port, **kwargs)


def create_router(routes: Routes, **config) -> Sentiero:
    """Build a :class:`Sentiero` app from ``identifier -> loader`` pairs.

    ``await app.dispatch(request, env, ctx)`` serves one request; the app is
    also an ASGI application.
    """
    return Sentiero(routes, **config)


def define_route(fn: Handler) -> Handler:
    if not callable(fn):
        raise TypeError(f"route handler must be callable, got {type(fn).__name__}")
    return fn
