"""Discover route modules on disk and wrap them in lazy loaders.

    routes/index.py          -> /
    routes/users/index.py    -> /users
    routes/users/[id].py     -> /users/{id}

A route module exports one async handler per HTTP method, named after the
method in upper case::

    async def GET(request, env, ctx, params): ...
    async def DELETE(request, env, ctx, params): ...

Nothing is imported until a request first reaches the route.
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType
from typing import Awaitable, Callable

from ..logger import logger

Loader = Callable[[], Awaitable[ModuleType]]


def _module_name(path: Path) -> str:
    stem = "_".join(path.with_suffix("").parts[-3:])
    return f"sentiero_routes.{stem}_{abs(hash(path.as_posix())):x}"


def _import(path: Path) -> ModuleType:
    module_name = _module_name(path)
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot load route module {path}", path=str(path))
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    logger.debug(f"loaded route module {path}")
    return module


def module_loader(path: str | Path) -> Loader:
    """Return an async loader that imports *path* once and caches the module.

    A failed import is not cached, so the next request retries it.
    """
    path = Path(path)
    cache: dict[str, ModuleType] = {}

    async def load() -> ModuleType:
        if "module" not in cache:
            cache["module"] = _import(path)
        return cache["module"]

    return load


def discover(directory: str | Path, *, suffix: str = ".py") -> dict[str, Loader]:
    directory = Path(directory)
    if not directory.is_dir():
        raise FileNotFoundError(f"route directory not found: {directory}")

    routes: dict[str, Loader] = {}
    for file in sorted(directory.rglob(f"*{suffix}"), key=lambda p: p.as_posix()):
        if "__pycache__" in file.parts or file.name.startswith("_"):
            continue
        routes[file.as_posix()] = module_loader(file)
    logger.debug(f"discovered {len(routes)} route module(s) in {directory}")
    return routes
