from typing import Any, Callable, Iterable, Mapping

from ...logger import logger
from .pattern import CompiledRoute, compile_route

Routes = Mapping[str, Callable[[], Any]] | Iterable[tuple[str, Callable[[], Any]]]


class FileRouter:
    """Ordered, immutable table of routes compiled from file-path identifiers.

    Routes are tried in the order they were supplied. The first route whose
    pattern matches the whole path wins, however specific a later one is.
    """

    def __init__(self, routes: Routes, *, root: str = "routes", suffix: str = ".py"):
        items = routes.items() if isinstance(routes, Mapping) else routes
        self.root = root
        self.suffix = suffix
        self.routes: tuple[CompiledRoute, ...] = tuple(
            compile_route(identifier, loader, root=root, suffix=suffix)
            for identifier, loader in items
        )
        logger.debug(f"{len(self.routes)} route(s) registered")

    @staticmethod
    def normalize(path: str) -> str:
        if path.endswith("/"):
            path = path[:-1]
        return path or "/"

    def match(self, path: str) -> tuple[CompiledRoute, dict[str, str]] | None:
        for route in self.routes:
            params = route.match(path)
            if params is not None:
                return route, params
        return None

    def __iter__(self):
        return iter(self.routes)

    def __len__(self) -> int:
        return len(self.routes)
