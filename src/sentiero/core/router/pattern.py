"""Compile file-path route identifiers into anchored matchers.

An identifier such as ``/app/routes/users/[id].py`` is reduced to its route
path (``/users/[id]``), split into literal and parameter segments, and turned
into a pattern that matches a whole URL path::

    /users/[id]  ->  ^/users/([^/]+)$   params: ("id",)

Each ``[name]`` matches exactly one non-empty URL segment.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple

from ...errors import RouteConfigError
from ...logger import logger

PARAM = re.compile(r"\[(\w+)\]")
SEGMENT = "([^/]+)"


class Segment(NamedTuple):
    value: str
    is_param: bool = False


@dataclass(frozen=True)
class CompiledRoute:
    identifier: str
    loader: Callable[[], Any]
    path: str
    matcher: re.Pattern
    param_names: tuple[str, ...]

    def match(self, path: str) -> dict[str, str] | None:
        m = self.matcher.fullmatch(path)
        if m is None:
            return None
        return dict(zip(self.param_names, m.groups()))


def route_path(identifier: str, *, root: str = "routes", suffix: str = ".py") -> str:
    path = re.sub(rf"(?:^.*/|^){re.escape(root)}(?=/|$)", "", identifier) if root else identifier
    if suffix and path.endswith(suffix):
        path = path[: -len(suffix)]

    if path == "/index" or path.endswith("/index"):
        path = path[: -len("/index")] or "/"
    elif path == "":
        path = "/"

    if not path.startswith("/"):
        raise RouteConfigError(identifier, f"route path {path!r} must start with '/'")
    return path


def tokenize(path: str, identifier: str | None = None) -> list[Segment]:
    identifier = identifier or path
    segments: list[Segment] = []
    seen: set[str] = set()
    pos = 0
    for m in PARAM.finditer(path):
        literal = path[pos : m.start()]
        if literal:
            segments.append(Segment(literal))
        name = m.group(1)
        if name in seen:
            raise RouteConfigError(identifier, f"duplicate parameter [{name}]")
        seen.add(name)
        segments.append(Segment(name, is_param=True))
        pos = m.end()
    if pos < len(path):
        segments.append(Segment(path[pos:]))

    for segment in segments:
        if not segment.is_param and ("[" in segment.value or "]" in segment.value):
            raise RouteConfigError(identifier, f"unbalanced or invalid brackets in {segment.value!r}")
    return segments


def compile_pattern(path: str, identifier: str | None = None) -> tuple[re.Pattern, tuple[str, ...]]:
    parts = []
    names = []
    for segment in tokenize(path, identifier):
        if segment.is_param:
            names.append(segment.value)
            parts.append(SEGMENT)
        else:
            parts.append(re.escape(segment.value))
    return re.compile("^" + "".join(parts) + "$"), tuple(names)


def compile_route(
    identifier: str,
    loader: Callable[[], Any],
    *,
    root: str = "routes",
    suffix: str = ".py",
) -> CompiledRoute:
    path = route_path(identifier, root=root, suffix=suffix)
    matcher, names = compile_pattern(path, identifier)
    logger.debug(f"compiled {identifier} -> {path} ({matcher.pattern})")
    return CompiledRoute(
        identifier=identifier,
        loader=loader,
        path=path,
        matcher=matcher,
        param_names=names,
    )
