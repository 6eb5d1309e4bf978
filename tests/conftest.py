"""
pytest configuration and fixtures.
"""

import pytest

from sentiero import Request, Response


class LoaderSpy:
    """Async loader returning a fixed module and counting calls."""

    def __init__(self, module):
        self.module = module
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.module


def make_handler(name: str):
    async def handler(request, env, ctx, params):
        return Response(body={"route": name, "params": params})

    return handler


def make_request(method: str, path: str) -> Request:
    return Request(method=method, url=f"http://testserver{path}")


@pytest.fixture
def spy():
    return LoaderSpy


@pytest.fixture
def handler():
    return make_handler


@pytest.fixture
def request_for():
    return make_request
