"""
Tests for the ASGI surface and execution context.
"""

import asyncio

import pytest

from sentiero import ExecutionContext, Response, Sentiero
from tests.conftest import LoaderSpy


def http_scope(method: str, path: str, query: bytes = b"", headers=None) -> dict:
    return {
        "type": "http",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query,
        "headers": headers if headers is not None else [(b"host", b"testserver")],
        "client": ("127.0.0.1", 50000),
        "server": ("testserver", 80),
    }


def receiver(*chunks: bytes):
    messages = [
        {"type": "http.request", "body": chunk, "more_body": i < len(chunks) - 1}
        for i, chunk in enumerate(chunks or (b"",))
    ]

    async def receive():
        return messages.pop(0)

    return receive


class Sender:
    def __init__(self):
        self.messages = []

    async def __call__(self, message):
        self.messages.append(message)

    @property
    def status(self):
        return self.messages[0]["status"]

    @property
    def headers(self):
        return {key.decode(): value.decode() for key, value in self.messages[0]["headers"]}

    @property
    def body(self):
        return self.messages[1]["body"]


class TestHTTP:
    @pytest.mark.asyncio
    async def test_handler_response(self):
        async def handler(request, env, ctx, params):
            return Response(body={"id": params["id"], "env": env, "q": request.query.get("q")})

        app = Sentiero({"/routes/users/[id].py": LoaderSpy({"GET": handler})}, env="prod")
        send = Sender()

        await app(http_scope("GET", "/users/7", b"q=x"), receiver(), send)

        assert send.status == 200
        assert send.headers["Content-Type"] == "application/json"
        assert send.body == b'{"id":"7","env":"prod","q":"x"}'
        assert send.messages[1]["more_body"] is False

    @pytest.mark.asyncio
    async def test_not_found(self):
        app = Sentiero({})
        send = Sender()

        await app(http_scope("GET", "/missing"), receiver(), send)

        assert send.status == 404
        assert send.body == b"Not Found"
        assert send.headers["Content-Type"] == "text/plain"
        assert send.headers["Content-Length"] == "9"

    @pytest.mark.asyncio
    async def test_method_not_allowed(self):
        app = Sentiero({"/routes/index.py": LoaderSpy({"GET": None})})
        send = Sender()

        await app(http_scope("POST", "/"), receiver(), send)

        assert send.status == 405
        assert send.body == b"Method Not Allowed"

    @pytest.mark.asyncio
    async def test_request_body_is_collected(self):
        async def handler(request, env, ctx, params):
            return Response(body=request.json(), status_code=201)

        app = Sentiero({"/routes/items.py": LoaderSpy({"POST": handler})})
        send = Sender()

        await app(http_scope("POST", "/items"), receiver(b'{"name":', b'"widget"}'), send)

        assert send.status == 201
        assert send.body == b'{"name":"widget"}'

    @pytest.mark.asyncio
    async def test_background_work_runs_after_response(self):
        done = []

        async def later():
            await asyncio.sleep(0)
            done.append(len(send.messages))

        async def handler(request, env, ctx, params):
            ctx.wait_until(later())
            return Response(body="ok")

        app = Sentiero({"/routes/index.py": LoaderSpy({"GET": handler})})
        send = Sender()

        await app(http_scope("GET", "/"), receiver(), send)

        assert done == [2]

    @pytest.mark.asyncio
    async def test_background_work_is_drained_when_handler_fails(self):
        done = []

        async def later():
            await asyncio.sleep(0)
            done.append(True)

        async def handler(request, env, ctx, params):
            ctx.wait_until(later())
            raise RuntimeError("handler failed")

        app = Sentiero({"/routes/index.py": LoaderSpy({"GET": handler})})

        with pytest.raises(RuntimeError, match="handler failed"):
            await app(http_scope("GET", "/"), receiver(), Sender())
        assert done == [True]

    @pytest.mark.asyncio
    async def test_background_work_is_drained_when_send_fails(self):
        done = []

        async def later():
            await asyncio.sleep(0)
            done.append(True)

        async def handler(request, env, ctx, params):
            ctx.wait_until(later())
            return Response(body="ok")

        async def disconnected(message):
            raise OSError("client went away")

        app = Sentiero({"/routes/index.py": LoaderSpy({"GET": handler})})

        with pytest.raises(OSError):
            await app(http_scope("GET", "/"), receiver(), disconnected)
        assert done == [True]

    @pytest.mark.asyncio
    async def test_handler_error_propagates(self):
        async def handler(request, env, ctx, params):
            raise KeyError("oops")

        app = Sentiero({"/routes/index.py": LoaderSpy({"GET": handler})})
        send = Sender()

        with pytest.raises(KeyError):
            await app(http_scope("GET", "/"), receiver(), send)
        assert send.messages == []


class TestLifespan:
    @pytest.mark.asyncio
    async def test_runs_lifespan_generator(self):
        events = []

        async def lifespan(app):
            events.append("startup")
            yield
            events.append("shutdown")

        app = Sentiero({}, lifespan=lifespan)
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        send = Sender()

        async def receive():
            return incoming.pop(0)

        await app({"type": "lifespan"}, receive, send)

        assert events == ["startup", "shutdown"]
        assert [m["type"] for m in send.messages] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    @pytest.mark.asyncio
    async def test_without_lifespan(self):
        app = Sentiero({})
        incoming = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
        send = Sender()

        async def receive():
            return incoming.pop(0)

        await app({"type": "lifespan"}, receive, send)

        assert len(send.messages) == 2


class TestExecutionContext:
    @pytest.mark.asyncio
    async def test_drain_waits_for_tasks(self):
        ctx = ExecutionContext()
        results = []

        async def work(n):
            await asyncio.sleep(0)
            results.append(n)

        ctx.wait_until(work(1))
        ctx.wait_until(work(2))
        assert ctx.pending == 2

        await ctx.drain()

        assert sorted(results) == [1, 2]
        assert ctx.pending == 0

    @pytest.mark.asyncio
    async def test_drain_logs_failures(self, caplog):
        ctx = ExecutionContext()

        async def fail():
            raise ValueError("background")

        ctx.wait_until(fail())
        with caplog.at_level("ERROR", logger="sentiero"):
            await ctx.drain()

        assert "background task failed" in caplog.text


class TestServe:
    def test_serve_uses_uvicorn(self, monkeypatch):
        import sentiero.app as app_module

        calls = []

        class FakeUvicorn:
            @staticmethod
            def run(app, **kwargs):
                calls.append((app, kwargs))

        monkeypatch.setattr(app_module, "uvicorn", FakeUvicorn)
        app = Sentiero({})
        app.serve(port=9000)

        assert calls == [(app, {"host": "127.0.0.1", "port": 9000})]

    def test_serve_without_uvicorn(self, monkeypatch):
        import sentiero.app as app_module

        monkeypatch.setattr(app_module, "uvicorn", None)

        with pytest.raises(ModuleNotFoundError):
            Sentiero({}).serve()
