from typing import Any, Dict, Optional

from yarl import URL

from ..utils.jsonenc import loads


async def from_asgi(scope: Dict[str, Any], receive: Any) -> "Request":
    headers = {
        key.decode("latin-1").lower(): value.decode("latin-1")
        for key, value in scope.get("headers", [])
    }
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body", False):
            break
    host = headers.get("host")
    if not host and scope.get("server"):
        host = "{}:{}".format(*scope["server"])
    url = URL.build(
        scheme=scope.get("scheme", "http"),
        authority=host or "localhost",
        path=(scope.get("raw_path") or scope["path"].encode()).decode("latin-1"),
        query_string=scope.get("query_string", b"").decode("latin-1"),
        encoded=True,
    )
    return Request(
        method=scope["method"].upper(),
        url=url,
        headers=headers,
        query=dict(url.query),
        body=body.decode("utf-8", errors="replace"),
    )


class Request:
    def __init__(
        self,
        method: str,
        url: str | URL,
        headers: Optional[Dict[str, str]] = None,
        query: Optional[Dict[str, str]] = None,
        body: Any = "",
    ):
        self.method: str = method
        self.url: URL = url if isinstance(url, URL) else URL(url)
        self.headers: Dict[str, str] = headers if headers is not None else {}
        self.query: Dict[str, Any] = query if query is not None else {}
        self.body: Any = body

    def json(self):
        return loads(self.body)

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.url}>"
